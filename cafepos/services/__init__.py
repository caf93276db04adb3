"""Backend-facing services: money math, models, repositories, sales, diagnostics."""
