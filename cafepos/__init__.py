"""Café point-of-sale core: cart, money math, checkout and backend access."""

__version__ = "0.1.0"
