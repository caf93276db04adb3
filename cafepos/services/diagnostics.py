"""
Diagnostics - configuration and connectivity report for the settings page.
"""
import asyncio
from dataclasses import dataclass, field
from typing import List, Optional

from cafepos import config
from cafepos.cart.storage import SessionStorage
from cafepos.db import Tables
from cafepos.logging import get_logger

logger = get_logger(__name__)

STATUS_OK = "ok"
STATUS_ERROR = "error"
STATUS_NOT_CONFIGURED = "not_configured"

_PROBE_KEY = "fc_pos_probe"


def mask(value: Optional[str], head: int = 4, tail: int = 4) -> str:
    """
    Hide the middle of a secret.

    Examples:
        mask("https://abcdefgh.supabase.co", 8, 6) -> "https://…ase.co"
        mask("short") -> "•••••"
    """
    if not value:
        return "(not set)"
    if len(value) <= head + tail:
        return "•" * len(value)
    return f"{value[:head]}…{value[-tail:]}"


@dataclass
class CheckResult:
    name: str
    status: str
    message: str = ""

    def to_dict(self) -> dict:
        return {"name": self.name, "status": self.status, "message": self.message}


@dataclass
class DiagnosticsReport:
    environment: List[dict] = field(default_factory=list)
    checks: List[CheckResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(check.status == STATUS_OK for check in self.checks)

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "environment": self.environment,
            "checks": [check.to_dict() for check in self.checks],
        }


def environment_summary() -> List[dict]:
    """Masked view of the settings that matter for connectivity."""
    return [
        {"name": "SUPABASE_URL", "value": mask(config.SUPABASE_URL, 8, 6), "ok": bool(config.SUPABASE_URL)},
        {"name": "SUPABASE_KEY", "value": mask(config.SUPABASE_KEY, 6, 4), "ok": bool(config.SUPABASE_KEY)},
        {
            "name": "UPSTASH_REDIS_REST_URL",
            "value": mask(config.UPSTASH_REDIS_REST_URL, 8, 6),
            "ok": bool(config.UPSTASH_REDIS_REST_URL),
        },
        {"name": "POS_TAX_RATE_BPS", "value": str(config.TAX_RATE_BPS), "ok": True},
    ]


async def check_backend(client) -> CheckResult:
    """Small select against menu_items."""
    if client is None:
        return CheckResult("supabase", STATUS_NOT_CONFIGURED, "Supabase is not configured")
    try:
        await client.table(Tables.MENU_ITEMS).select("id").limit(1).execute()
    except Exception as e:
        logger.warning(f"Backend connectivity check failed: {e}")
        return CheckResult("supabase", STATUS_ERROR, str(e) or "Connectivity check failed")
    return CheckResult("supabase", STATUS_OK, "Connected")


def check_storage(storage: Optional[SessionStorage]) -> CheckResult:
    """Write, read back and delete a probe key."""
    if storage is None:
        return CheckResult("session_storage", STATUS_NOT_CONFIGURED, "Session storage is not configured")
    try:
        storage.set(_PROBE_KEY, "1")
        value = storage.get(_PROBE_KEY)
        storage.delete(_PROBE_KEY)
    except Exception as e:
        logger.warning(f"Session storage check failed: {e}")
        return CheckResult("session_storage", STATUS_ERROR, str(e) or "Storage check failed")
    if value != "1":
        return CheckResult("session_storage", STATUS_ERROR, "Probe value did not round-trip")
    return CheckResult("session_storage", STATUS_OK, "Writable")


async def run_diagnostics(client, storage: Optional[SessionStorage]) -> DiagnosticsReport:
    report = DiagnosticsReport(environment=environment_summary())
    report.checks.append(await check_backend(client))
    report.checks.append(await asyncio.to_thread(check_storage, storage))
    return report
