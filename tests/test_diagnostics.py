"""Tests for settings diagnostics"""
from unittest.mock import AsyncMock

import pytest

from cafepos.cart import MemorySessionStorage
from cafepos.services.diagnostics import (
    STATUS_ERROR,
    STATUS_NOT_CONFIGURED,
    STATUS_OK,
    check_backend,
    check_storage,
    environment_summary,
    mask,
    run_diagnostics,
)


def test_mask():
    assert mask("https://abcdefgh.supabase.co", 8, 6) == "https://…ase.co"
    assert mask("short") == "•••••"
    assert mask("") == "(not set)"
    assert mask(None) == "(not set)"


def test_environment_summary_without_config():
    env = {entry["name"]: entry for entry in environment_summary()}

    assert env["SUPABASE_URL"]["value"] == "(not set)"
    assert env["SUPABASE_URL"]["ok"] is False
    assert env["POS_TAX_RATE_BPS"]["value"] == "887.5"


def test_check_storage_ok():
    storage = MemorySessionStorage()

    result = check_storage(storage)

    assert result.status == STATUS_OK
    assert storage.get("fc_pos_probe") is None


def test_check_storage_failure(broken_storage):
    assert check_storage(broken_storage).status == STATUS_ERROR


def test_check_storage_missing():
    assert check_storage(None).status == STATUS_NOT_CONFIGURED


@pytest.mark.asyncio
async def test_check_backend_ok(mock_supabase_client):
    result = await check_backend(mock_supabase_client)

    assert result.status == STATUS_OK
    mock_supabase_client.table.assert_called_once_with("menu_items")


@pytest.mark.asyncio
async def test_check_backend_error(mock_supabase_client):
    mock_supabase_client.table.return_value.execute = AsyncMock(side_effect=RuntimeError("401 Unauthorized"))

    result = await check_backend(mock_supabase_client)

    assert result.status == STATUS_ERROR
    assert "401" in result.message


@pytest.mark.asyncio
async def test_check_backend_not_configured():
    assert (await check_backend(None)).status == STATUS_NOT_CONFIGURED


@pytest.mark.asyncio
async def test_run_diagnostics(mock_supabase_client):
    report = await run_diagnostics(mock_supabase_client, MemorySessionStorage())

    assert report.ok is True
    assert [check["name"] for check in report.to_dict()["checks"]] == ["supabase", "session_storage"]


@pytest.mark.asyncio
async def test_run_diagnostics_not_ok_without_backend():
    report = await run_diagnostics(None, MemorySessionStorage())

    assert report.ok is False
