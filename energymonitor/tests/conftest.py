"""
Shared test fixtures for the energy monitor summary tests.

Cleans summary settings environment variables before each test and provides
a reference snapshot/config pair plus a FastAPI TestClient.

CHANGELOG:
- 2026-10-16: Add TestClient fixture (STORY-008)
- 2026-10-13: Initial creation (STORY-004)

TODO:
- None
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from energymonitor.src.api.main import create_app
from energymonitor.src.config import SummarySettings
from energymonitor.src.models import DeviceConfig, DeviceReading, parse_snapshot

# All SummarySettings environment variable names, used for cleanup.
_ALL_SUMMARY_ENV_VARS = (
    "LOG_LEVEL",
    "LOG_JSON",
    "CORS_ALLOW_ORIGINS",
)


@pytest.fixture(autouse=True)
def _clean_summary_env(monkeypatch: pytest.MonkeyPatch, tmp_path: str) -> None:
    """Remove all summary env vars and isolate from .env files before each test."""
    for var in _ALL_SUMMARY_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def raw_snapshot() -> dict[str, dict[str, Any]]:
    """Snapshot with one storage system, one grid meter and one PV meter.

    ess0 discharges 500 W, meter0 buys 300 W, pv0 produces 1000 W AC.
    """
    return {
        "ess0": {"Soc": 55, "ActivePower": 500},
        "meter0": {"ActivePower": 300},
        "pv0": {"ActivePower": 1000, "ActualPower": 0},
    }


@pytest.fixture()
def raw_config() -> dict[str, Any]:
    """Configuration matching :func:`raw_snapshot`, in wire (camelCase) form."""
    return {
        "storageDevices": ["ess0"],
        "gridMeters": ["meter0"],
        "productionMeters": ["pv0"],
        "devices": {
            "meter0": {"maxActivePower": 5000, "minActivePower": -5000},
            "pv0": {"maxActivePower": 10000},
        },
    }


@pytest.fixture()
def snapshot(raw_snapshot: dict[str, dict[str, Any]]) -> dict[str, DeviceReading]:
    """Validated version of :func:`raw_snapshot`."""
    return parse_snapshot(raw_snapshot)


@pytest.fixture()
def config(raw_config: dict[str, Any]) -> DeviceConfig:
    """Validated version of :func:`raw_config`."""
    return DeviceConfig.model_validate(raw_config)


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    """Create a TestClient for an app built with default settings.

    Uses a context manager so the lifespan (logging setup) runs.
    """
    app = create_app(SummarySettings())
    with TestClient(app) as test_client:
        yield test_client
