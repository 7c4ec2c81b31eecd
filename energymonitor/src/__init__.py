"""
Energy monitor summary package.

Derives a power-balance summary (storage, grid, production, consumption)
from a snapshot of raw device telemetry and the device configuration, and
exposes it over a small HTTP API for dashboards.

CHANGELOG:
- 2026-10-12: Initial creation (STORY-001)

TODO:
- None
"""
