"""
POST /v1/summary and POST /v1/current-data endpoints.

Both accept a raw telemetry snapshot together with the device configuration
and return the derived power-balance summary, serialised in the camelCase
dashboard format. Malformed device records are rejected by request
validation (HTTP 422) before the calculation runs; missing devices or
channels are not errors and show up as ``null`` fields.

CHANGELOG:
- 2026-10-17: Add /v1/current-data returning snapshot and summary together
- 2026-10-16: Initial creation (STORY-008)

TODO:
- None
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel, Field

from energymonitor.src.calculator import CurrentData, calculate_summary
from energymonitor.src.models import DeviceConfig, DeviceReading, Summary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["summary"])


class SummaryRequest(BaseModel):
    """Request body shared by the summary endpoints.

    Attributes:
        snapshot: Device identifier -> channel readings.
        config: Category membership and device attributes.
    """

    snapshot: dict[str, DeviceReading] = Field(default_factory=dict)
    config: DeviceConfig


@router.post("/summary", response_model=Summary)
async def summary(body: SummaryRequest) -> Summary:
    """Return the power-balance summary for the posted snapshot."""
    logger.debug("Calculating summary for %d device(s)", len(body.snapshot))
    return calculate_summary(body.snapshot, body.config)


@router.post("/current-data", response_model=CurrentData)
async def current_data(body: SummaryRequest) -> CurrentData:
    """Return the posted snapshot together with its summary."""
    logger.debug("Calculating current data for %d device(s)", len(body.snapshot))
    return CurrentData.from_snapshot(body.snapshot, body.config)
