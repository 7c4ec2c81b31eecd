"""
Pydantic models for device telemetry, device configuration and the summary.

Input side:
- ``DeviceReading``: the channels reported by one device in a snapshot.
  Channel names on the wire are PascalCase (``Soc``, ``ActivePowerL1``, ...);
  any channel may be absent or ``null`` and both mean "unknown" (``None``).
- ``DeviceConfig``: category membership lists plus the per-device rated power
  attributes table.

Output side:
- ``Summary`` and its four category blocks. Every numeric field is either a
  finite float or ``None``. Models are frozen; serialise with
  ``model_dump(by_alias=True)`` to get the camelCase dashboard format.

CHANGELOG:
- 2026-10-20: Validate after coercion so "NaN"/"inf" strings are caught;
  guard DeviceAttributes and summary blocks against non-finite values
- 2026-10-14: Coerce NaN/inf channel values to None at the boundary
- 2026-10-12: Initial creation (STORY-003)

TODO:
- None
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from energymonitor.src.safe_math import finite_or_none

# ---------------------------------------------------------------------------
# Raw telemetry
# ---------------------------------------------------------------------------


class DeviceReading(BaseModel):
    """Channels reported by a single device in one snapshot.

    Only the channels used by the summary calculation are typed; any other
    channel in the raw record is kept as an extra field.

    Attributes:
        soc: State of charge in percent (storage devices).
        active_power: Total AC active power in watts.
        active_power_l1: Phase L1 AC active power in watts.
        active_power_l2: Phase L2 AC active power in watts.
        active_power_l3: Phase L3 AC active power in watts.
        actual_power: DC power in watts (DC-coupled production meters).
    """

    soc: float | None = Field(default=None, alias="Soc")
    active_power: float | None = Field(default=None, alias="ActivePower")
    active_power_l1: float | None = Field(default=None, alias="ActivePowerL1")
    active_power_l2: float | None = Field(default=None, alias="ActivePowerL2")
    active_power_l3: float | None = Field(default=None, alias="ActivePowerL3")
    actual_power: float | None = Field(default=None, alias="ActualPower")

    model_config = {"extra": "allow", "populate_by_name": True, "frozen": True}

    @field_validator(
        "soc",
        "active_power",
        "active_power_l1",
        "active_power_l2",
        "active_power_l3",
        "actual_power",
        mode="after",
    )
    @classmethod
    def non_finite_is_unknown(cls, v: float | None) -> float | None:
        """Treat NaN and infinities (including "NaN"/"inf" strings) as unknown."""
        return finite_or_none(v)


RawSnapshot = Mapping[str, DeviceReading]
"""Device identifier -> reading, as delivered by the telemetry layer."""


def parse_snapshot(raw: Mapping[str, Mapping[str, Any]]) -> dict[str, DeviceReading]:
    """Validate a JSON-like ``{device_id: {channel: value}}`` mapping.

    Raises:
        pydantic.ValidationError: If a present record is malformed.
    """
    return {
        device_id: DeviceReading.model_validate(channels)
        for device_id, channels in raw.items()
    }


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class DeviceAttributes(BaseModel):
    """Rated power attributes of one configured device.

    Attributes:
        max_active_power: Import / charge / production ceiling in watts.
        min_active_power: Export / discharge floor in watts (non-positive).
        max_actual_power: DC production ceiling in watts.
    """

    max_active_power: float | None = None
    min_active_power: float | None = None
    max_actual_power: float | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "frozen": True}

    @field_validator("max_active_power", "min_active_power", "max_actual_power", mode="after")
    @classmethod
    def non_finite_is_unset(cls, v: float | None) -> float | None:
        """Treat a NaN or infinite rating as not configured."""
        return finite_or_none(v)


class DeviceConfig(BaseModel):
    """Category membership and device attributes used by the summary.

    Attributes:
        storage_devices: Identifiers of storage systems (ESS).
        grid_meters: Identifiers of grid connection meters.
        production_meters: Identifiers of production (PV) meters.
        devices: Rated power attributes keyed by device identifier.
    """

    storage_devices: tuple[str, ...] = ()
    grid_meters: tuple[str, ...] = ()
    production_meters: tuple[str, ...] = ()
    devices: dict[str, DeviceAttributes] = Field(default_factory=dict)

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "frozen": True}

    def attributes(self, device_id: str) -> DeviceAttributes:
        """Return the attributes of *device_id*, empty if not configured."""
        return self.devices.get(device_id) or DeviceAttributes()


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

_SUMMARY_CONFIG = {"alias_generator": to_camel, "populate_by_name": True, "frozen": True}


class SummaryBlock(BaseModel):
    """Base for the category blocks: non-finite figures are published as unknown."""

    model_config = _SUMMARY_CONFIG

    @field_validator("*", mode="after")
    @classmethod
    def non_finite_is_unknown(cls, v: float | None) -> float | None:
        return finite_or_none(v)


class StorageSummary(SummaryBlock):
    """Storage block. Positive device power is discharge, negative is charge."""

    soc: float | None = None
    charge_active_power: float | None = None
    max_charge_active_power: float | None = None
    discharge_active_power: float | None = None
    max_discharge_active_power: float | None = None

    model_config = _SUMMARY_CONFIG


class GridSummary(SummaryBlock):
    """Grid block. Positive meter power is buy, negative is sell."""

    power_ratio: float | None = None
    buy_active_power: float | None = None
    max_buy_active_power: float | None = None
    sell_active_power: float | None = None
    max_sell_active_power: float | None = None

    model_config = _SUMMARY_CONFIG


class ProductionSummary(SummaryBlock):
    """Production block; ``active_power`` is the AC + DC total."""

    power_ratio: float | None = None
    active_power: float | None = None
    active_power_ac: float | None = Field(default=None, alias="activePowerAC")
    active_power_dc: float | None = Field(default=None, alias="activePowerDC")
    max_active_power: float | None = None

    model_config = _SUMMARY_CONFIG


class ConsumptionSummary(SummaryBlock):
    """Consumption block, closed from the other three categories."""

    power_ratio: float | None = None
    active_power: float | None = None

    model_config = _SUMMARY_CONFIG


class Summary(BaseModel):
    """Power-balance summary derived from one snapshot and configuration."""

    storage: StorageSummary = Field(default_factory=StorageSummary)
    grid: GridSummary = Field(default_factory=GridSummary)
    production: ProductionSummary = Field(default_factory=ProductionSummary)
    consumption: ConsumptionSummary = Field(default_factory=ConsumptionSummary)

    model_config = _SUMMARY_CONFIG
