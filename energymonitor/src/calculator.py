"""
Power-balance summary calculation.

Folds a raw telemetry snapshot and the device configuration into a
``Summary``. Each category has its own reducer; they run in a fixed order
because consumption is closed from the other three:

    storage -> grid -> production -> consumption

Consumption = GridBuy + ProductionAC + StorageDischarge - GridSell - StorageCharge

Missing devices, channels and attributes never raise. Unknown values flow
through ``safe_math`` and end up as ``None`` in the summary.

This is a pure module: no I/O, no shared state. The same inputs always
produce an equal ``Summary``.

CHANGELOG:
- 2026-10-20: Charge/sell use -active_power; non-finite sums become unknown
- 2026-10-15: Add CurrentData pairing of snapshot and summary (STORY-006)
- 2026-10-14: Grid ratio uses divide_safely against zero sell capacity
- 2026-10-13: Initial creation (STORY-004)

TODO:
- None
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from energymonitor.src.models import (
    ConsumptionSummary,
    DeviceConfig,
    DeviceReading,
    GridSummary,
    ProductionSummary,
    RawSnapshot,
    StorageSummary,
    Summary,
)
from energymonitor.src.safe_math import add_safely, divide_safely, subtract_safely

logger = logging.getLogger(__name__)


def _or_zero(value: float | None) -> float:
    return 0 if value is None else value


# ---------------------------------------------------------------------------
# Channel extraction
# ---------------------------------------------------------------------------


def get_active_power(reading: DeviceReading) -> float | None:
    """Return the AC active power of a device reading.

    The sum of the three phases wins when all of them are known; otherwise
    the single ``ActivePower`` channel is used. ``None`` if neither is
    available.
    """
    phases = (
        reading.active_power_l1,
        reading.active_power_l2,
        reading.active_power_l3,
    )
    if all(phase is not None for phase in phases):
        return phases[0] + phases[1] + phases[2]
    return reading.active_power


# ---------------------------------------------------------------------------
# Category reducers
# ---------------------------------------------------------------------------


def calculate_storage(snapshot: RawSnapshot, config: DeviceConfig) -> StorageSummary:
    """Aggregate all storage devices.

    Device power > 0 is discharge, < 0 is charge. soc is the mean over the
    devices that report it. Max charge/discharge capacities are not derived
    and stay unknown.
    """
    soc: float | None = None
    count_soc = 0
    active_power: float | None = None

    for device_id in config.storage_devices:
        reading = snapshot.get(device_id)
        if reading is None:
            logger.debug("Storage device '%s': missing from snapshot", device_id)
            continue
        if reading.soc is not None:
            soc = add_safely(soc, reading.soc)
            count_soc += 1
        active_power = add_safely(active_power, get_active_power(reading))

    charge_active_power: float | None = None
    discharge_active_power: float | None = None
    if active_power is not None:
        if active_power > 0:
            charge_active_power = 0
            discharge_active_power = active_power
        else:
            charge_active_power = -active_power
            discharge_active_power = 0

    return StorageSummary(
        soc=divide_safely(soc, count_soc),
        charge_active_power=charge_active_power,
        discharge_active_power=discharge_active_power,
    )


def calculate_grid(snapshot: RawSnapshot, config: DeviceConfig) -> GridSummary:
    """Aggregate all grid meters.

    Meter power > 0 is buy from grid, < 0 is sell to grid. Capacities come
    from ``maxActivePower`` (buy) and ``minActivePower`` (sell, stored
    non-positive). The ratio is taken against the sell capacity magnitude
    for both directions and defaults to 0 when no meter reports power.
    """
    active_power: float | None = None
    max_buy: float = 0
    max_sell: float = 0

    for device_id in config.grid_meters:
        attributes = config.attributes(device_id)
        max_buy += _or_zero(attributes.max_active_power)
        max_sell += _or_zero(attributes.min_active_power)

        reading = snapshot.get(device_id)
        if reading is None:
            logger.debug("Grid meter '%s': missing from snapshot", device_id)
            continue
        active_power = add_safely(active_power, get_active_power(reading))

    max_sell_active_power = -max_sell
    ratio: float | None = 0
    buy_active_power: float | None = None
    sell_active_power: float | None = None
    if active_power is not None:
        if active_power > 0:
            sell_active_power = 0
            buy_active_power = active_power
            ratio = divide_safely(buy_active_power, max_sell_active_power)
        else:
            sell_active_power = -active_power
            buy_active_power = 0
            ratio = divide_safely(sell_active_power, max_sell_active_power)
            if ratio is not None:
                ratio = -ratio

    return GridSummary(
        power_ratio=ratio,
        buy_active_power=buy_active_power,
        max_buy_active_power=max_buy,
        sell_active_power=sell_active_power,
        max_sell_active_power=max_sell_active_power,
    )


def calculate_production(snapshot: RawSnapshot, config: DeviceConfig) -> ProductionSummary:
    """Aggregate all production meters into AC, DC and total power.

    Negative AC production is reported as a warning but published as-is.
    A non-positive rated capacity yields a ratio of 100.
    """
    active_power_ac: float | None = None
    active_power_dc: float | None = None
    max_active_power: float = 0

    for device_id in config.production_meters:
        attributes = config.attributes(device_id)
        max_active_power += _or_zero(attributes.max_active_power)
        max_active_power += _or_zero(attributes.max_actual_power)

        reading = snapshot.get(device_id)
        if reading is None:
            logger.debug("Production meter '%s': missing from snapshot", device_id)
            continue
        active_power_ac = add_safely(active_power_ac, get_active_power(reading))
        if reading.actual_power is not None:
            active_power_dc = add_safely(active_power_dc, reading.actual_power)

    if active_power_ac is not None and active_power_ac < 0:
        # Reported only, the raw value is still published.
        logger.warning(
            "Negative production? meters=%s active_power_ac=%s",
            list(config.production_meters),
            active_power_ac,
        )
    if max_active_power < 0:
        max_active_power = 0

    active_power = add_safely(active_power_ac, active_power_dc)
    if max_active_power == 0:
        power_ratio: float | None = 100
    else:
        power_ratio = divide_safely(active_power, max_active_power / 100)

    return ProductionSummary(
        power_ratio=power_ratio,
        active_power=active_power,
        active_power_ac=active_power_ac,
        active_power_dc=active_power_dc,
        max_active_power=max_active_power,
    )


def calculate_consumption(
    storage: StorageSummary,
    grid: GridSummary,
    production: ProductionSummary,
) -> ConsumptionSummary:
    """Close the energy balance from the other three category blocks."""
    minus = add_safely(grid.sell_active_power, storage.charge_active_power)
    plus = add_safely(
        add_safely(grid.buy_active_power, production.active_power_ac),
        storage.discharge_active_power,
    )
    active_power = subtract_safely(plus, minus)

    max_active_power = (
        _or_zero(grid.max_buy_active_power)
        - _or_zero(grid.max_sell_active_power)
        + _or_zero(production.max_active_power)
        + _or_zero(storage.max_charge_active_power)
        - _or_zero(storage.max_discharge_active_power)
    )

    return ConsumptionSummary(
        power_ratio=divide_safely(active_power, max_active_power / 100),
        active_power=active_power,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def calculate_summary(snapshot: RawSnapshot, config: DeviceConfig) -> Summary:
    """Derive the power-balance summary for one snapshot.

    Args:
        snapshot: Device identifier -> reading. Devices may be missing.
        config: Category membership and device attributes.

    Returns:
        A new, frozen :class:`Summary`.

    Raises:
        TypeError: If *snapshot* or *config* is ``None``.
    """
    if snapshot is None or config is None:
        raise TypeError("calculate_summary() requires both a snapshot and a config")

    storage = calculate_storage(snapshot, config)
    grid = calculate_grid(snapshot, config)
    production = calculate_production(snapshot, config)
    consumption = calculate_consumption(storage, grid, production)

    return Summary(
        storage=storage,
        grid=grid,
        production=production,
        consumption=consumption,
    )


class CurrentData(BaseModel):
    """A raw snapshot together with the summary derived from it.

    Attributes:
        data: The device readings the summary was calculated from.
        summary: The derived power-balance summary.
    """

    data: dict[str, DeviceReading]
    summary: Summary

    model_config = {"frozen": True}

    @classmethod
    def from_snapshot(cls, snapshot: RawSnapshot, config: DeviceConfig) -> CurrentData:
        """Calculate the summary for *snapshot* and pair it with the data."""
        return cls(data=dict(snapshot), summary=calculate_summary(snapshot, config))
