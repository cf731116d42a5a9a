"""Pydantic models for joined metric records and every JSON output.

These models define the per-date input record consumed by the heartbeat
aggregator and the payloads served to the dashboard views and the CLI.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

Number = int | float
LonLat = tuple[float, float]

class MetricRecord(BaseModel):
    """One calendar date's joined raw inputs.

    A field left as ``None`` means no feed reported it for this date; the
    aggregator treats it as ``0``.

    Attributes:
        date: Date string exactly as it appears in the feeds (no timezone
            conversion), e.g. ``2025-11-21`` or ``2025-11-21 14:00:00``.
        orders: Orders created.
        shipping_labels: Shipping labels printed.
        total_packers: Distinct packers active.
        total_pickers: Distinct pickers active.
        total_warehouses_packers: Warehouses with packing activity.
        total_warehouses_pickers: Warehouses with picking activity.
        active_countries: Distinct destination countries shipped to.
    """
    model_config = ConfigDict(extra="forbid")
    date: str
    orders: Number | None = None
    shipping_labels: Number | None = None
    total_packers: Number | None = None
    total_pickers: Number | None = None
    total_warehouses_packers: Number | None = None
    total_warehouses_pickers: Number | None = None
    active_countries: Number | None = None

class HeartbeatMetrics(BaseModel):
    """The seven raw metrics echoed alongside a heartbeat point."""
    model_config = ConfigDict(extra="forbid")
    orders: Number
    shipping_labels: Number
    total_packers: Number
    total_pickers: Number
    total_warehouses_packers: Number
    total_warehouses_pickers: Number
    active_countries: Number

class HeartbeatPoint(BaseModel):
    """Scored output for one date.

    `timestamp` is the source date decorated as ISO-8601 (`T` separator and a
    trailing `Z`); no timezone arithmetic is applied.
    """
    model_config = ConfigDict(extra="forbid")
    timestamp: str
    intensity: float
    metrics: HeartbeatMetrics

class ArcCoords(BaseModel):
    """Origin and destination of a comet arc as (longitude, latitude)."""
    model_config = ConfigDict(extra="forbid")
    origin: LonLat
    dest: LonLat

class CometArc(BaseModel):
    """Shipping labels sent to one country on one date."""
    model_config = ConfigDict(extra="forbid")
    date: str
    country: str
    count: Number
    coords: ArcCoords

class CometBucket(BaseModel):
    """All comet arcs launched for one date."""
    model_config = ConfigDict(extra="forbid")
    date: str
    arcs: list[CometArc]

class RhythmEntry(BaseModel):
    """One hourly spoke of a rhythm ring."""
    model_config = ConfigDict(extra="forbid")
    hour: int = Field(..., ge=0, le=23)
    hour_label: str
    intensity: float
    norm_value: float

class DayRhythm(BaseModel):
    """One rhythm ring: 24 hourly entries for a UTC day."""
    model_config = ConfigDict(extra="forbid")
    day_key: str
    label: str
    data: list[RhythmEntry]
