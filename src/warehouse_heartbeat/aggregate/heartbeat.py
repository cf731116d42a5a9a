"""Heartbeat aggregation.

Scores each joined `MetricRecord` with a composite "intensity": every metric
is divided by its 75th-percentile value across the whole input, the ratios
are combined with fixed weights, and the weighted mean is scaled by 100.

Expectations:
- Input: any sequence of `MetricRecord` (possibly empty), one per date.
- Output: `HeartbeatPoint` list sorted by the date string ascending.
- Intensity is unbounded: a date at 4x the 75th percentile on every metric
  scores 400.
"""
from __future__ import annotations

import logging
import math
from typing import Sequence

from warehouse_heartbeat.models import HeartbeatMetrics, HeartbeatPoint, MetricRecord

log = logging.getLogger(__name__)

METRIC_FIELDS: tuple[str, ...] = (
    "orders",
    "shipping_labels",
    "total_packers",
    "total_pickers",
    "total_warehouses_packers",
    "total_warehouses_pickers",
    "active_countries",
)

METRIC_WEIGHTS: dict[str, float] = {
    "orders": 1.0,
    "shipping_labels": 1.0,
    "total_packers": 0.7,
    "total_pickers": 0.7,
    "total_warehouses_packers": 0.4,
    "total_warehouses_pickers": 0.4,
    "active_countries": 0.5,
}

TOTAL_WEIGHT = sum(METRIC_WEIGHTS.values())


def percentile75(values: Sequence[float]) -> float:
    """Return the linear-rank 75th percentile used as a normalization denominator.

    The value at index ``floor(0.75 * (n - 1))`` of the ascending sort is
    returned as-is (no interpolation). An empty input or a zero result
    yields ``1`` so it can always be divided by.

    Args:
        values: Metric values for one field across all records.

    Returns:
        The denominator for that field.
    """
    if not values:
        return 1
    ordered = sorted(values)
    idx = math.floor(0.75 * (len(ordered) - 1))
    return ordered[idx] or 1


def _with_defaults(record: MetricRecord) -> dict[str, float]:
    """Return the seven tracked metrics of `record` with absent ones set to 0."""
    values: dict[str, float] = {}
    for field in METRIC_FIELDS:
        value = getattr(record, field)
        values[field] = value if value is not None else 0
    return values


def _iso_timestamp(date_str: str) -> str:
    # cosmetic ISO-8601 decoration; the source timezone is not verified
    return date_str.replace(" ", "T", 1) + "Z"


def compute_heartbeat(records: Sequence[MetricRecord]) -> list[HeartbeatPoint]:
    """Score every record and return heartbeat points in date order.

    Args:
        records: Joined per-date records. May be empty.

    Returns:
        One `HeartbeatPoint` per record, sorted by the record's date string.
    """
    if not records:
        return []

    rows = [(r.date, _with_defaults(r)) for r in records]

    q75 = {
        field: percentile75([values[field] for _, values in rows]) or 1
        for field in METRIC_FIELDS
    }
    log.debug("Heartbeat denominators: %s", q75)

    points: list[HeartbeatPoint] = []
    for date_str, values in sorted(rows, key=lambda row: row[0]):
        score = 0.0
        for field in METRIC_FIELDS:
            score += METRIC_WEIGHTS[field] * (values[field] / q75[field])

        points.append(
            HeartbeatPoint(
                timestamp=_iso_timestamp(date_str),
                intensity=100 * score / TOTAL_WEIGHT,
                metrics=HeartbeatMetrics(**values),
            )
        )

    log.info("Computed %d heartbeat points", len(points))
    return points
