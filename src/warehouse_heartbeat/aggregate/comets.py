"""Comet map aggregation.

Turns the per-country shipments feed into date buckets of arcs flying from
the New York warehouse to each destination country, plus the small geometry
helpers the map uses to draw them.
"""
from __future__ import annotations

import logging
import math

import pandas as pd

from warehouse_heartbeat.aggregate.country_coords import ORIGIN, get_coords
from warehouse_heartbeat.ingest.join import parse_number
from warehouse_heartbeat.models import ArcCoords, CometArc, CometBucket

log = logging.getLogger(__name__)

MAX_STROKE_WIDTH = 6.0


def build_comet_buckets(frame: pd.DataFrame | None) -> list[CometBucket]:
    """Group shipments by date into comet arcs.

    Rows missing a date or a country, or whose `shipping_labels_by_country`
    is not a finite number, are skipped.

    Args:
        frame: `shippings_by_country.csv` rows with `date`,
            `shipping_country` and `shipping_labels_by_country` columns.

    Returns:
        Buckets sorted by date ascending; arcs keep feed order within a date.
    """
    if frame is None or frame.empty:
        return []

    by_date: dict[str, list[CometArc]] = {}
    skipped = 0

    for row in frame.to_dict(orient="records"):
        date = str(row.get("date") or "").strip()
        country = str(row.get("shipping_country") or "").strip()
        count = parse_number(row.get("shipping_labels_by_country"))

        if not date or not country or count is None:
            skipped += 1
            continue

        by_date.setdefault(date, []).append(
            CometArc(
                date=date,
                country=country,
                count=count,
                coords=ArcCoords(origin=ORIGIN, dest=get_coords(country)),
            )
        )

    if skipped:
        log.debug("Skipped %d incomplete shipment rows", skipped)

    return [CometBucket(date=date, arcs=by_date[date]) for date in sorted(by_date)]


def arc_stroke_width(count: float) -> float:
    """Return the stroke width of an arc: grows with volume, capped at 6."""
    return min(MAX_STROKE_WIDTH, 1 + count / 30)


def arc_curve(
    origin: tuple[float, float],
    dest: tuple[float, float],
    steps: int = 24,
) -> list[tuple[float, float]]:
    """Sample a curved arc between two points.

    The curve is a Bézier whose control point sits at the chord midpoint,
    offset upward by a quarter of the chord length (negative y on screen,
    i.e. positive latitude on a map).

    Args:
        origin: Start point `(x, y)`.
        dest: End point `(x, y)`.
        steps: Number of segments; `steps + 1` points are returned.

    Returns:
        Points from `origin` to `dest` inclusive.
    """
    if steps < 1:
        raise ValueError("steps must be >= 1")

    x1, y1 = origin
    x2, y2 = dest
    mx = (x1 + x2) / 2
    my = (y1 + y2) / 2
    cy = my + 0.25 * math.hypot(x2 - x1, y2 - y1)

    points: list[tuple[float, float]] = []
    for i in range(steps + 1):
        t = i / steps
        u = 1 - t
        # both control points coincide, so the cubic reduces to this form
        x = u**3 * x1 + 3 * u * t * mx + t**3 * x2
        y = u**3 * y1 + 3 * u * t * cy + t**3 * y2
        points.append((x, y))
    return points
