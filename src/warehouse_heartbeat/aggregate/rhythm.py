"""Daily rhythm rings and heartbeat timeline helpers.

Functions in this module reshape scored `HeartbeatPoint`s for the dashboard:
cleaning and windowing the heartbeat timeline, and folding it into one
24-spoke ring per UTC day.
"""
from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

import pandas as pd

from warehouse_heartbeat.models import DayRhythm, HeartbeatPoint, RhythmEntry

log = logging.getLogger(__name__)

MAX_DAYS = 7
MAX_RECENT_POINTS = 96  # last ~4 days if hourly

# spoke length range used by the rings
NORM_FLOOR = 20.0
NORM_SPAN = 80.0


def clean_points(points: Iterable[HeartbeatPoint]) -> list[HeartbeatPoint]:
    """Drop points without a timestamp or a finite intensity, sorted by timestamp."""
    cleaned = [
        p for p in points
        if p is not None and p.timestamp and math.isfinite(p.intensity)
    ]
    return sorted(cleaned, key=lambda p: p.timestamp)


def recent_points(
    points: Sequence[HeartbeatPoint],
    limit: int = MAX_RECENT_POINTS,
) -> list[HeartbeatPoint]:
    """Return at most the last `limit` points."""
    if len(points) <= limit:
        return list(points)
    return list(points[-limit:])


def points_to_frame(points: Iterable[HeartbeatPoint]) -> pd.DataFrame:
    """Flatten heartbeat points into a DataFrame with a parsed UTC `ts` column.

    Returns:
        pandas.DataFrame with `timestamp`, `ts`, `intensity` and one column per
        metric. Rows whose timestamp cannot be parsed are dropped.
    """
    rows = [
        {"timestamp": p.timestamp, "intensity": p.intensity, **p.metrics.model_dump()}
        for p in points
    ]
    if not rows:
        return pd.DataFrame(columns=["timestamp", "ts", "intensity"])

    pdf = pd.DataFrame(rows)
    # the trailing Z is cosmetic and breaks day-level stamps like "2025-11-21Z"
    bare = pdf["timestamp"].str.removesuffix("Z")
    pdf["ts"] = pd.to_datetime(bare, utc=True, errors="coerce", format="ISO8601")
    return pdf.dropna(subset=["ts"]).reset_index(drop=True)


def build_daily_rhythm(
    points: Iterable[HeartbeatPoint],
    max_days: int = MAX_DAYS,
) -> list[DayRhythm]:
    """Fold heartbeat points into one rhythm ring per UTC day.

    Only the last `max_days` days are kept. Each ring has 24 hourly entries
    holding the mean intensity of that hour (0 when the hour has no points)
    and a spoke length scaled into 20..100 against the min/max intensity of
    all kept points.

    Args:
        points: Scored heartbeat points, any order.
        max_days: Number of most recent days to keep.

    Returns:
        Rings ordered by day ascending; empty when no point is usable.
    """
    pdf = points_to_frame(clean_points(points))
    if pdf.empty or max_days < 1:
        return []

    pdf["day_key"] = pdf["ts"].dt.strftime("%Y-%m-%d")
    pdf["hour"] = pdf["ts"].dt.hour

    day_keys = sorted(pdf["day_key"].unique())[-max_days:]
    pdf = pdf[pdf["day_key"].isin(day_keys)]

    global_min = float(pdf["intensity"].min())
    global_max = float(pdf["intensity"].max())
    if global_min == global_max:
        global_max = global_min + 1

    hourly = pdf.groupby(["day_key", "hour"])["intensity"].mean()

    rings: list[DayRhythm] = []
    for day_key in day_keys:
        first_ts = pdf.loc[pdf["day_key"] == day_key, "ts"].iloc[0]
        data: list[RhythmEntry] = []
        for hour in range(24):
            avg = float(hourly.get((day_key, hour), 0.0))
            t = (avg - global_min) / (global_max - global_min)
            data.append(
                RhythmEntry(
                    hour=hour,
                    hour_label=f"{hour:02d}:00",
                    intensity=avg,
                    norm_value=NORM_FLOOR + NORM_SPAN * t,
                )
            )
        rings.append(DayRhythm(day_key=day_key, label=first_ts.strftime("%a %d %b"), data=data))

    log.info("Built %d rhythm rings", len(rings))
    return rings
