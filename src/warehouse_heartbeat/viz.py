"""Altair chart builders for the three dashboard views.

Each builder takes plain model objects and returns an `alt.Chart` (or layered
chart) ready for `st.altair_chart`.
"""
from __future__ import annotations

from typing import Sequence

import altair as alt
import pandas as pd

from warehouse_heartbeat.aggregate.comets import arc_curve, arc_stroke_width
from warehouse_heartbeat.aggregate.rhythm import points_to_frame
from warehouse_heartbeat.models import CometBucket, DayRhythm, HeartbeatPoint

WORLD_TOPOJSON_URL = "https://cdn.jsdelivr.net/npm/vega-datasets@v1.29.0/data/world-110m.json"

METRIC_TOOLTIPS = [
    alt.Tooltip("orders:Q", title="Orders"),
    alt.Tooltip("shipping_labels:Q", title="Labels"),
    alt.Tooltip("total_packers:Q", title="Packers"),
    alt.Tooltip("total_pickers:Q", title="Pickers"),
    alt.Tooltip("total_warehouses_packers:Q", title="WH (packers)"),
    alt.Tooltip("total_warehouses_pickers:Q", title="WH (pickers)"),
    alt.Tooltip("active_countries:Q", title="Countries"),
]


def build_heartbeat_chart(points: Sequence[HeartbeatPoint], height: int = 320) -> alt.Chart:
    """Area chart of intensity over time, with every raw metric in the tooltip."""
    pdf = points_to_frame(points)
    return (
        alt.Chart(pdf)
        .mark_area(line={"color": "#f97373"}, color="#f87171", opacity=0.35)
        .encode(
            x=alt.X("ts:T", title="Time (UTC)"),
            y=alt.Y("intensity:Q", title="Intensity"),
            tooltip=[
                alt.Tooltip("ts:T", title="Time", format="%d %b %H:%M"),
                alt.Tooltip("intensity:Q", title="Intensity", format=".1f"),
                *METRIC_TOOLTIPS,
            ],
        )
        .properties(height=height)
    )


def build_rhythm_ring(day: DayRhythm, size: int = 260) -> alt.Chart:
    """Radial chart with one spoke per hour; longer spokes are more intense."""
    pdf = pd.DataFrame([e.model_dump() for e in day.data])
    return (
        alt.Chart(pdf, title=day.label)
        .mark_arc(innerRadius=size * 0.1, stroke="#000")
        .encode(
            theta=alt.Theta("hour:O", sort="ascending"),
            radius=alt.Radius("norm_value:Q", scale=alt.Scale(type="linear", domain=[0, 100], zero=True)),
            color=alt.Color("norm_value:Q", scale=alt.Scale(scheme="magma", domain=[20, 100]), legend=None),
            tooltip=[
                alt.Tooltip("hour_label:N", title="Hour (UTC)"),
                alt.Tooltip("intensity:Q", title="Intensity", format=".1f"),
            ],
        )
        .properties(width=size, height=size)
    )


def comet_arcs_frame(bucket: CometBucket, steps: int = 24) -> pd.DataFrame:
    """Sample every arc of `bucket` into (lon, lat) rows for `mark_line`.

    Returns:
        pandas.DataFrame with columns `country`, `count`, `stroke`, `order`,
        `lon`, `lat`; one line per country, ordered by `order`.
    """
    rows: list[dict[str, object]] = []
    for arc in bucket.arcs:
        stroke = arc_stroke_width(arc.count)
        for order, (lon, lat) in enumerate(arc_curve(arc.coords.origin, arc.coords.dest, steps)):
            rows.append(
                {
                    "country": arc.country,
                    "count": arc.count,
                    "stroke": stroke,
                    "order": order,
                    "lon": lon,
                    "lat": lat,
                }
            )
    return pd.DataFrame(rows, columns=["country", "count", "stroke", "order", "lon", "lat"])


def build_comet_map(bucket: CometBucket, width: int = 900, height: int = 520) -> alt.LayerChart:
    """World map with glowing arcs from the origin to each destination country."""
    countries = alt.topo_feature(WORLD_TOPOJSON_URL, "countries")
    background = (
        alt.Chart(countries)
        .mark_geoshape(fill="#111", stroke="#333", strokeWidth=0.4)
    )

    arcs = (
        alt.Chart(comet_arcs_frame(bucket))
        .mark_line(color="#ec4899", opacity=0.85)
        .encode(
            longitude="lon:Q",
            latitude="lat:Q",
            detail="country:N",
            order="order:Q",
            strokeWidth=alt.StrokeWidth("stroke:Q", scale=None),
            tooltip=[
                alt.Tooltip("country:N", title="Country"),
                alt.Tooltip("count:Q", title="Labels"),
            ],
        )
    )

    return (
        alt.layer(background, arcs)
        .project(type="mercator")
        .properties(width=width, height=height, title=bucket.date)
    )
