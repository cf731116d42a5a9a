from __future__ import annotations

import pandas as pd

from warehouse_heartbeat.aggregate.comets import build_comet_buckets
from warehouse_heartbeat.aggregate.heartbeat import compute_heartbeat
from warehouse_heartbeat.aggregate.rhythm import build_daily_rhythm
from warehouse_heartbeat.models import HeartbeatPoint, MetricRecord
from warehouse_heartbeat.viz import (
    build_comet_map,
    build_heartbeat_chart,
    build_rhythm_ring,
    comet_arcs_frame,
)


def _points() -> list[HeartbeatPoint]:
    return compute_heartbeat([
        MetricRecord(date="2025-11-21 00:00:00", orders=10),
        MetricRecord(date="2025-11-21 01:00:00", orders=30),
    ])


def test_heartbeat_chart_is_area() -> None:
    spec = build_heartbeat_chart(_points()).to_dict()
    assert spec["mark"]["type"] == "area"
    assert spec["encoding"]["y"]["field"] == "intensity"


def test_rhythm_ring_is_arc() -> None:
    ring = build_daily_rhythm(_points())[0]
    spec = build_rhythm_ring(ring).to_dict()
    assert spec["mark"]["type"] == "arc"
    assert spec["title"] == ring.label


def test_comet_arcs_frame_samples_each_arc() -> None:
    bucket = build_comet_buckets(pd.DataFrame([
        {"date": "2025-11-21", "shipping_country": "GB", "shipping_labels_by_country": "60"},
        {"date": "2025-11-21", "shipping_country": "JP", "shipping_labels_by_country": "3"},
    ]))[0]

    pdf = comet_arcs_frame(bucket, steps=10)
    assert len(pdf) == 22
    assert set(pdf["country"]) == {"GB", "JP"}
    assert pdf.loc[pdf["country"] == "GB", "stroke"].iloc[0] == 3.0

    spec = build_comet_map(bucket).to_dict()
    assert len(spec["layer"]) == 2


def test_heartbeat_chart_plots_day_level_points() -> None:
    points = compute_heartbeat([
        MetricRecord(date="2025-11-21", orders=10),
        MetricRecord(date="2025-11-22", orders=20),
    ])
    spec = build_heartbeat_chart(points).to_dict()
    rows = next(iter(spec["datasets"].values()))
    assert len(rows) == 2
