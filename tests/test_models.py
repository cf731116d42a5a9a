from __future__ import annotations

import pytest
from pydantic import ValidationError
from warehouse_heartbeat.models import CometArc, MetricRecord, RhythmEntry


def test_metric_record_defaults_to_absent() -> None:
    rec = MetricRecord(date="2025-11-21")
    assert rec.orders is None
    assert rec.active_countries is None


def test_metric_record_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        MetricRecord.model_validate({"date": "2025-11-21", "refunds": 3})


def test_comet_arc_serializes_coords_as_pairs() -> None:
    arc = CometArc.model_validate({
        "date": "2025-11-21",
        "country": "GB",
        "count": 12,
        "coords": {"origin": [-74.006, 40.7128], "dest": [-3.43, 55.38]},
    })
    payload = arc.model_dump(mode="json")
    assert payload["coords"]["dest"] == [-3.43, 55.38]
    assert payload["count"] == 12


def test_rhythm_entry_rejects_out_of_range_hour() -> None:
    with pytest.raises(ValidationError):
        RhythmEntry(hour=24, hour_label="24:00", intensity=0.0, norm_value=20.0)
