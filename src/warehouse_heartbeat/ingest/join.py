"""Join the five metrics feeds into one `MetricRecord` per date.

Records live in an insertion-ordered map keyed by the trimmed date string.
Each feed is merged in its own pass; a record is created the first time any
feed mentions its date and later passes only fill in their own fields.
Dates are matched by exact string equality.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping

import pandas as pd

from warehouse_heartbeat.models import MetricRecord

log = logging.getLogger(__name__)

RecordMap = dict[str, dict[str, Any]]


def parse_number(raw: Any) -> int | float | None:
    """Coerce a CSV cell to a finite number, or None when it is not one.

    A blank cell counts as ``0``, mirroring how the feeds have always been
    read. Integral values are returned as `int`.
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if raw == "":
            return 0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


def _cell(row: Mapping[str, Any], column: str) -> str:
    value = row.get(column)
    return value.strip() if isinstance(value, str) else ""


def _rows(frame: pd.DataFrame | None) -> Iterable[dict[str, Any]]:
    if frame is None or frame.empty:
        return []
    return frame.to_dict(orient="records")


def ensure_row(records: RecordMap, date_str: str) -> dict[str, Any]:
    """Return the record for `date_str`, creating an empty one on first use."""
    row = records.get(date_str)
    if row is None:
        row = {"date": date_str}
        records[date_str] = row
    return row


def merge_counts(
    records: RecordMap,
    frame: pd.DataFrame | None,
    columns: Mapping[str, str],
    date_columns: tuple[str, ...] = ("date",),
) -> None:
    """Merge one date-keyed feed into `records`.

    Args:
        records: Date → partial record map, updated in place.
        frame: Feed rows (string cells). None/empty frames are a no-op.
        columns: Feed column → record field to copy when numeric.
        date_columns: Candidate date columns, first non-empty one wins.
    """
    for row in _rows(frame):
        date_str = next((d for d in (_cell(row, c) for c in date_columns) if d), "")
        if not date_str:
            continue
        target = ensure_row(records, date_str)
        for column, field in columns.items():
            value = parse_number(row.get(column))
            if value is not None:
                target[field] = value


def merge_active_countries(records: RecordMap, frame: pd.DataFrame | None) -> None:
    """Reduce the per-country shipments feed to a distinct-country count per date."""
    countries_by_date: dict[str, set[str]] = {}
    for row in _rows(frame):
        date_str = _cell(row, "date")
        country = _cell(row, "shipping_country")
        if not date_str or not country:
            continue
        countries_by_date.setdefault(date_str, set()).add(country)

    for date_str, countries in countries_by_date.items():
        ensure_row(records, date_str)["active_countries"] = len(countries)


def build_metric_records(feeds: Mapping[str, pd.DataFrame]) -> list[MetricRecord]:
    """Join all feeds into `MetricRecord`s in first-seen date order.

    Args:
        feeds: `{label: DataFrame}` as returned by `fetch_all_feeds`. Missing
            labels are treated like failed (empty) feeds.

    Returns:
        One `MetricRecord` per distinct date across all feeds.
    """
    records: RecordMap = {}

    # orders.csv: date_utc (or date), orders
    merge_counts(records, feeds.get("orders"), {"orders": "orders"}, ("date_utc", "date"))
    # shipping_labels.csv: date, shipping_labels
    merge_counts(records, feeds.get("shipping_labels"), {"shipping_labels": "shipping_labels"})
    # total_packers.csv: date, total_packers, total_warehouses
    merge_counts(
        records,
        feeds.get("total_packers"),
        {"total_packers": "total_packers", "total_warehouses": "total_warehouses_packers"},
    )
    # total_pickers.csv: date, total_pickers, total_warehouses
    merge_counts(
        records,
        feeds.get("total_pickers"),
        {"total_pickers": "total_pickers", "total_warehouses": "total_warehouses_pickers"},
    )
    # shippings_by_country.csv: date, shipping_country
    merge_active_countries(records, feeds.get("shippings_by_country"))

    log.info("Joined %d dated records from %d feeds", len(records), len(feeds))
    return [MetricRecord(**row) for row in records.values()]
