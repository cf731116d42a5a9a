from __future__ import annotations

import pandas as pd
from warehouse_heartbeat.ingest.join import build_metric_records, parse_number


def test_parse_number_matches_feed_coercion() -> None:
    assert parse_number("12") == 12
    assert isinstance(parse_number("12.0"), int)
    assert parse_number(" 2.5 ") == 2.5
    assert parse_number("") == 0
    assert parse_number("abc") is None
    assert parse_number("nan") is None
    assert parse_number(None) is None


def test_build_metric_records_joins_all_feeds_by_date() -> None:
    feeds = {
        "orders": pd.DataFrame([
            {"date_utc": "2025-11-21", "orders": "120"},
            {"date_utc": " ", "orders": "5"},
        ]),
        "shipping_labels": pd.DataFrame([
            {"date": "2025-11-21", "shipping_labels": "98"},
            {"date": "2025-11-22", "shipping_labels": "x"},
        ]),
        "total_packers": pd.DataFrame([
            {"date": "2025-11-21", "total_packers": "40", "total_warehouses": "6"},
        ]),
        "total_pickers": pd.DataFrame([
            {"date": "2025-11-21", "total_pickers": "35", "total_warehouses": "5"},
        ]),
        "shippings_by_country": pd.DataFrame([
            {"date": "2025-11-21", "shipping_country": "US"},
            {"date": "2025-11-21", "shipping_country": "US"},
            {"date": "2025-11-21", "shipping_country": "GB"},
            {"date": "2025-11-23", "shipping_country": "DE"},
            {"date": "2025-11-23", "shipping_country": ""},
        ]),
    }

    records = build_metric_records(feeds)
    by_date = {r.date: r for r in records}

    assert [r.date for r in records] == ["2025-11-21", "2025-11-22", "2025-11-23"]
    first = by_date["2025-11-21"]
    assert first.orders == 120
    assert first.shipping_labels == 98
    assert first.total_packers == 40
    assert first.total_warehouses_packers == 6
    assert first.total_pickers == 35
    assert first.total_warehouses_pickers == 5
    assert first.active_countries == 2

    # created by a feed whose value was not numeric
    assert by_date["2025-11-22"].shipping_labels is None
    assert by_date["2025-11-23"].active_countries == 1
    assert by_date["2025-11-23"].orders is None


def test_orders_fall_back_to_date_column() -> None:
    feeds = {"orders": pd.DataFrame([{"date": "2025-11-21", "orders": "3"}])}
    records = build_metric_records(feeds)
    assert records[0].date == "2025-11-21"
    assert records[0].orders == 3


def test_failed_feeds_degrade_to_missing_fields() -> None:
    feeds = {
        "orders": pd.DataFrame(),
        "shipping_labels": pd.DataFrame([{"date": "2025-11-21", "shipping_labels": "4"}]),
    }
    records = build_metric_records(feeds)
    assert len(records) == 1
    assert records[0].orders is None
    assert records[0].shipping_labels == 4


def test_no_feeds_builds_no_records() -> None:
    assert build_metric_records({}) == []
