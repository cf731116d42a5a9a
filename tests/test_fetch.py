from __future__ import annotations

from typing import Any

import pandas as pd
import requests
from warehouse_heartbeat.config import Settings
from warehouse_heartbeat.ingest import fetch_csv
from warehouse_heartbeat.ingest.fetch_csv import fetch_all_feeds, fetch_csv_safe, parse_csv_text

SETTINGS = Settings(
    csv_base_url="https://feeds.example.com/metrics/",
    user_agent="tests/1.0",
    http_timeout=5.0,
    log_path=None,
)


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def test_parse_csv_text_keeps_strings_and_skips_blank_lines() -> None:
    pdf = parse_csv_text("date,orders\n2025-11-21,012\n\n2025-11-22,\n")
    assert list(pdf.columns) == ["date", "orders"]
    assert pdf["orders"].tolist() == ["012", ""]


def test_parse_csv_text_empty_body() -> None:
    assert parse_csv_text("  \n").empty


def test_fetch_csv_safe_sends_headers(monkeypatch: Any) -> None:
    seen: dict[str, Any] = {}

    def fake_get(url: str, **kwargs: Any) -> FakeResponse:
        seen["url"] = url
        seen.update(kwargs)
        return FakeResponse("date,orders\n2025-11-21,3\n")

    monkeypatch.setattr(fetch_csv.requests, "get", fake_get)
    pdf = fetch_csv_safe("orders", "https://x/orders.csv", "tests/1.0", timeout=7)

    assert len(pdf) == 1
    assert seen["headers"]["User-Agent"] == "tests/1.0"
    assert seen["headers"]["Accept"].startswith("text/csv")
    assert seen["timeout"] == 7


def test_fetch_csv_safe_non_success_status_is_empty(monkeypatch: Any) -> None:
    monkeypatch.setattr(fetch_csv.requests, "get", lambda url, **kw: FakeResponse("", 503))
    assert fetch_csv_safe("orders", "https://x/orders.csv", "ua").empty


def test_fetch_csv_safe_network_error_is_empty(monkeypatch: Any) -> None:
    def boom(url: str, **kwargs: Any) -> FakeResponse:
        raise requests.ConnectionError("down")

    monkeypatch.setattr(fetch_csv.requests, "get", boom)
    assert fetch_csv_safe("orders", "https://x/orders.csv", "ua").empty


def test_fetch_all_feeds_isolates_failures(monkeypatch: Any) -> None:
    def fake_get(url: str, **kwargs: Any) -> FakeResponse:
        if url.endswith("orders.csv"):
            raise requests.Timeout("slow")
        return FakeResponse("date,value\n2025-11-21,1\n")

    monkeypatch.setattr(fetch_csv.requests, "get", fake_get)
    feeds = fetch_all_feeds(SETTINGS)

    assert list(feeds) == [
        "orders",
        "shipping_labels",
        "shippings_by_country",
        "total_packers",
        "total_pickers",
    ]
    assert feeds["orders"].empty
    assert all(len(feeds[k]) == 1 for k in feeds if k != "orders")
    assert all(isinstance(v, pd.DataFrame) for v in feeds.values())


def test_settings_feed_url_joins_base() -> None:
    assert SETTINGS.feed_url("total_pickers") == "https://feeds.example.com/metrics/total_pickers.csv"
