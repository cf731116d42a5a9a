"""Utilities to download the public metrics CSV feeds.

Every feed is fetched independently and degrades to an empty DataFrame on
failure, so one broken feed never blocks the others.
"""

from __future__ import annotations

import io
import logging
from typing import Any, cast

import certifi
import pandas as pd
import requests  # type: ignore[import-untyped]
from dask import delayed, compute  # type: ignore[attr-defined]

from warehouse_heartbeat.config import Settings

log = logging.getLogger(__name__)

ACCEPT_HEADER = "text/csv,text/plain,*/*;q=0.8"


def parse_csv_text(text: str) -> pd.DataFrame:
    """Parse CSV text with a header row into a DataFrame of strings.

    Blank lines are skipped and no value is coerced to NaN, so callers see
    the cells exactly as published.

    Args:
        text: CSV document including the header line.

    Returns:
        pandas.DataFrame with one `str` column per header field.
    """
    if not text.strip():
        return pd.DataFrame()
    return pd.read_csv(
        io.StringIO(text),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        on_bad_lines="warn",
    )


def fetch_csv_safe(label: str, url: str, user_agent: str, timeout: float = 30.0) -> pd.DataFrame:
    """Download and parse one CSV feed, returning an empty frame on any failure.

    Args:
        label: Feed name used to tag log messages.
        url: Fully-qualified CSV URL.
        user_agent: User-Agent header value.
        timeout: Request timeout in seconds.

    Returns:
        Parsed feed, or an empty DataFrame when the request fails, the server
        answers with a non-2xx status, or the body cannot be parsed.
    """
    headers = {"User-Agent": user_agent, "Accept": ACCEPT_HEADER}
    try:
        resp = requests.get(url, headers=headers, timeout=timeout, verify=certifi.where())
    except requests.RequestException as e:
        log.error("[heartbeat] %s fetch error: %s", label, e)
        return pd.DataFrame()

    if not resp.ok:
        log.error("[heartbeat] %s fetch failed with status %d", label, resp.status_code)
        return pd.DataFrame()

    try:
        frame = parse_csv_text(resp.text)
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        log.error("[heartbeat] %s parse error: %s", label, e)
        return pd.DataFrame()

    log.info("Fetched %s: %d rows", label, len(frame))
    return frame


def fetch_all_feeds(settings: Settings) -> dict[str, pd.DataFrame]:
    """Fetch every configured feed concurrently.

    Each download is a dask delayed task run on the threaded scheduler; the
    tasks share no state and each absorbs its own failures.

    Args:
        settings: Application settings providing URLs, User-Agent and timeout.

    Returns:
        `{label: DataFrame}` for every feed in `FEED_FILES` order.
    """
    urls = settings.feed_urls()
    tasks = [
        delayed(fetch_csv_safe)(label, url, settings.user_agent, settings.http_timeout)
        for label, url in urls.items()
    ]

    # `compute` is untyped in our environment; cast to Any before calling
    frames = cast(Any, compute)(*tasks, scheduler="threads")
    return dict(zip(urls, frames))
