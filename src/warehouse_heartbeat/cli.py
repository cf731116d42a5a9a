"""Command-line interface for building the dashboard datasets.

Provides subcommands: `heartbeat`, `rhythm`, and `comets`. Each command is
implemented as a `cmd_*` function that accepts an argparse namespace and
writes its JSON payload to stdout or `--out`.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable

from dotenv import load_dotenv
from pydantic import BaseModel

from warehouse_heartbeat.config import get_settings
from warehouse_heartbeat.logging_config import configure_logging
from warehouse_heartbeat.ingest.fetch_csv import fetch_all_feeds, fetch_csv_safe
from warehouse_heartbeat.ingest.join import build_metric_records
from warehouse_heartbeat.aggregate.heartbeat import compute_heartbeat
from warehouse_heartbeat.aggregate.rhythm import build_daily_rhythm
from warehouse_heartbeat.aggregate.comets import build_comet_buckets
from warehouse_heartbeat.models import HeartbeatPoint

log = logging.getLogger(__name__)


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _write_json(payload: Any, out: Path | None) -> None:
    """Serialize models (or plain data) to JSON on stdout or into `out`."""
    if isinstance(payload, list):
        payload = [p.model_dump(mode="json") if isinstance(p, BaseModel) else p for p in payload]
    text = json.dumps(payload)

    if out is None:
        sys.stdout.write(text + "\n")
        return

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    log.info("Wrote %s", out)


def _heartbeat_points() -> list[HeartbeatPoint]:
    """Fetch all feeds, join them and score every date."""
    s = get_settings()
    records = build_metric_records(fetch_all_feeds(s))
    if not records:
        log.error("[heartbeat] No rows built from CSVs")
        return []
    return compute_heartbeat(records)


# --------------------------------------------------
# HEARTBEAT
# --------------------------------------------------
def cmd_heartbeat(args: argparse.Namespace) -> None:
    """Write the scored heartbeat timeline.

    Args:
        args: argparse namespace with `out`.
    """
    _write_json(_heartbeat_points(), args.out)


# --------------------------------------------------
# RHYTHM
# --------------------------------------------------
def cmd_rhythm(args: argparse.Namespace) -> None:
    """Write the daily rhythm rings derived from the heartbeat timeline.

    Args:
        args: argparse namespace with `out` and `days`.
    """
    _write_json(build_daily_rhythm(_heartbeat_points(), max_days=args.days), args.out)


# --------------------------------------------------
# COMETS
# --------------------------------------------------
def cmd_comets(args: argparse.Namespace) -> None:
    """Write comet arcs grouped by date from the per-country shipments feed.

    Args:
        args: argparse namespace with `out`.
    """
    s = get_settings()
    frame = fetch_csv_safe(
        "shippings_by_country",
        s.feed_url("shippings_by_country"),
        s.user_agent,
        s.http_timeout,
    )
    _write_json(build_comet_buckets(frame), args.out)


COMMANDS: dict[str, Callable[[argparse.Namespace], None]] = {
    "heartbeat": cmd_heartbeat,
    "rhythm": cmd_rhythm,
    "comets": cmd_comets,
}


# --------------------------------------------------
# CLI
# --------------------------------------------------
def _positive_int(value: str) -> int:
    """argparse type: an integer >= 1."""
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1 (got {n})")
    return n


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    The returned parser has subcommands `heartbeat`, `rhythm` and `comets`,
    each accepting `--out`.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="warehouse_heartbeat")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_heartbeat = sub.add_parser("heartbeat")
    p_heartbeat.add_argument("--out", type=Path, default=None)

    p_rhythm = sub.add_parser("rhythm")
    p_rhythm.add_argument("--out", type=Path, default=None)
    p_rhythm.add_argument("--days", type=_positive_int, default=7)

    p_comets = sub.add_parser("comets")
    p_comets.add_argument("--out", type=Path, default=None)

    return p


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    configure_logging(None, stream=sys.stderr)

    try:
        log_path = get_settings().log_path
        if log_path is not None:
            configure_logging(log_path, stream=sys.stderr)
        COMMANDS[args.cmd](args)
    except Exception:
        log.exception("%s command failed", args.cmd)
        _write_json({"error": f"failed to build {args.cmd}"}, None)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
