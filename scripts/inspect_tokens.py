"""Print the stored Zoom token records and whether each one is still fresh.

Tokens are masked; only expiry information is shown in full.

Example usages::

    python -m scripts.inspect_tokens
    python -m scripts.inspect_tokens A B --margin 120
"""

from __future__ import annotations

import argparse
import sys
from datetime import timedelta
from typing import List, Optional

from meeting_broker.core.config import get_settings
from meeting_broker.dependencies.clients import build_token_store
from meeting_broker.models.token import TokenRecord
from meeting_broker.services.zoom_tokens import utc_now_ms


def mask(token: str, visible: int = 4) -> str:
    if len(token) <= visible * 2:
        return "*" * len(token)
    return f"{token[:visible]}...{token[-visible:]}"


def describe_record(record: TokenRecord, *, now_ms: int, margin_ms: int) -> str:
    remaining = timedelta(milliseconds=record.expires_at - now_ms)
    state = "fresh" if record.is_fresh(now_ms, margin_ms) else "stale"
    return (
        f"{record.branch}: {state}, expires {record.expires_at_datetime().isoformat()} "
        f"({int(remaining.total_seconds())}s), access={mask(record.access_token)}, "
        f"refresh={mask(record.refresh_token)}"
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect stored Zoom token records.")
    parser.add_argument(
        "branches",
        nargs="*",
        help="Branches to show (default: every branch in the store).",
    )
    parser.add_argument(
        "--margin",
        type=int,
        default=None,
        help="Refresh margin in seconds (default: TOKEN_REFRESH_MARGIN_SECONDS).",
    )
    return parser


def main(argv: Optional[List[str]] = None, *, store=None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    if store is None:
        store = build_token_store(settings.storage)

    margin_seconds = (
        args.margin if args.margin is not None else settings.token_refresh_margin_seconds
    )
    branches = args.branches or store.list_branches()
    if not branches:
        print("No token records stored.")
        return 0

    now_ms = utc_now_ms()
    missing = 0
    for branch in branches:
        record = store.get(branch)
        if record is None:
            print(f"{branch}: unauthorized (no token stored)")
            missing += 1
            continue
        print(describe_record(record, now_ms=now_ms, margin_ms=margin_seconds * 1000))
    return 1 if missing else 0


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
