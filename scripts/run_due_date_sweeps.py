"""Run the due-date reminder sweeps once, outside the scheduler.

Useful after downtime or manual edits to due dates. Reminders are persisted;
no live clients are attached, so nothing is pushed over websockets.
"""

from __future__ import annotations

import argparse
import asyncio

from tasket.application.use_cases.notifications import (
    DueDateScanner,
    SweepResult,
    upcoming_policy,
    urgent_policy,
)
from tasket.config import get_settings
from tasket.infrastructure.database import SessionLocal, initialize_database
from tasket.infrastructure.realtime import RealtimeHub
from tasket.infrastructure.stores import (
    JWTIdentityResolver,
    SqlAlchemyNotificationStore,
    SqlAlchemyTaskQuery,
)
from tasket.logging_setup import configure_logging


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(description="Send due-date reminders now.")
    parser.add_argument(
        "--sweep",
        choices=("upcoming", "urgent", "both"),
        default="both",
        help="Which sweep to run (default: both)",
    )
    return parser.parse_args()


async def run(sweep: str) -> list[SweepResult]:
    settings = get_settings()
    hub = RealtimeHub(JWTIdentityResolver(SessionLocal))
    scanner = DueDateScanner(
        SqlAlchemyTaskQuery(SessionLocal),
        SqlAlchemyNotificationStore(SessionLocal),
        hub.fanout,
        upcoming=upcoming_policy(settings.upcoming_horizon_days),
        urgent=urgent_policy(settings.urgent_horizon_hours),
    )

    results: list[SweepResult] = []
    if sweep in ("upcoming", "both"):
        results.append(await scanner.run_upcoming_sweep())
    if sweep in ("urgent", "both"):
        results.append(await scanner.run_urgent_sweep())
    await hub.shutdown()
    return results


def main() -> None:
    args = parse_args()
    configure_logging(get_settings().log_level)
    initialize_database()

    results = asyncio.run(run(args.sweep))
    for result in results:
        status = "FAILED" if result.failed else "ok"
        print(
            f"{result.notification_type}: {len(result.created)} created, "
            f"{result.skipped} skipped [{status}]"
        )
    if any(result.failed for result in results):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
