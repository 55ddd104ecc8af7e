#!/usr/bin/env python3
"""Simulate library lending activity and export it.

Runs ``LendingActivityScenario`` against the in-memory stores and writes
users, books, reservations and lifecycle events to the selected sink.
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from book_lending.config import LendingConfig
from book_lending.exceptions import LendingError
from book_lending.logging import setup_logging
from book_lending.scenarios import LendingActivityScenario
from book_lending.sinks import ConsoleSink, JsonFileSink, KafkaSink

logger = logging.getLogger("book_lending.scripts.generate_lending_data")


def build_sink(name: str, config: LendingConfig):
    """Create the sink selected on the command line."""
    if name == "console":
        return ConsoleSink(pretty=True, max_records=5)
    if name == "json":
        return JsonFileSink(config.output.json_output_dir, pretty=config.output.pretty_json)
    return KafkaSink(config.kafka, topic=config.events_topic)


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Generate simulated lending activity")
    parser.add_argument("--users", type=int, default=50, help="Number of members (default: 50)")
    parser.add_argument("--books", type=int, default=30, help="Number of titles (default: 30)")
    parser.add_argument(
        "--reservations-per-user",
        type=int,
        default=2,
        help="Reservation attempts per member (default: 2)",
    )
    parser.add_argument("--late-rate", type=float, default=0.20, help="Share returned late (default: 0.20)")
    parser.add_argument(
        "--on-time-rate",
        type=float,
        default=0.70,
        help="Share returned on time (default: 0.70)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: SEED env or none)")
    parser.add_argument(
        "--reference-date",
        type=date.fromisoformat,
        default=None,
        help="Simulated 'today' as YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--sink",
        choices=["console", "json", "kafka"],
        default="console",
        help="Where to export (default: console)",
    )
    args = parser.parse_args()

    try:
        config = LendingConfig.from_env()
        setup_logging(config.log_level, config.log_format)

        scenario = LendingActivityScenario(
            num_users=args.users,
            num_books=args.books,
            reservations_per_user=args.reservations_per_user,
            on_time_rate=args.on_time_rate,
            late_rate=args.late_rate,
            reference_date=args.reference_date,
            seed=args.seed,
            config=config,
        )
        scenario.generate()

        sink = build_sink(args.sink, config)
        scenario.export([sink])
        sink.close()
    except LendingError as exc:
        logger.error("Generation failed: %s", exc)
        return 1

    summary = scenario.get_fee_summary()
    logger.info("=" * 60)
    logger.info("Reservations: %s", summary.get("total_reservations", 0))
    logger.info("Unavailable requests: %s", summary.get("unavailable_requests", 0))
    logger.info("Status distribution: %s", summary.get("status_distribution", {}))
    logger.info("Total fees: %s (late: %s)", summary.get("total_fees"), summary.get("late_fees"))
    logger.info("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
