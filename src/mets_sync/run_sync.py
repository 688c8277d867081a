# src/mets_sync/run_sync.py
"""
Scheduled entry point: pulls the schedule, roster and social feeds and upserts them
into MongoDB. Intended for cron runs (e.g., GitHub Actions), one pass per invocation.
"""

import argparse
import logging
import os
import sys

from .http_client import JsonClient
from .roster_sync import sync_roster
from .schedule_sync import sync_schedule
from .social_sync import sync_social
from .store import MemoryStore, StoreError, connect_store
from .sync_config import ConfigError, SyncConfig, load_config, load_credentials

logger = logging.getLogger(__name__)

# Fixed run order.
PIPELINES = (
    ('schedule', sync_schedule),
    ('roster', sync_roster),
    ('social', sync_social),
)
PIPELINE_NAMES = tuple(name for name, _ in PIPELINES)
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def run_pipelines(client, store, config: SyncConfig, only=None) -> dict:
    """
    Runs the selected pipelines one after another. A failing pipeline is logged and
    skipped so the rest still run; its entry in the returned summary is None.
    """
    summary = {}
    for name, pipeline in PIPELINES:
        if only and name not in only:
            continue
        try:
            summary[name] = pipeline(client, store, config)
        except Exception:
            logger.exception(f"Error updating {name}; continuing with the remaining pipelines.")
            summary[name] = None
    return summary


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sync schedule, roster and social posts into MongoDB.")
    parser.add_argument(
        "--only",
        nargs="+",
        choices=PIPELINE_NAMES,
        help="Run only these pipelines (still in schedule, roster, social order).",
    )
    parser.add_argument("--season", type=int, help="Season to sync (default: METS_SEASON or current year).")
    parser.add_argument("--team-id", type=int, help="MLB team id (default: METS_TEAM_ID or 121).")
    parser.add_argument("--hashtag", help="Hashtag to search for social posts (default: METS_HASHTAG or #LGM).")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Fetch and transform, but keep documents in memory instead of writing to MongoDB.",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL") or "INFO",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: LOG_LEVEL or INFO).",
    )
    args = parser.parse_args(argv)
    # choices are not applied to the LOG_LEVEL default
    if args.log_level not in LOG_LEVELS:
        parser.error(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
    return args


def main(argv=None) -> int:
    """Returns the process exit status: 0 once every pipeline was attempted, 1 on setup failure."""
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s - %(levelname)s - %(message)s")
    logger.info("--- Starting Mets Sync ---")

    try:
        config = load_config().with_overrides(
            season=args.season, team_id=args.team_id, hashtag=args.hashtag
        )
        if args.dry_run:
            store = MemoryStore()
        else:
            store = connect_store(load_credentials())
    except (ConfigError, StoreError) as e:
        logger.error(f"{e}. Exiting.")
        return 1

    client = JsonClient(timeout=config.http_timeout)
    try:
        summary = run_pipelines(client, store, config, only=args.only)
    finally:
        client.close()
        store.close()

    failed = [name for name, count in summary.items() if count is None]
    if failed:
        logger.warning(f"Finished with failures in: {', '.join(failed)}")
    logger.info("--- Mets Sync Finished ---")
    return 0


if __name__ == "__main__":
    sys.exit(main())
