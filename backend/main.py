import sys
from datetime import datetime
from functools import partial

from config.airlines import DEFAULT_CATALOG
from config.settings import load_settings
from ingest.flight_scraper import FlightScrapeError, FlightScraper
from notifications.flight_change_processor import (
    build_notifications,
    dispatch_notifications,
)
from notifications.push_sender import send_push_notification
from shared.utils import print_summary
from storage.snapshot_store import get_snapshot_store

# Pause between OneSignal calls
SEND_DELAY_SECONDS = 0.1


def run_flight_check() -> int:
    """Main processing function: compare boards, notify, persist."""

    print(f"[{datetime.now()}] Starting flight status check...")

    settings = load_settings()
    store = get_snapshot_store(settings)

    previous = store.load()
    if previous is None:
        print("No previous flight data found, treating this as the first run.")

    try:
        current = FlightScraper(settings.flight_source_url).scrape_flights()
    except FlightScrapeError as e:
        # Keep the stored snapshot so the next run compares against complete data
        print(f"✗ Scrape failed, previous snapshot left untouched: {e}")
        return 1

    notifications = build_notifications(
        previous,
        current,
        catalog=DEFAULT_CATALOG,
        grouping=settings.grouping,
    )
    change_count = sum(n.change_count for n in notifications)
    print(f"Found {change_count} status change(s) in {len(notifications)} group(s)")

    send = partial(
        send_push_notification,
        app_id=settings.onesignal_app_id,
        api_key=settings.onesignal_api_key,
    )
    stats = dispatch_notifications(
        notifications,
        send,
        dry_run=settings.dry_run,
        delay_seconds=SEND_DELAY_SECONDS,
    )

    if settings.dry_run:
        # Unsent changes must still be detected by the next real run
        print("[DRY RUN] Snapshot left unchanged")
    else:
        store.save(current)
        print(f"✓ Saved snapshot with {len(current)} flights")

    print_summary(len(current), change_count, stats)
    return 0


if __name__ == "__main__":
    sys.exit(run_flight_check())
