from datetime import datetime

from models.notification import DispatchStats


def print_summary(flights: int, changes: int, stats: DispatchStats) -> None:
    """Print run summary."""
    print(f"\n{'=' * 60}")
    print(f"[{datetime.now()}] Flight Check Complete!")
    print(f"{'=' * 60}")
    print(f"Flights on board:  {flights}")
    print(f"Status changes:    {changes}")
    print(f"✓ Sent:            {stats.sent}")
    print(f"✗ Failed:          {stats.failed}")
    print(f"⊘ Skipped (dry):   {stats.skipped}")
    print(f"{'=' * 60}\n")
