"""
Runtime configuration for the flight notifier.

Values are read from the environment (a local .env file is loaded first).
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

SNAPSHOT_BACKENDS = ("file", "supabase")
GROUPING_MODES = ("per_airline", "combined")

DEFAULT_FLIGHT_SOURCE_URL = "https://www.beirutairport.gov.lb/_flight.php"


class NotifierSettings(BaseModel):
    """Settings for one batch run."""

    onesignal_app_id: str | None = None
    onesignal_api_key: str | None = None
    flight_data_file: str = "flight_data.json"
    snapshot_backend: str = "file"
    grouping: str = "per_airline"
    dry_run: bool = False
    flight_source_url: str = DEFAULT_FLIGHT_SOURCE_URL


def load_settings() -> NotifierSettings:
    """
    Build settings from environment variables.

    Raises:
        ValueError: If SNAPSHOT_BACKEND or NOTIFICATION_GROUPING has an unknown value
    """
    snapshot_backend = os.getenv("SNAPSHOT_BACKEND", "file").strip().lower()
    if snapshot_backend not in SNAPSHOT_BACKENDS:
        raise ValueError(
            f"SNAPSHOT_BACKEND must be one of {', '.join(SNAPSHOT_BACKENDS)}"
        )

    grouping = os.getenv("NOTIFICATION_GROUPING", "per_airline").strip().lower()
    if grouping not in GROUPING_MODES:
        raise ValueError(
            f"NOTIFICATION_GROUPING must be one of {', '.join(GROUPING_MODES)}"
        )

    return NotifierSettings(
        onesignal_app_id=os.getenv("ONESIGNAL_APP_ID"),
        onesignal_api_key=os.getenv("ONESIGNAL_REST_API_KEY"),
        flight_data_file=os.getenv("FLIGHT_DATA_FILE", "flight_data.json"),
        snapshot_backend=snapshot_backend,
        grouping=grouping,
        dry_run=os.getenv("DRY_RUN", "false").lower() == "true",
        flight_source_url=os.getenv("FLIGHT_SOURCE_URL", DEFAULT_FLIGHT_SOURCE_URL),
    )
