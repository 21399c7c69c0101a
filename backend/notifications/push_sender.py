"""
Push notification sending via the OneSignal REST API.

Handles a single dispatch call per notification. Failures are returned as
result dictionaries instead of being raised.
"""

import os
from typing import Any, Dict, Optional

import requests

from models.notification import PushNotification

ONESIGNAL_API_URL = "https://onesignal.com/api/v1/notifications"

REQUEST_TIMEOUT_SECONDS = 30


def build_payload(notification: PushNotification, app_id: str) -> Dict[str, Any]:
    """Request body for the OneSignal create-notification endpoint."""
    payload: Dict[str, Any] = {
        "app_id": app_id,
        "filters": notification.wire_filters(),
        "headings": {"en": notification.title},
        "contents": {"en": notification.body},
    }
    if notification.sound:
        payload["ios_sound"] = notification.sound
    return payload


def send_push_notification(
    notification: PushNotification,
    app_id: Optional[str] = None,
    api_key: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> Dict[str, Any]:
    """
    Send one notification to OneSignal.

    Args:
        notification: Compiled notification with filters and text
        app_id: OneSignal app id (defaults to ONESIGNAL_APP_ID)
        api_key: OneSignal REST API key (defaults to ONESIGNAL_REST_API_KEY)
        session: Optional requests session to reuse

    Returns:
        Dictionary with 'success' (bool), 'notification_id' (str if success),
        'error' (str if failed)
    """
    app_id = app_id or os.getenv("ONESIGNAL_APP_ID")
    api_key = api_key or os.getenv("ONESIGNAL_REST_API_KEY")

    if not app_id or not api_key:
        return {
            "success": False,
            "error": "ONESIGNAL_APP_ID and ONESIGNAL_REST_API_KEY must be set",
        }

    headers = {
        "Content-Type": "application/json; charset=utf-8",
        "Authorization": f"Basic {api_key}",
    }
    http = session or requests

    try:
        response = http.post(
            ONESIGNAL_API_URL,
            json=build_payload(notification, app_id),
            headers=headers,
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        data = response.json() if response.content else {}

    except requests.HTTPError as e:
        detail = e.response.text if e.response is not None else ""
        return {"success": False, "error": f"{e} {detail}".strip()}

    except (requests.RequestException, ValueError) as e:
        return {"success": False, "error": str(e)}

    # OneSignal reports some rejections (e.g. invalid filters) with a 200
    if data.get("errors") and not data.get("id"):
        return {"success": False, "error": str(data["errors"])}

    return {"success": True, "notification_id": data.get("id")}
