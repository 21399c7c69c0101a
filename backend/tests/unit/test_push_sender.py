"""
Unit tests for notifications/push_sender.py

Tests the OneSignal request payload and error handling.
"""

import unittest
from unittest.mock import patch

import requests

from models.audience import TagCondition, OR
from models.notification import PushNotification
from notifications.push_sender import (
    ONESIGNAL_API_URL,
    build_payload,
    send_push_notification,
)
from tests.fixtures.mock_helpers import create_mock_requests_response


def _notification(**overrides) -> PushNotification:
    data = {
        "group_key": "TK",
        "airline_codes": ["TK"],
        "filters": [TagCondition.equals("all_flights"), OR, TagCondition.not_exists("TK")],
        "title": "✈️ Departure Update",
        "body": "TK827 status: Delayed",
        "sound": "departure_sound.aiff",
        "category": "departure",
        "change_count": 1,
    }
    data.update(overrides)
    return PushNotification(**data)


class TestBuildPayload(unittest.TestCase):
    """Tests for build_payload()"""

    def test_payload_fields(self):
        payload = build_payload(_notification(), "app-123")

        self.assertEqual(payload["app_id"], "app-123")
        self.assertEqual(payload["headings"], {"en": "✈️ Departure Update"})
        self.assertEqual(payload["contents"], {"en": "TK827 status: Delayed"})
        self.assertEqual(payload["ios_sound"], "departure_sound.aiff")
        self.assertEqual(
            payload["filters"],
            [
                {"field": "tag", "key": "all_flights", "relation": "=", "value": "1"},
                {"operator": "OR"},
                {"field": "tag", "key": "TK", "relation": "not_exists"},
            ],
        )

    def test_no_sound_omitted(self):
        payload = build_payload(_notification(sound=None), "app-123")

        self.assertNotIn("ios_sound", payload)


class TestSendPushNotification(unittest.TestCase):
    """Tests for send_push_notification()"""

    @patch("notifications.push_sender.requests.post")
    def test_success(self, mock_post):
        mock_post.return_value = create_mock_requests_response(
            json_data={"id": "notif-1", "recipients": 3}
        )

        result = send_push_notification(_notification(), app_id="app", api_key="key")

        self.assertEqual(result, {"success": True, "notification_id": "notif-1"})
        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], ONESIGNAL_API_URL)
        self.assertEqual(kwargs["headers"]["Authorization"], "Basic key")
        self.assertEqual(kwargs["json"]["app_id"], "app")

    @patch.dict("os.environ", {}, clear=True)
    @patch("notifications.push_sender.requests.post")
    def test_missing_credentials(self, mock_post):
        result = send_push_notification(_notification())

        self.assertFalse(result["success"])
        self.assertIn("ONESIGNAL_APP_ID", result["error"])
        mock_post.assert_not_called()

    @patch("notifications.push_sender.requests.post")
    def test_http_error_returned(self, mock_post):
        mock_post.return_value = create_mock_requests_response(
            status_code=400,
            text='{"errors": ["bad filter"]}',
            raise_error=requests.HTTPError("400 Client Error"),
        )

        result = send_push_notification(_notification(), app_id="app", api_key="key")

        self.assertFalse(result["success"])
        self.assertIn("400 Client Error", result["error"])

    @patch("notifications.push_sender.requests.post")
    def test_connection_error_returned(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("connection refused")

        result = send_push_notification(_notification(), app_id="app", api_key="key")

        self.assertEqual(result, {"success": False, "error": "connection refused"})

    @patch("notifications.push_sender.requests.post")
    def test_errors_in_ok_response(self, mock_post):
        mock_post.return_value = create_mock_requests_response(
            json_data={"errors": ["All included players are not subscribed"]}
        )

        result = send_push_notification(_notification(), app_id="app", api_key="key")

        self.assertFalse(result["success"])
        self.assertIn("not subscribed", result["error"])


if __name__ == "__main__":
    unittest.main()
