"""Tests for purchase push notifications."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from firebase_admin import exceptions as firebase_exceptions

from app.services.push import PushNotifier, build_purchase_notification


def purchase(**overrides):
    fields = {
        "app_name": "Paint",
        "kind": "paint.yearly",
        "price": 39.99,
        "price_formatted": "$39.99",
        "currency_code": "USD",
        "is_trial": False,
        "trial_period": None,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


class TestBuildPurchaseNotification:
    def test_paid_purchase(self):
        assert build_purchase_notification(purchase()) == (
            "New Purchase - Paint",
            "Purchased paint.yearly for $39.99",
        )

    def test_trial(self):
        title, body = build_purchase_notification(purchase(is_trial=True, trial_period="1 week"))

        assert title == "New Trial - Paint"
        assert body == "Started 1 week trial for paint.yearly"

    def test_trial_without_period(self):
        _, body = build_purchase_notification(purchase(is_trial=True))

        assert body == "Started trial for paint.yearly"

    def test_missing_formatted_price_falls_back_to_amount(self):
        _, body = build_purchase_notification(purchase(price_formatted=None, price=4.5, currency_code="GBP"))

        assert body == "Purchased paint.yearly for 4.5 GBP"


class TestPushNotifier:
    @pytest.fixture
    def notifier(self) -> PushNotifier:
        return PushNotifier(MagicMock(name="firebase_app"), sound="purchase.wav")

    def test_message_carries_apns_sound(self, notifier):
        message = notifier.build_message("token-1", purchase())

        assert message.token == "token-1"
        assert message.notification.title == "New Purchase - Paint"
        assert message.apns.payload.aps.sound == "purchase.wav"

    @pytest.mark.anyio
    async def test_sends_one_message_per_token(self, notifier):
        with patch("app.services.push.messaging.send") as send:
            report = await notifier.notify_purchase(["a", "b", "c"], purchase())

        assert send.call_count == 3
        assert [call.args[0].token for call in send.call_args_list] == ["a", "b", "c"]
        assert report.sent == 3
        assert report.failed == 0

    @pytest.mark.anyio
    async def test_failure_for_one_token_does_not_stop_the_rest(self, notifier):
        def send(message, app=None):
            if message.token == "stale":
                raise firebase_exceptions.NotFoundError("Requested entity was not found.")
            return "projects/test/messages/1"

        with patch("app.services.push.messaging.send", side_effect=send) as mock_send:
            report = await notifier.notify_purchase(["a", "stale", "c"], purchase())

        assert mock_send.call_count == 3
        assert report.sent == 2
        assert report.failed == 1

    @pytest.mark.anyio
    async def test_disabled_notifier_sends_nothing(self):
        notifier = PushNotifier(None)

        with patch("app.services.push.messaging.send") as send:
            report = await notifier.notify_purchase(["a"], purchase())

        send.assert_not_called()
        assert report.sent == 0
        assert not notifier.enabled

    def test_from_settings_without_credentials_is_disabled(self):
        with patch("app.services.push.settings") as mock_settings:
            mock_settings.FIREBASE_CREDENTIALS_FILE = None
            mock_settings.PUSH_NOTIFICATION_SOUND = "chime.wav"

            notifier = PushNotifier.from_settings()

        assert not notifier.enabled
        assert notifier.sound == "chime.wav"
