"""Purchase push notifications via Firebase Cloud Messaging."""

import asyncio
import logging
from dataclasses import dataclass

import firebase_admin
from firebase_admin import credentials, messaging

from app.core.config import settings
from app.db.models.purchase import Purchase

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "purchase-notifications"


@dataclass
class NotificationReport:
    """Delivery outcome of one fan-out."""

    sent: int = 0
    failed: int = 0


def build_purchase_notification(purchase: Purchase) -> tuple[str, str]:
    """Return the (title, body) announcing a purchase or trial start."""
    if purchase.is_trial:
        title = f"New Trial - {purchase.app_name}"
        period = f"{purchase.trial_period} " if purchase.trial_period else ""
        body = f"Started {period}trial for {purchase.kind}"
    else:
        title = f"New Purchase - {purchase.app_name}"
        price = purchase.price_formatted or f"{purchase.price} {purchase.currency_code}"
        body = f"Purchased {purchase.kind} for {price}"
    return title, body


class PushNotifier:
    """Sends purchase notifications to registered device tokens.

    Delivery is best-effort: each token is attempted once, failures are
    logged and never raised. When no Firebase app is configured the
    notifier only logs.
    """

    def __init__(
        self,
        firebase_app: firebase_admin.App | None,
        sound: str = "purchase.wav",
    ) -> None:
        self.firebase_app = firebase_app
        self.sound = sound

    @classmethod
    def from_settings(cls) -> "PushNotifier":
        """Create a notifier from FIREBASE_CREDENTIALS_FILE, if configured."""
        if not settings.FIREBASE_CREDENTIALS_FILE:
            logger.warning("FIREBASE_CREDENTIALS_FILE not set, push notifications disabled")
            return cls(None, sound=settings.PUSH_NOTIFICATION_SOUND)

        try:
            firebase_app = firebase_admin.get_app(FIREBASE_APP_NAME)
        except ValueError:
            firebase_app = firebase_admin.initialize_app(
                credentials.Certificate(settings.FIREBASE_CREDENTIALS_FILE),
                name=FIREBASE_APP_NAME,
            )
        return cls(firebase_app, sound=settings.PUSH_NOTIFICATION_SOUND)

    @property
    def enabled(self) -> bool:
        return self.firebase_app is not None

    def build_message(self, token: str, purchase: Purchase) -> messaging.Message:
        title, body = build_purchase_notification(purchase)
        return messaging.Message(
            token=token,
            notification=messaging.Notification(title=title, body=body),
            apns=messaging.APNSConfig(
                payload=messaging.APNSPayload(aps=messaging.Aps(sound=self.sound)),
            ),
        )

    async def notify_purchase(self, tokens: list[str], purchase: Purchase) -> NotificationReport:
        """Send one notification per token, sequentially."""
        report = NotificationReport()
        if not self.enabled:
            logger.info(f"Skipping {len(tokens)} purchase notifications, push is disabled")
            return report

        for token in tokens:
            message = self.build_message(token, purchase)
            try:
                await asyncio.to_thread(messaging.send, message, app=self.firebase_app)
                report.sent += 1
            except Exception as e:
                report.failed += 1
                logger.warning(f"Push notification failed for token {token[:12]}...: {e}")

        logger.info(
            "Purchase notifications dispatched",
            extra={"sent": report.sent, "failed": report.failed},
        )
        return report

    def close(self) -> None:
        if self.firebase_app is not None:
            firebase_admin.delete_app(self.firebase_app)
            self.firebase_app = None
