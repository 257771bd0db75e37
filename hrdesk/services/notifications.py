"""Password recovery notification channel. Delivery is simulated by logging."""

import logging

from hrdesk.models.user import User

logger = logging.getLogger(__name__)


class RecoveryNotifier:
    """Sends the recovery notice for an existing account."""

    def send_recovery(self, user: User) -> None:
        # No mail transport is wired up; record the simulated delivery only.
        logger.info(
            "Simulated password recovery notice",
            extra={"username": user.username, "display_name": user.display_name},
        )


def get_recovery_notifier() -> RecoveryNotifier:
    """Dependency returning the notifier; tests override it."""
    return RecoveryNotifier()
