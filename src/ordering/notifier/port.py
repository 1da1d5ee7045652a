"""Notification port: outbound messages to buyers."""

from abc import ABC, abstractmethod


class NotificationPort(ABC):
    """Abstract interface for notification dispatch adapters."""

    @abstractmethod
    def send(self, recipient_id: str, subject: str, body: str) -> dict:
        """Send a message to a user.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
