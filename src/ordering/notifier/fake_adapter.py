"""Fake notifier: records sent messages for test assertions."""

from uuid import uuid4

from ordering.notifier.port import NotificationPort


class FakeNotifier(NotificationPort):
    def __init__(self):
        self.sent_messages: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Notification delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Notification delivery failed"):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, recipient_id: str, subject: str, body: str) -> dict:
        if not self.should_succeed:
            return {
                "message_id": None,
                "status": "failed",
                "error": self.failure_reason,
            }

        message_id = f"msg-{uuid4().hex[:12]}"
        self.sent_messages.append(
            {
                "message_id": message_id,
                "recipient_id": recipient_id,
                "subject": subject,
                "body": body,
            }
        )
        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        """Clear sent messages (useful between tests)."""
        self.sent_messages.clear()
        self.should_succeed = True
        self.failure_reason = "Notification delivery failed"
