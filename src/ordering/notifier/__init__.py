"""Notifier factory.

Uses the in-memory FakeNotifier by default; a real email or SMS adapter
can be installed with set_notifier() at application start.
"""

from ordering.notifier.fake_adapter import FakeNotifier
from ordering.notifier.port import NotificationPort

_current_notifier: NotificationPort | None = None


def get_notifier() -> NotificationPort:
    """Return the current notifier. Defaults to FakeNotifier."""
    global _current_notifier
    if _current_notifier is None:
        _current_notifier = FakeNotifier()
    return _current_notifier


def set_notifier(notifier: NotificationPort) -> None:
    """Override the active notifier (useful for tests)."""
    global _current_notifier
    _current_notifier = notifier


def reset_notifier() -> None:
    """Reset to default notifier."""
    global _current_notifier
    _current_notifier = None
