"""Submission notification events and an in-memory dispatcher.

Notifications are fire-and-forget from the orchestrator's point of view: the
host application subscribes to them, the core never reads them back.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, Final, Protocol, Union
import xml.etree.ElementTree as element_tree


@dataclass(frozen=True)
class EntrySubmitted:
    """Queue entry accepted by the JMF server.

    Attributes:
        outgoing_message: Serialized JMF command that was sent.
        response: Parsed reply root element.
    """

    outgoing_message: str
    response: element_tree.Element


@dataclass(frozen=True)
class EntryFailed:
    """Queue entry submission failed.

    Attributes:
        outgoing_message: Serialized JMF command that was sent.
        error_detail: Human-readable failure description.
        error: Raised exception, re-raised to the caller after publishing.
    """

    outgoing_message: str
    error_detail: str
    error: Exception


@dataclass(frozen=True)
class ReturnJmfReceived:
    """JMF signal or command posted back by the server to the return URL.

    Attributes:
        message: Raw XML body received.
        message_type: `Type` attribute of the first message element, if any.
        queue_entry_id: `QueueEntryID` found in the message, if any.
    """

    message: str
    message_type: str | None
    queue_entry_id: str | None


NotificationEvent = Union[EntrySubmitted, EntryFailed, ReturnJmfReceived]


class NotificationSinkPort(Protocol):
    """Port definition for publishing submission notifications to the host application."""

    def notification_publish(self, event: NotificationEvent) -> None:
        """Publish one notification event.

        Args:
            event: Notification payload.

        Returns:
            None: Publishing has no return value.

        Raises:
            RuntimeError: Raised when a subscriber fails.
        """


DEFAULT_NOTIFICATION_HISTORY_LIMIT: Final[int] = 1000


class InMemoryNotificationDispatcher(NotificationSinkPort):
    """Dispatcher that keeps recent events and fans them out to subscribers.

    Only the newest `history_limit` events are kept; older ones are discarded.
    """

    def __init__(self, history_limit: int = DEFAULT_NOTIFICATION_HISTORY_LIMIT):
        """Initialize subscriber list and bounded event history.

        Args:
            history_limit: Maximum number of events kept; `0` keeps none.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when history_limit is negative.
        """

        if history_limit < 0:
            raise ValueError("history_limit must be >= 0")
        self._subscribers: list[Callable[[NotificationEvent], None]] = []
        self._published_events: deque[NotificationEvent] = deque(maxlen=history_limit)

    def notification_subscribe(self, listener: Callable[[NotificationEvent], None]) -> None:
        """Register a listener called for every published event, in subscription order."""
        self._subscribers.append(listener)

    def notification_publish(self, event: NotificationEvent) -> None:
        """Record the event and call every subscriber; listener errors propagate."""
        self._published_events.append(event)
        for listener in list(self._subscribers):
            listener(event)

    def notification_published_events(self) -> list[NotificationEvent]:
        """Return a copy of the retained events, oldest first."""
        return list(self._published_events)
