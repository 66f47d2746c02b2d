"""Turn change notifications into events written to a sink."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Callable, Protocol

from address_watch.models.address import ChangeDetails
from address_watch.models.base import Event

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    def send(self, topic: str, record: Any) -> None: ...

    def close(self) -> None: ...


class ChangeEventPublisher:
    """Publish ``ChangeDetails`` as ``Event`` envelopes.

    Each tracked field gets its own topic: ``{topic_prefix}.{field}-changes``.

    Parameters
    ----------
    sink : EventSink
        Destination (console, JSON Lines file, Kafka).
    topic_prefix : str
        Topic namespace, e.g. ``"dev.address"``.
    source : str
        Event source name.
    subject : str
        Visitor or session the events belong to; used as the Kafka key.
    """

    def __init__(
        self,
        sink: EventSink,
        topic_prefix: str = "dev.address",
        source: str = "address-watch",
        subject: str = "anonymous",
    ) -> None:
        self.sink = sink
        self.topic_prefix = topic_prefix
        self.source = source
        self.subject = subject
        self.published = 0

    def topic_for(self, kind: str) -> str:
        return f"{self.topic_prefix}.{kind}-changes"

    def build_event(self, details: ChangeDetails, subject: str | None = None) -> Event:
        return Event(
            event_id=uuid.uuid4().hex,
            event_type=f"address.{details.field}_changed",
            event_time=details.timestamp,
            source=self.source,
            subject=subject or self.subject,
            data=details.as_dict(),
        )

    def publish(self, details: ChangeDetails, subject: str | None = None) -> Event:
        """Write one change event and return it."""
        event = self.build_event(details, subject)
        self.sink.send(self.topic_for(details.field), event)
        self.published += 1
        logger.debug("Published %s (%s)", event.event_type, event.event_id)
        return event

    def callback_for(self, kind: str) -> Callable[[ChangeDetails], None]:
        """Return a detector callback publishing ``kind`` changes."""

        def _publish(details: ChangeDetails) -> None:
            if details.field != kind:
                logger.warning("Callback for %s received %s change", kind, details.field)
            self.publish(details)

        return _publish
