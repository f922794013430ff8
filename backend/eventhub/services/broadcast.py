"""Broadcast hub — fans change notifications out to live subscribers.

Delivery is best-effort and at-most-once: a subscriber whose sink is
closed, whose send fails, or whose send does not finish within the hub's
send timeout is dropped from the registry and simply misses the update.
Nothing is queued or retried, and no delivery failure ever reaches the
code that triggered the broadcast.
"""
import asyncio
import enum
import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional, Protocol

from starlette.websockets import WebSocket, WebSocketState

from eventhub.config import settings

logger = logging.getLogger(__name__)


class EnvelopeType(str, enum.Enum):
    connected = "CONNECTED"
    event_created = "EVENT_CREATED"
    event_approved = "EVENT_APPROVED"
    event_updated = "EVENT_UPDATED"
    event_deleted = "EVENT_DELETED"
    rsvp_updated = "RSVP_UPDATED"


class Subscriber(Protocol):
    @property
    def is_open(self) -> bool: ...

    async def send(self, message: str) -> None: ...


class WebSocketSubscriber:
    """Adapts a Starlette WebSocket to the ``Subscriber`` protocol."""

    def __init__(self, websocket: WebSocket):
        self.websocket = websocket

    @property
    def is_open(self) -> bool:
        return (
            self.websocket.application_state == WebSocketState.CONNECTED
            and self.websocket.client_state == WebSocketState.CONNECTED
        )

    async def send(self, message: str) -> None:
        await self.websocket.send_text(message)


def make_envelope(kind: EnvelopeType, **payload: Any) -> dict[str, Any]:
    """Build ``{"type": ..., <payload>, "timestamp": ...}``."""
    envelope: dict[str, Any] = {"type": EnvelopeType(kind).value}
    envelope.update(payload)
    envelope["timestamp"] = datetime.now(timezone.utc).isoformat()
    return envelope


class BroadcastHub:
    """Registry of live subscribers; one instance per application."""

    def __init__(self, send_timeout: Optional[float] = None) -> None:
        self.send_timeout = settings.BROADCAST_SEND_TIMEOUT if send_timeout is None else send_timeout
        self._subscribers: set[Subscriber] = set()

    def __len__(self) -> int:
        return len(self._subscribers)

    def __contains__(self, subscriber: object) -> bool:
        return subscriber in self._subscribers

    def register(self, subscriber: Subscriber) -> None:
        self._subscribers.add(subscriber)
        logger.debug("Subscriber registered (%d live)", len(self._subscribers))

    def deregister(self, subscriber: Subscriber) -> None:
        self._subscribers.discard(subscriber)
        logger.debug("Subscriber deregistered (%d live)", len(self._subscribers))

    def snapshot(self) -> tuple[Subscriber, ...]:
        return tuple(self._subscribers)

    async def broadcast(self, kind: EnvelopeType, **payload: Any) -> int:
        """Send one envelope to every open subscriber; return how many got it."""
        message = json.dumps(make_envelope(kind, **payload))
        targets = self.snapshot()
        if not targets:
            return 0

        results = await asyncio.gather(
            *(self._deliver(subscriber, message) for subscriber in targets)
        )
        delivered = sum(1 for ok in results if ok)
        logger.debug("Broadcast %s to %d/%d subscribers", EnvelopeType(kind).value, delivered, len(targets))
        return delivered

    async def _deliver(self, subscriber: Subscriber, message: str) -> bool:
        if not subscriber.is_open:
            self.deregister(subscriber)
            return False
        try:
            await asyncio.wait_for(subscriber.send(message), self.send_timeout)
        except asyncio.TimeoutError:
            logger.debug("Dropping subscriber that did not accept a message within %.2fs", self.send_timeout)
            self.deregister(subscriber)
            return False
        except Exception as exc:
            logger.debug("Dropping subscriber after failed send: %s", exc)
            self.deregister(subscriber)
            return False
        return True
