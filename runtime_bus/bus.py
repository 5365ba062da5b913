from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from .messages import MessageEnvelope

logger = logging.getLogger(__name__)

EventHandler = Callable[[MessageEnvelope], None]
RequestHandler = Callable[[MessageEnvelope], Dict[str, object]]


def _iso_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class RuntimeBus:
    """In-process pub/sub and synchronous request-reply bus.

    The bus is how the details screen reaches platform services (package
    registry, device policy, users, storage stats) and how it announces
    decisions and close requests.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._subscribers: Dict[str, tuple[str, EventHandler]] = {}
        self._topic_index: Dict[str, List[str]] = {}
        self._request_handlers: Dict[str, RequestHandler] = {}
        self._last_envelope: Dict[str, MessageEnvelope] = {}

    def subscribe(self, topic: str, handler: EventHandler, replay_last: bool = False) -> str:
        sub_id = str(uuid.uuid4())
        with self._lock:
            self._subscribers[sub_id] = (topic, handler)
            self._topic_index.setdefault(topic, []).append(sub_id)
            last = self._last_envelope.get(topic) if replay_last else None
        if last is not None:
            self._deliver(handler, last)
        return sub_id

    def unsubscribe(self, sub_id: str) -> None:
        with self._lock:
            topic, _ = self._subscribers.pop(sub_id, (None, None))
            if topic and topic in self._topic_index:
                ids = [sid for sid in self._topic_index[topic] if sid != sub_id]
                if ids:
                    self._topic_index[topic] = ids
                else:
                    self._topic_index.pop(topic, None)

    def register_handler(self, topic: str, handler: RequestHandler) -> None:
        with self._lock:
            self._request_handlers[topic] = handler

    def unregister_handler(self, topic: str) -> None:
        with self._lock:
            self._request_handlers.pop(topic, None)

    def publish(
        self,
        topic: str,
        payload: Optional[Dict[str, object]],
        source: str,
        trace_id: Optional[str] = None,
    ) -> MessageEnvelope:
        envelope = self._build_envelope(topic, payload, source, trace_id)
        with self._lock:
            self._last_envelope[topic] = envelope
        for handler in self._copy_handlers(topic):
            self._deliver(handler, envelope)
        return envelope

    def request(
        self,
        topic: str,
        payload: Optional[Dict[str, object]],
        source: str,
        trace_id: Optional[str] = None,
    ) -> Dict[str, object]:
        with self._lock:
            handler = self._request_handlers.get(topic)
        if handler is None:
            return {"ok": False, "error": "no_handler"}
        envelope = self._build_envelope(topic, payload, source, trace_id, target="request")
        try:
            result = handler(envelope)
        except Exception as exc:
            logger.error("runtime_bus request handler error on %s: %s", topic, exc)
            return {"ok": False, "error": "handler_error"}
        if not isinstance(result, dict):
            return {"ok": False, "error": "invalid_response"}
        return result

    def _deliver(self, handler: EventHandler, envelope: MessageEnvelope) -> None:
        try:
            handler(envelope)
        except Exception as exc:
            logger.error("runtime_bus publish handler error on %s: %s", envelope.type, exc)

    def _build_envelope(
        self,
        topic: str,
        payload: Optional[Dict[str, object]],
        source: str,
        trace_id: Optional[str],
        target: Optional[str] = None,
    ) -> MessageEnvelope:
        body = payload if isinstance(payload, dict) else {}
        return MessageEnvelope(
            msg_id=str(uuid.uuid4()),
            type=topic,
            timestamp=_iso_timestamp(),
            source=source,
            payload=dict(body),
            trace_id=trace_id or str(uuid.uuid4()),
            target=target,
        )

    def _copy_handlers(self, topic: str) -> List[EventHandler]:
        with self._lock:
            sub_ids = list(self._topic_index.get(topic, ()))
            return [self._subscribers[sid][1] for sid in sub_ids if sid in self._subscribers]
