from __future__ import annotations

from collections import deque
from datetime import datetime, timezone
import logging
from typing import Callable, Deque, Dict, List

from cavern.constants import MAX_SAVE_MSG

LOG = logging.getLogger(__name__)

# Events kept for a renderer that has not drained the bus yet.
MAX_QUEUED_EVENTS = 256


class FeedbackBus:
    """Message event bus that keeps the recent message history."""

    def __init__(self, history_size: int = MAX_SAVE_MSG, queue_size: int = MAX_QUEUED_EVENTS) -> None:
        self._queue: Deque[Dict[str, str]] = deque(maxlen=queue_size)
        self._subs: List[Callable[[Dict[str, str]], None]] = []
        self._history: Deque[str] = deque(maxlen=history_size)

    def push(self, kind: str, text: str, **meta) -> None:
        event: Dict[str, str] = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "kind": kind,
            "text": text,
        }
        if meta:
            event.update(meta)
        self._queue.append(event)
        if kind.startswith("MSG/"):
            self._history.append(text)
        for fn in self._subs:
            try:
                fn(event)
            except Exception:
                LOG.exception("feedback subscriber failed for %s", kind)

    def drain(self) -> List[Dict[str, str]]:
        events = list(self._queue)
        self._queue.clear()
        return events

    def history(self) -> List[str]:
        return list(self._history)

    def subscribe(self, listener: Callable[[Dict[str, str]], None]) -> None:
        self._subs.append(listener)
