"""EventBus -- thread-safe pub/sub for simulation events.

The SimulationClock publishes every discrete gameplay event here
(``inmate_caught_by_light``, ``inmates_delivered``, ``game_over`` ...).
A renderer or HUD running on another thread subscribes and drains its
queue once per frame; the simulation itself never reads from the bus.
"""

from __future__ import annotations

import queue
import threading


class EventBus:
    """Simple thread-safe pub/sub for pushing events to subscribers."""

    def __init__(self, maxsize: int = 100) -> None:
        self._lock = threading.Lock()
        self._maxsize = maxsize
        self._subscribers: list[tuple[queue.Queue, frozenset[str] | None]] = []

    def subscribe(self, event_types: set[str] | None = None) -> queue.Queue:
        """Subscribe to events. Returns a Queue that receives matching events.

        With *event_types* set, only messages whose ``type`` is in the set
        are delivered; otherwise every event is.
        """
        q: queue.Queue = queue.Queue(maxsize=self._maxsize)
        types = frozenset(event_types) if event_types else None
        with self._lock:
            self._subscribers.append((q, types))
        return q

    def unsubscribe(self, q: queue.Queue) -> None:
        with self._lock:
            self._subscribers = [(s, t) for s, t in self._subscribers if s is not q]

    def publish(self, event_type: str, data: dict | None = None) -> None:
        msg = {"type": event_type}
        if data is not None:
            msg["data"] = data
        with self._lock:
            for q, types in self._subscribers:
                if types is not None and event_type not in types:
                    continue
                try:
                    q.put_nowait(msg)
                except queue.Full:
                    # Drop oldest message so the newest outcome is never lost
                    try:
                        q.get_nowait()
                    except queue.Empty:
                        pass
                    try:
                        q.put_nowait(msg)
                    except queue.Full:
                        pass

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)
