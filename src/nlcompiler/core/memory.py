# src/nlcompiler/core/memory.py
"""
State that outlives a single compilation.

ContextMemory - last few (subject, action) pairs, read for pronoun resolution
Analytics     - running totals across compilations
Session       - both of the above, owned by the caller
SessionStore  - sessions persisted in Redis, for the API
"""

import json
import threading
import time
from collections import deque
from dataclasses import dataclass, field


DEFAULT_CAPACITY = 5


@dataclass
class ContextEntry:
    subject: str | None
    action: str | None
    timestamp: int = field(default_factory=lambda: int(time.time() * 1000))

    def to_dict(self) -> dict:
        return {
            "subject": self.subject,
            "action": self.action,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ContextEntry":
        return cls(
            subject=data.get("subject"),
            action=data.get("action"),
            timestamp=data.get("timestamp", 0),
        )


class ContextMemory:
    """Bounded FIFO of ContextEntry; the oldest entry is evicted first."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY, entries: list[ContextEntry] | None = None):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._entries: deque[ContextEntry] = deque(entries or [], maxlen=capacity)
        self._lock = threading.Lock()

    def append(self, entry: ContextEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def last(self) -> ContextEntry | None:
        return self._entries[-1] if self._entries else None

    def recent(self, n: int) -> list[ContextEntry]:
        if n <= 0:
            return []
        return list(self._entries)[-n:]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(list(self._entries))

    def to_list(self) -> list[dict]:
        return [e.to_dict() for e in self._entries]

    @classmethod
    def from_list(cls, data: list[dict], capacity: int = DEFAULT_CAPACITY) -> "ContextMemory":
        return cls(capacity, [ContextEntry.from_dict(d) for d in data])


@dataclass
class Analytics:
    total_compilations: int = 0
    avg_time_ms: float = 0.0
    success_rate: float = 100.0  # percent

    def record(self, duration_ms: float, success: bool) -> None:
        n = self.total_compilations
        self.avg_time_ms = (self.avg_time_ms * n + duration_ms) / (n + 1)
        self.success_rate = (self.success_rate * n + (100.0 if success else 0.0)) / (n + 1)
        self.total_compilations = n + 1

    def to_dict(self) -> dict:
        return {
            "total_compilations": self.total_compilations,
            "avg_time_ms": self.avg_time_ms,
            "success_rate": self.success_rate,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Analytics":
        return cls(
            total_compilations=data.get("total_compilations", 0),
            avg_time_ms=data.get("avg_time_ms", 0.0),
            success_rate=data.get("success_rate", 100.0),
        )


@dataclass
class Session:
    memory: ContextMemory = field(default_factory=ContextMemory)
    analytics: Analytics = field(default_factory=Analytics)

    def to_dict(self) -> dict:
        return {
            "context_memory": self.memory.to_list(),
            "capacity": self.memory.capacity,
            "analytics": self.analytics.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Session":
        capacity = data.get("capacity", DEFAULT_CAPACITY)
        return cls(
            memory=ContextMemory.from_list(data.get("context_memory", []), capacity),
            analytics=Analytics.from_dict(data.get("analytics", {})),
        )


class SessionStore:
    """Stores sessions in Redis."""

    def __init__(self, client, capacity: int = DEFAULT_CAPACITY):
        self.client = client
        self.capacity = capacity

    def _key(self, session_id: str) -> str:
        return f"nlc:session:{session_id}"

    def exists(self, session_id: str) -> bool:
        return bool(self.client.exists(self._key(session_id)))

    def get(self, session_id: str) -> Session:
        """Load a session; unknown ids start empty."""
        data = self.client.get(self._key(session_id))
        if not data:
            return Session(memory=ContextMemory(self.capacity))
        return Session.from_dict(json.loads(data))

    def save(self, session_id: str, session: Session) -> None:
        self.client.set(self._key(session_id), json.dumps(session.to_dict()))

    def delete(self, session_id: str) -> None:
        self.client.delete(self._key(session_id))
