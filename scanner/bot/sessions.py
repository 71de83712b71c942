"""Per-chat bot sessions: which network the user picked before pasting an address."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from scanner.models.token import Network


@dataclass
class Session:
    network: Network
    updated_at: float


class SessionStore:
    """Chat-id keyed sessions with expiry. Clock is injectable for tests."""

    def __init__(self, ttl_sec: float, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl_sec
        self._clock = clock
        self._sessions: dict[int, Session] = {}

    def set_network(self, chat_id: int, network: Network) -> None:
        self.purge_expired()
        self._sessions[chat_id] = Session(network=network, updated_at=self._clock())

    def get_network(self, chat_id: int) -> Network | None:
        session = self._sessions.get(chat_id)
        if session is None:
            return None
        if self._clock() - session.updated_at > self._ttl:
            del self._sessions[chat_id]
            return None
        return session.network

    def clear(self, chat_id: int) -> None:
        self._sessions.pop(chat_id, None)

    def purge_expired(self) -> int:
        """Drop sessions past their TTL. Called on every write."""
        now = self._clock()
        expired = [cid for cid, s in self._sessions.items() if now - s.updated_at > self._ttl]
        for cid in expired:
            del self._sessions[cid]
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)
