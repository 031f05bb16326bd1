# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Server-side sessions.

The cookie only carries a random session id, signed with itsdangerous so a
tampered or expired cookie is rejected before the store is consulted.
"""

from __future__ import annotations

import secrets
import threading
import time
from typing import Callable, Dict, Optional, Protocol, Tuple

from itsdangerous import BadSignature, URLSafeTimedSerializer

SESSION_USER_KEY = "user"


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


def generate_secret_key() -> str:
    return secrets.token_urlsafe(48)


class SessionStore(Protocol):
    def get(self, session_id: str) -> Optional[dict]:
        ...

    def set(self, session_id: str, data: dict) -> None:
        ...

    def destroy(self, session_id: str) -> None:
        ...


class MemorySessionStore:
    """Process-local session records that expire after ``max_age`` seconds."""

    def __init__(self, max_age: int, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._max_age = max_age
        self._clock = clock
        self._records: Dict[str, Tuple[float, dict]] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> Optional[dict]:
        if not session_id:
            return None
        with self._lock:
            rec = self._records.get(session_id)
            if rec is None:
                return None
            created, data = rec
            if self._clock() - created > self._max_age:
                del self._records[session_id]
                return None
            return dict(data)

    def set(self, session_id: str, data: dict) -> None:
        with self._lock:
            now = self._clock()
            self._prune(now)
            self._records[session_id] = (now, dict(data))

    def destroy(self, session_id: str) -> None:
        with self._lock:
            self._records.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _prune(self, now: float) -> None:
        # Caller holds the lock. Drops sessions whose cookie was never sent back.
        expired = [sid for sid, (created, _) in self._records.items() if now - created > self._max_age]
        for sid in expired:
            del self._records[sid]


class SessionSigner:
    def __init__(self, secret_key: str, salt: str = "eehub.session.v1") -> None:
        if not secret_key:
            raise ValueError("Missing session secret key")
        self._serializer = URLSafeTimedSerializer(secret_key=secret_key, salt=salt)

    def sign(self, session_id: str) -> str:
        return self._serializer.dumps({"sid": session_id})

    def unsign(self, token: str, *, max_age: int) -> Optional[str]:
        if not token:
            return None
        try:
            data = self._serializer.loads(token, max_age=max_age)
        except BadSignature:
            return None
        if not isinstance(data, dict):
            return None
        sid = str(data.get("sid") or "").strip()
        return sid or None
