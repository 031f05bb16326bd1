# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

_TRUTHY = {"1", "true", "yes", "y"}


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False
    # Empty means "generate a random key per process".
    secret_key: str = ""
    session_salt: str = "eehub.session.v1"
    session_max_age: int = 28800  # 8 hours
    cookie_name: str = "eeh_session"
    cookie_secure: bool = False
    store_backend: str = "firestore"
    firebase_credentials: str = ""
    seed_file: str = ""
    log_level: str = "INFO"

    def cookie_settings(self) -> dict:
        return {"httponly": True, "samesite": "lax", "secure": self.cookie_secure}


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environment variables (``os.environ`` by default)."""
    env = os.environ if env is None else env
    backend = (env.get("EEH_STORE") or "firestore").strip().lower()
    if backend not in {"firestore", "memory"}:
        raise ValueError(f"Unknown EEH_STORE backend: {backend!r}")
    return Settings(
        host=env.get("EEH_HOST", "0.0.0.0"),
        port=int(env.get("PORT") or env.get("EEH_PORT") or "3000"),
        reload=_flag(env.get("EEH_RELOAD")),
        secret_key=env.get("SECRET_KEY") or env.get("EEH_SECRET_KEY") or "",
        session_salt=env.get("EEH_SESSION_SALT", "eehub.session.v1"),
        session_max_age=int(env.get("EEH_SESSION_MAX_AGE", "28800")),
        cookie_name=env.get("EEH_COOKIE_NAME", "eeh_session"),
        cookie_secure=_flag(env.get("EEH_COOKIE_SECURE")),
        store_backend=backend,
        firebase_credentials=(
            env.get("EEH_FIREBASE_CREDENTIALS") or env.get("GOOGLE_APPLICATION_CREDENTIALS") or ""
        ),
        seed_file=env.get("EEH_SEED_FILE", ""),
        log_level=(env.get("EEH_LOG_LEVEL") or "INFO").upper(),
    )
