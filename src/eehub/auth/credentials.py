# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Signup / signin workflow over the ``users`` collection.

Uniqueness of ``email`` and ``userName`` is a check-then-insert: two
concurrent signups with the same values can both pass the checks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from eehub.auth.passwords import hash_password, verify_password
from eehub.auth.session import SESSION_USER_KEY, SessionStore, new_session_id
from eehub.core.results import Lookup
from eehub.store.base import DocumentStore, StoreError

logger = logging.getLogger(__name__)

USERS = "users"


class OutcomeKind(str, Enum):
    CREATED = "created"
    EMAIL_TAKEN = "email_taken"
    USERNAME_TAKEN = "username_taken"
    AUTHENTICATED = "authenticated"
    INVALID_CREDENTIALS = "invalid_credentials"
    STORE_UNAVAILABLE = "store_unavailable"


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    user_name: str = ""
    session_id: str = ""

    @property
    def ok(self) -> bool:
        return self.kind in (OutcomeKind.CREATED, OutcomeKind.AUTHENTICATED)


def register(store: DocumentStore, first_name: str, user_name: str, email: str, password: str) -> Outcome:
    first_name = first_name.strip()
    user_name = user_name.strip()
    email = email.strip()
    password = password.strip()

    try:
        if store.find_by(USERS, "email", email, limit=1):
            return Outcome(OutcomeKind.EMAIL_TAKEN)
        if store.find_by(USERS, "userName", user_name, limit=1):
            return Outcome(OutcomeKind.USERNAME_TAKEN, user_name=user_name)
        store.add(
            USERS,
            {
                "name": first_name,
                "userName": user_name,
                "email": email,
                "password": hash_password(password),
            },
        )
    except StoreError:
        logger.exception("Error creating user %s", user_name)
        return Outcome(OutcomeKind.STORE_UNAVAILABLE)

    logger.info("Registered user %s", user_name)
    return Outcome(OutcomeKind.CREATED, user_name=user_name)


def login(store: DocumentStore, sessions: SessionStore, email: str, password: str) -> Outcome:
    email = email.strip()
    password = password.strip()

    try:
        matches = store.find_by(USERS, "email", email, limit=1)
    except StoreError:
        logger.exception("Error logging in")
        return Outcome(OutcomeKind.STORE_UNAVAILABLE)

    # Unknown email and wrong password must look the same to the caller.
    if not matches:
        return Outcome(OutcomeKind.INVALID_CREDENTIALS)
    user = matches[0].data
    if not verify_password(str(user.get("password") or ""), password):
        return Outcome(OutcomeKind.INVALID_CREDENTIALS)

    user_name = str(user.get("userName") or "")
    sid = new_session_id()
    sessions.set(sid, {SESSION_USER_KEY: user_name})
    logger.info("User %s signed in", user_name)
    return Outcome(OutcomeKind.AUTHENTICATED, user_name=user_name, session_id=sid)


def logout(sessions: SessionStore, session_id: str) -> None:
    if session_id:
        sessions.destroy(session_id)


def find_user(store: DocumentStore, user_name: str) -> Lookup:
    """The user document (fields only, never the password hash) for a session identity."""
    try:
        matches = store.find_by(USERS, "userName", user_name, limit=1)
    except StoreError:
        logger.exception("Error fetching user %s", user_name)
        return Lookup.unavailable()
    if not matches:
        return Lookup.not_found()
    profile = {k: v for k, v in matches[0].data.items() if k != "password"}
    return Lookup.found(profile)
