# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Optional

from fastapi import Request

from eehub.auth.session import SESSION_USER_KEY

SIGNIN_PATH = "/signin"


class SigninRequired(Exception):
    """Raised by require_user; the app turns it into a redirect to /signin."""


def session_id_from_request(request: Request) -> Optional[str]:
    state = request.app.state
    token = request.cookies.get(state.settings.cookie_name, "")
    return state.signer.unsign(token, max_age=state.settings.session_max_age)


def load_identity(request: Request) -> Optional[str]:
    sid = session_id_from_request(request)
    if not sid:
        return None
    data = request.app.state.sessions.get(sid) or {}
    user = str(data.get(SESSION_USER_KEY) or "").strip()
    return user or None


def authorize(request: Request) -> Optional[str]:
    """Return the session identity, or None when the request must be denied.

    Presence check only: the user document is not re-read here.
    """
    if hasattr(request.state, "user"):
        return request.state.user
    return load_identity(request)


def require_user(request: Request) -> str:
    user = authorize(request)
    if user:
        return user
    raise SigninRequired()
