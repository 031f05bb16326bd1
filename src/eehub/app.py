# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Type

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, ValidationError
from starlette.concurrency import run_in_threadpool

from eehub.auth import credentials
from eehub.auth.credentials import OutcomeKind
from eehub.auth.gate import SIGNIN_PATH, SigninRequired, load_identity, require_user, session_id_from_request
from eehub.auth.session import MemorySessionStore, SessionSigner, SessionStore, generate_secret_key
from eehub.config import Settings, load_settings
from eehub.core.results import LookupStatus
from eehub.schemas import SigninForm, SignupForm
from eehub.services import content_service
from eehub.services.content_service import ACTIVITIES, ARTICLES, FORUM
from eehub.services.seed_service import load_seed_file, seed_store
from eehub.store import DocumentStore, build_store

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
SITE_TITLE = "Environmental Education Hub"
INVALID_LOGIN = "Invalid username or password"

templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def _render(request: Request, template_name: str, ctx: Optional[dict] = None):
    """TemplateResponse wrapper injecting global UI state."""
    base_ctx = {
        "site_title": SITE_TITLE,
        "current_user": getattr(request.state, "user", None),
    }
    return templates.TemplateResponse(request, template_name, {**base_ctx, **(ctx or {})})


def _internal_error() -> PlainTextResponse:
    return PlainTextResponse("Internal Server Error", status_code=500)


def _bad_request(exc: ValidationError) -> PlainTextResponse:
    fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
    return PlainTextResponse(f"Bad Request: invalid {', '.join(fields) or 'body'}", status_code=400)


async def _read_body(request: Request, model: Type[BaseModel]) -> BaseModel:
    """Parse a form-encoded or JSON body into ``model``; raises ValidationError."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError:
            data = None
    else:
        data = dict(await request.form())
    if not isinstance(data, dict):
        data = {}
    return model.model_validate(data)


def _store(request: Request) -> DocumentStore:
    return request.app.state.store


def _sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


def create_app(
    settings: Optional[Settings] = None,
    *,
    store: Optional[DocumentStore] = None,
    sessions: Optional[SessionStore] = None,
) -> FastAPI:
    settings = settings or load_settings()

    secret = settings.secret_key
    if not secret:
        logger.warning("SECRET_KEY not set; using a random key, sessions end on restart")
        secret = generate_secret_key()

    if store is None:
        store = build_store(settings)
        if settings.seed_file and settings.store_backend == "memory":
            seed_store(store, load_seed_file(Path(settings.seed_file)))
        elif settings.seed_file:
            logger.warning("EEH_SEED_FILE ignored for the %s store; use scripts/seed_content.py", settings.store_backend)

    app = FastAPI(title=SITE_TITLE)
    app.state.settings = settings
    app.state.store = store
    app.state.sessions = sessions if sessions is not None else MemorySessionStore(settings.session_max_age)
    app.state.signer = SessionSigner(secret, salt=settings.session_salt)

    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

    @app.middleware("http")
    async def _auth_middleware(request: Request, call_next):
        request.state.user = load_identity(request)
        return await call_next(request)

    @app.exception_handler(SigninRequired)
    async def _signin_required(request: Request, exc: SigninRequired):
        return RedirectResponse(url=SIGNIN_PATH, status_code=303)

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _internal_error()

    _register_routes(app)
    return app


def _register_routes(app: FastAPI) -> None:
    # ------------------ Public ------------------

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request):
        return _render(request, "index.html", {"title": SITE_TITLE})

    @app.get("/signup", response_class=HTMLResponse)
    def signup_get(request: Request):
        return _render(request, "signup.html", {"registered": None, "useregistered": None})

    @app.post("/signup")
    async def signup_post(request: Request):
        try:
            form = await _read_body(request, SignupForm)
        except ValidationError as e:
            return _bad_request(e)

        outcome = await run_in_threadpool(
            credentials.register,
            _store(request),
            form.first_name,
            form.user_name,
            form.email,
            form.password,
        )
        if outcome.kind is OutcomeKind.EMAIL_TAKEN:
            return _render(request, "signup.html", {"registered": "already registered", "useregistered": None})
        if outcome.kind is OutcomeKind.USERNAME_TAKEN:
            return _render(request, "signup.html", {"registered": None, "useregistered": "username exists"})
        if outcome.kind is OutcomeKind.STORE_UNAVAILABLE:
            return _internal_error()
        return _render(request, "signin.html", {"logout": None})

    @app.get("/signin", response_class=HTMLResponse)
    def signin_get(request: Request):
        return _render(request, "signin.html", {"logout": None})

    @app.post("/signin")
    async def signin_post(request: Request):
        try:
            form = await _read_body(request, SigninForm)
        except ValidationError as e:
            return _bad_request(e)

        sessions = _sessions(request)
        outcome = await run_in_threadpool(credentials.login, _store(request), sessions, form.email, form.password)
        if outcome.kind is OutcomeKind.STORE_UNAVAILABLE:
            return _internal_error()
        if outcome.kind is not OutcomeKind.AUTHENTICATED:
            return PlainTextResponse(INVALID_LOGIN)

        # Never carry a pre-login session id across authentication.
        previous = session_id_from_request(request)
        if previous:
            credentials.logout(sessions, previous)

        settings: Settings = request.app.state.settings
        resp = RedirectResponse(url="/home", status_code=303)
        resp.set_cookie(
            settings.cookie_name,
            request.app.state.signer.sign(outcome.session_id),
            max_age=settings.session_max_age,
            **settings.cookie_settings(),
        )
        return resp

    @app.get("/logout", response_class=HTMLResponse)
    def logout(request: Request):
        sid = session_id_from_request(request)
        if sid:
            credentials.logout(_sessions(request), sid)
        request.state.user = None
        resp = _render(request, "signin.html", {"logout": "Logout Successful"})
        resp.delete_cookie(request.app.state.settings.cookie_name)
        return resp

    # ------------------ Gated ------------------

    @app.get("/home", response_class=HTMLResponse)
    def home(request: Request, user: str = Depends(require_user)):
        found = credentials.find_user(_store(request), user)
        if found.status is LookupStatus.STORE_UNAVAILABLE:
            return _internal_error()
        if not found.ok:
            return RedirectResponse(url=SIGNIN_PATH, status_code=303)
        return _render(request, "home.html", {"user": user, "welcomename": found.value.get("name", "")})

    @app.get("/profile", response_class=HTMLResponse)
    def profile(request: Request, user: str = Depends(require_user)):
        found = credentials.find_user(_store(request), user)
        if found.status is LookupStatus.STORE_UNAVAILABLE:
            return _internal_error()
        if not found.ok:
            return RedirectResponse(url=SIGNIN_PATH, status_code=303)
        return _render(request, "profile.html", {"user": user, "profile": found.value})

    @app.get("/about", response_class=HTMLResponse)
    def about(request: Request, user: str = Depends(require_user)):
        return _render(request, "about.html")

    @app.get("/contact", response_class=HTMLResponse)
    def contact(request: Request, user: str = Depends(require_user)):
        return _render(request, "contact.html")

    def _listing(request: Request, collection: str, template_name: str, key: str):
        found = content_service.list_items(_store(request), collection)
        if not found.ok:
            return _internal_error()
        return _render(request, template_name, {key: found.value})

    def _detail(request: Request, collection: str, item_id: str, template_name: str, key: str, missing: str):
        found = content_service.get_item(_store(request), collection, item_id)
        if found.status is LookupStatus.NOT_FOUND:
            return PlainTextResponse(missing, status_code=404)
        if not found.ok:
            return _internal_error()
        return _render(request, template_name, {key: found.value})

    @app.get("/articles", response_class=HTMLResponse)
    def articles(request: Request, user: str = Depends(require_user)):
        return _listing(request, ARTICLES, "articles/index.html", "articles")

    @app.get("/articles/{item_id}", response_class=HTMLResponse)
    def article(request: Request, item_id: str, user: str = Depends(require_user)):
        return _detail(request, ARTICLES, item_id, "articles/show.html", "article", "Article not found")

    @app.get("/activities", response_class=HTMLResponse)
    def activities(request: Request, user: str = Depends(require_user)):
        return _listing(request, ACTIVITIES, "activities/index.html", "activities")

    @app.get("/activities/{item_id}", response_class=HTMLResponse)
    def activity(request: Request, item_id: str, user: str = Depends(require_user)):
        return _detail(request, ACTIVITIES, item_id, "activities/show.html", "activity", "Activity not found")

    @app.get("/forum", response_class=HTMLResponse)
    def forum(request: Request, user: str = Depends(require_user)):
        return _listing(request, FORUM, "forum/index.html", "threads")

    @app.get("/forum/{item_id}", response_class=HTMLResponse)
    def thread(request: Request, item_id: str, user: str = Depends(require_user)):
        return _detail(request, FORUM, item_id, "forum/show.html", "thread", "Thread not found")
