import pytest
from fastapi.testclient import TestClient

from conftest import signin, signup
from eehub.app import create_app
from eehub.auth.session import MemorySessionStore

PROTECTED = [
    "/home",
    "/profile",
    "/about",
    "/contact",
    "/articles",
    "/articles/some-id",
    "/activities",
    "/activities/some-id",
    "/forum",
    "/forum/some-id",
]


def test_index_is_public(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "Environmental Education Hub" in r.text


@pytest.mark.parametrize("path", PROTECTED)
def test_gate_redirects_to_signin(client, path):
    r = client.get(path, follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/signin"


@pytest.mark.parametrize("path", PROTECTED)
def test_forged_cookie_is_denied(client, settings, path):
    client.cookies.set(settings.cookie_name, "forged.token")
    r = client.get(path, follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/signin"


def test_signup_then_signin_reaches_home(client):
    r = signup(client)
    assert r.status_code == 200
    assert "Sign in" in r.text

    r = signin(client)
    assert r.status_code == 303
    assert r.headers["location"] == "/home"

    r = client.get("/home")
    assert r.status_code == 200
    assert "Welcome, Ann" in r.text


def test_signup_accepts_json(client, store):
    r = client.post(
        "/signup",
        json={"firstname": "Ann", "Username": "annx", "email": "a@x.com", "password": "pw123"},
    )
    assert r.status_code == 200
    assert store.count("users") == 1


def test_signup_duplicate_email(client, store):
    signup(client)
    r = signup(client, firstname="Other", username="other")
    assert r.status_code == 200
    assert "already registered" in r.text
    assert store.count("users") == 1


def test_signup_duplicate_username(client, store):
    signup(client)
    r = signup(client, firstname="Bob", email="b@x.com", password="pw999")
    assert r.status_code == 200
    assert "username exists" in r.text
    assert store.count("users") == 1


@pytest.mark.parametrize(
    "body",
    [
        {"firstname": "Ann", "email": "a@x.com", "password": "pw123"},
        {"firstname": "Ann", "Username": "annx", "email": "a@x.com", "password": "   "},
    ],
)
def test_malformed_signup_is_bad_request(client, store, body):
    r = client.post("/signup", data=body)
    assert r.status_code == 400
    assert store.count("users") == 0


def test_malformed_json_signin_is_bad_request(client):
    r = client.post("/signin", content=b"{not json", headers={"content-type": "application/json"})
    assert r.status_code == 400


def test_invalid_login_text_is_identical(client):
    signup(client)
    unknown = signin(client, email="nobody@x.com")
    wrong = signin(client, password="nope")
    assert unknown.status_code == wrong.status_code == 200
    assert unknown.text == wrong.text == "Invalid username or password"
    assert client.get("/home", follow_redirects=False).status_code == 303


def test_profile_shows_stored_fields(signed_in):
    r = signed_in.get("/profile")
    assert r.status_code == 200
    assert "annx" in r.text
    assert "a@x.com" in r.text


@pytest.mark.parametrize("path", ["/about", "/contact"])
def test_static_pages_when_signed_in(signed_in, path):
    assert signed_in.get(path).status_code == 200


def test_content_listing_and_detail(signed_in, content):
    r = signed_in.get("/articles")
    assert r.status_code == 200
    assert "Why wetlands matter" in r.text
    assert f"/articles/{content['articles']}" in r.text

    assert "Wetlands store carbon." in signed_in.get(f"/articles/{content['articles']}").text
    assert "Bird count" in signed_in.get(f"/activities/{content['activities']}").text
    assert "Native plants?" in signed_in.get("/forum").text
    assert "Shady gardens." in signed_in.get(f"/forum/{content['forum']}").text


@pytest.mark.parametrize(
    "path, message",
    [
        ("/articles/missing", "Article not found"),
        ("/activities/missing", "Activity not found"),
        ("/forum/missing", "Thread not found"),
    ],
)
def test_missing_content_is_404(signed_in, path, message):
    r = signed_in.get(path)
    assert r.status_code == 404
    assert r.text == message


def test_logout_ends_session(signed_in, sessions):
    assert len(sessions) == 1
    r = signed_in.get("/logout")
    assert r.status_code == 200
    assert "Logout Successful" in r.text
    assert len(sessions) == 0
    assert signed_in.get("/home", follow_redirects=False).status_code == 303


def test_signin_replaces_previous_session(signed_in, sessions):
    assert signin(signed_in).status_code == 303
    assert len(sessions) == 1


def test_home_redirects_when_user_document_is_gone(settings, sessions):
    from eehub.store import MemoryDocumentStore

    first = MemoryDocumentStore()
    c = TestClient(create_app(settings, store=first, sessions=sessions))
    signup(c)
    signin(c)
    # Same signed session, but a store without the user.
    c.app.state.store = MemoryDocumentStore()
    r = c.get("/home", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/signin"


def test_store_failure_is_internal_error(settings, failing_store):
    c = TestClient(create_app(settings, store=failing_store, sessions=MemorySessionStore(60)))
    r = signup(c)
    assert r.status_code == 500
    assert r.text == "Internal Server Error"
    r = signin(c)
    assert r.status_code == 500
    assert r.text == "Internal Server Error"


def test_content_store_failure_is_internal_error(settings, failing_store, sessions):
    sessions.set("sid-1", {"user": "annx"})
    app = create_app(settings, store=failing_store, sessions=sessions)
    c = TestClient(app)
    c.cookies.set(settings.cookie_name, app.state.signer.sign("sid-1"))
    assert c.get("/articles").status_code == 500
    assert c.get("/forum/x").status_code == 500
    assert c.get("/home").status_code == 500
    # the gate itself never touches the document store
    assert c.get("/about").status_code == 200


def test_memory_backend_is_seeded_from_file():
    from pathlib import Path

    from eehub.config import Settings

    seed = Path(__file__).resolve().parents[1] / "data" / "seed_example.yml"
    app = create_app(Settings(secret_key="s", store_backend="memory", seed_file=str(seed)))
    c = TestClient(app)
    signup(c)
    signin(c)
    r = c.get("/articles")
    assert "Composting at home" in r.text
    assert "Why wetlands matter" in r.text


def test_missing_secret_key_still_issues_sessions(store, sessions):
    from eehub.config import Settings

    c = TestClient(create_app(Settings(store_backend="memory"), store=store, sessions=sessions))
    signup(c)
    assert signin(c).status_code == 303
    assert c.get("/home").status_code == 200


def test_padded_credentials_round_trip(client):
    signup(client, email=" a@x.com ", password=" pw123 ")
    r = signin(client, email=" a@x.com ", password=" pw123 ")
    assert r.status_code == 303
    assert r.headers["location"] == "/home"
    assert "Welcome, Ann" in client.get("/home").text


def test_seed_file_is_not_loaded_into_firestore_on_startup(monkeypatch, store):
    from pathlib import Path

    import eehub.app as app_module
    from eehub.config import Settings

    monkeypatch.setattr(app_module, "build_store", lambda settings: store)
    seed = Path(__file__).resolve().parents[1] / "data" / "seed_example.yml"
    settings = Settings(secret_key="s", store_backend="firestore", seed_file=str(seed))
    create_app(settings)
    create_app(settings)
    assert store.count("articles") == 0
