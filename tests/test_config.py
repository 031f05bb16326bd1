import pytest

from eehub.config import load_settings


def test_defaults():
    s = load_settings({})
    assert s.port == 3000
    assert s.store_backend == "firestore"
    assert s.secret_key == ""
    assert s.cookie_settings() == {"httponly": True, "samesite": "lax", "secure": False}


def test_environment_overrides():
    s = load_settings(
        {
            "PORT": "8080",
            "SECRET_KEY": "k",
            "EEH_STORE": "Memory",
            "EEH_COOKIE_SECURE": "yes",
            "EEH_SESSION_MAX_AGE": "60",
            "EEH_LOG_LEVEL": "debug",
        }
    )
    assert s.port == 8080
    assert s.secret_key == "k"
    assert s.store_backend == "memory"
    assert s.cookie_secure is True
    assert s.session_max_age == 60
    assert s.log_level == "DEBUG"


def test_unknown_backend_is_rejected():
    with pytest.raises(ValueError):
        load_settings({"EEH_STORE": "postgres"})


def test_configure_logging_sets_level():
    import logging

    from eehub.logging_setup import configure_logging

    root = logging.getLogger()
    before = root.level
    try:
        configure_logging("DEBUG")
        assert root.level == logging.DEBUG
        assert logging.getLogger("google").level == logging.WARNING
    finally:
        root.setLevel(before)
