from __future__ import annotations

from conftest import ManualClock
from storefront.services.session_service import MIN_SESSION_TTL_SECONDS, SessionStore, session_lifetime


def test_issue_and_get():
    store = SessionStore(ttl_seconds=3600)
    token = store.issue("u1", "ana@loja.test")

    data = store.get(token)

    assert len(token) >= 32
    assert data.user_id == "u1"
    assert data.username == "ana@loja.test"
    assert store.issue("u1", "ana@loja.test") != token


def test_unknown_and_empty_tokens():
    store = SessionStore(ttl_seconds=3600)
    assert store.get(None) is None
    assert store.get("") is None
    assert store.get("nope") is None


def test_destroy():
    store = SessionStore(ttl_seconds=3600)
    token = store.issue("u1", "ana@loja.test")
    store.destroy(token)
    store.destroy(None)
    assert store.get(token) is None
    assert len(store) == 0


def test_expired_sessions_are_dropped():
    clock = ManualClock()
    store = SessionStore(ttl_seconds=120, clock=clock)
    token = store.issue("u1", "ana@loja.test")

    clock.advance(119)
    assert store.get(token) is not None
    clock.advance(2)
    assert store.get(token) is None
    assert len(store) == 0


def test_abandoned_sessions_are_swept_on_issue():
    clock = ManualClock()
    store = SessionStore(ttl_seconds=120, clock=clock)
    store.issue("u1", "ana@loja.test")
    store.issue("u2", "bia@loja.test")

    clock.advance(121)
    fresh = store.issue("u3", "caio@loja.test")

    assert len(store) == 1
    assert store.get(fresh).user_id == "u3"


def test_ttl_has_a_floor():
    assert session_lifetime(10) == MIN_SESSION_TTL_SECONDS
    assert session_lifetime(3600) == 3600
    assert SessionStore(ttl_seconds=1).ttl_seconds == MIN_SESSION_TTL_SECONDS
