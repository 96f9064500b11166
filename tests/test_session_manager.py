from datetime import datetime, timedelta

import pytest

from utility.session_manager import SessionManager
from utility.translation_state import SessionState, begin_request


@pytest.fixture
def manager():
    manager = SessionManager(ttl_hours=1)
    yield manager
    manager.close()


def test_get_or_create_returns_same_session(manager):
    first = manager.get_or_create_session("abc")
    first.state = SessionState(input_text="Hello")

    assert manager.get_or_create_session("abc") is first
    assert manager.get_session_count() == 1


def test_expired_session_is_replaced(manager):
    old = manager.get_or_create_session("abc")
    old.last_accessed = datetime.now() - timedelta(hours=2)

    fresh = manager.get_or_create_session("abc")

    assert fresh is not old
    assert fresh.state == SessionState()


def test_cleanup_skips_loading_sessions(manager):
    idle = manager.get_or_create_session("idle")
    busy = manager.get_or_create_session("busy")
    busy.state = begin_request(busy.state)
    for session in (idle, busy):
        session.last_accessed = datetime.now() - timedelta(hours=2)

    assert manager.cleanup_expired_sessions() == 1
    assert set(manager.sessions) == {"busy"}


def test_apply_stores_transition_result(manager):
    state = manager.apply("abc", lambda s: SessionState(input_text=s.input_text + "Hello"))

    assert state.input_text == "Hello"
    assert manager.get_or_create_session("abc").state is state


def test_reset_session_blanks_the_form(manager):
    manager.apply("abc", lambda s: SessionState(input_text="Hello"))

    assert manager.reset_session("abc") is True

    assert manager.get_or_create_session("abc").state == SessionState()


def test_reset_unknown_session_creates_nothing(manager):
    assert manager.reset_session("nobody") is True
    assert manager.get_session_count() == 0


def test_reset_refused_while_loading(manager):
    session = manager.get_or_create_session("abc")
    session.state = begin_request(SessionState(input_text="Hello"))

    assert manager.reset_session("abc") is False

    assert manager.sessions["abc"] is session
    assert session.state.is_loading is True
