# =============================================================================
# tests/test_visit_counter.py - Session Visit Counter Tests
# =============================================================================

from core.services.visit_counter import COUNTER_KEY, bump_visit_counter


def test_first_visit_starts_at_one():
    session = {}

    assert bump_visit_counter(session) == 1
    assert session[COUNTER_KEY] == 1


def test_existing_counter_increments():
    session = {COUNTER_KEY: 41}

    assert bump_visit_counter(session) == 42
    assert session[COUNTER_KEY] == 42


def test_garbage_counter_restarts():
    for value in ("7", None, 2.5, True):
        session = {COUNTER_KEY: value}

        assert bump_visit_counter(session) == 1


def test_other_keys_untouched():
    session = {"theme": "dark"}

    bump_visit_counter(session)

    assert session == {"theme": "dark", COUNTER_KEY: 1}
