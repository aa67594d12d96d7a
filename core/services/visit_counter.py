# =============================================================================
# core/services/visit_counter.py - Session Visit Counter
# =============================================================================

from collections.abc import MutableMapping
from typing import Any

COUNTER_KEY = "counter"


def bump_visit_counter(session: MutableMapping[str, Any]) -> int:
    """
    Increment the visit counter stored in `session` and return the new value.

    A missing or non-integer counter counts as 0, so the first visit is 1.
    """
    current = session.get(COUNTER_KEY)
    if not isinstance(current, int) or isinstance(current, bool):
        current = 0

    session[COUNTER_KEY] = current + 1
    return session[COUNTER_KEY]
