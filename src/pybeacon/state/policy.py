"""Debounce policy for region presence.

Pure functions only; the clock is always supplied by the caller so the
policy can be driven by virtual time in tests.
"""

from __future__ import annotations


def elapsed_since(now: float, last_seen: float | None) -> float | None:
    """Seconds between *last_seen* and *now*, or ``None`` if never seen."""
    if last_seen is None:
        return None
    return now - last_seen


def is_expired(now: float, last_seen: float | None, expiration_window: float) -> bool:
    """Whether a region last seen at *last_seen* should be considered exited.

    A region that was never seen is expired.  Otherwise the gap must be
    strictly greater than the window.
    """
    elapsed = elapsed_since(now, last_seen)
    if elapsed is None:
        return True
    return elapsed > expiration_window
