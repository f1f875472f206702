"""pycookiestore pytest plugin for deterministic cookie expiration."""

from .clock import FrozenClock, cookie_store, frozen_clock

__all__ = [  # noqa: RUF022
    "cookie_store",
    "frozen_clock",
    "FrozenClock",
]
