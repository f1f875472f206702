"""Controllable clock for testing code that stores cookies."""

from collections.abc import Generator
from datetime import UTC, datetime, timedelta
from typing import Self

import pytest

from pycookiestore.http.cookie import CookieStore
from pycookiestore.http.cookie.expiration import as_utc


class FrozenClock:
    """Clock that only moves when told to. Pass it as a CookieStore clock."""

    def __init__(self, now: datetime | None = None) -> None:
        self._now = as_utc(now) if now is not None else datetime.now(UTC).replace(microsecond=0)

    def __call__(self) -> datetime:
        return self._now

    @property
    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> Self:
        """Move the clock to `now`. Naive datetimes are read as UTC."""
        self._now = as_utc(now)
        return self

    def advance(self, delta: timedelta | None = None, **kwargs: float) -> Self:
        """Move the clock forward by `delta` or by timedelta keyword arguments, e.g. ``advance(minutes=5)``."""
        self._now += (delta or timedelta()) + timedelta(**kwargs)
        return self

    def __repr__(self) -> str:
        return f"FrozenClock({self._now.isoformat()})"


@pytest.fixture
def frozen_clock() -> FrozenClock:
    """A frozen clock set to the current instant (whole seconds)."""
    return FrozenClock()


@pytest.fixture
def cookie_store(frozen_clock: FrozenClock) -> Generator[CookieStore, None, None]:
    """An empty cookie store driven by `frozen_clock`."""
    store = CookieStore(clock=frozen_clock)
    yield store
    store.clear()
