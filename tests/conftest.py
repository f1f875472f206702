import pytest
from pycookiestore.http.cookie import CookieStore
from pycookiestore.pytest_plugin import FrozenClock

from tests.utils import NOW


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(NOW)


@pytest.fixture
def store(clock: FrozenClock) -> CookieStore:
    return CookieStore(clock=clock)
