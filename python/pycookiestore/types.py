"""Common types and interfaces used in the library."""

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Literal

from yarl import URL

Clock = Callable[[], datetime]
UrlLike = URL | str
SaveScope = Literal["persistent_and_unexpired", "all"]


def utc_now() -> datetime:
    """Default clock: the current instant as an aware UTC datetime."""
    return datetime.now(UTC)
