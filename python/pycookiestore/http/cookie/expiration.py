"""Cookie expiration: persistent instants versus end-of-session."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import assert_never

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
MAX_INSTANT = datetime.max.replace(microsecond=0, tzinfo=UTC)


@dataclass(frozen=True, slots=True)
class AtUtc:
    """A persistent cookie expiring at an absolute UTC instant."""

    instant: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "instant", as_utc(self.instant).replace(microsecond=0))


@dataclass(frozen=True, slots=True)
class SessionEnd:
    """A non-persistent cookie, expiring at the end of the current session."""


CookieExpiration = AtUtc | SessionEnd


def as_utc(value: datetime) -> datetime:
    """Aware UTC datetime. Naive datetimes are read as UTC."""
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)


def from_max_age(seconds: int, now: datetime) -> AtUtc:
    """Expiration `seconds` after `now`.

    A non-positive delta expires immediately (the epoch); a delta beyond the representable range clamps to the latest
    representable instant. Sub-second instants round up to the next whole second, so the cookie never lives shorter
    than `seconds`.
    """
    if seconds <= 0:
        return AtUtc(UNIX_EPOCH)
    try:
        instant = as_utc(now) + timedelta(seconds=seconds)
        if instant.microsecond:
            instant += timedelta(seconds=1)
        return AtUtc(instant)
    except OverflowError:
        return AtUtc(MAX_INSTANT)


def from_expires(instant: datetime) -> AtUtc:
    return AtUtc(instant)


def expires_by(expiration: CookieExpiration, instant: datetime) -> bool:
    """Whether `expiration` is at or before `instant`. Session expiration never expires by any instant."""
    match expiration:
        case AtUtc(at):
            return at <= as_utc(instant)
        case SessionEnd():
            return False
        case _:
            assert_never(expiration)


def is_expired(expiration: CookieExpiration, now: datetime) -> bool:
    return expires_by(expiration, now)


def is_persistent(expiration: CookieExpiration) -> bool:
    return isinstance(expiration, AtUtc)


def format_rfc3339(instant: datetime) -> str:
    """Second precision RFC 3339 UTC timestamp with a ``Z`` suffix."""
    return instant.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_rfc3339(value: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime. Raises ValueError on malformed input."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp has no UTC offset: {value!r}")
    return parsed.astimezone(UTC)
