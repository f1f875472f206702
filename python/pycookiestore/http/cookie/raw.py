"""Set-Cookie text parsing.

`RawCookie` is the structured attribute set of a single ``Set-Cookie`` value, before any validation against a request
URL. It mirrors the parsed cookie of Rust's cookie crate: attributes are kept as sent (except for one leading ``.`` of
Domain), unknown attributes are dropped, and unparsable Max-Age/Expires values are ignored as RFC 6265 section 5.2 asks.
"""

import re
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from email.utils import format_datetime
from typing import Literal, Self, TypeAlias, get_args

from pycookiestore.exceptions import CookieParseError
from pycookiestore.http.cookie.expiration import as_utc

SameSite: TypeAlias = Literal["Strict", "Lax", "None"]

_SAME_SITE_VALUES: dict[str, SameSite] = {v.lower(): v for v in get_args(SameSite)}

# RFC 6265 section 5.1.1 cookie-date tokens
_DATE_DELIMITER = re.compile(r"[\x09\x20-\x2f\x3b-\x40\x5b-\x60\x7b-\x7e]+")
_DATE_TIME = re.compile(r"^(\d{1,2}):(\d{1,2}):(\d{1,2})(?:\D.*)?$")
_DATE_DAY = re.compile(r"^(\d{1,2})(?:\D.*)?$")
_DATE_MONTH = re.compile(r"^(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)", re.IGNORECASE)
_DATE_YEAR = re.compile(r"^(\d{2,4})(?:\D.*)?$")
_MONTHS = ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec")
_MAX_AGE = re.compile(r"^-?\d+$")


def parse_cookie_date(value: str) -> datetime | None:
    """Parse a cookie-date (RFC 6265 section 5.1.1). Returns None when the value is not a valid date."""
    hms: tuple[int, int, int] | None = None
    day: int | None = None
    month: int | None = None
    year: int | None = None

    for token in _DATE_DELIMITER.split(value):
        if not token:
            continue
        if hms is None and (m := _DATE_TIME.match(token)):
            hms = (int(m[1]), int(m[2]), int(m[3]))
        elif day is None and (m := _DATE_DAY.match(token)):
            day = int(m[1])
        elif month is None and (m := _DATE_MONTH.match(token)):
            month = _MONTHS.index(m[1].lower()) + 1
        elif year is None and (m := _DATE_YEAR.match(token)):
            year = int(m[1])

    if hms is None or day is None or month is None or year is None:
        return None

    if 70 <= year <= 99:
        year += 1900
    elif 0 <= year <= 69:
        year += 2000

    hour, minute, second = hms
    if year < 1601 or hour > 23 or minute > 59 or second > 59:
        return None
    try:
        return datetime(year, month, day, hour, minute, second, tzinfo=UTC)
    except ValueError:
        return None


def format_cookie_date(value: datetime) -> str:
    """Format an instant as an HTTP date, e.g. ``Wed, 09 Jun 2025 10:18:14 GMT``."""
    return format_datetime(value.astimezone(UTC), usegmt=True)


@dataclass(frozen=True, slots=True)
class RawCookie:
    """An HTTP cookie as parsed from a Set-Cookie value: name, value and the attributes as sent."""

    name: str
    value: str
    domain: str | None = None
    path: str | None = None
    max_age: int | None = None
    expires: datetime | None = None
    secure: bool = False
    http_only: bool = False
    same_site: SameSite | None = None
    partitioned: bool = False

    @classmethod
    def parse(cls, cookie: str) -> Self:
        """Parse a cookie from a Set-Cookie header value string."""
        pair, *attributes = cookie.split(";")
        name, sep, value = pair.partition("=")
        name = name.strip()
        if not sep:
            raise CookieParseError(f"missing '=' in cookie pair: {pair!r}")
        if not name:
            raise CookieParseError(f"empty cookie name: {pair!r}")

        attrs: dict[str, object] = {}
        for attribute in attributes:
            key, _, attr_value = attribute.partition("=")
            key = key.strip().lower()
            attr_value = attr_value.strip()

            if key == "domain":
                attrs["domain"] = attr_value.removeprefix(".")
            elif key == "path":
                attrs["path"] = attr_value
            elif key == "max-age":
                if _MAX_AGE.match(attr_value):
                    attrs["max_age"] = int(attr_value)
            elif key == "expires":
                if (expires := parse_cookie_date(attr_value)) is not None:
                    attrs["expires"] = expires
            elif key == "secure":
                attrs["secure"] = True
            elif key == "httponly":
                attrs["http_only"] = True
            elif key == "samesite":
                if (same_site := _SAME_SITE_VALUES.get(attr_value.lower())) is not None:
                    attrs["same_site"] = same_site
            elif key == "partitioned":
                attrs["partitioned"] = True

        return cls(name, value.strip(), **attrs)  # type: ignore[arg-type]

    def stripped(self) -> str:
        """Return just the 'name=value' pair."""
        return f"{self.name}={self.value}"

    def __str__(self) -> str:
        parts = [self.stripped()]
        if self.http_only:
            parts.append("HttpOnly")
        if self.same_site is not None:
            parts.append(f"SameSite={self.same_site}")
        if self.partitioned:
            parts.append("Partitioned")
        if self.secure:
            parts.append("Secure")
        if self.path is not None:
            parts.append(f"Path={self.path}")
        if self.domain is not None:
            parts.append(f"Domain={self.domain.removeprefix('.')}")
        if self.max_age is not None:
            parts.append(f"Max-Age={self.max_age}")
        if self.expires is not None:
            parts.append(f"Expires={format_cookie_date(self.expires)}")
        return "; ".join(parts)

    def __repr__(self) -> str:
        return f"RawCookie({str(self)!r})"


class CookieBuilder:
    """Fluent builder for RawCookie instances."""

    def __init__(self, name: str, value: str) -> None:
        """Start a builder for a cookie with name and value."""
        self._cookie = RawCookie(name, value)

    @classmethod
    def from_cookie(cls, cookie: RawCookie | str) -> Self:
        """Start a builder pre-populated from an existing cookie."""
        raw = RawCookie.parse(cookie) if isinstance(cookie, str) else cookie
        builder = cls(raw.name, raw.value)
        builder._cookie = raw
        return builder

    def build(self) -> RawCookie:
        """Build and return the cookie."""
        return self._cookie

    def expires(self, expires: datetime | None) -> Self:
        """Set the Expires attribute (absolute time) or clear it with None. Naive datetimes are read as UTC."""
        if expires is not None:
            expires = as_utc(expires).replace(microsecond=0)
        return self._set(expires=expires)

    def max_age(self, max_age: timedelta | int | None) -> Self:
        """Set the Max-Age attribute (relative lifetime) or clear it with None."""
        if isinstance(max_age, timedelta):
            max_age = int(max_age.total_seconds())
        return self._set(max_age=max_age)

    def domain(self, domain: str | None) -> Self:
        """Set the Domain attribute. One leading ``.`` is dropped."""
        return self._set(domain=domain.removeprefix(".") if domain is not None else None)

    def path(self, path: str | None) -> Self:
        """Set the Path attribute."""
        return self._set(path=path)

    def secure(self, secure: bool) -> Self:
        """Enable or disable the Secure attribute."""
        return self._set(secure=secure)

    def http_only(self, http_only: bool) -> Self:
        """Enable or disable the HttpOnly attribute."""
        return self._set(http_only=http_only)

    def same_site(self, same_site: SameSite | None) -> Self:
        """Set the SameSite attribute."""
        if same_site is not None and same_site not in _SAME_SITE_VALUES.values():
            raise ValueError(f"invalid SameSite: {same_site!r}")
        return self._set(same_site=same_site)

    def partitioned(self, partitioned: bool) -> Self:
        """Enable or disable the Partitioned attribute."""
        return self._set(partitioned=partitioned)

    def removal(self) -> Self:
        """Configure as a removal cookie (empty value, expired in the past)."""
        self._cookie = replace(self._cookie, value="", max_age=0, expires=datetime(1970, 1, 1, tzinfo=UTC))
        return self

    def _set(self, **changes: object) -> Self:
        self._cookie = replace(self._cookie, **changes)  # type: ignore[arg-type]
        return self
