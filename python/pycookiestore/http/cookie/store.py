"""In-memory cookie store indexed by domain, path and name."""

import logging
from collections.abc import Iterable, Iterator
from datetime import datetime
from typing import IO, Self

from pycookiestore.exceptions import CookieError
from pycookiestore.http import to_url
from pycookiestore.http.cookie.cookie import Cookie
from pycookiestore.http.cookie.domain import PublicSuffixList
from pycookiestore.http.cookie.raw import RawCookie
from pycookiestore.types import Clock, SaveScope, UrlLike, utc_now

logger = logging.getLogger(__name__)

_Index = dict[str, dict[str, dict[str, Cookie]]]


class CookieStore:
    """In-memory cookie store (domain/path aware).

    Holds at most one cookie per (domain, path, name). Inserting a cookie replaces any existing cookie with the same
    key, even if the new cookie is already expired: this is how servers delete cookies.

    The store does no locking. Guard it externally when sharing it between threads.
    """

    def __init__(self, *, clock: Clock = utc_now, public_suffixes: PublicSuffixList | None = None) -> None:
        """Create an empty cookie store.

        Args:
            clock: Source of the current instant for expiration checks and Max-Age resolution
            public_suffixes: Reject cookies whose Domain attribute is a public suffix. Disabled by default.
        """
        self._cookies: _Index = {}
        self._clock = clock
        self._public_suffixes = public_suffixes

    @classmethod
    def from_cookies(
        cls,
        cookies: Iterable[Cookie | Exception],
        include_expired: bool,
        *,
        clock: Clock = utc_now,
        public_suffixes: PublicSuffixList | None = None,
    ) -> Self:
        """Build a store from `cookies`.

        An exception instance in `cookies`, or one raised while iterating it, aborts the whole build and is raised.
        Unless `include_expired` is set, cookies already expired are skipped.
        """
        store = cls(clock=clock, public_suffixes=public_suffixes)
        now = clock()
        for cookie in cookies:
            if isinstance(cookie, Exception):
                raise cookie
            if not include_expired and cookie.is_expired(now):
                logger.debug("Skipping expired cookie %s", cookie.key)
                continue
            store.insert(cookie)
        return store

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def public_suffixes(self) -> PublicSuffixList | None:
        return self._public_suffixes

    def now(self) -> datetime:
        """The current instant according to the store's clock."""
        return self._clock()

    def insert(self, cookie: Cookie) -> None:
        """Insert a cookie, replacing any cookie with the same domain, path and name."""
        domain, path, name = cookie.key
        names = self._cookies.setdefault(domain, {}).setdefault(path, {})
        if name in names:
            logger.debug("Replacing cookie %s", cookie.key)
        names[name] = cookie

    def insert_raw(self, cookie: RawCookie, request_url: UrlLike) -> Cookie:
        """Insert a parsed cookie as if set by a response for `request_url`.

        Raises the validation error and leaves the store untouched if the cookie is not valid for `request_url`.
        """
        validated = Cookie.from_raw_cookie(
            cookie, request_url, public_suffixes=self._public_suffixes, now=self._clock()
        )
        self.insert(validated)
        return validated

    def parse(self, cookie: str, request_url: UrlLike) -> Cookie:
        """Parse a Set-Cookie value and insert it as if set by a response for `request_url`."""
        return self.insert_raw(RawCookie.parse(cookie), request_url)

    def store_response_cookies(self, cookies: Iterable[RawCookie | str], request_url: UrlLike) -> None:
        """Insert the cookies of a response from `request_url`. Cookies that are not valid are ignored."""
        url = to_url(request_url)
        for cookie in cookies:
            try:
                if isinstance(cookie, str):
                    self.parse(cookie, url)
                else:
                    self.insert_raw(cookie, url)
            except CookieError as exc:
                logger.debug("Ignoring cookie %r from %s: %s", str(cookie), url, exc)

    def contains(self, domain: str, path: str, name: str) -> bool:
        """Whether the store holds an unexpired cookie for the domain, path and name."""
        return self.get_unexpired(domain, path, name) is not None

    def contains_any(self, domain: str, path: str, name: str) -> bool:
        """Whether the store holds any (even an expired) cookie for the domain, path and name."""
        return self.get(domain, path, name) is not None

    def get(self, domain: str, path: str, name: str) -> Cookie | None:
        """The (possibly expired) cookie for the domain, path and name."""
        return self._cookies.get(domain, {}).get(path, {}).get(name)

    def get_unexpired(self, domain: str, path: str, name: str) -> Cookie | None:
        """The unexpired cookie for the domain, path and name."""
        cookie = self.get(domain, path, name)
        if cookie is None or cookie.is_expired(self._clock()):
            return None
        return cookie

    def remove(self, domain: str, path: str, name: str) -> Cookie | None:
        """Remove a cookie from the store, returning it if it was in the store."""
        paths = self._cookies.get(domain)
        if paths is None or (names := paths.get(path)) is None:
            return None
        cookie = names.pop(name, None)
        if not names:
            del paths[path]
            if not paths:
                del self._cookies[domain]
        return cookie

    def query(self, request_url: UrlLike) -> list[Cookie]:
        """All cookies, expired or not, that match `request_url`."""
        url = to_url(request_url)
        return [cookie for cookie in self.iter_any() if cookie.matches(url)]

    def matches(self, request_url: UrlLike) -> list[Cookie]:
        """Unexpired cookies that path- and domain-match `request_url`, with compatible HttpOnly and Secure
        attributes. These are the cookies to send with a request.
        """
        now = self._clock()
        return [cookie for cookie in self.query(request_url) if not cookie.is_expired(now)]

    def get_request_values(self, request_url: UrlLike) -> list[tuple[str, str]]:
        """Name and value pairs of the cookies to send with a request to `request_url`."""
        return [(cookie.name, cookie.value) for cookie in self.matches(request_url)]

    def cookie_header(self, request_url: UrlLike) -> str | None:
        """Cookie header value for a request to `request_url`, or None if no cookies apply."""
        values = self.get_request_values(request_url)
        if not values:
            return None
        return "; ".join(f"{name}={value}" for name, value in values)

    def iter_unexpired(self) -> Iterator[Cookie]:
        """Iterate all unexpired cookies."""
        now = self._clock()
        return (cookie for cookie in self.iter_any() if not cookie.is_expired(now))

    def iter_any(self) -> Iterator[Cookie]:
        """Iterate all cookies, including expired ones."""
        return (cookie for paths in self._cookies.values() for names in paths.values() for cookie in names.values())

    def get_all_unexpired(self) -> list[Cookie]:
        """Return all unexpired cookies currently stored."""
        return [*self.iter_unexpired()]

    def get_all_any(self) -> list[Cookie]:
        """Return all cookies in the store, including expired ones."""
        return [*self.iter_any()]

    def clear(self) -> None:
        """Remove all cookies from the store."""
        self._cookies.clear()

    def set_cookies(self, cookie_headers: list[str], url: str) -> None:
        """CookieProvider interface: store the Set-Cookie headers of a response from `url`."""
        self.store_response_cookies(cookie_headers, url)

    def cookies(self, url: str) -> str | None:
        """CookieProvider interface: the Cookie header value for a request to `url`."""
        return self.cookie_header(url)

    def load_json(self, reader: IO[str], *, include_expired: bool = False) -> "CookieStore":
        """Return a new store, configured like this one, with the JSON-formatted cookies from `reader`."""
        from pycookiestore.http.cookie import serialization

        return serialization.load_json(
            reader,
            include_expired=include_expired,
            clock=self._clock,
            public_suffixes=self._public_suffixes,
            store_type=type(self),
        )

    def load_ron(self, reader: IO[str], *, include_expired: bool = False) -> "CookieStore":
        """Return a new store, configured like this one, with the RON-formatted cookies from `reader`."""
        from pycookiestore.http.cookie import serialization

        return serialization.load_ron(
            reader,
            include_expired=include_expired,
            clock=self._clock,
            public_suffixes=self._public_suffixes,
            store_type=type(self),
        )

    def save_json(self, writer: IO[str], *, scope: SaveScope = "persistent_and_unexpired") -> None:
        """Write the cookies selected by `scope` to `writer` in JSON format."""
        from pycookiestore.http.cookie import serialization

        serialization.save_json(self, writer, scope=scope)

    def save_ron(self, writer: IO[str], *, scope: SaveScope = "persistent_and_unexpired") -> None:
        """Write the cookies selected by `scope` to `writer` in RON format."""
        from pycookiestore.http.cookie import serialization

        serialization.save_ron(self, writer, scope=scope)

    def __len__(self) -> int:
        return sum(len(names) for paths in self._cookies.values() for names in paths.values())

    def __iter__(self) -> Iterator[Cookie]:
        return self.iter_unexpired()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 3:
            return False
        return self.contains_any(*key)

    def __repr__(self) -> str:
        return f"CookieStore({self.get_all_any()!r})"
