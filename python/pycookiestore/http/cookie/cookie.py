"""Cookies validated against the request URL that set them (RFC 6265 section 5.3)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Self, assert_never

from pycookiestore.exceptions import (
    DomainMismatchError,
    NonHttpSchemeError,
    PublicSuffixError,
    UnspecifiedDomainError,
)
from pycookiestore.http import Url, is_http_scheme, is_secure, to_url
from pycookiestore.http.cookie import expiration
from pycookiestore.http.cookie.domain import (
    CookieDomain,
    HostOnly,
    PublicSuffixList,
    Suffix,
    canonicalize_host,
    domain_key,
    host_only,
)
from pycookiestore.http.cookie.expiration import UNIX_EPOCH, AtUtc, CookieExpiration, SessionEnd
from pycookiestore.http.cookie.path import CookiePath
from pycookiestore.http.cookie.raw import CookieBuilder, RawCookie, SameSite
from pycookiestore.types import UrlLike, utc_now


@dataclass(slots=True)
class Cookie:
    """A cookie conforming to RFC 6265, scoped by its domain and path.

    Create cookies with `Cookie.parse` or `Cookie.from_raw_cookie`, which validate the cookie against the request URL
    that set it. Apart from `expire`, a cookie is not modified after creation.
    """

    raw_cookie: RawCookie
    """The parsed Set-Cookie data."""
    path: CookiePath
    """The Path attribute, or the default-path of the request URL."""
    domain: CookieDomain
    """The Domain attribute as a Suffix, or HostOnly when no non-empty Domain attribute was sent."""
    expires: CookieExpiration
    """Expiration from Max-Age or Expires, or SessionEnd for a non-persistent cookie."""

    @classmethod
    def parse(
        cls,
        cookie: str,
        request_url: UrlLike,
        *,
        public_suffixes: PublicSuffixList | None = None,
        now: datetime | None = None,
    ) -> Self:
        """Parse a cookie from a Set-Cookie value received from `request_url`."""
        return cls.from_raw_cookie(RawCookie.parse(cookie), request_url, public_suffixes=public_suffixes, now=now)

    @classmethod
    def from_raw_cookie(
        cls,
        raw_cookie: RawCookie,
        request_url: UrlLike,
        *,
        public_suffixes: PublicSuffixList | None = None,
        now: datetime | None = None,
    ) -> Self:
        """Validate a parsed cookie received from `request_url`.

        Args:
            raw_cookie: Parsed Set-Cookie attributes
            request_url: The URL whose response set the cookie
            public_suffixes: Reject Domain attributes naming a public suffix other than the request host
            now: Current instant, used to resolve Max-Age (default: now)

        Raises:
            NonHttpSchemeError: HttpOnly cookie from a non-HTTP request URL
            NonRelativeSchemeError: no Domain attribute and the request URL has no host
            DomainMismatchError: the request host does not domain-match the Domain attribute
            PublicSuffixError: the Domain attribute is a public suffix
            CookieParseError: the Domain attribute is not a valid domain
        """
        url = to_url(request_url)
        if raw_cookie.http_only and not is_http_scheme(url):
            raise NonHttpSchemeError

        return cls(
            raw_cookie=raw_cookie,
            path=CookiePath.parse(raw_cookie.path) or CookiePath.default(url),
            domain=_resolve_domain(raw_cookie, url, public_suffixes),
            expires=_resolve_expiration(raw_cookie, now or utc_now()),
        )

    @property
    def name(self) -> str:
        return self.raw_cookie.name

    @property
    def value(self) -> str:
        return self.raw_cookie.value

    @property
    def secure(self) -> bool:
        return self.raw_cookie.secure

    @property
    def http_only(self) -> bool:
        return self.raw_cookie.http_only

    @property
    def same_site(self) -> SameSite | None:
        return self.raw_cookie.same_site

    @property
    def key(self) -> tuple[str, str, str]:
        """The (domain, path, name) triple identifying this cookie in a store."""
        return domain_key(self.domain), self.path.path, self.name

    def matches(self, request_url: UrlLike) -> bool:
        """Whether this cookie should be included in a request to `request_url`. Expiration is not considered."""
        url = to_url(request_url)
        return (
            self.path.matches(url)
            and self.domain.matches(url)
            and (not self.secure or is_secure(url))
            and (not self.http_only or is_http_scheme(url))
        )

    def is_persistent(self) -> bool:
        """Should this cookie be persisted across sessions?"""
        return expiration.is_persistent(self.expires)

    def expire(self) -> None:
        """Expire this cookie immediately."""
        self.expires = AtUtc(UNIX_EPOCH)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Whether the cookie is expired at `now` (default: the current instant)."""
        return expiration.is_expired(self.expires, now or utc_now())

    def expires_by(self, instant: datetime) -> bool:
        """Whether the cookie expires at or before `instant`. Session cookies never do."""
        return expiration.expires_by(self.expires, instant)

    def to_raw_cookie(self) -> RawCookie:
        """Convert back to a raw cookie.

        Max-Age is relative and would not mean the same thing later, so only Expires is set. Domain is only set for
        Suffix domains and Path only when it came from a Path attribute.
        """
        builder = CookieBuilder(self.name, self.value)
        match self.expires:
            case AtUtc(instant):
                builder.expires(instant)
            case SessionEnd():
                pass
            case _:
                assert_never(self.expires)
        if self.path.from_attribute:
            builder.path(self.path.path)
        match self.domain:
            case Suffix(suffix):
                builder.domain(suffix)
            case HostOnly():
                pass
            case _:
                assert_never(self.domain)
        return builder.build()

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return str(self.raw_cookie)


def _resolve_domain(raw_cookie: RawCookie, url: Url, public_suffixes: PublicSuffixList | None) -> CookieDomain:
    try:
        suffix = Suffix.from_attribute(raw_cookie.domain)
    except UnspecifiedDomainError:
        return host_only(url)

    if not suffix.matches(url):
        raise DomainMismatchError
    if public_suffixes is not None and public_suffixes.is_public_suffix(suffix.domain):
        if suffix.domain != canonicalize_host(url):
            raise PublicSuffixError
    return suffix


def _resolve_expiration(raw_cookie: RawCookie, now: datetime) -> CookieExpiration:
    # Max-Age takes precedence over Expires, otherwise the cookie lives until the session ends
    if raw_cookie.max_age is not None:
        return expiration.from_max_age(raw_cookie.max_age, now)
    if raw_cookie.expires is not None:
        return expiration.from_expires(raw_cookie.expires)
    return SessionEnd()
