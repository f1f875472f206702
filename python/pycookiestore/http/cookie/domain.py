"""Cookie domain scoping and domain-matching (RFC 6265 section 5.1.3)."""

import ipaddress
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol, Self, assert_never

import idna
import tldextract

from pycookiestore.exceptions import CookieParseError, NonRelativeSchemeError, UnspecifiedDomainError
from pycookiestore.http import Url


class PublicSuffixList(Protocol):
    """Public suffix lookup used to reject cookies scoped to a registry-controlled domain."""

    def is_public_suffix(self, domain: str) -> bool:
        """Return True if the canonical `domain` is itself a public suffix (e.g. ``com`` or ``co.uk``)."""
        ...


class StaticSuffixList:
    """Public suffix list backed by a fixed set of suffixes."""

    def __init__(self, suffixes: Iterable[str]) -> None:
        self._suffixes = frozenset(canonicalize_domain(s) for s in suffixes)

    def is_public_suffix(self, domain: str) -> bool:
        return domain in self._suffixes


class TldextractSuffixList:
    """Public suffix list backed by tldextract.

    By default uses the snapshot of the Public Suffix List bundled with tldextract and never fetches over the network.
    Pass a configured ``tldextract.TLDExtract`` to use another source.
    """

    def __init__(self, extractor: tldextract.TLDExtract | None = None, *, include_private: bool = False) -> None:
        self._extract = extractor or tldextract.TLDExtract(suffix_list_urls=())
        self._include_private = include_private

    def is_public_suffix(self, domain: str) -> bool:
        result = self._extract(domain, include_psl_private_domains=self._include_private)
        return not result.domain and result.suffix == domain


@dataclass(frozen=True, slots=True)
class HostOnly:
    """No Domain attribute was honored: the cookie is scoped to exactly this host."""

    host: str

    def matches(self, request_url: Url) -> bool:
        return self.host == url_host(request_url)

    def __str__(self) -> str:
        return self.host


@dataclass(frozen=True, slots=True)
class Suffix:
    """An explicit Domain attribute was honored: the cookie is scoped to this domain and its subdomains."""

    domain: str

    @classmethod
    def from_attribute(cls, domain_attr: str | None) -> Self:
        """Canonical suffix from a Domain attribute value. Absent or empty attributes have no suffix."""
        if not domain_attr or not domain_attr.removeprefix("."):
            raise UnspecifiedDomainError
        return cls(canonicalize_domain(domain_attr))

    def matches(self, request_url: Url) -> bool:
        return (host := url_host(request_url)) is not None and domain_match(self.domain, host)

    def __str__(self) -> str:
        return self.domain


CookieDomain = HostOnly | Suffix


def domain_key(domain: CookieDomain) -> str:
    """The canonical domain string a store indexes the cookie under."""
    match domain:
        case HostOnly(host):
            return host
        case Suffix(suffix):
            return suffix
        case _:
            assert_never(domain)


def host_only(request_url: Url) -> HostOnly:
    return HostOnly(canonicalize_host(request_url))


def url_host(request_url: Url) -> str | None:
    """Canonical (lowercase, IDNA encoded) host of a request URL, or None when it has none."""
    host = request_url.raw_host
    return host.lower() if host else None


def canonicalize_host(request_url: Url) -> str:
    if (host := url_host(request_url)) is None:
        raise NonRelativeSchemeError
    return host


def canonicalize_domain(domain: str) -> str:
    """Canonical form of a Domain attribute: one leading ``.`` stripped, lowercased and IDNA encoded."""
    domain = domain.removeprefix(".").lower()
    if domain.isascii():
        return domain
    try:
        return idna.encode(domain, uts46=True).decode("ascii")
    except idna.IDNAError as exc:
        raise CookieParseError(f"invalid domain-attribute {domain!r}: {exc}") from exc


def is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host.strip("[]"))
    except ValueError:
        return False
    return True


def domain_match(cookie_domain: str, request_host: str) -> bool:
    """Whether the canonical `request_host` domain-matches the canonical `cookie_domain`.

    Either the strings are identical, or the host ends with the domain, the preceding character is a ``.``, and the
    host is not an IP address.
    """
    if cookie_domain == request_host:
        return True
    return (
        request_host.endswith(cookie_domain)
        and request_host[-len(cookie_domain) - 1] == "."
        and not is_ip_literal(request_host)
    )
