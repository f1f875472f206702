from datetime import UTC, datetime, timedelta, timezone

import pytest
from pycookiestore.exceptions import CookieParseError, NonRelativeSchemeError, UnspecifiedDomainError
from pycookiestore.http import Url
from pycookiestore.http.cookie import (
    AtUtc,
    HostOnly,
    SessionEnd,
    StaticSuffixList,
    Suffix,
    TldextractSuffixList,
    default_path,
    domain_match,
    path_match,
)
from pycookiestore.http.cookie import expiration
from pycookiestore.http.cookie.domain import canonicalize_domain, canonicalize_host, domain_key, is_ip_literal
from pycookiestore.http.cookie.path import parse_path

from tests.utils import NOW


@pytest.mark.parametrize(
    ("cookie_domain", "request_host", "expected"),
    [
        ("example.com", "example.com", True),
        ("example.com", "foo.example.com", True),
        ("example.com", "baz.foo.example.com", True),
        ("foo.example.com", "baz.foo.example.com", True),
        ("bar.example.com", "baz.foo.example.com", False),
        ("example.com", "myexample.com", False),
        ("example.com", "example.com.evil", False),
        ("foo.example.com", "example.com", False),
        ("0.0.1", "10.0.0.1", False),
        ("10.0.0.1", "10.0.0.1", True),
        ("::1", "::1", True),
    ],
)
def test_domain_match(cookie_domain: str, request_host: str, expected: bool):
    assert domain_match(cookie_domain, request_host) is expected


def test_is_ip_literal():
    assert is_ip_literal("127.0.0.1")
    assert is_ip_literal("::1")
    assert is_ip_literal("[::1]")
    assert not is_ip_literal("example.com")
    assert not is_ip_literal("1.example.com")


def test_canonicalize_domain():
    assert canonicalize_domain("Example.COM") == "example.com"
    assert canonicalize_domain(".example.com") == "example.com"
    assert canonicalize_domain("..example.com") == ".example.com"
    assert canonicalize_domain("BÜCHER.example") == "xn--bcher-kva.example"

    with pytest.raises(CookieParseError, match="invalid domain-attribute"):
        canonicalize_domain("bücher..example")


def test_canonicalize_host():
    assert canonicalize_host(Url("http://Example.COM:8080/foo")) == "example.com"
    assert canonicalize_host(Url("http://xn--bcher-kva.example/")) == "xn--bcher-kva.example"

    with pytest.raises(NonRelativeSchemeError):
        canonicalize_host(Url("data:text/plain,hello"))


def test_suffix_from_attribute():
    assert Suffix.from_attribute(".Example.com") == Suffix("example.com")

    for value in [None, "", "."]:
        with pytest.raises(UnspecifiedDomainError):
            Suffix.from_attribute(value)


def test_cookie_domain_matches():
    assert HostOnly("example.com").matches(Url("http://example.com/"))
    assert not HostOnly("example.com").matches(Url("http://foo.example.com/"))
    assert Suffix("example.com").matches(Url("http://foo.example.com/"))
    assert not Suffix("example.com").matches(Url("data:text/plain,hello"))
    assert domain_key(HostOnly("a.com")) == "a.com"
    assert domain_key(Suffix("b.com")) == "b.com"
    assert str(Suffix("b.com")) == "b.com"


def test_static_suffix_list():
    suffixes = StaticSuffixList(["COM", ".co.uk"])
    assert suffixes.is_public_suffix("com")
    assert suffixes.is_public_suffix("co.uk")
    assert not suffixes.is_public_suffix("example.com")


def test_tldextract_suffix_list():
    suffixes = TldextractSuffixList()
    assert suffixes.is_public_suffix("com")
    assert suffixes.is_public_suffix("co.uk")
    assert not suffixes.is_public_suffix("example.com")
    assert not suffixes.is_public_suffix("www.example.co.uk")
    assert not suffixes.is_public_suffix("127.0.0.1")


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("http://example.com/foo/bar/", "/foo/bar"),
        ("http://example.com/foo/bar", "/foo"),
        ("http://example.com/foo", "/"),
        ("http://example.com/", "/"),
        ("http://example.com", "/"),
        ("http://example.com/foo/bar?q=/x/y", "/foo"),
        ("http://example.com//", "/"),
    ],
)
def test_default_path(url: str, expected: str):
    assert default_path(Url(url)) == expected


def test_parse_path():
    assert parse_path("/foo") == "/foo"
    assert parse_path("/") == "/"
    assert parse_path("foo") is None
    assert parse_path("") is None
    assert parse_path(None) is None


@pytest.mark.parametrize(
    ("cookie_path", "request_path", "expected"),
    [
        ("/foo", "/foo", True),
        ("/foo", "/foo/bar", True),
        ("/fo", "/foo/bar", False),
        ("/foo/", "/foo/bar", True),
        ("/foo/", "/foo", False),
        ("/foo", "/foobar", False),
        ("/", "/anything", True),
        ("/foo/bar", "/foo", False),
    ],
)
def test_path_match(cookie_path: str, request_path: str, expected: bool):
    assert path_match(cookie_path, request_path) is expected


def test_from_max_age():
    assert expiration.from_max_age(60, NOW) == AtUtc(NOW + timedelta(seconds=60))
    assert expiration.from_max_age(0, NOW) == AtUtc(expiration.UNIX_EPOCH)
    assert expiration.from_max_age(-100, NOW) == AtUtc(expiration.UNIX_EPOCH)
    assert expiration.from_max_age(2**63, NOW) == AtUtc(expiration.MAX_INSTANT)
    assert expiration.from_max_age(10**9 * 86400 - 1, NOW) == AtUtc(expiration.MAX_INSTANT)


def test_from_max_age__sub_second():
    now = NOW.replace(microsecond=999_000)
    at = expiration.from_max_age(1, now)
    assert at == AtUtc(NOW + timedelta(seconds=2))
    assert at.instant >= now + timedelta(seconds=1)
    assert not expiration.expires_by(at, now + timedelta(seconds=1))

    assert expiration.from_max_age(1, NOW.replace(microsecond=1)) == AtUtc(NOW + timedelta(seconds=2))
    assert expiration.from_max_age(1, NOW) == AtUtc(NOW + timedelta(seconds=1))
    assert expiration.from_max_age(60, NOW.replace(tzinfo=None)) == AtUtc(NOW + timedelta(seconds=60))


def test_from_expires():
    instant = datetime(2030, 1, 2, 3, 4, 5, 678, tzinfo=UTC)
    assert expiration.from_expires(instant) == AtUtc(datetime(2030, 1, 2, 3, 4, 5, tzinfo=UTC))
    assert expiration.from_expires(datetime(2030, 1, 2)) == AtUtc(datetime(2030, 1, 2, tzinfo=UTC))


def test_expires_by():
    at = AtUtc(NOW)
    assert expiration.expires_by(at, NOW)
    assert expiration.expires_by(at, NOW + timedelta(seconds=1))
    assert not expiration.expires_by(at, NOW - timedelta(seconds=1))
    assert not expiration.expires_by(SessionEnd(), NOW)
    assert not expiration.expires_by(SessionEnd(), expiration.MAX_INSTANT)
    assert expiration.is_persistent(at)
    assert not expiration.is_persistent(SessionEnd())


def test_expires_by__naive_instant():
    at = AtUtc(NOW)
    naive = NOW.replace(tzinfo=None)
    assert expiration.expires_by(at, naive)
    assert not expiration.expires_by(at, naive - timedelta(seconds=1))
    assert expiration.is_expired(at, naive + timedelta(days=1))
    assert expiration.as_utc(naive) == NOW
    assert expiration.as_utc(datetime(2024, 5, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))) == NOW


def test_rfc3339():
    assert expiration.format_rfc3339(datetime(2100, 8, 3, 0, 38, 37, tzinfo=UTC)) == "2100-08-03T00:38:37Z"
    assert expiration.parse_rfc3339("2100-08-03T00:38:37Z") == datetime(2100, 8, 3, 0, 38, 37, tzinfo=UTC)
    assert expiration.parse_rfc3339("2100-08-03T02:38:37+02:00") == datetime(2100, 8, 3, 0, 38, 37, tzinfo=UTC)

    with pytest.raises(ValueError, match="no UTC offset"):
        expiration.parse_rfc3339("2100-08-03T00:38:37")
    with pytest.raises(ValueError):
        expiration.parse_rfc3339("yesterday")
