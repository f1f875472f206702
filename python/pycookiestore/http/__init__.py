"""HTTP utils classes and types."""

from yarl import URL as Url

from pycookiestore.types import UrlLike

HTTP_SCHEMES = frozenset({"http", "https"})
SECURE_SCHEMES = frozenset({"https", "wss"})


def to_url(url: UrlLike) -> Url:
    """Coerce a URL string into a `Url`."""
    return url if isinstance(url, Url) else Url(url)


def is_http_scheme(url: Url) -> bool:
    """Whether the request URL uses an HTTP-family scheme."""
    return url.scheme in HTTP_SCHEMES


def is_secure(url: Url) -> bool:
    """Whether the request URL uses a secure scheme."""
    return url.scheme in SECURE_SCHEMES


__all__ = [
    "HTTP_SCHEMES",
    "SECURE_SCHEMES",
    "Url",
    "is_http_scheme",
    "is_secure",
    "to_url",
]
