"""Cookie path scoping and path-matching (RFC 6265 section 5.1.4)."""

from dataclasses import dataclass
from typing import Self

from pycookiestore.http import Url


@dataclass(frozen=True, slots=True)
class CookiePath:
    """The cookie's path, and whether it came from a Path attribute or was computed as the default-path."""

    path: str
    from_attribute: bool

    @classmethod
    def default(cls, request_url: Url) -> Self:
        return cls(default_path(request_url), False)

    @classmethod
    def parse(cls, path_attr: str | None) -> Self | None:
        """A path from a Path attribute, or None if the default-path should be used instead."""
        path = parse_path(path_attr)
        return cls(path, True) if path is not None else None

    def matches(self, request_url: Url) -> bool:
        return path_match(self.path, request_url.raw_path)

    def __str__(self) -> str:
        return self.path


def default_path(request_url: Url) -> str:
    """The default-path of a request URL: its path up to, but not including, the right-most ``/``."""
    uri_path = request_url.raw_path
    if not uri_path.startswith("/") or uri_path.count("/") < 2:
        return "/"
    return uri_path[: uri_path.rindex("/")] or "/"


def parse_path(path_attr: str | None) -> str | None:
    if path_attr is None or not path_attr.startswith("/"):
        return None
    return path_attr


def path_match(cookie_path: str, request_path: str) -> bool:
    """Whether `request_path` path-matches `cookie_path`."""
    if cookie_path == request_path:
        return True
    if not request_path.startswith(cookie_path):
        return False
    return cookie_path.endswith("/") or request_path[len(cookie_path)] == "/"
