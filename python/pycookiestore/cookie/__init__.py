"""Cookie provider interface."""

from pycookiestore.cookie.types import CookieProvider

__all__ = ["CookieProvider"]
