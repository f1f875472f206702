"""Cookie related classes."""

from pycookiestore.http.cookie.cookie import Cookie
from pycookiestore.http.cookie.domain import (
    CookieDomain,
    HostOnly,
    PublicSuffixList,
    StaticSuffixList,
    Suffix,
    TldextractSuffixList,
    domain_match,
)
from pycookiestore.http.cookie.expiration import AtUtc, CookieExpiration, SessionEnd
from pycookiestore.http.cookie.path import CookiePath, default_path, path_match
from pycookiestore.http.cookie.raw import CookieBuilder, RawCookie, SameSite
from pycookiestore.http.cookie.serialization import load, load_json, load_ron, save, save_json, save_ron
from pycookiestore.http.cookie.store import CookieStore

__all__ = [
    "AtUtc",
    "Cookie",
    "CookieBuilder",
    "CookieDomain",
    "CookieExpiration",
    "CookiePath",
    "CookieStore",
    "HostOnly",
    "PublicSuffixList",
    "RawCookie",
    "SameSite",
    "SessionEnd",
    "StaticSuffixList",
    "Suffix",
    "TldextractSuffixList",
    "default_path",
    "domain_match",
    "load",
    "load_json",
    "load_ron",
    "path_match",
    "save",
    "save_json",
    "save_ron",
]
