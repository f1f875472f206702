"""Persisting cookie stores as JSON or RON.

Both formats share one schema::

    {"cookies": [{"raw_cookie": "name=value; ...",
                  "path": ["/", true],
                  "domain": {"HostOnly": "example.com"} | {"Suffix": "example.com"},
                  "expires": "SessionEnd" | {"AtUtc": "2100-08-03T00:38:37Z"}}]}

`load` and `save` take the format specific decode/encode callables; `load_json`, `save_json`, `load_ron` and
`save_ron` are ready-made pairs.
"""

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import IO, Any, assert_never

import orjson

from pycookiestore.exceptions import CookieError, CookieStoreError
from pycookiestore.http.cookie import ron
from pycookiestore.http.cookie.cookie import Cookie
from pycookiestore.http.cookie.domain import CookieDomain, HostOnly, PublicSuffixList, Suffix
from pycookiestore.http.cookie.expiration import AtUtc, CookieExpiration, SessionEnd, format_rfc3339, parse_rfc3339
from pycookiestore.http.cookie.path import CookiePath
from pycookiestore.http.cookie.raw import RawCookie
from pycookiestore.http.cookie.store import CookieStore
from pycookiestore.types import Clock, SaveScope, utc_now

Decoder = Callable[[str], Iterable[Cookie]]
Encoder = Callable[[list[Cookie]], str]


def load(
    reader: IO[str],
    decode: Decoder,
    *,
    include_expired: bool = False,
    clock: Clock = utc_now,
    public_suffixes: PublicSuffixList | None = None,
    store_type: type[CookieStore] = CookieStore,
) -> CookieStore:
    """Load cookies from `reader`, decoding them with `decode`.

    Expired cookies are skipped unless `include_expired` is set. I/O and decoding failures raise CookieStoreError.
    """
    try:
        text = reader.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise CookieStoreError(f"failed to read cookies: {exc}") from exc

    try:
        cookies = decode(text)
        return store_type.from_cookies(cookies, include_expired, clock=clock, public_suffixes=public_suffixes)
    except CookieStoreError:
        raise
    except (CookieError, ValueError, TypeError, KeyError) as exc:
        raise CookieStoreError(f"failed to decode cookies: {exc}") from exc


def save(
    store: CookieStore,
    writer: IO[str],
    encode: Encoder,
    *,
    scope: SaveScope = "persistent_and_unexpired",
) -> None:
    """Encode the cookies selected by `scope` with `encode` and write them to `writer`, followed by a newline.

    Scopes:
        persistent_and_unexpired: only unexpired cookies with an expiration (session cookies are not saved)
        all: every cookie, including expired and session cookies
    """
    try:
        text = encode(select_cookies(store, scope))
    except (ValueError, TypeError) as exc:
        raise CookieStoreError(f"failed to encode cookies: {exc}") from exc

    try:
        writer.write(text)
        writer.write("\n")
    except OSError as exc:
        raise CookieStoreError(f"failed to write cookies: {exc}") from exc


def select_cookies(store: CookieStore, scope: SaveScope) -> list[Cookie]:
    if scope == "persistent_and_unexpired":
        return [cookie for cookie in store.iter_unexpired() if cookie.is_persistent()]
    elif scope == "all":
        return [*store.iter_any()]
    else:
        assert_never(scope)


def cookie_to_record(cookie: Cookie) -> dict[str, Any]:
    """The persisted record of a cookie, as plain JSON compatible values."""
    return {
        "raw_cookie": str(cookie.raw_cookie),
        "path": [cookie.path.path, cookie.path.from_attribute],
        "domain": _domain_to_record(cookie.domain),
        "expires": _expiration_to_record(cookie.expires),
    }


def cookie_from_record(record: Mapping[str, Any]) -> Cookie:
    """Rebuild a cookie from its persisted record. Raises ValueError, TypeError or KeyError on malformed records."""
    path, from_attribute = record["path"]
    if not isinstance(path, str) or not isinstance(from_attribute, bool) or not path.startswith("/"):
        raise ValueError(f"invalid cookie path: {record['path']!r}")
    return Cookie(
        raw_cookie=RawCookie.parse(_expect_str(record["raw_cookie"])),
        path=CookiePath(path, from_attribute),
        domain=_domain_from_record(record["domain"]),
        expires=_expiration_from_record(record["expires"]),
    )


def _domain_to_record(domain: CookieDomain) -> dict[str, str]:
    match domain:
        case HostOnly(host):
            return {"HostOnly": host}
        case Suffix(suffix):
            return {"Suffix": suffix}
        case _:
            assert_never(domain)


def _domain_from_record(value: Any) -> CookieDomain:
    match value:
        case {"HostOnly": str(host)}:
            return HostOnly(host)
        case {"Suffix": str(suffix)}:
            return Suffix(suffix)
        case _:
            raise ValueError(f"invalid cookie domain: {value!r}")


def _expiration_to_record(expires: CookieExpiration) -> str | dict[str, str]:
    match expires:
        case AtUtc(instant):
            return {"AtUtc": format_rfc3339(instant)}
        case SessionEnd():
            return "SessionEnd"
        case _:
            assert_never(expires)


def _expiration_from_record(value: Any) -> CookieExpiration:
    match value:
        case "SessionEnd":
            return SessionEnd()
        case {"AtUtc": str(instant)}:
            return AtUtc(parse_rfc3339(instant))
        case _:
            raise ValueError(f"invalid cookie expiration: {value!r}")


def _expect_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value


def _records(document: Any) -> Iterator[Cookie]:
    match document:
        case {"cookies": list(records)}:
            return (cookie_from_record(record) for record in records)
        case _:
            raise ValueError("expected an object with a 'cookies' list")


def cookies_from_json(text: str) -> Iterator[Cookie]:
    return _records(orjson.loads(text))


def cookies_to_json(cookies: list[Cookie]) -> str:
    document = {"cookies": [cookie_to_record(cookie) for cookie in cookies]}
    return orjson.dumps(document, option=orjson.OPT_INDENT_2).decode()


def cookies_from_ron(text: str) -> Iterator[Cookie]:
    return _records(ron.loads(text))


def cookies_to_ron(cookies: list[Cookie]) -> str:
    return ron.dumps(ron.Struct(cookies=[_cookie_to_ron(cookie) for cookie in cookies]))


def _cookie_to_ron(cookie: Cookie) -> ron.Struct:
    match cookie.domain:
        case HostOnly(host):
            domain = ron.Variant("HostOnly", host)
        case Suffix(suffix):
            domain = ron.Variant("Suffix", suffix)
        case _:
            assert_never(cookie.domain)
    match cookie.expires:
        case AtUtc(instant):
            expires = ron.Variant("AtUtc", format_rfc3339(instant))
        case SessionEnd():
            expires = ron.Variant("SessionEnd")
        case _:
            assert_never(cookie.expires)
    return ron.Struct(
        raw_cookie=str(cookie.raw_cookie),
        path=(cookie.path.path, cookie.path.from_attribute),
        domain=domain,
        expires=expires,
    )


def load_json(
    reader: IO[str],
    *,
    include_expired: bool = False,
    clock: Clock = utc_now,
    public_suffixes: PublicSuffixList | None = None,
    store_type: type[CookieStore] = CookieStore,
) -> CookieStore:
    """Load JSON-formatted cookies from `reader`, skipping expired cookies unless `include_expired` is set."""
    return load(
        reader,
        cookies_from_json,
        include_expired=include_expired,
        clock=clock,
        public_suffixes=public_suffixes,
        store_type=store_type,
    )


def save_json(store: CookieStore, writer: IO[str], *, scope: SaveScope = "persistent_and_unexpired") -> None:
    """Write cookies to `writer` as pretty printed JSON."""
    save(store, writer, cookies_to_json, scope=scope)


def load_ron(
    reader: IO[str],
    *,
    include_expired: bool = False,
    clock: Clock = utc_now,
    public_suffixes: PublicSuffixList | None = None,
    store_type: type[CookieStore] = CookieStore,
) -> CookieStore:
    """Load RON-formatted cookies from `reader`, skipping expired cookies unless `include_expired` is set."""
    return load(
        reader,
        cookies_from_ron,
        include_expired=include_expired,
        clock=clock,
        public_suffixes=public_suffixes,
        store_type=store_type,
    )


def save_ron(store: CookieStore, writer: IO[str], *, scope: SaveScope = "persistent_and_unexpired") -> None:
    """Write cookies to `writer` as pretty printed RON."""
    save(store, writer, cookies_to_ron, scope=scope)
