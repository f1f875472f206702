"""Basic usage examples for pycookiestore.

Run directly:
    uv run python -m examples.basic_store
"""

import io
import sys
import tempfile
from datetime import UTC, datetime, timedelta
from pathlib import Path

from pycookiestore.exceptions import CookieError
from pycookiestore.http.cookie import Cookie, CookieBuilder, CookieStore, TldextractSuffixList


def example_store_and_send() -> None:
    """Example 1: Store response cookies and build the Cookie header"""
    store = CookieStore()
    store.store_response_cookies(
        ["sid=abc123; Path=/; HttpOnly; Secure", "theme=dark; Domain=example.com; Path=/"],
        "https://www.example.com/login",
    )
    print(
        {
            "example": "store_and_send",
            "stored": len(store),
            "https_www": store.cookie_header("https://www.example.com/account"),
            "http_www": store.cookie_header("http://www.example.com/account"),
            "https_shop": store.cookie_header("https://shop.example.com/"),
        }
    )


def example_validation_errors() -> None:
    """Example 2: Cookies rejected for the request URL"""
    store = CookieStore(public_suffixes=TldextractSuffixList())
    results: dict[str, str] = {}
    for set_cookie, url in [
        ("a=1; Domain=other.com", "http://example.com/"),
        ("b=1; Domain=co.uk", "http://example.co.uk/"),
        ("c=1; HttpOnly", "ftp://example.com/"),
        ("no pair", "http://example.com/"),
    ]:
        try:
            store.parse(set_cookie, url)
            results[set_cookie] = "stored"
        except CookieError as e:
            results[set_cookie] = type(e).__name__
    print({"example": "validation_errors", "results": results, "stored": len(store)})


def example_expiration() -> None:
    """Example 3: Expiration driven by the store clock"""
    now = datetime.now(UTC).replace(microsecond=0)
    store = CookieStore(clock=lambda: now)
    store.parse("short=1; Max-Age=60", "http://example.com/")
    store.parse("session=1", "http://example.com/")
    before = store.cookie_header("http://example.com/")
    now += timedelta(minutes=1)
    after = store.cookie_header("http://example.com/")
    print(
        {
            "example": "expiration",
            "before": before,
            "after": after,
            "unexpired": len(store.get_all_unexpired()),
            "any": len(store.get_all_any()),
        }
    )


def example_builder() -> None:
    """Example 4: Build a cookie and validate it against a URL"""
    raw = (
        CookieBuilder("pref", "1")
        .path("/app")
        .domain("example.com")
        .max_age(timedelta(days=1))
        .same_site("Lax")
        .secure(True)
        .build()
    )
    cookie = Cookie.from_raw_cookie(raw, "https://api.example.com/app/index")
    print(
        {
            "example": "builder",
            "set_cookie": str(raw),
            "key": cookie.key,
            "persistent": cookie.is_persistent(),
            "matches_api": cookie.matches("https://api.example.com/app/x"),
            "matches_http": cookie.matches("http://api.example.com/app/x"),
        }
    )


def example_persistence() -> None:
    """Example 5: Save to and load from a JSON file"""
    store = CookieStore()
    store.parse("persistent=1; Max-Age=3600", "http://example.com/")
    store.parse("session=1", "http://example.com/")

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "cookies.json"
        with path.open("w") as f:
            store.save_json(f)
        with path.open() as f:
            loaded = store.load_json(f)

    ron = io.StringIO()
    store.save_ron(ron, scope="all")
    print(
        {
            "example": "persistence",
            "saved": sorted(c.name for c in loaded.iter_any()),
            "ron_records": ron.getvalue().count("raw_cookie"),
        }
    )


if __name__ == "__main__":  # pragma: no cover
    from ._utils import run_examples

    run_examples(sys.modules[__name__])
