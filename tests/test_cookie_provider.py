from collections import defaultdict

from pycookiestore.cookie import CookieProvider
from pycookiestore.http.cookie import CookieStore
from pycookiestore.pytest_plugin import FrozenClock


class CookieProviderTest:
    def __init__(self) -> None:
        self.cookie_store: dict[str, list[str]] = defaultdict(list)

    def set_cookies(self, cookie_headers: list[str], url: str) -> None:
        self.cookie_store[url].extend(cookie_headers)

    def cookies(self, url: str) -> str | None:
        if url in self.cookie_store:
            return "; ".join(self.cookie_store[url])
        return None


def send(provider: CookieProvider, url: str, set_cookie: list[str]) -> str | None:
    """Act like a client: send the Cookie header, then store the response's Set-Cookie headers."""
    cookie_header = provider.cookies(url)
    provider.set_cookies(set_cookie, url)
    return cookie_header


def test_cookie_provider__protocol():
    assert isinstance(CookieStore(), CookieProvider)
    assert isinstance(CookieProviderTest(), CookieProvider)
    assert not isinstance(object(), CookieProvider)


def test_cookie_provider__custom():
    provider = CookieProviderTest()

    assert send(provider, "http://example.com/a", ["cookiekey1=cookieval1"]) is None
    assert send(provider, "http://example.com/a", []) == "cookiekey1=cookieval1"
    assert provider.cookie_store == {"http://example.com/a": ["cookiekey1=cookieval1"]}


def test_cookie_provider__store(clock: FrozenClock):
    store = CookieStore(clock=clock)
    url1 = "http://example.com/login"
    url2 = "http://example.com/account/settings"

    assert send(store, url1, ["cookiekey1=cookieval1; Path=/", "bad cookie", "x=1; Domain=other.com"]) is None
    assert send(store, url2, ["cookiekey2=cookieval2"]) == "cookiekey1=cookieval1"
    assert store.cookies(url2) == "cookiekey1=cookieval1; cookiekey2=cookieval2"
    assert store.cookies("http://example.com/") == "cookiekey1=cookieval1"
    assert store.cookies("http://other.com/") is None

    store.set_cookies(["cookiekey1=; Path=/; Max-Age=0"], url1)
    assert store.cookies(url2) == "cookiekey2=cookieval2"
