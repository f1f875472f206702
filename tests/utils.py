from datetime import UTC, datetime

from pycookiestore.http.cookie import Cookie

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


def make_cookie(cookie: str, url: str = "http://example.com/foo/bar") -> Cookie:
    return Cookie.parse(cookie, url, now=NOW)
