"""Cookie types and interfaces."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CookieProvider(Protocol):
    """Cookie provider plugged into an HTTP client. `CookieStore` implements it.

    The client hands every response's Set-Cookie headers to `set_cookies` and asks `cookies` for the Cookie header of
    every request it is about to send.
    """

    def set_cookies(self, cookie_headers: list[str], url: str) -> None:
        """Set cookies for a given URL.

        This method is called when the HTTP client receives Set-Cookie headers
        from a server response. Cookies that are not valid for the URL are ignored.

        Args:
            cookie_headers: List of Set-Cookie header values received from url
            url: The URL that sent the Set-Cookie headers
        """

    def cookies(self, url: str) -> str | None:
        """Get cookies for a given URL.

        This method is called when the HTTP client is about to make a request
        and needs to determine which cookies to send.

        Args:
            url: The URL for which cookies are requested

        Returns:
            A string containing the Cookie header value, or None if no cookies
        """
