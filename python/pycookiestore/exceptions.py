"""Exceptions raised by the cookie store."""


class CookieError(Exception):
    """Base class for all cookie errors."""

    default_message = "cookie error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NonHttpSchemeError(CookieError):
    """Cookie had the HttpOnly attribute but was received from a request URL which was not an http scheme."""

    default_message = "request-uri is not an http scheme but HttpOnly attribute set"


class NonRelativeSchemeError(CookieError):
    """Cookie did not specify a domain and the host could not be determined from the request URL."""

    default_message = "request-uri is not a relative scheme; cannot determine host"


class DomainMismatchError(CookieError):
    """Cookie received from a request URL that does not domain-match the Domain attribute."""

    default_message = "request-uri does not domain-match the cookie"


class ExpiredError(CookieError):
    """Attempted to use an expired cookie where an unexpired one is required."""

    default_message = "attempted to utilize an Expired Cookie"


class CookieParseError(CookieError):
    """Cookie text or one of its attributes could not be parsed."""

    default_message = "unable to parse string as cookie"


class PublicSuffixError(CookieError):
    """Domain attribute is a public suffix that does not equal the request host."""

    default_message = "domain-attribute value is a public suffix"


class UnspecifiedDomainError(CookieError):
    """Domain attribute is absent or empty in a context requiring a domain value."""

    default_message = "domain-attribute is not specified"


class CookieStoreError(CookieError):
    """Loading or saving a cookie store failed. The underlying error is chained as __cause__."""

    default_message = "cookie store persistence failed"
