"""pycookiestore - RFC 6265 cookie jar for HTTP clients.

Modelled after the cookie store used by [reqwest](https://github.com/seanmonstar/reqwest) clients.

Features:
- Validated cookies (domain-match, path-match, HttpOnly and Secure rules)
- Max-Age / Expires / session expiration precedence
- Indexed store with last-write-wins replacement by (domain, path, name)
- Optional public suffix rejection
- JSON and RON persistence
- Injectable clock for deterministic tests
- Type-safe APIs with Python type hints
"""
