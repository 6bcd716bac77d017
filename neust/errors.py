"""
Error Kinds
===========
Every failure raised by ``neust`` derives from ``NeustError``.

    - ``StatusConflict``: the portal is not in the state a login expects
    - ``ParsePageError``: the portal page no longer has the expected shape
    - ``TransportError``: network / TLS / timeout failure from aiohttp
    - ``PollTimeout``: the caller-side polling helper ran out of time

``Rejected`` is an outcome, not an error.
"""

from __future__ import annotations


class NeustError(Exception):
    """Base class for all errors raised by this package."""


class StatusConflict(NeustError):
    """The current session state does not match the requested login action.

    Typically raised when the login page redirects elsewhere because a
    session is already established on the endpoint, or when logging in via
    WebVPN before the direct session exists.
    """

    def __init__(self, message: str = "session status conflicts with the login request"):
        super().__init__(message)


class ParsePageError(NeustError):
    """The portal served a page we could not scrape."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"can not parse the page of url {url}")


class TransportError(NeustError):
    """Wraps a failure of the HTTP layer without reinterpreting it."""


class PollTimeout(NeustError):
    """No non-rejected outcome was produced before the polling deadline."""
