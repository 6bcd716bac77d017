"""
Session
=======
Owns the HTTP client and the one cookie jar every request of a logical user
session goes through.

Responsibilities:
    1. Build an ``aiohttp.ClientSession`` with a fixed user-agent and a
       private ``CookieJar`` (callers may tune anything else).
    2. Run an auth method against an ``Endpoint``.
    3. Provide the shared status check every auth method finishes with:
       fetch the status page, read the session cookie, classify the page.

The client is bound to the running event loop, so it is created lazily the
first time a coroutine needs it.  ``clone()`` hands out another handle to the
same client and jar; cookies are shared by design.  No locking is done: drive
one logical session from one task at a time.

Usage::

    async with Session() as session:
        status = await session.login(Credential("20180000", "password"))
        if status.is_active():
            print(status.get_username(), status.get_token())
"""

from __future__ import annotations

import asyncio
import logging
from http.cookies import Morsel
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

import aiohttp
from yarl import URL

from .config import SessionConfig
from .endpoint import ENDPOINT_DIRECT, ENDPOINT_WEBVPN, Endpoint
from .errors import TransportError
from .status import UserStatus, classify

if TYPE_CHECKING:
    from .auth.base_auth import AuthMethod

logger = logging.getLogger(__name__)

# Options that would replace the Session's own cookie handling.
_RESERVED_CLIENT_OPTIONS = ("cookie_jar", "cookies")


def find_cookie_value(raw: str, cookie_name: str) -> Optional[str]:
    """Extract ``cookie_name`` from a ``Cookie:`` header string.

    The value runs up to the next ``;`` or the end of the string.
    Returns None when the cookie is absent (always for an empty header).
    """
    for segment in raw.split(";"):
        name, sep, value = segment.strip().partition("=")
        if sep and name == cookie_name:
            return value
    return None


class _Transport:
    """Client + cookie jar shared between a Session and its clones."""

    def __init__(self, config: SessionConfig, client_options: Dict[str, Any]):
        self.config = config
        self.client_options = client_options
        self.client: Optional[aiohttp.ClientSession] = None
        self.cookie_jar: Optional[aiohttp.CookieJar] = None

    def ensure_client(self) -> aiohttp.ClientSession:
        if self.client is not None:
            return self.client

        options = dict(self.client_options)
        headers = dict(options.pop("headers", None) or {})
        headers["User-Agent"] = self.config.user_agent
        options.setdefault(
            "timeout", aiohttp.ClientTimeout(total=self.config.timeout_seconds)
        )

        # unsafe=True keeps cookies of IP-addressed intranet hosts.
        self.cookie_jar = aiohttp.CookieJar(unsafe=True)
        self.client = aiohttp.ClientSession(
            cookie_jar=self.cookie_jar, headers=headers, **options
        )
        logger.debug(f"[SESSION] HTTP client created (UA: {self.config.user_agent})")
        return self.client

    async def close(self) -> None:
        if self.client is not None and not self.client.closed:
            await self.client.close()


class Session:
    """An authenticated (or soon to be) conversation with the NEU portal."""

    def __init__(self, config: Optional[SessionConfig] = None, **client_options: Any):
        """
        Args:
            config:          Transport and login-strategy settings.
            client_options:  Extra keyword arguments for
                             ``aiohttp.ClientSession`` (e.g. ``connector``).
                             Cookie handling cannot be overridden.
        """
        for key in _RESERVED_CLIENT_OPTIONS:
            if key in client_options:
                raise ValueError(f"Session manages its own cookies; '{key}' is not allowed")
        self._transport = _Transport(config or SessionConfig(), client_options)

    @classmethod
    def _from_transport(cls, transport: _Transport) -> "Session":
        session = cls.__new__(cls)
        session._transport = transport
        return session

    def clone(self) -> "Session":
        """Return another handle on the same client and cookie jar."""
        return Session._from_transport(self._transport)

    # ── Resources ─────────────────────────────────────────────────

    @property
    def config(self) -> SessionConfig:
        return self._transport.config

    @property
    def client(self) -> aiohttp.ClientSession:
        """The shared aiohttp client (created on first access)."""
        return self._transport.ensure_client()

    @property
    def cookie_jar(self) -> aiohttp.CookieJar:
        self._transport.ensure_client()
        return self._transport.cookie_jar

    async def close(self) -> None:
        """Close the shared client.  Affects every clone."""
        await self._transport.close()

    async def __aenter__(self) -> "Session":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # ── HTTP + cookie primitives ──────────────────────────────────

    async def fetch_text(self, method: str, url: str, **kwargs: Any) -> Tuple[str, str]:
        """Send one request and return ``(final_url, body)``.

        Redirects are followed.  Failures of the HTTP layer are raised as
        ``TransportError`` with the original exception chained.  Bytes that
        do not decode in the declared charset become U+FFFD.
        """
        config = self.config
        kwargs.setdefault("max_redirects", config.max_redirects)
        if config.proxy:
            kwargs.setdefault("proxy", config.proxy)
        if not config.verify_ssl:
            kwargs.setdefault("ssl", False)

        client = self.client
        logger.debug(f"[SESSION] {method} {url}")
        try:
            async with client.request(method, url, **kwargs) as response:
                body = await response.text(errors="replace")
                final_url = str(response.url)
                status_code = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"[SESSION] {method} {url} failed: {e!r}")
            raise TransportError(f"{method} {url} failed: {e!r}") from e

        logger.debug(f"[SESSION] {status_code} {final_url} ({len(body)} chars)")
        return final_url, body

    def cookie_header(self, url: str) -> str:
        """Render the jar's cookies for *url* as a ``Cookie:`` header value.

        Values appear as they go on the wire.
        """
        cookies = self.cookie_jar.filter_cookies(URL(url))
        return "; ".join(f"{morsel.key}={morsel.coded_value}" for morsel in cookies.values())

    def inject_cookie(self, endpoint: Endpoint, value: str) -> None:
        """Store ``<session cookie name>=value`` scoped to the endpoint.

        The value is sent verbatim, never quoted.
        """
        name = endpoint.session_token_cookie_name
        morsel = Morsel()
        morsel.set(name, value, value)
        self.cookie_jar.update_cookies(
            {name: morsel},
            response_url=URL(endpoint.cookie_scope_url),
        )
        logger.debug(
            f"[SESSION] Injected {endpoint.session_token_cookie_name} "
            f"for {endpoint.cookie_scope_url}"
        )

    # ── Status ────────────────────────────────────────────────────

    async def check_status(self, endpoint: Endpoint = ENDPOINT_DIRECT) -> UserStatus:
        """Fetch the endpoint's status page and classify it."""
        _, body = await self.fetch_text("GET", endpoint.status_check_url)
        token = find_cookie_value(
            self.cookie_header(endpoint.cookie_scope_url),
            endpoint.session_token_cookie_name,
        )
        status = classify(body, token)
        logger.info(f"[SESSION] Status at {endpoint.status_check_url}: {status}")
        return status

    async def check_status_via_webvpn(self) -> UserStatus:
        return await self.check_status(ENDPOINT_WEBVPN)

    # ── Login ─────────────────────────────────────────────────────

    async def run(self, method: "AuthMethod", endpoint: Endpoint) -> UserStatus:
        """Execute *method* against *endpoint*; one attempt, no retries."""
        logger.info(f"[SESSION] Login with {method} at {endpoint.login_url}")
        return await method.execute(self, endpoint)

    async def login(self, method: "AuthMethod") -> UserStatus:
        return await self.run(method, ENDPOINT_DIRECT)

    async def login_via_webvpn(self, method: "AuthMethod") -> UserStatus:
        """Log the WebVPN proxy in.  Log in directly first."""
        return await self.run(method, ENDPOINT_WEBVPN)
