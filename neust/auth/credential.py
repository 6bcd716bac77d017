"""
Credential Login
================
Username + password login through the portal's HTML form.

Flow:
    1. GET the login page (optionally verifying it was not redirected away)
    2. Scrape the login-transaction token ``LT-...-tpass``
    3. POST the form in the exact shape the portal's client-side script
       produces: ``rsa`` is username, password and lt concatenated
    4. Classify the result with the session's shared status check
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from ..endpoint import Endpoint
from ..errors import ParsePageError, StatusConflict
from ..session import Session
from ..status import UserStatus
from .base_auth import AuthMethod

logger = logging.getLogger(__name__)

_LT_RE = re.compile(r"LT-[0-9a-zA-Z-]+-tpass")

_FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


def _utf8_len(text: str) -> int:
    return len(text.encode("utf-8"))


@dataclass(frozen=True)
class Credential(AuthMethod):
    """An auth method that takes username and password.

    The password is left out of both ``str()`` and ``repr()``.
    """

    username: str
    password: str = field(repr=False)

    def build_login_body(self, lt: str) -> str:
        # Not URL-encoded: the portal expects the raw concatenation.
        # ul / pl are UTF-8 byte lengths.
        return (
            f"rsa={self.username}{self.password}{lt}"
            f"&ul={_utf8_len(self.username)}&pl={_utf8_len(self.password)}"
            f"&lt={lt}&execution=e1s1&_eventId=submit"
        )

    async def execute(self, session: Session, endpoint: Endpoint) -> UserStatus:
        final_url, page = await session.fetch_text("GET", endpoint.login_url)

        if session.config.check_login_redirect and not final_url.startswith(endpoint.login_url):
            logger.warning(
                f"[CREDENTIAL] Login page redirected to {final_url}; "
                f"a session is already in progress on this endpoint"
            )
            raise StatusConflict(
                f"login page {endpoint.login_url} redirected to {final_url}"
            )

        lt_match = _LT_RE.search(page)
        if not lt_match:
            logger.warning(f"[CREDENTIAL] No login token found at {final_url}")
            raise ParsePageError(final_url)
        lt = lt_match.group(0)

        logger.debug(f"[CREDENTIAL] Submitting login form for {self.username}")
        await session.fetch_text(
            "POST",
            endpoint.login_url,
            data=self.build_login_body(lt),
            headers=_FORM_HEADERS,
        )

        return await session.check_status(endpoint)

    def __str__(self) -> str:
        return f"credential#{self.username}"
