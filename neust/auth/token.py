"""Resume a session from a value issued by an earlier login."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..endpoint import Endpoint
from ..session import Session
from ..status import UserStatus
from .base_auth import AuthMethod


@dataclass(frozen=True)
class Token(AuthMethod):
    """An endpoint-specific session token, e.g. ``UserStatus.get_token()``.

    No request is made besides the status check.  The value is hidden from
    ``str()`` and ``repr()``.
    """

    value: str = field(repr=False)

    async def execute(self, session: Session, endpoint: Endpoint) -> UserStatus:
        session.inject_cookie(endpoint, self.value)
        return await session.check_status(endpoint)

    def __str__(self) -> str:
        return "token"


@dataclass(frozen=True)
class Cookie(AuthMethod):
    """A raw session cookie value, injected verbatim."""

    value: str = field(repr=False)

    async def execute(self, session: Session, endpoint: Endpoint) -> UserStatus:
        session.inject_cookie(endpoint, self.value)
        return await session.check_status(endpoint)

    def __str__(self) -> str:
        return "cookie"
