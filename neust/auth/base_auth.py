"""
Auth Method Base
================
Defines the contract every authentication method implements:

    ``await method.execute(session, endpoint) -> UserStatus``

The set of methods is closed.  The library owns the protocol set, so
subclasses defined outside ``neust.auth`` are refused when the class is
created.  Built-in methods:

    - ``Credential``:       username + password form login
    - ``Token``:            inject a previously issued session token
    - ``Cookie``:           inject a raw session cookie value
    - ``QRAuthorization``:  poll whether a WeChat user approved the login
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..endpoint import Endpoint
    from ..session import Session
    from ..status import UserStatus


class AuthMethod(ABC):
    """Sealed base for the built-in authentication methods."""

    __slots__ = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if not cls.__module__.startswith(f"{__package__}."):
            raise TypeError(
                f"{cls.__qualname__}: AuthMethod is sealed; "
                f"only methods defined in {__package__} are supported"
            )

    @abstractmethod
    async def execute(self, session: "Session", endpoint: "Endpoint") -> "UserStatus":
        """Perform this method's protocol and report the resulting status.

        One attempt only.  Implementations finish by delegating to
        ``session.check_status(endpoint)`` unless they can decide the
        outcome without it.
        """
        ...
