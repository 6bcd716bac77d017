"""
Authentication Methods
======================
The closed set of ways to log a ``Session`` in.  Each one is an immutable
value (equal when built from equal arguments) driven by
``Session.run(method, endpoint)`` or ``Session.login(method)``.

Usage::

    from neust import Session
    from neust.auth import Credential, Token

    async with Session() as session:
        status = await session.login(Credential("20180000", "password"))

    async with Session() as session:
        status = await session.login(Token(status.get_token()))
"""

from .base_auth import AuthMethod
from .credential import Credential
from .token import Cookie, Token
from .wechat import QRAuthorization, Wechat, generate_uuid

__all__ = [
    "AuthMethod",
    "Credential",
    "Token",
    "Cookie",
    "QRAuthorization",
    "Wechat",
    "generate_uuid",
]
