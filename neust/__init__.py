"""
neust
=====
NEU CAS binding: log in to ``pass.neu.edu.cn`` (directly or through the
``webvpn.neu.edu.cn`` proxy) and get an authenticated aiohttp session.

Usage::

    import asyncio
    from neust import Session, encrypt_url
    from neust.auth import Credential

    async def main():
        credential = Credential("20180000", "password")
        async with Session() as session:
            if not (await session.login(credential)).is_active():
                raise SystemExit("login failed")
            if not (await session.login_via_webvpn(credential)).is_active():
                raise SystemExit("webvpn login failed")
            url = encrypt_url("http://219.216.96.4/eams/homeExt.action")
            async with session.client.get(url) as response:
                print(await response.text())

    asyncio.run(main())

CLI Usage:
    python -m neust <command> [options]   (see ``python -m neust --help``)
"""

__version__ = "0.1.0"

from . import auth
from .config import SessionConfig
from .endpoint import ENDPOINT_DIRECT, ENDPOINT_WEBVPN, Endpoint
from .errors import NeustError, ParsePageError, PollTimeout, StatusConflict, TransportError
from .polling import poll_login
from .session import Session, find_cookie_value
from .status import Active, Banned, NeedReset, Rejected, UserStatus, classify
from .webvpn import encrypt_url

__all__ = [
    'Session',
    'SessionConfig',
    'find_cookie_value',
    # Endpoints
    'Endpoint',
    'ENDPOINT_DIRECT',
    'ENDPOINT_WEBVPN',
    # Outcomes
    'UserStatus',
    'Active',
    'NeedReset',
    'Banned',
    'Rejected',
    'classify',
    # Errors
    'NeustError',
    'StatusConflict',
    'ParsePageError',
    'TransportError',
    'PollTimeout',
    # Helpers
    'auth',
    'encrypt_url',
    'poll_login',
]
