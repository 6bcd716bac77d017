"""
Polling Helper
==============
Caller-side wrapper for flows that need repeated attempts, chiefly
``QRAuthorization``: run the method every *interval* seconds while the
outcome is ``Rejected``, giving up after *timeout* seconds overall.

The auth methods themselves never loop or sleep; this lives outside them so
the retry policy stays a caller decision.
"""

from __future__ import annotations

import asyncio
import logging

from .auth.base_auth import AuthMethod
from .endpoint import ENDPOINT_DIRECT, Endpoint
from .errors import PollTimeout
from .session import Session
from .status import UserStatus

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_POLL_TIMEOUT = 60.0


async def _poll(session: Session, method: AuthMethod, endpoint: Endpoint,
                interval: float) -> UserStatus:
    attempt = 0
    while True:
        attempt += 1
        status = await session.run(method, endpoint)
        if not status.is_rejected():
            logger.info(f"[POLL] {method} settled after {attempt} attempt(s): {status}")
            return status
        logger.debug(f"[POLL] Attempt {attempt}: still rejected, sleeping {interval}s")
        await asyncio.sleep(interval)


async def poll_login(
    session: Session,
    method: AuthMethod,
    endpoint: Endpoint = ENDPOINT_DIRECT,
    *,
    interval: float = DEFAULT_POLL_INTERVAL,
    timeout: float = DEFAULT_POLL_TIMEOUT,
) -> UserStatus:
    """Repeat ``session.run(method, endpoint)`` until it is not ``Rejected``.

    Returns the first non-rejected status (which may be ``Banned`` or
    ``NeedReset``; inspect it).  Errors from an attempt propagate at once.

    Raises:
        PollTimeout: if every attempt within *timeout* seconds was rejected.
    """
    try:
        return await asyncio.wait_for(_poll(session, method, endpoint, interval), timeout)
    except asyncio.TimeoutError as e:
        logger.warning(f"[POLL] {method} still rejected after {timeout}s")
        raise PollTimeout(f"{method} was not approved within {timeout}s") from e
