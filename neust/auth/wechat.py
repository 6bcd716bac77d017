"""
QR-Code (WeChat) Authorization
==============================
Out-of-band login: a human opens ``get_auth_url()`` in WeChat and approves;
meanwhile the program asks the portal whether the correlation id has been
approved.

``execute`` performs ONE check.  An empty verify response means "not yet" and
yields ``Rejected`` without touching the status page.  Repeating the check
until approval (or a deadline) is the caller's business; see
``neust.polling.poll_login``.
"""

from __future__ import annotations

import logging
import math
import random
import time
from dataclasses import dataclass, field
from typing import Optional

from ..endpoint import Endpoint
from ..session import Session
from ..status import Rejected, UserStatus
from .base_auth import AuthMethod

logger = logging.getLogger(__name__)

WECHAT_AUTH_URL = "https://pass.neu.edu.cn/tpass/qyQrLogin"

_HEX_DIGITS = "0123456789abcdef"
_HYPHEN_POSITIONS = frozenset((8, 13, 18, 23))


def generate_uuid() -> str:
    """Correlation id in 8-4-4-4-12 shape, seeded from the current time.

    Mirrors the portal page's own generator: each digit mixes the running
    millisecond timestamp with a random nibble, then the timestamp is
    divided by 16.  Only uniqueness matters to the server.
    """
    d = float(int(time.time() * 1000))
    chars = []
    for i in range(36):
        if i in _HYPHEN_POSITIONS:
            chars.append("-")
            continue
        r = int(d + random.random() * 16) % 16
        d = math.floor(d / 16)
        chars.append(_HEX_DIGITS[r])
    return "".join(chars)


@dataclass(frozen=True)
class QRAuthorization(AuthMethod):
    """An auth method that takes authorization from WeChat.

    Pass an existing ``uuid`` to resume polling a previously shown QR code;
    leave it out to get a fresh one.
    """

    uuid: str = field(default_factory=generate_uuid)

    @classmethod
    def from_uuid(cls, uuid: Optional[str] = None) -> "QRAuthorization":
        return cls(uuid) if uuid else cls()

    def get_auth_url(self) -> str:
        """URL the user must open in WeChat to approve this login."""
        return f"{WECHAT_AUTH_URL}?uuid={self.uuid}"

    def verify_params(self) -> dict:
        return {"random": str(random.random()), "uuid": self.uuid}

    async def execute(self, session: Session, endpoint: Endpoint) -> UserStatus:
        _, body = await session.fetch_text(
            "GET", endpoint.verify_url, params=self.verify_params()
        )
        if not body:
            logger.debug(f"[WECHAT] {self.uuid} not approved yet")
            return Rejected()

        logger.info(f"[WECHAT] {self.uuid} approved, checking status")
        return await session.check_status(endpoint)

    def __str__(self) -> str:
        return f"wechat#{self.uuid}"


# Name used by the portal for this flow.
Wechat = QRAuthorization
