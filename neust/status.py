"""
User Status
===========
The closed set of outcomes a login or status check can produce, and the
classifier that maps a portal page onto one of them.

The classifier is a fixed lookup on the page ``<title>``.  The titles belong
to an external site we do not control, so the table is reverse-engineered
and will need updating if the portal changes its templates.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_TITLE_RE = re.compile(r"<title>(.+?)</title>")
_USERNAME_RE = re.compile(r'var id_number = "(.+?)"')

TITLE_REJECTED = "智慧东大--统一身份认证"
TITLE_NEED_RESET = "智慧东大"
TITLE_BANNED = "系统提示"


class UserStatus:
    """Base of the four outcome variants.  Not instantiated directly."""

    __slots__ = ()

    def is_active(self) -> bool:
        return isinstance(self, Active)

    def is_rejected(self) -> bool:
        return isinstance(self, Rejected)

    def get_username(self) -> Optional[str]:
        return None

    def get_token(self) -> Optional[str]:
        """Session token; may be an empty string on an unexpected page."""
        return getattr(self, "token", None)


@dataclass(frozen=True)
class Active(UserStatus):
    token: str
    username: str

    def get_username(self) -> Optional[str]:
        return self.username

    def __str__(self) -> str:
        return f"active#{self.username}"


@dataclass(frozen=True)
class NeedReset(UserStatus):
    """Logged in, but the portal demands a password reset."""

    token: str

    def __str__(self) -> str:
        return "need reset"


@dataclass(frozen=True)
class Banned(UserStatus):
    token: str

    def __str__(self) -> str:
        return "banned"


@dataclass(frozen=True)
class Rejected(UserStatus):
    """Authentication failed, or there is no active session.

    The portal gives no signal to tell the two apart; the caller knows which
    one it asked for.
    """

    def __str__(self) -> str:
        return "rejected"


def classify(html: str, token: Optional[str] = None) -> UserStatus:
    """Classify a portal page (plus the session cookie, if any)."""
    title_match = _TITLE_RE.search(html)
    title = title_match.group(1) if title_match else None

    username_match = _USERNAME_RE.search(html)
    username = username_match.group(1) if username_match else ""

    token = token or ""

    if title == TITLE_REJECTED:
        return Rejected()
    if title == TITLE_NEED_RESET:
        return NeedReset(token=token)
    if title == TITLE_BANNED:
        return Banned(token=token)
    return Active(token=token, username=username)
