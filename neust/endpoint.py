"""
Endpoint Registry
=================
One immutable record per route into the NEU CAS portal.

    - ``ENDPOINT_DIRECT``: ``pass.neu.edu.cn`` accessed directly
    - ``ENDPOINT_WEBVPN``: the same portal tunnelled through
      ``webvpn.neu.edu.cn``

WebVPN is both a service connected to CAS and a proxy that keeps the cookies
of the services behind it.  Services reached through the proxy see the proxy
as the user, so the proxy itself must be logged in: log in directly first,
then log in via WebVPN.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Endpoint:
    """Where to log in and which cookie carries the resulting session."""

    login_url: str
    status_check_url: str
    session_token_cookie_name: str
    cookie_scope_url: str
    verify_url: str
    """QR-code scan check URL, polled by ``QRAuthorization``."""


_WEBVPN_PASS_PREFIX = (
    "https://webvpn.neu.edu.cn/https/"
    "77726476706e69737468656265737421e0f6528f693e6d45300d8db9d6562d"
)

ENDPOINT_DIRECT = Endpoint(
    login_url="https://pass.neu.edu.cn/tpass/login",
    status_check_url="https://pass.neu.edu.cn/tpass/login",
    session_token_cookie_name="CASTGC",
    cookie_scope_url="https://pass.neu.edu.cn/tpass/",
    verify_url="https://pass.neu.edu.cn/tpass/checkQRCodeScan",
)

ENDPOINT_WEBVPN = Endpoint(
    login_url=f"{_WEBVPN_PASS_PREFIX}/tpass/login",
    status_check_url=f"{_WEBVPN_PASS_PREFIX}/tpass/login",
    session_token_cookie_name="wengine_vpn_ticketwebvpn_neu_edu_cn",
    cookie_scope_url="https://webvpn.neu.edu.cn/",
    verify_url=f"{_WEBVPN_PASS_PREFIX}/tpass/checkQRCodeScan",
)
