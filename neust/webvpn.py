"""
WebVPN URL Encoding
===================
Rewrites a plain intranet URL into the form ``webvpn.neu.edu.cn`` proxies.

The proxy expects the hostname "encrypted" with AES-128 in CFB mode (128-bit
segments) using the fixed key ``wrdvpnisthebest!`` as both key and IV, hex
encoded and prefixed with the hex of the key itself.  This is obfuscation
only; the key is public and the output is deterministic.

Example::

    >>> encrypt_url("http://219.216.96.4/eams/homeExt.action")
    'https://webvpn.neu.edu.cn/http/77726476706e69737468656265737421a2a618d275613e1e275ec7f8/eams/homeExt.action'
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from Crypto.Cipher import AES

logger = logging.getLogger(__name__)

WEBVPN_HOST = "webvpn.neu.edu.cn"

_KEY = b"wrdvpnisthebest!"
_KEY_HEX = _KEY.hex()


def _encrypt_host(hostname: str) -> str:
    cipher = AES.new(_KEY, AES.MODE_CFB, iv=_KEY, segment_size=128)
    return _KEY_HEX + cipher.encrypt(hostname.encode("utf-8")).hex()


def _split_scheme(url: str) -> Tuple[str, str]:
    """Infer the scheme; anything but ``https://`` is treated as http."""
    if url.startswith("https://"):
        return "https", url[len("https://"):]
    for prefix in ("http://", "//"):
        if url.startswith(prefix):
            return "http", url[len(prefix):]
    return "http", url


def _split_port(rest: str) -> Tuple[str, Optional[str]]:
    """Remove ``:port`` from *rest*, returning the remainder and the port."""
    segments = rest.split("?", 1)[0].split(":")
    if len(segments) < 2:
        return rest, None

    host_len = len(segments[0])
    port = segments[1].split("/", 1)[0]
    return rest[:host_len] + rest[host_len + len(port) + 1:], port


def encrypt_url(url: str) -> str:
    """Return the WebVPN address of *url*.

    Scheme inference:
        - ``https://...``                 → https
        - ``http://...``, ``//...``, bare → http

    Only the hostname is encrypted; port and path/query are carried over.
    """
    scheme, rest = _split_scheme(url)
    rest, port = _split_port(rest)

    slash = rest.find("/")
    if slash == -1:
        encrypted = _encrypt_host(rest)
    else:
        encrypted = _encrypt_host(rest[:slash]) + rest[slash:]

    route = f"{scheme}-{port}" if port is not None else scheme
    result = f"https://{WEBVPN_HOST}/{route}/{encrypted}"
    logger.debug(f"[WEBVPN] {url} -> {result}")
    return result
