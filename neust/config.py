"""
Session Configuration
=====================
Single source of truth for the transport defaults a ``Session`` is built
with, and for the optional login hardening strategy.

Populate via:
    - ``SessionConfig()``                    → all defaults
    - ``SessionConfig(timeout_seconds=5)``   → override one value
    - ``SessionConfig.from_cli_args(ns)``    → from an argparse Namespace
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from . import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Canonical defaults
# ---------------------------------------------------------------------------
_DEFAULTS = {
    "user_agent": f"neust/{__version__}",
    "timeout_seconds": 20.0,
    "verify_ssl": True,
    "proxy": None,
    "max_redirects": 10,
    # Verify that GET login_url was not redirected away before posting the
    # login form.  A redirect means a session is already live on the endpoint.
    "check_login_redirect": True,
}


@dataclass(frozen=True)
class SessionConfig:
    """Options consumed by ``Session`` when it builds its HTTP client."""

    user_agent: str = _DEFAULTS["user_agent"]
    timeout_seconds: float = _DEFAULTS["timeout_seconds"]
    verify_ssl: bool = _DEFAULTS["verify_ssl"]
    proxy: Optional[str] = _DEFAULTS["proxy"]
    max_redirects: int = _DEFAULTS["max_redirects"]
    check_login_redirect: bool = _DEFAULTS["check_login_redirect"]

    @classmethod
    def from_cli_args(cls, args) -> "SessionConfig":
        """Build config from an argparse Namespace (``__main__.py``)."""
        return cls(
            timeout_seconds=getattr(args, "timeout_seconds", _DEFAULTS["timeout_seconds"]),
            verify_ssl=not getattr(args, "insecure", False),
            proxy=getattr(args, "proxy", None),
            check_login_redirect=not getattr(args, "skip_redirect_check", False),
        )

    def log_summary(self) -> None:
        """Emit the effective settings to the logger."""
        logger.info("=" * 48)
        logger.info("SESSION CONFIG")
        logger.info("=" * 48)
        logger.info(f"  User-Agent:       {self.user_agent}")
        logger.info(f"  Timeout:          {self.timeout_seconds}s per request")
        logger.info(f"  Verify TLS:       {self.verify_ssl}")
        if self.proxy:
            logger.info(f"  Proxy:            {self.proxy}")
        logger.info(f"  Max Redirects:    {self.max_redirects}")
        logger.info(f"  Redirect Check:   {self.check_login_redirect}")
        logger.info("=" * 48)
