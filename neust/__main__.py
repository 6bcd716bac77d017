#!/usr/bin/env python3
"""
neust CLI
=========
Command-line front end for the NEU CAS binding.

Commands:
    login    Log in with username + password (env / prompt / flag)
    token    Resume a session from a token printed by ``login``
    cookie   Same as ``token``, for a raw cookie value
    wechat   Print a WeChat authorization URL and wait for approval
    encrypt  Print the WebVPN form of one or more intranet URLs
    fetch    Log in directly and via WebVPN, then print an intranet page

Credentials are read from ``NEU_USERNAME`` / ``NEU_PASSWORD`` (a ``.env``
file is honoured) and prompted for when missing.

Run with: python -m neust <command> --help
"""

import argparse
import asyncio
import getpass
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .auth import Cookie, Credential, QRAuthorization, Token
from .config import SessionConfig
from .endpoint import ENDPOINT_DIRECT, ENDPOINT_WEBVPN
from .errors import NeustError
from .polling import DEFAULT_POLL_INTERVAL, DEFAULT_POLL_TIMEOUT, poll_login
from .session import Session
from .status import UserStatus
from .webvpn import encrypt_url

logger = logging.getLogger(__name__)

_ENV_PREFIXES = ("NEU", "TEST")


# ---------------------------------------------------------------------------
# Credential resolution
# ---------------------------------------------------------------------------

def resolve_credential(username: Optional[str] = None, *, interactive: bool = True) -> Credential:
    """Build a ``Credential`` from the flag, env vars and a terminal prompt.

    Resolution order per field:
        1. Explicit *username* argument
        2. ``{PREFIX}_USERNAME`` / ``{PREFIX}_PASSWORD`` for each prefix
        3. Interactive prompt (``getpass`` for the password)
    """
    password = ""
    for prefix in _ENV_PREFIXES:
        if not username:
            username = os.environ.get(f"{prefix}_USERNAME", "")
        if not password:
            password = os.environ.get(f"{prefix}_PASSWORD", "")

    if interactive:
        if not username:
            username = input("  NEU username: ").strip()
        if not password:
            password = getpass.getpass("  NEU password: ")

    if not username or not password:
        raise NeustError("username and password are required")
    return Credential(username, password)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _require_active(status: UserStatus, what: str) -> UserStatus:
    if not status.is_active():
        raise NeustError(f"{what} did not produce an active session: {status}")
    return status


def _report(status: UserStatus) -> None:
    print(f"status:   {status}")
    if status.get_username() is not None:
        print(f"username: {status.get_username()}")
    if status.get_token():
        print(f"token:    {status.get_token()}")


async def _cmd_login(session: Session, args) -> int:
    credential = resolve_credential(args.username, interactive=not args.no_prompt)
    status = await session.login(credential)
    if args.webvpn:
        _require_active(status, "direct login")
        status = await session.login_via_webvpn(credential)
    _report(status)
    return 0 if status.is_active() else 1


async def _cmd_resume(session: Session, args) -> int:
    method = Token(args.value) if args.command == "token" else Cookie(args.value)
    endpoint = ENDPOINT_WEBVPN if args.webvpn else ENDPOINT_DIRECT
    status = await session.run(method, endpoint)
    _report(status)
    return 0 if status.is_active() else 1


async def _cmd_wechat(session: Session, args) -> int:
    method = QRAuthorization.from_uuid(args.uuid)
    print(f"\n  Open in WeChat and approve:\n  {method.get_auth_url()}\n")
    status = await poll_login(
        session, method, ENDPOINT_DIRECT,
        interval=args.interval, timeout=args.timeout,
    )
    _report(status)
    return 0 if status.is_active() else 1


async def _cmd_fetch(session: Session, args) -> int:
    credential = resolve_credential(args.username, interactive=not args.no_prompt)
    _require_active(await session.login(credential), "direct login")
    _require_active(await session.login_via_webvpn(credential), "WebVPN login")

    _, body = await session.fetch_text("GET", encrypt_url(args.url))
    print(body)
    return 0


_ASYNC_COMMANDS = {
    "login": _cmd_login,
    "token": _cmd_resume,
    "cookie": _cmd_resume,
    "wechat": _cmd_wechat,
    "fetch": _cmd_fetch,
}


async def _run(args) -> int:
    config = SessionConfig.from_cli_args(args)
    if args.verbose:
        config.log_summary()
    async with Session(config) as session:
        return await _ASYNC_COMMANDS[args.command](session, args)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m neust",
        description="Log in to the NEU CAS portal, directly or via WebVPN.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--timeout-seconds", type=float, default=20.0, dest="timeout_seconds",
                        help="Per-request timeout (default: 20)")
    parser.add_argument("--proxy", default=None, help="HTTP proxy URL")
    parser.add_argument("--insecure", action="store_true", help="Skip TLS verification")
    parser.add_argument("--skip-redirect-check", action="store_true",
                        help="Post the login form even if the login page redirected")

    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Log in with username and password")
    login.add_argument("--username", default=None)
    login.add_argument("--webvpn", action="store_true", help="Also log the WebVPN proxy in")
    login.add_argument("--no-prompt", action="store_true", help="Never prompt for credentials")

    for name in ("token", "cookie"):
        resume = sub.add_parser(name, help=f"Resume a session from a {name}")
        resume.add_argument("value")
        resume.add_argument("--webvpn", action="store_true", help="Value belongs to WebVPN")

    wechat = sub.add_parser("wechat", help="Log in by WeChat QR authorization")
    wechat.add_argument("--uuid", default=None, help="Resume an existing authorization id")
    wechat.add_argument("--interval", type=float, default=DEFAULT_POLL_INTERVAL)
    wechat.add_argument("--timeout", type=float, default=DEFAULT_POLL_TIMEOUT)

    encrypt = sub.add_parser("encrypt", help="Print WebVPN URLs")
    encrypt.add_argument("urls", nargs="+")

    fetch = sub.add_parser("fetch", help="Fetch an intranet URL through WebVPN")
    fetch.add_argument("url")
    fetch.add_argument("--username", default=None)
    fetch.add_argument("--no-prompt", action="store_true", help="Never prompt for credentials")

    return parser


def main(argv=None) -> int:
    env_path = Path.cwd() / ".env"
    load_dotenv(env_path if env_path.exists() else None)

    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%H:%M:%S'
    )

    if args.command == "encrypt":
        for url in args.urls:
            print(encrypt_url(url))
        return 0

    try:
        return asyncio.run(_run(args))
    except NeustError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
