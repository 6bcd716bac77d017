"""
Shared fixtures: a mock NEU portal served by ``aiohttp.web``.

The mock imitates just enough of ``/tpass``:
    - GET  /tpass/login            login page with an ``LT-...-tpass`` token,
                                   or the portal page once CASTGC is valid
    - POST /tpass/login            checks the concatenated ``rsa`` form
    - GET  /tpass/checkQRCodeScan  empty body until the uuid is approved
    - GET  /tpass/index            portal page (redirect target)
    - GET  /tpass/garbled          body not valid in its declared charset
"""

from collections import Counter

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from neust import Endpoint, Session
from neust.status import TITLE_REJECTED

LT = "LT-5532-aXWPeEhFbN4AIJMWYMuiVsWdAfcmSn-tpass"

LOGIN_PAGE = (
    "<html><head><title>" + TITLE_REJECTED + "</title></head><body>"
    '<form id="loginForm" action="/tpass/login" method="post">'
    '<input type="hidden" id="lt" name="lt" value="{lt}" />'
    '<input type="hidden" name="execution" value="e1s1" />'
    "</form></body></html>"
)


class MockPortal:
    """In-memory portal state; tweak attributes to change its behaviour."""

    def __init__(self, username="20180000", password="password"):
        self.username = username
        self.password = password
        self.token = "TGT-20180000-1827000-izbHeCI9y53RyIpMoYKxKbdyjtkgmfOy0NwbJHHiwXQabRYYKK-tpass"
        self.title = None            # None → title-less portal page (active)
        self.serve_lt = True
        self.redirect_login = False
        self.approved = set()
        self.approve_after = None    # approve any uuid on the N-th scan check
        self.hits = Counter()
        self.forms = []
        self.scan_queries = []
        self.user_agents = []
        self.cookie_headers = []

    # ── App ───────────────────────────────────────────────────────

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/tpass/login", self.login_page)
        app.router.add_post("/tpass/login", self.submit)
        app.router.add_get("/tpass/checkQRCodeScan", self.check_scan)
        app.router.add_get("/tpass/index", self.index)
        app.router.add_get("/tpass/garbled", self.garbled)
        return app

    # ── Pages ─────────────────────────────────────────────────────

    def _portal_page(self) -> web.Response:
        head = f"<head><title>{self.title}</title></head>" if self.title else "<head></head>"
        body = (
            f"<html>{head}<body><script>"
            f'var id_number = "{self.username}";'
            "</script></body></html>"
        )
        return web.Response(text=body, content_type="text/html")

    def _login_page(self) -> web.Response:
        return web.Response(
            text=LOGIN_PAGE.format(lt=LT if self.serve_lt else ""),
            content_type="text/html",
        )

    def _grant(self, response: web.Response) -> web.Response:
        response.set_cookie("CASTGC", self.token, path="/tpass/")
        response.set_cookie("Language", "zh_CN", path="/tpass/")
        return response

    # ── Handlers ──────────────────────────────────────────────────

    async def login_page(self, request: web.Request) -> web.Response:
        self.hits["GET /tpass/login"] += 1
        self.user_agents.append(request.headers.get("User-Agent"))
        self.cookie_headers.append(request.headers.get("Cookie"))
        if self.redirect_login:
            raise web.HTTPFound("/tpass/index")
        if request.cookies.get("CASTGC") == self.token:
            return self._portal_page()
        return self._login_page()

    async def submit(self, request: web.Request) -> web.Response:
        self.hits["POST /tpass/login"] += 1
        raw = await request.text()
        self.forms.append((request.headers.get("Content-Type"), raw))
        form = dict(pair.split("=", 1) for pair in raw.split("&"))
        if form.get("rsa") == f"{self.username}{self.password}{LT}" and form.get("lt") == LT:
            return self._grant(web.Response(text="<html>redirecting</html>", content_type="text/html"))
        return self._login_page()

    async def check_scan(self, request: web.Request) -> web.Response:
        self.hits["GET /tpass/checkQRCodeScan"] += 1
        uuid = request.query.get("uuid", "")
        self.scan_queries.append(dict(request.query))
        if self.approve_after and self.hits["GET /tpass/checkQRCodeScan"] >= self.approve_after:
            self.approved.add(uuid)
        if uuid in self.approved:
            return self._grant(web.Response(text="success"))
        return web.Response(text="")

    async def index(self, request: web.Request) -> web.Response:
        self.hits["GET /tpass/index"] += 1
        return self._portal_page()

    async def garbled(self, request: web.Request) -> web.Response:
        # Declares UTF-8; 0xff never occurs in UTF-8.
        body = b"<html><head><title>\xff\xfe</title></head></html>"
        return web.Response(body=body, content_type="text/html", charset="utf-8")


def endpoint_for(server: TestServer) -> Endpoint:
    login_url = str(server.make_url("/tpass/login"))
    return Endpoint(
        login_url=login_url,
        status_check_url=login_url,
        session_token_cookie_name="CASTGC",
        cookie_scope_url=str(server.make_url("/tpass/")),
        verify_url=str(server.make_url("/tpass/checkQRCodeScan")),
    )


@pytest.fixture
def portal():
    return MockPortal()


@pytest.fixture
async def portal_server(portal):
    server = TestServer(portal.app())
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
def endpoint(portal_server):
    return endpoint_for(portal_server)


@pytest.fixture
async def session():
    session = Session()
    yield session
    await session.close()
