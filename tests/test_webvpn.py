"""Tests for the WebVPN URL encoding."""

import pytest

from neust.endpoint import ENDPOINT_DIRECT, ENDPOINT_WEBVPN
from neust.webvpn import encrypt_url

VECTORS = [
    (
        "http://219.216.96.4/eams/homeExt.action",
        "https://webvpn.neu.edu.cn/http/77726476706e69737468656265737421a2a618d275613e1e275ec7f8/eams/homeExt.action",
    ),
    (
        "http://219.216.96.4/eams/",
        "https://webvpn.neu.edu.cn/http/77726476706e69737468656265737421a2a618d275613e1e275ec7f8/eams/",
    ),
    (
        "https://portal.neu.edu.cn/",
        "https://webvpn.neu.edu.cn/https/77726476706e69737468656265737421e0f85388263c265e7b1dc7a99c406d369a/",
    ),
    (
        "//ipgw.neu.edu.cn",
        "https://webvpn.neu.edu.cn/http/77726476706e69737468656265737421f9e7468b693e6d45300d8db9d6562d",
    ),
    (
        "http://210.30.200.128:8080/system/caslogin.jsp",
        "https://webvpn.neu.edu.cn/http-8080/77726476706e69737468656265737421a2a611d2746026022e58c7fdca0d/system/caslogin.jsp",
    ),
    (
        "http://202.118.8.7:8991/F/29DK3KT4SV9VBRI548R8UD3MBIT991BXE4HLXENCFEGE54551T-22111?func=find-b-0",
        "https://webvpn.neu.edu.cn/http-8991/77726476706e69737468656265737421a2a713d27661301e2646de/F/29DK3KT4SV9VBRI548R8UD3MBIT991BXE4HLXENCFEGE54551T-22111?func=find-b-0",
    ),
]


class TestEncryptUrl:

    @pytest.mark.parametrize("url,expected", VECTORS)
    def test_known_vectors(self, url, expected):
        assert encrypt_url(url) == expected

    def test_deterministic(self):
        url = "http://219.216.96.4/eams/homeExt.action"
        assert encrypt_url(url) == encrypt_url(url)

    def test_bare_host_defaults_to_http(self):
        """No scheme prefix behaves like ``//``."""
        assert encrypt_url("ipgw.neu.edu.cn") == encrypt_url("//ipgw.neu.edu.cn")
        assert encrypt_url("ipgw.neu.edu.cn") == encrypt_url("http://ipgw.neu.edu.cn")

    def test_token_is_prefixed_with_key(self):
        token = encrypt_url("http://a.b/c").split("/")[4]
        assert token.startswith("77726476706e69737468656265737421")
        # key hex + one byte of ciphertext per hostname byte
        assert len(token) == 32 + 2 * len("a.b")

    def test_colon_in_query_is_not_a_port(self):
        result = encrypt_url("http://219.216.96.4/eams/x?time=12:00")
        assert result.startswith("https://webvpn.neu.edu.cn/http/")
        assert result.endswith("/eams/x?time=12:00")

    def test_webvpn_endpoint_matches_direct_login_url(self):
        assert encrypt_url(ENDPOINT_DIRECT.login_url) == ENDPOINT_WEBVPN.login_url
        assert encrypt_url(ENDPOINT_DIRECT.verify_url) == ENDPOINT_WEBVPN.verify_url
