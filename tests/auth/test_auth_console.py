# tests/auth/test_auth_console.py
"""
ssocred/auth/console.py 테스트

테스트 대상:
- get_signin_token: federation 엔드포인트 호출
- build_login_url / generate_console_url: 콘솔 로그인 URL
"""

import json
from unittest.mock import MagicMock, patch
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from ssocred.auth.console import (
    FEDERATION_URL,
    build_login_url,
    generate_console_url,
    get_signin_token,
)
from ssocred.auth.types import ProviderError


def _response(payload):
    response = MagicMock()
    response.json.return_value = payload
    return response


@pytest.fixture
def mock_get():
    with patch("ssocred.auth.console.requests.get") as mock:
        mock.return_value = _response({"SigninToken": "signin-token"})
        yield mock


class TestGetSigninToken:
    """get_signin_token 테스트"""

    def test_request_params(self, mock_get, role_credentials):
        """세션 JSON과 세션 유지 시간 전달"""
        assert get_signin_token(role_credentials) == "signin-token"

        args, kwargs = mock_get.call_args
        assert args == (FEDERATION_URL,)
        params = kwargs["params"]
        assert params["Action"] == "getSigninToken"
        assert params["SessionDuration"] == "43200"
        assert json.loads(params["Session"]) == {
            "sessionId": role_credentials.access_key_id,
            "sessionKey": role_credentials.secret_access_key,
            "sessionToken": role_credentials.session_token,
        }
        assert kwargs["timeout"] > 0

    def test_http_error(self, mock_get, role_credentials):
        """HTTP 에러"""
        mock_get.return_value.raise_for_status.side_effect = requests.HTTPError("400")
        with pytest.raises(ProviderError) as exc_info:
            get_signin_token(role_credentials)
        assert exc_info.value.provider == "federation"

    def test_connection_error(self, mock_get, role_credentials):
        """연결 실패"""
        mock_get.side_effect = requests.ConnectionError("down")
        with pytest.raises(ProviderError):
            get_signin_token(role_credentials)

    def test_invalid_json(self, mock_get, role_credentials):
        """JSON이 아닌 응답"""
        mock_get.return_value.json.side_effect = ValueError("not json")
        with pytest.raises(ProviderError):
            get_signin_token(role_credentials)

    def test_missing_token(self, mock_get, role_credentials):
        """SigninToken 없음"""
        mock_get.return_value = _response({})
        with pytest.raises(ProviderError, match="SigninToken"):
            get_signin_token(role_credentials)


class TestLoginUrl:
    """로그인 URL 테스트"""

    def test_build_login_url(self):
        """Destination에 리전 포함"""
        url = build_login_url("tok+/=", "ap-northeast-2")
        parsed = urlparse(url)
        query = parse_qs(parsed.query)

        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == FEDERATION_URL
        assert query["Action"] == ["login"]
        assert query["Issuer"] == ["ssocred"]
        assert query["Destination"] == ["https://console.aws.amazon.com/?region=ap-northeast-2"]
        assert query["SigninToken"] == ["tok+/="]

    def test_generate_console_url(self, mock_get, role_credentials):
        """리전 지정"""
        url = generate_console_url(role_credentials, region="eu-west-1")
        query = parse_qs(urlparse(url).query)
        assert query["SigninToken"] == ["signin-token"]
        assert query["Destination"] == ["https://console.aws.amazon.com/?region=eu-west-1"]

    def test_generate_console_url_default_region(self, mock_get, role_credentials, monkeypatch):
        """리전이 없으면 AWS_REGION 사용"""
        monkeypatch.setenv("AWS_REGION", "us-west-2")
        url = generate_console_url(role_credentials)
        assert "region%3Dus-west-2" in url
