# tests/auth/test_auth_prompt.py
"""
ssocred/auth/prompt.py 테스트

테스트 대상:
- open_browser: 브라우저 열기 실패 처리
- print_authorization_prompt: 안내 출력과 브라우저 열기
"""

import webbrowser
from unittest.mock import MagicMock, patch

import pytest

from ssocred.auth.prompt import open_browser, print_authorization_prompt
from ssocred.auth.types import DeviceAuthorizationInfo


@pytest.fixture
def info():
    return DeviceAuthorizationInfo(
        device_code="dev-code",
        user_code="ABCD-EFGH",
        verification_uri="https://device.sso.us-east-1.amazonaws.com/",
        verification_uri_complete="https://device.sso.us-east-1.amazonaws.com/?user_code=ABCD-EFGH",
        expires_in=600,
        interval=5,
    )


@pytest.fixture
def mock_console():
    with patch("ssocred.auth.prompt.console") as mock:
        yield mock


class TestOpenBrowser:
    """open_browser 테스트"""

    def test_success(self):
        """열기 성공"""
        with patch("ssocred.auth.prompt.webbrowser.open", return_value=True) as mock_open:
            assert open_browser("https://example.com") is True
        mock_open.assert_called_once_with("https://example.com")

    def test_not_opened(self, caplog):
        """브라우저 없음"""
        with patch("ssocred.auth.prompt.webbrowser.open", return_value=False):
            assert open_browser("https://example.com") is False
        assert "브라우저" in caplog.text

    def test_webbrowser_error(self):
        """webbrowser.Error는 False"""
        with patch("ssocred.auth.prompt.webbrowser.open", side_effect=webbrowser.Error("no browser")):
            assert open_browser("https://example.com") is False


class TestPrintAuthorizationPrompt:
    """print_authorization_prompt 테스트"""

    def test_prints_code_and_opens_browser(self, info, mock_console):
        """사용자 코드 출력 후 완성 URL로 브라우저 열기"""
        opener = MagicMock(return_value=True)

        print_authorization_prompt(info, opener=opener)

        panel = mock_console.print.call_args.args[0]
        assert "ABCD-EFGH" in panel.renderable
        assert info.verification_uri in panel.renderable
        assert "10분" in panel.renderable
        opener.assert_called_once_with(info.verification_uri_complete)

    def test_headless(self, info, mock_console):
        """headless면 브라우저를 열지 않음"""
        opener = MagicMock()
        print_authorization_prompt(info, headless=True, opener=opener)
        mock_console.print.assert_called_once()
        opener.assert_not_called()

    def test_without_complete_uri(self, mock_console):
        """완성 URL이 없으면 기본 URL"""
        info = DeviceAuthorizationInfo("dev-code", "WXYZ-1234", "https://device.sso")
        opener = MagicMock()
        print_authorization_prompt(info, opener=opener)
        opener.assert_called_once_with("https://device.sso")

    def test_default_opener(self, info, mock_console):
        """opener가 없으면 webbrowser 사용"""
        with patch("ssocred.auth.prompt.webbrowser.open", return_value=True) as mock_open:
            print_authorization_prompt(info)
        mock_open.assert_called_once_with(info.verification_uri_complete)
