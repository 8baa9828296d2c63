# tests/auth/test_auth_export.py
"""
ssocred/auth/export.py 테스트

테스트 대상:
- RoleCredentials.to_env: 환경변수 변환
- export_lines: 셸별 export 문
- run_with_credentials: 자격증명 환경으로 명령 실행
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from ssocred.auth.export import export_lines, run_with_credentials
from ssocred.auth.types import ConfigurationError, RoleCredentials


@pytest.fixture
def credentials():
    return RoleCredentials(
        access_key_id="ASIAEXPORT",
        secret_access_key="abc+def/ghi",
        session_token="tok'en",
        expiration=datetime(2030, 1, 1, 12, 30, tzinfo=timezone.utc),
    )


class TestToEnv:
    """RoleCredentials.to_env 테스트"""

    def test_without_region(self, role_credentials):
        """리전 없으면 키 세 개만"""
        assert role_credentials.to_env() == {
            "AWS_ACCESS_KEY_ID": "ASIATEST",
            "AWS_SECRET_ACCESS_KEY": "secret",
            "AWS_SESSION_TOKEN": "token",
        }

    def test_with_region(self, role_credentials):
        """AWS_REGION, AWS_DEFAULT_REGION 모두 설정"""
        env = role_credentials.to_env("ap-northeast-2")
        assert env["AWS_REGION"] == "ap-northeast-2"
        assert env["AWS_DEFAULT_REGION"] == "ap-northeast-2"
        assert len(env) == 5


class TestExportLines:
    """export_lines 테스트"""

    def test_sh(self, credentials):
        """bash/zsh export 문, 특수문자는 인용"""
        lines = export_lines(credentials, region="us-east-1")

        assert lines == [
            "export AWS_ACCESS_KEY_ID=ASIAEXPORT",
            "export AWS_SECRET_ACCESS_KEY=abc+def/ghi",
            "export AWS_SESSION_TOKEN='tok'\"'\"'en'",
            "export AWS_REGION=us-east-1",
            "export AWS_DEFAULT_REGION=us-east-1",
            "# Credentials expire at: 2030-01-01 12:30:00 UTC",
        ]

    def test_fish(self, credentials):
        """fish set -gx"""
        lines = export_lines(credentials, shell="fish")
        assert lines[0] == "set -gx AWS_ACCESS_KEY_ID 'ASIAEXPORT'"
        assert lines[2] == "set -gx AWS_SESSION_TOKEN 'tok\\'en'"
        assert len(lines) == 4

    def test_powershell(self, credentials):
        """PowerShell $Env: 대입, 작은따옴표는 두 번"""
        lines = export_lines(credentials, shell="powershell")
        assert lines[0] == "$Env:AWS_ACCESS_KEY_ID = 'ASIAEXPORT'"
        assert lines[2] == "$Env:AWS_SESSION_TOKEN = 'tok''en'"

    def test_unsupported_shell(self, credentials):
        """지원하지 않는 셸"""
        with pytest.raises(ConfigurationError, match="cmd") as exc_info:
            export_lines(credentials, shell="cmd")
        assert exc_info.value.config_key == "shell"


class TestRunWithCredentials:
    """run_with_credentials 테스트"""

    @pytest.fixture
    def mock_run(self):
        with patch("ssocred.auth.export.subprocess.run") as mock:
            mock.return_value = MagicMock(returncode=0)
            yield mock

    def test_env_injected(self, credentials, mock_run):
        """자격증명과 리전 주입, 기존 환경 유지, AWS_PROFILE 제거"""
        base_env = {"PATH": "/usr/bin", "AWS_PROFILE": "other", "AWS_ACCESS_KEY_ID": "OLD"}

        code = run_with_credentials(["aws", "s3", "ls"], credentials, region="eu-west-1", base_env=base_env)

        assert code == 0
        args, kwargs = mock_run.call_args
        assert args[0] == ["aws", "s3", "ls"]
        env = kwargs["env"]
        assert env["PATH"] == "/usr/bin"
        assert env["AWS_ACCESS_KEY_ID"] == "ASIAEXPORT"
        assert env["AWS_DEFAULT_REGION"] == "eu-west-1"
        assert "AWS_PROFILE" not in env
        assert kwargs["check"] is False
        assert base_env["AWS_ACCESS_KEY_ID"] == "OLD"

    def test_exit_code_passthrough(self, credentials, mock_run):
        """명령 종료 코드 그대로 반환"""
        mock_run.return_value = MagicMock(returncode=3)
        assert run_with_credentials(["false"], credentials, base_env={}) == 3

    def test_default_base_env(self, credentials, mock_run, monkeypatch):
        """base_env 없으면 os.environ 사용"""
        monkeypatch.setenv("SSOCRED_TEST_MARKER", "1")
        run_with_credentials(["env"], credentials)
        assert mock_run.call_args.kwargs["env"]["SSOCRED_TEST_MARKER"] == "1"

    def test_empty_command(self, credentials, mock_run):
        """실행할 명령 없음"""
        with pytest.raises(ConfigurationError):
            run_with_credentials([], credentials)
        mock_run.assert_not_called()
