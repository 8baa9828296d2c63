"""
tests/conftest.py - pytest 공통 픽스처

AWS 파일 경로 격리와 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(aws_dir, store):
        # aws_dir: 임시 ~/.aws 디렉토리
        # store: 임시 파일을 사용하는 AWSConfigStore
        pass
"""

import sys
from datetime import timedelta
from pathlib import Path

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(tmp_path, monkeypatch):
    """테스트 환경 설정

    실제 ~/.aws 파일을 건드리지 않도록 HOME과 AWS 파일 경로를 임시 디렉토리로 변경합니다.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setenv("AWS_CONFIG_FILE", str(home / ".aws" / "config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(home / ".aws" / "credentials"))
    for name in ("AWS_SSO_START_URL", "AWS_SSO_REGION", "AWS_REGION", "AWS_DEFAULT_REGION", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    yield


# =============================================================================
# 파일 픽스처
# =============================================================================


@pytest.fixture
def aws_dir(tmp_path):
    """임시 .aws 디렉토리"""
    path = tmp_path / "aws"
    path.mkdir()
    return path


@pytest.fixture
def config_path(aws_dir):
    return aws_dir / "config"


@pytest.fixture
def credentials_path(aws_dir):
    return aws_dir / "credentials"


@pytest.fixture
def store(config_path, credentials_path):
    """임시 파일을 사용하는 AWSConfigStore"""
    from ssocred.auth.config import AWSConfigStore

    return AWSConfigStore(config_path=config_path, credentials_path=credentials_path)


# =============================================================================
# 도메인 픽스처
# =============================================================================


@pytest.fixture
def instance():
    """테스트용 SSO 엔드포인트"""
    from ssocred.auth.types import AuthInstance

    return AuthInstance(
        start_url="https://test.awsapps.com/start",
        region="us-east-1",
        session_name="test-sso",
    )


@pytest.fixture
def account_role():
    """테스트용 계정/역할"""
    from ssocred.auth.types import AccountRole

    return AccountRole(account_id="123456789012", account_name="Production", role_name="Developer")


@pytest.fixture
def role_credentials():
    """1시간 뒤 만료되는 자격증명"""
    return create_credentials(hours=1)


@pytest.fixture
def access_token():
    """8시간 뒤 만료되는 토큰"""
    from ssocred.auth.types import AccessToken, utc_now

    return AccessToken(
        access_token="test-access-token",
        expires_at=utc_now() + timedelta(hours=8),
        region="us-east-1",
        start_url="https://test.awsapps.com/start",
    )


# =============================================================================
# 유틸리티 함수
# =============================================================================


def create_credentials(hours: float = 1, suffix: str = ""):
    """만료 시간을 지정한 RoleCredentials 생성 헬퍼"""
    from ssocred.auth.types import RoleCredentials, utc_now

    return RoleCredentials(
        access_key_id=f"ASIATEST{suffix}",
        secret_access_key=f"secret{suffix}",
        session_token=f"token{suffix}",
        expiration=utc_now() + timedelta(hours=hours),
    )


def create_mock_client_error(
    error_code: str,
    error_message: str = "Test error",
) -> Exception:
    """ClientError 생성 헬퍼"""
    from botocore.exceptions import ClientError

    return ClientError(
        {
            "Error": {
                "Code": error_code,
                "Message": error_message,
            }
        },
        "TestOperation",
    )


@pytest.fixture
def make_credentials():
    """RoleCredentials 생성 함수"""
    return create_credentials


@pytest.fixture
def client_error():
    """ClientError 생성 함수"""
    return create_mock_client_error
