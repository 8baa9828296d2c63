# ssocred/config.py
"""
ssocred 전역 설정

- Settings: 불변 기본값 (리전, 폴링 간격, 클라이언트 이름 등)
- LogConfig: 로깅 설정 (LOG_LEVEL, LOG_FORMAT 환경변수)
- 환경변수 헬퍼: get_env_bool, get_env_int, get_default_region
- 경로 헬퍼: ~/.aws 디렉토리, config/credentials 파일, 캐시 디렉토리

환경변수:
    AWS_CONFIG_FILE: config 파일 경로 (기본: ~/.aws/config)
    AWS_SHARED_CREDENTIALS_FILE: credentials 파일 경로 (기본: ~/.aws/credentials)
    AWS_SSO_START_URL / AWS_SSO_REGION: SSO 세션 해석 시 사용
    LOG_LEVEL / LOG_FORMAT: 로깅 설정
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)


# =============================================================================
# Settings
# =============================================================================


@dataclass(frozen=True)
class Settings:
    """ssocred 기본 설정값 (불변)"""

    TOOL_NAME: str = "ssocred"

    # AWS 기본값
    DEFAULT_REGION: str = "us-east-1"
    DEFAULT_OUTPUT: str = "json"
    DEFAULT_REGISTRATION_SCOPES: str = "sso:account:access"

    # SSO-OIDC 클라이언트 등록
    CLIENT_NAME: str = "ssocred"
    CLIENT_TYPE: str = "public"

    # 디바이스 인증 폴링
    POLL_INTERVAL_SECONDS: int = 5
    SLOW_DOWN_INCREMENT_SECONDS: int = 5

    # 세션 상태
    EXPIRING_THRESHOLD_MINUTES: int = 5

    # 콘솔 로그인 (federation)
    CONSOLE_SESSION_DURATION_SECONDS: int = 43200
    API_TIMEOUT: int = 30


settings = Settings()


# =============================================================================
# Logging
# =============================================================================


@dataclass
class LogConfig:
    """로깅 설정"""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_env(cls) -> LogConfig:
        """환경변수에서 로깅 설정 로드"""
        default = cls()
        return cls(
            level=os.environ.get("LOG_LEVEL", default.level),
            format=os.environ.get("LOG_FORMAT", default.format),
            date_format=default.date_format,
        )


def configure_logging(config: LogConfig | None = None, level: str | None = None) -> None:
    """루트 로거 설정

    도구 출력과 로그가 섞이지 않도록 명시적 레벨이 없으면 WARNING으로 설정합니다.

    Args:
        config: 로깅 설정 (기본: LogConfig.from_env())
        level: 레벨 오버라이드 (예: "DEBUG")
    """
    config = config or LogConfig.from_env()
    resolved = level or (config.level if "LOG_LEVEL" in os.environ else "WARNING")
    logging.basicConfig(
        level=getattr(logging, resolved.upper(), logging.WARNING),
        format=config.format,
        datefmt=config.date_format,
    )


# =============================================================================
# 환경변수 헬퍼
# =============================================================================

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


def get_env_bool(name: str, default: bool = False) -> bool:
    """환경변수를 bool로 변환 (알 수 없는 값이면 기본값)"""
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def get_env_int(name: str, default: int = 0) -> int:
    """환경변수를 int로 변환 (변환 실패 시 기본값)"""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.debug("정수가 아닌 환경변수 값 무시: %s=%r", name, value)
        return default


def get_default_region() -> str:
    """기본 리전 (AWS_REGION → AWS_DEFAULT_REGION → settings.DEFAULT_REGION)"""
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or settings.DEFAULT_REGION


def get_sso_start_url_from_env() -> str | None:
    """AWS_SSO_START_URL 환경변수"""
    return os.environ.get("AWS_SSO_START_URL") or None


def get_sso_region_from_env() -> str | None:
    """AWS_SSO_REGION 환경변수"""
    return os.environ.get("AWS_SSO_REGION") or None


# =============================================================================
# 경로 헬퍼
# =============================================================================


def get_aws_dir() -> Path:
    """~/.aws 디렉토리"""
    return Path.home() / ".aws"


def get_config_file_path() -> Path:
    """AWS config 파일 경로"""
    override = os.environ.get("AWS_CONFIG_FILE")
    if override:
        return Path(override).expanduser()
    return get_aws_dir() / "config"


def get_credentials_file_path() -> Path:
    """AWS credentials 파일 경로"""
    override = os.environ.get("AWS_SHARED_CREDENTIALS_FILE")
    if override:
        return Path(override).expanduser()
    return get_aws_dir() / "credentials"


def get_token_cache_dir() -> Path:
    """SSO 토큰 캐시 디렉토리 (AWS CLI v2와 공유)"""
    return get_aws_dir() / "sso" / "cache"


def get_credential_cache_dir() -> Path:
    """역할 자격증명 캐시 디렉토리"""
    return get_aws_dir() / "cli" / "cache"


@lru_cache(maxsize=1)
def get_version() -> str:
    """설치된 패키지 버전"""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("aws-sso-cred")
    except PackageNotFoundError:
        return "0.0.0"
