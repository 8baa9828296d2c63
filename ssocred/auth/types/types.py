# ssocred/auth/types/types.py
"""
ssocred/auth/types/types.py - SSO 인증 모듈의 핵심 타입 정의

이 모듈은 인증 시스템 전체에서 사용되는 기본 타입들을 정의합니다.

포함 항목:
    - AuthInstance: SSO 엔드포인트 식별자 (start_url, region, session_name)
    - AccessToken: SSO-OIDC 액세스 토큰 (AWS CLI v2 캐시 형식과 호환)
    - AccountRole: 계정/역할 조합
    - RoleCredentials: 역할 임시 자격증명
    - DeviceAuthorizationInfo: 디바이스 인증 화면 표시 정보
    - SessionStatus, ProfileSession: 프로파일 세션 상태
    - 에러 클래스: AuthError, ProviderError, AuthorizationExpiredError,
      AuthorizationCancelledError, TokenExpiredError, ConfigurationError,
      ProfileConflictError, CacheError, NoSessionFoundError,
      AccountRoleNotFoundError, BrowserLaunchError
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# 1e12 이상의 epoch 값은 밀리초로 취급
_EPOCH_MILLIS_THRESHOLD = 1e12

_FRACTION_RE = re.compile(r"\.(\d+)")


# =============================================================================
# Timestamp Helpers
# =============================================================================


def utc_now() -> datetime:
    """현재 UTC 시간"""
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> datetime:
    """다양한 형식의 시간 값을 UTC datetime으로 변환

    지원 형식:
        - datetime (naive면 UTC로 간주)
        - RFC3339 문자열 ("2024-01-01T00:00:00Z", "+09:00" 오프셋, 소수점 초)
        - epoch 숫자 (초, 1e12 이상이면 밀리초)

    Raises:
        ValueError: 해석할 수 없는 값
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, bool):
        raise ValueError(f"유효하지 않은 시간 값: {value!r}")

    if isinstance(value, (int, float)):
        seconds = value / 1000 if value >= _EPOCH_MILLIS_THRESHOLD else value
        return datetime.fromtimestamp(seconds, tz=timezone.utc)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("빈 시간 문자열")
        if re.fullmatch(r"\d+(\.\d+)?", text):
            return parse_timestamp(float(text))
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        # fromisoformat은 6자리를 초과하는 소수점 초를 처리하지 못함
        match = _FRACTION_RE.search(text)
        if match and len(match.group(1)) != 6:
            digits = match.group(1)[:6].ljust(6, "0")
            text = text[: match.start()] + "." + digits + text[match.end() :]
        parsed = datetime.fromisoformat(text)
        return parse_timestamp(parsed)

    raise ValueError(f"유효하지 않은 시간 값: {value!r}")


def format_timestamp(value: datetime) -> str:
    """UTC RFC3339 문자열로 변환 ("2024-01-01T00:00:00Z")

    마이크로초가 있으면 보존하여 저장 후 재로드 시 동일한 값이 되도록 합니다.
    """
    value = parse_timestamp(value)
    if value.microsecond:
        return value.strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    return value.strftime(TIMESTAMP_FORMAT)


def _remaining_seconds(expires_at: datetime) -> int:
    return max(0, int((expires_at - utc_now()).total_seconds()))


# =============================================================================
# Auth Instance
# =============================================================================


@dataclass(frozen=True)
class AuthInstance:
    """SSO 엔드포인트 식별자 (불변)

    Attributes:
        start_url: SSO 시작 URL
        region: SSO 리전
        session_name: [sso-session] 이름 (있으면 캐시 키로 우선 사용)
    """

    start_url: str
    region: str
    session_name: str | None = None

    @property
    def cache_key_material(self) -> str:
        """토큰 캐시 키 원본 (session_name 우선, 없으면 start_url)"""
        return self.session_name or self.start_url


# =============================================================================
# Access Token
# =============================================================================


@dataclass
class AccessToken:
    """SSO-OIDC 액세스 토큰

    AWS CLI v2 캐시 형식(camelCase)으로 저장되고 snake_case도 읽을 수 있습니다.
    refresh_token은 저장만 하며 자동 갱신에 사용하지 않습니다.

    Attributes:
        access_token: 액세스 토큰
        expires_at: 만료 시간 (UTC)
        refresh_token: 갱신 토큰 (옵션)
        region: SSO 리전 (옵션)
        start_url: SSO 시작 URL (옵션)
    """

    access_token: str
    expires_at: datetime
    refresh_token: str | None = None
    region: str | None = None
    start_url: str | None = None

    def __post_init__(self):
        self.expires_at = parse_timestamp(self.expires_at)

    def is_expired(self, buffer_seconds: int = 0) -> bool:
        """토큰이 만료되었는지 확인

        Args:
            buffer_seconds: 만료 전 버퍼 시간 (초)
        """
        return utc_now() >= self.expires_at - timedelta(seconds=buffer_seconds)

    def expires_in_seconds(self) -> int:
        return _remaining_seconds(self.expires_at)

    def expires_in_minutes(self) -> int:
        return self.expires_in_seconds() // 60

    def expiration_display(self) -> str:
        """남은 시간 표시 ("1h 30m", "1h", "12 minutes", "EXPIRED")"""
        mins = self.expires_in_minutes()
        if mins >= 60:
            hours, remaining = divmod(mins, 60)
            return f"{hours}h {remaining}m" if remaining else f"{hours}h"
        if mins > 0:
            return f"{mins} minutes"
        return "EXPIRED"

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (AWS CLI v2 호환 camelCase)"""
        data: dict[str, Any] = {
            "accessToken": self.access_token,
            "expiresAt": format_timestamp(self.expires_at),
        }
        if self.refresh_token:
            data["refreshToken"] = self.refresh_token
        if self.region:
            data["region"] = self.region
        if self.start_url:
            data["startUrl"] = self.start_url
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AccessToken:
        """딕셔너리에서 생성 (camelCase, snake_case 모두 허용)

        Raises:
            ValueError: accessToken 또는 expiresAt 누락/형식 오류
        """
        access_token = data.get("accessToken", data.get("access_token"))
        expires_at = data.get("expiresAt", data.get("expires_at"))
        if not access_token or expires_at is None:
            raise ValueError("accessToken 또는 expiresAt 필드가 없습니다")
        return cls(
            access_token=access_token,
            expires_at=parse_timestamp(expires_at),
            refresh_token=data.get("refreshToken", data.get("refresh_token")),
            region=data.get("region"),
            start_url=data.get("startUrl", data.get("start_url")),
        )


# =============================================================================
# Account Role / Role Credentials
# =============================================================================


@dataclass(frozen=True, order=True)
class AccountRole:
    """SSO로 접근 가능한 계정/역할 조합

    세 필드 모두로 해시/비교되며 (account_id, account_name, role_name) 순으로 정렬됩니다.
    """

    account_id: str
    account_name: str
    role_name: str

    @property
    def display_name(self) -> str:
        """표시 이름 (예: Production/Developer)"""
        return f"{self.account_name}/{self.role_name}"

    @property
    def full_display(self) -> str:
        """전체 표시 이름 (예: Production (123456789012): Developer)"""
        return f"{self.account_name} ({self.account_id}): {self.role_name}"

    @property
    def default_profile_name(self) -> str:
        """프로파일 이름 기본값 ("<account_name>_<role_name>")"""
        return f"{self.account_name}_{self.role_name}"


@dataclass
class RoleCredentials:
    """역할 임시 자격증명

    Attributes:
        access_key_id: AWS 액세스 키 ID
        secret_access_key: AWS 시크릿 액세스 키
        session_token: 세션 토큰
        expiration: 만료 시간 (UTC)
    """

    access_key_id: str
    secret_access_key: str
    session_token: str
    expiration: datetime

    def __post_init__(self):
        self.expiration = parse_timestamp(self.expiration)

    def is_expired(self) -> bool:
        return utc_now() >= self.expiration

    def expires_in_seconds(self) -> int:
        return _remaining_seconds(self.expiration)

    def expires_in_minutes(self) -> int:
        return self.expires_in_seconds() // 60

    def expiration_display(self) -> str:
        """남은 시간 표시 ("2h 5m", "4m 10s", "9s", "EXPIRED")"""
        seconds = self.expires_in_seconds()
        mins, secs = divmod(seconds, 60)
        if mins >= 60:
            hours, remaining = divmod(mins, 60)
            return f"{hours}h {remaining}m"
        if mins > 0:
            return f"{mins}m {secs}s"
        if secs > 0:
            return f"{secs}s"
        return "EXPIRED"

    def to_env(self, region: str | None = None) -> dict[str, str]:
        """AWS SDK/CLI 환경변수로 변환

        region이 있으면 AWS_REGION, AWS_DEFAULT_REGION도 포함합니다.
        """
        env = {
            "AWS_ACCESS_KEY_ID": self.access_key_id,
            "AWS_SECRET_ACCESS_KEY": self.secret_access_key,
            "AWS_SESSION_TOKEN": self.session_token,
        }
        if region:
            env["AWS_REGION"] = region
            env["AWS_DEFAULT_REGION"] = region
        return env

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (자격증명 캐시 저장용)"""
        return {
            "access_key_id": self.access_key_id,
            "secret_access_key": self.secret_access_key,
            "session_token": self.session_token,
            "expiration": format_timestamp(self.expiration),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RoleCredentials:
        """딕셔너리에서 생성

        Raises:
            ValueError: 필수 필드 누락
        """
        missing = [
            key
            for key in ("access_key_id", "secret_access_key", "session_token", "expiration")
            if not data.get(key)
        ]
        if missing:
            raise ValueError(f"필수 필드 누락: {', '.join(missing)}")
        return cls(
            access_key_id=data["access_key_id"],
            secret_access_key=data["secret_access_key"],
            session_token=data["session_token"],
            expiration=parse_timestamp(data["expiration"]),
        )


# =============================================================================
# Device Authorization
# =============================================================================


@dataclass(frozen=True)
class DeviceAuthorizationInfo:
    """디바이스 인증 시작 결과 (사용자에게 표시할 정보)

    Attributes:
        device_code: 폴링에 사용할 디바이스 코드
        user_code: 사용자가 확인할 코드
        verification_uri: 인증 페이지 URL
        verification_uri_complete: 코드가 포함된 인증 URL (옵션)
        expires_in: 디바이스 코드 유효 시간 (초, 옵션)
        interval: 폴링 간격 (초, 옵션)
    """

    device_code: str
    user_code: str
    verification_uri: str
    verification_uri_complete: str | None = None
    expires_in: int | None = None
    interval: int | None = None

    @property
    def browser_url(self) -> str:
        """브라우저로 열 URL (complete URI 우선)"""
        return self.verification_uri_complete or self.verification_uri


# =============================================================================
# Profile Session
# =============================================================================


class SessionStatus(Enum):
    """프로파일 세션 상태"""

    ACTIVE = "ACTIVE"
    EXPIRING = "EXPIRING"
    EXPIRED = "EXPIRED"
    INACTIVE = "INACTIVE"

    def as_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass
class ProfileSession:
    """credentials 파일의 프로파일과 연결된 역할 세션

    Attributes:
        profile_name: 프로파일 이름
        account_role: 계정/역할
        credentials: 자격증명 (비활성이면 None)
        is_default: [default] 프로파일 여부
        instance: SSO 엔드포인트
    """

    profile_name: str
    account_role: AccountRole
    credentials: RoleCredentials | None = None
    is_default: bool = False
    instance: AuthInstance | None = None

    def is_active(self) -> bool:
        return self.credentials is not None and not self.credentials.is_expired()

    def status(self, expiring_threshold_minutes: int = 5) -> SessionStatus:
        """자격증명 만료 시간 기준 상태"""
        if self.credentials is None:
            return SessionStatus.INACTIVE
        if self.credentials.is_expired():
            return SessionStatus.EXPIRED
        if self.credentials.expires_in_minutes() < expiring_threshold_minutes:
            return SessionStatus.EXPIRING
        return SessionStatus.ACTIVE


# =============================================================================
# Error Classes
# =============================================================================


class AuthError(Exception):
    """인증 관련 기본 에러 클래스

    모든 ssocred 에러의 부모 클래스입니다.
    원인 예외(cause)를 체이닝하여 디버깅을 용이하게 합니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (옵션)
    """

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class ProviderError(AuthError):
    """SSO/SSO-OIDC API에서 발생하는 에러

    에러 메시지 형식: "[provider] operation: message"

    Attributes:
        provider: 에러가 발생한 서비스 이름 (예: "sso-oidc", "sso")
        operation: 실패한 작업 이름 (예: "create_token", "get_role_credentials")
    """

    def __init__(
        self,
        provider: str,
        operation: str,
        message: str,
        cause: Exception | None = None,
    ):
        full_message = f"[{provider}] {operation}: {message}"
        super().__init__(full_message, cause)
        self.provider = provider
        self.operation = operation


class AuthorizationPendingError(AuthError):
    """사용자가 아직 인증을 승인하지 않은 상태 (폴링 루프 내부에서만 사용)"""

    def __init__(self, message: str = "사용자 인증 대기 중", cause: Exception | None = None):
        super().__init__(message, cause)


class AuthorizationExpiredError(AuthError):
    """디바이스 인증 코드가 만료되었을 때 발생하는 에러"""

    def __init__(
        self,
        message: str = "디바이스 인증이 만료되었습니다. 다시 로그인하세요",
        cause: Exception | None = None,
    ):
        super().__init__(message, cause)


class AuthorizationCancelledError(AuthError):
    """호출자가 디바이스 인증 폴링을 취소했을 때 발생하는 에러"""

    def __init__(self, message: str = "디바이스 인증이 취소되었습니다", cause: Exception | None = None):
        super().__init__(message, cause)


class TokenExpiredError(AuthError):
    """토큰이 만료되었을 때 발생하는 에러

    Attributes:
        expired_at: 토큰 만료 시간 (옵션)
    """

    def __init__(
        self,
        message: str = "토큰이 만료되었습니다",
        expired_at: datetime | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause)
        self.expired_at = expired_at


class ConfigurationError(AuthError):
    """설정 오류가 발생했을 때 발생하는 에러

    AWS 설정 파일 읽기/쓰기 실패, 필수 설정값 누락 등의 경우 발생합니다.

    Attributes:
        config_key: 문제가 된 설정 키 이름 (옵션)
        path: 문제가 된 파일 경로 (옵션)
    """

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        cause: Exception | None = None,
        path: Any = None,
    ):
        super().__init__(message, cause)
        self.config_key = config_key
        self.path = path


class ProfileConflictError(ConfigurationError):
    """사용자 관리 영역에 같은 이름의 프로파일이 있어 쓰기를 거부할 때 발생하는 에러

    Attributes:
        profile_name: 충돌한 프로파일 이름
    """

    def __init__(self, profile_name: str, path: Any = None):
        message = (
            f"프로파일 '{profile_name}'이(가) 사용자 관리 영역에 있습니다. "
            f"다른 이름을 사용하거나 import_section으로 먼저 이전하세요"
        )
        super().__init__(message, config_key=profile_name, path=path)
        self.profile_name = profile_name


class CacheError(AuthError):
    """캐시 디렉토리 쓰기 실패

    Attributes:
        path: 캐시 파일 경로 (옵션)
    """

    def __init__(self, message: str, path: Any = None, cause: Exception | None = None):
        super().__init__(message, cause)
        self.path = path


class NoSessionFoundError(AuthError):
    """유효한 SSO 세션(토큰)이 없을 때 발생하는 에러"""

    def __init__(
        self,
        message: str = "유효한 SSO 세션이 없습니다. 먼저 로그인하세요",
        cause: Exception | None = None,
    ):
        super().__init__(message, cause)


class AccountRoleNotFoundError(AuthError):
    """계정/역할 조합을 찾을 수 없을 때 발생하는 에러

    Attributes:
        account: 계정 ID 또는 이름
        role: 역할 이름
    """

    def __init__(self, account: str, role: str, cause: Exception | None = None):
        super().__init__(f"계정/역할을 찾을 수 없습니다: {account}/{role}", cause)
        self.account = account
        self.role = role


class BrowserLaunchError(AuthError):
    """브라우저 실행 실패 (로그만 남기고 치명적이지 않음)"""

