# ssocred/auth/session.py
"""
SSO 세션/자격증명 오케스트레이션

요청 흐름:
    SessionManager → TokenCache.get → (없으면) DeviceFlowClient → TokenCache.put
    → CredentialManager (CredentialCache 우선) → AWSConfigStore

사용 예시:
    manager = SessionManager()
    instance = manager.config_store.resolve_sso_session("my-sso")
    token = manager.login(instance)
    role = manager.find_account_role(instance, token, "123456789012", "AdminRole")
    profile = manager.activate_session(instance, token, role)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from ..config import settings
from .cache import TokenCache
from .config import AWSConfigStore
from .prompt import print_authorization_prompt
from .provider import CredentialManager, DeviceFlowClient
from .types import (
    AccessToken,
    AccountRole,
    AccountRoleNotFoundError,
    AuthInstance,
    DeviceAuthorizationInfo,
    NoSessionFoundError,
    ProfileSession,
    RoleCredentials,
)

logger = logging.getLogger(__name__)


class SessionManager:
    """SSO 로그인, 역할 조회, 프로파일 활성화/비활성화

    Args:
        token_cache: SSO 토큰 캐시 (기본: ~/.aws/sso/cache)
        credential_manager: 역할 자격증명 관리자
        config_store: ~/.aws/config, ~/.aws/credentials 저장소
        flow_client_factory: 리전 → DeviceFlowClient 생성 함수
    """

    def __init__(
        self,
        token_cache: TokenCache | None = None,
        credential_manager: CredentialManager | None = None,
        config_store: AWSConfigStore | None = None,
        flow_client_factory: Callable[[str], DeviceFlowClient] = DeviceFlowClient,
    ):
        self.token_cache = token_cache or TokenCache()
        self.credential_manager = credential_manager or CredentialManager()
        self.config_store = config_store or AWSConfigStore()
        self._flow_client_factory = flow_client_factory

    # =========================================================================
    # 토큰
    # =========================================================================

    def get_cached_token(self, instance: AuthInstance) -> AccessToken | None:
        """유효한 캐시 토큰 (만료되었으면 None)"""
        return self.token_cache.get(instance)

    def require_token(self, instance: AuthInstance) -> AccessToken:
        token = self.get_cached_token(instance)
        if token is None:
            raise NoSessionFoundError()
        return token

    def _registration_scopes(self, instance: AuthInstance) -> list[str] | None:
        if not instance.session_name:
            return None
        session = self.config_store.read_sso_session(instance.session_name)
        if session is None:
            return None
        return [s.strip() for s in session.effective_scopes.split(",") if s.strip()]

    def login(
        self,
        instance: AuthInstance,
        force: bool = False,
        on_authorization: Callable[[DeviceAuthorizationInfo], object] | None = None,
        cancel_event: threading.Event | None = None,
    ) -> AccessToken:
        """캐시 토큰이 유효하면 재사용, 아니면 디바이스 인증 후 캐시에 저장

        Args:
            instance: SSO 엔드포인트
            force: True면 캐시를 무시하고 재인증
            on_authorization: 사용자 코드 표시 콜백 (기본: print_authorization_prompt)
            cancel_event: 폴링 취소 이벤트
        """
        if not force:
            cached = self.get_cached_token(instance)
            if cached is not None:
                logger.debug("캐시된 SSO 토큰 사용 (%s)", cached.expiration_display())
                return cached

        client = self._flow_client_factory(instance.region)
        token = client.perform_device_flow(
            instance.start_url,
            on_authorization or print_authorization_prompt,
            cancel_event=cancel_event,
            scopes=self._registration_scopes(instance),
        )
        self.token_cache.put(instance, token)
        logger.info("SSO 로그인 완료: %s", instance.start_url)
        return token

    def logout(self, instance: AuthInstance) -> bool:
        """토큰 캐시 삭제 (없었으면 False)"""
        removed = self.token_cache.remove(instance)
        if removed:
            logger.info("SSO 로그아웃: %s", instance.start_url)
        return removed

    # =========================================================================
    # 계정/역할
    # =========================================================================

    def list_account_roles(self, instance: AuthInstance, token: AccessToken) -> list[AccountRole]:
        return self.credential_manager.list_all_account_roles(instance.region, token)

    def find_account_role(
        self,
        instance: AuthInstance,
        token: AccessToken,
        account: str,
        role: str,
    ) -> AccountRole:
        """계정 ID 또는 이름, 역할 이름으로 조회

        Raises:
            AccountRoleNotFoundError: 일치하는 조합 없음
        """
        for account_role in self.list_account_roles(instance, token):
            if account in (account_role.account_id, account_role.account_name) and account_role.role_name == role:
                return account_role
        raise AccountRoleNotFoundError(account, role)

    def get_environment(
        self,
        instance: AuthInstance,
        token: AccessToken,
        role: AccountRole,
        region: str | None = None,
    ) -> dict[str, str]:
        """역할 자격증명 환경변수 (region 기본값은 SSO 리전)

        파일에는 아무것도 쓰지 않습니다.
        """
        credentials = self.credential_manager.get_credentials(instance, token, role)
        return credentials.to_env(region or instance.region)

    # =========================================================================
    # 프로파일 세션
    # =========================================================================

    def activate_session(
        self,
        instance: AuthInstance,
        token: AccessToken,
        role: AccountRole,
        profile_name: str | None = None,
        region: str | None = None,
        output: str | None = None,
    ) -> ProfileSession:
        """역할 자격증명을 발급받아 프로파일로 저장

        프로파일 이름은 인자, 같은 역할의 기존 프로파일, 기본 이름 순으로 정합니다.
        region/output이 없으면 ssocred 기본값 프로파일, 전역 기본값 순으로 사용합니다.

        Raises:
            ProfileConflictError: 사용자 관리 영역에 같은 이름의 프로파일이 있음
        """
        credentials = self.credential_manager.get_credentials(instance, token, role)
        name = profile_name or self.config_store.get_existing_profile_name(role) or role.default_profile_name

        defaults = self.config_store.read_tool_defaults()
        region = region or (defaults.region if defaults else settings.DEFAULT_REGION)
        output = output or (defaults.output if defaults else None)

        self.config_store.write_credentials_with_metadata(
            name,
            credentials,
            region,
            output,
            account_role=role,
            sso_session=instance.session_name,
        )
        logger.info("세션 활성화: %s → %s", role.display_name, name)
        return ProfileSession(
            profile_name=name,
            account_role=role,
            credentials=credentials,
            is_default=name == "default",
            instance=instance,
        )

    def deactivate_session(self, profile_name: str) -> bool:
        """프로파일 자격증명 무효화 (없으면 False)"""
        return self.config_store.invalidate_profile(profile_name)

    def list_profile_sessions(self, instance: AuthInstance | None = None) -> list[ProfileSession]:
        """Account/Role 주석이 있는 credentials 프로파일 목록"""
        sessions = []
        for status in self.config_store.list_profile_statuses():
            if not status.account_id or not status.role_name:
                continue

            credentials = None
            if status.has_credentials and not status.invalidated and status.expiration is not None:
                keys = self.config_store.get_profile_credentials(status.profile_name)
                if keys is not None:
                    credentials = RoleCredentials(
                        access_key_id=keys["aws_access_key_id"],
                        secret_access_key=keys["aws_secret_access_key"],
                        session_token=keys["aws_session_token"],
                        expiration=status.expiration,
                    )

            sessions.append(
                ProfileSession(
                    profile_name=status.profile_name,
                    account_role=AccountRole(status.account_id, status.account_id, status.role_name),
                    credentials=credentials,
                    is_default=status.profile_name == "default",
                    instance=instance,
                )
            )
        return sessions
