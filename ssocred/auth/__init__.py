# ssocred/auth/__init__.py
"""
AWS SSO 인증 모듈 (ssocred/auth)

서브패키지:
- types: 데이터 타입과 에러 클래스
- cache: SSO 토큰/역할 자격증명 파일 캐시
- provider: SSO-OIDC 디바이스 인증, SSO 계정/역할/자격증명 조회
- config: ~/.aws/config, ~/.aws/credentials 병합
- export: 자격증명 환경변수 내보내기, 명령 실행

사용 예시:
    from ssocred.auth import SessionManager

    manager = SessionManager()
    instance = manager.config_store.resolve_sso_session()
    token = manager.login(instance)
    for role in manager.list_account_roles(instance, token):
        print(role.full_display)

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
    실제 사용 시점에만 하위 모듈이 로드됩니다.
"""

__all__ = [
    # Types
    "AuthInstance",
    "AccessToken",
    "AccountRole",
    "RoleCredentials",
    "DeviceAuthorizationInfo",
    "ProfileSession",
    "SessionStatus",
    "AuthError",
    "ProviderError",
    "AuthorizationExpiredError",
    "AuthorizationCancelledError",
    "TokenExpiredError",
    "ConfigurationError",
    "ProfileConflictError",
    "CacheError",
    "NoSessionFoundError",
    "AccountRoleNotFoundError",
    # Cache
    "TokenCache",
    "CredentialCache",
    # Provider
    "DeviceFlowClient",
    "DeviceFlowState",
    "AuthorizationHandoff",
    "CredentialFetcher",
    "CredentialManager",
    # Config
    "AWSConfigStore",
    "AWSSession",
    "DefaultConfig",
    # Session
    "SessionManager",
    # Utilities
    "format_time_remaining",
    "is_expiring_soon",
    "generate_console_url",
    "print_authorization_prompt",
    "export_lines",
    "run_with_credentials",
]

_IMPORT_MAPPING = {
    # Types
    "AuthInstance": (".types", "AuthInstance"),
    "AccessToken": (".types", "AccessToken"),
    "AccountRole": (".types", "AccountRole"),
    "RoleCredentials": (".types", "RoleCredentials"),
    "DeviceAuthorizationInfo": (".types", "DeviceAuthorizationInfo"),
    "ProfileSession": (".types", "ProfileSession"),
    "SessionStatus": (".types", "SessionStatus"),
    "AuthError": (".types", "AuthError"),
    "ProviderError": (".types", "ProviderError"),
    "AuthorizationExpiredError": (".types", "AuthorizationExpiredError"),
    "AuthorizationCancelledError": (".types", "AuthorizationCancelledError"),
    "TokenExpiredError": (".types", "TokenExpiredError"),
    "ConfigurationError": (".types", "ConfigurationError"),
    "ProfileConflictError": (".types", "ProfileConflictError"),
    "CacheError": (".types", "CacheError"),
    "NoSessionFoundError": (".types", "NoSessionFoundError"),
    "AccountRoleNotFoundError": (".types", "AccountRoleNotFoundError"),
    # Cache
    "TokenCache": (".cache", "TokenCache"),
    "CredentialCache": (".cache", "CredentialCache"),
    # Provider
    "DeviceFlowClient": (".provider", "DeviceFlowClient"),
    "DeviceFlowState": (".provider", "DeviceFlowState"),
    "AuthorizationHandoff": (".provider", "AuthorizationHandoff"),
    "CredentialFetcher": (".provider", "CredentialFetcher"),
    "CredentialManager": (".provider", "CredentialManager"),
    # Config
    "AWSConfigStore": (".config", "AWSConfigStore"),
    "AWSSession": (".config", "AWSSession"),
    "DefaultConfig": (".config", "DefaultConfig"),
    # Session
    "SessionManager": (".session", "SessionManager"),
    # Utilities
    "format_time_remaining": (".expiry", "format_time_remaining"),
    "is_expiring_soon": (".expiry", "is_expiring_soon"),
    "generate_console_url": (".console", "generate_console_url"),
    "print_authorization_prompt": (".prompt", "print_authorization_prompt"),
    "export_lines": (".export", "export_lines"),
    "run_with_credentials": (".export", "run_with_credentials"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
