# ssocred/auth/provider/__init__.py
"""
SSO 인증 Provider 모듈

- DeviceFlowClient: SSO-OIDC 디바이스 인증 (토큰 발급)
- CredentialFetcher: SSO 계정/역할 조회, 역할 자격증명 발급
- CredentialManager: 자격증명 캐시 우선 조회

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    # OIDC
    "DeviceFlowClient",
    "DeviceFlowState",
    "AuthorizationHandoff",
    # SSO
    "CredentialFetcher",
    "CredentialManager",
]

_IMPORT_MAPPING = {
    "DeviceFlowClient": (".oidc", "DeviceFlowClient"),
    "DeviceFlowState": (".oidc", "DeviceFlowState"),
    "AuthorizationHandoff": (".oidc", "AuthorizationHandoff"),
    "CredentialFetcher": (".sso", "CredentialFetcher"),
    "CredentialManager": (".sso", "CredentialManager"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
