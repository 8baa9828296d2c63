# ssocred/__init__.py
"""
ssocred - AWS IAM Identity Center(SSO) 자격증명 발급/캐시 도구

구성:
- ssocred.auth.provider: SSO-OIDC 디바이스 인증, 역할 자격증명 조회
- ssocred.auth.cache: 토큰/자격증명 파일 캐시
- ssocred.auth.config: ~/.aws/config, ~/.aws/credentials 마커 기반 병합
- ssocred.auth.session: 위 구성요소를 조합한 SessionManager

사용 예시:
    from ssocred import AuthInstance, SessionManager

    instance = AuthInstance(
        start_url="https://my-sso.awsapps.com/start",
        region="us-east-1",
        session_name="my-sso",
    )
    manager = SessionManager()
    token = manager.login(instance)
    role = manager.find_account_role(instance, token, "Production", "Developer")
    manager.activate_session(instance, token, role)

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    "AuthInstance",
    "AccessToken",
    "AccountRole",
    "RoleCredentials",
    "SessionManager",
    "AWSConfigStore",
    "settings",
    "get_version",
]

_IMPORT_MAPPING = {
    "AuthInstance": (".auth.types", "AuthInstance"),
    "AccessToken": (".auth.types", "AccessToken"),
    "AccountRole": (".auth.types", "AccountRole"),
    "RoleCredentials": (".auth.types", "RoleCredentials"),
    "SessionManager": (".auth.session", "SessionManager"),
    "AWSConfigStore": (".auth.config", "AWSConfigStore"),
    "settings": (".config", "settings"),
    "get_version": (".config", "get_version"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
