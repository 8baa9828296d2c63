# ssocred/auth/cache/__init__.py
"""
SSO 토큰 및 역할 자격증명 캐시 모듈

캐시 전략:
- TokenCache: 파일 기반 (~/.aws/sso/cache/) - AWS CLI 호환 필수
- CredentialCache: 파일 기반 (~/.aws/cli/cache/) - 만료 전까지 재사용

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    "CACHE_KEY_SCHEME",
    "CacheStore",
    "TokenCache",
    "CredentialCache",
    "derive_cache_key",
    "token_cache_key",
    "credential_cache_key",
]

_IMPORT_MAPPING = {name: (".cache", name) for name in __all__}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
