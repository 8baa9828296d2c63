# ssocred/auth/cache/cache.py
"""
SSO 토큰 및 역할 자격증명 파일 캐시 구현

- CacheStore: 키 → JSON 문서 파일 캐시 (읽기 실패는 항상 캐시 미스)
- TokenCache: SSO 액세스 토큰 캐시 (~/.aws/sso/cache/{hash}.json)
- CredentialCache: 역할 자격증명 캐시 (~/.aws/cli/cache/{hash}.json)

캐시 키 형식 (CACHE_KEY_SCHEME = "sha1-v1"):
- 토큰: sha1(session_name 또는 start_url) - AWS CLI v2와 동일하여 토큰을 공유
- 자격증명: sha1(start_url + ":" + account_id + ":" + role_name)
형식을 바꾸면 기존 캐시 파일은 더 이상 조회되지 않으므로 버전 문자열도 함께 변경합니다.

설계 원칙:
- 인덱스 없음: 매 조회마다 파일 존재/파싱/만료를 확인
- 파일 잠금 없음: 동시 쓰기는 마지막 쓰기가 남음
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

from ...config import get_credential_cache_dir, get_token_cache_dir
from ..types import AccessToken, AccountRole, AuthInstance, CacheError, RoleCredentials

logger = logging.getLogger(__name__)

CACHE_KEY_SCHEME = "sha1-v1"


def derive_cache_key(material: str) -> str:
    """캐시 파일명에 사용할 해시 키 생성"""
    return hashlib.sha1(material.encode("utf-8")).hexdigest()


def token_cache_key(instance: AuthInstance) -> str:
    """토큰 캐시 키 (AWS CLI v2 호환)"""
    return derive_cache_key(instance.cache_key_material)


def credential_cache_key(instance: AuthInstance, account_id: str, role_name: str) -> str:
    """역할 자격증명 캐시 키"""
    return derive_cache_key(f"{instance.start_url}:{account_id}:{role_name}")


# =============================================================================
# Cache Store
# =============================================================================


class CacheStore:
    """키 → JSON 문서 파일 캐시

    각 항목은 cache_dir/{key}.json 파일 하나입니다.
    """

    def __init__(self, cache_dir: Path | str):
        self.cache_dir = Path(cache_dir)

    def path_for(self, key: str) -> Path:
        return self.cache_dir / f"{key}.json"

    def read(self, key: str) -> dict[str, Any] | None:
        """캐시 문서 로드

        Returns:
            JSON 객체 또는 None (파일 없음, 읽기/파싱 실패, 객체가 아닌 경우)
        """
        path = self.path_for(key)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.debug("캐시 파일 읽기 실패 (미스로 처리): %s (%s)", path, e)
            return None

        if not isinstance(data, dict):
            logger.debug("캐시 파일 형식 오류 (미스로 처리): %s", path)
            return None
        return data

    def write(self, key: str, data: dict[str, Any]) -> Path:
        """캐시 문서 저장 (파일 전체 덮어쓰기)

        Raises:
            CacheError: 디렉토리 생성 또는 파일 쓰기 실패
        """
        path = self.path_for(key)
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            raise CacheError(f"캐시 파일 쓰기 실패: {path}", path=path, cause=e) from e
        return path

    def remove(self, key: str) -> bool:
        """캐시 파일 삭제

        Returns:
            True if 파일을 삭제함, False if 파일이 없었음

        Raises:
            CacheError: 파일 삭제 실패
        """
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise CacheError(f"캐시 파일 삭제 실패: {path}", path=path, cause=e) from e
        return True

    def exists(self, key: str) -> bool:
        return self.path_for(key).exists()

    def keys(self) -> list[str]:
        """캐시 디렉토리의 모든 키 (정렬)"""
        if not self.cache_dir.is_dir():
            return []
        return sorted(p.stem for p in self.cache_dir.glob("*.json"))

    def iter_entries(self) -> Iterator[tuple[str, dict[str, Any]]]:
        """읽을 수 있는 모든 항목 순회 (파싱 실패 항목은 건너뜀)"""
        for key in self.keys():
            data = self.read(key)
            if data is not None:
                yield key, data

    def clear(self) -> int:
        """모든 캐시 파일 삭제

        Returns:
            삭제된 파일 수
        """
        return sum(1 for key in self.keys() if self.remove(key))


def _load(store: CacheStore, key: str, factory: Callable[[dict[str, Any]], Any]) -> Any:
    data = store.read(key)
    if data is None:
        return None
    try:
        return factory(data)
    except (TypeError, ValueError) as e:
        logger.debug("캐시 항목 파싱 실패 (미스로 처리): %s (%s)", key, e)
        return None


# =============================================================================
# Token Cache
# =============================================================================


class TokenCache:
    """SSO 액세스 토큰 캐시

    AWS CLI와 호환되는 방식으로 토큰을 저장/로드합니다.
    캐시 파일 위치: ~/.aws/sso/cache/{sha1(session_name 또는 start_url)}.json
    """

    def __init__(self, cache_dir: Path | str | None = None):
        """TokenCache 초기화

        Args:
            cache_dir: 캐시 디렉토리 (기본: ~/.aws/sso/cache)
        """
        self.store = CacheStore(cache_dir or get_token_cache_dir())

    def cache_path(self, instance: AuthInstance) -> Path:
        return self.store.path_for(token_cache_key(instance))

    def get(self, instance: AuthInstance) -> AccessToken | None:
        """유효한 토큰 조회

        Returns:
            AccessToken 또는 None (파일 없음, 파싱 실패, 만료)
        """
        token = _load(self.store, token_cache_key(instance), AccessToken.from_dict)
        if token is None:
            return None
        if token.is_expired():
            logger.debug("만료된 토큰 캐시: %s", instance.cache_key_material)
            return None
        return token

    def put(self, instance: AuthInstance, token: AccessToken) -> None:
        """토큰 저장

        Raises:
            CacheError: 파일 쓰기 실패
        """
        path = self.store.write(token_cache_key(instance), token.to_dict())
        logger.debug("토큰 캐시 저장: %s", path)

    def remove(self, instance: AuthInstance) -> bool:
        """토큰 캐시 삭제 (파일이 없어도 에러 없음)"""
        return self.store.remove(token_cache_key(instance))

    def exists(self, instance: AuthInstance) -> bool:
        return self.store.exists(token_cache_key(instance))

    def list(self) -> list[tuple[str, AccessToken]]:
        """캐시된 모든 토큰 (만료 포함, 파싱 실패 항목은 건너뜀)

        AWS CLI가 같은 디렉토리에 저장하는 클라이언트 등록 파일 등
        토큰이 아닌 항목은 자동으로 제외됩니다.
        """
        result = []
        for key, data in self.store.iter_entries():
            try:
                result.append((key, AccessToken.from_dict(data)))
            except (TypeError, ValueError):
                continue
        return result


# =============================================================================
# Credential Cache
# =============================================================================


class CredentialCache:
    """역할 자격증명 캐시

    캐시 파일 위치: ~/.aws/cli/cache/{sha1(start_url:account_id:role_name)}.json
    """

    def __init__(self, cache_dir: Path | str | None = None):
        """CredentialCache 초기화

        Args:
            cache_dir: 캐시 디렉토리 (기본: ~/.aws/cli/cache)
        """
        self.store = CacheStore(cache_dir or get_credential_cache_dir())

    def get(self, instance: AuthInstance, role: AccountRole) -> RoleCredentials | None:
        """유효한 자격증명 조회 (없거나 만료되면 None)"""
        key = credential_cache_key(instance, role.account_id, role.role_name)
        credentials = _load(self.store, key, RoleCredentials.from_dict)
        if credentials is None or credentials.is_expired():
            return None
        return credentials

    def put(self, instance: AuthInstance, role: AccountRole, credentials: RoleCredentials) -> None:
        """자격증명 저장

        Raises:
            CacheError: 파일 쓰기 실패
        """
        key = credential_cache_key(instance, role.account_id, role.role_name)
        self.store.write(key, credentials.to_dict())

    def remove(self, instance: AuthInstance, role: AccountRole) -> bool:
        key = credential_cache_key(instance, role.account_id, role.role_name)
        return self.store.remove(key)

    def clear_all(self) -> int:
        """모든 자격증명 캐시 삭제"""
        count = self.store.clear()
        logger.info("자격증명 캐시 %d개 삭제", count)
        return count
