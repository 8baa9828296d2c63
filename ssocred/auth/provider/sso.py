# ssocred/auth/provider/sso.py
"""
SSO 계정/역할 조회 및 역할 자격증명 발급

- CredentialFetcher: sso 클라이언트 래퍼 (list_accounts, list_account_roles, get_role_credentials)
- CredentialManager: CredentialCache 우선 조회 후 필요 시 발급

계정/역할 목록은 botocore paginator로 순차 조회합니다.
같은 역할을 동시에 요청해도 중복 발급을 막지 않습니다.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, NoReturn

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..cache import CredentialCache
from ..types import (
    AccessToken,
    AccountRole,
    AuthInstance,
    ProviderError,
    RoleCredentials,
    TokenExpiredError,
    parse_timestamp,
)

logger = logging.getLogger(__name__)

PROVIDER_NAME = "sso"

_REQUIRED_CREDENTIAL_FIELDS = ("accessKeyId", "secretAccessKey", "sessionToken", "expiration")


class CredentialFetcher:
    """SSO 포털 API 클라이언트

    Args:
        region: SSO 리전
        session_factory: boto3 Session 생성 함수 (테스트에서 교체 가능)
    """

    def __init__(self, region: str, session_factory: Callable[..., Any] | None = None):
        self.region = region
        session = (session_factory or boto3.Session)(region_name=region)
        self._client = session.client("sso", region_name=region)

    def _raise_provider_error(self, operation: str, error: Exception) -> NoReturn:
        if isinstance(error, ClientError):
            code = error.response.get("Error", {}).get("Code", "")
            if code == "UnauthorizedException":
                raise TokenExpiredError("SSO 토큰이 만료되었거나 유효하지 않습니다", cause=error) from error
            raise ProviderError(PROVIDER_NAME, operation, code or "API 호출 실패", error) from error
        raise ProviderError(PROVIDER_NAME, operation, "API 호출 실패", error) from error

    def _call(self, operation: str, **params: Any) -> dict[str, Any]:
        try:
            return getattr(self._client, operation)(**params)
        except (ClientError, BotoCoreError) as e:
            self._raise_provider_error(operation, e)

    def _paginate(self, operation: str, list_key: str, **params: Any) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        try:
            paginator = self._client.get_paginator(operation)
            for page in paginator.paginate(**params):
                items.extend(page.get(list_key, []))
        except (ClientError, BotoCoreError) as e:
            self._raise_provider_error(operation, e)
        return items

    def list_accounts(self, access_token: str) -> list[tuple[str, str]]:
        """접근 가능한 계정 목록

        Returns:
            [(account_id, account_name), ...]
        """
        accounts = self._paginate("list_accounts", "accountList", accessToken=access_token)
        return [(a["accountId"], a.get("accountName") or a["accountId"]) for a in accounts]

    def list_account_roles(self, access_token: str, account_id: str) -> list[str]:
        """계정에서 사용 가능한 역할 이름 목록"""
        roles = self._paginate(
            "list_account_roles",
            "roleList",
            accessToken=access_token,
            accountId=account_id,
        )
        return [r["roleName"] for r in roles if r.get("roleName")]

    def fetch_credentials(self, access_token: str, account_id: str, role_name: str) -> RoleCredentials:
        """역할 임시 자격증명 발급

        Raises:
            TokenExpiredError: SSO 토큰 만료
            ProviderError: API 실패 또는 응답 필드 누락
        """
        response = self._call(
            "get_role_credentials",
            roleName=role_name,
            accountId=account_id,
            accessToken=access_token,
        )
        creds = response.get("roleCredentials") or {}
        missing = [k for k in _REQUIRED_CREDENTIAL_FIELDS if not creds.get(k)]
        if missing:
            raise ProviderError(
                PROVIDER_NAME,
                "get_role_credentials",
                f"응답 필드 누락: {', '.join(missing)}",
            )

        logger.debug("역할 자격증명 발급: %s/%s", account_id, role_name)
        return RoleCredentials(
            access_key_id=creds["accessKeyId"],
            secret_access_key=creds["secretAccessKey"],
            session_token=creds["sessionToken"],
            # expiration은 epoch 밀리초
            expiration=parse_timestamp(int(creds["expiration"]) / 1000),
        )


class CredentialManager:
    """역할 자격증명 조회 (캐시 우선)

    Args:
        cache: 자격증명 캐시 (기본: ~/.aws/cli/cache)
        fetcher_factory: 리전 → CredentialFetcher 생성 함수
    """

    def __init__(
        self,
        cache: CredentialCache | None = None,
        fetcher_factory: Callable[[str], CredentialFetcher] | None = None,
    ):
        self.cache = cache or CredentialCache()
        self._fetcher_factory = fetcher_factory or CredentialFetcher
        self._fetchers: dict[str, CredentialFetcher] = {}

    def fetcher(self, region: str) -> CredentialFetcher:
        if region not in self._fetchers:
            self._fetchers[region] = self._fetcher_factory(region)
        return self._fetchers[region]

    def get_credentials(
        self,
        instance: AuthInstance,
        token: AccessToken,
        role: AccountRole,
    ) -> RoleCredentials:
        """캐시된 자격증명이 유효하면 반환, 아니면 새로 발급하여 캐시에 저장"""
        cached = self.cache.get(instance, role)
        if cached is not None:
            logger.debug("캐시된 자격증명 사용: %s", role.display_name)
            return cached

        credentials = self.get_role_credentials(instance.region, token, role)
        self.cache.put(instance, role, credentials)
        return credentials

    def get_role_credentials(self, region: str, token: AccessToken, role: AccountRole) -> RoleCredentials:
        """캐시를 거치지 않고 발급"""
        return self.fetcher(region).fetch_credentials(token.access_token, role.account_id, role.role_name)

    def list_accounts(self, region: str, token: AccessToken) -> list[tuple[str, str]]:
        return self.fetcher(region).list_accounts(token.access_token)

    def list_account_roles(self, region: str, token: AccessToken, account_id: str) -> list[str]:
        return self.fetcher(region).list_account_roles(token.access_token, account_id)

    def list_all_account_roles(self, region: str, token: AccessToken) -> list[AccountRole]:
        """모든 계정의 역할 목록 (정렬)"""
        fetcher = self.fetcher(region)
        roles = []
        for account_id, account_name in fetcher.list_accounts(token.access_token):
            for role_name in fetcher.list_account_roles(token.access_token, account_id):
                roles.append(AccountRole(account_id, account_name, role_name))
        return sorted(roles)

    def clear_credentials(self, instance: AuthInstance, role: AccountRole) -> bool:
        return self.cache.remove(instance, role)

    def clear_all(self) -> int:
        return self.cache.clear_all()
