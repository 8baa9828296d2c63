# ssocred/auth/provider/oidc.py
"""
SSO-OIDC 디바이스 인증 (OAuth2 Device Authorization Grant)

상태 전이:
    UNREGISTERED → CLIENT_REGISTERED → AUTHORIZATION_STARTED → POLLING
    → AUTHORIZED | EXPIRED | FAILED

- 클라이언트 등록은 인증 시마다 새로 수행하며 client id/secret은 저장하지 않습니다.
- 폴링 응답 분류:
    AuthorizationPendingException  interval 만큼 대기 후 재시도
    SlowDownException              interval을 5초 늘리고 재시도
    ExpiredTokenException          EXPIRED (AuthorizationExpiredError)
    그 외                          FAILED (ProviderError)
- 재시도 횟수 제한은 없습니다. cancel_event(threading.Event)로 취소하거나
  max_wait_seconds로 클라이언트 측 제한을 둘 수 있습니다.

사용 예시:
    client = DeviceFlowClient(region="us-east-1")
    token = client.perform_device_flow(
        start_url="https://my-sso.awsapps.com/start",
        on_authorization=print_authorization_prompt,
    )
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Callable
from datetime import timedelta
from enum import Enum
from time import sleep
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ...config import settings
from ..types import (
    AccessToken,
    AuthorizationCancelledError,
    AuthorizationExpiredError,
    DeviceAuthorizationInfo,
    ProviderError,
    utc_now,
)

logger = logging.getLogger(__name__)

PROVIDER_NAME = "sso-oidc"
DEVICE_CODE_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:device_code"

AUTHORIZATION_PENDING = "AuthorizationPendingException"
SLOW_DOWN = "SlowDownException"
EXPIRED_TOKEN = "ExpiredTokenException"

AuthorizationCallback = Callable[[DeviceAuthorizationInfo], Any]


class DeviceFlowState(Enum):
    """디바이스 인증 진행 상태"""

    UNREGISTERED = "unregistered"
    CLIENT_REGISTERED = "client-registered"
    AUTHORIZATION_STARTED = "authorization-started"
    POLLING = "polling"
    AUTHORIZED = "authorized"
    EXPIRED = "expired"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


def _error_message(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Message", str(error))


class DeviceFlowClient:
    """SSO-OIDC 디바이스 인증 클라이언트

    Args:
        region: SSO 리전
        session_factory: boto3 Session 생성 함수 (테스트에서 교체 가능)
    """

    def __init__(
        self,
        region: str,
        session_factory: Callable[..., Any] | None = None,
    ):
        self.region = region
        session = (session_factory or boto3.Session)(region_name=region)
        self._client = session.client("sso-oidc", region_name=region)
        self.state = DeviceFlowState.UNREGISTERED
        self.start_url: str | None = None

    def register_client(self, scopes: list[str] | None = None) -> tuple[str, str]:
        """퍼블릭 클라이언트 등록

        Returns:
            (client_id, client_secret)

        Raises:
            ProviderError: API 실패 또는 응답에 id/secret 누락
        """
        params: dict[str, Any] = {
            "clientName": settings.CLIENT_NAME,
            "clientType": settings.CLIENT_TYPE,
        }
        if scopes:
            params["scopes"] = scopes

        try:
            response = self._client.register_client(**params)
        except (ClientError, BotoCoreError) as e:
            self.state = DeviceFlowState.FAILED
            raise ProviderError(PROVIDER_NAME, "register_client", "클라이언트 등록 실패", e) from e

        client_id = response.get("clientId")
        client_secret = response.get("clientSecret")
        if not client_id or not client_secret:
            self.state = DeviceFlowState.FAILED
            raise ProviderError(PROVIDER_NAME, "register_client", "응답에 clientId 또는 clientSecret이 없습니다")

        self.state = DeviceFlowState.CLIENT_REGISTERED
        logger.debug("SSO-OIDC 클라이언트 등록 완료")
        return client_id, client_secret

    def start_device_authorization(
        self,
        client_id: str,
        client_secret: str,
        start_url: str,
    ) -> DeviceAuthorizationInfo:
        """디바이스 인증 시작

        Raises:
            ProviderError: API 실패 또는 응답 필드 누락
        """
        try:
            response = self._client.start_device_authorization(
                clientId=client_id,
                clientSecret=client_secret,
                startUrl=start_url,
            )
        except (ClientError, BotoCoreError) as e:
            self.state = DeviceFlowState.FAILED
            raise ProviderError(PROVIDER_NAME, "start_device_authorization", "디바이스 인증 시작 실패", e) from e

        missing = [k for k in ("deviceCode", "userCode", "verificationUri") if not response.get(k)]
        if missing:
            self.state = DeviceFlowState.FAILED
            raise ProviderError(
                PROVIDER_NAME,
                "start_device_authorization",
                f"응답 필드 누락: {', '.join(missing)}",
            )

        self.start_url = start_url
        self.state = DeviceFlowState.AUTHORIZATION_STARTED
        return DeviceAuthorizationInfo(
            device_code=response["deviceCode"],
            user_code=response["userCode"],
            verification_uri=response["verificationUri"],
            verification_uri_complete=response.get("verificationUriComplete"),
            expires_in=response.get("expiresIn"),
            interval=response.get("interval"),
        )

    def _wait(self, seconds: int, cancel_event: threading.Event | None) -> None:
        if cancel_event is None:
            sleep(seconds)
            return
        if cancel_event.wait(seconds):
            self.state = DeviceFlowState.FAILED
            raise AuthorizationCancelledError()

    def poll_for_token(
        self,
        client_id: str,
        client_secret: str,
        device_code: str,
        interval: int | None = None,
        cancel_event: threading.Event | None = None,
        max_wait_seconds: float | None = None,
    ) -> AccessToken:
        """토큰 발급까지 폴링

        첫 요청은 대기 없이 바로 보냅니다.

        Args:
            interval: 폴링 간격 (초, 기본 5)
            cancel_event: set되면 다음 대기 중에 AuthorizationCancelledError
            max_wait_seconds: 폴링 총 시간 제한 (None이면 제한 없음)

        Raises:
            AuthorizationExpiredError: 디바이스 코드 만료 또는 max_wait_seconds 초과
            AuthorizationCancelledError: cancel_event로 취소됨
            ProviderError: 그 외 API 에러
        """
        interval = interval or settings.POLL_INTERVAL_SECONDS
        deadline = time.monotonic() + max_wait_seconds if max_wait_seconds is not None else None
        self.state = DeviceFlowState.POLLING
        logger.debug("토큰 폴링 시작 (interval=%ds)", interval)

        while True:
            if cancel_event is not None and cancel_event.is_set():
                self.state = DeviceFlowState.FAILED
                raise AuthorizationCancelledError()

            try:
                response = self._client.create_token(
                    clientId=client_id,
                    clientSecret=client_secret,
                    grantType=DEVICE_CODE_GRANT_TYPE,
                    deviceCode=device_code,
                )
            except ClientError as e:
                code = _error_code(e)
                if code == SLOW_DOWN:
                    interval += settings.SLOW_DOWN_INCREMENT_SECONDS
                    logger.debug("SlowDown 요청, 폴링 간격 증가: %ds", interval)
                elif code == EXPIRED_TOKEN:
                    self.state = DeviceFlowState.EXPIRED
                    raise AuthorizationExpiredError(cause=e) from e
                elif code != AUTHORIZATION_PENDING:
                    self.state = DeviceFlowState.FAILED
                    raise ProviderError(PROVIDER_NAME, "create_token", f"{code}: {_error_message(e)}", e) from e
            except BotoCoreError as e:
                self.state = DeviceFlowState.FAILED
                raise ProviderError(PROVIDER_NAME, "create_token", "토큰 요청 실패", e) from e
            else:
                return self._build_token(response)

            if deadline is not None and time.monotonic() + interval > deadline:
                self.state = DeviceFlowState.EXPIRED
                raise AuthorizationExpiredError("디바이스 인증 대기 시간을 초과했습니다")
            self._wait(interval, cancel_event)

    def _build_token(self, response: dict[str, Any]) -> AccessToken:
        access_token = response.get("accessToken")
        if not access_token:
            self.state = DeviceFlowState.FAILED
            raise ProviderError(PROVIDER_NAME, "create_token", "응답에 accessToken이 없습니다")

        if not response.get("expiresIn"):
            self.state = DeviceFlowState.FAILED
            raise ProviderError(PROVIDER_NAME, "create_token", "응답에 expiresIn이 없습니다")

        expires_in = int(response["expiresIn"])
        self.state = DeviceFlowState.AUTHORIZED
        logger.info("SSO 인증 완료 (만료까지 %d초)", expires_in)
        return AccessToken(
            access_token=access_token,
            expires_at=utc_now() + timedelta(seconds=expires_in),
            refresh_token=response.get("refreshToken"),
            region=self.region,
            start_url=self.start_url,
        )

    def perform_device_flow(
        self,
        start_url: str,
        on_authorization: AuthorizationCallback,
        cancel_event: threading.Event | None = None,
        max_wait_seconds: float | None = None,
        scopes: list[str] | None = None,
    ) -> AccessToken:
        """등록 → 인증 시작 → 화면 표시 콜백 → 폴링

        Args:
            start_url: SSO 시작 URL
            on_authorization: 사용자 코드/URL 표시 콜백 (표시 후 바로 반환해야 함)
        """
        client_id, client_secret = self.register_client(scopes)
        info = self.start_device_authorization(client_id, client_secret, start_url)
        on_authorization(info)
        return self.poll_for_token(
            client_id,
            client_secret,
            info.device_code,
            interval=info.interval,
            cancel_event=cancel_event,
            max_wait_seconds=max_wait_seconds,
        )


class AuthorizationHandoff:
    """디바이스 인증 정보를 UI 루프로 넘기는 채널

    on_authorization 콜백으로 사용하면 인증 정보를 큐에 넣고
    UI가 proceed()를 호출할 때까지 폴링 시작을 보류합니다.

    사용 예시:
        handoff = AuthorizationHandoff()
        worker = threading.Thread(
            target=client.perform_device_flow,
            args=(start_url, handoff),
        )
        worker.start()
        info = handoff.wait_for_info(timeout=30)
        render(info)
        handoff.proceed()
    """

    def __init__(self, proceed_timeout: float | None = None):
        self._queue: queue.Queue[DeviceAuthorizationInfo] = queue.Queue(maxsize=1)
        self._proceed = threading.Event()
        self.proceed_timeout = proceed_timeout

    def __call__(self, info: DeviceAuthorizationInfo) -> None:
        self._queue.put(info)
        if not self._proceed.wait(self.proceed_timeout):
            logger.debug("proceed 신호 없이 폴링 시작 (timeout=%s)", self.proceed_timeout)

    def wait_for_info(self, timeout: float | None = None) -> DeviceAuthorizationInfo | None:
        """인증 정보가 준비될 때까지 대기 (timeout 초과 시 None)"""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def proceed(self) -> None:
        """표시 완료 신호"""
        self._proceed.set()
