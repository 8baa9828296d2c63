# ssocred/auth/console.py
"""
AWS 콘솔 로그인 URL 생성 (federation 엔드포인트)

1. getSigninToken: 임시 자격증명으로 SigninToken 발급
2. login URL: Destination(리전별 콘솔)과 SigninToken 조합
"""

from __future__ import annotations

import json
import logging
from urllib.parse import urlencode

import requests

from ..config import get_default_region, settings
from .types import ProviderError, RoleCredentials

logger = logging.getLogger(__name__)

FEDERATION_URL = "https://signin.aws.amazon.com/federation"
CONSOLE_URL = "https://console.aws.amazon.com/"

PROVIDER_NAME = "federation"


def get_signin_token(credentials: RoleCredentials, timeout: int | None = None) -> str:
    """임시 자격증명으로 SigninToken 발급

    Raises:
        ProviderError: 요청 실패 또는 응답에 SigninToken 없음
    """
    session = json.dumps(
        {
            "sessionId": credentials.access_key_id,
            "sessionKey": credentials.secret_access_key,
            "sessionToken": credentials.session_token,
        }
    )
    params = {
        "Action": "getSigninToken",
        "SessionDuration": str(settings.CONSOLE_SESSION_DURATION_SECONDS),
        "Session": session,
    }

    try:
        response = requests.get(FEDERATION_URL, params=params, timeout=timeout or settings.API_TIMEOUT)
        response.raise_for_status()
        data = response.json()
    except requests.RequestException as e:
        raise ProviderError(PROVIDER_NAME, "getSigninToken", "SigninToken 요청 실패", e) from e
    except ValueError as e:
        raise ProviderError(PROVIDER_NAME, "getSigninToken", "응답 JSON 파싱 실패", e) from e

    token = data.get("SigninToken") if isinstance(data, dict) else None
    if not token:
        raise ProviderError(PROVIDER_NAME, "getSigninToken", "응답에 SigninToken이 없습니다")
    return token


def build_login_url(signin_token: str, region: str) -> str:
    """SigninToken으로 콘솔 로그인 URL 구성"""
    params = {
        "Action": "login",
        "Issuer": settings.TOOL_NAME,
        "Destination": f"{CONSOLE_URL}?region={region}",
        "SigninToken": signin_token,
    }
    return f"{FEDERATION_URL}?{urlencode(params)}"


def generate_console_url(credentials: RoleCredentials, region: str | None = None) -> str:
    """역할 자격증명으로 콘솔 로그인 URL 생성

    Args:
        credentials: 유효한 역할 자격증명
        region: 콘솔 리전 (None이면 기본 리전)
    """
    region = region or get_default_region()
    token = get_signin_token(credentials)
    logger.debug("콘솔 로그인 URL 생성 (region=%s)", region)
    return build_login_url(token, region)
