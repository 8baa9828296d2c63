# ssocred/auth/prompt.py
"""
디바이스 인증 안내 출력

사용자 코드와 인증 URL을 stderr로 출력하고 (headless가 아니면) 브라우저를 엽니다.
stdout은 스크립트 출력용으로 비워 둡니다.
"""

from __future__ import annotations

import logging
import webbrowser
from collections.abc import Callable

from rich.console import Console
from rich.panel import Panel

from .types import DeviceAuthorizationInfo

logger = logging.getLogger(__name__)

console = Console(stderr=True)


def open_browser(url: str) -> bool:
    """기본 브라우저로 URL 열기 (실패 시 경고 로그 후 False)"""
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as e:
        logger.warning(f"브라우저 열기 실패: {e}")
        return False
    if not opened:
        logger.warning("브라우저를 열 수 없습니다. URL을 직접 방문하세요")
    return opened


def print_authorization_prompt(
    info: DeviceAuthorizationInfo,
    headless: bool = False,
    opener: Callable[[str], bool] | None = None,
) -> None:
    """사용자 코드/URL 안내 후 브라우저 열기

    Args:
        info: start_device_authorization 결과
        headless: True면 브라우저를 열지 않음
        opener: 브라우저 열기 함수 (기본: open_browser)
    """
    lines = [
        f"사용자 코드: [bold cyan]{info.user_code}[/bold cyan]",
        f"인증 URL: {info.verification_uri}",
    ]
    if info.verification_uri_complete:
        lines.append(f"바로가기: {info.verification_uri_complete}")
    if info.expires_in:
        lines.append(f"[dim]코드 유효 시간: {info.expires_in // 60}분[/dim]")
    console.print(Panel("\n".join(lines), title="SSO 로그인"))

    if headless:
        return

    (opener or open_browser)(info.browser_url)
