# ssocred/auth/export.py
"""
역할 자격증명을 환경변수로 내보내기

- export_lines: 셸에서 eval 할 수 있는 export 문 생성 (sh/fish/powershell)
- run_with_credentials: 자격증명 환경변수를 주입해 명령 실행

사용 예시:
    creds = manager.credential_manager.get_credentials(instance, token, role)
    print("\\n".join(export_lines(creds, region="ap-northeast-2")))
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Mapping, Sequence

from .types import ConfigurationError, RoleCredentials

logger = logging.getLogger(__name__)

SUPPORTED_SHELLS = ("sh", "fish", "powershell")


def _quote(value: str, shell: str) -> str:
    if shell == "sh":
        return shlex.quote(value)
    if shell == "fish":
        escaped = value.replace("\\", "\\\\").replace("'", "\\'")
        return f"'{escaped}'"
    return "'" + value.replace("'", "''") + "'"


def export_lines(
    credentials: RoleCredentials,
    region: str | None = None,
    shell: str = "sh",
) -> list[str]:
    """export 문 목록 (마지막 줄은 만료 시간 주석)

    Args:
        credentials: 역할 자격증명
        region: 포함할 리전 (없으면 리전 변수 생략)
        shell: "sh" (bash/zsh), "fish", "powershell"

    Raises:
        ConfigurationError: 지원하지 않는 셸
    """
    if shell not in SUPPORTED_SHELLS:
        raise ConfigurationError(
            f"지원하지 않는 셸: {shell} (지원: {', '.join(SUPPORTED_SHELLS)})",
            config_key="shell",
        )

    lines = []
    for key, value in credentials.to_env(region).items():
        quoted = _quote(value, shell)
        if shell == "sh":
            lines.append(f"export {key}={quoted}")
        elif shell == "fish":
            lines.append(f"set -gx {key} {quoted}")
        else:
            lines.append(f"$Env:{key} = {quoted}")

    lines.append(f"# Credentials expire at: {credentials.expiration.strftime('%Y-%m-%d %H:%M:%S UTC')}")
    return lines


def run_with_credentials(
    command: Sequence[str],
    credentials: RoleCredentials,
    region: str | None = None,
    base_env: Mapping[str, str] | None = None,
) -> int:
    """자격증명 환경변수를 주입해 명령을 실행하고 종료 코드 반환

    기존 환경(base_env, 기본: os.environ)의 AWS_PROFILE은 제거합니다.

    Raises:
        ConfigurationError: 실행할 명령이 없음
        OSError: 명령 실행 실패 (예: 실행 파일 없음)
    """
    if not command:
        raise ConfigurationError("실행할 명령이 없습니다", config_key="command")

    env = dict(os.environ if base_env is None else base_env)
    env.pop("AWS_PROFILE", None)
    env.update(credentials.to_env(region))

    logger.debug("자격증명 환경으로 명령 실행: %s", command[0])
    result = subprocess.run(list(command), env=env, check=False)  # noqa: S603
    return result.returncode
