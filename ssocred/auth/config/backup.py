# ssocred/auth/config/backup.py
"""
첫 쓰기 전 백업

ssocred가 ~/.aws/config 또는 ~/.aws/credentials를 처음 수정하기 전에
원본을 <name>-before-ssocred.bak으로 복사하고, 원본 앞에 관리 안내 주석을 추가합니다.
완료 후 ~/.aws/.ssocred-initialized 마커 파일을 만들어 이후 쓰기에서는 건너뜁니다.

초기화 여부는 FirstRunBackup 인스턴스가 상태로 가지며 AWSConfigStore에 주입됩니다.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from ...config import settings
from ..types import ConfigurationError

logger = logging.getLogger(__name__)

HEADER_PREFIX = f"# This file is managed by {settings.TOOL_NAME}"


def backup_file_name(path: Path) -> str:
    return f"{path.name}-before-{settings.TOOL_NAME}.bak"


def marker_file_path(aws_dir: Path) -> Path:
    return aws_dir / f".{settings.TOOL_NAME}-initialized"


def _header_comment(backup_name: str) -> str:
    return f"{HEADER_PREFIX} (AWS SSO credential helper)\n# Original backup: {backup_name} (created on first run)\n\n"


class FirstRunBackup:
    """첫 쓰기 백업 상태

    Attributes:
        aws_dir: 마커 파일을 둘 디렉토리
        initialized: 이미 백업을 마쳤는지 여부
    """

    def __init__(self, aws_dir: Path | str, initialized: bool = False):
        self.aws_dir = Path(aws_dir)
        self.initialized = initialized

    @classmethod
    def load(cls, aws_dir: Path | str) -> FirstRunBackup:
        """마커 파일 존재 여부로 초기화 상태를 읽어 생성"""
        aws_dir = Path(aws_dir)
        return cls(aws_dir, initialized=marker_file_path(aws_dir).exists())

    @property
    def marker_path(self) -> Path:
        return marker_file_path(self.aws_dir)

    def ensure(self, paths: Iterable[Path]) -> list[Path]:
        """아직 초기화되지 않았으면 존재하는 파일을 백업하고 마커를 기록

        Args:
            paths: 백업 대상 파일 (config, credentials)

        Returns:
            생성된 백업 파일 경로 목록 (이미 초기화된 경우 빈 목록)

        Raises:
            ConfigurationError: 복사 또는 쓰기 실패
        """
        if self.initialized:
            return []

        created = []
        for path in paths:
            path = Path(path)
            if not path.exists():
                continue
            backup_path = path.with_name(backup_file_name(path))
            try:
                shutil.copy2(path, backup_path)
                content = path.read_text(encoding="utf-8")
                if not content.startswith(HEADER_PREFIX):
                    path.write_text(_header_comment(backup_path.name) + content, encoding="utf-8")
            except OSError as e:
                raise ConfigurationError(f"백업 생성 실패: {path}", cause=e, path=path) from e
            logger.info("백업 생성: %s", backup_path)
            created.append(backup_path)

        try:
            self.aws_dir.mkdir(parents=True, exist_ok=True)
            self.marker_path.write_text("", encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                f"초기화 마커 파일 생성 실패: {self.marker_path}", cause=e, path=self.marker_path
            ) from e

        self.initialized = True
        return created
