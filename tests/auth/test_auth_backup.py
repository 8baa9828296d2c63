# tests/auth/test_auth_backup.py
"""
ssocred/auth/config/backup.py 테스트

테스트 대상:
- FirstRunBackup: 첫 쓰기 전 백업, 관리 안내 주석, 마커 파일
- AWSConfigStore와의 연동
"""

from unittest.mock import patch

import pytest

from ssocred.auth.config import AWSConfigStore, AWSSession, FirstRunBackup
from ssocred.auth.config.backup import HEADER_PREFIX, backup_file_name, marker_file_path
from ssocred.auth.types import ConfigurationError

ORIGINAL = "[profile mine]\nregion = us-west-2\n"


class TestFirstRunBackup:
    """FirstRunBackup 테스트"""

    def test_names(self, aws_dir):
        """백업/마커 파일 이름"""
        assert backup_file_name(aws_dir / "config") == "config-before-ssocred.bak"
        assert marker_file_path(aws_dir) == aws_dir / ".ssocred-initialized"

    def test_load_reads_marker(self, aws_dir):
        """마커 파일 존재 여부로 상태 결정"""
        assert FirstRunBackup.load(aws_dir).initialized is False
        marker_file_path(aws_dir).write_text("", encoding="utf-8")
        assert FirstRunBackup.load(aws_dir).initialized is True

    def test_ensure_backs_up_existing_files(self, aws_dir, config_path, credentials_path):
        """존재하는 파일만 백업하고 안내 주석 추가"""
        config_path.write_text(ORIGINAL, encoding="utf-8")
        backup = FirstRunBackup(aws_dir)

        created = backup.ensure([config_path, credentials_path])

        bak = aws_dir / "config-before-ssocred.bak"
        assert created == [bak]
        assert bak.read_text(encoding="utf-8") == ORIGINAL
        content = config_path.read_text(encoding="utf-8")
        assert content.startswith(HEADER_PREFIX)
        assert "config-before-ssocred.bak" in content
        assert content.endswith(ORIGINAL)
        assert not credentials_path.exists()
        assert backup.initialized
        assert backup.marker_path.exists()

    def test_ensure_runs_once(self, aws_dir, config_path):
        """두 번째 호출은 아무것도 하지 않음"""
        config_path.write_text(ORIGINAL, encoding="utf-8")
        backup = FirstRunBackup(aws_dir)
        backup.ensure([config_path])
        config_path.write_text("changed\n", encoding="utf-8")

        assert backup.ensure([config_path]) == []
        assert (aws_dir / "config-before-ssocred.bak").read_text(encoding="utf-8") == ORIGINAL

    def test_header_not_duplicated(self, aws_dir, config_path):
        """이미 안내 주석이 있으면 다시 추가하지 않음"""
        config_path.write_text(f"{HEADER_PREFIX}\n{ORIGINAL}", encoding="utf-8")
        FirstRunBackup(aws_dir).ensure([config_path])
        assert config_path.read_text(encoding="utf-8").count(HEADER_PREFIX) == 1

    def test_copy_failure(self, aws_dir, config_path):
        """복사 실패 시 ConfigurationError"""
        config_path.write_text(ORIGINAL, encoding="utf-8")
        with patch("ssocred.auth.config.backup.shutil.copy2", side_effect=PermissionError("denied")):
            with pytest.raises(ConfigurationError) as exc_info:
                FirstRunBackup(aws_dir).ensure([config_path])
        assert exc_info.value.path == config_path


class TestStoreBackup:
    """AWSConfigStore 첫 쓰기 백업 연동 테스트"""

    def test_first_write_creates_backup(self, aws_dir, config_path, credentials_path):
        """첫 쓰기 전에 원본 백업, 사용자 영역 유지"""
        config_path.write_text(ORIGINAL, encoding="utf-8")
        store = AWSConfigStore(config_path, credentials_path)
        assert store.backup.initialized is False

        store.write_sso_session(AWSSession("org", "https://x.awsapps.com/start", "us-east-1"))

        assert (aws_dir / "config-before-ssocred.bak").read_text(encoding="utf-8") == ORIGINAL
        content = config_path.read_text(encoding="utf-8")
        assert content.startswith(HEADER_PREFIX)
        assert store.profile_exists_in_user_section("mine")
        assert FirstRunBackup.load(aws_dir).initialized

    def test_injected_state_skips_backup(self, aws_dir, config_path, credentials_path):
        """초기화된 상태를 주입하면 백업하지 않음"""
        config_path.write_text(ORIGINAL, encoding="utf-8")
        store = AWSConfigStore(config_path, credentials_path, backup=FirstRunBackup(aws_dir, initialized=True))

        store.write_sso_session(AWSSession("org", "https://x.awsapps.com/start", "us-east-1"))

        assert not (aws_dir / "config-before-ssocred.bak").exists()
        assert not config_path.read_text(encoding="utf-8").startswith(HEADER_PREFIX)
