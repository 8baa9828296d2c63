# ssocred/auth/config/__init__.py
"""
~/.aws/config, ~/.aws/credentials 병합 모듈

- markers: 사용자/ssocred 관리 영역 마커 처리
- ini: 줄 단위 INI 섹션 편집
- backup: 첫 쓰기 전 백업
- store: AWSConfigStore (읽기/쓰기 연산)

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    # Store
    "AWSConfigStore",
    "AWSSession",
    "DefaultConfig",
    "ProfileDetails",
    "ProfileInfo",
    "ProfileStatus",
    # Backup
    "FirstRunBackup",
    # Markers
    "ensure_markers",
    "split_into_sections",
    "split_by_marker",
    "reconstruct_config",
    "cleanup_empty_lines",
    # INI
    "ManagedRegion",
    "update_section",
    "rename_section",
    "delete_section",
    "sort_credentials_sections",
]

_IMPORT_MAPPING = {
    "AWSConfigStore": (".store", "AWSConfigStore"),
    "AWSSession": (".store", "AWSSession"),
    "DefaultConfig": (".store", "DefaultConfig"),
    "ProfileDetails": (".store", "ProfileDetails"),
    "ProfileInfo": (".store", "ProfileInfo"),
    "ProfileStatus": (".store", "ProfileStatus"),
    "FirstRunBackup": (".backup", "FirstRunBackup"),
    "ensure_markers": (".markers", "ensure_markers"),
    "split_into_sections": (".markers", "split_into_sections"),
    "split_by_marker": (".markers", "split_by_marker"),
    "reconstruct_config": (".markers", "reconstruct_config"),
    "cleanup_empty_lines": (".markers", "cleanup_empty_lines"),
    "ManagedRegion": (".ini", "ManagedRegion"),
    "update_section": (".ini", "update_section"),
    "rename_section": (".ini", "rename_section"),
    "delete_section": (".ini", "delete_section"),
    "sort_credentials_sections": (".ini", "sort_credentials_sections"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
