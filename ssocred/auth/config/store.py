# ssocred/auth/config/store.py
"""
ssocred/auth/config/store.py - ~/.aws/config, ~/.aws/credentials 병합 엔진

사용자와 다른 도구(AWS CLI 등)가 함께 편집하는 파일에서
ssocred가 소유한 섹션만 갱신하고 나머지는 보존합니다.

쓰기 규칙:
    - config 쓰기는 ssocred 관리 영역만 재생성 (parse → 변경 → 정렬 → render)
    - header와 사용자 관리 영역은 그대로 복사 (빈 줄 정규화만 적용)
    - 사용자 관리 영역에 같은 이름의 섹션(프로파일, [default], sso-session)이 있으면 쓰기 거부
    - rename/delete는 영역과 관계없이 섹션 헤더를 직접 수정
    - 모든 쓰기의 마지막 단계는 cleanup_empty_lines

파일 잠금은 없으며 동시에 쓰면 마지막 쓰기만 남습니다.

사용 예시:
    store = AWSConfigStore()
    store.write_sso_session(AWSSession("org", "https://x.awsapps.com/start", "us-east-1"))
    store.write_credentials_with_metadata("dev", credentials, "us-east-1", account_role=role)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from ...config import (
    get_config_file_path,
    get_credentials_file_path,
    get_sso_region_from_env,
    get_sso_start_url_from_env,
    settings,
)
from ..types import (
    AccountRole,
    AuthInstance,
    ConfigurationError,
    ProfileConflictError,
    RoleCredentials,
    format_timestamp,
    parse_timestamp,
    utc_now,
)
from .backup import FirstRunBackup
from .ini import (
    DEFAULT_SECTION,
    PROFILE_PREFIX,
    SSO_SESSION_PREFIX,
    ManagedRegion,
    config_section_name,
    delete_section,
    has_section,
    parse_sections,
    profile_name_from_section,
    rename_section,
    sort_credentials_sections,
    update_section,
)
from .markers import cleanup_empty_lines, ensure_markers, reconstruct_config, split_by_marker, split_into_sections

logger = logging.getLogger(__name__)

TOOL_DEFAULTS_SECTION = f"{PROFILE_PREFIX}{settings.TOOL_NAME}-defaults"

CREDENTIAL_KEYS = ("aws_access_key_id", "aws_secret_access_key", "aws_session_token")
INVALID_CREDENTIALS = {
    "aws_access_key_id": "INVALID_KEY",
    "aws_secret_access_key": "INVALID_SECRET",
    "aws_session_token": "INVALID_TOKEN",
}

ACCOUNT_COMMENT = "# Account:"
ROLE_COMMENT = "# Role:"
VALID_COMMENT = "# Valid:"
EXPIRATION_COMMENT = "# Expiration:"
INVALIDATED_COMMENT = "# Invalidated:"


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class AWSSession:
    """[sso-session <name>] 설정

    Attributes:
        name: 세션 이름
        start_url: SSO 시작 URL (sso_start_url)
        region: SSO 리전 (sso_region)
        registration_scopes: 등록 스코프 (None이면 기존 값 유지, 없으면 기본값)
    """

    name: str
    start_url: str
    region: str
    registration_scopes: str | None = None

    def __post_init__(self):
        if not self.start_url:
            raise ConfigurationError(f"SSO 세션 '{self.name}'에 sso_start_url이 없습니다", config_key="sso_start_url")
        if not self.region:
            raise ConfigurationError(f"SSO 세션 '{self.name}'에 sso_region이 없습니다", config_key="sso_region")

    @property
    def effective_scopes(self) -> str:
        return self.registration_scopes or settings.DEFAULT_REGISTRATION_SCOPES

    def to_instance(self) -> AuthInstance:
        return AuthInstance(start_url=self.start_url, region=self.region, session_name=self.name)


@dataclass
class DefaultConfig:
    """[default] 또는 ssocred 기본값 프로파일의 region/output"""

    region: str = settings.DEFAULT_REGION
    output: str = settings.DEFAULT_OUTPUT


@dataclass
class ProfileDetails:
    """config 파일의 프로파일 상세 정보 (표시용)"""

    region: str | None = None
    output: str | None = None
    sso_session: str | None = None
    sso_account_id: str | None = None
    sso_role_name: str | None = None


@dataclass
class ProfileInfo:
    """계정/역할로 찾은 프로파일"""

    name: str
    region: str
    output: str


@dataclass
class ProfileStatus:
    """credentials 파일 프로파일의 자격증명 상태

    Attributes:
        profile_name: 프로파일 이름
        account_id: "# Account:" 주석 값
        role_name: "# Role:" 주석 값
        has_credentials: 세 자격증명 키가 모두 있는지 여부
        expiration: "# Valid:" 또는 "# Expiration:" 주석의 만료 시간
        invalidated: invalidate_profile로 비활성화되었는지 여부
    """

    profile_name: str
    account_id: str | None = None
    role_name: str | None = None
    has_credentials: bool = False
    expiration: datetime | None = None
    invalidated: bool = False

    @property
    def is_active(self) -> bool:
        return (
            self.has_credentials
            and not self.invalidated
            and self.expiration is not None
            and self.expiration > utc_now()
        )


def _comment_value(comments: list[str], prefix: str) -> str | None:
    for comment in comments:
        if comment.startswith(prefix):
            return comment[len(prefix) :].strip()
    return None


def _parse_expiration(comments: list[str]) -> tuple[datetime | None, bool]:
    """(만료 시간, 비활성화 여부)"""
    valid = _comment_value(comments, VALID_COMMENT)
    if valid is not None and valid.lower() == "false":
        return None, True
    for value in (valid, _comment_value(comments, EXPIRATION_COMMENT)):
        if not value:
            continue
        try:
            return parse_timestamp(value), False
        except ValueError:
            logger.debug("만료 시간 주석 파싱 실패: %r", value)
    return None, False


# =============================================================================
# Config Store
# =============================================================================


class AWSConfigStore:
    """~/.aws/config, ~/.aws/credentials 읽기/쓰기

    Args:
        config_path: config 파일 경로 (기본: AWS_CONFIG_FILE 또는 ~/.aws/config)
        credentials_path: credentials 파일 경로 (기본: AWS_SHARED_CREDENTIALS_FILE 또는 ~/.aws/credentials)
        backup: 첫 쓰기 백업 상태 (기본: config 파일 디렉토리의 마커 파일로 판단)
    """

    def __init__(
        self,
        config_path: Path | str | None = None,
        credentials_path: Path | str | None = None,
        backup: FirstRunBackup | None = None,
    ):
        self.config_path = Path(config_path) if config_path else get_config_file_path()
        self.credentials_path = Path(credentials_path) if credentials_path else get_credentials_file_path()
        self.backup = backup if backup is not None else FirstRunBackup.load(self.config_path.parent)

    # -------------------------------------------------------------------------
    # 파일 I/O
    # -------------------------------------------------------------------------

    def _read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"파일 읽기 실패: {path}", cause=e, path=path) from e

    def _write_text(self, path: Path, content: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"파일 쓰기 실패: {path}", cause=e, path=path) from e
        logger.debug("파일 저장: %s", path)

    def _prepare_write(self) -> None:
        self.backup.ensure([self.config_path, self.credentials_path])

    def _tool_region(self) -> ManagedRegion:
        _, _, tool = split_into_sections(ensure_markers(self._read_text(self.config_path)))
        return ManagedRegion.parse(tool)

    def _user_region_text(self) -> str:
        user, _ = split_by_marker(ensure_markers(self._read_text(self.config_path)))
        return user

    def _refuse_user_section(self, section_name: str) -> None:
        """사용자 관리 영역에 같은 섹션이 있으면 쓰기 거부"""
        if not has_section(self._user_region_text(), section_name):
            return
        logger.warning("사용자 관리 영역의 섹션과 이름 충돌: [%s]", section_name)
        if section_name.startswith(SSO_SESSION_PREFIX):
            name = section_name[len(SSO_SESSION_PREFIX) :].strip()
            raise ConfigurationError(
                f"SSO 세션 '{name}'이(가) 사용자 관리 영역에 있습니다. "
                f"import_section('{name}', 'sso-session')으로 먼저 이전하세요",
                config_key=section_name,
                path=self.config_path,
            )
        raise ProfileConflictError(profile_name_from_section(section_name), path=self.config_path)

    def _update_tool_region(self, mutate: Callable[[ManagedRegion], None]) -> None:
        """ssocred 관리 영역만 재생성하여 config 파일 저장"""
        self._prepare_write()
        content = ensure_markers(self._read_text(self.config_path))
        header, user, tool = split_into_sections(content)
        region = ManagedRegion.parse(tool)
        mutate(region)
        result = reconstruct_config(header, user, region.render())
        self._write_text(self.config_path, cleanup_empty_lines(result))

    # -------------------------------------------------------------------------
    # SSO 세션
    # -------------------------------------------------------------------------

    def write_sso_session(self, session: AWSSession) -> None:
        """[sso-session <name>] 추가 또는 갱신

        registration_scopes가 None이면 기존 값을 유지합니다 (없으면 기본값).

        Raises:
            ConfigurationError: 사용자 관리 영역에 같은 이름의 세션이 있음
        """
        self._refuse_user_section(f"{SSO_SESSION_PREFIX}{session.name}")

        def mutate(region: ManagedRegion) -> None:
            values = region.sessions.setdefault(session.name, {})
            values["sso_start_url"] = session.start_url
            values["sso_region"] = session.region
            values["sso_registration_scopes"] = session.registration_scopes or values.get(
                "sso_registration_scopes", settings.DEFAULT_REGISTRATION_SCOPES
            )

        self._update_tool_region(mutate)
        logger.info("SSO 세션 저장: %s", session.name)

    def delete_sso_session(self, name: str) -> bool:
        """ssocred 관리 영역의 SSO 세션 삭제

        Returns:
            True if 삭제함, False if 해당 세션이 없음 (파일 변경 없음)
        """
        if name not in self._tool_region().sessions:
            return False
        self._update_tool_region(lambda region: region.sessions.pop(name, None))
        logger.info("SSO 세션 삭제: %s", name)
        return True

    def read_all_sso_sessions(self) -> list[AWSSession]:
        """config 파일의 모든 SSO 세션 (파일 순서, sso_start_url/sso_region이 없는 세션은 제외)"""
        sessions = []
        for section in parse_sections(self._read_text(self.config_path)):
            if not section.name.startswith(SSO_SESSION_PREFIX):
                continue
            name = section.name[len(SSO_SESSION_PREFIX) :].strip()
            start_url = section.values.get("sso_start_url")
            region = section.values.get("sso_region")
            if not start_url or not region:
                logger.debug("불완전한 SSO 세션 무시: %s", name)
                continue
            sessions.append(
                AWSSession(
                    name=name,
                    start_url=start_url,
                    region=region,
                    registration_scopes=section.values.get(
                        "sso_registration_scopes", settings.DEFAULT_REGISTRATION_SCOPES
                    ),
                )
            )
        return sessions

    def read_sso_session(self, name: str | None = None) -> AWSSession | None:
        """이름으로 SSO 세션 조회 (이름이 없으면 첫 번째 세션)"""
        for session in self.read_all_sso_sessions():
            if name is None or session.name == name:
                return session
        return None

    def resolve_sso_session(
        self,
        session_name: str | None = None,
        start_url: str | None = None,
        region: str | None = None,
    ) -> AuthInstance:
        """사용할 SSO 엔드포인트 결정

        우선순위:
            1. start_url + region 직접 지정 (AWS_SSO_START_URL, AWS_SSO_REGION 환경변수 포함)
            2. session_name으로 config에서 조회
            3. config에 세션이 하나뿐이면 그 세션

        Raises:
            ConfigurationError: 한쪽만 지정, 세션 없음, 세션이 여러 개
        """
        if session_name is None and start_url is None and region is None:
            start_url = get_sso_start_url_from_env()
            region = get_sso_region_from_env()

        if start_url and region:
            return AuthInstance(start_url=start_url, region=region)
        if start_url or region:
            raise ConfigurationError("start_url과 region은 함께 지정해야 합니다")

        sessions = self.read_all_sso_sessions()
        if session_name is not None:
            for session in sessions:
                if session.name == session_name:
                    return session.to_instance()
            raise ConfigurationError(
                f"SSO 세션 '{session_name}'을(를) 찾을 수 없습니다: {self.config_path}",
                config_key=session_name,
                path=self.config_path,
            )

        if not sessions:
            raise ConfigurationError("설정된 SSO 세션이 없습니다. 세션을 추가하거나 start_url과 region을 지정하세요")
        if len(sessions) > 1:
            listing = "\n".join(f"  - {s.name} ({s.start_url})" for s in sessions)
            raise ConfigurationError(f"SSO 세션이 여러 개입니다. session_name을 지정하세요:\n{listing}")
        return sessions[0].to_instance()

    # -------------------------------------------------------------------------
    # [default] / ssocred 기본값
    # -------------------------------------------------------------------------

    def write_default_config(self, config: DefaultConfig) -> None:
        """ssocred 관리 영역의 [default] 갱신 (다른 세션/프로파일은 유지)

        Raises:
            ProfileConflictError: 사용자 관리 영역에 [default]가 있음
        """
        self._refuse_user_section(DEFAULT_SECTION)

        def mutate(region: ManagedRegion) -> None:
            region.default = {**(region.default or {}), "region": config.region, "output": config.output}

        self._update_tool_region(mutate)

    def read_default_config(self) -> DefaultConfig | None:
        """[default]의 region/output (둘 다 없으면 None)"""
        return self._read_region_output(DEFAULT_SECTION)

    def write_tool_defaults(self, config: DefaultConfig) -> None:
        """ssocred 기본값을 [profile ssocred-defaults]에 저장"""
        self._refuse_user_section(TOOL_DEFAULTS_SECTION)

        def mutate(region: ManagedRegion) -> None:
            region.profiles[TOOL_DEFAULTS_SECTION] = {"region": config.region, "output": config.output}

        self._update_tool_region(mutate)

    def read_tool_defaults(self) -> DefaultConfig | None:
        return self._read_region_output(TOOL_DEFAULTS_SECTION)

    def _read_region_output(self, section_name: str) -> DefaultConfig | None:
        for section in parse_sections(self._read_text(self.config_path)):
            if section.name != section_name:
                continue
            region = section.values.get("region")
            output = section.values.get("output")
            if region is None and output is None:
                return None
            return DefaultConfig(
                region=region or settings.DEFAULT_REGION,
                output=output or settings.DEFAULT_OUTPUT,
            )
        return None

    # -------------------------------------------------------------------------
    # 자격증명 쓰기
    # -------------------------------------------------------------------------

    def profile_exists_in_user_section(self, profile_name: str) -> bool:
        """사용자 관리 영역(마커가 없으면 파일 전체)에 프로파일이 있는지 확인"""
        return has_section(self._user_region_text(), config_section_name(profile_name))

    def is_profile_in_managed_section(self, profile_name: str) -> bool:
        return self._tool_region().has_section(config_section_name(profile_name))

    def write_credentials(
        self,
        profile_name: str,
        credentials: RoleCredentials,
        region: str,
        output: str | None = None,
    ) -> None:
        self.write_credentials_with_metadata(profile_name, credentials, region, output)

    def write_credentials_with_metadata(
        self,
        profile_name: str,
        credentials: RoleCredentials,
        region: str,
        output: str | None = None,
        account_role: AccountRole | None = None,
        sso_session: str | None = None,
    ) -> None:
        """credentials 파일과 config 프로파일에 자격증명 저장

        account_role이 있으면 credentials 섹션에 "# Account:", "# Role:", "# Valid:" 주석을,
        config 프로파일에 sso_session/sso_account_id/sso_role_name을 기록합니다.
        sso_session이 없으면 config의 첫 번째 SSO 세션을 사용합니다.

        Raises:
            ProfileConflictError: 사용자 관리 영역에 같은 이름의 프로파일이 있음 (어떤 파일도 수정하지 않음)
            ConfigurationError: 파일 읽기/쓰기 실패
        """
        if self.profile_exists_in_user_section(profile_name):
            logger.warning("사용자 관리 영역의 프로파일과 이름 충돌: %s", profile_name)
            raise ProfileConflictError(profile_name, path=self.config_path)

        self._prepare_write()

        comments = None
        if account_role is not None:
            comments = [
                f"{ACCOUNT_COMMENT} {account_role.account_id}",
                f"{ROLE_COMMENT} {account_role.role_name}",
                f"{VALID_COMMENT} {format_timestamp(credentials.expiration)}",
            ]
        content = update_section(
            self._read_text(self.credentials_path),
            profile_name,
            {
                "aws_access_key_id": credentials.access_key_id,
                "aws_secret_access_key": credentials.secret_access_key,
                "aws_session_token": credentials.session_token,
            },
            comments,
        )
        self._write_text(self.credentials_path, sort_credentials_sections(content))

        entries = {"region": region}
        if output:
            entries["output"] = output
        if account_role is not None:
            if sso_session is None:
                first = self.read_sso_session()
                sso_session = first.name if first else None
            if sso_session:
                entries["sso_session"] = sso_session
                entries["sso_account_id"] = account_role.account_id
                entries["sso_role_name"] = account_role.role_name

        def mutate(region_model: ManagedRegion) -> None:
            if profile_name == DEFAULT_SECTION:
                region_model.default = {**(region_model.default or {}), **entries}
            else:
                section = config_section_name(profile_name)
                region_model.profiles[section] = {**region_model.profiles.get(section, {}), **entries}

        self._update_tool_region(mutate)
        logger.info("자격증명 저장: %s", profile_name)

    # -------------------------------------------------------------------------
    # rename / delete / invalidate
    # -------------------------------------------------------------------------

    def _profile_exists_anywhere(self, profile_name: str) -> bool:
        return has_section(self._read_text(self.credentials_path), profile_name) or has_section(
            self._read_text(self.config_path), config_section_name(profile_name)
        )

    def rename_profile(self, old_name: str, new_name: str) -> bool:
        """두 파일에서 프로파일 섹션 이름 변경 (영역과 관계없이)

        Returns:
            True if 변경함, False if 해당 프로파일이 없음

        Raises:
            ConfigurationError: new_name 프로파일이 이미 있음
        """
        if old_name == new_name or not self._profile_exists_anywhere(old_name):
            return False
        if self._profile_exists_anywhere(new_name):
            raise ConfigurationError(f"프로파일 '{new_name}'이(가) 이미 있습니다", config_key=new_name)

        self._prepare_write()
        credentials = self._read_text(self.credentials_path)
        if has_section(credentials, old_name):
            self._write_text(self.credentials_path, rename_section(credentials, old_name, new_name))

        config = self._read_text(self.config_path)
        old_section = config_section_name(old_name)
        if has_section(config, old_section):
            self._write_text(self.config_path, rename_section(config, old_section, config_section_name(new_name)))

        logger.info("프로파일 이름 변경: %s → %s", old_name, new_name)
        return True

    def delete_profile(self, profile_name: str) -> bool:
        """두 파일에서 프로파일 섹션 삭제

        Returns:
            True if 삭제함, False if 해당 프로파일이 없음 (파일 변경 없음)
        """
        if not self._profile_exists_anywhere(profile_name):
            return False

        self._prepare_write()
        credentials = self._read_text(self.credentials_path)
        if has_section(credentials, profile_name):
            self._write_text(self.credentials_path, delete_section(credentials, profile_name))

        config = self._read_text(self.config_path)
        section = config_section_name(profile_name)
        if has_section(config, section):
            self._write_text(self.config_path, delete_section(config, section))

        logger.info("프로파일 삭제: %s", profile_name)
        return True

    def invalidate_profile(self, profile_name: str) -> bool:
        """자격증명만 무효 값으로 교체 (섹션 이름과 다른 키는 유지)

        "# Account:", "# Role:" 주석은 남겨 두어 같은 역할로 다시 활성화할 때
        기존 프로파일 이름을 찾을 수 있게 합니다.

        Returns:
            True if 변경함, False if 해당 프로파일이 없음
        """
        content = self._read_text(self.credentials_path)
        sections = [s for s in parse_sections(content) if s.name == profile_name]
        if not sections:
            return False

        kept = [c for c in sections[0].comments if c.startswith((ACCOUNT_COMMENT, ROLE_COMMENT))]
        comments = [*kept, f"{VALID_COMMENT} false", f"{INVALIDATED_COMMENT} {format_timestamp(utc_now())}"]

        self._prepare_write()
        self._write_text(
            self.credentials_path,
            update_section(self._read_text(self.credentials_path), profile_name, dict(INVALID_CREDENTIALS), comments),
        )
        logger.info("프로파일 비활성화: %s", profile_name)
        return True

    # -------------------------------------------------------------------------
    # import
    # -------------------------------------------------------------------------

    def import_section(self, name: str, section_type: str = "profile") -> None:
        """사용자 관리 영역의 profile/sso-session 섹션을 ssocred 관리 영역으로 이동

        Raises:
            ConfigurationError: 잘못된 section_type, 섹션을 찾을 수 없음, 필수 키 누락
        """
        section_type = section_type.lower()
        if section_type == "sso-session":
            section_name = f"{SSO_SESSION_PREFIX}{name}"
        elif section_type == "profile":
            section_name = config_section_name(name)
        else:
            raise ConfigurationError("section_type은 'profile' 또는 'sso-session'이어야 합니다")

        content = ensure_markers(self._read_text(self.config_path))
        header, user, _ = split_into_sections(content)
        found = next((s for s in parse_sections(user) if s.name == section_name), None)
        if found is None:
            raise ConfigurationError(
                f"사용자 관리 영역에 [{section_name}] 섹션이 없습니다",
                config_key=section_name,
                path=self.config_path,
            )
        if section_type == "sso-session":
            for key in ("sso_start_url", "sso_region"):
                if not found.values.get(key):
                    raise ConfigurationError(f"SSO 세션 '{name}'에 {key}이 없습니다", config_key=key)

        self._prepare_write()
        content = ensure_markers(self._read_text(self.config_path))
        header, user, tool = split_into_sections(content)
        region = ManagedRegion.parse(tool)
        values = dict(found.values)
        if section_type == "sso-session":
            values.setdefault("sso_registration_scopes", settings.DEFAULT_REGISTRATION_SCOPES)
            region.sessions[name] = {**region.sessions.get(name, {}), **values}
        elif section_name == DEFAULT_SECTION:
            region.default = {**(region.default or {}), **values}
        else:
            region.profiles[section_name] = {**region.profiles.get(section_name, {}), **values}

        result = reconstruct_config(header, delete_section(user, section_name), region.render())
        self._write_text(self.config_path, cleanup_empty_lines(result))
        logger.info("섹션 이전: [%s]", section_name)

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    def get_profile_details(self, profile_name: str) -> ProfileDetails | None:
        section_name = config_section_name(profile_name)
        for section in parse_sections(self._read_text(self.config_path)):
            if section.name == section_name:
                values = section.values
                return ProfileDetails(
                    region=values.get("region"),
                    output=values.get("output"),
                    sso_session=values.get("sso_session"),
                    sso_account_id=values.get("sso_account_id"),
                    sso_role_name=values.get("sso_role_name"),
                )
        return None

    def get_existing_profile_name(self, role: AccountRole) -> str | None:
        """Account/Role 주석으로 역할에 연결된 credentials 프로파일 이름 조회"""
        for section in parse_sections(self._read_text(self.credentials_path)):
            if (
                _comment_value(section.comments, ACCOUNT_COMMENT) == role.account_id
                and _comment_value(section.comments, ROLE_COMMENT) == role.role_name
            ):
                return section.name
        return None

    def get_profile_by_role(self, sso_session: str, account_id: str, role_name: str) -> ProfileInfo | None:
        """config의 sso_session/sso_account_id/sso_role_name 일치 프로파일 조회

        config에 없으면 credentials 주석으로 찾고 region/output은 기본값을 사용합니다.
        """
        for section in parse_sections(self._read_text(self.config_path)):
            if section.name != DEFAULT_SECTION and not section.name.startswith(PROFILE_PREFIX):
                continue
            values = section.values
            if (
                values.get("sso_session") == sso_session
                and values.get("sso_account_id") == account_id
                and values.get("sso_role_name") == role_name
            ):
                return ProfileInfo(
                    name=profile_name_from_section(section.name),
                    region=values.get("region", settings.DEFAULT_REGION),
                    output=values.get("output", settings.DEFAULT_OUTPUT),
                )

        name = self.get_existing_profile_name(AccountRole(account_id, "", role_name))
        if name is not None:
            return ProfileInfo(name=name, region=settings.DEFAULT_REGION, output=settings.DEFAULT_OUTPUT)
        return None

    def get_profile_credentials(self, profile_name: str) -> dict[str, str] | None:
        """credentials 파일의 세 자격증명 키 (하나라도 없으면 None)"""
        for section in parse_sections(self._read_text(self.credentials_path)):
            if section.name == profile_name:
                if all(key in section.values for key in CREDENTIAL_KEYS):
                    return {key: section.values[key] for key in CREDENTIAL_KEYS}
                return None
        return None

    def list_profiles(self) -> list[str]:
        """credentials 파일의 프로파일 이름 (파일 순서)"""
        return [section.name for section in parse_sections(self._read_text(self.credentials_path))]

    def list_profile_statuses(self) -> list[ProfileStatus]:
        """credentials 파일의 모든 프로파일 상태"""
        statuses = []
        for section in parse_sections(self._read_text(self.credentials_path)):
            expiration, invalidated = _parse_expiration(section.comments)
            statuses.append(
                ProfileStatus(
                    profile_name=section.name,
                    account_id=_comment_value(section.comments, ACCOUNT_COMMENT),
                    role_name=_comment_value(section.comments, ROLE_COMMENT),
                    has_credentials=all(key in section.values for key in CREDENTIAL_KEYS),
                    expiration=expiration,
                    invalidated=invalidated,
                )
            )
        return statuses
