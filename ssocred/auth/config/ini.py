# ssocred/auth/config/ini.py
"""
줄 단위 INI 섹션 편집

configparser는 주석과 빈 줄, 섹션 순서를 보존하지 못하므로
사용자가 직접 편집하는 ~/.aws/config, ~/.aws/credentials는 줄 단위로 다룹니다.
대상 섹션 외의 줄은 그대로 유지되고, 모든 편집 결과에는 cleanup_empty_lines가 적용됩니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .markers import cleanup_empty_lines

DEFAULT_SECTION = "default"
PROFILE_PREFIX = "profile "
SSO_SESSION_PREFIX = "sso-session "


# =============================================================================
# 줄 파싱
# =============================================================================


def parse_section_header(line: str) -> str | None:
    """섹션 헤더 줄([name])이면 섹션 이름, 아니면 None"""
    stripped = line.strip()
    if len(stripped) >= 2 and stripped.startswith("[") and stripped.endswith("]"):
        return stripped[1:-1].strip()
    return None


def is_comment(line: str) -> bool:
    return line.strip().startswith(("#", ";"))


def parse_key_value(line: str) -> tuple[str, str] | None:
    """key = value 줄이면 (key, value), 아니면 None"""
    stripped = line.strip()
    if not stripped or is_comment(stripped) or "=" not in stripped:
        return None
    key, _, value = stripped.partition("=")
    key = key.strip()
    if not key:
        return None
    return key, value.strip()


def config_section_name(profile_name: str) -> str:
    """config 파일의 프로파일 섹션 이름 ("default" 또는 "profile <name>")"""
    if profile_name == DEFAULT_SECTION:
        return DEFAULT_SECTION
    return f"{PROFILE_PREFIX}{profile_name}"


def profile_name_from_section(section: str) -> str:
    if section.startswith(PROFILE_PREFIX):
        return section[len(PROFILE_PREFIX) :].strip()
    return section


# =============================================================================
# 블록 단위 분할
# =============================================================================


@dataclass
class _Block:
    name: str | None
    lines: list[str] = field(default_factory=list)

    def trailing_blank_count(self) -> int:
        count = 0
        for line in reversed(self.lines[1:]):
            if line.strip():
                break
            count += 1
        return count


def _split_blocks(content: str) -> list[_Block]:
    """선두 블록(이름 없음) + 섹션별 블록"""
    blocks = [_Block(None)]
    for line in content.splitlines():
        name = parse_section_header(line)
        if name is not None:
            blocks.append(_Block(name, [line]))
        else:
            blocks[-1].lines.append(line)
    return blocks


def _render(blocks: list[_Block]) -> str:
    return "".join(f"{line}\n" for block in blocks for line in block.lines)


@dataclass
class IniSection:
    """읽기 전용 섹션 정보

    Attributes:
        name: 섹션 이름 ("default", "profile dev", "sso-session org" 등)
        values: 키/값
        comments: 섹션 내부 주석 줄
    """

    name: str
    values: dict[str, str] = field(default_factory=dict)
    comments: list[str] = field(default_factory=list)


def parse_sections(content: str) -> list[IniSection]:
    """파일 순서대로 섹션 목록 반환 (같은 이름이 여러 번 나오면 모두 포함)"""
    sections = []
    for block in _split_blocks(content)[1:]:
        section = IniSection(block.name)
        for line in block.lines[1:]:
            if is_comment(line):
                section.comments.append(line.strip())
                continue
            pair = parse_key_value(line)
            if pair is not None:
                section.values[pair[0]] = pair[1]
        sections.append(section)
    return sections


def find_section(content: str, section_name: str) -> IniSection | None:
    for section in parse_sections(content):
        if section.name == section_name:
            return section
    return None


def has_section(content: str, section_name: str) -> bool:
    return any(block.name == section_name for block in _split_blocks(content)[1:])


# =============================================================================
# 편집 연산
# =============================================================================


def update_section(
    content: str,
    section_name: str,
    key_values: dict[str, str],
    comments: list[str] | None = None,
) -> str:
    """섹션의 키를 갱신하거나 섹션을 추가

    - 기존 키는 그 자리에서 값만 교체, 없는 키는 섹션 끝에 추가
    - 그 외 키와 섹션 헤더는 그대로 유지
    - comments가 주어지면 섹션 내 기존 주석을 지우고 헤더 바로 아래에 배치
    - 섹션이 없으면 파일 끝에 새로 추가
    """
    blocks = _split_blocks(content)
    target = next((b for b in blocks[1:] if b.name == section_name), None)

    if target is None:
        lines = [f"[{section_name}]"]
        lines.extend(comments or [])
        lines.extend(f"{key} = {value}" for key, value in key_values.items())
        if any(line.strip() for block in blocks for line in block.lines):
            lines.insert(0, "")
        blocks.append(_Block(section_name, lines))
        return cleanup_empty_lines(_render(blocks))

    header, body = target.lines[0], target.lines[1:]
    trailing = target.trailing_blank_count()
    content_lines = body[: len(body) - trailing]
    tail = body[len(body) - trailing :]

    new_body: list[str] = list(comments) if comments is not None else []
    updated: set[str] = set()
    for line in content_lines:
        if is_comment(line):
            if comments is None:
                new_body.append(line)
            continue
        pair = parse_key_value(line)
        if pair is not None and pair[0] in key_values and pair[0] not in updated:
            key = pair[0]
            new_body.append(f"{key} = {key_values[key]}")
            updated.add(key)
            continue
        new_body.append(line)

    new_body.extend(f"{key} = {value}" for key, value in key_values.items() if key not in updated)
    target.lines = [header, *new_body, *tail]
    return cleanup_empty_lines(_render(blocks))


def rename_section(content: str, old_name: str, new_name: str) -> str:
    """섹션 헤더 이름 변경 (내용과 위치는 그대로)"""
    blocks = _split_blocks(content)
    for block in blocks[1:]:
        if block.name == old_name:
            block.name = new_name
            block.lines[0] = f"[{new_name}]"
    return cleanup_empty_lines(_render(blocks))


def delete_section(content: str, section_name: str) -> str:
    """섹션 삭제 (섹션 뒤의 빈 줄 포함)"""
    blocks = [b for b in _split_blocks(content) if b.name is None or b.name != section_name]
    return cleanup_empty_lines(_render(blocks))


def _credentials_sort_key(block: _Block) -> tuple[int, str]:
    return (0 if block.name == DEFAULT_SECTION else 1, block.name or "")


def sort_credentials_sections(content: str) -> str:
    """credentials 파일 섹션 정렬 ([default] 먼저, 나머지는 이름순)

    첫 섹션 앞의 주석(헤더)은 맨 앞에 유지됩니다.
    """
    blocks = _split_blocks(content)
    preamble, sections = blocks[0], sorted(blocks[1:], key=_credentials_sort_key)
    lines = list(preamble.lines)
    for block in sections:
        if lines and lines[-1].strip():
            lines.append("")
        lines.extend(block.lines)
    return cleanup_empty_lines("".join(f"{line}\n" for line in lines))


# =============================================================================
# ssocred 관리 영역 모델
# =============================================================================


@dataclass
class ManagedRegion:
    """ssocred 관리 영역의 파싱 결과

    쓰기 연산은 항상 parse → 변경 → render 순서로 수행되며,
    render는 [default], sso-session(이름순), 나머지 섹션(이름순) 순서로 출력합니다.

    Attributes:
        default: [default] 키/값 (없으면 None)
        sessions: sso-session 이름 → 키/값
        profiles: 섹션 이름("profile dev" 등) → 키/값
    """

    default: dict[str, str] | None = None
    sessions: dict[str, dict[str, str]] = field(default_factory=dict)
    profiles: dict[str, dict[str, str]] = field(default_factory=dict)

    @classmethod
    def parse(cls, content: str) -> ManagedRegion:
        region = cls()
        for section in parse_sections(content):
            if section.name == DEFAULT_SECTION:
                region.default = {**(region.default or {}), **section.values}
            elif section.name.startswith(SSO_SESSION_PREFIX):
                name = section.name[len(SSO_SESSION_PREFIX) :].strip()
                region.sessions.setdefault(name, {}).update(section.values)
            else:
                region.profiles.setdefault(section.name, {}).update(section.values)
        return region

    def has_section(self, section_name: str) -> bool:
        if section_name == DEFAULT_SECTION:
            return self.default is not None
        if section_name.startswith(SSO_SESSION_PREFIX):
            return section_name[len(SSO_SESSION_PREFIX) :].strip() in self.sessions
        return section_name in self.profiles

    def render(self) -> str:
        lines: list[str] = []

        def emit(header: str, values: dict[str, str]) -> None:
            lines.append(f"[{header}]")
            lines.extend(f"{key} = {value}" for key, value in values.items())
            lines.append("")

        if self.default is not None:
            emit(DEFAULT_SECTION, self.default)
        for name in sorted(self.sessions):
            emit(f"{SSO_SESSION_PREFIX}{name}", self.sessions[name])
        for name in sorted(self.profiles):
            emit(name, self.profiles[name])
        return "".join(f"{line}\n" for line in lines)
