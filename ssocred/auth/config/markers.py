# ssocred/auth/config/markers.py
"""
~/.aws/config 영역 마커 처리

파일은 다음 세 영역으로 나뉩니다 (파일 순서대로):
    header       선두 주석/빈 줄
    user         사용자 관리 영역 (ssocred가 수정하지 않음)
    tool         ssocred 관리 영역 (쓰기 시마다 재생성)

마커가 없는 파일은 전체가 사용자 관리 영역이며, 첫 쓰기 전에 마커를 삽입합니다.
기존 내용이 ssocred 관리 영역으로 자동 편입되는 일은 없습니다.
"""

from __future__ import annotations

from ...config import settings

TOOL_NAME = settings.TOOL_NAME

USER_MANAGED_MARKER = "# ==================== User-managed sections ===================="
USER_MANAGED_COMMENT = f"# (sections below this line are not modified by {TOOL_NAME})"
TOOL_MANAGED_MARKER = f"# ==================== Managed by {TOOL_NAME} ===================="
TOOL_MANAGED_COMMENT = f"# (sections below this line are automatically managed by {TOOL_NAME})"

_MARKER_LINES = frozenset(
    (USER_MANAGED_MARKER, USER_MANAGED_COMMENT, TOOL_MANAGED_MARKER, TOOL_MANAGED_COMMENT)
)
_TOOL_MARKER_LINES = frozenset((TOOL_MANAGED_MARKER, TOOL_MANAGED_COMMENT))


def is_marker_line(line: str) -> bool:
    return line.strip() in _MARKER_LINES


def is_tool_managed_marker(line: str) -> bool:
    return line.strip() in _TOOL_MARKER_LINES


def has_markers(content: str) -> bool:
    return any(is_marker_line(line) for line in content.splitlines())


def _is_header_line(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def _join(lines: list[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


def _user_marker_block() -> str:
    return f"{USER_MANAGED_MARKER}\n{USER_MANAGED_COMMENT}\n"


def _tool_marker_block() -> str:
    return f"{TOOL_MANAGED_MARKER}\n{TOOL_MANAGED_COMMENT}\n"


def ensure_markers(content: str) -> str:
    """마커가 없으면 삽입

    마커 줄이 하나라도 있으면 입력을 그대로 반환합니다 (멱등).
    없으면 header + 사용자 마커 + 기존 내용 + ssocred 마커 순으로 재구성합니다.
    """
    if has_markers(content):
        return content

    header: list[str] = []
    body: list[str] = []
    in_header = True
    for line in content.splitlines():
        if in_header and _is_header_line(line):
            header.append(line)
            continue
        in_header = False
        body.append(line)

    header_text = _join(header)
    body_text = _join(body)

    result = header_text
    if result.strip() and body_text.strip():
        result += "\n"
    result += _user_marker_block()
    if body_text.strip():
        result += "\n" + body_text
    result += "\n"
    result += _tool_marker_block()
    return result


def split_into_sections(content: str) -> tuple[str, str, str]:
    """(header, user, tool) 영역으로 분리

    마커 줄은 결과에서 제외되며 reconstruct_config에서 다시 추가됩니다.
    마커가 없으면 header 이후 전체를 사용자 영역으로 취급합니다.
    """
    header: list[str] = []
    user: list[str] = []
    tool: list[str] = []
    in_header = True
    in_tool = False
    found_marker = False

    for line in content.splitlines():
        if is_marker_line(line):
            if is_tool_managed_marker(line):
                in_tool = True
                found_marker = True
            in_header = False
            continue

        if in_header:
            if _is_header_line(line):
                header.append(line)
                continue
            in_header = False

        (tool if in_tool else user).append(line)

    if not found_marker:
        return _join(header), _join(user), ""
    return _join(header), _join(user), _join(tool)


def split_by_marker(content: str) -> tuple[str, str]:
    """(header + user, tool) 두 영역으로 분리"""
    header, user, tool = split_into_sections(content)
    combined = header
    if combined and user:
        combined += "\n"
    combined += user
    return combined, tool


def reconstruct_config(header: str, user_section: str, tool_section: str) -> str:
    """세 영역과 마커로 파일 내용을 재구성 (cleanup_empty_lines 적용 전)"""
    result = ""
    if header.strip():
        result = header if header.endswith("\n") else header + "\n"
        if not result.endswith("\n\n"):
            result += "\n"

    result += _user_marker_block()
    if user_section.strip():
        result += "\n" + user_section
        if not result.endswith("\n"):
            result += "\n"

    result += "\n" + _tool_marker_block()
    if tool_section.strip():
        result += "\n" + tool_section
    return result


def cleanup_empty_lines(content: str) -> str:
    """빈 줄 정규화

    - 선두 빈 줄 제거
    - 연속된 빈 줄은 하나로
    - 끝의 빈 줄 제거 (마지막 줄바꿈 하나는 유지)
    """
    lines: list[str] = []
    previous_blank = False
    for line in content.splitlines():
        blank = not line.strip()
        if blank and (not lines or previous_blank):
            continue
        lines.append(line)
        previous_blank = blank

    while lines and not lines[-1].strip():
        lines.pop()
    return _join(lines)
