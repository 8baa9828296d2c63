# tests/auth/test_auth_ini.py
"""
ssocred/auth/config/ini.py 단위 테스트

테스트 대상:
- 줄 파싱 헬퍼
- update_section / rename_section / delete_section: 대상 외 줄 보존
- sort_credentials_sections: [default] 우선 정렬
- ManagedRegion: ssocred 관리 영역 parse/render
"""

from ssocred.auth.config.ini import (
    ManagedRegion,
    config_section_name,
    delete_section,
    find_section,
    has_section,
    parse_key_value,
    parse_section_header,
    parse_sections,
    profile_name_from_section,
    rename_section,
    sort_credentials_sections,
    update_section,
)

CREDENTIALS = """# shared credentials
[work]
# Account: 111111111111
aws_access_key_id = AKIAOLD
aws_secret_access_key = old-secret
custom_key = keep-me

[personal]
aws_access_key_id = AKIAPERSONAL
aws_secret_access_key = personal-secret
"""


class TestLineParsing:
    """줄 파싱 테스트"""

    def test_parse_section_header(self):
        """섹션 헤더"""
        assert parse_section_header("[profile dev]") == "profile dev"
        assert parse_section_header("  [ default ]  ") == "default"
        assert parse_section_header("region = x") is None

    def test_parse_key_value(self):
        """key = value"""
        assert parse_key_value("region = us-east-1") == ("region", "us-east-1")
        assert parse_key_value("sso_start_url=https://x/start?a=b") == ("sso_start_url", "https://x/start?a=b")
        assert parse_key_value("# comment = no") is None
        assert parse_key_value("; comment") is None
        assert parse_key_value("") is None

    def test_config_section_name(self):
        """config 파일 섹션 이름"""
        assert config_section_name("default") == "default"
        assert config_section_name("dev") == "profile dev"
        assert profile_name_from_section("profile dev") == "dev"
        assert profile_name_from_section("default") == "default"

    def test_parse_sections(self):
        """섹션 값과 주석"""
        sections = parse_sections(CREDENTIALS)
        assert [s.name for s in sections] == ["work", "personal"]
        assert sections[0].comments == ["# Account: 111111111111"]
        assert sections[0].values["custom_key"] == "keep-me"
        assert find_section(CREDENTIALS, "personal").values["aws_access_key_id"] == "AKIAPERSONAL"
        assert find_section(CREDENTIALS, "missing") is None


class TestUpdateSection:
    """update_section 테스트"""

    def test_replace_existing_keys_in_place(self):
        """기존 키는 그 자리에서 교체, 다른 키는 유지"""
        result = update_section(CREDENTIALS, "work", {"aws_access_key_id": "AKIANEW"})
        work = find_section(result, "work")
        assert work.values["aws_access_key_id"] == "AKIANEW"
        assert work.values["custom_key"] == "keep-me"
        assert result.startswith("# shared credentials\n[work]\n")
        assert "AKIAPERSONAL" in result

    def test_append_missing_keys(self):
        """없는 키는 섹션 끝에 추가 (다음 섹션 앞)"""
        result = update_section(CREDENTIALS, "work", {"aws_session_token": "tok"})
        assert result.index("aws_session_token = tok") < result.index("[personal]")

    def test_comments_replaced_when_given(self):
        """comments가 주어지면 기존 주석 교체"""
        result = update_section(CREDENTIALS, "work", {}, ["# Role: Admin"])
        assert find_section(result, "work").comments == ["# Role: Admin"]
        assert "[work]\n# Role: Admin\n" in result

    def test_comments_kept_when_none(self):
        """comments가 None이면 기존 주석 유지"""
        result = update_section(CREDENTIALS, "work", {"aws_access_key_id": "AKIANEW"})
        assert find_section(result, "work").comments == ["# Account: 111111111111"]

    def test_new_section_appended(self):
        """새 섹션은 파일 끝에 빈 줄과 함께 추가"""
        result = update_section(CREDENTIALS, "new", {"aws_access_key_id": "AKIA"})
        assert result.endswith("\n\n[new]\naws_access_key_id = AKIA\n")

    def test_new_section_in_empty_file(self):
        """빈 파일"""
        assert update_section("", "default", {"region": "us-east-1"}) == "[default]\nregion = us-east-1\n"


class TestRenameDelete:
    """rename_section / delete_section 테스트"""

    def test_rename_keeps_contents_and_position(self):
        """헤더만 변경"""
        result = rename_section(CREDENTIALS, "work", "office")
        assert not has_section(result, "work")
        assert [s.name for s in parse_sections(result)] == ["office", "personal"]
        assert find_section(result, "office").values["custom_key"] == "keep-me"

    def test_delete_section(self):
        """섹션과 뒤의 빈 줄 삭제"""
        result = delete_section(CREDENTIALS, "work")
        assert result == (
            "# shared credentials\n"
            "[personal]\n"
            "aws_access_key_id = AKIAPERSONAL\n"
            "aws_secret_access_key = personal-secret\n"
        )

    def test_delete_missing_section(self):
        """없는 섹션 삭제는 정규화만"""
        assert delete_section(CREDENTIALS, "missing") == CREDENTIALS


class TestSortCredentials:
    """sort_credentials_sections 테스트"""

    def test_default_first_then_alphabetical(self):
        """[default] 먼저, 나머지 이름순"""
        content = "[zeta]\na = 1\n[default]\na = 2\n[alpha]\na = 3\n"
        result = sort_credentials_sections(content)
        assert [s.name for s in parse_sections(result)] == ["default", "alpha", "zeta"]
        assert result == "[default]\na = 2\n\n[alpha]\na = 3\n\n[zeta]\na = 1\n"

    def test_preamble_kept_on_top(self):
        """첫 섹션 앞 주석 유지"""
        result = sort_credentials_sections(CREDENTIALS)
        assert result.startswith("# shared credentials\n")
        assert [s.name for s in parse_sections(result)] == ["personal", "work"]


class TestManagedRegion:
    """ManagedRegion 테스트"""

    def test_parse_and_render_order(self):
        """[default], sso-session, 프로파일 순 (이름순)"""
        content = (
            "[profile zeta]\nregion = eu-west-1\n"
            "[sso-session org]\nsso_start_url = https://x/start\nsso_region = us-east-1\n"
            "[default]\nregion = us-east-1\n"
            "[profile alpha]\nregion = us-west-2\n"
        )
        region = ManagedRegion.parse(content)
        assert region.default == {"region": "us-east-1"}
        assert region.sessions["org"]["sso_region"] == "us-east-1"
        rendered = region.render()
        order = [s.name for s in parse_sections(rendered)]
        assert order == ["default", "sso-session org", "profile alpha", "profile zeta"]

    def test_duplicate_sections_merged(self):
        """같은 섹션이 여러 번 나오면 병합"""
        region = ManagedRegion.parse("[profile a]\nx = 1\n[profile a]\ny = 2\n")
        assert region.profiles == {"profile a": {"x": "1", "y": "2"}}

    def test_has_section(self):
        """섹션 존재 여부"""
        region = ManagedRegion.parse("[sso-session org]\nsso_region = us-east-1\n[profile a]\nx = 1\n")
        assert region.has_section("sso-session org")
        assert region.has_section("profile a")
        assert not region.has_section("default")

    def test_render_empty(self):
        """빈 영역"""
        assert ManagedRegion().render() == ""
