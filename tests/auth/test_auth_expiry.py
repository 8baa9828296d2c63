# tests/auth/test_auth_expiry.py
"""
ssocred/auth/expiry.py 테스트

테스트 대상:
- format_time_remaining: 남은 시간 문자열
- is_expiring_soon: 만료 임박 판정
"""

from datetime import datetime, timedelta, timezone

import pytest

from ssocred.auth.expiry import format_time_remaining, is_expiring_soon

NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestFormatTimeRemaining:
    """format_time_remaining 테스트"""

    @pytest.mark.parametrize(
        "delta,expected",
        [
            (timedelta(hours=2, minutes=15, seconds=30), "2h 15m"),
            (timedelta(hours=1), "1h 0m"),
            (timedelta(minutes=14, seconds=3), "14m 3s"),
            (timedelta(seconds=42), "42s"),
            (timedelta(0), "EXPIRED"),
            (timedelta(minutes=-5), "EXPIRED"),
        ],
    )
    def test_format(self, delta, expected):
        """시간/분/초 단위"""
        assert format_time_remaining(NOW + delta, now=NOW) == expected

    def test_string_input(self):
        """RFC3339 문자열도 허용"""
        assert format_time_remaining("2024-01-01T13:30:00Z", now=NOW) == "1h 30m"

    def test_offset_string(self):
        """오프셋이 있는 시간은 UTC로 변환"""
        assert format_time_remaining("2024-01-01T21:10:00+09:00", now=NOW) == "10m 0s"


class TestIsExpiringSoon:
    """is_expiring_soon 테스트"""

    def test_default_threshold(self):
        """기본 임계값 5분"""
        assert is_expiring_soon(NOW + timedelta(minutes=4), now=NOW)
        assert not is_expiring_soon(NOW + timedelta(minutes=6), now=NOW)

    def test_custom_threshold(self):
        """임계값 지정"""
        assert is_expiring_soon(NOW + timedelta(minutes=20), threshold_minutes=30, now=NOW)

    def test_expired_is_not_expiring(self):
        """이미 만료된 경우는 False"""
        assert not is_expiring_soon(NOW - timedelta(minutes=1), now=NOW)
        assert not is_expiring_soon(NOW, now=NOW)
