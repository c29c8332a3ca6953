import pytest

from core import pagination


class TestParsePageAndLimit:
    """Query-string parsing falls back to page=1, limit=10."""

    @pytest.mark.parametrize("raw, expected", [(None, 1), ("", 1), ("abc", 1), ("0", 1), ("-2", 1), ("3", 3), (4, 4)])
    def test_parse_page(self, raw, expected):
        assert pagination.parse_page(raw) == expected

    @pytest.mark.parametrize("raw, expected", [(None, 10), ("x", 10), ("0", 10), ("-5", 10), ("25", 25)])
    def test_parse_limit(self, raw, expected):
        assert pagination.parse_limit(raw) == expected

    def test_limit_is_capped(self):
        assert pagination.parse_limit("1000") == 100

    def test_limit_cap_from_env(self, monkeypatch):
        monkeypatch.setenv("PAGE_LIMIT_MAX", "50")
        assert pagination.parse_limit("80") == 50


class TestPageMeta:
    def test_total_pages_rounds_up(self):
        assert pagination.page_meta(21, 1, 10) == {
            "total": 21,
            "totalPages": 3,
            "currentPage": 1,
            "limit": 10,
        }

    def test_exact_multiple(self):
        assert pagination.page_meta(20, 2, 10)["totalPages"] == 2

    def test_empty_table(self):
        assert pagination.page_meta(0, 1, 10)["totalPages"] == 0

    def test_offset(self):
        assert pagination.offset_for(1, 10) == 0
        assert pagination.offset_for(3, 10) == 20

    def test_offset_stays_within_bigint(self):
        assert pagination.offset_for(10**20, 100) == 2**63 - 1
