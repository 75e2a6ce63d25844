"""
Tests for the daily widget calendar and id-list helpers.
"""
import pytest
from datetime import date

from flashlearn.utils import widget_date
from flashlearn.utils.widget_json import decode_string_list


class TestWidgetDate:
    """Tests for day keys"""

    def test_to_key_is_iso(self):
        assert widget_date.to_key(date(2024, 3, 7)) == "2024-03-07"

    def test_parse_key(self):
        assert widget_date.parse_key("2024-03-07") == date(2024, 3, 7)

    @pytest.mark.parametrize("key", [None, "", "yesterday", "2024-13-40"])
    def test_parse_invalid_key_returns_none(self, key):
        assert widget_date.parse_key(key) is None

    def test_yesterday(self):
        assert widget_date.yesterday("2024-05-10") == "2024-05-09"

    def test_yesterday_crosses_month_and_year(self):
        assert widget_date.yesterday("2024-03-01") == "2024-02-29"
        assert widget_date.yesterday("2025-01-01") == "2024-12-31"

    def test_yesterday_invalid_key_raises(self):
        with pytest.raises(ValueError):
            widget_date.yesterday("not-a-date")

    def test_today_with_timezone(self):
        assert isinstance(widget_date.today("UTC"), date)

    def test_today_local(self):
        assert widget_date.today("") == date.today()


class TestWidgetJson:
    """Tests for stored id lists"""

    def test_decode_native_list(self):
        assert decode_string_list(["a", "b"]) == ["a", "b"]

    def test_decode_json_string(self):
        assert decode_string_list('["a", "b"]') == ["a", "b"]

    @pytest.mark.parametrize("value", [None, "", "   ", "not json", '{"a": 1}'])
    def test_decode_degenerate_input(self, value):
        assert decode_string_list(value) == []

    def test_decode_drops_blanks_and_duplicates(self):
        assert decode_string_list(["a", "", " ", None, "a", "b"]) == ["a", "b"]
