"""
Unit tests for raw value coercion.
"""

from datetime import datetime

import pytest

from xer_schedule.utils.coercion import (
    parse_optional_date,
    parse_optional_float,
    parse_optional_int,
    parse_optional_str,
)


class TestParseOptionalStr:
    """Test string passthrough."""

    @pytest.mark.parametrize("value", [None, ''])
    def test_blank_is_none(self, value):
        assert parse_optional_str(value) is None

    def test_value_kept_verbatim(self):
        assert parse_optional_str(' A1000 ') == ' A1000 '


class TestParseOptionalFloat:
    """Test float coercion."""

    @pytest.mark.parametrize("value,expected", [
        ('8', 8.0),
        ('-16.5', -16.5),
        (' 40 ', 40.0),
        ('1e12', 1e12),
        ('0', 0.0),
    ])
    def test_valid(self, value, expected):
        assert parse_optional_float(value) == expected

    @pytest.mark.parametrize("value", [None, '', '   ', 'abc', 'nan', '1,5', 'inf', '-Infinity', '1e400'])
    def test_invalid_is_none(self, value):
        assert parse_optional_float(value) is None


class TestParseOptionalInt:
    """Test integer coercion."""

    @pytest.mark.parametrize("value,expected", [('10', 10), ('10.0', 10), ('-3', -3)])
    def test_valid(self, value, expected):
        assert parse_optional_int(value) == expected

    @pytest.mark.parametrize("value", [None, '', '1.5', 'x', 'inf'])
    def test_invalid_is_none(self, value):
        assert parse_optional_int(value) is None


class TestParseOptionalDate:
    """Test XER date coercion."""

    def test_xer_format(self):
        assert parse_optional_date('2024-01-15 08:00') == datetime(2024, 1, 15, 8, 0)

    def test_date_only(self):
        assert parse_optional_date('2024-01-15') == datetime(2024, 1, 15)

    def test_returns_plain_datetime(self):
        assert type(parse_optional_date('2024-01-15 08:00')) is datetime

    def test_timezone_is_normalized_to_naive_utc(self):
        assert parse_optional_date('2024-01-15T10:00:00+02:00') == datetime(2024, 1, 15, 8, 0)

    @pytest.mark.parametrize("value", [None, '', '  ', 'not a date', '2024-13-45 99:99'])
    def test_invalid_is_none(self, value):
        assert parse_optional_date(value) is None
