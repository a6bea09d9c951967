from __future__ import annotations

import pytest

from modboard.api.params import page_offset, parse_snowflake
from modboard.core.exceptions import ValidationAppError
from modboard.core.responses import build_pagination
from modboard.repositories.filters import MAX_INT_COLUMN, contains_pattern, non_blank, normalize_text, parse_sequence


def test_pagination_rounds_total_pages_up():
    assert build_pagination(101, 1, 50) == {"total": 101, "page": 1, "limit": 50, "total_pages": 3}
    assert build_pagination(100, 2, 50)["total_pages"] == 2
    assert build_pagination(1, 1, 50)["total_pages"] == 1


def test_pagination_of_empty_result_has_zero_pages():
    assert build_pagination(0, 1, 50)["total_pages"] == 0


def test_page_offset():
    assert page_offset(1, 50) == 0
    assert page_offset(3, 20) == 40


def test_parse_sequence_accepts_plain_integers_only():
    assert parse_sequence("42") == 42
    assert parse_sequence("  7 ") == 7
    assert parse_sequence("42abc") is None
    assert parse_sequence("-3") is None
    assert parse_sequence("carol") is None
    assert parse_sequence("") is None
    assert parse_sequence(None) is None


def test_parse_sequence_ignores_numbers_beyond_the_column_range():
    assert parse_sequence(str(MAX_INT_COLUMN)) == MAX_INT_COLUMN
    assert parse_sequence(str(MAX_INT_COLUMN + 1)) is None
    assert parse_sequence(str(2**70)) is None


def test_normalize_text_treats_blank_as_absent():
    assert normalize_text(None) is None
    assert normalize_text("   ") is None
    assert normalize_text(" Help ") == "Help"


def test_contains_pattern_escapes_like_wildcards():
    assert contains_pattern("Help") == "%help%"
    assert contains_pattern("50%_off") == "%50\\%\\_off%"
    assert contains_pattern("a\\b") == "%a\\\\b%"


def test_parse_snowflake():
    assert parse_snowflake("1234567890123456789", "channel_id") == 1234567890123456789
    assert parse_snowflake(None, "channel_id") is None
    assert parse_snowflake("  ", "channel_id") is None


@pytest.mark.parametrize("value", ["abc", "12a", "-5", "1.5", "99999999999999999999"])
def test_parse_snowflake_rejects_malformed_ids(value):
    with pytest.raises(ValidationAppError) as exc_info:
        parse_snowflake(value, "channel_id")

    assert exc_info.value.details == {"field": "channel_id", "value": value}
    assert exc_info.value.status_code == 422


def test_parse_snowflake_required():
    with pytest.raises(ValidationAppError):
        parse_snowflake("", "user_id", required=True)


def test_non_blank_keeps_surrounding_whitespace():
    assert non_blank(None) is None
    assert non_blank(" \t ") is None
    assert non_blank(" rules") == " rules"
