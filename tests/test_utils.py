import pytest

from cipanel.utils import truncate_string


def test_truncate_string_no_truncation():
    assert truncate_string("short", 10) == "short"


def test_truncate_string_with_truncation():
    assert truncate_string("this is a very long string", 10) == "this is..."


def test_truncate_string_edge_cases():
    assert truncate_string("hello", 3) == "..."
    assert truncate_string("", 10) == ""


def test_truncate_string_exact_length_is_unchanged():
    assert truncate_string("hello", 5) == "hello"


@pytest.mark.parametrize("max_len", [0, 1, 2])
def test_truncate_string_tiny_limit_gives_ellipsis(max_len):
    assert truncate_string("hello world", max_len) == "..."


@pytest.mark.parametrize("max_len", [3, 4, 7, 12])
def test_truncated_result_fits_limit(max_len):
    result = truncate_string("a fairly long commit subject line", max_len)
    assert len(result) == max_len
    assert result.endswith("...")