import pytest

from cipanel.line_range import (
    LineRangeError,
    extract_line_range,
    format_copy_message,
    parse_line_range,
)


def make_logs(count):
    return [f"line {n}" for n in range(1, count + 1)]


@pytest.mark.parametrize("text", ["1,1000", "1:1000"])
def test_both_separators_parse_the_same(text):
    assert parse_line_range(text, 5000) == (1, 1000)


def test_percent_means_everything():
    assert parse_line_range("%", 42) == (1, 42)


def test_dollar_means_last_line():
    assert parse_line_range("100,$", 500) == (100, 500)


def test_single_number_is_from_first_line():
    assert parse_line_range("1000", 5000) == (1, 1000)


def test_end_is_clamped_to_total():
    assert parse_line_range("2,1000", 50) == (2, 50)
    assert parse_line_range("1000", 50) == (1, 50)


def test_whitespace_is_ignored():
    assert parse_line_range("  3 , 7  ", 10) == (3, 7)


def test_empty_input_is_rejected():
    with pytest.raises(LineRangeError, match="Empty input"):
        parse_line_range("   ", 10)


@pytest.mark.parametrize("text", ["abc", "1,x", "-3", "1.5", "+"])
def test_invalid_numbers_are_rejected(text):
    with pytest.raises(LineRangeError, match="Invalid line number"):
        parse_line_range(text, 10)


def test_zero_start_is_rejected():
    with pytest.raises(LineRangeError, match="Start line must be >= 1"):
        parse_line_range("0,5", 10)


def test_inverted_range_is_rejected():
    with pytest.raises(LineRangeError, match="End line must be >= start line"):
        parse_line_range("8,3", 10)


def test_start_beyond_total_is_rejected():
    with pytest.raises(LineRangeError, match="Start line 20 exceeds total lines 10"):
        parse_line_range("20,30", 10)


def test_single_zero_is_rejected():
    with pytest.raises(LineRangeError, match="Line number must be >= 1"):
        parse_line_range("0", 10)


def test_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_line_range("", 10)


def test_extract_inclusive_range():
    logs = make_logs(10)
    assert extract_line_range(logs, 2, 4) == ["line 2", "line 3", "line 4"]


def test_extract_clamps_to_log_length():
    logs = make_logs(3)
    assert extract_line_range(logs, 2, 100) == logs[1:]


@pytest.mark.parametrize(
    "logs,start,end",
    [([], 1, 5), (make_logs(3), 0, 2), (make_logs(3), 3, 2), (make_logs(3), 4, 9)],
)
def test_extract_out_of_range_is_empty(logs, start, end):
    assert extract_line_range(logs, start, end) == []


def test_parse_then_extract_all_lines():
    logs = make_logs(7)
    start, end = parse_line_range("%", len(logs))
    assert extract_line_range(logs, start, end) == logs


def test_parse_then_extract_count_matches_range():
    logs = make_logs(30)
    start, end = parse_line_range("5:$", len(logs))
    lines = extract_line_range(logs, start, end)
    assert len(lines) == end - start + 1
    assert lines[0] == logs[start - 1]
    assert lines[-1] == logs[-1]


def test_copy_message_has_fixed_width():
    short = format_copy_message(1, 2, 2)
    long = format_copy_message(12345, 23456, 1000)
    assert len(short) == len(long)
    assert short.startswith("Copied lines ")
    assert short.endswith(" lines)")


def test_copy_message_contains_numbers():
    message = format_copy_message(10, 20, 11)
    assert "10-20" in message
    assert "(  11 lines)" in message