from linkedin_feed.src.application.extraction.text_parsing import (
    parse_count,
    sanitize_text,
)


def test_sanitize_text_collapses_whitespace():
    assert sanitize_text('  Hello \n\n  world\t ') == 'Hello world'


def test_sanitize_text_empty_values():
    assert sanitize_text(None) == ''
    assert sanitize_text('') == ''
    assert sanitize_text(' \n ') == ''


def test_parse_count_with_comma_separator():
    assert parse_count('1,234 likes') == 1234


def test_parse_count_takes_first_number_only():
    assert parse_count('Comments: 7, reposts: 3') == 7


def test_parse_count_with_dotted_thousands():
    assert parse_count('1.234 reactions') == 1234
    assert parse_count('12.345.678') == 12345678


def test_parse_count_truncates_decimals():
    # Abbreviations like 1.5K are not expanded
    assert parse_count('1.5K') == 1


def test_parse_count_without_digits():
    assert parse_count('no reactions yet') == 0
    assert parse_count('...') == 0
    assert parse_count('') == 0
    assert parse_count(None) == 0


def test_parse_count_keeps_large_integers_exact():
    assert parse_count('12345678901234567890 likes') == 12345678901234567890
    assert parse_count('9,007,199,254,740,993 views') == 9007199254740993
