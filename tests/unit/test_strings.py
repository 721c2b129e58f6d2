import pytest

import json_parser as jp
from json_value import String

def test_invalid_hex_escape_fails():
    assert jp.parse('["\\u123g"]') is None

def test_short_unicode_escape_fails():
    assert jp.parse('["\\u12"]') is None

def test_invalid_single_escape_fails():
    assert jp.parse('["\\q"]') is None

def test_trailing_backslash_direct_call():
    # Backslash is the last byte of the buffer
    assert jp.parse_string(b'"\\', 0) is None

def test_unterminated_string_fails():
    assert jp.parse('"ab') is None

def test_raw_control_character_rejected():
    assert jp.parse('"a\tb"') is None
    assert jp.parse(b'"\x00"') is None

def test_simple_escapes_decoded():
    assert jp.parse('"\\"\\\\\\/\\b\\f\\n\\r\\t"') == String('"\\/\b\f\n\r\t')

def test_unicode_escape_any_case():
    assert jp.parse('"\\u00e9\\u00C9"') == String("\u00e9\u00c9")

def test_surrogate_pair_composed():
    assert jp.parse('"a\\uD83D\\uDE00b"') == String("a\U0001F600b")

def test_unpaired_lead_before_text():
    assert jp.parse('"\\uD83Dx"') == String("\ufffdx")

def test_unpaired_lead_at_end_of_string():
    assert jp.parse('"\\uD83D"') == String("\ufffd")

def test_lone_trailing_surrogate():
    assert jp.parse('"\\uDE00a"') == String("\ufffda")

def test_lead_followed_by_lead_then_trail():
    # First lead is dropped, second one pairs
    assert jp.parse('"\\uD83D\\uD83D\\uDE00"') == String("\ufffd\U0001F600")

def test_lead_followed_by_simple_escape():
    assert jp.parse('"\\uD83D\\n"') == String("\ufffd\n")

def test_lead_followed_by_bmp_escape():
    assert jp.parse('"\\uD83D\\u0041"') == String("\ufffdA")

def test_lead_followed_by_raw_multibyte():
    assert jp.parse('"\\uD83D\u00e9"') == String("\ufffd\u00e9")

def test_raw_utf8_passes_through():
    assert jp.parse('"h\u00e9llo \u4e16\u754c \U0001F600"') == String("h\u00e9llo \u4e16\u754c \U0001F600")

@pytest.mark.parametrize("raw, expected", [
    (b'"\xff"', "\ufffd"),                  # never a lead byte
    (b'"\xc3"', "\ufffd"),                  # truncated two-byte sequence
    (b'"\xe2\x82x"', "\ufffdx"),            # truncated three-byte sequence
    (b'"\xc0\xaf"', "\ufffd\ufffd"),        # overlong slash
    (b'"\xed\xa0\x80"', "\ufffd\ufffd\ufffd"),  # encoded surrogate
])
def test_malformed_utf8_replaced(raw, expected):
    assert jp.parse(raw) == String(expected)

def test_str_input_with_lone_surrogate_is_normalised():
    assert jp.parse('"a\ud800b"') == String("a\ufffd\ufffd\ufffdb")
