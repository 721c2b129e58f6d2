import math

import pytest

import json_parser as jp
from json_value import Number

@pytest.mark.parametrize("text, expected", [
    ("0", 0.0),
    ("7", 7.0),
    ("-12", -12.0),
    ("3.25", 3.25),
    ("1.5e10", 1.5e10),
    ("1E2", 100.0),
    ("2e+3", 2000.0),
    ("25e-1", 2.5),
    ("-0.5E-2", -0.005),
    ("123456789012345678901234567890", 1.2345678901234568e29),
])
def test_number_values(text, expected):
    assert jp.parse(text) == Number(expected)

def test_negative_zero_keeps_sign():
    value = jp.parse("-0")
    assert value.value == 0.0
    assert math.copysign(1.0, value.value) == -1.0

def test_overflow_becomes_infinity():
    assert jp.parse("1e400") == Number(math.inf)
    assert jp.parse("-1e400") == Number(-math.inf)

def test_fraction_needs_a_digit():
    # "1." is not a number with a fraction; the dot is left behind
    assert jp.parse_number(b"1.", 0) == (1.0, 1)
    assert jp.parse_number(b"1.x", 0) == (1.0, 1)

def test_exponent_needs_a_digit():
    assert jp.parse_number(b"1e", 0) == (1.0, 1)
    assert jp.parse_number(b"1e+", 0) == (1.0, 1)
    assert jp.parse_number(b"1.5E-x", 0) == (1.5, 3)

def test_leading_zero_stops_integer_part():
    assert jp.parse_number(b"012", 0) == (0.0, 1)

def test_number_needs_integer_part():
    assert jp.parse_number(b"-", 0) is None
    assert jp.parse_number(b"-.5", 0) is None
    assert jp.parse_number(b".5", 0) is None
    assert jp.parse_number(b"", 0) is None

def test_number_stops_at_delimiter():
    assert jp.parse_number(b"[-3.5e2,", 1) == (-350.0, 7)
