import json
import math

import pytest

import json_parser as jp
from json_value import Array, Boolean, Null, Number, Object, String
from json_writer import dumps, serialize

ROUND_TRIP_DOCS = [
    "null",
    "true",
    "[false]",
    '"plain"',
    "-0",
    "[0.1,1e-7,1.5e300,-2.5,123456789]",
    '{"nested":{"list":[1,[2,[3,{}]]]},"empty":[]}',
    '"\\u00e9\\u4e16\\uD83D\\uDE00"',
    '"quote \\" backslash \\\\ slash \\/"',
    '{"k\\n":"v\\t","":""}',
    " [ 1 , 2 , 3 ] ",
]

@pytest.mark.parametrize("text", ROUND_TRIP_DOCS)
def test_serialize_then_parse_is_lossless(text):
    value = jp.parse(text)
    assert value is not None
    assert jp.parse(serialize(value)) == value

@pytest.mark.parametrize("text", ROUND_TRIP_DOCS)
def test_output_is_valid_json(text):
    value = jp.parse(text)
    assert json.loads(dumps(value)) == value.to_python()

def test_compact_layout():
    value = jp.parse(' { "a" : [ 1 , true , null ] , "b" : { } , "c" : [ ] } ')
    assert serialize(value) == b'{"a":[1,true,null],"b":{},"c":[]}'

def test_member_order_follows_insertion():
    assert dumps(jp.parse('{"b":1,"a":2,"b":3}')) == '{"b":3,"a":2}'

@pytest.mark.parametrize("code_point", range(0x20))
def test_every_control_character_is_escaped(code_point):
    value = String("a" + chr(code_point) + "b")
    out = serialize(value)
    assert all(byte >= 0x20 for byte in out)
    assert jp.parse(out) == value

def test_short_escapes_used():
    value = String('"\\\b\t\n\f\r')
    assert serialize(value) == b'"\\"\\\\\\b\\t\\n\\f\\r"'

def test_other_controls_use_lowercase_hex():
    assert serialize(String("\x00\x1f\x0b")) == b'"\\u0000\\u001f\\u000b"'

def test_non_ascii_passes_through_raw():
    value = String("café \U0001F600 /")
    assert serialize(value) == "\"café \U0001F600 /\"".encode("utf-8")

def test_lone_surrogate_in_constructed_string_is_replaced():
    assert serialize(String("\ud800")) == b'"\xef\xbf\xbd"'

@pytest.mark.parametrize("number, text", [
    (0.0, b"0"),
    (-0.0, b"-0"),
    (42.0, b"42"),
    (-7.0, b"-7"),
    (1.5e10, b"15000000000"),
    (0.1, b"0.1"),
    (1e22, b"1e+22"),
    (2.0 ** 53, b"9007199254740992.0"),
    (math.inf, b"1e999"),
    (-math.inf, b"-1e999"),
])
def test_number_rendering(number, text):
    out = serialize(Number(number))
    assert out == text
    assert jp.parse(out) == Number(number)

def test_negative_zero_survives_round_trip():
    value = jp.parse(serialize(Number(-0.0)))
    assert math.copysign(1.0, value.value) == -1.0

def test_nan_is_rejected():
    with pytest.raises(ValueError):
        serialize(Number(math.nan))

def test_literals_and_empty_containers():
    assert serialize(Null()) == b"null"
    assert serialize(Boolean(True)) == b"true"
    assert serialize(Boolean(False)) == b"false"
    assert serialize(Object()) == b"{}"
    assert serialize(Array()) == b"[]"

def test_non_value_rejected():
    with pytest.raises(TypeError):
        serialize([1, 2])
