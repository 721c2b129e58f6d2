# json_writer.py
# Compact JSON serializer for json_value trees
#
# =============================================================================
#  OUTPUT FORM
# =============================================================================
#
# Output is compact UTF-8: no whitespace between tokens, object members in
# iteration order, non-ASCII text passed through unescaped. Inside strings only
# the quote, the backslash and C0 control characters are escaped (RFC 8259),
# using the short forms where JSON defines one.
#
# Numbers are doubles. Integral values below 2**53 are written without a
# fraction; everything else uses repr(), which is the shortest text that reads
# back as the same double. Infinity has no JSON spelling, so it is written as
# an exponent that overflows back to infinity on the way in.
# =============================================================================

import math

from json_value import Array, Boolean, Null, Number, Object, String, Value
from unicode_codec import encode_one

# ---------------------------------------------------------------------------
# CONSTANTS
# ---------------------------------------------------------------------------
_EXACT_INT_LIMIT = 2.0 ** 53

_SHORT_ESCAPES = {
    ord('"'):  b'\\"',
    ord("\\"): b"\\\\",
    ord("\b"): b"\\b",
    ord("\t"): b"\\t",
    ord("\n"): b"\\n",
    ord("\f"): b"\\f",
    ord("\r"): b"\\r",
}

# ---------------------------------------------------------------------------
# SCALARS
# ---------------------------------------------------------------------------
def _write_number(out: bytearray, number: float) -> None:
    if math.isnan(number):
        raise ValueError("NaN cannot be written as JSON")
    if math.isinf(number):
        out += b"1e999" if number > 0 else b"-1e999"
    elif number.is_integer() and abs(number) < _EXACT_INT_LIMIT:
        if number == 0 and math.copysign(1.0, number) < 0:
            out += b"-0"
        else:
            out += b"%d" % int(number)
    else:
        out += repr(number).encode("ascii")


def _write_string(out: bytearray, text: str) -> None:
    out += b"\""
    for ch in text:
        code_point = ord(ch)
        escaped = _SHORT_ESCAPES.get(code_point)
        if escaped is not None:
            out += escaped
        elif code_point < 0x20:
            out += b"\\u%04x" % code_point
        elif code_point < 0x80:
            out.append(code_point)
        else:
            out += encode_one(code_point)
    out += b"\""

# ---------------------------------------------------------------------------
# TREE WALK
# ---------------------------------------------------------------------------
def _write_value(out: bytearray, value: Value) -> None:
    if isinstance(value, Object):
        out += b"{"
        first = True
        for key, member in value.members.items():
            if not first:
                out += b","
            first = False
            _write_string(out, key)
            out += b":"
            _write_value(out, member)
        out += b"}"
    elif isinstance(value, Array):
        out += b"["
        first = True
        for item in value.items:
            if not first:
                out += b","
            first = False
            _write_value(out, item)
        out += b"]"
    elif isinstance(value, String):
        _write_string(out, value.value)
    elif isinstance(value, Number):
        _write_number(out, value.value)
    elif isinstance(value, Boolean):
        out += b"true" if value.value else b"false"
    elif isinstance(value, Null):
        out += b"null"
    else:
        raise TypeError(f"not a JSON value: {type(value).__name__}")

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def serialize(value: Value) -> bytes:
    """
    Render a value tree as compact UTF-8 JSON.

    The walk recurses once per nesting level, with the same bound as clone():
    anything parse() accepts under its default depth limit serializes.
    """
    out = bytearray()
    _write_value(out, value)
    return bytes(out)


def dumps(value: Value) -> str:
    """serialize(), decoded to str."""
    return serialize(value).decode("utf-8")
