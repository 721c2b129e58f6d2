# json_parser.py
# Scannerless recursive-descent JSON parser producing json_value trees
#
# =============================================================================
#  PARSER IMPLEMENTATION: RECURSIVE DESCENT OVER A BYTE CURSOR
# =============================================================================
#
# One function per JSON production (value, object, array, string, number,
# literal). Each takes the input buffer and a cursor offset and returns either
# (result, new_offset) or None. There is no token stream: JSON is LL(1) on
# raw bytes, so the first byte at the cursor is enough to pick a production
# [RFC 8259; cs.rochester.edu, Recursive-Descent Parsing].
#
# Design Rationale:
# 1. Failure is a value (None), not an exception. Malformed input is an
#    expected outcome, so the productions return "no parse" and the caller
#    decides whether that is worth raising (see loads()).
# 2. The cursor is an int threaded through every call and return. There is
#    no parser object and no global state, so every parse is re-entrant.
# 3. The only lookahead is in numbers: the fraction and exponent suffixes are
#    probed on a copy of the cursor and committed only once their mandatory
#    digit is seen, so "1." leaves ".", not a failure, to the caller.
# 4. Strings are assembled as UTF-8 bytes through unicode_codec, so raw
#    multi-byte text and \u escapes meet the same validation. Malformed UTF-8
#    and unpaired surrogates become U+FFFD rather than a parse error.
#
# Depth guard defaults to 256 nested containers. Python recursion, not the
# grammar, is what limits nesting; the guard turns a would-be RecursionError
# into an ordinary parse failure.
#
# =============================================================================
#  REFERENCES
# =============================================================================
# [1] RFC 8259 - The JavaScript Object Notation (JSON) Data Interchange Format
# [2] cs.rochester.edu - Recursive-Descent Parsing
# [3] RFC 2781 - UTF-16, an encoding of ISO 10646
# =============================================================================

import argparse
import logging
import sys
from typing import Optional, Tuple, Union

from json_value import Array, Boolean, Null, Number, Object, String, Value, clone
from json_writer import serialize
from unicode_codec import (
    REPLACEMENT_BYTES,
    compose_surrogate_pair,
    decode_one,
    encode_one,
    is_lead_surrogate,
    is_trailing_surrogate,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
DEPTH_LIMIT_DEFAULT = 256   # Nested containers; stays clear of the interpreter recursion limit

_WHITESPACE = b" \t\n\r"
_DIGITS     = b"0123456789"
_HEX_DIGITS = b"0123456789abcdefABCDEF"

_QUOTE      = ord('"')
_BACKSLASH  = ord("\\")
_MINUS      = ord("-")
_PLUS       = ord("+")
_DOT        = ord(".")
_COLON      = ord(":")
_COMMA      = ord(",")
_LBRACE     = ord("{")
_RBRACE     = ord("}")
_LBRACKET   = ord("[")
_RBRACKET   = ord("]")
_ZERO       = ord("0")

# Single-character escapes and the byte each one stands for
_SIMPLE_ESCAPES = {
    ord('"'):  b'"',
    ord("\\"): b"\\",
    ord("/"):  b"/",
    ord("b"):  b"\b",
    ord("f"):  b"\f",
    ord("n"):  b"\n",
    ord("r"):  b"\r",
    ord("t"):  b"\t",
}
_UNICODE_ESCAPE = ord("u")

_LITERALS = (
    (b"true",  lambda: Boolean(True)),
    (b"false", lambda: Boolean(False)),
    (b"null",  Null),
)

Text = Union[str, bytes, bytearray, memoryview]

# ---------------------------------------------------------------------------
# ERRORS
# ---------------------------------------------------------------------------
class ParseError(SyntaxError):
    """
    Raised by loads() when the input is not a single well-formed JSON value.

    parse() never raises it; it returns None instead.
    """

    def __init__(self, msg: str = "failed to parse JSON"):
        super().__init__(msg)

# ---------------------------------------------------------------------------
# WHITESPACE
# ---------------------------------------------------------------------------
def skip_whitespace(data: bytes, pos: int) -> int:
    """Advance past space, tab, newline and carriage return."""
    end = len(data)
    while pos < end and data[pos] in _WHITESPACE:
        pos += 1
    return pos

# ---------------------------------------------------------------------------
# STRING PRODUCTION
# ---------------------------------------------------------------------------
def _parse_hex4(data: bytes, pos: int) -> Optional[int]:
    """Read exactly four hex digits at pos as one UTF-16 code unit."""
    quad = data[pos:pos + 4]
    if len(quad) < 4 or not all(c in _HEX_DIGITS for c in quad):
        return None
    return int(quad, 16)


def parse_string(data: bytes, pos: int) -> Optional[Tuple[str, int]]:
    """
    Parse a quoted string starting at the opening quote.

    Handles three kinds of content:
    1) Plain ASCII - copied through; raw control bytes below 0x20 fail.
    2) Escapes - the eight single-character escapes and \\uXXXX.
    3) Raw multi-byte UTF-8 - decoded and re-encoded, so ill-formed
       sequences come out as U+FFFD.

    A \\u lead surrogate is held pending until the next construct. Only an
    immediately following \\u trailing surrogate completes it; anything else
    flushes the pending lead as U+FFFD first.
    """
    end = len(data)
    if pos >= end or data[pos] != _QUOTE:
        return None
    pos += 1

    out = bytearray()
    pending: Optional[int] = None

    while pos < end:
        byte = data[pos]

        if byte == _QUOTE:
            if pending is not None:
                out += REPLACEMENT_BYTES
            return out.decode("utf-8"), pos + 1

        if byte == _BACKSLASH:
            pos += 1
            if pos >= end:
                return None
            esc = data[pos]

            if esc == _UNICODE_ESCAPE:
                unit = _parse_hex4(data, pos + 1)
                if unit is None:
                    return None
                pos += 5
                if is_lead_surrogate(unit):
                    if pending is not None:
                        out += REPLACEMENT_BYTES
                    pending = unit
                elif is_trailing_surrogate(unit):
                    if pending is None:
                        out += REPLACEMENT_BYTES
                    else:
                        out += encode_one(compose_surrogate_pair(pending, unit))
                        pending = None
                else:
                    if pending is not None:
                        out += REPLACEMENT_BYTES
                        pending = None
                    out += encode_one(unit)
                continue

            converted = _SIMPLE_ESCAPES.get(esc)
            if converted is None:
                return None
            if pending is not None:
                out += REPLACEMENT_BYTES
                pending = None
            out += converted
            pos += 1
            continue

        if byte < 0x20:
            return None

        # Surrogates have no UTF-8 form, so raw text can never complete a pair
        if pending is not None:
            out += REPLACEMENT_BYTES
            pending = None

        if byte < 0x80:
            out.append(byte)
            pos += 1
        else:
            code_point, pos = decode_one(data, pos)
            out += encode_one(code_point)

    return None

# ---------------------------------------------------------------------------
# NUMBER PRODUCTION
# ---------------------------------------------------------------------------
def _skip_digits(data: bytes, pos: int) -> int:
    end = len(data)
    while pos < end and data[pos] in _DIGITS:
        pos += 1
    return pos


def parse_number(data: bytes, pos: int) -> Optional[Tuple[float, int]]:
    """
    Parse -?(0|[1-9][0-9]*)(\\.[0-9]+)?([eE][+-]?[0-9]+)?

    Fails only when the integer part is missing. The optional fraction and
    exponent are tried on a scratch cursor; a malformed suffix is left in
    the input for the caller to reject.
    """
    end = len(data)
    start = pos
    if pos < end and data[pos] == _MINUS:
        pos += 1
    if pos >= end:
        return None

    if data[pos] == _ZERO:
        pos += 1
    elif data[pos] in _DIGITS:
        pos = _skip_digits(data, pos + 1)
    else:
        return None

    probe = pos
    if probe < end and data[probe] == _DOT:
        probe += 1
        if probe < end and data[probe] in _DIGITS:
            pos = _skip_digits(data, probe + 1)

    probe = pos
    if probe < end and data[probe] in b"eE":
        probe += 1
        if probe < end and data[probe] in (_PLUS, _MINUS):
            probe += 1
        if probe < end and data[probe] in _DIGITS:
            pos = _skip_digits(data, probe + 1)

    return float(data[start:pos].decode("ascii")), pos

# ---------------------------------------------------------------------------
# ARRAY PRODUCTION
# ---------------------------------------------------------------------------
def parse_array(data: bytes, pos: int, depth: int = 0,
                max_depth: Optional[int] = DEPTH_LIMIT_DEFAULT) -> Optional[Tuple[Array, int]]:
    """
    Parse '[' ( value ( ',' value )* )? ']' with whitespace around every token.
    """
    end = len(data)
    if pos >= end or data[pos] != _LBRACKET:
        return None
    pos = skip_whitespace(data, pos + 1)
    if pos >= end:
        return None

    items = []
    if data[pos] == _RBRACKET:
        return Array(items), pos + 1

    while True:
        parsed = parse_value(data, pos, depth, max_depth)
        if parsed is None:
            return None
        item, pos = parsed
        items.append(item)

        pos = skip_whitespace(data, pos)
        if pos >= end:
            return None
        if data[pos] == _RBRACKET:
            return Array(items), pos + 1
        if data[pos] != _COMMA:
            return None
        pos = skip_whitespace(data, pos + 1)

# ---------------------------------------------------------------------------
# OBJECT PRODUCTION
# ---------------------------------------------------------------------------
def _parse_member(data: bytes, pos: int, depth: int,
                  max_depth: Optional[int]) -> Optional[Tuple[str, Value, int]]:
    """Parse one 'key : value' entry."""
    parsed_key = parse_string(data, pos)
    if parsed_key is None:
        return None
    key, pos = parsed_key

    pos = skip_whitespace(data, pos)
    if pos >= len(data) or data[pos] != _COLON:
        return None
    pos = skip_whitespace(data, pos + 1)

    parsed_value = parse_value(data, pos, depth, max_depth)
    if parsed_value is None:
        return None
    member, pos = parsed_value
    return key, member, pos


def parse_object(data: bytes, pos: int, depth: int = 0,
                 max_depth: Optional[int] = DEPTH_LIMIT_DEFAULT) -> Optional[Tuple[Object, int]]:
    """
    Parse '{' ( member ( ',' member )* )? '}'.

    Duplicate keys are accepted; the last value wins and the key keeps the
    position of its first occurrence.
    """
    end = len(data)
    if pos >= end or data[pos] != _LBRACE:
        return None
    pos = skip_whitespace(data, pos + 1)
    if pos >= end:
        return None

    members = {}
    if data[pos] == _RBRACE:
        return Object(members), pos + 1

    while True:
        parsed = _parse_member(data, pos, depth, max_depth)
        if parsed is None:
            return None
        key, member, pos = parsed
        members[key] = member

        pos = skip_whitespace(data, pos)
        if pos >= end:
            return None
        if data[pos] == _RBRACE:
            return Object(members), pos + 1
        if data[pos] != _COMMA:
            return None
        pos = skip_whitespace(data, pos + 1)

# ---------------------------------------------------------------------------
# VALUE DISPATCH
# ---------------------------------------------------------------------------
def parse_value(data: bytes, pos: int, depth: int = 0,
                max_depth: Optional[int] = DEPTH_LIMIT_DEFAULT) -> Optional[Tuple[Value, int]]:
    """
    Dispatch on the byte at pos. The cursor must already be past whitespace.
    """
    if pos >= len(data):
        return None
    lead = data[pos]

    if lead == _LBRACE or lead == _LBRACKET:
        if max_depth is not None and depth >= max_depth:
            logger.debug("nesting deeper than %d at offset %d", max_depth, pos)
            return None
        if lead == _LBRACE:
            return parse_object(data, pos, depth + 1, max_depth)
        return parse_array(data, pos, depth + 1, max_depth)

    if lead == _QUOTE:
        parsed = parse_string(data, pos)
        if parsed is None:
            return None
        text, pos = parsed
        return String(text), pos

    if lead == _MINUS or lead in _DIGITS:
        parsed = parse_number(data, pos)
        if parsed is None:
            return None
        number, pos = parsed
        return Number(number), pos

    for keyword, build in _LITERALS:
        if data.startswith(keyword, pos):
            return build(), pos + len(keyword)
    return None

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def _as_bytes(text: Text) -> bytes:
    if isinstance(text, str):
        # Lone surrogates in a str survive as CESU-style bytes and decode to U+FFFD
        return text.encode("utf-8", "surrogatepass")
    if isinstance(text, (bytes, bytearray, memoryview)):
        return bytes(text)
    raise TypeError(f"expected str or bytes-like input, got {type(text).__name__}")


def parse(text: Text, *, max_depth: Optional[int] = DEPTH_LIMIT_DEFAULT) -> Optional[Value]:
    """
    Parse one complete JSON document.

    Returns the value tree, or None if the input is not exactly one JSON
    value surrounded by optional whitespace. Any value may be the root.
    With max_depth=None nesting is bounded only by the interpreter stack;
    input that exhausts it also yields None.
    """
    data = _as_bytes(text)
    pos = skip_whitespace(data, 0)
    try:
        parsed = parse_value(data, pos, 0, max_depth)
    except RecursionError:
        # Only reachable with max_depth=None or a limit above the interpreter's
        logger.debug("nesting exhausted the interpreter stack")
        return None
    if parsed is None:
        logger.debug("no JSON value in %d bytes of input", len(data))
        return None
    value, pos = parsed
    pos = skip_whitespace(data, pos)
    if pos != len(data):
        logger.debug("extra data after root value at offset %d", pos)
        return None
    return value


def loads(text: Text, *, max_depth: Optional[int] = DEPTH_LIMIT_DEFAULT) -> Value:
    """Like parse(), but raise ParseError instead of returning None."""
    value = parse(text, max_depth=max_depth)
    if value is None:
        raise ParseError()
    return value

# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _cli(argv):
    """
    Parse one document and print it back, then print its deep copy.

    Exit code 0 on success, 1 when the input does not parse.
    """
    ap = argparse.ArgumentParser(description="Parse JSON and print it back in compact form")
    ap.add_argument("source", help="JSON text to parse (or a file path with --file); "
                    "put -- before text that starts with '-', e.g. -- -1e5")
    ap.add_argument("--file", action="store_true", help="treat SOURCE as a path and read it")
    ap.add_argument("--max-depth", type=int, default=DEPTH_LIMIT_DEFAULT)
    ap.add_argument("-v", "--verbose", action="store_true", help="log parser diagnostics")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.file:
        with open(args.source, "rb") as fh:
            data = fh.read()
    else:
        data = args.source

    try:
        value = loads(data, max_depth=args.max_depth)
    except ParseError:
        print("error: failed to parse", file=sys.stderr)
        return 1

    out = sys.stdout.buffer
    out.write(serialize(value) + b"\n")
    out.write(serialize(clone(value)) + b"\n")
    out.flush()
    return 0


def main():
    sys.exit(_cli(sys.argv[1:]))

# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    main()
