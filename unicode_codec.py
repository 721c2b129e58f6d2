# unicode_codec.py
# UTF-8 and UTF-16 helpers shared by the JSON parser and writer
#
# =============================================================================
#  ONE SCALAR AT A TIME
# =============================================================================
#
# The string production walks raw UTF-8 one scalar value at a time and the
# writer emits one scalar value at a time, so this module exposes exactly that
# granularity: decode one, encode one.
#
# Malformed UTF-8 is data, not an error. decode_one() follows the "maximal
# subpart" substitution practice from the Unicode Standard (ch. 3, U+FFFD
# substitution) which is also what ICU's U8_NEXT_OR_FFFD does: the lead byte
# and every continuation byte that was still valid at the point of failure are
# consumed together and replaced by a single U+FFFD.
#
# =============================================================================
#  REFERENCES
# =============================================================================
# [1] RFC 3629 - UTF-8, a transformation format of ISO 10646
# [2] RFC 2781 - UTF-16, an encoding of ISO 10646
# [3] The Unicode Standard, ch. 3.9 - U+FFFD Substitution of Maximal Subparts
# =============================================================================

from typing import Tuple, Union

BytesLike = Union[bytes, bytearray, memoryview]

# ---------------------------------------------------------------------------
# CONSTANTS
# ---------------------------------------------------------------------------
REPLACEMENT_CHARACTER = 0xFFFD
REPLACEMENT_BYTES     = b"\xef\xbf\xbd"
MAX_CODE_POINT        = 0x10FFFF

LEAD_SURROGATE_MIN    = 0xD800
LEAD_SURROGATE_MAX    = 0xDBFF
TRAIL_SURROGATE_MIN   = 0xDC00
TRAIL_SURROGATE_MAX   = 0xDFFF

_CONT_MIN = 0x80
_CONT_MAX = 0xBF

# ---------------------------------------------------------------------------
# UTF-8
# ---------------------------------------------------------------------------
def _sequence_shape(lead: int) -> Tuple[int, int, int, int]:
    """
    Return (continuation_count, payload_bits, second_min, second_max) for a
    lead byte, or a zero count when the byte can never start a sequence.

    The narrowed second-byte ranges are what rule out overlong forms (E0, F0),
    encoded surrogates (ED) and values past U+10FFFF (F4).
    """
    if 0xC2 <= lead <= 0xDF:
        return 1, lead & 0x1F, _CONT_MIN, _CONT_MAX
    if lead == 0xE0:
        return 2, lead & 0x0F, 0xA0, _CONT_MAX
    if lead == 0xED:
        return 2, lead & 0x0F, _CONT_MIN, 0x9F
    if 0xE1 <= lead <= 0xEF:
        return 2, lead & 0x0F, _CONT_MIN, _CONT_MAX
    if lead == 0xF0:
        return 3, lead & 0x07, 0x90, _CONT_MAX
    if lead == 0xF4:
        return 3, lead & 0x07, _CONT_MIN, 0x8F
    if 0xF1 <= lead <= 0xF3:
        return 3, lead & 0x07, _CONT_MIN, _CONT_MAX
    return 0, 0, 0, 0


def decode_one(data: BytesLike, pos: int = 0) -> Tuple[int, int]:
    """
    Decode the scalar value starting at data[pos].

    Returns (code_point, next_pos). An ill-formed sequence yields
    (REPLACEMENT_CHARACTER, end_of_maximal_subpart) and never raises.
    pos must index a byte of data.
    """
    lead = data[pos]
    if lead < 0x80:
        return lead, pos + 1

    count, code_point, lo, hi = _sequence_shape(lead)
    if count == 0:
        return REPLACEMENT_CHARACTER, pos + 1

    end = len(data)
    i = pos + 1
    for _ in range(count):
        if i >= end or not lo <= data[i] <= hi:
            return REPLACEMENT_CHARACTER, i
        code_point = (code_point << 6) | (data[i] & 0x3F)
        i += 1
        lo, hi = _CONT_MIN, _CONT_MAX
    return code_point, i


def encode_one(code_point: int) -> bytes:
    """
    Encode one scalar value as 1-4 UTF-8 bytes.

    Surrogate code points have no UTF-8 form and come out as U+FFFD.
    """
    if code_point < 0 or code_point > MAX_CODE_POINT:
        raise ValueError(f"code point out of range: {code_point:#x}")
    if code_point < 0x80:
        return bytes((code_point,))
    if code_point < 0x800:
        return bytes((0xC0 | (code_point >> 6),
                      0x80 | (code_point & 0x3F)))
    if LEAD_SURROGATE_MIN <= code_point <= TRAIL_SURROGATE_MAX:
        return REPLACEMENT_BYTES
    if code_point < 0x10000:
        return bytes((0xE0 | (code_point >> 12),
                      0x80 | ((code_point >> 6) & 0x3F),
                      0x80 | (code_point & 0x3F)))
    return bytes((0xF0 | (code_point >> 18),
                  0x80 | ((code_point >> 12) & 0x3F),
                  0x80 | ((code_point >> 6) & 0x3F),
                  0x80 | (code_point & 0x3F)))

# ---------------------------------------------------------------------------
# UTF-16 SURROGATES
# ---------------------------------------------------------------------------
def is_lead_surrogate(unit: int) -> bool:
    return LEAD_SURROGATE_MIN <= unit <= LEAD_SURROGATE_MAX


def is_trailing_surrogate(unit: int) -> bool:
    return TRAIL_SURROGATE_MIN <= unit <= TRAIL_SURROGATE_MAX


def compose_surrogate_pair(lead: int, trail: int) -> int:
    """Combine a lead/trail pair into one supplementary-plane scalar (RFC 2781, 2.2)."""
    return 0x10000 + ((lead - LEAD_SURROGATE_MIN) << 10) + (trail - TRAIL_SURROGATE_MIN)
