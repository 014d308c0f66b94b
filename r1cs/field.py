from numbers import Integral

import galois

from .constants import FIELD_ELEMENT_SIZE, SCALAR_FIELD_ORDER

# Passing the generator explicitly keeps galois from factoring l - 1.
GF = galois.GF(SCALAR_FIELD_ORDER, primitive_element=2, verify=False)

ZERO = GF(0)
ONE = GF(1)


def to_field(value) -> galois.FieldArray:
    """Reduce an integer (or a field scalar of any field) into GF.

    Anything else, floats included, is refused rather than truncated.
    """
    if not isinstance(value, (Integral, galois.FieldArray)):
        raise TypeError(f"expected an integer or field element, got {type(value).__name__}")
    return GF(int(value) % SCALAR_FIELD_ORDER)


def encode(element) -> bytes:
    return int(element).to_bytes(FIELD_ELEMENT_SIZE, "little")


def decode(data: bytes) -> galois.FieldArray:
    """Inverse of ``encode``. Only canonical encodings are accepted."""
    if len(data) != FIELD_ELEMENT_SIZE:
        raise ValueError(
            f"field element must be {FIELD_ELEMENT_SIZE} bytes, got {len(data)}"
        )
    value = int.from_bytes(data, "little")
    if value >= SCALAR_FIELD_ORDER:
        raise ValueError("non-canonical field element encoding")
    return GF(value)


def pow2(exponent: int) -> galois.FieldArray:
    return GF(pow(2, exponent, SCALAR_FIELD_ORDER))


def is_negative(element) -> bool:
    """True when the most significant byte of the encoding is non-zero.

    Integers below 2^248 never reach that byte while ``l - m`` for any
    ``m < 2^251`` always does, so for decomposable magnitudes a set top byte
    means the element encodes a negative integer.
    """
    return encode(element)[-1] != 0


def signed(element) -> int:
    """Map a field element to the integer in (-l/2, l/2] it represents."""
    value = int(element)
    if value > SCALAR_FIELD_ORDER // 2:
        return value - SCALAR_FIELD_ORDER
    return value
