"""Tests for the scalar field wrapper and its 32-byte encoding."""

import pytest

from r1cs.constants import FIELD_ELEMENT_SIZE, SCALAR_FIELD_ORDER
from r1cs.field import GF, decode, encode, is_negative, pow2, signed, to_field


class TestEncoding:
    """Canonical little-endian encoding."""

    @pytest.mark.parametrize("value", [0, 1, 2**64 + 7, 2**200, SCALAR_FIELD_ORDER - 1])
    def test_round_trip(self, value) -> None:
        """encode followed by decode returns the same element."""
        element = GF(value)
        data = encode(element)
        assert len(data) == FIELD_ELEMENT_SIZE
        assert decode(data) == element

    def test_little_endian(self) -> None:
        """The least significant byte comes first."""
        assert encode(GF(0x0102)) == b"\x02\x01" + bytes(30)

    def test_rejects_wrong_length(self) -> None:
        """Only 32-byte strings decode."""
        with pytest.raises(ValueError):
            decode(bytes(31))

    def test_rejects_non_canonical(self) -> None:
        """Encodings of values >= l are refused."""
        with pytest.raises(ValueError):
            decode(SCALAR_FIELD_ORDER.to_bytes(FIELD_ELEMENT_SIZE, "little"))


class TestConversions:
    """Integer reduction and sign helpers."""

    def test_negative_integers_wrap(self) -> None:
        """-1 maps to l - 1."""
        assert int(to_field(-1)) == SCALAR_FIELD_ORDER - 1

    @pytest.mark.parametrize("value", [2.7, 2.0, "5", None])
    def test_rejects_non_integers(self, value) -> None:
        """Floats and other non-integral values are refused, not truncated."""
        with pytest.raises(TypeError):
            to_field(value)

    def test_accepts_field_elements(self) -> None:
        assert to_field(GF(7)) == GF(7)
        assert to_field(-GF(1)) == to_field(-1)

    def test_pow2(self) -> None:
        """pow2 matches integer powers below the modulus."""
        assert int(pow2(201)) == 2**201

    def test_is_negative(self) -> None:
        """Small integers are non-negative, their negations are negative."""
        assert not is_negative(GF(0))
        assert not is_negative(GF(2**201))
        assert is_negative(to_field(-1))
        assert is_negative(to_field(-(2**201)))

    def test_signed(self) -> None:
        """signed recovers small negative integers."""
        assert signed(to_field(-18)) == -18
        assert signed(GF(18)) == 18
