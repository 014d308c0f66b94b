"""Two's-complement bit decomposition over the scalar field.

A field element ``x`` is tied to N boolean helpers ``x_bit0 .. x_bit{N-1}``
by

    sum_{i < N-1} 2^i * x_bit_i  -  2^{N-1} * x_bit_{N-1}  =  x

so ``x_bit{N-1}`` is the sign bit of ``x`` read as an N-bit two's-complement
integer. This only holds while the signed magnitude of ``x`` stays below
2^(N-1); past that the bits silently describe a different integer, which is
why ``assign`` checks the magnitude first unless told not to.
"""

from .builder import R1CSBuilder
from .errors import RangeOverflow
from .field import ONE, ZERO, encode, is_negative, pow2, signed, to_field
from .parameters import MAX_DECOMPOSITION_BITS, DecompositionStyle, Parameters


def bit_name(x: str, i: int) -> str:
    return f"{x}_bit{i}"


def twos_complement_bits(value, bits: int) -> list[int]:
    """Low ``bits`` bits of ``value`` read as a signed integer, LSB first."""
    value = to_field(value)
    negative = is_negative(value)
    raw = encode(-value if negative else value)

    out = []
    carry = 1
    for i in range(bits):
        bit = (raw[i // 8] >> (i % 8)) & 1
        if negative:
            # complement, then add one with carry
            bit = (1 - bit) + carry
            carry = bit >> 1
            bit &= 1
        out.append(bit)
    return out


def check_magnitude(value, bits: int) -> None:
    s = signed(to_field(value))
    if not -(1 << (bits - 1)) <= s < 1 << (bits - 1):
        raise RangeOverflow(
            f"value of magnitude 2^{abs(s).bit_length() - 1}+ does not fit "
            f"a {bits}-bit two's-complement decomposition"
        )


class TwosComplementDecomposition:
    """Decompose a variable into ``bits`` boolean helpers with one linear row."""

    def __init__(self, bits: int, check_magnitude: bool = True):
        if not 2 <= bits <= MAX_DECOMPOSITION_BITS:
            raise ValueError(
                f"decomposition width must be in [2, {MAX_DECOMPOSITION_BITS}], got {bits}"
            )
        self.bits = bits
        self.check_magnitude = check_magnitude

    def bit_names(self, x: str) -> list[str]:
        return [bit_name(x, i) for i in range(self.bits)]

    def sign_bit(self, x: str) -> str:
        return bit_name(x, self.bits - 1)

    def constrain(self, builder: R1CSBuilder, x: str) -> list[str]:
        names = self.bit_names(x)
        for name in names:
            builder.assert_boolean(name)

        terms = [(name, pow2(i)) for i, name in enumerate(names[:-1])]
        terms.append((names[-1], -pow2(self.bits - 1)))
        builder.linear_combination(terms, x)
        return names

    def assign(self, builder: R1CSBuilder, x: str, value) -> list[int]:
        if self.check_magnitude:
            check_magnitude(value, self.bits)
        bits = twos_complement_bits(value, self.bits)
        for name, bit in zip(self.bit_names(x), bits):
            builder.assign(name, ONE if bit else ZERO)
        return bits


class ChainedTwosComplementDecomposition(TwosComplementDecomposition):
    """Same bit contract, reconstructed through explicit intermediate rows.

    Powers of two are built by doubling from ``power0 = 1``, each bit is
    multiplied by its (signed) power into ``term{i}``, and the terms are
    accumulated into ``total{i}``, ending with ``x = total{N}``. Roughly four
    rows per bit instead of one row overall.
    """

    @staticmethod
    def _names(x: str):
        def power(i):
            return f"{x}_power{i}"

        def term(i):
            return f"{x}_term{i}"

        def total(i):
            return f"{x}_total{i}"

        return power, term, total, f"{x}_neg_power"

    def constrain(self, builder: R1CSBuilder, x: str) -> list[str]:
        power, term, total, neg_power = self._names(x)
        top = self.bits - 1

        builder.assert_equal_constant(power(0), 1)
        for i in range(top):
            builder.scalar_multiply(power(i), 2, power(i + 1))
        builder.scalar_multiply(power(top), -1, neg_power)

        builder.assert_equal_constant(total(0), 0)
        names = self.bit_names(x)
        for i, name in enumerate(names):
            builder.assert_boolean(name)
            builder.multiply(name, neg_power if i == top else power(i), term(i))
            builder.add(total(i), term(i), total(i + 1))

        builder.assert_equal(x, total(self.bits))
        return names

    def assign(self, builder: R1CSBuilder, x: str, value) -> list[int]:
        bits = super().assign(builder, x, value)
        power, term, total, neg_power = self._names(x)
        top = self.bits - 1

        for i in range(self.bits):
            builder.assign(power(i), pow2(i))
        builder.assign(neg_power, -pow2(top))

        acc = ZERO
        builder.assign(total(0), acc)
        for i, bit in enumerate(bits):
            weight = -pow2(top) if i == top else pow2(i)
            contribution = weight if bit else ZERO
            acc = acc + contribution
            builder.assign(term(i), contribution)
            builder.assign(total(i + 1), acc)
        return bits


def make_decomposition(parameters: Parameters) -> TwosComplementDecomposition:
    cls = {
        DecompositionStyle.LINEAR_COMBINATION: TwosComplementDecomposition,
        DecompositionStyle.CHAINED: ChainedTwosComplementDecomposition,
    }[parameters.decomposition_style]
    return cls(parameters.decomposition_bits, parameters.check_magnitude)
