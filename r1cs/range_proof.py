from typing import Optional

from .artifact import R1CSArtifact, finalize
from .builder import R1CSBuilder
from .decomposition import make_decomposition
from .errors import EmptyRange
from .field import signed, to_field
from .instance import ProvingBackend
from .parameters import DEFAULT_PARAMETERS, Parameters

LOWER_BOUND = "A"
UPPER_BOUND = "B"
SECRET = "x"


def check_bounds(a, b) -> None:
    """Refuse a lower bound above the upper bound, compared as signed integers."""
    low, high = signed(to_field(a)), signed(to_field(b))
    if low > high:
        raise EmptyRange(f"lower bound {low} exceeds upper bound {high}")


class RangeGadget:
    """Prove a <= x <= b for public bounds a, b.

    With y = (a - x) * (x - b), both factors are non-positive inside the
    range and of opposite sign outside it, so y >= 0 exactly when x is in
    [a, b] (as long as y is small enough to decompose). The gadget
    decomposes y and pins its sign bit to 0.
    """

    def __init__(self, parameters: Parameters = DEFAULT_PARAMETERS):
        self.parameters = parameters
        self.decomposition = make_decomposition(parameters)

    @staticmethod
    def helper_names(x: str) -> tuple[str, str, str]:
        return f"{x}_lower_gap", f"{x}_upper_gap", f"{x}_range_product"

    def constrain(self, builder: R1CSBuilder, a: str, b: str, x: str) -> str:
        """Emit the range rows; ``a`` and ``b`` must already be bound."""
        lower_gap, upper_gap, product = self.helper_names(x)

        builder.subtract(a, x, lower_gap)
        builder.subtract(x, b, upper_gap)
        builder.multiply(lower_gap, upper_gap, product)

        self.decomposition.constrain(builder, product)
        builder.assert_equal_constant(self.decomposition.sign_bit(product), 0)
        return product

    def assign(self, builder: R1CSBuilder, x: str, a_value, b_value, x_value) -> None:
        check_bounds(a_value, b_value)
        lower_gap, upper_gap, product = self.helper_names(x)
        a_value, b_value, x_value = to_field(a_value), to_field(b_value), to_field(x_value)

        lower = a_value - x_value
        upper = x_value - b_value
        builder.assign(x, x_value)
        builder.assign(lower_gap, lower)
        builder.assign(upper_gap, upper)
        builder.assign(product, lower * upper)

        self.decomposition.assign(builder, product, lower * upper)


def produce_range_r1cs(
    x,
    a,
    b,
    parameters: Parameters = DEFAULT_PARAMETERS,
    backend: Optional[ProvingBackend] = None,
) -> R1CSArtifact:
    """Build the R1CS and witness for "x lies in [a, b]" (both inclusive)."""
    check_bounds(a, b)
    builder = R1CSBuilder([(LOWER_BOUND, a), (UPPER_BOUND, b)])

    gadget = RangeGadget(parameters)
    gadget.constrain(builder, LOWER_BOUND, UPPER_BOUND, SECRET)
    gadget.assign(builder, SECRET, a, b, x)

    return finalize(builder, backend)
