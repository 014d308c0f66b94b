from typing import Optional, Sequence

from .artifact import R1CSArtifact, finalize
from .builder import R1CSBuilder
from .errors import EmptySet
from .field import to_field
from .instance import ProvingBackend

SECRET = "secret"


def element_name(i: int) -> str:
    return f"set[{i}]"


class SetMembershipGadget:
    """Prove secret ∈ {s_0, ..., s_{n-1}} for public elements.

    prod_i (secret - s_i) is zero iff one factor is zero, since the scalar
    field has no zero divisors. The running product is built one
    multiplication row at a time and finally pinned to 0.
    """

    @staticmethod
    def diff_name(secret: str, i: int) -> str:
        return f"{secret}_diff{i}"

    @staticmethod
    def product_name(secret: str, i: int) -> str:
        # the first running product is the first difference itself
        return f"{secret}_diff0" if i == 0 else f"{secret}_product{i}"

    def constrain(self, builder: R1CSBuilder, secret: str, elements: Sequence[str]) -> str:
        """Emit membership rows; every element must already be bound."""
        if not elements:
            raise EmptySet("set membership needs at least one element")

        product = None
        for i, element in enumerate(elements):
            diff = self.diff_name(secret, i)
            builder.subtract(secret, element, diff)
            if i > 0:
                builder.multiply(product, diff, self.product_name(secret, i))
            product = self.product_name(secret, i)

        builder.assert_equal_constant(product, 0)
        return product

    def assign(self, builder: R1CSBuilder, secret: str, secret_value, element_values) -> None:
        if len(element_values) == 0:
            raise EmptySet("set membership needs at least one element")

        secret_value = to_field(secret_value)
        builder.assign(secret, secret_value)

        acc = None
        for i, value in enumerate(element_values):
            diff = secret_value - to_field(value)
            builder.assign(self.diff_name(secret, i), diff)
            if i > 0:
                acc = acc * diff
                builder.assign(self.product_name(secret, i), acc)
            else:
                acc = diff


def produce_set_membership_r1cs(
    secret, elements: Sequence, backend: Optional[ProvingBackend] = None
) -> R1CSArtifact:
    """Build the R1CS and witness for "secret is one of ``elements``".

    Elements should be distinct; repeats only add redundant factors.
    """
    if len(elements) == 0:
        raise EmptySet("set membership needs at least one element")

    names = [element_name(i) for i in range(len(elements))]
    builder = R1CSBuilder(list(zip(names, elements)))

    gadget = SetMembershipGadget()
    gadget.constrain(builder, SECRET, names)
    gadget.assign(builder, SECRET, secret, elements)

    return finalize(builder, backend)
