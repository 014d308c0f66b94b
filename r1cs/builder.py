import logging
from dataclasses import dataclass
from typing import Sequence

import galois

from .errors import BuilderFinalized
from .field import ONE, encode, to_field
from .instance import Entry
from .variables import VariableTable, WitnessTable

logger = logging.getLogger(__name__)

ONE_VARIABLE = "one"


@dataclass(frozen=True)
class FinalizedR1CS:
    num_constraints: int
    num_variables: int
    num_inputs: int
    num_non_zero_entries: int
    A: tuple[Entry, ...]
    B: tuple[Entry, ...]
    C: tuple[Entry, ...]
    variable_names: tuple[str, ...]
    witness: tuple[bytes, ...]
    inputs: tuple[bytes, ...]


# -----------------------------------------------------------------------------
# R1CS builder. Each constraint method appends exactly one row
#     (A_row · z) * (B_row · z) = (C_row · z)
# to the three sparse matrices.
# -----------------------------------------------------------------------------


class R1CSBuilder:
    """Single-session R1CS builder.

    The variable ``"one"`` is created first, so it always sits at index 0 and
    carries the witness value 1. Public values passed as ``public_inputs`` are
    bound in order through ``bind_public``.

    Column ``num_variables`` of the finalized matrices is reserved for the
    backend's constant wire, which is how the closing row pins ``"one"`` to 1.
    """

    def __init__(self, public_inputs: Sequence[tuple[str, object]] = ()):
        self.variables = VariableTable()
        self.witness = WitnessTable()

        self.A: list[Entry] = []
        self.B: list[Entry] = []
        self.C: list[Entry] = []

        self.num_constraints = 0
        self._finalized = False

        self.index(ONE_VARIABLE)
        self.witness.assign(ONE_VARIABLE, ONE)

        for name, value in public_inputs:
            self.bind_public(name, value)

    # ------------------------------------------------------------------
    # Variables and witness
    # ------------------------------------------------------------------

    def index(self, name: str) -> int:
        return self.variables.index(name)

    @property
    def num_variables(self) -> int:
        return len(self.variables)

    @property
    def num_non_zero_entries(self) -> int:
        """Largest number of entries held by any of A, B and C."""
        return max(len(self.A), len(self.B), len(self.C))

    @property
    def finalized(self) -> bool:
        return self._finalized

    def assign(self, name: str, value) -> None:
        self._check_open()
        self.witness.assign(name, value)

    def value(self, name: str) -> galois.FieldArray:
        return self.witness[name]

    def bind_public(self, name: str, value) -> None:
        """Pin ``name`` to a public constant and record it in the witness."""
        self.assert_equal_constant(name, value)
        self.assign(name, value)

    # ------------------------------------------------------------------
    # Constraint emission
    # ------------------------------------------------------------------

    def _check_open(self) -> None:
        if self._finalized:
            raise BuilderFinalized("builder session is already finalized")

    def _emit(self, a_terms, b_terms, c_terms) -> int:
        """Append one row given ``(column, coefficient)`` terms per matrix."""
        self._check_open()
        row = self.num_constraints
        for matrix, terms in ((self.A, a_terms), (self.B, b_terms), (self.C, c_terms)):
            for column, coeff in terms:
                matrix.append((row, column, encode(coeff)))
        self.num_constraints += 1
        return row

    def multiply(self, x: str, y: str, z: str) -> int:
        """x * y = z"""
        return self._emit(
            [(self.index(x), ONE)],
            [(self.index(y), ONE)],
            [(self.index(z), ONE)],
        )

    def scalar_multiply(self, x: str, k, z: str) -> int:
        """x * k = z for a public constant k."""
        return self._emit(
            [(self.index(x), ONE)],
            [(self.index(ONE_VARIABLE), to_field(k))],
            [(self.index(z), ONE)],
        )

    def add(self, x: str, y: str, z: str) -> int:
        """(x + y) * one = z"""
        return self._emit(
            [(self.index(x), ONE), (self.index(y), ONE)],
            [(self.index(ONE_VARIABLE), ONE)],
            [(self.index(z), ONE)],
        )

    def subtract(self, x: str, y: str, z: str) -> int:
        """(x - y) * one = z"""
        return self._emit(
            [(self.index(x), ONE), (self.index(y), -ONE)],
            [(self.index(ONE_VARIABLE), ONE)],
            [(self.index(z), ONE)],
        )

    def assert_boolean(self, x: str) -> int:
        """x * (x - one) = 0, i.e. x is 0 or 1."""
        x_ind = self.index(x)
        return self._emit(
            [(x_ind, ONE)],
            [(x_ind, ONE), (self.index(ONE_VARIABLE), -ONE)],
            [],
        )

    def assert_equal(self, x: str, y: str) -> int:
        """x * one = y"""
        return self._emit(
            [(self.index(x), ONE)],
            [(self.index(ONE_VARIABLE), ONE)],
            [(self.index(y), ONE)],
        )

    def assert_equal_constant(self, x: str, k) -> int:
        """(k * one) * one = x"""
        x_ind = self.index(x)
        one_ind = self.index(ONE_VARIABLE)
        return self._emit(
            [(one_ind, to_field(k))],
            [(one_ind, ONE)],
            [(x_ind, ONE)],
        )

    def linear_combination(self, terms: Sequence[tuple[str, object]], z: str) -> int:
        """(sum of c_i * x_i) * one = z for ``terms`` given as (x_i, c_i)."""
        a_terms = [(self.index(name), to_field(coeff)) for name, coeff in terms]
        return self._emit(
            a_terms,
            [(self.index(ONE_VARIABLE), ONE)],
            [(self.index(z), ONE)],
        )

    # ------------------------------------------------------------------
    # Session close
    # ------------------------------------------------------------------

    def finalize(self) -> FinalizedR1CS:
        """Close the session and lay out matrices and witness.

        Must be the last call on the builder; a second call raises
        ``BuilderFinalized``.
        """
        self._check_open()
        witness = self.witness.dense(self.variables)

        # 1 * 1 = one, against the backend's constant wire.
        constant_column = self.num_variables
        self._emit(
            [(constant_column, ONE)],
            [(constant_column, ONE)],
            [(self.index(ONE_VARIABLE), ONE)],
        )
        self._finalized = True

        logger.debug(
            "finalized r1cs: %d constraints, %d variables, %d non-zero entries",
            self.num_constraints,
            self.num_variables,
            self.num_non_zero_entries,
        )
        return FinalizedR1CS(
            num_constraints=self.num_constraints,
            num_variables=self.num_variables,
            num_inputs=0,
            num_non_zero_entries=self.num_non_zero_entries,
            A=tuple(self.A),
            B=tuple(self.B),
            C=tuple(self.C),
            variable_names=tuple(self.variables.names()),
            witness=tuple(witness),
            inputs=(),
        )
