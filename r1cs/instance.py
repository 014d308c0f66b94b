from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence

from .constants import SCALAR_FIELD_ORDER
from .errors import MalformedInstance
from .field import decode

# Sparse matrix entry: (row, column, 32-byte little-endian coefficient).
Entry = tuple[int, int, bytes]


def _decode_all(values: Sequence[bytes], what: str) -> list[int]:
    try:
        return [int(decode(v)) for v in values]
    except ValueError as e:
        raise MalformedInstance(f"bad {what} encoding: {e}") from e


def _dot_rows(entries, z: list[int], num_rows: int) -> list[int]:
    """Compute M · z (mod l) for a matrix given as sparse entries."""
    out = [0] * num_rows
    for row, column, coeff in entries:
        out[row] = (out[row] + int.from_bytes(coeff, "little") * z[column]) % SCALAR_FIELD_ORDER
    return out


@dataclass(frozen=True)
class Instance:
    """Sparse R1CS instance as seen by a proving backend.

    Witness vectors are laid out as ``z = (variables, 1, inputs)``: column
    ``num_variables`` is the constant wire and input columns follow it.
    """

    num_constraints: int
    num_variables: int
    num_inputs: int
    A: tuple[Entry, ...]
    B: tuple[Entry, ...]
    C: tuple[Entry, ...]

    @classmethod
    def new(cls, num_constraints, num_variables, num_inputs, A, B, C) -> "Instance":
        """Validate dimensions and indices, then freeze the matrices."""
        if num_constraints <= 0 or num_variables <= 0 or num_inputs < 0:
            raise MalformedInstance(
                f"invalid dimensions: {num_constraints} constraints, "
                f"{num_variables} variables, {num_inputs} inputs"
            )
        num_columns = num_variables + 1 + num_inputs
        for name, matrix in (("A", A), ("B", B), ("C", C)):
            for row, column, coeff in matrix:
                if not 0 <= row < num_constraints:
                    raise MalformedInstance(f"{name}: row {row} out of range")
                if not 0 <= column < num_columns:
                    raise MalformedInstance(f"{name}: column {column} out of range")
                _decode_all([coeff], f"{name} coefficient")
        return cls(
            num_constraints=num_constraints,
            num_variables=num_variables,
            num_inputs=num_inputs,
            A=tuple(A),
            B=tuple(B),
            C=tuple(C),
        )

    def _evaluate(self, variables: Sequence[bytes], inputs: Sequence[bytes]):
        if len(variables) != self.num_variables:
            raise MalformedInstance(
                f"expected {self.num_variables} variables, got {len(variables)}"
            )
        if len(inputs) != self.num_inputs:
            raise MalformedInstance(
                f"expected {self.num_inputs} inputs, got {len(inputs)}"
            )
        z = _decode_all(variables, "variable") + [1] + _decode_all(inputs, "input")
        Az = _dot_rows(self.A, z, self.num_constraints)
        Bz = _dot_rows(self.B, z, self.num_constraints)
        Cz = _dot_rows(self.C, z, self.num_constraints)
        return Az, Bz, Cz

    def unsatisfied_rows(self, variables, inputs=()) -> list[int]:
        Az, Bz, Cz = self._evaluate(variables, inputs)
        return [
            k
            for k, (a, b, c) in enumerate(zip(Az, Bz, Cz))
            if (a * b) % SCALAR_FIELD_ORDER != c
        ]

    def is_sat(self, variables, inputs=()) -> bool:
        """Check (A·z) ∘ (B·z) = (C·z) row by row."""
        return not self.unsatisfied_rows(variables, inputs)


class ProvingBackend(ABC):
    """Narrow surface of an external zero-knowledge proving system."""

    def build_instance(self, num_constraints, num_variables, num_inputs, A, B, C) -> Instance:
        return Instance.new(num_constraints, num_variables, num_inputs, A, B, C)

    @abstractmethod
    def setup(self, instance: Instance) -> tuple[Any, Any]:
        """Return ``(commitment, proving_params)`` for the instance."""
        pass

    @abstractmethod
    def prove(
        self,
        instance: Instance,
        proving_params: Any,
        witness: Sequence[bytes],
        inputs: Sequence[bytes],
        label: bytes,
    ) -> Any:
        pass

    @abstractmethod
    def verify(
        self,
        proof: Any,
        commitment: Any,
        inputs: Sequence[bytes],
        label: bytes,
        proving_params: Any,
    ) -> bool:
        pass
