from typing import Iterator

import galois

from .errors import DuplicateWitnessAssignment, WitnessIncomplete
from .field import encode, to_field


class VariableTable:
    """Interns variable names to dense indices.

    The first reference to a name creates it at the next free index; every
    later reference returns that same index.
    """

    def __init__(self):
        self._indices: dict[str, int] = {}

    def index(self, name: str) -> int:
        if name not in self._indices:
            self._indices[name] = len(self._indices)
        return self._indices[name]

    def names(self) -> list[str]:
        """Names ordered by index (dicts keep insertion order)."""
        return list(self._indices)

    def __contains__(self, name: str) -> bool:
        return name in self._indices

    def __len__(self) -> int:
        return len(self._indices)

    def __iter__(self) -> Iterator[str]:
        return iter(self._indices)


class WitnessTable:
    def __init__(self):
        self._values: dict[str, galois.FieldArray] = {}

    def assign(self, name: str, value) -> None:
        if name in self._values:
            raise DuplicateWitnessAssignment(
                f"variable '{name}' already has a witness value"
            )
        self._values[name] = to_field(value)

    def __getitem__(self, name: str) -> galois.FieldArray:
        return self._values[name]

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def dense(self, variables: VariableTable) -> list[bytes]:
        """Lay the witness out by variable index as 32-byte encodings."""
        missing = [name for name in variables if name not in self._values]
        unknown = [name for name in self._values if name not in variables]
        if missing or unknown:
            raise WitnessIncomplete(
                f"{len(self._values)} witness values for {len(variables)} variables; "
                f"missing={missing[:5]} unknown={unknown[:5]}"
            )
        return [encode(self._values[name]) for name in variables.names()]
