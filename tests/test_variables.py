"""Tests for variable interning and the witness table."""

import pytest

from r1cs.errors import DuplicateWitnessAssignment, WitnessIncomplete
from r1cs.field import GF, encode
from r1cs.variables import VariableTable, WitnessTable


class TestVariableTable:
    """First reference creates, later references reuse."""

    def test_dense_indices(self) -> None:
        """Indices are assigned 0, 1, 2, ... in first-reference order."""
        table = VariableTable()
        assert [table.index(n) for n in ("a", "b", "c")] == [0, 1, 2]
        assert table.names() == ["a", "b", "c"]

    def test_stable(self) -> None:
        """Repeated lookups return the same index and create nothing."""
        table = VariableTable()
        first = table.index("y_bit17")
        table.index("other")
        assert table.index("y_bit17") == first
        assert len(table) == 2


class TestWitnessTable:
    """Assignment and dense layout."""

    def test_duplicate_assignment(self) -> None:
        """Assigning a variable twice fails."""
        witness = WitnessTable()
        witness.assign("x", 3)
        with pytest.raises(DuplicateWitnessAssignment):
            witness.assign("x", 3)

    def test_dense_follows_indices(self) -> None:
        """Dense layout is ordered by variable index, not assignment order."""
        variables = VariableTable()
        variables.index("a")
        variables.index("b")
        witness = WitnessTable()
        witness.assign("b", 2)
        witness.assign("a", 1)
        assert witness.dense(variables) == [encode(GF(1)), encode(GF(2))]

    def test_missing_value(self) -> None:
        """A variable without a value makes the witness incomplete."""
        variables = VariableTable()
        variables.index("a")
        variables.index("b")
        witness = WitnessTable()
        witness.assign("a", 1)
        with pytest.raises(WitnessIncomplete):
            witness.dense(variables)

    def test_unknown_value(self) -> None:
        """A value for a name no constraint mentions is also rejected."""
        variables = VariableTable()
        variables.index("a")
        witness = WitnessTable()
        witness.assign("a", 1)
        witness.assign("stray", 5)
        with pytest.raises(WitnessIncomplete):
            witness.dense(variables)
