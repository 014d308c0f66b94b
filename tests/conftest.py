"""Shared fixtures: a hash-commitment stand-in for the proving backend."""

from hashlib import sha3_256

import pytest

from r1cs.instance import Instance, ProvingBackend


def instance_digest(instance: Instance) -> bytes:
    hasher = sha3_256()
    hasher.update(instance.num_constraints.to_bytes(8, "little"))
    hasher.update(instance.num_variables.to_bytes(8, "little"))
    hasher.update(instance.num_inputs.to_bytes(8, "little"))
    for matrix in (instance.A, instance.B, instance.C):
        hasher.update(len(matrix).to_bytes(8, "little"))
        for row, column, coeff in matrix:
            hasher.update(row.to_bytes(8, "little"))
            hasher.update(column.to_bytes(8, "little"))
            hasher.update(coeff)
    return hasher.digest()


class SatisfiabilityBackend(ProvingBackend):
    """Not zero knowledge: the "proof" carries the witness in the clear.

    Enough to exercise the handoff path: setup commits to the instance by
    hash, verification re-checks the commitment, the transcript label and
    satisfiability.
    """

    def __init__(self):
        self.built = 0

    def build_instance(self, num_constraints, num_variables, num_inputs, A, B, C):
        self.built += 1
        return super().build_instance(num_constraints, num_variables, num_inputs, A, B, C)

    def setup(self, instance):
        return instance_digest(instance), instance

    def prove(self, instance, proving_params, witness, inputs, label):
        return {"label": label, "witness": tuple(witness)}

    def verify(self, proof, commitment, inputs, label, proving_params):
        if proof["label"] != label:
            return False
        if instance_digest(proving_params) != commitment:
            return False
        return proving_params.is_sat(proof["witness"], inputs)


@pytest.fixture
def backend():
    return SatisfiabilityBackend()
