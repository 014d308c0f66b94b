import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from .builder import R1CSBuilder
from .errors import SelfCheckFailed
from .instance import Instance, ProvingBackend

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class R1CSArtifact:
    """Finalized instance plus witness, ready for a proving backend."""

    num_constraints: int
    num_variables: int
    num_inputs: int
    num_non_zero_entries: int
    instance: Instance
    witness: tuple[bytes, ...]
    inputs: tuple[bytes, ...]
    variable_names: tuple[str, ...]
    satisfied: bool

    @property
    def A(self):
        return self.instance.A

    @property
    def B(self):
        return self.instance.B

    @property
    def C(self):
        return self.instance.C

    def variable_index(self, name: str) -> int:
        return self.variable_names.index(name)


@dataclass(frozen=True)
class ProofHandoff:
    commitment: Any
    proving_params: Any
    proof: Any
    label: bytes


def finalize(builder: R1CSBuilder, backend: Optional[ProvingBackend] = None) -> R1CSArtifact:
    """Close ``builder``, build the backend instance and self-check the witness."""
    r1cs = builder.finalize()
    build = backend.build_instance if backend is not None else Instance.new
    instance = build(
        r1cs.num_constraints, r1cs.num_variables, r1cs.num_inputs, r1cs.A, r1cs.B, r1cs.C
    )

    failing = instance.unsatisfied_rows(r1cs.witness, r1cs.inputs)
    if failing:
        logger.warning(
            "witness does not satisfy %d of %d constraints (first: %s)",
            len(failing),
            r1cs.num_constraints,
            failing[:5],
        )

    return R1CSArtifact(
        num_constraints=r1cs.num_constraints,
        num_variables=r1cs.num_variables,
        num_inputs=r1cs.num_inputs,
        num_non_zero_entries=r1cs.num_non_zero_entries,
        instance=instance,
        witness=r1cs.witness,
        inputs=r1cs.inputs,
        variable_names=r1cs.variable_names,
        satisfied=not failing,
    )


def prove(artifact: R1CSArtifact, backend: ProvingBackend, label: bytes) -> ProofHandoff:
    """Hand a satisfied artifact to the backend.

    An unsatisfied witness is never passed on: for a true statement it means
    the builder itself is broken, for a false one there is nothing to prove.
    """
    if not artifact.satisfied:
        raise SelfCheckFailed(
            "refusing to prove: witness does not satisfy its own instance"
        )
    commitment, proving_params = backend.setup(artifact.instance)
    proof = backend.prove(
        artifact.instance, proving_params, artifact.witness, artifact.inputs, label
    )
    return ProofHandoff(commitment, proving_params, proof, label)


def verify(
    handoff: ProofHandoff, backend: ProvingBackend, inputs: Sequence[bytes] = ()
) -> bool:
    return backend.verify(
        handoff.proof, handoff.commitment, inputs, handoff.label, handoff.proving_params
    )
