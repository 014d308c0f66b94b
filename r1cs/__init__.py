"""Range and set-membership predicates compiled to R1CS.

Usage:
    from r1cs import produce_range_r1cs, produce_set_membership_r1cs

    artifact = produce_range_r1cs(x=4, a=2, b=5)
    assert artifact.satisfied

    artifact = produce_set_membership_r1cs(3, [1323, 3, 0])
    handoff = prove(artifact, backend, b"set_membership")
"""

from .artifact import ProofHandoff, R1CSArtifact, finalize, prove, verify
from .builder import ONE_VARIABLE, FinalizedR1CS, R1CSBuilder
from .decomposition import (
    ChainedTwosComplementDecomposition,
    TwosComplementDecomposition,
    twos_complement_bits,
)
from .errors import (
    BuilderFinalized,
    DuplicateWitnessAssignment,
    EmptyRange,
    EmptySet,
    MalformedInstance,
    R1CSError,
    RangeOverflow,
    SelfCheckFailed,
    WitnessIncomplete,
)
from .field import GF, decode, encode
from .instance import Instance, ProvingBackend
from .parameters import DEFAULT_PARAMETERS, DecompositionStyle, Parameters
from .range_proof import RangeGadget, produce_range_r1cs
from .set_membership import SetMembershipGadget, produce_set_membership_r1cs
from .variables import VariableTable, WitnessTable

__version__ = "0.1.0"
__all__ = [
    # Field
    "GF",
    "encode",
    "decode",
    # Builder
    "ONE_VARIABLE",
    "R1CSBuilder",
    "FinalizedR1CS",
    "VariableTable",
    "WitnessTable",
    # Gadgets
    "TwosComplementDecomposition",
    "ChainedTwosComplementDecomposition",
    "twos_complement_bits",
    "RangeGadget",
    "SetMembershipGadget",
    "produce_range_r1cs",
    "produce_set_membership_r1cs",
    # Configuration
    "Parameters",
    "DecompositionStyle",
    "DEFAULT_PARAMETERS",
    # Backend handoff
    "Instance",
    "ProvingBackend",
    "R1CSArtifact",
    "ProofHandoff",
    "finalize",
    "prove",
    "verify",
    # Errors
    "R1CSError",
    "WitnessIncomplete",
    "DuplicateWitnessAssignment",
    "EmptyRange",
    "EmptySet",
    "MalformedInstance",
    "RangeOverflow",
    "BuilderFinalized",
    "SelfCheckFailed",
]
