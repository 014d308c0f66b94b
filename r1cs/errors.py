class R1CSError(Exception):
    """Base class for constraint-system construction failures."""


class WitnessIncomplete(R1CSError):
    """The witness does not cover exactly the set of variables."""


class DuplicateWitnessAssignment(R1CSError):
    """A variable was given a witness value twice."""


class EmptySet(R1CSError, ValueError):
    """Set membership was requested against an empty set."""


class MalformedInstance(R1CSError):
    """Dimensions or indices of an instance are inconsistent."""


class EmptyRange(R1CSError, ValueError):
    """Range bounds were given with the lower bound above the upper bound."""


class RangeOverflow(R1CSError, ValueError):
    """A value is too large for the configured decomposition width."""


class BuilderFinalized(R1CSError):
    """The builder session was already closed by ``finalize``."""


class SelfCheckFailed(R1CSError):
    """The witness does not satisfy the instance it was built with."""
