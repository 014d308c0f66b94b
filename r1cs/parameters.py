from dataclasses import dataclass
from enum import Enum

from .constants import FIELD_ELEMENT_SIZE

# The sign of a decomposed value is read from the top byte of its encoding,
# so every bit of the pattern has to live below it.
MAX_DECOMPOSITION_BITS = 8 * (FIELD_ELEMENT_SIZE - 1)


class DecompositionStyle(Enum):
    LINEAR_COMBINATION = "linear_combination"
    CHAINED = "chained"


@dataclass(frozen=True)
class Parameters:
    # Bound on the bit length of the range bounds and the secret.
    input_bits: int
    decomposition_style: DecompositionStyle
    check_magnitude: bool

    def __post_init__(self):
        if self.input_bits < 1:
            raise ValueError("input_bits must be positive")
        if self.decomposition_bits > MAX_DECOMPOSITION_BITS:
            raise ValueError(
                f"input_bits={self.input_bits} needs {self.decomposition_bits} "
                f"decomposition bits, at most {MAX_DECOMPOSITION_BITS} are supported"
            )

    @property
    def decomposition_bits(self) -> int:
        # (a - x) * (x - b) of two n-bit gaps needs 2n bits plus sign and slack.
        return 2 * self.input_bits + 2


DEFAULT_PARAMETERS = Parameters(
    input_bits=100,
    decomposition_style=DecompositionStyle.LINEAR_COMBINATION,
    check_magnitude=True,
)
