"""
Exception hierarchy for pyprobsim.

All exceptions inherit from ProbSimError to allow catching any
library-specific error. Every condition here is recoverable: callers
(notebooks, exercises) deliberately test boundaries such as drawing six
balls from a five-ball urn, so nothing in the library terminates the
process.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages name the violated constraint with actual values
    - Never catch and re-raise with less information
"""


class ProbSimError(Exception):
    """Base exception for all pyprobsim errors."""
    pass


class ValidationError(ProbSimError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class InvalidArgument(ValidationError):
    """
    Malformed numeric input or non-positive count.

    Examples: B <= 0 replications, a negative sample size, a probability
    outside [0, 1], draw_index(0).
    """
    pass


class DimensionError(InvalidArgument):
    """
    Array dimensions are incorrect.

    Raised when a vector was expected but a matrix (or scalar) was given.
    """
    pass


class InsufficientPopulation(ValidationError):
    """
    Sampling without replacement requested more items than exist.

    Attributes:
        requested: Number of items requested (k)
        available: Population size (n)
    """

    def __init__(
        self,
        message: str,
        requested: int | None = None,
        available: int | None = None,
    ):
        super().__init__(message)
        self.requested = requested
        self.available = available


class EmptyInput(ValidationError):
    """
    A summary statistic was requested on an empty sequence.

    Attributes:
        name: Parameter name of the empty input
    """

    def __init__(self, message: str, name: str | None = None):
        super().__init__(message)
        self.name = name


class UnsupportedDistribution(ValidationError):
    """
    Unknown parametric family requested.

    Attributes:
        family: The requested family name
        supported: Names of the families that are available
    """

    def __init__(
        self,
        message: str,
        family: str | None = None,
        supported: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.family = family
        self.supported = supported
