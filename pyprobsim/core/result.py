"""
Generic result container for all pyprobsim computations.

The Result class provides a standardized envelope that all domain-specific
results use. This enables shared tooling for timing, warnings and
reproducibility while allowing domains to define their own payloads.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (seed, backend options, counts)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) so outcome sequences are never mutated
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for probability computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (outcomes, summary statistics, ...)
        info: Structured metadata (seed, chunking, counts)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=ReplicationParams(outcomes=t, ...),
        ...     info={'seed': 42, 'B': 10000},
        ...     timing={'total_seconds': 0.4, 'replicates': 0.39},
        ...     backend_name='cpu_replicate'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
