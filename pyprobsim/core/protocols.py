"""
Core protocols for pyprobsim.

These define structural interfaces that domain-specific implementations must
satisfy. We use Protocol (structural typing) rather than ABC (nominal
typing) so that any plain function can act as a Trial.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Type-safe: use generics to preserve type information through pipelines
"""

from typing import Protocol, TypeVar, Any, TYPE_CHECKING, runtime_checkable

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from pyprobsim.core.result import Result

# Type variables for generic payloads
P = TypeVar('P', covariant=True)  # Parameter payload type
D = TypeVar('D', contravariant=True)  # Design type


@runtime_checkable
class Trial(Protocol):
    """
    A pure function from one Sample to one Outcome.

    The Replicator is written once against this contract and never looks
    at what a specific trial computes. Outcomes are numeric or boolean
    scalars.

    Examples:
        sum of a ±1 roulette encoding:      lambda s: s.sum()
        any duplicate birthday:              lambda s: len(np.unique(s)) < len(s)
        tallest of a sampled group >= 7ft:   lambda s: s.max() >= 84
    """

    def __call__(self, sample: NDArray[Any]) -> float | bool | np.number:
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend knows how to take a domain-specific Design and produce
    a Result wrapping a domain-specific payload.

    Backends are stateless: all configuration is passed via the Design
    or at construction time. This makes them easy to test and swap.
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{strategy}_{algorithm}'
        Examples: 'cpu_replicate', 'chunked_replicate', 'cpu_empirical'
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the computation.

        Raises:
            ValidationError: If design is invalid for this backend
        """
        ...
