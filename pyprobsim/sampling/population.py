"""
Population types: the urn and the parametric family.

Population is a closed tagged variant {FinitePopulation,
ParametricPopulation}; samplers dispatch on it with isinstance checks
instead of duck-typing loosely typed vectors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyprobsim.core.exceptions import InvalidArgument
from pyprobsim.core.validation import check_1d, check_integer
from pyprobsim.sampling._families import get_family, resolve_params


@dataclass(frozen=True, eq=False)
class FinitePopulation:
    """
    Finite ordered multiset of labeled items (the urn).

    Items may be numbers (a ±1 roulette encoding, heights) or string labels
    ("red", "blue"). The item array is read-only; sampling without
    replacement works on position indices and never mutates it.

    Construction:
        FinitePopulation.from_items(["red"] * 3 + ["blue"] * 2)
        FinitePopulation.from_counts({"red": 3, "blue": 2})
        FinitePopulation.from_items([-1, 1], weights=[9/19, 10/19])
    """
    _items: NDArray[Any]
    _weights: NDArray[np.floating[Any]] | None = field(default=None)

    @classmethod
    def from_items(cls, items: ArrayLike, *, weights: ArrayLike | None = None) -> FinitePopulation:
        """
        Build an urn from its items in order.

        Parameters
        ----------
        items : array-like
            1D sequence of numbers or labels, length >= 1.
        weights : array-like, optional
            Draw probabilities for with-replacement sampling, one per item.
            Must be non-negative and sum to 1 (within 1e-9).
        """
        arr = np.array(items)
        check_1d(arr, 'items')
        if arr.shape[0] < 1:
            raise InvalidArgument("items: population size must be >= 1, got 0")
        if arr.dtype == object:
            raise InvalidArgument(
                "items: converted to object dtype, indicating mixed item types"
            )
        arr.setflags(write=False)

        w = None
        if weights is not None:
            w = np.array(weights, dtype=np.float64)
            check_1d(w, 'weights')
            if w.shape[0] != arr.shape[0]:
                raise InvalidArgument(
                    f"weights: length {w.shape[0]} must match population size {arr.shape[0]}"
                )
            if not np.all(np.isfinite(w)) or np.any(w < 0):
                raise InvalidArgument("weights: must be finite and non-negative")
            total = float(w.sum())
            if abs(total - 1.0) > 1e-9:
                raise InvalidArgument(f"weights: must sum to 1, got {total}")
            w.setflags(write=False)

        return cls(_items=arr, _weights=w)

    @classmethod
    def from_counts(cls, counts: Mapping[Any, int]) -> FinitePopulation:
        """
        Build an urn holding `count` copies of each label, in mapping order.

        Example: roulette as 18 red, 18 black, 2 green pockets.
        """
        if not counts:
            raise InvalidArgument("counts: need at least one label")
        labels = []
        for label, count in counts.items():
            count = check_integer(count, f"counts[{label!r}]")
            labels.extend([label] * count)
        return cls.from_items(labels)

    @property
    def items(self) -> NDArray[Any]:
        """Read-only view of the items."""
        return self._items

    @property
    def weights(self) -> NDArray[np.floating[Any]] | None:
        """Per-item draw probabilities, or None for equally likely items."""
        return self._weights

    @property
    def size(self) -> int:
        return int(self._items.shape[0])

    @property
    def is_weighted(self) -> bool:
        return self._weights is not None

    @property
    def is_numeric(self) -> bool:
        return bool(np.issubdtype(self._items.dtype, np.number))

    def __len__(self) -> int:
        return self.size

    def count(self, label: Any) -> int:
        """Number of items equal to `label`."""
        return int(np.sum(self._items == label))

    def labels(self) -> NDArray[Any]:
        """Distinct labels, sorted."""
        return np.unique(self._items)

    def __repr__(self) -> str:
        weighted = ", weighted" if self.is_weighted else ""
        return f"FinitePopulation(size={self.size}, distinct={len(self.labels())}{weighted})"


@dataclass(frozen=True)
class ParametricPopulation:
    """
    A named distribution with numeric parameters.

    Construction:
        ParametricPopulation.of('normal', mean=69, sd=3)
        ParametricPopulation.of('gamma', shape=2, rate=0.5)

    Raises UnsupportedDistribution for an unknown family and
    InvalidArgument for inadmissible parameters.
    """
    family: str
    params: Mapping[str, float]

    @classmethod
    def of(cls, family: str, **params: float) -> ParametricPopulation:
        fam = get_family(family)
        resolved = resolve_params(fam, params)
        return cls(family=fam.name, params=resolved)

    def distribution(self):
        """Frozen scipy.stats distribution for this family."""
        return get_family(self.family).build(dict(self.params))

    @property
    def discrete(self) -> bool:
        return get_family(self.family).discrete

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v:g}" for k, v in self.params.items())
        return f"ParametricPopulation({self.family}: {args})"


Population = Union[FinitePopulation, ParametricPopulation]
