"""
EmpiricalDesign: data wrapper for empirical estimators.

Wraps one numeric vector (a raw population or a replicated outcome
sequence) and validates it once, eagerly, before any statistic is
computed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyprobsim.core.validation import (
    check_1d,
    check_array,
    check_finite,
    check_nonempty,
)


@dataclass(frozen=True, eq=False)
class EmpiricalDesign:
    """
    Design for empirical estimators.

    Holds a read-only float64 copy of the data and a sorted copy.
    Immutable after construction.

    Construction:
        EmpiricalDesign.from_array(x)
        EmpiricalDesign.from_array(heights, name='heights')
    """
    _data: NDArray[np.floating[Any]]
    _sorted: NDArray[np.floating[Any]]
    _name: str

    @classmethod
    def from_array(cls, data: ArrayLike, *, name: str = 'x') -> EmpiricalDesign:
        """
        Build EmpiricalDesign from array-like data.

        Accepts lists, numpy arrays, or anything with a .values attribute
        (a pandas Series). Booleans become 0.0/1.0.

        Raises
        ------
        EmptyInput
            Length-0 input.
        InvalidArgument
            Non-numeric, non-finite or non-1D input.
        """
        if hasattr(data, 'values') and not isinstance(data, np.ndarray):
            data = data.values
        arr = check_array(data, name)
        check_1d(arr, name)
        check_nonempty(arr, name)
        check_finite(arr, name)

        arr = arr.copy()
        arr.setflags(write=False)
        ordered = np.sort(arr)
        ordered.setflags(write=False)
        return cls(_data=arr, _sorted=ordered, _name=name)

    @property
    def data(self) -> NDArray[np.floating[Any]]:
        """Data vector in original order."""
        return self._data

    @property
    def sorted(self) -> NDArray[np.floating[Any]]:
        """Data vector in ascending order."""
        return self._sorted

    @property
    def n(self) -> int:
        """Number of observations."""
        return int(self._data.shape[0])

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_constant(self) -> bool:
        return bool(self._sorted[0] == self._sorted[-1])

    def __repr__(self) -> str:
        return f"EmpiricalDesign(name={self._name!r}, n={self.n})"
