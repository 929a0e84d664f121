"""
Seedable pseudo-random source.

Every sampler in pyprobsim draws randomness exclusively through the two
primitives of RandomSource, draw_uniform() and draw_index(), so a fixed
seed determines every downstream result bit for bit.

The source is an explicit handle passed to each sampling call. For
convenience configure(seed) installs a process default that is used only
when a caller omits `source=`; it is never reseeded implicitly.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyprobsim.core.exceptions import InvalidArgument
from pyprobsim.core.validation import check_integer


class RandomSource:
    """
    Reproducible random stream over numpy's PCG64 bit generator.

    Attributes:
        seed: Integer seed the stream was last (re)initialised with
        spawn_key: Chunk path for streams derived via spawn(), () for a master
        n_spawned: Number of child streams handed out since the last (re)seed

    Usage:
        source = RandomSource(2024)
        u = source.draw_uniform(size=3)
        i = source.draw_index(38)
        chunks = source.spawn(4)     # four fresh, deterministic sub-streams
    """

    def __init__(self, seed: int, *, spawn_key: tuple[int, ...] = ()):
        self._seed = check_integer(seed, 'seed')
        self._spawn_key = tuple(spawn_key)
        self._make_generator()

    def _make_generator(self) -> None:
        self._sequence = np.random.SeedSequence(self._seed, spawn_key=self._spawn_key)
        self._generator = np.random.Generator(np.random.PCG64(self._sequence))

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def spawn_key(self) -> tuple[int, ...]:
        return self._spawn_key

    @property
    def n_spawned(self) -> int:
        return self._sequence.n_children_spawned

    def reseed(self, value: int) -> None:
        """Reset internal state, including the spawn counter, from `value`."""
        self._seed = check_integer(value, 'seed')
        self._make_generator()

    def draw_uniform(self, size: int | None = None) -> float | NDArray[np.floating[Any]]:
        """
        Draw from the uniform distribution on [0, 1).

        Returns a Python float when size is None, else a float64 array.
        """
        if size is None:
            return float(self._generator.random())
        size = check_integer(size, 'size')
        return self._generator.random(size)

    def draw_index(
        self,
        n: int | ArrayLike,
        size: int | None = None,
    ) -> int | NDArray[np.int64]:
        """
        Draw integers uniformly from [0, n).

        `n` may be an array of per-draw upper bounds, in which case one
        index is drawn per bound and `size` must be omitted.

        Raises:
            InvalidArgument: If any bound is <= 0
        """
        bounds = np.asarray(n)
        if not np.issubdtype(bounds.dtype, np.integer):
            raise InvalidArgument(
                f"draw_index: n must be integral, got dtype {bounds.dtype}"
            )
        if bounds.size == 0:
            return np.empty(0, dtype=np.int64)
        if np.any(bounds <= 0):
            raise InvalidArgument(
                f"draw_index: n must be > 0, got {int(bounds.min())}"
            )

        if bounds.ndim == 0:
            if size is None:
                return int(self._generator.integers(0, int(bounds)))
            size = check_integer(size, 'size')
            return self._generator.integers(0, int(bounds), size=size)

        if size is not None:
            raise InvalidArgument(
                "draw_index: size must be omitted when n is an array of bounds"
            )
        return self._generator.integers(0, bounds)

    def spawn(self, n_children: int) -> list[RandomSource]:
        """
        Derive `n_children` independent streams for the chunks of a parallel run.

        Children come from SeedSequence.spawn(), so every call hands out
        streams no earlier call has used: two chunked runs on one source
        draw different numbers, yet a source seeded the same way and
        spawned in the same order replays them exactly. Plain draws on
        this source do not affect its children.
        """
        n_children = check_integer(n_children, 'n_children', minimum=1)
        return [
            RandomSource(self._seed, spawn_key=child.spawn_key)
            for child in self._sequence.spawn(n_children)
        ]

    def __repr__(self) -> str:
        if self._spawn_key:
            return f"RandomSource(seed={self._seed}, spawn_key={self._spawn_key})"
        return f"RandomSource(seed={self._seed})"


_default_source: RandomSource | None = None


def configure(seed: int) -> RandomSource:
    """
    Install the process-wide default RandomSource.

    Must be called before any sampling call that omits `source=`.
    Calling it again with the same seed restarts the default stream.
    """
    global _default_source
    _default_source = RandomSource(seed)
    return _default_source


def get_default_source() -> RandomSource:
    """
    Return the process-wide default source.

    Raises:
        InvalidArgument: If configure() has not been called
    """
    if _default_source is None:
        raise InvalidArgument(
            "no RandomSource configured: call pyprobsim.configure(seed) "
            "or pass source=RandomSource(seed)"
        )
    return _default_source


def resolve_source(
    source: RandomSource | None = None,
    seed: int | None = None,
) -> RandomSource:
    """
    Pick the stream a call should draw from.

    Precedence: explicit `source`, then a fresh source from `seed`, then
    the configured default. Passing both is ambiguous and rejected.
    """
    if source is not None and seed is not None:
        raise InvalidArgument("pass either source= or seed=, not both")
    if source is not None:
        if not isinstance(source, RandomSource):
            raise InvalidArgument(
                f"source: expected RandomSource, got {type(source).__name__}"
            )
        return source
    if seed is not None:
        return RandomSource(seed)
    return get_default_source()
