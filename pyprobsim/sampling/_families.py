"""
Registry of parametric families for sample_parametric().

Each family maps validated parameters to a frozen scipy.stats distribution.
Sampling is by inverse-CDF transform of RandomSource uniforms, so the
family never touches a generator of its own.

Parameter names follow R's r*() functions (rnorm(mean, sd),
rgamma(shape, rate), rbinom(size, prob), ...). R's `lambda` for the
Poisson is spelled `rate`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

import numpy as np
from scipy import stats

from pyprobsim.core.exceptions import InvalidArgument, UnsupportedDistribution


@dataclass(frozen=True)
class Family:
    """
    One parametric family.

    Attributes:
        name: Registry key
        defaults: Parameter name -> default value, None when required
        check: Raises InvalidArgument on an inadmissible parameter set
        build: Parameters -> frozen scipy.stats distribution
        discrete: Whether draws are integer-valued
    """
    name: str
    defaults: dict[str, float | None]
    check: Callable[[dict[str, float]], None]
    build: Callable[[dict[str, float]], Any]
    discrete: bool = False


def _positive(params: dict[str, float], *names: str) -> None:
    for name in names:
        if not params[name] > 0:
            raise InvalidArgument(f"{name}: must be > 0, got {params[name]}")


def _unit_interval(params: dict[str, float], name: str, *, open_left: bool = False) -> None:
    value = params[name]
    lower_ok = value > 0 if open_left else value >= 0
    if not (lower_ok and value <= 1):
        bound = "(0, 1]" if open_left else "[0, 1]"
        raise InvalidArgument(f"{name}: must be in {bound}, got {value}")


def _check_uniform(p: dict[str, float]) -> None:
    if not p['low'] < p['high']:
        raise InvalidArgument(
            f"uniform: low must be < high, got low={p['low']}, high={p['high']}"
        )


def _check_binomial(p: dict[str, float]) -> None:
    size = p['size']
    if size < 0 or size != int(size):
        raise InvalidArgument(f"size: must be a non-negative integer, got {size}")
    _unit_interval(p, 'prob')


_FAMILIES: dict[str, Family] = {
    f.name: f for f in (
        Family(
            'normal', {'mean': 0.0, 'sd': 1.0},
            lambda p: _positive(p, 'sd'),
            lambda p: stats.norm(loc=p['mean'], scale=p['sd']),
        ),
        Family(
            'exponential', {'rate': 1.0},
            lambda p: _positive(p, 'rate'),
            lambda p: stats.expon(scale=1.0 / p['rate']),
        ),
        Family(
            'gamma', {'shape': None, 'rate': 1.0},
            lambda p: _positive(p, 'shape', 'rate'),
            lambda p: stats.gamma(a=p['shape'], scale=1.0 / p['rate']),
        ),
        Family(
            'uniform', {'low': 0.0, 'high': 1.0},
            _check_uniform,
            lambda p: stats.uniform(loc=p['low'], scale=p['high'] - p['low']),
        ),
        Family(
            'beta', {'a': None, 'b': None},
            lambda p: _positive(p, 'a', 'b'),
            lambda p: stats.beta(p['a'], p['b']),
        ),
        Family(
            'lognormal', {'meanlog': 0.0, 'sdlog': 1.0},
            lambda p: _positive(p, 'sdlog'),
            lambda p: stats.lognorm(s=p['sdlog'], scale=np.exp(p['meanlog'])),
        ),
        Family(
            't', {'df': None},
            lambda p: _positive(p, 'df'),
            lambda p: stats.t(p['df']),
        ),
        Family(
            'chisq', {'df': None},
            lambda p: _positive(p, 'df'),
            lambda p: stats.chi2(p['df']),
        ),
        Family(
            'binomial', {'size': None, 'prob': None},
            _check_binomial,
            lambda p: stats.binom(int(p['size']), p['prob']),
            discrete=True,
        ),
        Family(
            'poisson', {'rate': None},
            lambda p: _positive(p, 'rate'),
            lambda p: stats.poisson(p['rate']),
            discrete=True,
        ),
        # Failures before the first success, as R's rgeom counts them
        Family(
            'geometric', {'prob': None},
            lambda p: _unit_interval(p, 'prob', open_left=True),
            lambda p: stats.geom(p['prob'], loc=-1),
            discrete=True,
        ),
        Family(
            'bernoulli', {'prob': None},
            lambda p: _unit_interval(p, 'prob'),
            lambda p: stats.bernoulli(p['prob']),
            discrete=True,
        ),
    )
}


def supported_families() -> tuple[str, ...]:
    """Names of every registered family, sorted."""
    return tuple(sorted(_FAMILIES))


def get_family(name: str) -> Family:
    """
    Look up a family by name (case-insensitive).

    Raises:
        UnsupportedDistribution: If the family is not registered
    """
    key = name.lower() if isinstance(name, str) else name
    if key not in _FAMILIES:
        supported = supported_families()
        raise UnsupportedDistribution(
            f"unsupported distribution {name!r}; supported: {', '.join(supported)}",
            family=str(name),
            supported=supported,
        )
    return _FAMILIES[key]


def resolve_params(family: Family, params: Mapping[str, Any]) -> dict[str, float]:
    """
    Merge user parameters with the family defaults and validate them.

    Raises:
        InvalidArgument: Unknown or missing parameter, non-numeric value,
            or a value outside the family's admissible range
    """
    unknown = set(params) - set(family.defaults)
    if unknown:
        raise InvalidArgument(
            f"{family.name}: unknown parameter(s) {sorted(unknown)}; "
            f"expected {sorted(family.defaults)}"
        )

    resolved: dict[str, float] = {}
    for name, default in family.defaults.items():
        value = params.get(name, default)
        if value is None:
            raise InvalidArgument(f"{family.name}: missing required parameter {name!r}")
        if isinstance(value, bool):
            raise InvalidArgument(f"{name}: expected a number, got bool {value!r}")
        try:
            value = float(value)
        except (TypeError, ValueError) as e:
            raise InvalidArgument(f"{name}: expected a number, got {value!r}") from e
        if not np.isfinite(value):
            raise InvalidArgument(f"{name}: must be finite, got {value}")
        resolved[name] = value

    family.check(resolved)
    return resolved
