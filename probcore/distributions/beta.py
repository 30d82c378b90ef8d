# distributions/beta.py
"""
Beta distribution on [0, 1].

The shapes a, b may be 0 or +inf, where the distribution collapses to a
point mass (or, for a = b = 0, to a fair Bernoulli on {0, 1}). Every statistic
first classifies (a, b) into a :class:`BetaRegime` and then looks the formula
up in a table keyed by that regime, so all accessors agree on the degenerate
cases:

    regime          mean     mode           skew  entropy  density on [0, 1]     CDF on [0, 1)
    BOTH_INFINITE   0.5      0.5            0     0        inf at 0.5, else 0    0 below 0.5, else 1
    A_INFINITE      1        1              -2    0        inf at 1, else 0      0
    B_INFINITE      0        0              2     0        inf at 0, else 0      1
    BOTH_ZERO       0.5      0.5            0     ln 2     inf at 0 and 1        0.5
    A_ZERO          0        0              2     0        inf at 0, else 0      1
    B_ZERO          1        1              -2    0        inf at 1, else 0      0
    UNIFORM         0.5      0.5            *     *        1                     x
    GENERIC         a/(a+b)  (a-1)/(a+b-2)  *     *        x^(a-1)(1-x)^(b-1)    I_x(a, b)
                                                           / B(a, b)

    * closed-form expressions, see `_generic_skewness` and `_generic_entropy`

Outside [0, 1] the density is 0, the log-density is -inf and the CDF is 0
below and 1 from x = 1 on.

Besides the :class:`Beta` class, the module exposes stateless equivalents
(:func:`pdf`, :func:`log_pdf`, :func:`cdf`, :func:`sample`, :func:`samples`)
that validate ``(a, b)`` on every call.
"""
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Callable, Iterator, Mapping

import numpy as np
from scipy.special import expit

from ..array_backend.utils import _as_float_array, _ensure_real_scalar, _restore_scalar
from ..custom_types import Array, ArrayLike, ScalarOrArray
from ..exceptions import InvalidParameterError
from ..random.source import RandomSource, as_random_source
from ..special import beta_ln, beta_regularized, digamma
from .distribution import ContinuousDistribution
from .gamma import sample_log_gamma_unchecked

__all__ = [
    "Beta",
    "BetaRegime",
    "classify",
    "pdf",
    "log_pdf",
    "cdf",
    "sample",
    "samples",
]

logger = logging.getLogger(__name__)


class BetaRegime(Enum):
    BOTH_INFINITE = "both_infinite"
    A_INFINITE = "a_infinite"
    B_INFINITE = "b_infinite"
    BOTH_ZERO = "both_zero"
    A_ZERO = "a_zero"
    B_ZERO = "b_zero"
    UNIFORM = "uniform"
    GENERIC = "generic"


def classify(a: float, b: float) -> BetaRegime:
    """Map valid shapes (a, b) to their regime. Infinite shapes take precedence over zeros."""
    a_inf, b_inf = math.isinf(a), math.isinf(b)
    if a_inf and b_inf:
        return BetaRegime.BOTH_INFINITE
    if a_inf:
        return BetaRegime.A_INFINITE
    if b_inf:
        return BetaRegime.B_INFINITE
    if a == 0.0 and b == 0.0:
        return BetaRegime.BOTH_ZERO
    if a == 0.0:
        return BetaRegime.A_ZERO
    if b == 0.0:
        return BetaRegime.B_ZERO
    if a == 1.0 and b == 1.0:
        return BetaRegime.UNIFORM
    return BetaRegime.GENERIC


def _validate_parameters(a: float, b: float) -> tuple[float, float]:
    a = _ensure_real_scalar(a)
    b = _ensure_real_scalar(b)
    if math.isnan(a) or math.isnan(b) or a < 0.0 or b < 0.0:
        raise InvalidParameterError(
            f"Invalid Beta parameters a={a!r}, b={b!r}: both must be >= 0 and not NaN."
        )
    return a, b


# ---- Per-regime formulas -----------------------------------------------------
#
# Statistic tables map a regime to a callable (a, b) -> float. Evaluator
# tables map a regime to a callable (a, b, x) -> ndarray, where x is already
# restricted to [0, 1].

Statistic = Callable[[float, float], float]
Evaluator = Callable[[float, float, Array], Array]


def _constant(value: float) -> Statistic:
    return lambda a, b: value


def _generic_mean(a: float, b: float) -> float:
    # a / (a + b) without forming a + b, which overflows near the float maximum
    return 1.0 / (1.0 + b / a)


def _generic_mode(a: float, b: float) -> float:
    half_sum = 0.5 * a + 0.5 * b
    if half_sum == 1.0:
        # a + b == 2 with a != 1: the formula is 0/0-like, no single mode
        return math.nan
    return 0.5 * (a - 1.0) / (half_sum - 1.0)


def _generic_skewness(a: float, b: float) -> float:
    # 2 (b - a) sqrt(a + b + 1) / ((a + b + 2) sqrt(ab)), rearranged so that
    # neither ab nor a + b is formed
    root_a, root_b = np.sqrt(np.float64(a)), np.sqrt(np.float64(b))
    half_sum = np.float64(0.5 * a + 0.5 * b)
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        spread = root_b / root_a - root_a / root_b
        return float(math.sqrt(2.0) * spread * np.sqrt(half_sum + 0.5) / (half_sum + 1.0))


def _generic_entropy(a: float, b: float) -> float:
    return (
        beta_ln(a, b)
        - (a - 1.0) * digamma(a)
        - (b - 1.0) * digamma(b)
        + (a + b - 2.0) * digamma(a + b)
    )


_MEAN: Mapping[BetaRegime, Statistic] = {
    BetaRegime.BOTH_INFINITE: _constant(0.5),
    BetaRegime.A_INFINITE: _constant(1.0),
    BetaRegime.B_INFINITE: _constant(0.0),
    BetaRegime.BOTH_ZERO: _constant(0.5),
    BetaRegime.A_ZERO: _constant(0.0),
    BetaRegime.B_ZERO: _constant(1.0),
    BetaRegime.UNIFORM: _generic_mean,
    BetaRegime.GENERIC: _generic_mean,
}

_MODE: Mapping[BetaRegime, Statistic] = {
    BetaRegime.BOTH_INFINITE: _constant(0.5),
    BetaRegime.A_INFINITE: _constant(1.0),
    BetaRegime.B_INFINITE: _constant(0.0),
    BetaRegime.BOTH_ZERO: _constant(0.5),
    BetaRegime.A_ZERO: _constant(0.0),
    BetaRegime.B_ZERO: _constant(1.0),
    BetaRegime.UNIFORM: _constant(0.5),
    BetaRegime.GENERIC: _generic_mode,
}

_SKEWNESS: Mapping[BetaRegime, Statistic] = {
    BetaRegime.BOTH_INFINITE: _constant(0.0),
    BetaRegime.A_INFINITE: _constant(-2.0),
    BetaRegime.B_INFINITE: _constant(2.0),
    BetaRegime.BOTH_ZERO: _constant(0.0),
    BetaRegime.A_ZERO: _constant(2.0),
    BetaRegime.B_ZERO: _constant(-2.0),
    BetaRegime.UNIFORM: _generic_skewness,
    BetaRegime.GENERIC: _generic_skewness,
}

_ENTROPY: Mapping[BetaRegime, Statistic] = {
    BetaRegime.BOTH_INFINITE: _constant(0.0),
    BetaRegime.A_INFINITE: _constant(0.0),
    BetaRegime.B_INFINITE: _constant(0.0),
    BetaRegime.BOTH_ZERO: _constant(-math.log(0.5)),
    BetaRegime.A_ZERO: _constant(0.0),
    BetaRegime.B_ZERO: _constant(0.0),
    BetaRegime.UNIFORM: _generic_entropy,
    BetaRegime.GENERIC: _generic_entropy,
}


def _spike(*points: float) -> Evaluator:
    """Density of a point mass: +inf at the atoms, 0 elsewhere."""
    return lambda a, b, x: np.where(np.isin(x, points), np.inf, 0.0)


def _log_spike(*points: float) -> Evaluator:
    return lambda a, b, x: np.where(np.isin(x, points), np.inf, -np.inf)


def _endpoint_log_term(shape: float, t: Array) -> Array:
    """(shape - 1) * log(t), taking its limit at t = 0."""
    if shape == 1.0:
        return np.zeros_like(t)
    limit = np.inf if shape < 1.0 else -np.inf
    with np.errstate(divide="ignore"):
        return np.where(t == 0.0, limit, (shape - 1.0) * np.log(t))


def _generic_log_density(a: float, b: float, x: Array) -> Array:
    return -beta_ln(a, b) + _endpoint_log_term(a, x) + _endpoint_log_term(b, 1.0 - x)


def _generic_density(a: float, b: float, x: Array) -> Array:
    # exp of the log form; Gamma(a + b) alone overflows for a + b > 171
    return np.exp(_generic_log_density(a, b, x))


_DENSITY: Mapping[BetaRegime, Evaluator] = {
    BetaRegime.BOTH_INFINITE: _spike(0.5),
    BetaRegime.A_INFINITE: _spike(1.0),
    BetaRegime.B_INFINITE: _spike(0.0),
    BetaRegime.BOTH_ZERO: _spike(0.0, 1.0),
    BetaRegime.A_ZERO: _spike(0.0),
    BetaRegime.B_ZERO: _spike(1.0),
    BetaRegime.UNIFORM: lambda a, b, x: np.ones_like(x),
    BetaRegime.GENERIC: _generic_density,
}

_LOG_DENSITY: Mapping[BetaRegime, Evaluator] = {
    BetaRegime.BOTH_INFINITE: _log_spike(0.5),
    BetaRegime.A_INFINITE: _log_spike(1.0),
    BetaRegime.B_INFINITE: _log_spike(0.0),
    BetaRegime.BOTH_ZERO: _log_spike(0.0, 1.0),
    BetaRegime.A_ZERO: _log_spike(0.0),
    BetaRegime.B_ZERO: _log_spike(1.0),
    BetaRegime.UNIFORM: lambda a, b, x: np.zeros_like(x),
    BetaRegime.GENERIC: _generic_log_density,
}

# CDF tables only see x in [0, 1); x >= 1 saturates to 1 beforehand.
_CDF: Mapping[BetaRegime, Evaluator] = {
    BetaRegime.BOTH_INFINITE: lambda a, b, x: np.where(x < 0.5, 0.0, 1.0),
    BetaRegime.A_INFINITE: lambda a, b, x: np.zeros_like(x),
    BetaRegime.B_INFINITE: lambda a, b, x: np.ones_like(x),
    BetaRegime.BOTH_ZERO: lambda a, b, x: np.full_like(x, 0.5),
    BetaRegime.A_ZERO: lambda a, b, x: np.ones_like(x),
    BetaRegime.B_ZERO: lambda a, b, x: np.zeros_like(x),
    BetaRegime.UNIFORM: lambda a, b, x: np.array(x, dtype=float),
    BetaRegime.GENERIC: lambda a, b, x: np.asarray(beta_regularized(a, b, x), dtype=float),
}


def _evaluate(table: Mapping[BetaRegime, Evaluator], a: float, b: float, x: ArrayLike,
              inside: Callable[[Array], Array], below: float, above: float) -> ScalarOrArray:
    """Evaluate a per-regime formula where `inside(x)` holds and fill the rest.

    Points left of the support get `below`, points right of it get `above`,
    NaN stays NaN.
    """
    arr, is_scalar = _as_float_array(x)
    flat = np.atleast_1d(arr).ravel()

    out = np.where(np.isnan(flat), np.nan, np.where(flat < 0.0, below, above))
    mask = inside(flat)
    if np.any(mask):
        out[mask] = table[classify(a, b)](a, b, flat[mask])

    return _restore_scalar(out.reshape(arr.shape), is_scalar)


def _unit_interval(x: Array) -> Array:
    return (x >= 0.0) & (x <= 1.0)


def _half_open_unit_interval(x: Array) -> Array:
    return (x >= 0.0) & (x < 1.0)


def _pdf_unchecked(a: float, b: float, x: ArrayLike) -> ScalarOrArray:
    return _evaluate(_DENSITY, a, b, x, _unit_interval, 0.0, 0.0)


def _log_pdf_unchecked(a: float, b: float, x: ArrayLike) -> ScalarOrArray:
    return _evaluate(_LOG_DENSITY, a, b, x, _unit_interval, -np.inf, -np.inf)


def _cdf_unchecked(a: float, b: float, x: ArrayLike) -> ScalarOrArray:
    return _evaluate(_CDF, a, b, x, _half_open_unit_interval, 0.0, 1.0)


def _sample_unchecked(random_source: RandomSource, a: float, b: float,
                      n_samples: int | None) -> float | Array:
    """X / (X + Y) with X ~ Gamma(a, 1), Y ~ Gamma(b, 1).

    Evaluated as expit(log X - log Y) so that small shapes, whose Gamma
    draws underflow to 0, keep P(X > Y) = a / (a + b).
    """
    size = 1 if n_samples is None else n_samples

    if classify(a, b) is BetaRegime.BOTH_ZERO:
        ratio = np.where(np.asarray(random_source.uniform(size)) < 0.5, 0.0, 1.0)
    else:
        log_x = np.asarray(sample_log_gamma_unchecked(random_source, a, size), dtype=float)
        log_y = np.asarray(sample_log_gamma_unchecked(random_source, b, size), dtype=float)
        with np.errstate(invalid="ignore"):
            ratio = expit(log_x - log_y)
        # inf - inf: both draws infinite, the limit is 1/2
        ratio[np.isnan(ratio)] = 0.5

    if n_samples is None:
        return float(ratio[0])
    return ratio


def _check_n_samples(n_samples: int | None) -> int | None:
    if n_samples is None:
        return None
    if isinstance(n_samples, bool) or not isinstance(n_samples, (int, np.integer)):
        raise TypeError(f"n_samples must be an integer, got {type(n_samples).__name__}")
    if n_samples < 0:
        raise ValueError(f"n_samples must be non-negative, got {n_samples}")
    return int(n_samples)


def _sample_stream(random_source: RandomSource, a: float, b: float) -> Iterator[float]:
    while True:
        yield _sample_unchecked(random_source, a, b, None)


# ---- Stateless entry points --------------------------------------------------

def pdf(a: float, b: float, x: ArrayLike) -> ScalarOrArray:
    """Density of Beta(a, b) at x.

    Raises:
        InvalidParameterError: If a or b is negative or NaN.
    """
    a, b = _validate_parameters(a, b)
    return _pdf_unchecked(a, b, x)


def log_pdf(a: float, b: float, x: ArrayLike) -> ScalarOrArray:
    """Log-density of Beta(a, b) at x."""
    a, b = _validate_parameters(a, b)
    return _log_pdf_unchecked(a, b, x)


def cdf(a: float, b: float, x: ArrayLike) -> ScalarOrArray:
    """P(X <= x) for X ~ Beta(a, b)."""
    a, b = _validate_parameters(a, b)
    return _cdf_unchecked(a, b, x)


def sample(a: float, b: float, random_source: RandomSource | None = None,
           n_samples: int | None = None) -> float | Array:
    """Draw from Beta(a, b); one float, or shape (n_samples,) when given."""
    a, b = _validate_parameters(a, b)
    n_samples = _check_n_samples(n_samples)
    return _sample_unchecked(as_random_source(random_source), a, b, n_samples)


def samples(a: float, b: float, random_source: RandomSource | None = None) -> Iterator[float]:
    """Unbounded iterator of Beta(a, b) draws.

    Parameters are checked here, before the first element is requested.
    """
    a, b = _validate_parameters(a, b)
    return _sample_stream(as_random_source(random_source), a, b)


# ---- Distribution class ------------------------------------------------------

class Beta(ContinuousDistribution):
    """Beta(a, b) distribution on the unit interval [0, 1].

    Shapes may be 0 or +inf, see the module docstring for the behaviour of
    each degenerate regime.

    Shape policy:
        - ``density`` / ``log_density`` / ``cdf``: float for a scalar input,
          ndarray of the input's shape otherwise
        - ``sample()`` -> float, ``sample(n)`` -> (n,)

    Attributes:
        _a: Alpha (shape) parameter, >= 0.
        _b: Beta (shape) parameter, >= 0.
        _random_source: Explicit random source, or None to follow the default.
    """

    def __init__(self, a: float, b: float, *, random_source: RandomSource | None = None) -> None:
        """Initializes a Beta distribution.

        Args:
            a: a >= 0, the first shape parameter.
            b: b >= 0, the second shape parameter.
            random_source: Random source (or numpy Generator / integer seed).
                If ``None``, the shared default source is used.

        Raises:
            InvalidParameterError: If ``a`` or ``b`` is negative or NaN.
        """
        self._a, self._b = _validate_parameters(a, b)
        super().__init__(random_source)

    def __repr__(self) -> str:
        return f"Beta(a={self._a}, b={self._b})"

    # ------------------------ Parameters ------------------------

    def set_parameters(self, a: float, b: float) -> None:
        """Validate and assign both shapes together."""
        a, b = _validate_parameters(a, b)
        self._a, self._b = a, b
        logger.debug("Beta parameters set to a=%s, b=%s", a, b)

    @property
    def a(self) -> float:
        return self._a

    @a.setter
    def a(self, value: float) -> None:
        self.set_parameters(value, self._b)

    @property
    def b(self) -> float:
        return self._b

    @b.setter
    def b(self, value: float) -> None:
        self.set_parameters(self._a, value)

    @property
    def parameters(self) -> tuple[float, float]:
        return self._a, self._b

    @property
    def regime(self) -> BetaRegime:
        return classify(self._a, self._b)

    # ------------------------ Summary statistics ------------------------

    @property
    def mean(self) -> float:
        return _MEAN[self.regime](self._a, self._b)

    @property
    def variance(self) -> float:
        """ab / ((a+b)^2 (a+b+1)) in every regime.

        Indeterminate forms (e.g. a = b = 0) come out as NaN.
        """
        a, b = np.float64(self._a), np.float64(self._b)
        with np.errstate(invalid="ignore", divide="ignore"):
            return float((a * b) / ((a + b) * (a + b) * (a + b + 1.0)))

    @property
    def entropy(self) -> float:
        return float(_ENTROPY[self.regime](self._a, self._b))

    @property
    def skewness(self) -> float:
        return _SKEWNESS[self.regime](self._a, self._b)

    @property
    def mode(self) -> float:
        """Mode; 0.5 when the density has no unique maximum (a = b = 1)."""
        return _MODE[self.regime](self._a, self._b)

    @property
    def minimum(self) -> float:
        return 0.0

    @property
    def maximum(self) -> float:
        return 1.0

    # ------------------------ Evaluators ------------------------

    def density(self, x: ArrayLike) -> ScalarOrArray:
        return _pdf_unchecked(self._a, self._b, x)

    def log_density(self, x: ArrayLike) -> ScalarOrArray:
        return _log_pdf_unchecked(self._a, self._b, x)

    def cdf(self, x: ArrayLike) -> ScalarOrArray:
        return _cdf_unchecked(self._a, self._b, x)

    # ------------------------ Sampling ------------------------

    def sample(self, n_samples: int | None = None) -> float | Array:
        """Draws random samples from the Beta distribution.

        Args:
            n_samples: Number of samples. ``None`` draws a single float.

        Returns:
            One sample in [0, 1], or an array of shape (n_samples,).
        """
        n_samples = _check_n_samples(n_samples)
        return _sample_unchecked(self.random_source, self._a, self._b, n_samples)
