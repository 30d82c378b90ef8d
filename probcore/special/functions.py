# special/functions.py
"""
Special functions used by the distributions.

All functions are pure and vectorized: scalar arguments give a Python float,
array-like arguments give an ndarray with the broadcast shape. Numerical
evaluation is delegated to :mod:`scipy.special`; this module owns the domain
checks so that an argument outside a function's domain raises
:class:`~probcore.exceptions.DomainError` instead of quietly returning NaN.
"""
from __future__ import annotations

import numpy as np
from scipy import special as sps

from ..array_backend.utils import _as_float_array, _restore_scalar
from ..custom_types import ArrayLike, ScalarOrArray
from ..exceptions import DomainError

__all__ = [
    "gamma",
    "gamma_ln",
    "beta",
    "beta_ln",
    "beta_regularized",
    "digamma",
]


def _reject(function: str, arr: np.ndarray, bad: np.ndarray, requirement: str) -> None:
    """Raise DomainError reporting the first offending value of `arr`."""
    if np.any(bad):
        offending = float(np.broadcast_to(arr, bad.shape)[bad].flat[0])
        raise DomainError(function, f"{requirement}; got {offending!r}")


def _is_pole(arr: np.ndarray) -> np.ndarray:
    """Non-positive integers and -inf, where Gamma and digamma have poles."""
    with np.errstate(invalid="ignore"):
        return (arr <= 0.0) & (arr == np.floor(arr))


def _broadcast(*args: ArrayLike) -> tuple[list[np.ndarray], bool]:
    converted = [_as_float_array(a) for a in args]
    arrays = np.broadcast_arrays(*(arr for arr, _ in converted))
    return list(arrays), all(is_scalar for _, is_scalar in converted)


def gamma(x: ArrayLike) -> ScalarOrArray:
    """Gamma function.

    Defined for every real x except the non-positive integers; ``gamma(inf)``
    is ``inf``. Overflows to ``inf`` above x ~ 171.6, use :func:`gamma_ln` for
    large arguments.
    """
    arr, is_scalar = _as_float_array(x)
    _reject("gamma", arr, np.isnan(arr), "argument must not be NaN")
    _reject("gamma", arr, _is_pole(arr), "argument must not be a non-positive integer")
    return _restore_scalar(sps.gamma(arr), is_scalar)


def gamma_ln(x: ArrayLike) -> ScalarOrArray:
    """Natural logarithm of the Gamma function for x > 0."""
    arr, is_scalar = _as_float_array(x)
    _reject("gamma_ln", arr, np.isnan(arr), "argument must not be NaN")
    _reject("gamma_ln", arr, arr <= 0.0, "argument must be positive")
    return _restore_scalar(sps.gammaln(arr), is_scalar)


def beta_ln(a: ArrayLike, b: ArrayLike) -> ScalarOrArray:
    """Logarithm of the Euler Beta function.

    ``beta_ln(a, b) = gamma_ln(a) + gamma_ln(b) - gamma_ln(a + b)`` for finite
    a, b > 0, evaluated without forming the Gamma values.
    """
    (a_arr, b_arr), is_scalar = _broadcast(a, b)
    for name, arr in (("a", a_arr), ("b", b_arr)):
        _reject("beta_ln", arr, ~np.isfinite(arr), f"{name} must be finite")
        _reject("beta_ln", arr, arr <= 0.0, f"{name} must be positive")
    return _restore_scalar(sps.betaln(a_arr, b_arr), is_scalar)


def beta(a: ArrayLike, b: ArrayLike) -> ScalarOrArray:
    """Euler Beta function B(a, b) for finite a, b > 0."""
    (a_arr, b_arr), is_scalar = _broadcast(a, b)
    out = np.exp(np.asarray(beta_ln(a_arr, b_arr)))
    return _restore_scalar(out, is_scalar)


def beta_regularized(a: ArrayLike, b: ArrayLike, x: ArrayLike) -> ScalarOrArray:
    """Regularized incomplete Beta function I_x(a, b).

    This is the CDF of Beta(a, b) at x. Requires finite a, b > 0 and
    0 <= x <= 1. scipy evaluates it with a continued-fraction expansion
    (Cephes ``incbet`` / Boost ``ibeta``), accurate to roughly 1e-14
    relative error in double precision.
    """
    (a_arr, b_arr, x_arr), is_scalar = _broadcast(a, b, x)
    for name, arr in (("a", a_arr), ("b", b_arr)):
        _reject("beta_regularized", arr, ~np.isfinite(arr), f"{name} must be finite")
        _reject("beta_regularized", arr, arr <= 0.0, f"{name} must be positive")
    _reject("beta_regularized", x_arr, np.isnan(x_arr), "x must not be NaN")
    _reject("beta_regularized", x_arr, (x_arr < 0.0) | (x_arr > 1.0), "x must lie in [0, 1]")
    return _restore_scalar(sps.betainc(a_arr, b_arr, x_arr), is_scalar)


def digamma(x: ArrayLike) -> ScalarOrArray:
    """Digamma function psi(x) = d/dx ln Gamma(x).

    Defined for every real x except the non-positive integers;
    ``digamma(inf)`` is ``inf``.
    """
    arr, is_scalar = _as_float_array(x)
    _reject("digamma", arr, np.isnan(arr), "argument must not be NaN")
    _reject("digamma", arr, _is_pole(arr), "argument must not be a non-positive integer")
    return _restore_scalar(sps.digamma(arr), is_scalar)
