# distributions/gamma.py
"""
Gamma variate generation.

Only the sampler is provided here; it is the building block for Beta
sampling. Draws come from :meth:`RandomSource.gamma` (numpy's Gamma
sampler). :func:`sample_log_gamma_unchecked` returns the logarithm of a
unit-scale draw instead, which stays finite for shapes so small that the
variate itself underflows to 0.
"""
from __future__ import annotations

import math

import numpy as np

from ..array_backend.utils import _ensure_real_scalar
from ..custom_types import Array
from ..exceptions import InvalidParameterError
from ..random.source import RandomSource, as_random_source

__all__ = [
    "sample_gamma",
    "sample_gamma_unchecked",
    "sample_log_gamma_unchecked",
]


def _validate(shape: float, scale: float) -> tuple[float, float]:
    shape = _ensure_real_scalar(shape)
    scale = _ensure_real_scalar(scale)
    if math.isnan(shape) or shape < 0.0:
        raise InvalidParameterError(f"Gamma shape must be >= 0 and not NaN, got {shape!r}")
    if math.isnan(scale) or not math.isfinite(scale) or scale <= 0.0:
        raise InvalidParameterError(f"Gamma scale must be positive and finite, got {scale!r}")
    return shape, scale


def _count(size: int | tuple[int, ...] | None) -> int:
    return 1 if size is None else int(np.prod(size))


def _reshape(out: Array, size: int | tuple[int, ...] | None) -> float | Array:
    if size is None:
        return float(out[0])
    return out.reshape(size)


def sample_gamma(
    random_source: RandomSource | None,
    shape: float,
    scale: float = 1.0,
    size: int | tuple[int, ...] | None = None,
) -> float | Array:
    """Draw Gamma(shape, scale) variates.

    Args:
        random_source: Source of randomness; ``None`` uses the default source.
        shape: Shape k >= 0. ``0`` gives the point mass at 0 and ``inf`` the
            point mass at infinity.
        scale: Scale theta > 0 (mean is ``shape * scale``).
        size: Output shape. ``None`` returns a single float.

    Raises:
        InvalidParameterError: If shape or scale is out of range.
    """
    shape, scale = _validate(shape, scale)
    return sample_gamma_unchecked(as_random_source(random_source), shape, scale, size)


def sample_gamma_unchecked(
    random_source: RandomSource,
    shape: float,
    scale: float = 1.0,
    size: int | tuple[int, ...] | None = None,
) -> float | Array:
    """Same as :func:`sample_gamma` without parameter validation."""
    n = _count(size)

    if shape == 0.0:
        out = np.zeros(n)
    elif math.isinf(shape):
        out = np.full(n, np.inf)
    else:
        out = np.asarray(random_source.gamma(shape, scale, n), dtype=float)
        return _reshape(out, size)

    return _reshape(out * scale, size)


def sample_log_gamma_unchecked(
    random_source: RandomSource,
    shape: float,
    size: int | tuple[int, ...] | None = None,
) -> float | Array:
    """log G for G ~ Gamma(shape, 1), without parameter validation.

    ``shape == 0`` gives -inf and ``shape == inf`` gives +inf. Below shape 1
    the draw is boosted from shape + 1 in log space,
    ``log G(shape + 1) + log(U) / shape``, so it does not underflow.
    """
    n = _count(size)

    if shape == 0.0:
        out = np.full(n, -np.inf)
    elif math.isinf(shape):
        out = np.full(n, np.inf)
    elif shape < 1.0:
        g = np.asarray(random_source.gamma(shape + 1.0, 1.0, n), dtype=float)
        u = np.asarray(random_source.uniform(n), dtype=float)
        with np.errstate(divide="ignore"):
            out = np.log(g) + np.log(u) / shape
    else:
        g = np.asarray(random_source.gamma(shape, 1.0, n), dtype=float)
        with np.errstate(divide="ignore"):
            out = np.log(g)

    return _reshape(out, size)
