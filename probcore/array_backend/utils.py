# array_backend/utils.py
"""
Utility functions for array canonicalization used by probcore.

Evaluators in probcore accept either a single number or an array-like of
evaluation points. The convention is:

- the input is converted once with `_as_float_array`, which also records
  whether the caller passed a scalar;
- the computation always runs on an ndarray;
- `_restore_scalar` hands back a Python float when the input was a scalar,
  and the ndarray (same shape as the input) otherwise.

Functions that return arrays accept `copy: bool = True`. When `copy=True`
the returned array is guaranteed to be a different object from the input.
"""

from __future__ import annotations

import numpy as np
from typing import Any, Tuple

from ..custom_types import Array, ArrayLike


def _as_array(x: Any) -> Array:
    try:
        return np.asarray(x)
    except Exception as e:
        raise TypeError(
            f"Could not convert input to array.\n"
            f"Input type: {type(x).__name__}\n"
            f"Input value: {repr(x)}\n"
            f"Original error: {e}"
        ) from e


def _is_numpy_scalar(x: Any) -> bool:
    """Return true if object is a numpy generic or Python scalar"""
    return np.isscalar(x) or isinstance(x, np.generic)


def _ensure_real_scalar(x: Any) -> float:
    """
    Return a Python float for inputs that contain a single real value.

    Accepts Python scalars, numpy scalar types and arrays holding exactly
    one element.

    Raises:
      TypeError if the input is not numeric.
      ValueError if input contains more than one element or is complex.
    """
    if isinstance(x, (str, bytes)):
        raise TypeError(f"_ensure_real_scalar: expected a real number, got {type(x).__name__}")

    arr = _as_array(x)
    if arr.size != 1:
        raise ValueError(f"_ensure_real_scalar: input must contain exactly one element; got size={arr.size}, shape={arr.shape}")
    if np.iscomplexobj(arr):
        raise ValueError(f"_ensure_real_scalar: input is complex-valued: {x!r}")
    if not (np.issubdtype(arr.dtype, np.number) or arr.dtype == np.bool_):
        raise TypeError(f"_ensure_real_scalar: expected a real number, got dtype {arr.dtype}")
    return float(arr.reshape(()).item())


def _as_float_array(x: ArrayLike) -> Tuple[Array, bool]:
    """
    Convert evaluation points to a float ndarray.

    Returns:
        (arr, is_scalar) where `arr` is a float64 array (0-d for scalars) and
        `is_scalar` records whether the caller passed a single number.

    Raises:
        ValueError if the input is complex-valued.
    """
    is_scalar = _is_numpy_scalar(x) or np.ndim(x) == 0
    arr = _as_array(x)
    if np.iscomplexobj(arr):
        raise ValueError("_as_float_array: input is complex-valued.")
    return arr.astype(np.float64), is_scalar


def _restore_scalar(out: Array, is_scalar: bool) -> float | Array:
    """Return a Python float for scalar inputs, the array otherwise."""
    if is_scalar:
        return float(np.asarray(out).reshape(()))
    return out


def _ensure_vector(x: ArrayLike, *, length: int | None = None, copy: bool = True) -> Array:
    """
    Ensure input is returned as a 1-D vector of shape (n,).

    Accepts:
      - 1D arrays -> (n,)
      - 2D arrays shaped (n,1) or (1,n) -> raveled
      - 0D scalar -> treated as length-1 vector (1,)

    Raises:
      ValueError for incompatible shapes (ndim > 2 or 2D with both dims >1)
    """
    arr = _as_array(x)

    if arr.ndim == 0:
        out = arr.reshape((1,))
    elif arr.ndim == 1:
        out = arr
    elif arr.ndim == 2:
        num_rows, num_cols = arr.shape
        if num_rows == 1 or num_cols == 1:
            out = np.ravel(arr)
        else:
            raise ValueError(f"_ensure_vector: 2D input has shape {arr.shape}, which is not a vector (expected (n,1) or (1,n)).")
    else:
        raise ValueError(f"_ensure_vector: input has too many dimensions (ndim={arr.ndim}).")

    if length is not None and out.size != length:
        raise ValueError(f"_ensure_vector: required length {length}. Got {out.size}.")

    return out.copy() if copy else out


def _ensure_matrix(x: ArrayLike, *, num_rows: int | None = None, num_cols: int | None = None,
                   copy: bool = True) -> Array:
    """ Ensure input is a 2D matrix

    - Scalar inputs (0D) become arrays of shape (1, 1)
    - 1D inputs become column matrices (n, 1)
    - 2D inputs are passed through as is
    - Other shapes raise an error
    """
    arr = _as_array(x)

    if arr.ndim == 2:
        out = arr
    elif arr.ndim == 1:
        out = arr.reshape(-1, 1)
    elif arr.ndim == 0:
        out = arr.reshape(1, 1)
    else:
        raise ValueError(f"_ensure_matrix: Input cannot be converted to a 2D matrix. Shape {arr.shape}")

    if num_rows is not None and out.shape[0] != num_rows:
        raise ValueError(f"_ensure_matrix: Required {num_rows} rows. Got {out.shape[0]}.")

    if num_cols is not None and out.shape[1] != num_cols:
        raise ValueError(f"_ensure_matrix: Required {num_cols} columns. Got {out.shape[1]}.")

    return out.copy() if copy else out
