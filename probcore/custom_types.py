# custom_types.py
"""
Type aliases shared across probcore.

Conventions:
- evaluation points and matrix data come in as `ArrayLike`
- computed arrays go out as `Array`
- evaluators that mirror their input (float for a scalar, ndarray for an
  array) return `ScalarOrArray`
- raw numpy generators accepted in place of a `RandomSource` are `PRNG`
"""
from __future__ import annotations
from typing import TypeAlias, Union

from numpy.random import Generator as NumpyRNG

from numpy.typing import (
    NDArray as NumpyArray,
    ArrayLike as NumpyArrayLike
)

Array = NumpyArray
ArrayLike: TypeAlias = NumpyArrayLike
PRNG: TypeAlias = NumpyRNG
ScalarOrArray: TypeAlias = Union[float, NumpyArray]
