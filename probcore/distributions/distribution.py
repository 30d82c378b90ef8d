# distributions/distribution.py
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Iterator

from ..custom_types import Array, ArrayLike, ScalarOrArray
from ..exceptions import UnsupportedOperationError
from ..random.source import RandomSource, as_random_source

__all__ = [
    "ContinuousDistribution",
]

# -------------------------- Abstract Classes ----------------------------


class ContinuousDistribution(ABC):
    """
    Abstract base class for univariate continuous distributions.

    Evaluators (`density`, `log_density`, `cdf`) accept a scalar, returning a
    float, or an array-like, returning an ndarray of the same shape.

    The random source is resolved lazily: an instance built without one
    draws from `default_source()` at sampling time, so it follows
    `set_default_source` and `using_source`.
    """

    def __init__(self, random_source: RandomSource | None = None) -> None:
        self._random_source = None if random_source is None else as_random_source(random_source)

    # ---- Random source ----

    @property
    def random_source(self) -> RandomSource:
        """The source used by `sample` / `samples`."""
        return as_random_source(self._random_source)

    @random_source.setter
    def random_source(self, source: RandomSource | None) -> None:
        # None falls back to the shared default
        self._random_source = None if source is None else as_random_source(source)

    # ---- Summary statistics ----

    @property
    @abstractmethod
    def mean(self) -> float:
        ...

    @property
    @abstractmethod
    def variance(self) -> float:
        ...

    @property
    def std_dev(self) -> float:
        return math.sqrt(self.variance)

    @property
    @abstractmethod
    def entropy(self) -> float:
        ...

    @property
    @abstractmethod
    def skewness(self) -> float:
        ...

    @property
    @abstractmethod
    def mode(self) -> float:
        ...

    @property
    def median(self) -> float:
        """Subclasses without a closed-form median leave this unimplemented."""
        raise UnsupportedOperationError(f"{type(self).__name__} has no closed-form median.")

    @property
    @abstractmethod
    def minimum(self) -> float:
        ...

    @property
    @abstractmethod
    def maximum(self) -> float:
        ...

    # ---- Evaluators ----

    @abstractmethod
    def density(self, x: ArrayLike) -> ScalarOrArray:
        """
        Compute p(x) under this distribution.
        """
        ...

    @abstractmethod
    def log_density(self, x: ArrayLike) -> ScalarOrArray:
        """
        Compute log p(x) under this distribution.
        """
        ...

    @abstractmethod
    def cdf(self, x: ArrayLike) -> ScalarOrArray:
        """
        Compute P(X <= x) under this distribution.
        """
        ...

    # ---- Sampling ----

    @abstractmethod
    def sample(self, n_samples: int | None = None) -> float | Array:
        """
        Draw one variate (`n_samples=None`) or an array of shape (n_samples,).
        """
        ...

    def samples(self) -> Iterator[float]:
        """
        Unbounded iterator of variates. Each element advances the random
        source; bound it externally, e.g. with `itertools.islice`.
        """
        while True:
            yield self.sample()
