# random/source.py
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional

import numpy as np

from ..config import load_settings
from ..custom_types import Array, PRNG

__all__ = [
    "RandomSource",
    "default_source",
    "set_default_source",
    "using_source",
    "as_random_source",
]

logger = logging.getLogger(__name__)


class RandomSource:
    """Thread-safe source of uniform (and derived) random draws.

    Wraps a :class:`numpy.random.Generator`. Every draw goes through an
    internal lock, so one source may be shared by many distributions and
    threads. Two sources built with the same ``seed`` produce the same
    sequence of draws.

    Args:
        seed: Non-negative integer seed. ``None`` seeds from OS entropy.
        generator: An existing numpy Generator to wrap instead of seeding a
            new one. Mutually exclusive with ``seed``.
    """

    def __init__(self, seed: Optional[int] = None, *, generator: PRNG | None = None) -> None:
        if seed is not None and generator is not None:
            raise ValueError("Pass either `seed` or `generator`, not both.")

        if generator is not None:
            if not isinstance(generator, np.random.Generator):
                raise TypeError(f"generator must be a numpy.random.Generator, got {type(generator).__name__}")
            self._rng = generator
            self._seed = None
        else:
            if seed is not None:
                if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
                    raise TypeError(f"seed must be an integer, got {type(seed).__name__}")
                if seed < 0:
                    raise ValueError(f"seed must be non-negative, got {seed}")
                seed = int(seed)
            self._rng = np.random.default_rng(seed)
            self._seed = seed

        self._lock = threading.Lock()

    @property
    def seed(self) -> Optional[int]:
        """The seed this source was built with (None when entropy-seeded or wrapped)."""
        return self._seed

    def next_double(self) -> float:
        """Return one uniform draw in [0, 1)."""
        with self._lock:
            return float(self._rng.random())

    def uniform(self, size: int | tuple[int, ...] | None = None) -> float | Array:
        """Uniform draws in [0, 1); a float when ``size`` is None."""
        with self._lock:
            out = self._rng.random(size)
        return float(out) if size is None else out

    def standard_normal(self, size: int | tuple[int, ...] | None = None) -> float | Array:
        """Standard normal draws; a float when ``size`` is None."""
        with self._lock:
            out = self._rng.standard_normal(size)
        return float(out) if size is None else out

    def gamma(self, shape: float, scale: float = 1.0,
              size: int | tuple[int, ...] | None = None) -> float | Array:
        """Gamma(shape, scale) draws from numpy's sampler; a float when ``size`` is None."""
        with self._lock:
            out = self._rng.gamma(shape, scale, size)
        return float(out) if size is None else out

    def integers(self, low: int, high: int | None = None,
                 size: int | tuple[int, ...] | None = None) -> int | Array:
        """Integers in [low, high) (or [0, low) when ``high`` is None)."""
        with self._lock:
            out = self._rng.integers(low, high, size=size)
        return int(out) if size is None else out

    def spawn(self) -> RandomSource:
        """Return an independent child source, e.g. one per worker thread."""
        with self._lock:
            child = self._rng.spawn(1)[0]
        return RandomSource(generator=child)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(seed={self._seed})"


# ---- Process-wide default ----------------------------------------------------

_default_lock = threading.Lock()
_default_source: RandomSource | None = None
_context_source: ContextVar[RandomSource | None] = ContextVar("probcore_random_source", default=None)


def default_source() -> RandomSource:
    """Return the active default random source.

    A source installed with :func:`using_source` in the current context wins.
    Otherwise the shared process-wide source is returned; it is created on
    first use (seeded from ``PROBCORE_SEED`` when set) and reused until
    :func:`set_default_source` replaces it.
    """
    override = _context_source.get()
    if override is not None:
        return override

    global _default_source
    source = _default_source
    if source is None:
        with _default_lock:
            if _default_source is None:
                seed = load_settings().default_seed
                _default_source = RandomSource(seed)
                logger.debug("Created default random source (seed=%s)", seed)
            source = _default_source
    return source


def set_default_source(source: RandomSource | PRNG | int | None) -> None:
    """Replace the shared default source.

    ``None`` discards the current instance; the next :func:`default_source`
    call lazily creates a fresh one.
    """
    global _default_source
    new = None if source is None else _coerce_explicit(source)
    with _default_lock:
        _default_source = new
    logger.debug("Default random source replaced with %r", new)


@contextmanager
def using_source(source: RandomSource | PRNG | int) -> Iterator[RandomSource]:
    """Make ``source`` the default for the current context (thread / task).

    Example:
        >>> with using_source(RandomSource(7)):
        ...     Beta(2.0, 5.0).sample()
    """
    src = _coerce_explicit(source)
    token = _context_source.set(src)
    logger.debug("Entering context random source %r", src)
    try:
        yield src
    finally:
        _context_source.reset(token)


def as_random_source(obj: Any) -> RandomSource:
    """Coerce ``obj`` into a :class:`RandomSource`.

    ``None`` resolves to :func:`default_source`; a numpy Generator is wrapped;
    an integer is used as a seed.
    """
    if obj is None:
        return default_source()
    return _coerce_explicit(obj)


def _coerce_explicit(obj: Any) -> RandomSource:
    if isinstance(obj, RandomSource):
        return obj
    if isinstance(obj, np.random.Generator):
        return RandomSource(generator=obj)
    if isinstance(obj, (int, np.integer)) and not isinstance(obj, bool):
        return RandomSource(int(obj))
    raise TypeError(
        f"Cannot use object of type {type(obj).__name__} as a random source. "
        "Expected RandomSource, numpy.random.Generator or an integer seed."
    )
