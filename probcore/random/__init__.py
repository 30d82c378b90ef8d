from .source import (
    RandomSource,
    default_source,
    set_default_source,
    using_source,
    as_random_source,
)

__all__ = [
    "RandomSource",
    "default_source",
    "set_default_source",
    "using_source",
    "as_random_source",
]
