"""probcore: special functions, random sources and continuous distributions."""
import logging

from .exceptions import (
    ProbcoreError,
    InvalidParameterError,
    DomainError,
    UnsupportedOperationError,
)
from .config import Settings, load_settings, configure_logging
from .random import (
    RandomSource,
    default_source,
    set_default_source,
    using_source,
)
from .distributions import Beta, BetaRegime, ContinuousDistribution, sample_gamma
from . import special

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "ProbcoreError",
    "InvalidParameterError",
    "DomainError",
    "UnsupportedOperationError",
    "Settings",
    "load_settings",
    "configure_logging",
    "RandomSource",
    "default_source",
    "set_default_source",
    "using_source",
    "Beta",
    "BetaRegime",
    "ContinuousDistribution",
    "sample_gamma",
    "special",
]
