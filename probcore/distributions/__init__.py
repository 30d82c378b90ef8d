from .distribution import ContinuousDistribution
from .beta import Beta, BetaRegime, classify
from .gamma import sample_gamma, sample_gamma_unchecked
from . import beta

__all__ = [
    "ContinuousDistribution",
    "Beta",
    "BetaRegime",
    "classify",
    "sample_gamma",
    "sample_gamma_unchecked",
    "beta",
]
