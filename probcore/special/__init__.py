from .functions import (
    gamma,
    gamma_ln,
    beta,
    beta_ln,
    beta_regularized,
    digamma,
)

__all__ = [
    "gamma",
    "gamma_ln",
    "beta",
    "beta_ln",
    "beta_regularized",
    "digamma",
]
