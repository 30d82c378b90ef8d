import pytest
import numpy as np

from probcore.config import reload_settings
from probcore.distributions import Beta
from probcore.random import RandomSource, set_default_source


@pytest.fixture(autouse=True)
def _isolate_defaults():
    # every test starts from a fresh lazily created default source
    reload_settings()
    set_default_source(None)
    yield
    set_default_source(None)
    reload_settings()

@pytest.fixture
def source():
    return RandomSource(42)

@pytest.fixture
def beta25(source):
    return Beta(2.0, 5.0, random_source=source)

@pytest.fixture
def unit_grid():
    return np.linspace(0.0, 1.0, 21)

@pytest.fixture
def interior_grid():
    return np.linspace(0.01, 0.99, 50)
