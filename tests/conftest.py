import matplotlib

matplotlib.use("Agg")

import pytest

from game import Position


@pytest.fixture
def empty_position():
    return Position()
