import math

import pytest

from farc3.core.ig import best_probe, entropy, marginals, probabilities, uncertainty
from farc3.core.system import System
from farc3.systems.mines import MineConstraint


def _solutions():
    return list(System([MineConstraint([0, 1, 2], 2), MineConstraint([1, 2], 1)]).solve())


def test_marginals():
    table = marginals(_solutions())
    assert list(table) == [0, 1, 2]
    assert table[0] == {True: 2}
    assert table[1] == {False: 1, True: 1}


def test_mine_probabilities():
    assert probabilities(_solutions()) == {0: 1.0, 1: 0.5, 2: 0.5}
    assert probabilities([]) == {}


def test_entropy():
    assert entropy([]) == 0.0
    assert entropy([3]) == 0.0
    assert entropy([1, 1]) == 1.0
    assert entropy([2, 0, 2]) == 1.0
    assert math.isclose(entropy([1, 1, 1, 1]), 2.0)


def test_uncertainty_per_variable():
    assert uncertainty(_solutions()) == {0: 0.0, 1: 1.0, 2: 1.0}
    assert uncertainty([]) == {}


def test_best_probe():
    assert best_probe(_solutions()) == 1
    with pytest.raises(ValueError):
        best_probe([])
