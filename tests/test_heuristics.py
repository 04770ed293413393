import pytest

from farc3.core.errors import ProblemFormatError
from farc3.heuristics import (
    DEFAULT_HEURISTIC,
    HEURISTIC_REGISTRY,
    FirstUnassigned,
    MaxDegree,
    MinimumRemainingValues,
    make_heuristic,
)
from farc3.systems.mines import MineConstraint


def test_registry_contents():
    assert HEURISTIC_REGISTRY == {
        "mrv": MinimumRemainingValues,
        "first": FirstUnassigned,
        "degree": MaxDegree,
    }
    assert DEFAULT_HEURISTIC is MinimumRemainingValues


def test_mrv_prefers_small_domains():
    domains = {"b": frozenset({0, 1}), "a": frozenset({0, 1, 2}), "c": frozenset({2, 1})}
    assert MinimumRemainingValues().select(domains, []) == ("b", [0, 1])


def test_mrv_breaks_ties_by_variable():
    domains = {"b": frozenset({0, 1}), "a": frozenset({1, 0})}
    assert MinimumRemainingValues().select(domains, []) == ("a", [0, 1])


def test_first_ignores_domain_size():
    domains = {"b": frozenset({0}), "a": frozenset({0, 1, 2})}
    assert FirstUnassigned().select(domains, []) == ("a", [0, 1, 2])


def test_degree_prefers_most_constrained():
    domains = {"a": frozenset({False, True}), "b": frozenset({False, True})}
    constraints = [MineConstraint(["a", "b"], 1), MineConstraint(["b"], 0)]
    assert MaxDegree().select(domains, constraints) == ("b", [False, True])


def test_make_heuristic():
    assert isinstance(make_heuristic(), MinimumRemainingValues)
    assert isinstance(make_heuristic("first"), FirstUnassigned)
    assert isinstance(make_heuristic(MaxDegree), MaxDegree)
    instance = FirstUnassigned()
    assert make_heuristic(instance) is instance
    with pytest.raises(ProblemFormatError):
        make_heuristic("random")
