"""Uncertainty measures over a set of solutions."""

from __future__ import annotations

import math
from collections import Counter
from typing import Dict, Iterable

from .assignment import Assignment
from .model import Variable, ordered


def marginals(solutions: Iterable[Assignment]) -> Dict[Variable, Counter]:
    """Count how often each variable takes each value across ``solutions``."""
    counts: Dict[Variable, Counter] = {}
    for solution in solutions:
        for var, value in solution.items():
            counts.setdefault(var, Counter())[value] += 1
    return {var: counts[var] for var in ordered(counts)}


def probabilities(solutions: Iterable[Assignment], value=True) -> Dict[Variable, float]:
    """Fraction of solutions in which each variable takes ``value``.

    With mine assignments this is the chance that a tile holds a mine,
    assuming every solution is equally likely.
    """
    solutions = list(solutions)
    if not solutions:
        return {}
    return {
        var: counter[value] / len(solutions)
        for var, counter in marginals(solutions).items()
    }


def entropy(counts: Iterable[int]) -> float:
    """Shannon entropy in bits of a distribution given as raw counts."""
    counts = [c for c in counts if c]
    total = sum(counts)
    bits = 0.0
    for c in counts:
        bits += (c / total) * math.log2(total / c)
    return bits


def uncertainty(solutions: Iterable[Assignment]) -> Dict[Variable, float]:
    """Entropy of each variable's value across equally likely solutions.

    This is also the expected number of bits learned by observing the
    variable, since the observation splits the solutions by its value.
    """
    return {var: entropy(counter.values()) for var, counter in marginals(solutions).items()}


def best_probe(solutions: Iterable[Assignment]) -> Variable:
    """Variable whose value would split the solutions most evenly."""
    table = uncertainty(solutions)
    if not table:
        raise ValueError("no variables to probe")
    return max(table, key=table.__getitem__)
