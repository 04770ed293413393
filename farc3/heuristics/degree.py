from __future__ import annotations

from collections import Counter
from typing import Mapping, Sequence

from . import Choice, Heuristic, register_heuristic
from ..core.constraint import Constraint
from ..core.model import Domain, Variable, order_key, ordered


@register_heuristic
class MaxDegree(Heuristic):
    """Smallest domain first, ties broken towards the most constrained variable.

    The degree of a variable is the number of constraints whose scope
    contains it.
    """
    name = "degree"

    def select(self, domains: Mapping[Variable, Domain], constraints: Sequence[Constraint]) -> Choice:
        degree: Counter = Counter()
        for constraint in constraints:
            degree.update(var for var in constraint.scope() if var in domains)
        var = min(domains, key=lambda v: (len(domains[v]), -degree[v], order_key(v)))
        return var, ordered(domains[var])
