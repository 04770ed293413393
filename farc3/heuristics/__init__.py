"""Heuristic registry and base class."""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence, Tuple, Type, Union

from ..core.constraint import Constraint
from ..core.errors import ProblemFormatError
from ..core.model import Domain, Value, Variable

Choice = Tuple[Variable, List[Value]]


class Heuristic:
    """Base branching policy.

    ``select`` receives the domains of the still undecided variables only
    and returns one of them together with the order its values are tried in.
    The returned list must be finite and non-empty.
    """
    name: str = "heuristic"

    def select(self, domains: Mapping[Variable, Domain], constraints: Sequence[Constraint]) -> Choice:
        raise NotImplementedError


HEURISTIC_REGISTRY: Dict[str, Type[Heuristic]] = {}


def register_heuristic(cls: Type[Heuristic]) -> Type[Heuristic]:
    HEURISTIC_REGISTRY[cls.name] = cls
    return cls


def make_heuristic(spec: Union[str, Type[Heuristic], Heuristic, None] = None) -> Heuristic:
    """Build a heuristic from a registry name, a class or an instance."""
    if spec is None:
        spec = MinimumRemainingValues.name
    if isinstance(spec, Heuristic):
        return spec
    if isinstance(spec, str):
        try:
            spec = HEURISTIC_REGISTRY[spec]
        except KeyError:
            known = ", ".join(sorted(HEURISTIC_REGISTRY))
            raise ProblemFormatError(f"unknown heuristic {spec!r} (known: {known})") from None
    return spec()


from .mrv import MinimumRemainingValues  # noqa: E402
from .first import FirstUnassigned  # noqa: E402
from .degree import MaxDegree  # noqa: E402

DEFAULT_HEURISTIC = MinimumRemainingValues
