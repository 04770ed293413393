"""Constraint kind registry and the bundled constraint families."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Type

from ..core.constraint import Constraint
from ..core.errors import ProblemFormatError

CONSTRAINT_REGISTRY: Dict[str, Type[Constraint]] = {}


def register_constraint(cls: Type[Constraint]) -> Type[Constraint]:
    CONSTRAINT_REGISTRY[cls.kind] = cls
    return cls


def constraint_from_config(data: Mapping[str, Any]) -> Constraint:
    """Build a constraint from a ``{"kind": ..., ...}`` mapping."""
    if not isinstance(data, Mapping) or "kind" not in data:
        raise ProblemFormatError(f"constraint entry needs a 'kind': {data!r}")
    try:
        cls = CONSTRAINT_REGISTRY[data["kind"]]
    except (KeyError, TypeError):
        known = ", ".join(sorted(CONSTRAINT_REGISTRY))
        raise ProblemFormatError(f"unknown constraint kind {data['kind']!r} (known: {known})") from None
    try:
        return cls.from_config(data)
    except KeyError as exc:
        raise ProblemFormatError(f"{data['kind']} constraint is missing {exc.args[0]!r}") from exc
    except (TypeError, ValueError) as exc:
        raise ProblemFormatError(f"bad {data['kind']} constraint {dict(data)!r}: {exc}") from exc


from .generic import DiscreteConstraint, TableConstraint  # noqa: E402
from .mines import MineAssignment, MineConstraint  # noqa: E402
