from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..core.constraint import Constraint
from ..core.errors import ProblemFormatError
from ..core.model import BOOLEAN_DOMAIN, hashable
from ..core.system import System
from ..systems import constraint_from_config


@dataclass
class Problem:
    constraints: List[Constraint]
    variables: Optional[Dict[Any, Optional[List[Any]]]] = None
    domain: List[Any] = field(default_factory=lambda: list(BOOLEAN_DOMAIN))
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def heuristic(self) -> str:
        return self.options.get("heuristic", "mrv")

    @property
    def limit(self) -> Optional[int]:
        limit = self.options.get("limit")
        return None if limit is None else int(limit)

    def build_system(self) -> System:
        variables = None
        if self.variables is not None:
            variables = {
                var: values if values is not None else self.domain
                for var, values in self.variables.items()
            }
        return System(self.constraints, variables=variables, domain=self.domain)


def parse_problem(data: Any) -> Problem:
    """Turn the mapping read from a problem file into a Problem."""
    if not isinstance(data, dict):
        raise ProblemFormatError("problem file must contain a mapping")

    constraints = [constraint_from_config(entry) for entry in data.get("constraints") or []]

    variables = data.get("variables")
    try:
        if variables is not None:
            if isinstance(variables, dict):
                variables = {
                    var: None if values is None else [hashable(value) for value in values]
                    for var, values in variables.items()
                }
            elif isinstance(variables, list):
                variables = {hashable(var): None for var in variables}
            else:
                raise ProblemFormatError("'variables' must be a list or a mapping")
        domain = [hashable(value) for value in data.get("domain", BOOLEAN_DOMAIN)]
    except TypeError as exc:
        raise ProblemFormatError(f"bad variables or domain: {exc}") from exc

    options = data.get("options") or {}
    if not isinstance(options, dict):
        raise ProblemFormatError("'options' must be a mapping")
    if options.get("limit") is not None:
        try:
            limit = int(options["limit"])
        except (TypeError, ValueError):
            raise ProblemFormatError(f"'limit' must be an integer, got {options['limit']!r}") from None
        if limit < 0:
            raise ProblemFormatError(f"'limit' must be non-negative, got {limit}")

    return Problem(constraints=constraints, variables=variables, domain=domain, options=options)


def load_problem(path: str | Path) -> Problem:
    """Load a YAML problem description into a Problem object."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ProblemFormatError(f"{path}: {exc}") from exc
    return parse_problem(data)
