from pathlib import Path

import pytest

from farc3.core.assignment import DiscreteAssignment
from farc3.core.errors import ProblemFormatError, UnknownVariableError
from farc3.core.model import Bound
from farc3.io.parser import load_problem, parse_problem
from farc3.systems.generic import DiscreteConstraint, TableConstraint
from farc3.systems.mines import MineAssignment, MineConstraint

PROBLEMS = Path(__file__).resolve().parent.parent / "problems"


def test_load_two_mines():
    problem = load_problem(PROBLEMS / "two_mines.yaml")
    assert problem.constraints == [MineConstraint([0, 1, 2], 2), MineConstraint([1, 2], 1)]
    assert problem.heuristic == "mrv"
    assert problem.limit is None
    assert set(problem.build_system().solve()) == {
        MineAssignment.new([1], [0, 2]),
        MineAssignment.new([2], [0, 1]),
    }


def test_load_seating():
    problem = load_problem(PROBLEMS / "seating.yaml")
    assert problem.domain == [1, 2, 3]
    assert problem.variables == {"alice": None, "bob": None, "carol": None}
    assert DiscreteConstraint(["alice"], 1, 0) in problem.constraints
    system = problem.build_system()
    solutions = set(system.solve_with_default(problem.heuristic))
    assert solutions == {
        DiscreteAssignment({"alice": 2, "bob": 1, "carol": 3}),
        DiscreteAssignment({"alice": 2, "bob": 3, "carol": 1}),
        DiscreteAssignment({"alice": 3, "bob": 2, "carol": 1}),
    }


def test_parse_variable_mapping_and_options():
    problem = parse_problem({
        "variables": {"x": [0, 1], "y": None},
        "domain": [5, 6],
        "constraints": [
            {"kind": "discrete", "variables": ["x", "y"], "value": 1, "count": 1, "bound": "at_most"},
            {"kind": "table", "variables": ["x", "y"], "allowed": [[0, 5], [1, 6]]},
        ],
        "options": {"limit": "3", "heuristic": "first"},
    })
    assert problem.constraints[0].bound is Bound.AT_MOST
    assert problem.constraints[1] == TableConstraint(("x", "y"), {(0, 5), (1, 6)})
    assert problem.limit == 3
    assert problem.build_system().domains() == {"x": {0, 1}, "y": {5, 6}}


def test_undeclared_variable_in_problem():
    problem = parse_problem({
        "variables": ["a"],
        "constraints": [{"kind": "mines", "tiles": ["a", "b"], "count": 1}],
    })
    with pytest.raises(UnknownVariableError):
        problem.build_system()


@pytest.mark.parametrize("data", [
    ["not", "a", "mapping"],
    {"constraints": [{"tiles": [0], "count": 1}]},
    {"constraints": [{"kind": "sudoku"}]},
    {"constraints": [{"kind": "mines", "tiles": [0]}]},
    {"constraints": [{"kind": "discrete", "variables": ["a"], "value": 1, "count": 1, "bound": "roughly"}]},
    {"variables": 3},
    {"options": [1, 2]},
    {"options": {"limit": -1}},
    {"options": {"limit": "many"}},
    {"constraints": [{"kind": "mines", "tiles": [0], "count": "abc"}]},
    {"constraints": [{"kind": "mines", "tiles": 5, "count": 1}]},
    {"constraints": [{"kind": ["mines"]}]},
    {"constraints": [{"kind": "table", "variables": ["a"], "allowed": [3]}]},
    {"domain": 5},
])
def test_malformed_problems(data):
    with pytest.raises(ProblemFormatError):
        parse_problem(data)


def test_malformed_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("constraints: [\n", encoding="utf-8")
    with pytest.raises(ProblemFormatError):
        load_problem(path)


def test_coordinate_tiles():
    problem = parse_problem({
        "variables": [[0, 0], [0, 1], [1, 0]],
        "constraints": [
            {"kind": "mines", "tiles": [[0, 0], [0, 1]], "count": 1},
            {"kind": "mines", "tiles": [[0, 1], [1, 0]], "count": 2},
            {"kind": "discrete", "variables": [[1, 0]], "value": True, "count": 1},
        ],
    })
    assert problem.constraints[0] == MineConstraint([(0, 0), (0, 1)], 1)
    assert problem.variables == {(0, 0): None, (0, 1): None, (1, 0): None}
    assert list(problem.build_system().solve()) == [
        DiscreteAssignment({(0, 0): False, (0, 1): True, (1, 0): True}),
    ]


def test_table_rows_with_coordinate_values():
    problem = parse_problem({
        "constraints": [{"kind": "table", "variables": [[0, 0]], "allowed": [[[1, 2]], [[3, 4]]]}],
    })
    assert problem.constraints[0] == TableConstraint(((0, 0),), {((1, 2),), ((3, 4),)})
