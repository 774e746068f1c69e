from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from lpcbc.domain.model import Model, Variable
from lpcbc.domain.schema import SolveStatus, SolverResult

logger = logging.getLogger(__name__)

COLUMN_PREFIX = "X"

_STATUS_MAP: Dict[str, SolveStatus] = {
    "Optimal": SolveStatus.OPTIMAL,
    "Infeasible": SolveStatus.INFEASIBLE,
    # "Integer infeasible"
    "Integer": SolveStatus.INFEASIBLE,
    "Unbounded": SolveStatus.UNBOUNDED,
    "Stopped": SolveStatus.UNSOLVED,
}


def read_result(path: str, model: Model) -> Optional[SolverResult]:
    """
    Read a CBC solution file written for `model`.

    Returns None if the file cannot be read or decoded. Lines that do not
    parse as a variable binding are skipped.
    """
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, ValueError) as exc:
        logger.error("Error reading solution file %s: %s", path, exc)
        return None

    return parse_solution(text, model)


def parse_solution(text: str, model: Model) -> SolverResult:
    lines = text.split("\n")
    status = parse_status(lines[0])

    variables = model.variables
    values: Dict[str, float] = {}
    # The last line is the terminator (empty after the final newline).
    for line in lines[1:-1]:
        binding = _parse_binding(line, variables)
        if binding is not None:
            name, value = binding
            values[name] = value

    return SolverResult(status=status, variables=values)


def parse_status(line: str) -> SolveStatus:
    tokens = line.split()
    if not tokens:
        return SolveStatus.UNDEFINED
    return _STATUS_MAP.get(tokens[0], SolveStatus.UNDEFINED)


def _parse_binding(line: str, variables: List[Variable]) -> Optional[Tuple[str, float]]:
    # [**] <index> <column> <value> [<reduced cost>]
    tokens = line.split()
    if tokens and tokens[0] == "**":
        tokens = tokens[1:]
    if len(tokens) < 3 or not tokens[1].startswith(COLUMN_PREFIX):
        return None

    try:
        # Format check only; the column name locates the variable.
        int(tokens[0])
        position = int(tokens[1][len(COLUMN_PREFIX):])
        value = float(tokens[2])
    except ValueError:
        return None

    # Columns are named after the variable's position in the model.
    if not 0 <= position < len(variables):
        return None
    return variables[position].name, value
