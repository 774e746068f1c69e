from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, TextIO, Tuple

from lpcbc.domain.model import Comparison, Domain, Model, Optimization, Variable

logger = logging.getLogger(__name__)

# Row index used for the objective when collecting factors.
OBJECTIVE_ROW = -1

OBJECTIVE_NAME = "OBJ     "

_SENSE = {
    Optimization.MINIMIZE: "Minimize",
    Optimization.MAXIMIZE: "Maximize",
}

_ROW_TYPE = {
    Comparison.LTE: "L",
    Comparison.EQ: "E",
    Comparison.GTE: "G",
}

# Factor 1 shows up on most lines of typical models.
_ONE = "%.12e" % 1.0


def column_name(index: int) -> str:
    return "X%07d" % index


def row_name(index: int) -> str:
    return "C%07d" % index


def format_number(value: float) -> str:
    return _ONE if value == 1 else "%.12e" % value


def is_binary(variable: Variable) -> bool:
    """
    Integer variables bounded by (0, 1) behave like binaries for CBC, so they
    are written as such whatever their declared domain.
    """
    return variable.domain != Domain.REAL and (variable.minimum, variable.maximum) == (0, 1)


class LineBuffer:
    """Collects lines and writes them in batches."""

    def __init__(self, handle: TextIO, capacity: int = 500):
        self.handle = handle
        self.capacity = capacity
        self.lines: List[str] = []

    def append(self, line: str) -> None:
        self.lines.append(line)
        if len(self.lines) >= self.capacity:
            self.flush()

    def flush(self) -> None:
        if self.lines:
            self.handle.write("".join(self.lines))
            self.lines = []


def collect_factors(model: Model) -> Dict[Variable, List[Tuple[int, float]]]:
    """
    Non-zero factors per variable as (row, factor) pairs: constraint rows in
    order, then the objective row.
    """
    factors: Dict[Variable, List[Tuple[int, float]]] = defaultdict(list)

    for i, (constraint, _) in enumerate(model.constraints):
        for term in constraint.function.terms:
            if term.factor != 0:
                factors[term.variable].append((i, term.factor))

    if model.objective is not None:
        for term in model.objective.function.terms:
            if term.factor != 0:
                factors[term.variable].append((OBJECTIVE_ROW, term.factor))

    return factors


def write_model(model: Model, path: str) -> bool:
    """
    Write the model to `path` in the (CBC flavoured) MPS format.

    Variables and constraints get positional names (X0000000, C0000000, ...);
    the position of a variable in `model.variables` is its column number.
    Returns False if the file cannot be written.
    """
    try:
        with open(path, "w", encoding="utf-8") as handle:
            buffer = LineBuffer(handle)
            for line in mps_lines(model):
                buffer.append(line)
            buffer.flush()
    except OSError as exc:
        logger.error("Could not write MPS file %s: %s", path, exc)
        return False

    return True


def mps_lines(model: Model):
    variables = model.variables
    column_names = [column_name(i) for i in range(len(variables))]
    row_names = [row_name(i) for i in range(len(model.constraints))]

    yield f"*SENSE:{_SENSE[model.optimization]}\n"
    yield "NAME          MODEL\n"

    yield "ROWS\n"
    if model.objective is not None:
        yield " N  OBJ\n"
    for i, (constraint, _) in enumerate(model.constraints):
        yield f" {_ROW_TYPE[constraint.comparison]}  {row_names[i]}\n"

    factors = collect_factors(model)
    yield "COLUMNS\n"
    for v, variable in enumerate(variables):
        entries = factors.get(variable)
        if not entries:
            continue
        integral = variable.domain != Domain.REAL
        if integral:
            yield "    MARK      'MARKER'                 'INTORG'\n"
        for i, factor in entries:
            name = row_names[i] if i != OBJECTIVE_ROW else OBJECTIVE_NAME
            yield f"    {column_names[v]}  {name}   {format_number(factor)}\n"
        if integral:
            yield "    MARK      'MARKER'                 'INTEND'\n"

    yield "RHS\n"
    for i, (constraint, _) in enumerate(model.constraints):
        rhs = constraint.constant - constraint.function.constant
        yield f"    RHS       {row_names[i]}   {format_number(rhs)}\n"

    yield "BOUNDS\n"
    for v, variable in enumerate(variables):
        # Bounds only for columns written above.
        if is_binary(variable) and factors.get(variable):
            yield f" BV BND       {column_names[v]}\n"

    yield "ENDATA\n"
