from __future__ import annotations

from typing import Dict

from ortools.linear_solver import pywraplp

from lpcbc.domain.schema import SolveStatus, SolverResult
from lpcbc.solvers.ortools.build import OrToolsBuild

# OR-Tools returns an int status code; this alias makes typing intent explicit.
_LpStatus = int


def map_status(status_code: _LpStatus) -> SolveStatus:
    # FEASIBLE means the solver stopped early with a usable solution; treat it
    # as optimal like the other feasible outcomes.
    status_map: Dict[_LpStatus, SolveStatus] = {
        pywraplp.Solver.OPTIMAL: SolveStatus.OPTIMAL,
        pywraplp.Solver.FEASIBLE: SolveStatus.OPTIMAL,
        pywraplp.Solver.INFEASIBLE: SolveStatus.INFEASIBLE,
        pywraplp.Solver.UNBOUNDED: SolveStatus.UNBOUNDED,
        pywraplp.Solver.NOT_SOLVED: SolveStatus.UNSOLVED,
    }
    return status_map.get(status_code, SolveStatus.UNDEFINED)


def extract_result(built: OrToolsBuild) -> SolverResult:
    status = map_status(built.solver.Solve())

    if status != SolveStatus.OPTIMAL:
        return SolverResult(status=status)

    values: Dict[str, float] = {
        v.name: var.solution_value() for v, var in built.variables.items()
    }
    return SolverResult(status=status, variables=values)
