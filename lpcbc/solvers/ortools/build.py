from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from ortools.linear_solver import pywraplp

from lpcbc.domain.model import Comparison, Domain, Model, Optimization, Variable
from lpcbc.domain.normalize import normalize_model


@dataclass
class OrToolsBuild:
    solver: pywraplp.Solver
    model: Model  # normalized copy of the input
    # Owned by this build; one solver variable per model variable.
    variables: Dict[Variable, pywraplp.Variable]
    constraints: List[pywraplp.Constraint]


def backend_for(model: Model) -> str:
    if all(v.domain == Domain.REAL for v in model.variables):
        return "GLOP"  # Continuous LP
    return "SCIP"


def build_solver(model: Model) -> OrToolsBuild:
    # SetCoefficient overwrites, so every variable must appear once per row.
    model = normalize_model(model)

    backend = backend_for(model)
    s = pywraplp.Solver.CreateSolver(backend)
    if s is None:
        raise RuntimeError(f"Failed to create OR-Tools {backend} solver.")

    inf = s.infinity()

    variables: Dict[Variable, pywraplp.Variable] = {}
    for i, v in enumerate(model.variables):
        lb = -inf if v.minimum is None else v.minimum
        ub = inf if v.maximum is None else v.maximum
        if v.domain == Domain.REAL:
            variables[v] = s.NumVar(lb, ub, f"v[{i}]")
        else:
            variables[v] = s.IntVar(lb, ub, f"v[{i}]")

    constraints: List[pywraplp.Constraint] = []
    for i, (c, _) in enumerate(model.constraints):
        rhs = c.constant - c.function.constant
        if c.comparison == Comparison.LTE:
            ct = s.Constraint(-inf, rhs, f"c[{i}]")
        elif c.comparison == Comparison.GTE:
            ct = s.Constraint(rhs, inf, f"c[{i}]")
        else:
            ct = s.Constraint(rhs, rhs, f"c[{i}]")
        for term in c.function.terms:
            ct.SetCoefficient(variables[term.variable], term.factor)
        constraints.append(ct)

    objective = s.Objective()
    if model.objective is not None:
        for term in model.objective.function.terms:
            objective.SetCoefficient(variables[term.variable], term.factor)
        objective.SetOffset(model.objective.function.constant)
    if model.optimization == Optimization.MAXIMIZE:
        objective.SetMaximization()
    else:
        objective.SetMinimization()

    return OrToolsBuild(solver=s, model=model, variables=variables, constraints=constraints)
