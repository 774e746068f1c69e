from __future__ import annotations

from typing import Dict, List, Optional

from lpcbc.core.errors import DomainError
from lpcbc.domain.model import (
    LinearConstraint,
    LinearFunction,
    Model,
    Objective,
    Term,
    Variable,
)
from lpcbc.domain.schema import FunctionSpec, ModelSpec


def model_from_spec(spec: ModelSpec) -> Model:
    """Build a Model from its JSON description. Terms refer to variables by name."""
    variables = _variables_by_name(spec)

    objective: Optional[Objective] = None
    if spec.objective is not None:
        objective = Objective(
            _function(spec.objective.function, variables, "objective"),
            spec.objective.optimization,
        )

    constraints = []
    for i, c in enumerate(spec.constraints):
        where = f"constraint '{c.name}'" if c.name else f"constraint #{i}"
        function = _function(c.function, variables, where)
        constraints.append((LinearConstraint(function, c.comparison, c.constant), c.name))

    return Model(spec.name, objective=objective, constraints=tuple(constraints))


def _variables_by_name(spec: ModelSpec) -> Dict[str, Variable]:
    names = [v.name for v in spec.variables]
    if len(set(names)) != len(names):
        dups = sorted({n for n in names if names.count(n) > 1})
        raise DomainError(f"Duplicate variable names found: {dups}.")

    return {
        v.name: Variable(v.name, domain=v.domain, minimum=v.minimum, maximum=v.maximum)
        for v in spec.variables
    }


def _function(
    spec: FunctionSpec, variables: Dict[str, Variable], where: str
) -> LinearFunction:
    terms: List[Term] = []
    for t in spec.terms:
        if t.variable not in variables:
            raise DomainError(f"The {where} references unknown variable '{t.variable}'.")
        terms.append(Term(variables[t.variable], t.factor))
    return LinearFunction(tuple(terms), spec.constant)
