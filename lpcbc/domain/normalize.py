from __future__ import annotations

from lpcbc.domain.model import LinearConstraint, Model, Objective


def normalize_model(model: Model) -> Model:
    """
    normalization:
    - merge repeated variables in the objective and every constraint
    - drop terms that cancel out
    - keep names, labels and constraint order as-is
    """
    objective = model.objective
    if objective is not None:
        objective = Objective(objective.function.normalized(), objective.optimization)

    constraints = tuple(
        (LinearConstraint(c.function.normalized(), c.comparison, c.constant), label)
        for c, label in model.constraints
    )
    return Model(model.name, objective=objective, constraints=constraints)
