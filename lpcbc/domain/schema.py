from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from lpcbc.domain.model import Comparison, Domain, Optimization


class SolveStatus(str, Enum):
    OPTIMAL = "optimal"
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"
    UNSOLVED = "unsolved"
    UNDEFINED = "undefined"


class SolverKind(str, Enum):
    CBC = "cbc"
    ORTOOLS = "ortools"


class StrictBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class SolverResult(StrictBaseModel):
    status: SolveStatus
    # Keyed by model variable names, not MPS column names. Only variables
    # reported by the solver are present.
    variables: Dict[str, float] = Field(default_factory=dict)


# ----------------------------
# Request payloads
# ----------------------------


class VariableSpec(StrictBaseModel):
    name: str
    domain: Domain = Domain.REAL
    minimum: Optional[float] = None
    maximum: Optional[float] = None


class TermSpec(StrictBaseModel):
    variable: str
    factor: float = 1.0


class FunctionSpec(StrictBaseModel):
    terms: List[TermSpec] = Field(default_factory=list)
    constant: float = 0.0


class ObjectiveSpec(StrictBaseModel):
    function: FunctionSpec
    optimization: Optimization = Optimization.MINIMIZE


class ConstraintSpec(StrictBaseModel):
    function: FunctionSpec
    comparison: Comparison = Comparison.EQ
    constant: float = 0.0
    name: str = ""


class ModelSpec(StrictBaseModel):
    name: str = Field(min_length=1)
    variables: List[VariableSpec] = Field(default_factory=list)
    objective: Optional[ObjectiveSpec] = None
    constraints: List[ConstraintSpec] = Field(default_factory=list)


class SolveOptions(StrictBaseModel):
    solver: SolverKind = SolverKind.CBC


class SolveRequest(StrictBaseModel):
    model: ModelSpec
    options: SolveOptions = Field(default_factory=SolveOptions)


# ----------------------------
# Validation report
# ----------------------------


class ValidationIssue(StrictBaseModel):
    kind: str
    subject: str
    message: str


class ValidationReport(StrictBaseModel):
    valid: bool
    errors: List[ValidationIssue] = Field(default_factory=list)
