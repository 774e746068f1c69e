from typing import List

from fastapi import APIRouter

from lpcbc.core.errors import DomainError, SolverError
from lpcbc.domain.convert import model_from_spec
from lpcbc.domain.normalize import normalize_model
from lpcbc.domain.schema import (
    ModelSpec,
    SolveRequest,
    SolverKind,
    SolverResult,
    ValidationIssue,
    ValidationReport,
)
from lpcbc.domain.validate import ValidationError, validation_errors
from lpcbc.solvers.cbc.solver import CBCSolver
from lpcbc.solvers.ortools.solver import solve_ortools

router = APIRouter(tags=["solve"])


def _issue(error: ValidationError) -> ValidationIssue:
    subject = error.label if error.label is not None else error.subject.name
    return ValidationIssue(kind=error.kind.value, subject=subject, message=error.message)


def _issues(errors: List[ValidationError]) -> List[ValidationIssue]:
    return [_issue(e) for e in errors]


@router.post("/validate", response_model=ValidationReport)
def validate(spec: ModelSpec) -> ValidationReport:
    errors = validation_errors(model_from_spec(spec))
    return ValidationReport(valid=not errors, errors=_issues(errors))


@router.post("/solve", response_model=SolverResult)
def solve(req: SolveRequest) -> SolverResult:
    model = normalize_model(model_from_spec(req.model))

    errors = validation_errors(model)
    if errors:
        raise DomainError(" ".join(e.message for e in errors))

    if req.options.solver == SolverKind.ORTOOLS:
        result = solve_ortools(model)
    else:
        result = CBCSolver().solve(model)

    if result is None:
        raise SolverError(f"Solver '{req.options.solver.value}' returned no result.")
    return result
