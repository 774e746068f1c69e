from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Union

from lpcbc.domain.model import Domain, LinearConstraint, Model, Variable

# Reserved by the MPS format and the CBC command line.
SPECIAL_CHARS = frozenset("-+[] ->/")


class ValidationErrorKind(str, Enum):
    EMPTY_VARIABLE_NAME = "empty_variable_name"
    INVALID_VARIABLE_NAME = "invalid_variable_name"
    INVALID_VARIABLE_BOUNDS = "invalid_variable_bounds"
    INVALID_MODEL_NAME = "invalid_model_name"
    DUPLICATE_VARIABLE_NAME = "duplicate_variable_name"
    DUPLICATE_CONSTRAINT_NAME = "duplicate_constraint_name"


@dataclass(frozen=True)
class ValidationError:
    """A single well-formedness problem and the model element it concerns."""

    kind: ValidationErrorKind
    subject: Union[Variable, LinearConstraint, Model]
    label: Optional[str] = None

    @property
    def message(self) -> str:
        if self.kind == ValidationErrorKind.EMPTY_VARIABLE_NAME:
            return "Variable has an empty name."
        if self.kind == ValidationErrorKind.INVALID_VARIABLE_NAME:
            return f"Variable name '{self.subject.name}' contains one of {sorted(SPECIAL_CHARS)}."
        if self.kind == ValidationErrorKind.INVALID_VARIABLE_BOUNDS:
            v = self.subject
            return (
                f"Variable '{v.name}' (domain={v.domain.value}) has invalid bounds "
                f"[{v.minimum}, {v.maximum}]."
            )
        if self.kind == ValidationErrorKind.INVALID_MODEL_NAME:
            return f"Model name '{self.subject.name}' must not contain spaces."
        if self.kind == ValidationErrorKind.DUPLICATE_VARIABLE_NAME:
            return f"Distinct variables share the name '{self.subject.name}'."
        return f"Distinct constraints share the name '{self.label}'."

    def __str__(self) -> str:
        return self.message


def variable_validation_errors(variable: Variable) -> List[ValidationError]:
    """
    Errors of a single variable: its name and its bounds / domain combination.
    Name clashes with other variables are model-level errors.
    """
    errors: List[ValidationError] = []

    if not variable.name:
        errors.append(ValidationError(ValidationErrorKind.EMPTY_VARIABLE_NAME, variable))
    elif not SPECIAL_CHARS.isdisjoint(variable.name):
        errors.append(ValidationError(ValidationErrorKind.INVALID_VARIABLE_NAME, variable))

    lo, hi = variable.minimum, variable.maximum
    if lo is not None and hi is not None and lo > hi:
        errors.append(ValidationError(ValidationErrorKind.INVALID_VARIABLE_BOUNDS, variable))
    elif variable.domain == Domain.BINARY and (lo != 0 or hi != 1):
        errors.append(ValidationError(ValidationErrorKind.INVALID_VARIABLE_BOUNDS, variable))

    return errors


def validation_errors(model: Model) -> List[ValidationError]:
    """
    Every well-formedness error of the model, in a stable order:
    model name, then variables (first occurrence order), then constraints.
    An empty list means the model can be handed to a solver.
    """
    errors: List[ValidationError] = []

    if " " in model.name:
        errors.append(ValidationError(ValidationErrorKind.INVALID_MODEL_NAME, model))

    _collect_variable_errors(model, errors)
    _collect_constraint_errors(model, errors)

    return errors


def _collect_variable_errors(model: Model, errors: List[ValidationError]) -> None:
    by_name: Dict[str, Variable] = {}

    for variable in model.variables:
        errors.extend(variable_validation_errors(variable))
        if not variable.name:
            continue
        if variable.name in by_name:
            errors.append(
                ValidationError(ValidationErrorKind.DUPLICATE_VARIABLE_NAME, variable)
            )
        else:
            by_name[variable.name] = variable


def _collect_constraint_errors(model: Model, errors: List[ValidationError]) -> None:
    seen = set()

    for constraint, label in model.constraints:
        if not label:
            continue
        if label in seen:
            errors.append(
                ValidationError(
                    ValidationErrorKind.DUPLICATE_CONSTRAINT_NAME, constraint, label
                )
            )
        else:
            seen.add(label)
