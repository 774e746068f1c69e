from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union


class Domain(str, Enum):
    REAL = "real"
    INTEGER = "integer"
    BINARY = "binary"


class Comparison(str, Enum):
    LTE = "lte"
    EQ = "eq"
    GTE = "gte"


class Optimization(str, Enum):
    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"


def _is_number(value: object) -> bool:
    return isinstance(value, numbers.Real)


class LinearExpression:
    """
    Shared operators for variables and linear functions.

    Subclasses provide `terms` and `constant`. Operators concatenate terms
    and add constants. They never merge terms; call
    LinearFunction.normalized() for the canonical form.
    """

    terms: Tuple["Term", ...]
    constant: float

    def __pos__(self) -> "LinearFunction":
        return LinearFunction(self.terms, self.constant)

    def __neg__(self) -> "LinearFunction":
        return LinearFunction(tuple(t.negated() for t in self.terms), -self.constant)

    def __add__(self, other) -> "LinearFunction":
        if isinstance(other, LinearExpression):
            return LinearFunction(self.terms + other.terms, self.constant + other.constant)
        if _is_number(other):
            return LinearFunction(self.terms, self.constant + float(other))
        return NotImplemented

    def __radd__(self, other) -> "LinearFunction":
        if _is_number(other):
            return LinearFunction(self.terms, float(other) + self.constant)
        return NotImplemented

    def __sub__(self, other) -> "LinearFunction":
        if isinstance(other, LinearExpression):
            negated = tuple(t.negated() for t in other.terms)
            return LinearFunction(self.terms + negated, self.constant - other.constant)
        if _is_number(other):
            return LinearFunction(self.terms, self.constant - float(other))
        return NotImplemented

    def __rsub__(self, other) -> "LinearFunction":
        if _is_number(other):
            return (-self) + other
        return NotImplemented

    def __mul__(self, other) -> "LinearFunction":
        if not _is_number(other):
            return NotImplemented
        factor = float(other)
        return LinearFunction(
            tuple(t.scaled(factor) for t in self.terms), factor * self.constant
        )

    def __rmul__(self, other) -> "LinearFunction":
        return self.__mul__(other)

    # Comparisons against a number build constraints.

    def __le__(self, other) -> "LinearConstraint":
        if not _is_number(other):
            return NotImplemented
        return LinearConstraint(as_function(self), Comparison.LTE, float(other))

    def __ge__(self, other) -> "LinearConstraint":
        if not _is_number(other):
            return NotImplemented
        return LinearConstraint(as_function(self), Comparison.GTE, float(other))

    def __eq__(self, other):
        if not _is_number(other):
            return NotImplemented
        return LinearConstraint(as_function(self), Comparison.EQ, float(other))

    __hash__ = object.__hash__


@dataclass(frozen=True, eq=False)
class Variable(LinearExpression):
    """
    Decision variable.

    Variables are entities: two variables are the same only if they are the
    same object, even when their names match. Name clashes are reported by
    the validator, not prevented here.

    Binary variables default to bounds (0, 1) when none are given.
    """

    name: str
    domain: Domain = Domain.REAL
    minimum: Optional[float] = None
    maximum: Optional[float] = None

    def __post_init__(self) -> None:
        if self.domain == Domain.BINARY:
            if self.minimum is None:
                object.__setattr__(self, "minimum", 0.0)
            if self.maximum is None:
                object.__setattr__(self, "maximum", 1.0)

    @property
    def terms(self) -> Tuple["Term", ...]:
        return (Term(self),)

    @property
    def constant(self) -> float:
        return 0.0

    def __repr__(self) -> str:
        return f"Variable({self.name!r}, domain={self.domain.value})"

    __hash__ = object.__hash__


@dataclass(frozen=True)
class Term:
    variable: Variable
    factor: float = 1.0

    def negated(self) -> "Term":
        return Term(self.variable, -self.factor)

    def scaled(self, factor: float) -> "Term":
        return Term(self.variable, factor * self.factor)

    def __call__(self, values: Mapping[str, float]) -> float:
        return values.get(self.variable.name, 0.0) * self.factor


@dataclass(frozen=True, eq=False)
class LinearFunction(LinearExpression):
    """
    a * x + b * y + ... + c

    Terms keep their insertion order and may repeat a variable until the
    function is normalized.
    """

    terms: Tuple[Term, ...] = ()
    constant: float = 0.0

    def __post_init__(self) -> None:
        if not isinstance(self.terms, tuple):
            object.__setattr__(self, "terms", tuple(self.terms))
        object.__setattr__(self, "constant", float(self.constant))

    def __call__(self, values: Mapping[str, float]) -> float:
        """Missing variables count as 0."""
        total = self.constant
        for term in self.terms:
            total += term(values)
        return total

    def normalized(self) -> "LinearFunction":
        """
        Merge terms of the same variable (by identity) and drop terms whose
        combined factor is 0. Keeps the order of first occurrence and the
        constant.
        """
        if not self.terms:
            return self
        if len(self.terms) == 1:
            if self.terms[0].factor == 0:
                return LinearFunction((), self.constant)
            return self

        groups: Dict[Variable, List[float]] = {}
        for term in self.terms:
            if term.factor != 0:
                groups.setdefault(term.variable, []).append(term.factor)

        if len(groups) == len(self.terms):
            return self

        merged: List[Term] = []
        for variable, factors in groups.items():
            factor = factors[0] if len(factors) == 1 else sum(factors)
            if factor != 0:
                merged.append(Term(variable, factor))
        return LinearFunction(tuple(merged), self.constant)

    def __eq__(self, other):
        if isinstance(other, LinearFunction):
            return self.terms == other.terms and self.constant == other.constant
        return super().__eq__(other)

    def __hash__(self) -> int:
        return hash((self.terms, self.constant))

    def __repr__(self) -> str:
        terms = ", ".join(f"{t.factor:g}*{t.variable.name}" for t in self.terms)
        return f"LinearFunction([{terms}], constant={self.constant:g})"


def as_function(expression: Union[LinearExpression, float]) -> LinearFunction:
    if isinstance(expression, LinearFunction):
        return expression
    if isinstance(expression, LinearExpression):
        return LinearFunction(expression.terms, expression.constant)
    if _is_number(expression):
        return LinearFunction((), float(expression))
    raise TypeError(f"Not a linear expression: {expression!r}")


def lp_sum(expressions: Iterable[Union[LinearExpression, float]]) -> LinearFunction:
    """Concatenate terms and add constants. Does not normalize."""
    terms: List[Term] = []
    constant = 0.0
    for e in expressions:
        f = as_function(e)
        terms.extend(f.terms)
        constant += f.constant
    return LinearFunction(tuple(terms), constant)


@dataclass(frozen=True)
class LinearConstraint:
    """function <comparison> constant"""

    function: LinearFunction
    comparison: Comparison = Comparison.EQ
    constant: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "function", as_function(self.function))
        object.__setattr__(self, "constant", float(self.constant))

    def __call__(self, values: Mapping[str, float]) -> bool:
        lhs = self.function(values)
        if self.comparison == Comparison.LTE:
            return lhs <= self.constant
        if self.comparison == Comparison.GTE:
            return lhs >= self.constant
        return lhs == self.constant


@dataclass(frozen=True)
class Objective:
    function: LinearFunction
    optimization: Optimization = Optimization.MINIMIZE

    def __post_init__(self) -> None:
        object.__setattr__(self, "function", as_function(self.function))


LabeledConstraint = Tuple[LinearConstraint, str]


@dataclass(frozen=True)
class Model:
    """
    Linear program: optional objective plus labeled constraints.

    Labels may be empty or repeat; duplicate non-empty labels are
    validation errors.
    """

    name: str
    objective: Optional[Objective] = None
    constraints: Tuple[LabeledConstraint, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "constraints",
            tuple((c, label) for c, label in self.constraints),
        )

    @property
    def optimization(self) -> Optimization:
        if self.objective is None:
            return Optimization.MINIMIZE
        return self.objective.optimization

    @property
    def variables(self) -> List[Variable]:
        """
        Distinct variables in order of first occurrence, objective first.

        The position in this list is the column index used in MPS files.
        """
        seen: Dict[Variable, None] = {}
        for f in self.functions():
            for term in f.terms:
                seen.setdefault(term.variable, None)
        return list(seen)

    def functions(self) -> List[LinearFunction]:
        functions = [] if self.objective is None else [self.objective.function]
        functions.extend(c.function for c, _ in self.constraints)
        return functions
