import pytest

from lpcbc.domain.model import (
    Comparison,
    Domain,
    LinearConstraint,
    LinearFunction,
    Model,
    Objective,
    Optimization,
    Term,
    Variable,
    lp_sum,
)
from tests.model_scenario_factory import ModelScenarioFactory


def _f(*terms, constant=0.0) -> LinearFunction:
    return LinearFunction(tuple(Term(v, k) for v, k in terms), constant)


class TestVariable:
    def test_defaults(self):
        x = Variable("x")
        assert x.name == "x"
        assert x.domain == Domain.REAL
        assert x.minimum is None
        assert x.maximum is None

    def test_binary_defaults_to_unit_bounds(self):
        x = Variable("x", domain=Domain.BINARY)
        assert (x.minimum, x.maximum) == (0, 1)

    def test_binary_keeps_explicit_bounds(self):
        x = Variable("x", domain=Domain.BINARY, maximum=2)
        assert (x.minimum, x.maximum) == (0, 2)

    def test_identity_equality(self):
        x1, x2 = Variable("x"), Variable("x")
        assert x1 is not x2
        assert not (x1 == x2)
        assert x1 != x2
        assert len({x1, x2, x1}) == 2

    def test_variables_are_immutable(self):
        x = Variable("x")
        with pytest.raises(AttributeError):
            x.name = "y"


class TestTerm:
    def test_default_factor(self):
        x = Variable("x")
        assert Term(x).factor == 1

    def test_equality_uses_variable_identity(self):
        x1, x2 = Variable("x"), Variable("x")
        assert Term(x1, 2) == Term(x1, 2)
        assert Term(x1, 2) != Term(x2, 2)


class TestLinearFunctionBuilding:
    def test_defaults(self):
        f = LinearFunction()
        assert f.terms == ()
        assert f.constant == 0

    def test_plus_variable(self):
        x = Variable("x")
        assert +x == _f((x, 1))

    def test_minus_variable(self):
        x = Variable("x")
        assert -x == _f((x, -1))

    def test_factor_times_variable(self):
        x = Variable("x")
        assert 2 * x == _f((x, 2))
        assert x * 2 == _f((x, 2))

    def test_factor_times_function(self):
        x = Variable("x")
        assert 2 * (4 * x + 20) == _f((x, 8), constant=40)

    def test_variable_plus_constant(self):
        x = Variable("x")
        assert x + 5 == _f((x, 1), constant=5)
        assert 5 + x == _f((x, 1), constant=5)

    def test_variable_plus_variable(self):
        x, y = Variable("x"), Variable("y")
        assert x + y == _f((x, 1), (y, 1))

    def test_variable_plus_function(self):
        x, y = Variable("x"), Variable("y")
        assert x + (3 * y + 10) == _f((x, 1), (y, 3), constant=10)

    def test_variable_minus_constant(self):
        x = Variable("x")
        assert x - 5 == _f((x, 1), constant=-5)

    def test_constant_minus_variable(self):
        x = Variable("x")
        assert 5 - x == _f((x, -1), constant=5)

    def test_variable_minus_function(self):
        x, y = Variable("x"), Variable("y")
        assert x - (3 * y + 10) == _f((x, 1), (y, -3), constant=-10)

    def test_function_minus_function(self):
        x, y = Variable("x"), Variable("y")
        assert (2 * x + 10) - (3 * y + 15) == _f((x, 2), (y, -3), constant=-5)

    def test_parentheses(self):
        x, y = Variable("x"), Variable("y")
        f = 2 * x + 10 + 3 * y + 5
        assert f == (2 * x) + 10 + (3 * y) + 5
        assert f == (2 * x + 10) + (3 * y + 5)

    def test_does_not_merge_terms(self):
        x, y = Variable("x"), Variable("y")
        assert 2 * x + 3 * y - x == _f((x, 2), (y, 3), (x, -1))

    def test_operands_are_not_mutated(self):
        x, y = Variable("x"), Variable("y")
        f = 2 * x + 1
        g = f + y
        assert f == _f((x, 2), constant=1)
        assert g == _f((x, 2), (y, 1), constant=1)

    def test_builtin_sum(self):
        x, y, z = Variable("x"), Variable("y"), Variable("z")
        assert sum([x, y, z]) == x + y + z

    def test_lp_sum_variables(self):
        x, y, z = Variable("x"), Variable("y"), Variable("z")
        assert lp_sum([x, y, z]) == _f((x, 1), (y, 1), (z, 1))

    def test_lp_sum_functions(self):
        x, y = Variable("x"), Variable("y")
        assert lp_sum([2 * x + 1, 3 * y + 2, 4 * x]) == _f(
            (x, 2), (y, 3), (x, 4), constant=3
        )

    def test_product_of_expressions_is_rejected(self):
        x, y = Variable("x"), Variable("y")
        with pytest.raises(TypeError):
            x * y


class TestNormalization:
    def test_zero_factor_is_dropped(self):
        x = Variable("x")
        f = 0 * x + 3
        assert f == _f((x, 0), constant=3)
        assert f.normalized() == LinearFunction(constant=3)

    def test_merge_factors(self):
        x, y = Variable("x"), Variable("y")
        f = 2 * x + 3 * y - x
        assert f.normalized() == _f((x, 1), (y, 3))

    def test_merge_and_filter_factors(self):
        x = Variable("x")
        assert (2 * x - 2 * x).normalized() == LinearFunction()

    def test_keeps_first_occurrence_order(self):
        x, y, z = Variable("x"), Variable("y"), Variable("z")
        f = z + 2 * x + y + 3 * z
        assert f.normalized() == _f((z, 4), (x, 2), (y, 1))

    def test_same_name_variables_are_not_merged(self):
        x, z = Variable("x"), Variable("x")
        f = 2 * x + 3 * z
        assert f.normalized() == _f((x, 2), (z, 3))

    def test_unchanged_function_is_returned_as_is(self):
        x, y = Variable("x"), Variable("y")
        f = 2 * x + 3 * y + 1
        assert f.normalized() is f

    def test_idempotent(self):
        x, y = Variable("x"), Variable("y")
        f = 2 * x + 3 * y - x + y - 3 * y + 7
        once = f.normalized()
        assert once.normalized() == once

    def test_preserves_value(self):
        x, y, z = Variable("x"), Variable("y"), Variable("z")
        f = 2 * x + 3 * y - x + 0.5 * z - 3 * y + 7
        for values in ({}, {"x": 1, "y": 2}, {"x": -3.5, "y": 10, "z": 4}):
            assert f.normalized()(values) == pytest.approx(f(values))


class TestEvaluation:
    def test_function_call(self):
        x, y = Variable("x"), Variable("y")
        f = 2 * x + 3 * y + 10
        assert f({"x": 100, "y": 1000}) == 3210

    def test_missing_variables_count_as_zero(self):
        x, y = Variable("x"), Variable("y")
        assert (2 * x + 3 * y + 10)({"x": 1}) == 12

    @pytest.mark.parametrize(
        "values, expected",
        [({"x": 1}, True), ({"x": 2}, True), ({"x": 3}, False)],
    )
    def test_lte_constraint(self, values, expected):
        x = Variable("x")
        assert (2 * x <= 4)(values) is expected

    @pytest.mark.parametrize(
        "values, expected",
        [({"x": 1}, False), ({"x": 2}, True), ({"x": 3}, True)],
    )
    def test_gte_constraint(self, values, expected):
        x = Variable("x")
        assert (2 * x >= 4)(values) is expected

    def test_eq_constraint_is_exact(self):
        x = Variable("x")
        c = 2 * x == 4
        assert c({"x": 2}) is True
        assert c({"x": 2.0000001}) is False


class TestLinearConstraint:
    def test_variable_comparisons(self):
        x = Variable("x")
        assert (x <= 3) == LinearConstraint(_f((x, 1)), Comparison.LTE, 3)
        assert (x == 3) == LinearConstraint(_f((x, 1)), Comparison.EQ, 3)
        assert (x >= 3) == LinearConstraint(_f((x, 1)), Comparison.GTE, 3)

    def test_reflected_comparison(self):
        x = Variable("x")
        assert (3 <= x) == LinearConstraint(_f((x, 1)), Comparison.GTE, 3)

    def test_function_comparisons(self):
        x, y = Variable("x"), Variable("y")
        c = 2 * x + y + 1 <= 20
        assert c.function == _f((x, 2), (y, 1), constant=1)
        assert c.comparison == Comparison.LTE
        assert c.constant == 20

    def test_defaults(self):
        c = LinearConstraint(LinearFunction())
        assert c.comparison == Comparison.EQ
        assert c.constant == 0


class TestModel:
    def test_default_model(self):
        model = ModelScenarioFactory.empty()
        assert model.objective is None
        assert model.constraints == ()
        assert model.optimization == Optimization.MINIMIZE
        assert model.variables == []

    def test_objective_accepts_variable(self):
        x = Variable("x")
        objective = Objective(x, Optimization.MAXIMIZE)
        assert objective.function == _f((x, 1))
        assert objective.optimization == Optimization.MAXIMIZE

    def test_default_objective_minimizes(self):
        assert Objective(Variable("x")).optimization == Optimization.MINIMIZE

    def test_optimization_follows_objective(self):
        assert ModelScenarioFactory.basic().optimization == Optimization.MAXIMIZE

    def test_variables_in_first_occurrence_order(self):
        x, y, z = Variable("x"), Variable("y"), Variable("z")
        model = Model(
            "Order",
            objective=Objective(y + z),
            constraints=[(x + y <= 1, ""), (z + x >= 0, "")],
        )
        assert model.variables == [y, z, x]

    def test_variables_by_identity(self):
        x1, x2 = Variable("x"), Variable("x")
        model = Model("Twins", constraints=[(x1 + x2 + x1 <= 1, "")])
        variables = model.variables
        assert len(variables) == 2
        assert variables[0] is x1
        assert variables[1] is x2

    def test_constraints_are_stored_as_tuple(self):
        model = ModelScenarioFactory.basic()
        assert isinstance(model.constraints, tuple)
        assert [label for _, label in model.constraints] == ["red", "blue", "yellow", "green"]
