"""Pruebas del parser de descenso recursivo."""

import math

import pytest

from formula_evaluator import FormulaEvaluator, FormulaSyntaxError, PythonMathProvider


@pytest.fixture
def evaluator():
    return FormulaEvaluator(PythonMathProvider())


class TestPrecedence:
    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("1+2*3", 7.0),
            ("(1+2)*3", 9.0),
            ("8/4/2", 1.0),
            ("10-4-3", 3.0),
            ("2^3^2", 512.0),
            ("2*3^2", 18.0),
            ("-2^2", 4.0),
            ("2^-1", 0.5),
            ("3*-2", -6.0),
            ("--3", 3.0),
            ("+4", 4.0),
            ("5.", 5.0),
            (".5", 0.5),
            ("1.5e+3", 1500.0),
            ("2e2", 200.0),
            (" 1 + 1 ", 2.0),
        ],
    )
    def test_values(self, evaluator, expression, expected):
        assert evaluator.evaluate(expression) == expected


class TestFunctions:
    def test_log_is_base_ten(self, evaluator):
        assert evaluator.evaluate("log(100)") == 2.0

    def test_ln_is_natural(self, evaluator):
        assert evaluator.evaluate("ln(1)") == 0.0

    def test_trig_uses_radians(self, evaluator):
        assert evaluator.evaluate("sin(0)") == 0.0
        assert evaluator.evaluate("cos(0)") == 1.0
        assert evaluator.evaluate("tan(0)") == 0.0

    def test_nested_calls(self, evaluator):
        assert evaluator.evaluate("log(log(10^10))") == 1.0


class TestIeeeSemantics:
    def test_division_by_zero_is_signed_infinity(self, evaluator):
        assert evaluator.evaluate("1/0") == math.inf
        assert evaluator.evaluate("-1/0") == -math.inf
        assert evaluator.evaluate("1/-0") == -math.inf

    def test_zero_over_zero_is_nan(self, evaluator):
        assert math.isnan(evaluator.evaluate("0/0"))

    def test_infinity_constant(self, evaluator):
        assert evaluator.evaluate("Infinity") == math.inf
        assert math.isnan(evaluator.evaluate("Infinity-Infinity"))

    def test_log_domain(self, evaluator):
        assert evaluator.evaluate("ln(0)") == -math.inf
        assert math.isnan(evaluator.evaluate("log(-1)"))

    def test_trig_of_infinity_is_nan(self, evaluator):
        assert math.isnan(evaluator.evaluate("sin(Infinity)"))

    def test_power_overflow_and_domain(self, evaluator):
        assert evaluator.evaluate("10^400") == math.inf
        assert evaluator.evaluate("-10^401") == -math.inf
        assert evaluator.evaluate("0^-1") == math.inf
        assert math.isnan(evaluator.evaluate("-8^0.5"))

    def test_product_overflow(self, evaluator):
        assert evaluator.evaluate("1e300*1e300") == math.inf


class TestSyntaxErrors:
    @pytest.mark.parametrize(
        "expression",
        ["1/(", "1+@2", "()", "1)", "sin(", "sin 1", "foo(1)", "2e", ".", "1..2", "(1+2", "2(3)", "pi"],
    )
    def test_rejected(self, evaluator, expression):
        with pytest.raises(FormulaSyntaxError):
            evaluator.evaluate(expression)

    def test_error_reports_position(self, evaluator):
        with pytest.raises(FormulaSyntaxError) as exc_info:
            evaluator.evaluate("1+@2")
        assert exc_info.value.position == 2

    def test_syntax_error_is_value_error(self):
        assert issubclass(FormulaSyntaxError, ValueError)
