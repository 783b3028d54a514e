import sys

import numpy as np
import pytest

from symbolic_calculus import (
    SymbolicCalculator, Expression, NumericDomain, LogLevel, configure_logging,
    ConstantNode, VariableNode, UnaryOpNode, BinaryOpNode,
    DivisionByZero, ExpressionTooDeep, UnboundVariable, UnsupportedOperation
)

x = VariableNode('x')
y = VariableNode('y')


def C(value):
    return ConstantNode(value)


def sin_chain(depth):
    node = x
    for _ in range(depth - 1):
        node = UnaryOpNode('sin', node)
    return node


class _CurrentStdout:
    """Writes to whatever sys.stdout is when called, so capsys sees it in the test body"""

    def write(self, text):
        return sys.stdout.write(text)

    def flush(self):
        sys.stdout.flush()


@pytest.fixture
def detailed_logging(capsys):
    logger = configure_logging(LogLevel.DETAILED)
    for handler in logger.logger.handlers:
        handler.setStream(_CurrentStdout())
    yield
    configure_logging(LogLevel.SILENT)


@pytest.mark.parametrize("kwargs", [
    {'domain': 'octonion'},
    {'unbound_policy': 'skip'},
    {'max_depth': 0},
])
def test_invalid_configuration(kwargs):
    with pytest.raises(ValueError):
        SymbolicCalculator(**kwargs)


def test_defaults():
    calc = SymbolicCalculator()
    assert calc.domain is NumericDomain.REAL
    assert calc.unbound_policy == 'raise'
    assert calc.max_depth == 500
    assert calc.auto_simplify


def test_accepts_text_nodes_and_expressions():
    calc = SymbolicCalculator()
    tree = BinaryOpNode('+', x, C(1))
    assert calc.evaluate(tree, {'x': 2}) == 3.0
    assert calc.evaluate(Expression(tree), {'x': 2}) == 3.0
    assert calc.evaluate("x + 1", {'x': 2}) == 3.0
    with pytest.raises(TypeError):
        calc.evaluate(42)


def test_differentiate_simplifies_by_default():
    calc = SymbolicCalculator()
    tree = BinaryOpNode('+', BinaryOpNode('^', x, C(2)), UnaryOpNode('sin', x))
    assert calc.differentiate(tree, 'x').to_string() == "((2 * x) + cos(x))"
    raw = calc.differentiate(tree, 'x', simplify=False)
    assert raw.to_string() == "((2 * ((x ^ 1) * 1)) + (cos(x) * 1))"


def test_auto_simplify_disabled():
    calc = SymbolicCalculator(auto_simplify=False)
    assert calc.differentiate(UnaryOpNode('sin', x), 'x').to_string() == "(cos(x) * 1)"
    assert calc.differentiate(UnaryOpNode('sin', x), 'x', simplify=True).to_string() == "cos(x)"


def test_gradient():
    calc = SymbolicCalculator()
    gradient = calc.gradient(BinaryOpNode('*', x, y))
    assert {name: expr.to_string() for name, expr in gradient.items()} == {'x': "y", 'y': "x"}
    only_y = calc.gradient(BinaryOpNode('*', x, y), ['y'])
    assert list(only_y) == ['y']


def test_unbound_policy_applies():
    with pytest.raises(UnboundVariable):
        SymbolicCalculator().evaluate(BinaryOpNode('+', x, C(1)))
    assert SymbolicCalculator(unbound_policy='zero').evaluate(BinaryOpNode('+', x, C(1))) == 1.0


def test_batch_evaluation():
    calc = SymbolicCalculator()
    xs = np.array([1.0, 2.0, 4.0])
    np.testing.assert_allclose(calc.evaluate_batch(BinaryOpNode('/', C(1), x), {'x': xs}), 1 / xs)


def test_complex_calculator():
    calc = SymbolicCalculator(domain='complex')
    assert calc.evaluate(BinaryOpNode('*', x, x), {'x': 1j}) == -1
    with pytest.raises(UnsupportedOperation):
        calc.differentiate(BinaryOpNode('^', x, C(2)), 'x')


def test_expression_domain_follows_calculator():
    calc = SymbolicCalculator(domain='complex')
    result = calc.simplify(Expression(BinaryOpNode('+', C(1j), C(1)), 'real'))
    assert result.domain is NumericDomain.COMPLEX
    assert result.to_string() == "(1 + 1i)"


def test_depth_limit():
    calc = SymbolicCalculator(max_depth=50)
    with pytest.raises(ExpressionTooDeep) as exc_info:
        calc.evaluate(sin_chain(51), {'x': 0.1})
    assert exc_info.value.depth == 51
    assert exc_info.value.max_depth == 50
    assert calc.evaluate(sin_chain(50), {'x': 0.0}) == 0.0
    assert SymbolicCalculator(max_depth=None).evaluate(sin_chain(60), {'x': 0.0}) == 0.0


def test_to_string():
    calc = SymbolicCalculator()
    tree = BinaryOpNode('*', BinaryOpNode('+', x, y), C(-2))
    assert calc.to_string(tree) == "((x + y) * (-2))"
    assert calc.to_string(tree, compact=True) == "(x + y) * (-2)"


def test_operations_are_logged(detailed_logging, capsys):
    calc = SymbolicCalculator()
    calc.simplify(BinaryOpNode('*', x, C(1)))
    out = capsys.readouterr().out
    assert "simplify: (x * 1) -> x" in out


def test_failures_are_logged_and_reraised(detailed_logging, capsys):
    calc = SymbolicCalculator()
    with pytest.raises(DivisionByZero):
        calc.evaluate(BinaryOpNode('/', x, C(0)), {'x': 1})
    out = capsys.readouterr().out
    assert "evaluate failed for (x / 0)" in out
    assert "DIVISION_BY_ZERO" in out


def test_silent_logging_prints_nothing(capsys):
    calc = SymbolicCalculator(log_level=LogLevel.SILENT)
    with pytest.raises(DivisionByZero):
        calc.evaluate(BinaryOpNode('/', C(1), C(0)))
    assert capsys.readouterr().out == ""


def test_log_to_file(tmp_path):
    log_file = tmp_path / "calc.log"
    calc = SymbolicCalculator(log_level=LogLevel.SILENT, log_to_file=True, log_file_path=str(log_file))
    calc.logger.log_level = LogLevel.DETAILED
    calc.differentiate(BinaryOpNode('^', x, C(3)), 'x')
    configure_logging(LogLevel.SILENT)
    assert "d/dx: (x ^ 3) -> (3 * (x ^ 2))" in log_file.read_text()


def test_parse():
    calc = SymbolicCalculator()
    parsed = calc.parse("ln(x)")
    assert isinstance(parsed, Expression)
    assert parsed.to_string() == "ln(x)"


@pytest.mark.parametrize("method", ['gradient', 'to_string'])
def test_validation_failures_are_logged(method, detailed_logging, capsys):
    calc = SymbolicCalculator(max_depth=5)
    with pytest.raises(ExpressionTooDeep):
        getattr(calc, method)(sin_chain(6))
    out = capsys.readouterr().out
    assert f"{method} failed for <invalid expression>" in out
    assert "EXPRESSION_TOO_DEEP" in out
