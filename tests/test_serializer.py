import pytest

from symbolic_calculus import (
    ConstantNode, VariableNode, UnaryOpNode, BinaryOpNode, serialize, serialize_compact
)

x = VariableNode('x')
y = VariableNode('y')
z = VariableNode('z')


def C(value):
    return ConstantNode(value)


def test_binary_and_unary_shapes():
    assert serialize(BinaryOpNode('+', x, y)) == "(x + y)"
    assert serialize(UnaryOpNode('sin', x)) == "sin(x)"
    assert serialize(BinaryOpNode('^', x, C(2))) == "(x ^ 2)"
    assert serialize(BinaryOpNode('/', BinaryOpNode('-', x, y), BinaryOpNode('*', x, y))) == "((x - y) / (x * y))"


def test_function_argument_always_parenthesized():
    assert serialize(UnaryOpNode('ln', BinaryOpNode('+', x, C(1)))) == "ln((x + 1))"
    assert serialize(UnaryOpNode('exp', UnaryOpNode('cos', x))) == "exp(cos(x))"


def test_variable_names_verbatim():
    assert serialize(VariableNode('theta_1')) == "theta_1"


@pytest.mark.parametrize("value, expected", [
    (2.0, "2"),
    (0, "0"),
    (-0.0, "0"),
    (2.5, "2.5"),
    (0.1, "0.1"),
    (1e-05, "0.00001"),
    (-3, "(-3)"),
    (-0.5, "(-0.5)"),
])
def test_real_constant_formatting(value, expected):
    assert serialize(C(value)) == expected


def test_negative_constants_wrapped_inside_binary():
    assert serialize(BinaryOpNode('*', C(-1), x)) == "((-1) * x)"
    assert serialize(BinaryOpNode('^', x, C(-2))) == "(x ^ (-2))"


@pytest.mark.parametrize("value, expected", [
    (0j, "0"),
    (3 + 0j, "3"),
    (-3 + 0j, "-3"),
    (2j, "2i"),
    (-2j, "-2i"),
    (1 + 2j, "(1 + 2i)"),
    (1 - 2j, "(1 - 2i)"),
    (-1.5 - 0.5j, "(-1.5 - 0.5i)"),
])
def test_complex_constant_formatting(value, expected):
    assert serialize(C(value), domain='complex') == expected


def test_real_values_in_complex_domain():
    assert serialize(BinaryOpNode('+', C(2), x), domain='complex') == "(2 + x)"


def test_complex_literal_in_real_tree():
    assert serialize(BinaryOpNode('*', C(1 + 2j), x)) == "((1 + 2i) * x)"


@pytest.mark.parametrize("tree, expected", [
    (BinaryOpNode('+', x, BinaryOpNode('*', y, z)), "x + y * z"),
    (BinaryOpNode('*', BinaryOpNode('+', x, y), z), "(x + y) * z"),
    (BinaryOpNode('-', x, BinaryOpNode('-', y, z)), "x - (y - z)"),
    (BinaryOpNode('-', BinaryOpNode('-', x, y), z), "x - y - z"),
    (BinaryOpNode('/', x, BinaryOpNode('*', y, z)), "x / (y * z)"),
    (BinaryOpNode('^', x, BinaryOpNode('^', y, z)), "x ^ y ^ z"),
    (BinaryOpNode('^', BinaryOpNode('^', x, y), z), "(x ^ y) ^ z"),
    (UnaryOpNode('sin', BinaryOpNode('+', x, C(1))), "sin(x + 1)"),
    (BinaryOpNode('*', C(-1), x), "(-1) * x"),
])
def test_compact_serialization(tree, expected):
    assert serialize_compact(tree) == expected
