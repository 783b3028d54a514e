"""
Symbolic differentiation by structural recursion.

One rule per node variant. Operand subtrees that appear in the derivative are
copied, so the result never shares nodes with the input tree. The derivative
is left unsimplified; run it through the simplifier to remove the ``* 1`` and
``+ 0`` artifacts the rules produce.
"""

from typing import Union

from ..core.node import Node, ConstantNode, VariableNode, UnaryOpNode, BinaryOpNode
from ..core.domain import NumericDomain
from ...errors import UnsupportedOperation, UnknownOperator, UnknownFunction


def differentiate(node: Node, with_respect_to: str,
                  domain: Union[str, NumericDomain] = NumericDomain.REAL) -> Node:
  """Partial derivative of ``node`` with respect to the variable ``with_respect_to``"""
  if not isinstance(with_respect_to, str) or not with_respect_to:
    raise TypeError(f"Variable name must be a non-empty string, got {with_respect_to!r}")
  domain = NumericDomain.resolve(domain)
  return _differentiate(node, with_respect_to, domain)


def _differentiate(node: Node, var: str, domain: NumericDomain) -> Node:
  if isinstance(node, ConstantNode):
    return ConstantNode(0)
  if isinstance(node, VariableNode):
    return ConstantNode(1 if node.name == var else 0)
  if isinstance(node, UnaryOpNode):
    return _differentiate_unary(node, var, domain)
  if isinstance(node, BinaryOpNode):
    return _differentiate_binary(node, var, domain)
  raise TypeError(f"Cannot differentiate object of type {type(node).__name__}")


def _differentiate_unary(node: UnaryOpNode, var: str, domain: NumericDomain) -> Node:
  operand = node.operand
  d_operand = _differentiate(operand, var, domain)

  if node.operator == 'sin':
    return BinaryOpNode('*', UnaryOpNode('cos', operand.copy()), d_operand)
  elif node.operator == 'cos':
    minus_sin = BinaryOpNode('*', ConstantNode(-1), UnaryOpNode('sin', operand.copy()))
    return BinaryOpNode('*', minus_sin, d_operand)
  elif node.operator == 'ln':
    return BinaryOpNode('/', d_operand, operand.copy())
  elif node.operator == 'exp':
    return BinaryOpNode('*', UnaryOpNode('exp', operand.copy()), d_operand)
  raise UnknownFunction(node.operator)


def _differentiate_binary(node: BinaryOpNode, var: str, domain: NumericDomain) -> Node:
  left, right = node.left, node.right

  if node.operator == '^':
    return _differentiate_power(left, right, var, domain)

  d_left = _differentiate(left, var, domain)
  d_right = _differentiate(right, var, domain)

  if node.operator in ('+', '-'):
    return BinaryOpNode(node.operator, d_left, d_right)

  elif node.operator == '*':
    # (fg)' = f'g + fg'
    return BinaryOpNode(
      '+',
      BinaryOpNode('*', d_left, right.copy()),
      BinaryOpNode('*', left.copy(), d_right))

  elif node.operator == '/':
    # (f/g)' = (f'g - fg') / g^2
    numerator = BinaryOpNode(
      '-',
      BinaryOpNode('*', d_left, right.copy()),
      BinaryOpNode('*', left.copy(), d_right))
    denominator = BinaryOpNode('^', right.copy(), ConstantNode(2))
    return BinaryOpNode('/', numerator, denominator)

  raise UnknownOperator(node.operator)


def _differentiate_power(base: Node, exponent: Node, var: str, domain: NumericDomain) -> Node:
  if domain is NumericDomain.COMPLEX:
    raise UnsupportedOperation("Differentiation of '^' is not supported in the complex domain")

  # f^c -> c * f^(c-1) * f', for every constant c
  if isinstance(exponent, ConstantNode):
    c = domain.coerce(exponent.value)
    reduced = BinaryOpNode('^', base.copy(), ConstantNode(c - 1))
    return BinaryOpNode('*', ConstantNode(c), BinaryOpNode('*', reduced, _differentiate(base, var, domain)))

  # a^g -> g' * a^g * ln(a)
  if isinstance(base, ConstantNode):
    return BinaryOpNode(
      '*',
      _differentiate(exponent, var, domain),
      BinaryOpNode('*', BinaryOpNode('^', base.copy(), exponent.copy()), UnaryOpNode('ln', base.copy())))

  # f^g -> f^g * (g' * ln(f) + g * f'/f)
  log_term = BinaryOpNode('*', _differentiate(exponent, var, domain), UnaryOpNode('ln', base.copy()))
  ratio_term = BinaryOpNode(
    '*', exponent.copy(), BinaryOpNode('/', _differentiate(base, var, domain), base.copy()))
  return BinaryOpNode(
    '*',
    BinaryOpNode('^', base.copy(), exponent.copy()),
    BinaryOpNode('+', log_term, ratio_term))
