from typing import Union

from ..core.node import Node, VariableNode, ConstantNode, BinaryOpNode, UnaryOpNode, constant_value
from ..core.domain import NumericDomain
from ...errors import DivisionByZero, UnknownOperator
from .evaluator import evaluate


class ExpressionSimplifier:
  """Rewrites a tree with a fixed table of algebraic identities.

  The pass is post-order: children are simplified first and the rules look
  at the already-simplified children, so folding composes through nested
  structure (``0 * x + 5`` becomes ``5``). It is a single pass, not iterated
  to a fixpoint, and products or quotients of two constants are only folded
  when one of them is 0 or 1 (``2 * 3`` stays as written).
  """

  def __init__(self, domain: Union[str, NumericDomain] = NumericDomain.REAL):
    self.domain = NumericDomain.resolve(domain)

  def simplify(self, node: Node) -> Node:
    """Return a new simplified tree; the input is left untouched"""
    if isinstance(node, (ConstantNode, VariableNode)):
      return node.copy()

    if isinstance(node, UnaryOpNode):
      return UnaryOpNode(node.operator, self.simplify(node.operand))

    if isinstance(node, BinaryOpNode):
      left = self.simplify(node.left)
      right = self.simplify(node.right)
      return self._apply_simplification_rules(node.operator, left, right)

    raise TypeError(f"Cannot simplify object of type {type(node).__name__}")

  def _apply_simplification_rules(self, operator: str, left: Node, right: Node) -> Node:
    if operator in ('+', '-'):
      return self._simplify_additive(operator, left, right)
    elif operator in ('*', '/'):
      return self._simplify_multiplicative(operator, left, right)
    elif operator == '^':
      return self._simplify_power(left, right)
    raise UnknownOperator(operator)

  def _fold(self, operator: str, left: ConstantNode, right: ConstantNode) -> ConstantNode:
    return ConstantNode(evaluate(BinaryOpNode(operator, left, right), domain=self.domain))

  def _is_zero(self, value) -> bool:
    return value is not None and self.domain.is_zero(value)

  def _is_one(self, value) -> bool:
    return value is not None and self.domain.is_one(value)

  def _simplify_additive(self, operator: str, left: Node, right: Node) -> Node:
    left_value, right_value = constant_value(left), constant_value(right)

    if left_value is not None and right_value is not None:
      return self._fold(operator, left, right)

    if self._is_zero(left_value):
      if operator == '+':
        return right  # 0 + x = x
      return BinaryOpNode('*', ConstantNode(-1), right)  # 0 - x = -1 * x

    if self._is_zero(right_value):
      return left  # x + 0 = x, x - 0 = x

    return BinaryOpNode(operator, left, right)

  def _simplify_multiplicative(self, operator: str, left: Node, right: Node) -> Node:
    left_value, right_value = constant_value(left), constant_value(right)

    if left_value is not None and right_value is not None:
      if self._is_zero(left_value) or self._is_zero(right_value):
        if operator == '*':
          return ConstantNode(self.domain.zero())
        if self._is_zero(right_value):
          raise DivisionByZero("Division by zero while simplifying")
        return ConstantNode(self.domain.zero())
      if self._is_one(left_value) or self._is_one(right_value):
        return self._fold(operator, left, right)
      return BinaryOpNode(operator, left, right)

    if left_value is not None:
      if self._is_zero(left_value):
        return ConstantNode(self.domain.zero())  # 0 * x = 0, 0 / x = 0
      if self._is_one(left_value) and operator == '*':
        return right  # 1 * x = x

    if right_value is not None:
      if self._is_zero(right_value):
        return ConstantNode(self.domain.zero())  # x * 0 = 0, x / 0 = 0
      if self._is_one(right_value):
        return left  # x * 1 = x, x / 1 = x

    return BinaryOpNode(operator, left, right)

  def _simplify_power(self, base: Node, exponent: Node) -> Node:
    exponent_value = constant_value(exponent)
    if self._is_one(exponent_value):
      return base  # x ^ 1 = x
    if self._is_zero(exponent_value):
      return ConstantNode(self.domain.one())  # x ^ 0 = 1
    return BinaryOpNode('^', base, exponent)


def simplify(node: Node, domain: Union[str, NumericDomain] = NumericDomain.REAL) -> Node:
  return ExpressionSimplifier(domain).simplify(node)
