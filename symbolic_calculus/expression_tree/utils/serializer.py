from typing import Union

from ..core.node import Node, ConstantNode, VariableNode, UnaryOpNode, BinaryOpNode
from ..core.domain import NumericDomain
from ..core.operators import PRECEDENCE


def serialize(node: Node, domain: Union[str, NumericDomain] = NumericDomain.REAL) -> str:
  """Fully parenthesized infix form, e.g. ``((2 * x) + cos(x))``"""
  domain = NumericDomain.resolve(domain)
  return _serialize(node, domain)


def _format_constant(node: ConstantNode, domain: NumericDomain) -> str:
  # A complex literal keeps complex formatting even in a real-domain tree
  if node.is_complex and domain is NumericDomain.REAL:
    return NumericDomain.COMPLEX.format_constant(node.value)
  return domain.format_constant(node.value)


def _serialize(node: Node, domain: NumericDomain) -> str:
  if isinstance(node, ConstantNode):
    return _format_constant(node, domain)
  if isinstance(node, VariableNode):
    return node.name
  if isinstance(node, UnaryOpNode):
    return f"{node.operator}({_serialize(node.operand, domain)})"
  if isinstance(node, BinaryOpNode):
    return f"({_serialize(node.left, domain)} {node.operator} {_serialize(node.right, domain)})"
  raise TypeError(f"Cannot serialize object of type {type(node).__name__}")


def serialize_compact(node: Node, domain: Union[str, NumericDomain] = NumericDomain.REAL) -> str:
  """
  Infix form with only the parentheses precedence requires.

  ``+ - * /`` are left-associative and ``^`` is right-associative. Negative
  real constants stay wrapped and function arguments keep their parentheses.
  """
  domain = NumericDomain.resolve(domain)
  return _serialize_compact(node, domain)


def _needs_parens(child: Node, parent_operator: str, is_right: bool) -> bool:
  if not isinstance(child, BinaryOpNode):
    return False
  child_prec = PRECEDENCE[child.operator]
  parent_prec = PRECEDENCE[parent_operator]
  if child_prec != parent_prec:
    return child_prec < parent_prec
  if parent_operator == '^':
    return not is_right
  # a - (b + c), a / (b * c)
  return is_right and parent_operator in ('-', '/')


def _serialize_compact(node: Node, domain: NumericDomain) -> str:
  if isinstance(node, ConstantNode):
    return _format_constant(node, domain)
  if isinstance(node, VariableNode):
    return node.name
  if isinstance(node, UnaryOpNode):
    return f"{node.operator}({_serialize_compact(node.operand, domain)})"
  if isinstance(node, BinaryOpNode):
    left = _serialize_compact(node.left, domain)
    right = _serialize_compact(node.right, domain)
    if _needs_parens(node.left, node.operator, is_right=False):
      left = f"({left})"
    if _needs_parens(node.right, node.operator, is_right=True):
      right = f"({right})"
    return f"{left} {node.operator} {right}"
  raise TypeError(f"Cannot serialize object of type {type(node).__name__}")
