from typing import Optional

from ..core.node import Node, ConstantNode, BinaryOpNode, UnaryOpNode, VariableNode
from ..core.operators import BINARY_OP_MAP, UNARY_OP_MAP
from ...errors import CalculusError, ExpressionTooDeep, UnknownOperator, UnknownFunction
from .tree_utils import iter_with_depth


class ExpressionValidator:
  """Structural checks run before walking trees from untrusted sources"""

  @staticmethod
  def validate(node: Node, max_depth: Optional[int] = None) -> None:
    """
    Raise if the tree is malformed or deeper than ``max_depth``.

    The walk is iterative, so a tree too deep for the recursive operations is
    reported as ExpressionTooDeep rather than hitting the recursion limit.
    """
    if not isinstance(node, Node):
      raise TypeError(f"Expected a Node, got {type(node).__name__}")

    deepest = 0
    for current, depth in iter_with_depth(node):
      deepest = max(deepest, depth)
      ExpressionValidator._validate_node(current)

    if max_depth is not None and deepest > max_depth:
      raise ExpressionTooDeep(deepest, max_depth)

  @staticmethod
  def _validate_node(node: Node) -> None:
    if isinstance(node, BinaryOpNode):
      if node.operator not in BINARY_OP_MAP:
        raise UnknownOperator(node.operator)
    elif isinstance(node, UnaryOpNode):
      if node.operator not in UNARY_OP_MAP:
        raise UnknownFunction(node.operator)
    elif not isinstance(node, (ConstantNode, VariableNode)):
      raise TypeError(f"Unknown node type {type(node).__name__}")

  @staticmethod
  def is_valid_expression(node: Node, max_depth: Optional[int] = None) -> bool:
    try:
      ExpressionValidator.validate(node, max_depth)
      return True
    except (CalculusError, TypeError):
      return False
