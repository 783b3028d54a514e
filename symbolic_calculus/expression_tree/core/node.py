import numpy as np
from abc import ABC, abstractmethod
from typing import Optional, Tuple, Union
from .operators import (
  NodeType, OpType, BINARY_OP_MAP, UNARY_OP_MAP, PRECEDENCE,
  binary_symbol, unary_symbol
)


class Node(ABC):
  """Base node class with size and hash caching.

  Nodes are immutable once constructed: every attribute may be assigned
  exactly once, in ``__init__``. Transformations build new trees instead of
  editing existing ones, so a tree can be read from several places at once.
  """

  __slots__ = ('_hash_cache', '_size_cache')

  node_type: NodeType

  def __init__(self):
    object.__setattr__(self, '_hash_cache', None)
    object.__setattr__(self, '_size_cache', None)

  def __setattr__(self, name, value):
    if hasattr(self, name):
      raise AttributeError(f"{type(self).__name__} is immutable, cannot reassign '{name}'")
    object.__setattr__(self, name, value)

  def __delattr__(self, name):
    raise AttributeError(f"{type(self).__name__} is immutable, cannot delete '{name}'")

  @abstractmethod
  def children(self) -> Tuple['Node', ...]:
    pass

  @abstractmethod
  def copy(self) -> 'Node':
    """Deep copy; the result shares no node objects with self"""
    pass

  def is_leaf(self) -> bool:
    return not self.children()

  def size(self) -> int:
    """Node count"""
    if self._size_cache is None:
      object.__setattr__(self, '_size_cache', 1 + sum(child.size() for child in self.children()))
    return self._size_cache

  def __hash__(self) -> int:
    if self._hash_cache is None:
      object.__setattr__(self, '_hash_cache', self._compute_hash())
    return self._hash_cache

  @abstractmethod
  def _compute_hash(self) -> int:
    pass

  @abstractmethod
  def __eq__(self, other) -> bool:
    pass

  def __ne__(self, other) -> bool:
    return not self.__eq__(other)


class ConstantNode(Node):
  __slots__ = ('value',)

  node_type = NodeType.CONSTANT

  def __init__(self, value: Union[int, float, complex, np.number]):
    super().__init__()
    if isinstance(value, (complex, np.complexfloating)):
      self.value = complex(value)
    else:
      self.value = float(value)

  @property
  def is_complex(self) -> bool:
    return isinstance(self.value, complex)

  def children(self) -> Tuple[Node, ...]:
    return ()

  def copy(self) -> 'ConstantNode':
    return ConstantNode(self.value)

  def _compute_hash(self) -> int:
    return hash((NodeType.CONSTANT, self.value))

  def __eq__(self, other) -> bool:
    return isinstance(other, ConstantNode) and self.value == other.value

  __hash__ = Node.__hash__

  def __repr__(self) -> str:
    return f"ConstantNode({self.value!r})"


class VariableNode(Node):
  __slots__ = ('name',)

  node_type = NodeType.VARIABLE

  def __init__(self, name: str):
    super().__init__()
    if not isinstance(name, str) or not name:
      raise TypeError(f"Variable name must be a non-empty string, got {name!r}")
    self.name = name

  def children(self) -> Tuple[Node, ...]:
    return ()

  def copy(self) -> 'VariableNode':
    return VariableNode(self.name)

  def _compute_hash(self) -> int:
    return hash((NodeType.VARIABLE, self.name))

  def __eq__(self, other) -> bool:
    return isinstance(other, VariableNode) and self.name == other.name

  __hash__ = Node.__hash__

  def __repr__(self) -> str:
    return f"VariableNode({self.name!r})"


class UnaryOpNode(Node):
  __slots__ = ('operator', 'operand')

  node_type = NodeType.UNARY_OP

  def __init__(self, operator: Union[str, OpType], operand: Node):
    super().__init__()
    if not isinstance(operand, Node):
      raise TypeError(f"Operand must be a Node, got {type(operand).__name__}")
    self.operator = unary_symbol(operator)
    self.operand = operand

  @property
  def op_type(self) -> OpType:
    return UNARY_OP_MAP[self.operator]

  def children(self) -> Tuple[Node, ...]:
    return (self.operand,)

  def copy(self) -> 'UnaryOpNode':
    return UnaryOpNode(self.operator, self.operand.copy())

  def _compute_hash(self) -> int:
    return hash((NodeType.UNARY_OP, self.operator, hash(self.operand)))

  def __eq__(self, other) -> bool:
    return (isinstance(other, UnaryOpNode) and self.operator == other.operator
            and self.operand == other.operand)

  __hash__ = Node.__hash__

  def __repr__(self) -> str:
    return f"UnaryOpNode({self.operator!r}, {self.operand!r})"


class BinaryOpNode(Node):
  __slots__ = ('operator', 'left', 'right')

  node_type = NodeType.BINARY_OP

  def __init__(self, operator: Union[str, OpType], left: Node, right: Node):
    super().__init__()
    if not isinstance(left, Node) or not isinstance(right, Node):
      raise TypeError("Binary operands must be Node instances")
    self.operator = binary_symbol(operator)
    self.left = left
    self.right = right

  @property
  def op_type(self) -> OpType:
    return BINARY_OP_MAP[self.operator]

  @property
  def precedence(self) -> int:
    return PRECEDENCE[self.operator]

  def children(self) -> Tuple[Node, ...]:
    return (self.left, self.right)

  def copy(self) -> 'BinaryOpNode':
    return BinaryOpNode(self.operator, self.left.copy(), self.right.copy())

  def _compute_hash(self) -> int:
    return hash((NodeType.BINARY_OP, self.operator, hash(self.left), hash(self.right)))

  def __eq__(self, other) -> bool:
    return (isinstance(other, BinaryOpNode) and self.operator == other.operator
            and self.left == other.left and self.right == other.right)

  __hash__ = Node.__hash__

  def __repr__(self) -> str:
    return f"BinaryOpNode({self.operator!r}, {self.left!r}, {self.right!r})"


def constant_value(node: Node) -> Optional[Union[float, complex]]:
  """Value of a literal constant node, None for any other node"""
  if isinstance(node, ConstantNode):
    return node.value
  return None
