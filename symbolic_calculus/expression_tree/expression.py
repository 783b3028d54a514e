import numpy as np
import sympy as sp
from typing import Optional, Mapping, List, Union

from .core.node import Node
from .core.domain import NumericDomain
from .utils.evaluator import evaluate, evaluate_batch
from .utils.serializer import serialize, serialize_compact
from .utils.differentiator import differentiate
from .utils.simplifier import simplify
from .utils.sympy_utils import to_sympy, from_sympy, parse_expression
from .utils.tree_utils import calculate_tree_depth, get_variable_names


class Expression:
  """A tree together with the numeric domain it is evaluated in"""

  __slots__ = ('root', 'domain', '_string_cache')

  def __init__(self, root: Node, domain: Union[str, NumericDomain] = NumericDomain.REAL):
    if not isinstance(root, Node):
      raise TypeError(f"Expression root must be a Node, got {type(root).__name__}")
    self.root = root
    self.domain = NumericDomain.resolve(domain)
    self._string_cache: Optional[str] = None

  def evaluate(self, bindings: Optional[Mapping] = None, unbound_policy: str = 'raise'):
    return evaluate(self.root, bindings, self.domain, unbound_policy)

  def evaluate_batch(self, bindings: Optional[Mapping] = None, unbound_policy: str = 'raise') -> np.ndarray:
    return evaluate_batch(self.root, bindings, self.domain, unbound_policy)

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = serialize(self.root, self.domain)
    return self._string_cache

  def to_compact_string(self) -> str:
    return serialize_compact(self.root, self.domain)

  def diff(self, with_respect_to: str) -> 'Expression':
    """Raw derivative, before simplification"""
    return Expression(differentiate(self.root, with_respect_to, self.domain), self.domain)

  def simplify(self) -> 'Expression':
    return Expression(simplify(self.root, self.domain), self.domain)

  def derivative(self, with_respect_to: str) -> 'Expression':
    """Derivative followed by one simplification pass"""
    return self.diff(with_respect_to).simplify()

  def copy(self) -> 'Expression':
    return Expression(self.root.copy(), self.domain)

  def size(self) -> int:
    """Node count"""
    return self.root.size()

  def depth(self) -> int:
    return calculate_tree_depth(self.root)

  def variables(self) -> List[str]:
    return get_variable_names(self.root)

  def to_sympy(self) -> sp.Expr:
    return to_sympy(self.root)

  @classmethod
  def from_sympy(cls, sympy_expr: sp.Expr,
                 domain: Union[str, NumericDomain] = NumericDomain.REAL) -> 'Expression':
    return cls(from_sympy(sympy_expr), domain)

  @classmethod
  def from_string(cls, expr_str: str,
                  domain: Union[str, NumericDomain] = NumericDomain.REAL) -> 'Expression':
    return cls(parse_expression(expr_str), domain)

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.to_string()!r}, domain={self.domain.value!r})"

  def __hash__(self) -> int:
    return hash((self.root, self.domain))

  def __eq__(self, other) -> bool:
    if not isinstance(other, Expression):
      return False
    return self.domain is other.domain and self.root == other.root
