"""
Numeric evaluation of expression trees.

``evaluate`` walks a tree against a mapping of variable bindings and returns
a numpy scalar of the active domain. ``evaluate_batch`` does the same over
arrays of bindings using the numba kernels from ``core.operators``.

Floating-point domain problems (negative base with a fractional exponent,
log of a negative real, overflow) produce NaN/inf values that propagate
through the result. Only a zero divisor and a missing binding are errors.
"""

import numpy as np
from typing import Mapping, Optional, Union

from ..core.node import Node, ConstantNode, VariableNode, UnaryOpNode, BinaryOpNode
from ..core.domain import NumericDomain, Number
from ..core.operators import evaluate_constant, evaluate_binary_op, evaluate_unary_op
from ...errors import DivisionByZero, UnboundVariable, UnknownOperator, UnknownFunction

UNBOUND_POLICIES = ('raise', 'zero')

UNARY_FUNCTIONS = {
  'sin': np.sin,
  'cos': np.cos,
  'ln': np.log,
  'exp': np.exp,
}


def check_unbound_policy(unbound_policy: str) -> str:
  if unbound_policy not in UNBOUND_POLICIES:
    raise ValueError(f"Invalid unbound_policy '{unbound_policy}'. Choose from {UNBOUND_POLICIES}.")
  return unbound_policy


def evaluate(node: Node, bindings: Optional[Mapping[str, Number]] = None,
             domain: Union[str, NumericDomain] = NumericDomain.REAL,
             unbound_policy: str = 'raise'):
  """
  Evaluate a tree to a single value.

  Args:
      node: Root of the tree
      bindings: Variable name -> value, looked up when a variable is reached
      domain: 'real' (np.float64 results) or 'complex' (np.complex128 results)
      unbound_policy: 'raise' to fail with UnboundVariable on a missing name,
          'zero' to read missing names as the domain zero

  Returns:
      Numpy scalar of the domain's dtype
  """
  domain = NumericDomain.resolve(domain)
  check_unbound_policy(unbound_policy)
  bindings = {} if bindings is None else bindings

  with np.errstate(all='ignore'):
    return _evaluate(node, bindings, domain, unbound_policy)


def _evaluate(node: Node, bindings: Mapping[str, Number], domain: NumericDomain, unbound_policy: str):
  if isinstance(node, ConstantNode):
    return domain.coerce(node.value)

  if isinstance(node, VariableNode):
    if node.name in bindings:
      return domain.coerce(bindings[node.name])
    if unbound_policy == 'zero':
      return domain.zero()
    raise UnboundVariable(node.name)

  if isinstance(node, UnaryOpNode):
    operand = _evaluate(node.operand, bindings, domain, unbound_policy)
    func = UNARY_FUNCTIONS.get(node.operator)
    if func is None:
      raise UnknownFunction(node.operator)
    return domain.dtype(func(operand))

  if isinstance(node, BinaryOpNode):
    left = _evaluate(node.left, bindings, domain, unbound_policy)
    right = _evaluate(node.right, bindings, domain, unbound_policy)
    operator = node.operator
    if operator == '+':
      return left + right
    elif operator == '-':
      return left - right
    elif operator == '*':
      return left * right
    elif operator == '/':
      if right == domain.zero():
        raise DivisionByZero("Division by zero")
      return left / right
    elif operator == '^':
      return domain.dtype(np.power(left, right))
    raise UnknownOperator(operator)

  raise TypeError(f"Cannot evaluate object of type {type(node).__name__}")


def evaluate_batch(node: Node, bindings: Optional[Mapping[str, np.ndarray]] = None,
                   domain: Union[str, NumericDomain] = NumericDomain.REAL,
                   unbound_policy: str = 'raise') -> np.ndarray:
  """
  Evaluate a tree for many binding sets at once.

  Every binding is a 1-D array and all arrays share one length; sample ``i``
  of the result uses entry ``i`` of each array. With no bindings the result
  has a single sample.
  """
  domain = NumericDomain.resolve(domain)
  check_unbound_policy(unbound_policy)

  arrays = {}
  for name, values in (bindings or {}).items():
    arr = domain.coerce_array(np.atleast_1d(values))
    if arr.ndim != 1:
      raise ValueError(f"Binding '{name}' must be one-dimensional, got shape {arr.shape}")
    arrays[name] = arr

  lengths = {arr.shape[0] for arr in arrays.values()}
  if len(lengths) > 1:
    raise ValueError(f"All bindings must have the same length, got {sorted(lengths)}")
  n_samples = lengths.pop() if lengths else 1

  with np.errstate(all='ignore'):
    return _evaluate_batch(node, arrays, n_samples, domain, unbound_policy)


def _evaluate_batch(node: Node, arrays, n_samples: int, domain: NumericDomain, unbound_policy: str) -> np.ndarray:
  if isinstance(node, ConstantNode):
    return evaluate_constant(n_samples, domain.coerce(node.value))

  if isinstance(node, VariableNode):
    if node.name in arrays:
      return arrays[node.name].copy()
    if unbound_policy == 'zero':
      return np.zeros(n_samples, dtype=domain.dtype)
    raise UnboundVariable(node.name)

  if isinstance(node, UnaryOpNode):
    if node.operator not in UNARY_FUNCTIONS:
      raise UnknownFunction(node.operator)
    operand_val = _evaluate_batch(node.operand, arrays, n_samples, domain, unbound_policy)
    return evaluate_unary_op(operand_val, node.operator)

  if isinstance(node, BinaryOpNode):
    left_val = _evaluate_batch(node.left, arrays, n_samples, domain, unbound_policy)
    right_val = _evaluate_batch(node.right, arrays, n_samples, domain, unbound_policy)
    if node.operator == '/' and np.any(right_val == 0):
      raise DivisionByZero("Division by zero in batch evaluation")
    if node.operator not in ('+', '-', '*', '/', '^'):
      raise UnknownOperator(node.operator)
    return evaluate_binary_op(left_val, right_val, node.operator)

  raise TypeError(f"Cannot evaluate object of type {type(node).__name__}")
