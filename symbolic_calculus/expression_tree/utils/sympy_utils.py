import numpy as np
import sympy as sp
from sympy.parsing.sympy_parser import parse_expr, standard_transformations, convert_xor
from tokenize import TokenError

from ..core.node import Node, ConstantNode, VariableNode, UnaryOpNode, BinaryOpNode
from ...errors import ParseError, UnknownFunction

SYMPY_FUNCTIONS = {
  'sin': sp.sin,
  'cos': sp.cos,
  'ln': sp.log,
  'exp': sp.exp,
}

# sympy function class -> our function name
FUNCTION_NAMES = {sp.sin: 'sin', sp.cos: 'cos', sp.log: 'ln', sp.exp: 'exp'}

PARSE_TRANSFORMATIONS = standard_transformations + (convert_xor,)


def _sympy_number(value: float) -> sp.Expr:
  if np.isfinite(value) and value == int(value):
    return sp.Integer(int(value))
  return sp.Float(value)


def to_sympy(node: Node) -> sp.Expr:
  """Convert a tree to the equivalent SymPy expression"""
  if isinstance(node, ConstantNode):
    if node.is_complex:
      return _sympy_number(node.value.real) + sp.I * _sympy_number(node.value.imag)
    return _sympy_number(node.value)

  if isinstance(node, VariableNode):
    return sp.Symbol(node.name)

  if isinstance(node, UnaryOpNode):
    return SYMPY_FUNCTIONS[node.operator](to_sympy(node.operand))

  if isinstance(node, BinaryOpNode):
    left = to_sympy(node.left)
    right = to_sympy(node.right)
    if node.operator == '+':
      return sp.Add(left, right)
    elif node.operator == '-':
      return sp.Add(left, sp.Mul(-1, right))
    elif node.operator == '*':
      return sp.Mul(left, right)
    elif node.operator == '/':
      return sp.Mul(left, sp.Pow(right, -1))
    elif node.operator == '^':
      return sp.Pow(left, right)

  raise TypeError(f"to_sympy reached unexpected node {type(node).__name__}")


def from_sympy(sympy_expr: sp.Expr) -> Node:
  """Convert a SymPy expression to our node structure.

  n-ary sums and products are folded left to right, terms with a negative
  sign become subtractions and ``b**-n`` factors become divisions.
  """
  if sympy_expr.is_Symbol:
    return VariableNode(sympy_expr.name)

  if sympy_expr.func in FUNCTION_NAMES:
    if len(sympy_expr.args) != 1:
      raise UnknownFunction(f"{sympy_expr.func.__name__} with {len(sympy_expr.args)} arguments")
    return UnaryOpNode(FUNCTION_NAMES[sympy_expr.func], from_sympy(sympy_expr.args[0]))

  if sympy_expr.is_number and not sympy_expr.free_symbols:
    value = complex(sympy_expr.evalf())
    if value.imag == 0:
      return ConstantNode(value.real)
    return ConstantNode(value)

  if isinstance(sympy_expr, sp.Add):
    terms = sympy_expr.as_ordered_terms()
    result = from_sympy(terms[0])
    for term in terms[1:]:
      if term.could_extract_minus_sign():
        result = BinaryOpNode('-', result, from_sympy(-term))
      else:
        result = BinaryOpNode('+', result, from_sympy(term))
    return result

  if isinstance(sympy_expr, sp.Mul):
    return _mul_to_node(sympy_expr)

  if isinstance(sympy_expr, sp.Pow):
    base, exponent = sympy_expr.args
    if exponent.is_number and exponent.is_negative:
      denominator = from_sympy(base) if exponent == -1 else BinaryOpNode('^', from_sympy(base), from_sympy(-exponent))
      return BinaryOpNode('/', ConstantNode(1), denominator)
    return BinaryOpNode('^', from_sympy(base), from_sympy(exponent))

  raise UnknownFunction(type(sympy_expr).__name__)


def _mul_to_node(sympy_expr: sp.Mul) -> Node:
  numerator = []
  denominator = []
  for factor in sympy_expr.as_ordered_factors():
    if isinstance(factor, sp.Pow) and factor.args[1].is_number and factor.args[1].is_negative:
      base, exponent = factor.args
      denominator.append(base if exponent == -1 else sp.Pow(base, -exponent, evaluate=False))
    else:
      numerator.append(factor)

  if numerator:
    result = from_sympy(numerator[0])
    for factor in numerator[1:]:
      result = BinaryOpNode('*', result, from_sympy(factor))
  else:
    result = ConstantNode(1)

  for factor in denominator:
    result = BinaryOpNode('/', result, from_sympy(factor))
  return result


def parse_expression(text: str) -> Node:
  """
  Parse infix text into a tree using SymPy's parser.

  ``^`` is read as a power and ``ln`` as the natural logarithm. SymPy's own
  names (``E``, ``I``, ``pi``) keep their SymPy meaning.
  """
  if not isinstance(text, str) or not text.strip():
    raise ParseError("Expression text must be a non-empty string")
  try:
    sympy_expr = parse_expr(
      text,
      local_dict={'ln': sp.log},
      transformations=PARSE_TRANSFORMATIONS,
      evaluate=False)
  except (SyntaxError, TypeError, ValueError, AttributeError, TokenError) as e:
    raise ParseError(f"Could not parse '{text}': {e}") from e
  if not isinstance(sympy_expr, sp.Expr):
    raise ParseError(f"'{text}' is not an arithmetic expression")
  return from_sympy(sympy_expr)
