import numpy as np
import numba
from enum import IntEnum
from typing import Union

from ...errors import UnknownOperator, UnknownFunction

class NodeType(IntEnum):
  CONSTANT = 0
  VARIABLE = 1
  UNARY_OP = 2
  BINARY_OP = 3

class OpType(IntEnum):
  # Binary ops
  ADD = 0
  SUB = 1
  MUL = 2
  DIV = 3
  POW = 4
  # Unary ops
  SIN = 5
  COS = 6
  LN = 7
  EXP = 8

# Mapping dictionaries
BINARY_OP_MAP = {'+': OpType.ADD, '-': OpType.SUB, '*': OpType.MUL, '/': OpType.DIV, '^': OpType.POW}
UNARY_OP_MAP = {'sin': OpType.SIN, 'cos': OpType.COS, 'ln': OpType.LN, 'exp': OpType.EXP}

OP_SYMBOLS = {op: symbol for symbol, op in {**BINARY_OP_MAP, **UNARY_OP_MAP}.items()}

# Used for parenthesization decisions only; the serializer always parenthesizes
PRECEDENCE = {'+': 1, '-': 1, '*': 2, '/': 2, '^': 3}


def binary_symbol(operator: Union[str, OpType]) -> str:
  """Normalize a binary operator given as symbol or OpType to its symbol"""
  if isinstance(operator, OpType):
    symbol = OP_SYMBOLS.get(operator)
  else:
    symbol = operator
  if symbol not in BINARY_OP_MAP:
    raise UnknownOperator(operator)
  return symbol


def unary_symbol(function: Union[str, OpType]) -> str:
  """Normalize a unary function given as name or OpType to its name"""
  if isinstance(function, OpType):
    name = OP_SYMBOLS.get(function)
  else:
    name = function
  if name not in UNARY_OP_MAP:
    raise UnknownFunction(function)
  return name


def precedence(operator: Union[str, OpType]) -> int:
  return PRECEDENCE[binary_symbol(operator)]


# Vectorised kernels. Divisors are checked for zeros by the caller, these
# only do the arithmetic.

@numba.njit(cache=True, inline='always')
def evaluate_constant(n_samples, value):
  return np.full(n_samples, value)

@numba.njit(cache=True)
def evaluate_binary_op(left_val, right_val, operator):
  if operator == '+':
    return left_val + right_val
  elif operator == '-':
    return left_val - right_val
  elif operator == '*':
    return left_val * right_val
  elif operator == '/':
    return left_val / right_val
  elif operator == '^':
    return np.power(left_val, right_val)
  raise ValueError("unknown binary operator")

@numba.njit(cache=True)
def evaluate_unary_op(operand_val, operator):
  if operator == 'sin':
    return np.sin(operand_val)
  elif operator == 'cos':
    return np.cos(operand_val)
  elif operator == 'ln':
    return np.log(operand_val)
  elif operator == 'exp':
    return np.exp(operand_val)
  raise ValueError("unknown unary operator")
