# Python

"""Symbolic Calculus Package

Expression trees over real or complex numbers with evaluation, symbolic
differentiation and rule-based simplification.
"""

from .expression_tree import (
  Expression, Node, VariableNode, ConstantNode,
  BinaryOpNode, UnaryOpNode, NumericDomain, OpType, PRECEDENCE,
  evaluate, evaluate_batch, serialize, serialize_compact,
  differentiate, simplify, ExpressionSimplifier, ExpressionValidator,
  to_sympy, from_sympy, parse_expression
)
from .errors import (
  ErrorKind, CalculusError, DivisionByZero, UnboundVariable, UnsupportedOperation,
  UnknownOperator, UnknownFunction, DomainMismatch, ExpressionTooDeep, ParseError
)
from .calculator import SymbolicCalculator
from .logging_system import LogLevel, get_logger, set_log_level, configure_logging

__version__ = "0.1.0"
__all__ = [
  "Expression", "Node", "VariableNode", "ConstantNode",
  "BinaryOpNode", "UnaryOpNode", "NumericDomain", "OpType", "PRECEDENCE",
  "evaluate", "evaluate_batch", "serialize", "serialize_compact",
  "differentiate", "simplify", "ExpressionSimplifier", "ExpressionValidator",
  "to_sympy", "from_sympy", "parse_expression",
  "ErrorKind", "CalculusError", "DivisionByZero", "UnboundVariable", "UnsupportedOperation",
  "UnknownOperator", "UnknownFunction", "DomainMismatch", "ExpressionTooDeep", "ParseError",
  "SymbolicCalculator",
  "LogLevel", "get_logger", "set_log_level", "configure_logging"
]
