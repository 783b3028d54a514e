"""Core expression tree components."""

from .node import Node, VariableNode, ConstantNode, BinaryOpNode, UnaryOpNode, constant_value
from .domain import NumericDomain, format_real
from .operators import (
    NodeType, OpType, BINARY_OP_MAP, UNARY_OP_MAP, OP_SYMBOLS, PRECEDENCE,
    binary_symbol, unary_symbol, precedence,
    evaluate_constant, evaluate_binary_op, evaluate_unary_op
)

__all__ = [
    'Node', 'VariableNode', 'ConstantNode', 'BinaryOpNode', 'UnaryOpNode', 'constant_value',
    'NumericDomain', 'format_real',
    'NodeType', 'OpType', 'BINARY_OP_MAP', 'UNARY_OP_MAP', 'OP_SYMBOLS', 'PRECEDENCE',
    'binary_symbol', 'unary_symbol', 'precedence',
    'evaluate_constant', 'evaluate_binary_op', 'evaluate_unary_op'
]
