"""Expression Tree Module

Expression tree model and the operations over it: evaluation,
serialization, symbolic differentiation and simplification.
"""

from .expression import Expression
from .core.node import (
    Node,
    VariableNode,
    ConstantNode,
    BinaryOpNode,
    UnaryOpNode
)
from .core.domain import NumericDomain
from .core.operators import (
    NodeType,
    OpType,
    BINARY_OP_MAP,
    UNARY_OP_MAP,
    PRECEDENCE,
    evaluate_binary_op,
    evaluate_unary_op
)
from .utils import (
    evaluate, evaluate_batch, serialize, serialize_compact,
    differentiate, ExpressionSimplifier, simplify,
    to_sympy, from_sympy, parse_expression, ExpressionValidator
)

__all__ = [
    "Expression",
    "Node", "VariableNode", "ConstantNode", "BinaryOpNode", "UnaryOpNode",
    "NumericDomain",
    "NodeType", "OpType",
    "BINARY_OP_MAP", "UNARY_OP_MAP", "PRECEDENCE",
    "evaluate_binary_op", "evaluate_unary_op",
    "evaluate", "evaluate_batch", "serialize", "serialize_compact",
    "differentiate", "ExpressionSimplifier", "simplify",
    "to_sympy", "from_sympy", "parse_expression", "ExpressionValidator"
]
