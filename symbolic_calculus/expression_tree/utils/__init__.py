"""Operations and utilities for expression trees."""

from .evaluator import evaluate, evaluate_batch, UNBOUND_POLICIES
from .serializer import serialize, serialize_compact
from .differentiator import differentiate
from .simplifier import ExpressionSimplifier, simplify
from .sympy_utils import to_sympy, from_sympy, parse_expression
from .validator import ExpressionValidator
from .tree_utils import (
    get_all_nodes, iter_with_depth, calculate_tree_depth, count_nodes,
    find_nodes_by_type, find_nodes_by_operator, get_variable_usage_counts,
    get_variable_names, shares_nodes, get_constants, get_variables
)

__all__ = [
    'evaluate', 'evaluate_batch', 'UNBOUND_POLICIES',
    'serialize', 'serialize_compact',
    'differentiate',
    'ExpressionSimplifier', 'simplify',
    'to_sympy', 'from_sympy', 'parse_expression',
    'ExpressionValidator',
    'get_all_nodes', 'iter_with_depth', 'calculate_tree_depth', 'count_nodes',
    'find_nodes_by_type', 'find_nodes_by_operator', 'get_variable_usage_counts',
    'get_variable_names', 'shares_nodes', 'get_constants', 'get_variables'
]
