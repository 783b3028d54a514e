"""
Tree Utility Functions

Traversal and inspection helpers shared by the expression wrapper, the
validator and the tests. Traversals here are iterative so they are safe on
trees deeper than the interpreter's recursion limit.
"""

from collections import deque
from typing import List, Dict, Tuple, cast

from ..core.node import Node, BinaryOpNode, UnaryOpNode, ConstantNode, VariableNode


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first' (pre-order,
            left before right)

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    nodes_to_visit = deque([node])
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.popleft()
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children())

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    stack = [node]
    all_nodes = []

    while stack:
        current_node = stack.pop()
        all_nodes.append(current_node)
        stack.extend(reversed(current_node.children()))

    return all_nodes


def iter_with_depth(node: Node) -> List[Tuple[Node, int]]:
    """Pre-order list of (node, depth) pairs; the root has depth 1"""
    stack = [(node, 1)]
    result = []

    while stack:
        current_node, depth = stack.pop()
        result.append((current_node, depth))
        for child in reversed(current_node.children()):
            stack.append((child, depth + 1))

    return result


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    return max(depth for _, depth in iter_with_depth(node))


def count_nodes(node: Node) -> int:
    return len(_breadth_first_traversal(node))


def find_nodes_by_type(node: Node, node_type: type) -> List[Node]:
    return [n for n in get_all_nodes(node) if isinstance(n, node_type)]


def find_nodes_by_operator(node: Node, operator: str) -> List[Node]:
    return [n for n in get_all_nodes(node)
            if isinstance(n, (BinaryOpNode, UnaryOpNode)) and n.operator == operator]


def get_variable_usage_counts(node: Node) -> Dict[str, int]:
    """Count how often each variable name occurs in the tree."""
    usage_counts: Dict[str, int] = {}
    for var_node in get_variables(node):
        usage_counts[var_node.name] = usage_counts.get(var_node.name, 0) + 1
    return usage_counts


def get_variable_names(node: Node) -> List[str]:
    """Distinct variable names in order of first appearance (pre-order)."""
    names: List[str] = []
    for n in _depth_first_traversal(node):
        if isinstance(n, VariableNode) and n.name not in names:
            names.append(n.name)
    return names


def shares_nodes(first: Node, second: Node) -> bool:
    """True when the two trees have at least one node object in common."""
    first_ids = {id(n) for n in get_all_nodes(first)}
    return any(id(n) in first_ids for n in get_all_nodes(second))


def get_constants(node: Node) -> List[ConstantNode]:
    """Get all constant nodes in the tree."""
    return cast(List[ConstantNode], find_nodes_by_type(node, ConstantNode))


def get_variables(node: Node) -> List[VariableNode]:
    """Get all variable nodes in the tree."""
    return cast(List[VariableNode], find_nodes_by_type(node, VariableNode))
