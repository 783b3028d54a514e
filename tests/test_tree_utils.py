import pytest

from symbolic_calculus import (
    ConstantNode, VariableNode, UnaryOpNode, BinaryOpNode,
    ExpressionValidator, ExpressionTooDeep
)
from symbolic_calculus.expression_tree.utils.tree_utils import (
    get_all_nodes, iter_with_depth, calculate_tree_depth, count_nodes,
    find_nodes_by_type, find_nodes_by_operator, get_variable_usage_counts,
    get_variable_names, shares_nodes, get_constants, get_variables
)

x = VariableNode('x')
y = VariableNode('y')


def C(value):
    return ConstantNode(value)


@pytest.fixture
def sample_tree():
    # (x + 2) * sin(y * x)
    return BinaryOpNode('*', BinaryOpNode('+', x, C(2)), UnaryOpNode('sin', BinaryOpNode('*', y, x)))


def test_traversal_orders(sample_tree):
    breadth = get_all_nodes(sample_tree)
    assert [type(n).__name__ for n in breadth[:3]] == ['BinaryOpNode', 'BinaryOpNode', 'UnaryOpNode']
    depth = get_all_nodes(sample_tree, 'depth_first')
    assert depth[1].operator == '+'
    assert depth[2] == x
    assert len(breadth) == len(depth) == 8
    with pytest.raises(ValueError):
        get_all_nodes(sample_tree, 'sideways')


def test_depth_and_counts(sample_tree):
    assert calculate_tree_depth(sample_tree) == 4
    assert calculate_tree_depth(x) == 1
    assert count_nodes(sample_tree) == sample_tree.size() == 8
    depths = [depth for _, depth in iter_with_depth(sample_tree)]
    assert depths[0] == 1 and max(depths) == 4


def test_finders(sample_tree):
    assert len(find_nodes_by_type(sample_tree, BinaryOpNode)) == 3
    assert len(find_nodes_by_operator(sample_tree, '*')) == 2
    assert len(find_nodes_by_operator(sample_tree, 'sin')) == 1
    assert [c.value for c in get_constants(sample_tree)] == [2.0]
    assert len(get_variables(sample_tree)) == 3


def test_variable_queries(sample_tree):
    assert get_variable_usage_counts(sample_tree) == {'x': 2, 'y': 1}
    assert get_variable_names(sample_tree) == ['x', 'y']


def test_shares_nodes(sample_tree):
    assert shares_nodes(sample_tree, sample_tree.left)
    assert not shares_nodes(sample_tree, sample_tree.copy())


def test_validator_accepts_well_formed_tree(sample_tree):
    ExpressionValidator.validate(sample_tree)
    assert ExpressionValidator.is_valid_expression(sample_tree, max_depth=4)
    assert not ExpressionValidator.is_valid_expression(sample_tree, max_depth=3)
    assert not ExpressionValidator.is_valid_expression("x")


def test_validator_handles_trees_past_the_recursion_limit():
    node = x
    for _ in range(3000):
        node = UnaryOpNode('exp', node)
    assert calculate_tree_depth(node) == 3001
    with pytest.raises(ExpressionTooDeep):
        ExpressionValidator.validate(node, max_depth=500)
    # no limit means only the structure is checked
    ExpressionValidator.validate(node)


def test_validator_rejects_non_nodes():
    with pytest.raises(TypeError):
        ExpressionValidator.validate(3.0)
