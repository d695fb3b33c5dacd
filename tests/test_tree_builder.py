import numpy as np
import pytest

from data_structures import ExampleSet, InternalNode, make_root_node
from predictor import evaluate_tree_wgtd
from training_context import TrainingContext
from tree_builder import TreeBuilder, TreeBuilderParams, train_tree


def _collect_tree_signature(tree):
    signature = []
    for node in tree:
        if node.leaf:
            signature.append(("L", node.depth, len(node.examples)))
        else:
            signature.append(
                (
                    "S",
                    node.depth,
                    node.split_feature,
                    node.split_value,
                    node.left_child_id,
                    node.right_child_id,
                )
            )
    return signature


def test_separable_data_is_split_once(separable_examples):
    context = TrainingContext.initialize(separable_examples, normalizer=4)
    tree = train_tree(separable_examples, beta=0.0, lambda_=0.0, max_depth=3, context=context)

    assert len(tree) == 3
    root = tree.root
    assert isinstance(root, InternalNode)
    assert (root.split_feature, root.split_value) == (0, 2.0)
    assert (root.left_child_id, root.right_child_id) == (1, 2)
    assert tree[1].leaf and tree[2].leaf
    assert evaluate_tree_wgtd(separable_examples, tree) == 0.0


def test_max_depth_zero_yields_single_node(separable_examples, noisy_example_set, noisy_context):
    context = TrainingContext.initialize(separable_examples, normalizer=4)
    tree = train_tree(separable_examples, beta=0.0, lambda_=0.0, max_depth=0, context=context)
    assert len(tree) == 1
    assert tree.root.leaf

    tree = train_tree(noisy_example_set, beta=0.0, lambda_=0.0, max_depth=0, context=noisy_context)
    assert len(tree) == 1


def test_four_example_scenario(four_examples):
    context = TrainingContext.initialize(four_examples, normalizer=4)
    root = make_root_node(four_examples)
    assert (root.positive_weight, root.negative_weight) == (3.0, 1.0)

    # The tied pair at value 1 cannot be separated, so no threshold improves
    # on the root's weighted error of 1 and the tree stays a single leaf.
    tree = train_tree(four_examples, beta=0.0, lambda_=0.0, max_depth=2, context=context)
    assert len(tree) == 1
    assert evaluate_tree_wgtd(four_examples, tree) == pytest.approx(1.0)


def test_label_pure_node_is_not_split(separable_examples):
    positives = [ex for ex in separable_examples if ex.label == 1]
    context = TrainingContext.initialize(positives, normalizer=2)
    tree = train_tree(positives, beta=0.0, lambda_=0.0, max_depth=4, context=context)
    assert len(tree) == 1


def test_constant_features_stay_leaf():
    examples = ExampleSet(np.ones((6, 2)), np.array([1, -1, 1, -1, 1, 1]), np.full(6, 1.0 / 6))
    context = TrainingContext.initialize(examples, normalizer=6)
    tree = train_tree(examples, beta=0.0, lambda_=0.0, max_depth=3, context=context)
    assert len(tree) == 1


@pytest.mark.parametrize("max_depth", [1, 2, 4])
def test_weight_conservation_and_depth_bound(noisy_example_set, noisy_context, max_depth):
    tree = train_tree(
        noisy_example_set, beta=0.0, lambda_=0.01, max_depth=max_depth, context=noisy_context
    )
    assert len(tree) > 1

    for node_id, node in enumerate(tree):
        assert node.depth <= max_depth
        assert node.positive_weight + node.negative_weight == pytest.approx(
            float(node.examples.weights.sum())
        )
        if not node.leaf:
            assert node_id < node.left_child_id < node.right_child_id
            left, right = tree[node.left_child_id], tree[node.right_child_id]
            assert left.depth == right.depth == node.depth + 1
            assert len(left.examples) + len(right.examples) == len(node.examples)
            assert np.all(left.examples.values[:, node.split_feature] <= node.split_value)
            assert np.all(right.examples.values[:, node.split_feature] > node.split_value)
            child_weight = (
                left.positive_weight + left.negative_weight
                + right.positive_weight + right.negative_weight
            )
            assert child_weight == pytest.approx(node.positive_weight + node.negative_weight)


def test_training_is_deterministic(noisy_example_set, noisy_context):
    first = train_tree(noisy_example_set, beta=0.0, lambda_=0.01, max_depth=3, context=noisy_context)
    second = train_tree(
        list(noisy_example_set), beta=0.0, lambda_=0.01, max_depth=3, context=noisy_context
    )
    assert _collect_tree_signature(first) == _collect_tree_signature(second)


def test_deeper_tree_does_not_increase_training_error(noisy_example_set, noisy_context):
    root_error = evaluate_tree_wgtd(
        noisy_example_set,
        train_tree(noisy_example_set, 0.0, 0.01, 0, noisy_context),
    )
    stump_error = evaluate_tree_wgtd(
        noisy_example_set,
        train_tree(noisy_example_set, 0.0, 0.01, 1, noisy_context),
    )
    assert stump_error < root_error


def test_heavier_penalty_grows_smaller_trees(noisy_example_set, noisy_context):
    light = train_tree(noisy_example_set, beta=0.0, lambda_=0.01, max_depth=4, context=noisy_context)
    # A penalty above 0.5 puts every edge in the null zone.
    heavy = train_tree(noisy_example_set, beta=0.0, lambda_=5.0, max_depth=4, context=noisy_context)
    assert len(light) > 1
    assert len(heavy) == 1


def test_builder_metrics(noisy_example_set, noisy_context):
    builder = TreeBuilder(noisy_context, TreeBuilderParams(max_depth=2, lambda_=0.01))
    tree = builder.build_tree(noisy_example_set)

    assert builder.metrics.nodes_visited == len(tree)
    assert builder.metrics.nodes_split == len(tree) - tree.num_leaves
    assert builder.metrics.thresholds_scanned > 0
    assert len(builder.metrics.node_metrics) == len(tree)
    assert [m["node_id"] for m in builder.metrics.node_metrics] == list(range(len(tree)))


def test_builder_params_validation():
    with pytest.raises(ValueError):
        TreeBuilderParams(max_depth=-1)
    with pytest.raises(ValueError):
        TreeBuilderParams(beta=-0.1)
    with pytest.raises(ValueError):
        TreeBuilderParams(lambda_=-0.1)
