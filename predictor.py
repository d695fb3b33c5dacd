from __future__ import annotations

from typing import Sequence

import numpy as np

from data_structures.example import Example, ExampleSet
from data_structures.tree import Tree


def classify_example(example: Example | Sequence[float] | np.ndarray, tree: Tree) -> int:
    values = example.values if isinstance(example, Example) else example

    node = tree.root
    while not node.leaf:
        if node.goes_left(values):
            node = tree[node.left_child_id]
        else:
            node = tree[node.right_child_id]

    return node.prediction


def evaluate_tree_wgtd(examples: ExampleSet | Sequence[Example], tree: Tree) -> float:
    """Total weight of the examples the tree misclassifies (not normalized)."""
    if isinstance(examples, ExampleSet):
        predictions = predict_batch(tree, examples.values)
        wrong = predictions != examples.labels
        return float(examples.weights[wrong].sum())

    wgtd_error = 0.0
    for example in examples:
        if classify_example(example, tree) != example.label:
            wgtd_error += example.weight
    return wgtd_error


def predict_batch(tree: Tree, X: np.ndarray) -> np.ndarray:
    X = np.asarray(X, dtype=np.float64)
    if X.ndim != 2:
        raise ValueError("X must be a 2D array")

    preds = np.zeros(X.shape[0], dtype=np.int8)
    for i in range(X.shape[0]):
        preds[i] = classify_example(X[i], tree)
    return preds
