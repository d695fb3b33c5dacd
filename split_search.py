from __future__ import annotations

from dataclasses import dataclass, field
import time

import numpy as np

from data_structures.tree import Node
from scoring import TOLERANCE, ScoringParams, gradient
from training_context import TrainingContext


@dataclass
class SplitSearchMetrics:
    features_searched: int = 0
    thresholds_scanned: int = 0
    time_spent_sec: float = 0.0


@dataclass
class SplitSearchResult:
    split_value: float | None
    gain: float
    metrics: SplitSearchMetrics = field(default_factory=SplitSearchMetrics)


@dataclass
class BestSplit:
    feature: int | None
    split_value: float | None
    gain: float
    metrics: SplitSearchMetrics = field(default_factory=SplitSearchMetrics)


def value_to_weights(node: Node, feature: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Distinct values of ``feature`` (ascending) with their +1 / -1 weight sums."""
    examples = node.examples
    if len(examples) == 0:
        empty = np.empty(0, dtype=np.float64)
        return empty, empty.copy(), empty.copy()

    values, inverse = np.unique(examples.values[:, feature], return_inverse=True)
    positive = examples.labels == 1
    pos_weights = np.bincount(
        inverse[positive], weights=examples.weights[positive], minlength=values.size
    )
    neg_weights = np.bincount(
        inverse[~positive], weights=examples.weights[~positive], minlength=values.size
    )
    return values, pos_weights.astype(np.float64), neg_weights.astype(np.float64)


def best_split_value(
    node: Node,
    feature: int,
    tree_size: int,
    context: TrainingContext,
    params: ScoringParams,
) -> SplitSearchResult:
    start = time.perf_counter()
    metrics = SplitSearchMetrics(features_searched=1)

    values, pos_weights, neg_weights = value_to_weights(node, feature)

    left_pos = left_neg = 0.0
    right_pos = node.positive_weight
    right_neg = node.negative_weight

    old_error = min(right_pos, right_neg)
    old_gradient = gradient(old_error, tree_size, 0.0, -1, params.beta, params.lambda_, context)

    best_value: float | None = None
    best_gain = 0.0
    for value, pos, neg in zip(values, pos_weights, neg_weights):
        left_pos += pos
        right_pos -= pos
        left_neg += neg
        right_neg -= neg

        new_error = min(left_pos, left_neg) + min(right_pos, right_neg)
        new_gradient = gradient(
            new_error, tree_size + 2, 0.0, -1, params.beta, params.lambda_, context
        )
        gain = abs(new_gradient) - abs(old_gradient)
        metrics.thresholds_scanned += 1
        # Strict improvement beyond tolerance: the first of tied values wins.
        if gain > best_gain + TOLERANCE:
            best_gain = gain
            best_value = float(value)

    metrics.time_spent_sec = time.perf_counter() - start
    return SplitSearchResult(split_value=best_value, gain=best_gain, metrics=metrics)


def find_best_split(
    node: Node,
    tree_size: int,
    context: TrainingContext,
    params: ScoringParams,
) -> BestSplit:
    """Best (feature, threshold) over all features, scanned in index order."""
    result = BestSplit(feature=None, split_value=None, gain=0.0)

    for feature in range(context.num_features):
        candidate = best_split_value(node, feature, tree_size, context, params)
        result.metrics.features_searched += 1
        result.metrics.thresholds_scanned += candidate.metrics.thresholds_scanned
        result.metrics.time_spent_sec += candidate.metrics.time_spent_sec

        if candidate.gain > result.gain + TOLERANCE:
            result.feature = feature
            result.split_value = candidate.split_value
            result.gain = candidate.gain

    return result
