from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Sequence

from data_structures.example import Example, ExampleSet
from data_structures.tree import Tree, make_child_nodes, make_root_node
from scoring import TOLERANCE, ScoringParams
from split_search import BestSplit, find_best_split
from training_context import TrainingContext

logger = logging.getLogger(__name__)


@dataclass
class TreeBuildMetrics:
    nodes_visited: int = 0
    nodes_split: int = 0
    thresholds_scanned: int = 0
    split_search_time_sec: float = 0.0
    node_metrics: list[dict] = field(default_factory=list)


@dataclass
class TreeBuilderParams:
    max_depth: int = 3
    beta: float = 0.0
    lambda_: float = 0.0

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        if self.beta < 0.0:
            raise ValueError("beta must be >= 0")
        if self.lambda_ < 0.0:
            raise ValueError("lambda_ must be >= 0")

    @property
    def scoring(self) -> ScoringParams:
        return ScoringParams(beta=self.beta, lambda_=self.lambda_)


class TreeBuilder:
    """Greedy top-down growth driven by the penalized-gradient split gain."""

    def __init__(self, context: TrainingContext, params: TreeBuilderParams | None = None) -> None:
        self.context = context
        self.params = params or TreeBuilderParams()
        self.metrics = TreeBuildMetrics()

    def _find_best_split(self, tree: Tree, node_id: int) -> BestSplit:
        node = tree[node_id]
        split = find_best_split(node, len(tree), self.context, self.params.scoring)

        self.metrics.thresholds_scanned += split.metrics.thresholds_scanned
        self.metrics.split_search_time_sec += split.metrics.time_spent_sec
        self.metrics.node_metrics.append(
            {
                "node_id": node_id,
                "depth": node.depth,
                "node_size": len(node.examples),
                "tree_size": len(tree),
                "feature": split.feature,
                "split_value": split.split_value,
                "gain": split.gain,
            }
        )
        return split

    def build_tree(self, examples: ExampleSet | Sequence[Example]) -> Tree:
        tree = Tree(make_root_node(examples))

        # Children are appended behind every pending node, so walking ids in
        # order is a breadth-first expansion; len(tree) grows as we go.
        node_id = 0
        while node_id < len(tree):
            node = tree[node_id]
            self.metrics.nodes_visited += 1

            split = self._find_best_split(tree, node_id)
            if node.depth < self.params.max_depth and split.gain > TOLERANCE:
                left_id, right_id = make_child_nodes(
                    tree, node_id, split.feature, split.split_value
                )
                self.metrics.nodes_split += 1
                logger.debug(
                    "split node %d (depth %d) on feature %d <= %r, gain %.6g -> children %d, %d",
                    node_id,
                    node.depth,
                    split.feature,
                    split.split_value,
                    split.gain,
                    left_id,
                    right_id,
                )
            node_id += 1

        logger.debug(
            "built tree: %d nodes, %d leaves, depth %d, %d thresholds scanned in %.3fs",
            len(tree),
            tree.num_leaves,
            tree.depth,
            self.metrics.thresholds_scanned,
            self.metrics.split_search_time_sec,
        )
        return tree


def train_tree(
    examples: ExampleSet | Sequence[Example],
    beta: float,
    lambda_: float,
    max_depth: int,
    context: TrainingContext,
) -> Tree:
    params = TreeBuilderParams(max_depth=max_depth, beta=beta, lambda_=lambda_)
    return TreeBuilder(context, params).build_tree(examples)
