from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence, Union

import numpy as np

from data_structures.example import Example, ExampleSet


@dataclass
class LeafNode:
    examples: ExampleSet
    positive_weight: float
    negative_weight: float
    depth: int

    @property
    def leaf(self) -> bool:
        return True

    @property
    def prediction(self) -> int:
        # Ties favor the positive label.
        return 1 if self.positive_weight >= self.negative_weight else -1


@dataclass
class InternalNode:
    examples: ExampleSet
    positive_weight: float
    negative_weight: float
    depth: int
    split_feature: int
    split_value: float
    left_child_id: int
    right_child_id: int

    @property
    def leaf(self) -> bool:
        return False

    def goes_left(self, values: Sequence[float] | np.ndarray) -> bool:
        return values[self.split_feature] <= self.split_value


Node = Union[LeafNode, InternalNode]


def _leaf_from_examples(examples: ExampleSet, depth: int) -> LeafNode:
    return LeafNode(
        examples=examples,
        positive_weight=examples.positive_weight,
        negative_weight=examples.negative_weight,
        depth=depth,
    )


def make_root_node(examples: ExampleSet | Sequence[Example]) -> LeafNode:
    """Seed node holding an owned copy of ``examples`` and its label weights."""
    if isinstance(examples, ExampleSet):
        examples = examples.take(np.arange(len(examples)))
    else:
        examples = ExampleSet.from_examples(examples)
    return _leaf_from_examples(examples, depth=0)


class Tree:
    """Append-only arena of nodes; index 0 is the root.

    Child ids are always larger than their parent's id, and the only
    mutation allowed is turning a leaf into an internal node once.
    """

    def __init__(self, root: LeafNode) -> None:
        self._nodes: list[Node] = [root]

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, node_id: int) -> Node:
        return self._nodes[node_id]

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    @property
    def root(self) -> Node:
        return self._nodes[0]

    @property
    def num_leaves(self) -> int:
        return sum(1 for node in self._nodes if node.leaf)

    @property
    def depth(self) -> int:
        return max(node.depth for node in self._nodes)

    def leaves(self) -> list[LeafNode]:
        return [node for node in self._nodes if node.leaf]

    def split(self, node_id: int, split_feature: int, split_value: float) -> tuple[int, int]:
        parent = self._nodes[node_id]
        if not parent.leaf:
            raise ValueError(f"node {node_id} has already been split")

        column = parent.examples.values[:, split_feature]
        left_mask = column <= split_value
        left = _leaf_from_examples(parent.examples.take(left_mask), parent.depth + 1)
        right = _leaf_from_examples(parent.examples.take(~left_mask), parent.depth + 1)

        left_child_id = len(self._nodes)
        right_child_id = left_child_id + 1
        self._nodes[node_id] = InternalNode(
            examples=parent.examples,
            positive_weight=parent.positive_weight,
            negative_weight=parent.negative_weight,
            depth=parent.depth,
            split_feature=int(split_feature),
            split_value=float(split_value),
            left_child_id=left_child_id,
            right_child_id=right_child_id,
        )
        self._nodes.append(left)
        self._nodes.append(right)
        return left_child_id, right_child_id


def make_child_nodes(tree: Tree, node_id: int, split_feature: int, split_value: float) -> tuple[int, int]:
    return tree.split(node_id, split_feature, split_value)
