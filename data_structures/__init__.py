"""
Data structures for the weak-learner tree.

Examples are stored column-wise in numpy arrays, and trees are append-only
arenas of leaf / internal nodes addressed by integer ids.
"""

from data_structures.example import Example, ExampleSet
from data_structures.tree import InternalNode, LeafNode, Node, Tree, make_child_nodes, make_root_node

__all__ = [
    "Example",
    "ExampleSet",
    "InternalNode",
    "LeafNode",
    "Node",
    "Tree",
    "make_child_nodes",
    "make_root_node",
]
