from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

import numpy as np


@dataclass(frozen=True)
class Example:
    values: tuple[float, ...]
    label: int
    weight: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(float(v) for v in self.values))
        if self.label not in (1, -1):
            raise ValueError("label must be +1 or -1")
        if self.weight < 0.0:
            raise ValueError("weight must be non-negative")


class ExampleSet:
    """Column-oriented, owned copy of a batch of examples."""

    def __init__(self, values: np.ndarray, labels: np.ndarray, weights: np.ndarray) -> None:
        values = np.array(values, dtype=np.float64, copy=True)
        if values.ndim == 1 and values.size == 0:
            values = values.reshape(0, 0)
        if values.ndim != 2:
            raise ValueError("values must be a 2D array")

        self.values = values
        self.labels = np.array(labels, dtype=np.int8, copy=True)
        self.weights = np.array(weights, dtype=np.float64, copy=True)

        if self.labels.shape != (values.shape[0],) or self.weights.shape != (values.shape[0],):
            raise ValueError("labels and weights must be 1D with one entry per row of values")
        if not np.all(np.abs(self.labels) == 1):
            raise ValueError("labels must be +1 or -1")
        if np.any(self.weights < 0.0):
            raise ValueError("weights must be non-negative")

    @classmethod
    def from_examples(cls, examples: Iterable[Example]) -> "ExampleSet":
        examples = list(examples)
        if len(examples) == 0:
            return cls(np.empty((0, 0)), np.empty(0), np.empty(0))

        lengths = {len(example.values) for example in examples}
        if len(lengths) != 1:
            raise ValueError("all examples must have the same number of features")

        return cls(
            values=np.array([example.values for example in examples], dtype=np.float64),
            labels=np.array([example.label for example in examples], dtype=np.int8),
            weights=np.array([example.weight for example in examples], dtype=np.float64),
        )

    @classmethod
    def coerce(cls, examples: "ExampleSet | Sequence[Example]") -> "ExampleSet":
        if isinstance(examples, ExampleSet):
            return examples
        return cls.from_examples(examples)

    @property
    def num_features(self) -> int:
        return int(self.values.shape[1])

    @property
    def positive_weight(self) -> float:
        return float(self.weights[self.labels == 1].sum())

    @property
    def negative_weight(self) -> float:
        return float(self.weights[self.labels == -1].sum())

    def take(self, rows: np.ndarray) -> "ExampleSet":
        # Fancy indexing / boolean masks always copy.
        rows = np.asarray(rows)
        return ExampleSet(self.values[rows], self.labels[rows], self.weights[rows])

    def __len__(self) -> int:
        return int(self.values.shape[0])

    def __iter__(self) -> Iterator[Example]:
        for i in range(len(self)):
            yield Example(
                values=tuple(self.values[i]),
                label=int(self.labels[i]),
                weight=float(self.weights[i]),
            )
