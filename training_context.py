from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from data_structures.example import Example, ExampleSet


@dataclass(frozen=True)
class TrainingContext:
    """Dataset-level scalars shared by every scoring call of one boosting run."""

    num_features: int
    num_examples: int
    normalizer: float

    def __post_init__(self) -> None:
        if self.num_examples <= 0:
            raise ValueError("num_examples must be positive")
        if self.num_features < 0:
            raise ValueError("num_features must be >= 0")
        if self.normalizer <= 0.0:
            raise ValueError("normalizer must be > 0")

    @classmethod
    def initialize(
        cls,
        examples: ExampleSet | Sequence[Example],
        normalizer: float,
    ) -> "TrainingContext":
        if len(examples) == 0:
            raise ValueError("examples must be non-empty")

        if isinstance(examples, ExampleSet):
            num_features = examples.num_features
        else:
            num_features = len(examples[0].values)
            if any(len(example.values) != num_features for example in examples):
                raise ValueError("all examples must have the same number of features")

        return cls(
            num_features=int(num_features),
            num_examples=len(examples),
            normalizer=float(normalizer),
        )

    @classmethod
    def from_arrays(cls, X: np.ndarray, normalizer: float) -> "TrainingContext":
        X = np.asarray(X, dtype=np.float64)
        if X.ndim != 2:
            raise ValueError("X must be a 2D array")
        if X.shape[0] == 0:
            raise ValueError("X must have at least one row")
        return cls(
            num_features=int(X.shape[1]),
            num_examples=int(X.shape[0]),
            normalizer=float(normalizer),
        )
