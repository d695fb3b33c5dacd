import numpy as np
import pytest

from data_structures.example import Example, ExampleSet
from training_context import TrainingContext


@pytest.fixture
def four_examples():
    return [
        Example(values=(1.0,), label=1, weight=1.0),
        Example(values=(1.0,), label=-1, weight=1.0),
        Example(values=(5.0,), label=1, weight=1.0),
        Example(values=(5.0,), label=1, weight=1.0),
    ]


@pytest.fixture
def separable_examples():
    return [
        Example(values=(1.0,), label=-1, weight=0.25),
        Example(values=(2.0,), label=-1, weight=0.25),
        Example(values=(3.0,), label=1, weight=0.25),
        Example(values=(4.0,), label=1, weight=0.25),
    ]


@pytest.fixture
def noisy_example_set():
    rng = np.random.default_rng(7)
    X = np.round(rng.normal(size=(120, 3)), 2)
    y = np.where(X[:, 0] + 0.5 * X[:, 1] + 0.3 * rng.normal(size=120) > 0.0, 1, -1)
    w = np.full(120, 1.0 / 120)
    return ExampleSet(X, y, w)


@pytest.fixture
def noisy_context(noisy_example_set):
    return TrainingContext.initialize(noisy_example_set, normalizer=120.0)
