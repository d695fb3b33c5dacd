from __future__ import annotations

from dataclasses import dataclass
import math

from training_context import TrainingContext

TOLERANCE = 1e-7


@dataclass(frozen=True)
class ScoringParams:
    beta: float = 0.0
    lambda_: float = 0.0

    def __post_init__(self) -> None:
        if self.beta < 0.0:
            raise ValueError("beta must be >= 0")
        if self.lambda_ < 0.0:
            raise ValueError("lambda_ must be >= 0")


def rademacher_complexity(tree_size: int, context: TrainingContext) -> float:
    m = float(context.num_examples)
    return math.sqrt(
        (2 * tree_size + 1) * math.log2(context.num_features + 2) * math.log(m) / m
    )


def complexity_penalty(
    tree_size: int,
    beta: float,
    lambda_: float,
    context: TrainingContext,
) -> float:
    """Bound-derived penalty for a tree with ``tree_size`` nodes.

    Non-decreasing in ``tree_size`` for fixed ``beta``/``lambda_``.
    """
    rademacher = rademacher_complexity(tree_size, context)
    return ((lambda_ * rademacher + beta) * context.num_examples) / (2.0 * context.normalizer)


def gradient(
    wgtd_error: float,
    tree_size: int,
    alpha: float,
    sign_edge: int,
    beta: float,
    lambda_: float,
    context: TrainingContext,
) -> float:
    """Soft-thresholded edge of a weak learner against the complexity penalty.

    With a nonzero ``alpha`` the penalty shifts the edge in the direction of
    ``alpha``'s sign. Otherwise edges within the penalty collapse to zero and
    larger ones are shrunk by it in the direction opposite ``sign_edge``.
    """
    penalty = complexity_penalty(tree_size, beta, lambda_, context)
    edge = wgtd_error - 0.5
    sign_alpha = 1 if alpha >= 0 else -1
    if abs(alpha) > TOLERANCE:
        return edge + sign_alpha * penalty
    if abs(edge) <= penalty:
        return 0.0
    return edge - sign_edge * penalty
