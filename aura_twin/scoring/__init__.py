"""Scoring module for twin compatibility."""

from .scorer import (
    ScoringWeights,
    PairScore,
    DEFAULT_WEIGHTS,
    score,
    compute_match_result,
    evaluate_pair,
    compute_raw_score,
    normalize_score,
    label_for_score,
)

__all__ = [
    "ScoringWeights",
    "PairScore",
    "DEFAULT_WEIGHTS",
    "score",
    "compute_match_result",
    "evaluate_pair",
    "compute_raw_score",
    "normalize_score",
    "label_for_score",
]
