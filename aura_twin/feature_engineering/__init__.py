"""Feature engineering module for pairwise twin features."""

from .pairwise_features import (
    PairwiseFeatures,
    compute_pairwise_features,
    overlap_count,
    has_intersection,
    shared_items,
    normalized_set,
)

__all__ = [
    "PairwiseFeatures",
    "compute_pairwise_features",
    "overlap_count",
    "has_intersection",
    "shared_items",
    "normalized_set",
]
