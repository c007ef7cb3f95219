"""
Pair generation over a pool of twin profiles.

Produces the (Twin A, Twin B) index pairs a batch run scores.

Key Design Decisions:
- Pairs are unordered: scores are symmetric, so (A, B) and (B, A) are one pair
- Self-pairs are excluded
- Small pools are enumerated completely; large pools are sampled
- Sampling is reproducible given a random seed
"""

import logging
from typing import Tuple, Optional, Dict, Any

import numpy as np

logger = logging.getLogger(__name__)


class PairGenerator:
    """
    Generator for unordered twin pairs.

    Attributes:
        max_pairs: Maximum number of pairs to return
        random_state: Numpy RandomState used when sampling
    """

    def __init__(self, max_pairs: int = 10000, random_seed: Optional[int] = None):
        if max_pairs < 0:
            raise ValueError(f"max_pairs must be non-negative, got {max_pairs}")
        self.max_pairs = max_pairs
        self.random_state = np.random.RandomState(random_seed)

    def generate_pairs(self, n_profiles: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Generate pairs of profile indices.

        Args:
            n_profiles: Number of profiles in the pool

        Returns:
            Tuple of (indices_a, indices_b) with indices_a[i] < indices_b[i].
            When every pair fits under ``max_pairs`` the pairs come in
            row-major order; otherwise a sorted random sample is returned.
        """
        indices_a, indices_b = np.triu_indices(max(n_profiles, 0), k=1)
        total = len(indices_a)

        if total <= self.max_pairs:
            logger.info(f"Enumerated all {total} pairs from {n_profiles} profiles")
            return indices_a, indices_b

        chosen = np.sort(self.random_state.choice(total, size=self.max_pairs, replace=False))
        logger.info(f"Sampled {self.max_pairs} of {total} pairs from {n_profiles} profiles")
        return indices_a[chosen], indices_b[chosen]


def generate_pairs_for_pool(n_profiles: int, config: Dict[str, Any]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convenience function to generate pairs using the config.

    Args:
        n_profiles: Number of profiles in the pool
        config: Configuration dictionary with pair_generation settings

    Returns:
        Tuple of (indices_a, indices_b)
    """
    pair_config = config.get("pair_generation", {}) or {}
    generator = PairGenerator(
        max_pairs=pair_config.get("max_pairs", 10000),
        random_seed=pair_config.get("random_seed", 42)
    )
    return generator.generate_pairs(n_profiles)
