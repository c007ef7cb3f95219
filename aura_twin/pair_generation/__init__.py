"""Pair generation module for batch scoring."""

from .generator import PairGenerator, generate_pairs_for_pool

__all__ = ["PairGenerator", "generate_pairs_for_pool"]
