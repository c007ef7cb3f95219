"""Tests for pair generation."""

import numpy as np
import pytest

from aura_twin.pair_generation import PairGenerator, generate_pairs_for_pool


class TestPairGenerator:

    def test_enumerates_small_pool(self):
        idx_a, idx_b = PairGenerator().generate_pairs(4)
        pairs = list(zip(idx_a.tolist(), idx_b.tolist()))
        assert pairs == [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]

    @pytest.mark.parametrize("n", [0, 1])
    def test_no_pairs_for_tiny_pool(self, n):
        idx_a, idx_b = PairGenerator().generate_pairs(n)
        assert len(idx_a) == 0
        assert len(idx_b) == 0

    def test_samples_large_pool(self):
        idx_a, idx_b = PairGenerator(max_pairs=10, random_seed=0).generate_pairs(20)
        assert len(idx_a) == 10
        assert np.all(idx_a < idx_b)
        assert len(set(zip(idx_a.tolist(), idx_b.tolist()))) == 10

    def test_sampling_is_reproducible(self):
        first = PairGenerator(max_pairs=15, random_seed=7).generate_pairs(30)
        second = PairGenerator(max_pairs=15, random_seed=7).generate_pairs(30)
        np.testing.assert_array_equal(first[0], second[0])
        np.testing.assert_array_equal(first[1], second[1])

    def test_negative_max_pairs_rejected(self):
        with pytest.raises(ValueError):
            PairGenerator(max_pairs=-1)


def test_generate_pairs_for_pool_reads_config():
    config = {"pair_generation": {"max_pairs": 3, "random_seed": 1}}
    idx_a, _ = generate_pairs_for_pool(10, config)
    assert len(idx_a) == 3


def test_generate_pairs_for_pool_defaults():
    idx_a, _ = generate_pairs_for_pool(5, {})
    assert len(idx_a) == 10
