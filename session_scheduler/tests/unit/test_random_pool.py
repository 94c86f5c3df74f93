# session_scheduler/tests/unit/test_random_pool.py
import numpy as np
import pytest

from session_scheduler.core.random_pool import RandomStreamPool


class TestRandomStreamPool:
    """Tests for the seeded random stream pool"""

    def test_size_must_be_positive(self):
        with pytest.raises(ValueError):
            RandomStreamPool(0, seed=1)

    def test_len(self):
        assert len(RandomStreamPool(7, seed=1)) == 7

    def test_seed_recorded(self):
        assert RandomStreamPool(2, seed=17).seed == 17
        assert RandomStreamPool(2).seed is None

    def test_same_seed_same_streams(self):
        a = RandomStreamPool(4, seed=5374857)
        b = RandomStreamPool(4, seed=5374857)
        for index in range(4):
            with a.checkout(index) as rng_a, b.checkout(index) as rng_b:
                np.testing.assert_array_equal(rng_a.random(8), rng_b.random(8))

    def test_streams_are_independent(self):
        pool = RandomStreamPool(2, seed=11)
        with pool.checkout(0) as first:
            draws_0 = first.random(8)
        with pool.checkout(1) as second:
            draws_1 = second.random(8)
        assert not np.array_equal(draws_0, draws_1)

    def test_task_index_wraps_around_pool(self):
        a = RandomStreamPool(5, seed=3)
        b = RandomStreamPool(5, seed=3)
        with a.checkout(7) as rng_a:
            draws_a = rng_a.random(4)
        with b.checkout(2) as rng_b:
            draws_b = rng_b.random(4)
        np.testing.assert_array_equal(draws_a, draws_b)

    def test_checkout_is_exclusive(self):
        pool = RandomStreamPool(3, seed=3)
        with pool.checkout(4):
            assert pool._locks[1].locked()
            assert not pool._locks[0].locked()
        assert not pool._locks[1].locked()

    def test_reseed_restarts_streams(self):
        pool = RandomStreamPool(2, seed=99)
        with pool.checkout(0) as rng:
            before = rng.random(4)
        pool.reseed(99)
        assert pool.seed == 99
        with pool.checkout(0) as rng:
            after = rng.random(4)
        np.testing.assert_array_equal(before, after)
