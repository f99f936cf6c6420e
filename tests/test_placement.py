"""Tests for the placement strategies."""

import pytest

from engine import Block
from exceptions import AllocatorError, UnknownPolicyError
from placement import Policy, algorithm_info, best_fit, find_block, first_fit, worst_fit


def layout(*pairs):
    """Build a contiguous block list from (size, allocated) pairs."""
    blocks, start = [], 0
    for i, (size, allocated) in enumerate(pairs):
        blocks.append(Block(start, size, allocated, i + 1 if allocated else None))
        start += size
    return blocks


class TestFirstFit:
    """First fit takes the lowest qualifying index."""

    def test_skips_allocated_and_small_blocks(self):
        blocks = layout((30, False), (20, True), (100, False), (10, False))
        assert first_fit(blocks, 40) == 2

    def test_first_qualifying_block_wins(self):
        blocks = layout((30, False), (20, True), (100, False), (10, False))
        assert first_fit(blocks, 20) == 0

    def test_exact_size_qualifies(self):
        blocks = layout((20, True), (30, False))
        assert first_fit(blocks, 30) == 1


class TestBestFit:
    """Best fit takes the smallest block that still fits."""

    def test_prefers_smallest_qualifying(self):
        assert best_fit(layout((30, False), (100, False)), 20) == 0

    def test_ignores_too_small_blocks(self):
        blocks = layout((10, False), (5, True), (100, False), (7, True), (40, False))
        assert best_fit(blocks, 20) == 4

    def test_tie_goes_to_earliest(self):
        blocks = layout((40, False), (5, True), (40, False))
        assert best_fit(blocks, 40) == 0


class TestWorstFit:
    """Worst fit takes the largest free block."""

    def test_prefers_largest(self):
        assert worst_fit(layout((30, False), (100, False)), 20) == 1

    def test_tie_goes_to_earliest(self):
        blocks = layout((60, False), (5, True), (60, False))
        assert worst_fit(blocks, 10) == 0


class TestNotFound:
    """Every strategy reports None when nothing fits."""

    @pytest.mark.parametrize("strategy", [first_fit, best_fit, worst_fit])
    def test_request_larger_than_every_free_block(self, strategy):
        blocks = layout((30, False), (50, True), (40, False))
        assert strategy(blocks, 41) is None

    @pytest.mark.parametrize("strategy", [first_fit, best_fit, worst_fit])
    def test_fully_allocated(self, strategy):
        assert strategy(layout((50, True), (50, True)), 1) is None

    @pytest.mark.parametrize("strategy", [first_fit, best_fit, worst_fit])
    def test_does_not_mutate_blocks(self, strategy):
        blocks = layout((30, False), (20, True), (100, False))
        before = [(b.start, b.size, b.allocated, b.owner) for b in blocks]
        strategy(blocks, 25)
        assert [(b.start, b.size, b.allocated, b.owner) for b in blocks] == before


class TestPolicy:
    """Policy parsing and dispatch."""

    @pytest.mark.parametrize("name, expected", [
        ("First Fit", Policy.FIRST_FIT),
        ("best-fit", Policy.BEST_FIT),
        ("WORST_FIT", Policy.WORST_FIT),
        (Policy.BEST_FIT, Policy.BEST_FIT),
    ])
    def test_parse(self, name, expected):
        assert Policy.parse(name) is expected

    @pytest.mark.parametrize("name", ["Next Fit", "", None, 3])
    def test_parse_unknown(self, name):
        with pytest.raises(UnknownPolicyError):
            Policy.parse(name)

    def test_unknown_policy_is_an_allocator_error(self):
        assert issubclass(UnknownPolicyError, AllocatorError)
        assert issubclass(UnknownPolicyError, ValueError)

    def test_find_block_dispatches_by_policy(self):
        blocks = layout((30, False), (100, False))
        assert find_block(Policy.FIRST_FIT, blocks, 20) == 0
        assert find_block("Best Fit", blocks, 20) == 0
        assert find_block("worst fit", blocks, 20) == 1

    def test_algorithm_info_available_for_every_policy(self):
        for policy in Policy:
            info = algorithm_info(policy)
            assert info.time_complexity == "O(n)"
            assert info.description
            assert info.advantages and info.disadvantages
