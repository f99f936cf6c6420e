"""Tests for the block color and label helpers used by the UI."""

from engine import Block
from utils import FRAGMENT_COLOR, FREE_COLOR, block_label, get_color


def test_free_block_color():
    assert get_color(Block(0, 80), 50) == FREE_COLOR


def test_fragmented_block_color():
    assert get_color(Block(0, 20), 50) == FRAGMENT_COLOR


def test_allocated_color_is_stable_per_owner():
    a = get_color(Block(0, 20, True, 3), 50)
    b = get_color(Block(40, 60, True, 3), 50)
    assert a == b
    assert a.startswith("hsl(")
    assert a != get_color(Block(0, 20, True, 4), 50)


def test_labels():
    assert block_label(Block(0, 20, True, 1), 50) == "P1: 20KB"
    assert block_label(Block(0, 20), 50) == "Frag: 20KB"
    assert block_label(Block(0, 80), 50, unit="MB") == "Free: 80MB"
