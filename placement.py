# placement.py
"""
Placement strategies for contiguous memory allocation.

Each strategy is a pure function: it scans the ordered block list and returns
the index of a free block that can hold the request, or None when no such
block exists. The caller (MemoryManager) does all of the mutation.

Ties are always broken in favour of the lowest index.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from exceptions import UnknownPolicyError


class Policy(str, Enum):
    """
    Enumeration of available placement algorithms.

    FIRST_FIT: take the first free block that is large enough
    BEST_FIT:  take the smallest free block that is large enough
    WORST_FIT: take the largest free block
    """
    FIRST_FIT = "First Fit"
    BEST_FIT = "Best Fit"
    WORST_FIT = "Worst Fit"

    @classmethod
    def parse(cls, value) -> "Policy":
        """
        Resolve a policy from a Policy member or its name.

        Accepts the display names ("Best Fit") as well as "best-fit",
        "best_fit" or "BEST_FIT", case-insensitive.

        Raises:
            UnknownPolicyError: If the value names no known algorithm
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().replace("-", " ").replace("_", " ").lower()
            for policy in cls:
                if policy.value.lower() == key:
                    return policy
        raise UnknownPolicyError(value)


# -----------------------------
# Algorithms
# -----------------------------

def first_fit(blocks: Sequence, size: int) -> Optional[int]:
    for i, block in enumerate(blocks):
        if not block.allocated and block.size >= size:
            return i
    return None


def best_fit(blocks: Sequence, size: int) -> Optional[int]:
    best_index = None
    best_size = float('inf')

    # strict < keeps the earliest block among equal sizes
    for i, block in enumerate(blocks):
        if not block.allocated and block.size >= size and block.size < best_size:
            best_size = block.size
            best_index = i

    return best_index


def worst_fit(blocks: Sequence, size: int) -> Optional[int]:
    worst_index = None
    worst_size = -1

    for i, block in enumerate(blocks):
        if not block.allocated and block.size >= size and block.size > worst_size:
            worst_size = block.size
            worst_index = i

    return worst_index


STRATEGIES: Dict[Policy, Callable[[Sequence, int], Optional[int]]] = {
    Policy.FIRST_FIT: first_fit,
    Policy.BEST_FIT: best_fit,
    Policy.WORST_FIT: worst_fit,
}


def find_block(policy, blocks: Sequence, size: int) -> Optional[int]:
    """
    Select a free block for a request of `size` using the given policy.

    Returns:
        Optional[int]: Index into `blocks`, or None if nothing fits
    """
    return STRATEGIES[Policy.parse(policy)](blocks, size)


# -----------------------------
# Algorithm metadata (shown in the UI)
# -----------------------------

@dataclass(frozen=True)
class AlgorithmInfo:
    description: str
    time_complexity: str
    space_complexity: str
    advantages: List[str] = field(default_factory=list)
    disadvantages: List[str] = field(default_factory=list)
    best_use_case: str = ""


_ALGORITHM_INFO = {
    Policy.FIRST_FIT: AlgorithmInfo(
        description="Allocates the first available block that is large enough",
        time_complexity="O(n)",
        space_complexity="O(1)",
        advantages=[
            "Fastest allocation time",
            "Simple implementation",
            "Good for systems with frequent allocations",
        ],
        disadvantages=[
            "Can lead to fragmentation at the beginning of memory",
            "May not utilize memory optimally",
        ],
        best_use_case="Real-time systems requiring fast allocation",
    ),
    Policy.BEST_FIT: AlgorithmInfo(
        description="Allocates the smallest available block that is large enough",
        time_complexity="O(n)",
        space_complexity="O(1)",
        advantages=[
            "Minimizes wasted space",
            "Better memory utilization",
            "Leaves larger blocks for future large allocations",
        ],
        disadvantages=[
            "Can create many small unusable blocks",
            "Slower than First Fit",
            "May increase external fragmentation",
        ],
        best_use_case="Systems with varied allocation sizes and memory constraints",
    ),
    Policy.WORST_FIT: AlgorithmInfo(
        description="Allocates the largest available block",
        time_complexity="O(n)",
        space_complexity="O(1)",
        advantages=[
            "Leaves large remaining blocks",
            "Reduces small fragment creation",
            "Good for systems with similar-sized allocations",
        ],
        disadvantages=[
            "May waste memory for small allocations",
            "Always scans the whole block list",
            "Can lead to poor memory utilization",
        ],
        best_use_case="Systems with predictable, similar-sized memory requests",
    ),
}


def algorithm_info(policy) -> AlgorithmInfo:
    return _ALGORITHM_INFO[Policy.parse(policy)]
