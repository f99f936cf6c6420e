# engine.py
"""
Contiguous memory allocation engine.

A MemoryManager owns a single address space [0, total_size) described by an
ordered list of blocks. Allocation picks a free block with one of the
placement policies and splits it; deallocation frees the owner's block and
coalesces neighbouring free blocks.

Invariants kept after every public call:
    - blocks are contiguous, non-overlapping and cover [0, total_size)
    - no two adjacent blocks are both free
    - every allocated block has an owner with a matching process record
"""

import copy
import logging
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Tuple

import config
from exceptions import DuplicateProcessError, InvalidProcessError, InvalidSizeError
from placement import Policy, find_block

logger = logging.getLogger(__name__)


@dataclass(repr=False)
class Block:
    """
    A contiguous run of the address space.

    Attributes:
        start (int): Offset of the first unit of the block
        size (int): Number of units in the block
        allocated (bool): True if a process owns the block
        owner (Optional[int]): Owning process id, None while free
    """
    start: int
    size: int
    allocated: bool = False
    owner: Optional[int] = None

    @property
    def end(self) -> int:
        return self.start + self.size

    def __repr__(self):
        state = f"P{self.owner}" if self.allocated else "F"
        return f"[{state}|{self.start}|{self.size}]"


@dataclass(frozen=True)
class MemoryStats:
    total_size: int
    allocated_total: int
    free_total: int
    utilization_pct: float
    fragmentation_pct: float
    free_block_count: int
    allocated_block_count: int
    fragmented_block_count: int
    active_process_count: int

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class FragmentationReport:
    external_fragmentation_pct: float
    largest_free_block: int
    average_free_block_size: float
    free_block_count: int
    free_total: int


class MemoryManager:
    """
    Simulates dynamic allocation over one fixed-size region.

    Attributes:
        fragment_threshold (int): Free blocks smaller than this count as fragmented
        event_log (List[str]): Human readable history of operations
    """

    def __init__(self, total_size: int = config.DEFAULT_TOTAL_SIZE,
                 fragment_threshold: int = config.FRAGMENT_THRESHOLD):
        if not isinstance(total_size, int) or total_size <= 0:
            raise InvalidSizeError(f"Total memory size must be a positive integer, got {total_size!r}")
        if not isinstance(fragment_threshold, int) or fragment_threshold < 0:
            raise InvalidSizeError(f"Fragment threshold must be a non-negative integer, got {fragment_threshold!r}")

        self._total_size = total_size
        self.fragment_threshold = fragment_threshold
        self.reset()

    @property
    def total_size(self) -> int:
        return self._total_size

    def reset(self):
        """Drop every allocation and return to a single free block."""
        self._blocks: List[Block] = [Block(0, self._total_size)]
        self._processes: Dict[int, int] = {}
        self.event_log: List[str] = [f"Memory reset: {self._total_size} units free"]
        logger.info("Memory reset to %d free units", self._total_size)

    # -----------------------------
    # Allocation
    # -----------------------------
    def allocate(self, process_id: int, size: int, policy=Policy.FIRST_FIT) -> bool:
        """
        Allocate `size` units to `process_id` using the given placement policy.

        Returns:
            bool: False if no single free block can hold the request

        Raises:
            InvalidSizeError: If size is not a positive integer
            InvalidProcessError: If process_id is not a positive integer
            DuplicateProcessError: If process_id already owns memory
            UnknownPolicyError: If policy is not a known algorithm
        """
        if not isinstance(size, int) or size <= 0:
            raise InvalidSizeError(f"Memory size must be positive, got {size!r}")
        if not isinstance(process_id, int) or process_id <= 0:
            raise InvalidProcessError(f"Process id must be a positive integer, got {process_id!r}")
        if process_id in self._processes:
            raise DuplicateProcessError(process_id)
        policy = Policy.parse(policy)

        index = find_block(policy, self._blocks, size)
        if index is None:
            self.event_log.append(
                f"Allocation failed for P{process_id}: no free block of {size} units ({policy.value})"
            )
            logger.debug("No block for P%d (%d units, %s)", process_id, size, policy.value)
            return False

        self._split_block(index, size, process_id)
        self._processes[process_id] = size

        start = self._blocks[index].start
        self.event_log.append(f"Allocated {size} units to P{process_id} at {start} ({policy.value})")
        logger.debug("Allocated %d units to P%d at %d (%s)", size, process_id, start, policy.value)
        return True

    def _split_block(self, index: int, size: int, process_id: int):
        block = self._blocks[index]

        # Perfect fit
        if block.size == size:
            block.allocated = True
            block.owner = process_id
            return

        # Split into allocated + free
        remainder = Block(block.start + size, block.size - size)
        block.size = size
        block.allocated = True
        block.owner = process_id
        self._blocks.insert(index + 1, remainder)

    # -----------------------------
    # Deallocation
    # -----------------------------
    def deallocate(self, process_id: int) -> bool:
        """
        Free the block owned by `process_id` and merge free neighbours.

        Returns:
            bool: False if the process is unknown or already freed
        """
        if process_id not in self._processes:
            self.event_log.append(f"Deallocation failed: P{process_id} not found")
            return False

        block = next(b for b in self._blocks if b.owner == process_id)
        block.allocated = False
        block.owner = None
        size = self._processes.pop(process_id)

        self.event_log.append(f"Freed P{process_id} ({size} units at {block.start})")
        logger.debug("Freed P%d (%d units at %d)", process_id, size, block.start)
        self._coalesce()
        return True

    def _coalesce(self):
        i = 0
        while i < len(self._blocks) - 1:
            current = self._blocks[i]
            following = self._blocks[i + 1]

            if not current.allocated and not following.allocated:
                # stay on i: the grown block may also absorb its new neighbour
                current.size += following.size
                del self._blocks[i + 1]
                self.event_log.append(f"Coalesced free blocks at {current.start} -> {current.size} units")
            else:
                i += 1

    # -----------------------------
    # Snapshots
    # -----------------------------
    def blocks(self) -> List[Block]:
        return [copy.copy(b) for b in self._blocks]

    def active_processes(self) -> List[Tuple[int, int]]:
        """(process_id, size) pairs in allocation order."""
        return list(self._processes.items())

    def block_for(self, process_id: int) -> Optional[Block]:
        for block in self._blocks:
            if block.owner == process_id:
                return copy.copy(block)
        return None

    def is_fragmented(self, block: Block) -> bool:
        return not block.allocated and block.size < self.fragment_threshold

    def stats(self) -> MemoryStats:
        """
        Compute usage statistics over the current block list.

        fragmentation_pct is the share of free memory held in blocks smaller
        than fragment_threshold (0 when nothing is free).
        """
        allocated_total = 0
        free_total = 0
        free_blocks = 0
        allocated_blocks = 0
        fragmented_blocks = 0
        fragmented_space = 0

        for block in self._blocks:
            if block.allocated:
                allocated_total += block.size
                allocated_blocks += 1
            else:
                free_total += block.size
                free_blocks += 1
                if self.is_fragmented(block):
                    fragmented_blocks += 1
                    fragmented_space += block.size

        utilization = 100 * allocated_total / self._total_size
        fragmentation = 100 * fragmented_space / free_total if free_total > 0 else 0.0

        return MemoryStats(
            total_size=self._total_size,
            allocated_total=allocated_total,
            free_total=free_total,
            utilization_pct=utilization,
            fragmentation_pct=fragmentation,
            free_block_count=free_blocks,
            allocated_block_count=allocated_blocks,
            fragmented_block_count=fragmented_blocks,
            active_process_count=len(self._processes),
        )

    def fragmentation_report(self) -> FragmentationReport:
        free_sizes = [b.size for b in self._blocks if not b.allocated]
        free_total = sum(free_sizes)

        if free_total == 0:
            return FragmentationReport(0.0, 0, 0.0, 0, 0)

        unusable = sum(s for s in free_sizes if s < self.fragment_threshold)
        return FragmentationReport(
            external_fragmentation_pct=round(100 * unusable / free_total, 2),
            largest_free_block=max(free_sizes),
            average_free_block_size=round(free_total / len(free_sizes), 2),
            free_block_count=len(free_sizes),
            free_total=free_total,
        )

    def check_invariants(self):
        """
        Assert the partition, adjacency and ownership invariants.

        Raises:
            AssertionError: Describing the first violated invariant
        """
        blocks = self._blocks
        assert blocks, "block list is empty"
        assert blocks[0].start == 0, f"first block starts at {blocks[0].start}"

        for prev, nxt in zip(blocks, blocks[1:]):
            assert prev.end == nxt.start, f"gap or overlap between {prev!r} and {nxt!r}"
            assert prev.allocated or nxt.allocated, f"adjacent free blocks {prev!r} and {nxt!r}"

        assert blocks[-1].end == self._total_size, f"last block ends at {blocks[-1].end}"

        for block in blocks:
            assert block.size > 0, f"empty block {block!r}"
            assert block.allocated == (block.owner is not None), f"owner mismatch in {block!r}"

        owners = {b.owner: b.size for b in blocks if b.allocated}
        assert owners == self._processes, f"process records {self._processes} != blocks {owners}"

    def __repr__(self):
        return f"MemoryManager({self._total_size}, {self._blocks})"
