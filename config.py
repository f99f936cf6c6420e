# config.py

from dataclasses import dataclass

# Default size of the simulated address space (in SIZE_UNIT)
DEFAULT_TOTAL_SIZE = 1000

# Free blocks smaller than this are counted as fragmented (unusable) space.
# Tunable: the value only shapes the fragmentation metric, not allocation.
FRAGMENT_THRESHOLD = 50

# Bounds for the memory size input in the UI
MIN_TOTAL_SIZE = 100
MAX_TOTAL_SIZE = 10000

SIZE_UNIT = "KB"

# Number of event log entries shown in the UI
EVENT_LOG_LIMIT = 20


@dataclass
class SimulatorConfig:
    """Defaults used when the UI builds a new MemoryManager."""
    total_size: int = DEFAULT_TOTAL_SIZE
    fragment_threshold: int = FRAGMENT_THRESHOLD
    default_policy: str = "First Fit"
    unit: str = SIZE_UNIT
