# exceptions.py

class AllocatorError(ValueError):
    """Base class for invalid use of the memory manager."""


class InvalidSizeError(AllocatorError):
    """Requested size (or configured total size) is not a positive integer."""


class InvalidProcessError(AllocatorError):
    """Process id is not a positive integer."""


class DuplicateProcessError(AllocatorError):
    """Process id already owns a block."""

    def __init__(self, process_id):
        super().__init__(f"Process {process_id} already exists")
        self.process_id = process_id


class UnknownPolicyError(AllocatorError):
    """Placement policy name is not one of the supported algorithms."""

    def __init__(self, policy):
        super().__init__(f"Unknown allocation algorithm: {policy!r}")
        self.policy = policy
