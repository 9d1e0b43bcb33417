"""Bounded FIFO of the most recent readings."""

from collections import deque

from .readings import Reading

# 2 s ingestion cadence * 900 = 30 minutes
DEFAULT_CAPACITY = 900


class SampleBuffer:
    """Recent-window store; the oldest reading is evicted once full."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._items: deque[Reading] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._items)

    def append(self, reading: Reading) -> None:
        self._items.append(reading)

    def snapshot(self) -> list[Reading]:
        """Return a copy of the contents in arrival order."""
        return list(self._items)
