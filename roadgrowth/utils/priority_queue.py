"""Priority queue implementation for managing road queries.

Queries are ordered by timer, lowest first. Queries with equal timers leave in
the order they were enqueued.
"""
import heapq
from typing import List, Optional, Tuple

from roadgrowth.citygen.dataclass import RoadQuery


class PriorityQueue:
    """A binary-heap priority queue of road queries keyed on (timer, insertion order)."""

    def __init__(self):
        """Initialize an empty priority queue."""
        self._heap: List[Tuple[int, int, RoadQuery]] = []
        self._seq = 0

    def enqueue(self, query: RoadQuery):
        """Add a query to the queue.

        Args:
            query: The query to add to the queue.
        """
        heapq.heappush(self._heap, (query.timer, self._seq, query))
        self._seq += 1

    def dequeue(self) -> Optional[RoadQuery]:
        """Get the query with the minimum timer.

        Returns:
            The query with the minimum timer, or None if the queue is empty.
        """
        if not self._heap:
            return None
        return heapq.heappop(self._heap)[2]

    def peek(self) -> Optional[RoadQuery]:
        """Return the next query without removing it, or None if the queue is empty."""
        if not self._heap:
            return None
        return self._heap[0][2]

    def empty(self) -> bool:
        """Check if the queue is empty.

        Returns:
            True if the queue is empty, False otherwise.
        """
        return len(self._heap) == 0

    @property
    def elements(self) -> List[RoadQuery]:
        """Pending queries in processing order."""
        return [entry[2] for entry in sorted(self._heap)]

    def __iter__(self):
        """Iterate over pending queries in processing order."""
        return iter(self.elements)

    def __len__(self):
        """Get the number of queries in the queue."""
        return len(self._heap)
