"""
Priority Queue addressed by item, backed by a Fibonacci heap.

This module provides a priority queue with decrease-key by item, which is what
Dijkstra's algorithm needs: the caller knows vertices, not heap nodes.
"""

from __future__ import annotations

import operator
from typing import Callable, Generic, Hashable, Optional, TypeVar

from .fibheap import FibonacciHeap, FibonacciHeapNode

K = TypeVar("K", bound=Hashable)
P = TypeVar("P")


class Entry(Generic[K, P]):
    """An (item, priority) pair stored as a heap key."""

    __slots__ = ("item", "priority")

    def __init__(self, item: K, priority: P):
        self.item = item
        self.priority = priority

    def __repr__(self) -> str:
        return f"Entry({self.item!r}, {self.priority!r})"


class PriorityQueue(Generic[K, P]):
    """
    Min priority queue of hashable items.

    Provides O(1) push and top, O(log n) amortized pop and remove, and O(1)
    amortized reduce_key. Each item may be queued at most once.
    """

    def __init__(self, less_than: Optional[Callable[[P, P], bool]] = None):
        """
        Initialize priority queue.

        Args:
            less_than: Comparison function on priorities returning True if
                first arg < second arg
        """
        self.less_than = less_than if less_than is not None else operator.lt
        compare = self.less_than
        self.heap: FibonacciHeap[Entry[K, P]] = FibonacciHeap(
            lambda a, b: compare(a.priority, b.priority)
        )
        self._handles: dict[K, FibonacciHeapNode[Entry[K, P]]] = {}

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, item: object) -> bool:
        return item in self._handles

    def top(self) -> Optional[tuple[K, P]]:
        """
        Get the top (item, priority) pair without removing it.

        Returns:
            Pair with the minimum priority, or None if queue is empty
        """
        if self.empty():
            return None
        entry = self.heap.minimum()
        return entry.item, entry.priority

    def push(self, item: K, priority: P) -> None:
        """
        Push an item onto the queue.

        Args:
            item: Item to push
            priority: Priority of the item

        Raises:
            ValueError: If the item is already queued
        """
        if item in self._handles:
            raise ValueError(f"item {item!r} is already queued")
        self._handles[item] = self.heap.insert(Entry(item, priority))

    def pop(self) -> Optional[tuple[K, P]]:
        """
        Remove and return the (item, priority) pair with minimum priority.

        Returns:
            Minimum pair, or None if queue is empty
        """
        if self.empty():
            return None
        entry = self.heap.extract_min()
        del self._handles[entry.item]
        return entry.item, entry.priority

    def priority(self, item: K) -> P:
        """
        Get the current priority of a queued item.

        Raises:
            KeyError: If the item is not queued
        """
        return self._handles[item].key.priority

    def reduce_key(self, item: K, new_priority: P) -> None:
        """
        Reduce the priority of a queued item.

        Args:
            item: Queued item
            new_priority: New (smaller or equal) priority

        Raises:
            KeyError: If the item is not queued
            InvalidKeyError: If new_priority is greater than the current one
        """
        handle = self._handles[item]
        self.heap.decrease_key(handle, Entry(item, new_priority))

    def remove(self, item: K) -> None:
        """
        Remove a queued item.

        Raises:
            KeyError: If the item is not queued
        """
        self.heap.delete(self._handles.pop(item))

    def empty(self) -> bool:
        """
        Check if queue is empty.

        Returns:
            True if no elements in queue
        """
        return self.heap.is_empty()

    def count(self) -> int:
        """
        Get number of elements in queue.

        Returns:
            Number of elements
        """
        return self.heap.size()

    def is_heap(self) -> bool:
        """
        Verify heap property (for testing).

        Returns:
            True if queue is in valid state
        """
        return self.heap.is_heap()

    def for_each(self, f: Callable[[K, P], None]) -> None:
        """
        Apply function to each element.

        Args:
            f: Function to apply to each (item, priority) pair
        """
        self.heap.for_each(lambda entry, node: f(entry.item, entry.priority))

    def to_string(self, selector: Callable[[K, P], str]) -> str:
        """
        Convert queue to string representation.

        Args:
            selector: Function to convert an (item, priority) pair to string

        Returns:
            String representation
        """
        return self.heap.to_string(lambda entry: selector(entry.item, entry.priority))
