"""
fibheap: Fibonacci heap priority queue

Mergeable min-heap with O(1) amortized insert, merge and decrease-key, plus an
item-addressable queue and Dijkstra shortest paths built on top of it.
"""

__version__ = "0.1.0"

from .fibheap import (
    EmptyHeapError,
    FibonacciHeap,
    FibonacciHeapNode,
    HeapError,
    InvalidHandleError,
    InvalidKeyError,
)
from .pqueue import PriorityQueue
from .shortestpaths import Calculator

__all__ = [
    "Calculator",
    "EmptyHeapError",
    "FibonacciHeap",
    "FibonacciHeapNode",
    "HeapError",
    "InvalidHandleError",
    "InvalidKeyError",
    "PriorityQueue",
]
