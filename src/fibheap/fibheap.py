"""
Fibonacci heap implementation.

A Fibonacci heap is a mergeable priority queue built from a forest of
heap-ordered trees whose roots form a circular doubly-linked list. It provides
O(1) amortized insert, merge and decrease-key, and O(log n) amortized
extract-min and delete, which makes it the textbook queue for Dijkstra's
algorithm.
"""

from __future__ import annotations

import logging
import math
import operator
from typing import Callable, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

# log(golden ratio); a node of degree k roots a subtree of at least F(k+2) nodes
_LOG_PHI = math.log((1 + math.sqrt(5)) / 2)


class HeapError(Exception):
    """Base class for heap errors."""


class EmptyHeapError(HeapError, IndexError):
    """Raised when reading or extracting the minimum of an empty heap."""


class InvalidKeyError(HeapError, ValueError):
    """Raised when decrease_key is given a key greater than the current one."""


class InvalidHandleError(HeapError, LookupError):
    """Raised when a handle was already removed or belongs to another heap."""


class _Owner:
    """Ownership token shared by a heap and the nodes it holds."""

    __slots__ = ("merged_into",)

    def __init__(self) -> None:
        self.merged_into: Optional[_Owner] = None

    def resolve(self) -> "_Owner":
        """Follow merge forwarding to the current owner, compressing the path."""
        root = self
        while root.merged_into is not None:
            root = root.merged_into
        token = self
        while token is not root:
            following = token.merged_into
            token.merged_into = root
            token = following
        return root


class FibonacciHeapNode(Generic[T]):
    """
    A node of the heap, also used as the caller's handle.

    The link fields are exposed for inspection. Callers must treat them as
    read-only; the heap alone rewires them.
    """

    __slots__ = ("key", "degree", "marked", "parent", "child", "left", "right", "_owner")

    def __init__(self, key: T):
        self.key = key
        self.degree = 0
        self.marked = False
        self.parent: Optional[FibonacciHeapNode[T]] = None
        self.child: Optional[FibonacciHeapNode[T]] = None
        self.left: FibonacciHeapNode[T] = self
        self.right: FibonacciHeapNode[T] = self
        self._owner: Optional[_Owner] = None

    def __repr__(self) -> str:
        return f"FibonacciHeapNode(key={self.key!r}, degree={self.degree}, marked={self.marked})"

    @property
    def alive(self) -> bool:
        """True while the node is still held by some heap."""
        return self._owner is not None

    def children(self) -> Iterator["FibonacciHeapNode[T]"]:
        """Iterate over direct children."""
        if self.child is not None:
            yield from _siblings(self.child)


def _siblings(start: FibonacciHeapNode[T]) -> Iterator[FibonacciHeapNode[T]]:
    """Iterate a circular list once, starting at start."""
    node = start
    while True:
        # read ahead so the caller may relink the node it was handed
        following = node.right
        yield node
        if following is start:
            return
        node = following


def _splice(a: FibonacciHeapNode[T], b: FibonacciHeapNode[T]) -> None:
    """Concatenate the circular lists containing a and b."""
    a_right = a.right
    b_left = b.left
    a.right = b
    b.left = a
    b_left.right = a_right
    a_right.left = b_left


def _unlink(node: FibonacciHeapNode[T]) -> None:
    """Remove node from its sibling list, leaving it a singleton."""
    node.left.right = node.right
    node.right.left = node.left
    node.left = node
    node.right = node


class FibonacciHeap(Generic[T]):
    """
    Min Fibonacci heap.

    Keys are ordered by ``less_than`` (``a < b`` by default). ``insert``
    returns the new node, which serves as a handle for ``decrease_key`` and
    ``delete`` for as long as the node stays in the heap. Handles stay valid
    across ``merge``: nodes absorbed from another heap belong to this one.

    Not thread-safe.
    """

    def __init__(self, less_than: Optional[Callable[[T, T], bool]] = None):
        """
        Initialize an empty heap.

        Args:
            less_than: Comparison function returning True if first arg < second arg
        """
        self.less_than = less_than if less_than is not None else operator.lt
        self.min_node: Optional[FibonacciHeapNode[T]] = None
        self.node_count = 0
        self._owner = _Owner()

    def __len__(self) -> int:
        return self.node_count

    def __bool__(self) -> bool:
        return self.min_node is not None

    def __contains__(self, handle: object) -> bool:
        if not isinstance(handle, FibonacciHeapNode) or handle._owner is None:
            return False
        return handle._owner.resolve() is self._owner

    def __str__(self) -> str:
        return self.to_string(str)

    def size(self) -> int:
        """Return the number of keys in the heap."""
        return self.node_count

    def is_empty(self) -> bool:
        """Check if the heap is empty."""
        return self.min_node is None

    def minimum(self) -> T:
        """
        Return the minimum key without removing it.

        Raises:
            EmptyHeapError: If the heap is empty
        """
        if self.min_node is None:
            raise EmptyHeapError("minimum of empty heap")
        return self.min_node.key

    def insert(self, key: T) -> FibonacciHeapNode[T]:
        """
        Insert a key.

        Args:
            key: Key to insert

        Returns:
            Handle of the new node
        """
        node = FibonacciHeapNode(key)
        node._owner = self._owner
        self._add_root(node)
        if node is not self.min_node and self.less_than(key, self.min_node.key):
            self.min_node = node
        self.node_count += 1
        return node

    def merge(self, other: "FibonacciHeap[T]") -> None:
        """
        Move every node of other into this heap.

        The root lists are concatenated in O(1). Both heaps must order keys
        the same way. other is left empty and may be reused.

        Args:
            other: Heap to absorb

        Raises:
            ValueError: If other is this heap
        """
        if other is self:
            raise ValueError("cannot merge a heap with itself")
        if other.min_node is None:
            return

        if self.min_node is None:
            self.min_node = other.min_node
        else:
            _splice(self.min_node, other.min_node)
            if self.less_than(other.min_node.key, self.min_node.key):
                self.min_node = other.min_node

        self.node_count += other.node_count
        other._owner.merged_into = self._owner
        other._owner = _Owner()
        other.min_node = None
        other.node_count = 0

    def extract_min(self) -> T:
        """
        Remove and return the minimum key.

        Raises:
            EmptyHeapError: If the heap is empty
        """
        if self.min_node is None:
            raise EmptyHeapError("extract_min from empty heap")
        node = self.min_node
        self._remove_root(node)
        return node.key

    def decrease_key(self, handle: FibonacciHeapNode[T], new_key: T) -> None:
        """
        Lower the key of a node.

        Args:
            handle: Node returned by insert
            new_key: New key, not greater than the current one

        Raises:
            InvalidHandleError: If the node is no longer in this heap
            InvalidKeyError: If new_key is greater than the current key
        """
        self._check_handle(handle)
        if self.less_than(handle.key, new_key):
            raise InvalidKeyError(
                f"new key {new_key!r} is greater than current key {handle.key!r}"
            )

        handle.key = new_key
        parent = handle.parent
        if parent is not None and self.less_than(new_key, parent.key):
            self._cut(handle, parent)
            self._cascading_cut(parent)

        if self.less_than(new_key, self.min_node.key):
            self.min_node = handle

    def delete(self, handle: FibonacciHeapNode[T]) -> None:
        """
        Remove an arbitrary node.

        The node is cut up to the root list and then removed the same way
        extract_min removes the minimum, so no sentinel key is needed.

        Args:
            handle: Node returned by insert

        Raises:
            InvalidHandleError: If the node is no longer in this heap
        """
        self._check_handle(handle)
        parent = handle.parent
        if parent is not None:
            self._cut(handle, parent)
            self._cascading_cut(parent)
        self._remove_root(handle)

    def root_keys(self) -> list[T]:
        """Return the keys of the root list, starting at the minimum."""
        if self.min_node is None:
            return []
        return [node.key for node in _siblings(self.min_node)]

    def for_each(self, f: Callable[[T, FibonacciHeapNode[T]], None]) -> None:
        """
        Apply function to each node in the heap.

        Args:
            f: Function to apply to each (key, node) pair
        """
        if self.min_node is None:
            return
        stack = list(_siblings(self.min_node))
        stack.reverse()
        while stack:
            node = stack.pop()
            f(node.key, node)
            children = list(node.children())
            children.reverse()
            stack.extend(children)

    def to_string(self, selector: Callable[[T], str]) -> str:
        """
        Convert heap to string representation using custom selector.

        Each tree is written as ``key(child,child,...)``; trees are separated
        by spaces, starting with the minimum root.

        Args:
            selector: Function to convert a key to string

        Returns:
            String representation of the heap
        """
        if self.min_node is None:
            return ""

        def tree(node: FibonacciHeapNode[T]) -> str:
            parts = [tree(c) for c in node.children()]
            subtree = f"({','.join(parts)})" if parts else ""
            return selector(node.key) + subtree

        return " ".join(tree(root) for root in _siblings(self.min_node))

    def is_heap(self) -> bool:
        """
        Verify the structural invariants (for testing).

        Checks heap order, closed sibling lists, degrees, parent links, that
        no root is marked, the minimum reference and the node count.

        Returns:
            True if the heap is in a valid state
        """
        if self.min_node is None:
            return self.node_count == 0
        if self.min_node.parent is not None:
            return False

        seen = 0
        pending: list[tuple[FibonacciHeapNode[T], Optional[FibonacciHeapNode[T]]]] = [
            (self.min_node, None)
        ]
        while pending:
            start, parent = pending.pop()
            members = 0
            for node in _siblings(start):
                members += 1
                seen += 1
                if seen > self.node_count:
                    return False
                if node.right.left is not node or node.left.right is not node:
                    return False
                if node.parent is not parent or node._owner is None:
                    return False
                if parent is None:
                    if node.marked or self.less_than(node.key, self.min_node.key):
                        return False
                elif self.less_than(node.key, parent.key):
                    return False
                if node.child is None:
                    if node.degree != 0:
                        return False
                else:
                    pending.append((node.child, node))
            if parent is not None and members != parent.degree:
                return False
        return seen == self.node_count

    def _check_handle(self, handle: FibonacciHeapNode[T]) -> None:
        if handle._owner is None:
            raise InvalidHandleError(f"node with key {handle.key!r} was already removed")
        if handle._owner.resolve() is not self._owner:
            raise InvalidHandleError(f"node with key {handle.key!r} belongs to another heap")

    def _add_root(self, node: FibonacciHeapNode[T]) -> None:
        """Splice a singleton node into the root list next to the minimum."""
        if self.min_node is None:
            self.min_node = node
        else:
            _splice(self.min_node, node)

    def _remove_root(self, node: FibonacciHeapNode[T]) -> None:
        """Remove a root, promote its children and consolidate."""
        child = node.child
        if child is not None:
            for c in _siblings(child):
                c.parent = None
                c.marked = False
            _splice(node, child)
            node.child = None
            node.degree = 0

        following = node.right
        _unlink(node)
        node._owner = None
        self.node_count -= 1

        if following is node:
            self.min_node = None
        else:
            self.min_node = following
            self._consolidate()

    def _link(self, y: FibonacciHeapNode[T], x: FibonacciHeapNode[T]) -> None:
        """Make singleton root y a child of root x."""
        if x.child is None:
            x.child = y
        else:
            _splice(x.child, y)
        y.parent = x
        y.marked = False
        x.degree += 1

    def _consolidate(self) -> None:
        """Merge roots of equal degree, then rebuild the root list."""
        roots = list(_siblings(self.min_node))
        table: list[Optional[FibonacciHeapNode[T]]] = [None] * (
            int(math.log(self.node_count) / _LOG_PHI) + 2
        )

        for root in roots:
            _unlink(root)
            x = root
            d = x.degree
            while table[d] is not None:
                y = table[d]
                if self.less_than(y.key, x.key):
                    x, y = y, x
                self._link(y, x)
                table[d] = None
                d += 1
            table[d] = x

        self.min_node = None
        for node in table:
            if node is None:
                continue
            self._add_root(node)
            if self.less_than(node.key, self.min_node.key):
                self.min_node = node

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "consolidated %d roots into %d (%d nodes)",
                len(roots),
                sum(1 for node in table if node is not None),
                self.node_count,
            )

    def _cut(self, node: FibonacciHeapNode[T], parent: FibonacciHeapNode[T]) -> None:
        """Move node from parent's child list to the root list."""
        if node.right is node:
            parent.child = None
        else:
            if parent.child is node:
                parent.child = node.right
            _unlink(node)
        parent.degree -= 1
        node.parent = None
        node.marked = False
        self._add_root(node)

    def _cascading_cut(self, node: FibonacciHeapNode[T]) -> None:
        """Mark node, or cut it and continue upward if it was already marked."""
        while node.parent is not None:
            if not node.marked:
                node.marked = True
                return
            parent = node.parent
            self._cut(node, parent)
            node = parent
