"""
Shortest paths calculation on undirected weighted graphs.

Two backends are available:
1. "heap": Dijkstra's algorithm on the Fibonacci-heap priority queue (always available)
2. "scipy": SciPy sparse graph algorithms (requires scipy)

Asking for "scipy" when it cannot be imported warns and falls back to "heap".
"""

from __future__ import annotations

import logging
import math
import warnings
from typing import Callable, Optional, TypeVar

from .pqueue import PriorityQueue

T = TypeVar("T")

logger = logging.getLogger(__name__)

try:
    import numpy as np
    from scipy.sparse import csr_matrix
    from scipy.sparse.csgraph import shortest_path as scipy_shortest_path
    _HAVE_SCIPY = True
except ImportError:
    _HAVE_SCIPY = False


class BackendWarning(UserWarning):
    """Warning about backend selection."""
    pass


def available_backends() -> list[str]:
    """
    Get the names of the backends usable in this environment.

    Returns:
        Subset of ["heap", "scipy"]
    """
    return ["heap", "scipy"] if _HAVE_SCIPY else ["heap"]


class Neighbour:
    """Edge endpoint in an adjacency list."""

    __slots__ = ("id", "distance")

    def __init__(self, id: int, distance: float):
        self.id = id
        self.distance = distance


class Calculator:
    """
    Calculator for all-pairs shortest paths or shortest paths from a single node.

    Edges are undirected and must have non-negative lengths; self loops are
    ignored.
    """

    def __init__(
        self,
        n: int,
        edges: list[T],
        get_source_index: Callable[[T], int],
        get_target_index: Callable[[T], int],
        get_length: Callable[[T], float],
        backend: str = "heap",
    ):
        """
        Initialize shortest path calculator.

        Args:
            n: Number of nodes
            edges: List of edges
            get_source_index: Function to get source node index from edge
            get_target_index: Function to get target node index from edge
            get_length: Function to get edge length
            backend: "heap" or "scipy"

        Raises:
            ValueError: If backend is unknown or an edge length is negative
        """
        if backend not in ("heap", "scipy"):
            raise ValueError(f"unknown backend {backend!r}")
        if backend == "scipy" and not _HAVE_SCIPY:
            warnings.warn(
                "scipy is not available, using the Fibonacci heap backend. "
                "Install scipy (pip install scipy) to use the scipy backend.",
                BackendWarning,
                stacklevel=2,
            )
            backend = "heap"

        self.n = n
        self.edges = edges
        self.get_source_index = get_source_index
        self.get_target_index = get_target_index
        self.get_length = get_length
        self.backend = backend

        self.neighbours: list[list[Neighbour]] = [[] for _ in range(n)]
        for edge in edges:
            u = get_source_index(edge)
            v = get_target_index(edge)
            d = get_length(edge)
            if d < 0:
                raise ValueError(f"negative edge length {d} between {u} and {v}")
            if u == v:
                continue
            self.neighbours[u].append(Neighbour(v, d))
            self.neighbours[v].append(Neighbour(u, d))

        if backend == "scipy":
            self._build_scipy_graph()
        logger.debug("shortest paths over %d nodes using %s backend", n, backend)

    def _build_scipy_graph(self) -> None:
        """Build scipy sparse graph representation."""
        row_ind = []
        col_ind = []
        data = []

        # keep the shortest of parallel edges; csr_matrix would sum them
        best: dict[tuple[int, int], float] = {}
        for u, adjacent in enumerate(self.neighbours):
            for nb in adjacent:
                if (u, nb.id) not in best or nb.distance < best[(u, nb.id)]:
                    best[(u, nb.id)] = nb.distance

        for (u, v), d in best.items():
            row_ind.append(u)
            col_ind.append(v)
            data.append(d)

        self._graph = csr_matrix(
            (np.asarray(data, dtype=float), (row_ind, col_ind)),
            shape=(self.n, self.n)
        )

    def distance_matrix(self) -> list[list[float]]:
        """
        Compute all-pairs shortest paths.

        Returns:
            Matrix of shortest distances between all pairs of nodes
        """
        if self.backend == "scipy":
            if self.n == 0:
                return []
            dist_matrix = scipy_shortest_path(
                self._graph,
                method='D',
                directed=False,
                return_predecessors=False
            )
            return dist_matrix.tolist()
        return [self.distances_from_node(i) for i in range(self.n)]

    def distances_from_node(self, start: int) -> list[float]:
        """
        Get shortest paths from a specified start node.

        Args:
            start: Starting node index

        Returns:
            Array of shortest distances from start to all other nodes
        """
        if self.backend == "scipy":
            distances = scipy_shortest_path(
                self._graph,
                method='D',
                directed=False,
                indices=start,
                return_predecessors=False
            )
            return distances.tolist()
        d, _ = self._dijkstra(start)
        return d

    def path_from_node_to_node(self, start: int, end: int) -> list[int]:
        """
        Find shortest path from start to end node.

        Args:
            start: Start node index
            end: End node index

        Returns:
            List of node indices in the path, from end back toward start
            (excluding start, including end); empty if end is unreachable
        """
        if self.backend == "scipy":
            _, predecessors = scipy_shortest_path(
                self._graph,
                method='D',
                directed=False,
                indices=start,
                return_predecessors=True
            )
            prev = [None if p < 0 else int(p) for p in predecessors]
        else:
            _, prev = self._dijkstra(start, end)

        path = []
        current = end
        while current != start:
            if prev[current] is None:
                return []
            path.append(current)
            current = prev[current]
        return path

    def _dijkstra(
        self, start: int, end: Optional[int] = None
    ) -> tuple[list[float], list[Optional[int]]]:
        """
        Run Dijkstra's algorithm from start, stopping early once end is settled.

        Returns:
            Distances and predecessor indices (None where there is none)
        """
        d = [math.inf] * self.n
        prev: list[Optional[int]] = [None] * self.n
        settled = [False] * self.n

        q: PriorityQueue[int, float] = PriorityQueue()
        d[start] = 0.0
        q.push(start, 0.0)

        while not q.empty():
            u, du = q.pop()
            settled[u] = True
            if u == end:
                break
            for nb in self.neighbours[u]:
                v = nb.id
                if settled[v]:
                    continue
                t = du + nb.distance
                if t < d[v]:
                    d[v] = t
                    prev[v] = u
                    if v in q:
                        q.reduce_key(v, t)
                    else:
                        q.push(v, t)
        return d, prev
