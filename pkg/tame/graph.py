import numpy as np
from numba import jit
from scipy import sparse
from scipy.sparse import csr_array

from .errors import DimensionMismatch, OutOfRange


class Graph:
    """Undirected, unweighted adjacency with a per-vertex triangle index.

    Any nonzero entry of ``adjacency`` is an edge. The stored structure is made
    symmetric and the diagonal is dropped, so graphs stored with duplicate or
    one-sided edges give the same triangles. The input is never modified.

    Parameters
    ----------
    adjacency : array-like or scipy.sparse matrix, shape (n, n)
    """

    def __init__(self, adjacency):
        if isinstance(adjacency, Graph):
            adjacency = adjacency.adjacency
        if not sparse.issparse(adjacency):
            adjacency = np.asarray(adjacency)
        if adjacency.ndim != 2 or adjacency.shape[0] != adjacency.shape[1]:
            raise DimensionMismatch(
                f"Adjacency matrix must be square, got shape {adjacency.shape}."
            )

        adjacency = (csr_array(adjacency) != 0).astype(np.int64)
        adjacency = adjacency + adjacency.T
        # no self loops
        adjacency = sparse.triu(adjacency, k=1) + sparse.tril(adjacency, k=-1)
        adjacency = csr_array(adjacency != 0).astype(np.int64)
        adjacency.sort_indices()

        self.adjacency = adjacency
        self._triangle_index = None

    @property
    def n(self):
        return self.adjacency.shape[0]

    @property
    def n_edges(self):
        return self.adjacency.nnz // 2

    def neighbors(self, v):
        self._check_vertex(v)
        indptr = self.adjacency.indptr
        return self.adjacency.indices[indptr[v] : indptr[v + 1]]

    def triangle_index(self):
        """Triangle lists of every vertex, stored like a CSR matrix.

        Returns ``(indptr, first, second)``: the triangles anchored at ``v`` are
        ``(first[t], second[t])`` for ``t`` in ``range(indptr[v], indptr[v + 1])``.
        Both orientations of each triangle are listed, so every triangle through
        ``v`` shows up twice. Computed on first use and cached.
        """
        if self._triangle_index is None:
            indptr = np.ascontiguousarray(self.adjacency.indptr, dtype=np.int64)
            indices = np.ascontiguousarray(self.adjacency.indices, dtype=np.int64)
            self._triangle_index = _anchored_triangles(indptr, indices)
        return self._triangle_index

    def triangles(self, v):
        """Lazily yield the ordered pairs ``(j, k)`` that close a triangle with ``v``."""
        self._check_vertex(v)
        indptr, first, second = self.triangle_index()
        start, stop = indptr[v], indptr[v + 1]
        return ((int(j), int(k)) for j, k in zip(first[start:stop], second[start:stop]))

    def count_triangles(self):
        """Number of distinct triangles in the graph."""
        indptr, _, _ = self.triangle_index()
        # 3 anchors x 2 orientations per triangle
        return int(indptr[-1]) // 6

    def subgraph(self, vertices):
        """Induced subgraph on ``vertices``, relabelled in the given order."""
        vertices = np.asarray(vertices, dtype=np.int64)
        if len(vertices) > 0 and (vertices.min() < 0 or vertices.max() >= self.n):
            raise OutOfRange(
                f"Subgraph vertices must lie in [0, {self.n}), "
                f"got range [{vertices.min()}, {vertices.max()}]."
            )
        return Graph(self.adjacency[vertices][:, vertices])

    def intersection(self, other):
        """Graph of the edges present in both ``self`` and ``other``."""
        other = as_graph(other)
        if self.n != other.n:
            raise DimensionMismatch(
                f"Cannot intersect graphs with {self.n} and {other.n} vertices."
            )
        return Graph(self.adjacency.multiply(other.adjacency))

    def _check_vertex(self, v):
        if not 0 <= v < self.n:
            raise OutOfRange(
                f"Vertex {v} is out of range for a graph with {self.n} vertices."
            )

    def __repr__(self):
        return f"Graph(n={self.n}, n_edges={self.n_edges})"


def as_graph(A):
    if isinstance(A, Graph):
        return A
    return Graph(A)


@jit(nopython=True)
def _has_edge(row, k):
    i = np.searchsorted(row, k)
    return i < len(row) and row[i] == k


@jit(nopython=True)
def _anchored_triangles(indptr, indices):
    n = len(indptr) - 1

    # first pass sizes the index, second pass fills it
    tri_ptr = np.zeros(n + 1, dtype=np.int64)
    for v in range(n):
        nbrs = indices[indptr[v] : indptr[v + 1]]
        count = 0
        for j in nbrs:
            row = indices[indptr[j] : indptr[j + 1]]
            for k in nbrs:
                if _has_edge(row, k):
                    count += 1
        tri_ptr[v + 1] = tri_ptr[v] + count

    first = np.empty(tri_ptr[n], dtype=np.int64)
    second = np.empty(tri_ptr[n], dtype=np.int64)
    for v in range(n):
        nbrs = indices[indptr[v] : indptr[v + 1]]
        pos = tri_ptr[v]
        for j in nbrs:
            row = indices[indptr[j] : indptr[j + 1]]
            for k in nbrs:
                if _has_edge(row, k):
                    first[pos] = j
                    second[pos] = k
                    pos += 1

    return tri_ptr, first, second
