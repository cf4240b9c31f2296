import numpy as np
from numba import jit
from sklearn.utils import check_array

from ..errors import DimensionMismatch
from ..graph import as_graph


class TriangleTensor:
    """Matrix-free action of the triangle similarity tensor of two graphs.

    The tensor has an entry for every pair of vertex triples ``(g, j, k)`` of
    ``G`` and ``(h, j', k')`` of ``H`` that are both triangles. It is never
    formed; :meth:`apply` contracts it with an alignment vector using the
    per-vertex triangle lists of both graphs, which are built once when the
    operator is created.

    Parameters
    ----------
    G, H : Graph or adjacency matrix
    weights : array-like, shape (G.n, H.n), optional
        If given, cells whose weight is zero are forced to zero in every product
        (the "convex" variant).
    """

    def __init__(self, G, H, weights=None):
        self.G = as_graph(G)
        self.H = as_graph(H)
        self.shape = (self.G.n, self.H.n)

        if weights is None:
            self.weights = None
            self._gate = np.empty((0, 0), dtype=np.float64)
        else:
            weights = check_array(weights, dtype=np.float64)
            if weights.shape != self.shape:
                raise DimensionMismatch(
                    f"Weight matrix has shape {weights.shape}, expected {self.shape}."
                )
            self.weights = weights
            self._gate = np.ascontiguousarray(weights)

        self._G_index = self.G.triangle_index()
        self._H_index = self.H.triangle_index()

    @property
    def gated(self):
        return self.weights is not None

    def apply(self, x):
        X = as_matrix(x, *self.shape)
        Y = _imp_ttv(
            np.ascontiguousarray(X),
            *self._G_index,
            *self._H_index,
            self._gate,
            self.gated,
        )
        return Y.ravel()

    __call__ = apply


def as_matrix(x, n_rows, n_cols):
    """Row-major view of an alignment vector as an ``n_rows x n_cols`` matrix."""
    x = np.asarray(x, dtype=np.float64)
    if x.ndim != 1 or x.size != n_rows * n_cols:
        raise DimensionMismatch(
            f"Alignment vector of shape {x.shape} cannot be reshaped to "
            f"({n_rows}, {n_cols})."
        )
    return x.reshape(n_rows, n_cols)


def imp_ttv(G, H, x):
    """Triangle tensor times ``x``; returns a vector of the same length."""
    return TriangleTensor(G, H).apply(x)


def c_imp_ttv(G, H, x, W):
    """Like :func:`imp_ttv`, but zero wherever the weight matrix ``W`` is zero."""
    return TriangleTensor(G, H, weights=W).apply(x)


@jit(nopython=True)
def _imp_ttv(X, g_ptr, g_first, g_second, h_ptr, h_first, h_second, W, gated):
    n_G, n_H = X.shape
    Y = np.zeros((n_G, n_H))
    for g in range(n_G):
        for h in range(n_H):
            if gated and W[g, h] == 0:
                continue
            total = 0.0
            for s in range(g_ptr[g], g_ptr[g + 1]):
                j = g_first[s]
                k = g_second[s]
                for t in range(h_ptr[h], h_ptr[h + 1]):
                    jp = h_first[t]
                    kp = h_second[t]
                    total += X[j, jp] * X[k, kp] + X[j, kp] * X[k, jp]
            Y[g, h] = 2 * total
    return Y
