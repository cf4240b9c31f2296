import numpy as np
from scipy.optimize import linear_sum_assignment
from sklearn.utils import check_array

from ..errors import DimensionMismatch
from ..graph import as_graph


def bipartite_matching(X):
    """Maximum-weight one-to-one matching on the positive entries of ``X``.

    A zero (or negative) entry is not an edge, so rows or columns that could
    only be paired through such entries are left unmatched.

    Returns
    -------
    ma, mb : np.ndarray
        Matched rows and columns, in increasing row order.
    """
    X = check_array(X, dtype=np.float64)
    weights = np.maximum(X, 0)
    rows, cols = linear_sum_assignment(weights, maximize=True)
    keep = weights[rows, cols] > 0
    return rows[keep], cols[keep]


def score_fn(X, A, B):
    """Number of triangles that the matching extracted from ``X`` preserves.

    ``X`` is matched to a partial bijection between the vertices of ``A`` and
    ``B``; a triangle counts when its three matched vertices span a triangle in
    both graphs.
    """
    A = as_graph(A)
    B = as_graph(B)
    X = np.asarray(X)
    if X.shape != (A.n, B.n):
        raise DimensionMismatch(
            f"Alignment matrix has shape {X.shape}, expected ({A.n}, {B.n})."
        )

    ma, mb = bipartite_matching(X)
    if len(ma) < 3:
        return 0

    C = A.subgraph(ma).intersection(B.subgraph(mb))
    return C.count_triangles()
