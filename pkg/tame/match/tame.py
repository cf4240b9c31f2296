import time
from functools import wraps

import numpy as np
from sklearn.base import BaseEstimator
from sklearn.utils import check_array

from ..errors import DimensionMismatch, NumericDegenerate
from ..graph import as_graph
from .score import bipartite_matching, score_fn
from .tensor import TriangleTensor, as_matrix


class TAMESolver(BaseEstimator):
    """Triangular alignment (TAME) by shifted power iteration.

    Finds the dominant eigenvector of the triangle similarity tensor of ``A`` and
    ``B``. Each iterate is rounded to a matching and scored by the number of
    triangles it preserves; the best-scoring iterate is kept.

    Parameters
    ----------
    A, B : Graph or adjacency matrix
        Graphs with ``nA`` and ``nB`` vertices.
    similarity : array-like, shape (nA * nB,) or (nA, nB), optional
        Prior similarity of vertex pairs. Defaults to uniform.
    beta : float, default=1.0
        Shift added to the operator at every iteration.
    maxiter : int, default=10
        Maximum number of power iterations.
    tol : float, default=1e-12
        Stop once the eigenvalue estimate grows by less than this.
    convex : bool, default=False
        Restrict the tensor to the support of ``similarity`` (cTAME).
    verbose : bool, default=False

    Attributes
    ----------
    X_ : np.ndarray, shape (nA, nB)
        Best-scoring alignment matrix.
    score_ : int
        Triangles preserved by the matching of ``X_``.
    matching_ : tuple of np.ndarray
        ``(ma, mb)`` matching extracted from ``X_``.
    x_ : np.ndarray, shape (nA * nB,)
        Last iterate.
    n_iter_ : int
    converged_ : bool
    scores_ : list of int
    eigenvalues_ : list of float
    """

    def __init__(
        self,
        A,
        B,
        similarity=None,
        beta=1.0,
        maxiter=10,
        tol=1e-12,
        convex=False,
        verbose=False,
    ):
        self.A = as_graph(A)
        self.B = as_graph(B)
        self.similarity = similarity
        self.beta = beta
        self.maxiter = maxiter
        self.tol = tol
        self.convex = convex
        self.verbose = verbose

        self.n_A = self.A.n
        self.n_B = self.B.n

    def status(self):
        if hasattr(self, "n_iter"):
            return f"[Iteration: {self.n_iter}]"
        else:
            return "[Pre-loop]"

    def print(self, msg):
        if self.verbose:
            status = self.status()
            print(status + " " + msg)

    def initialize(self):
        self.print("Initializing")
        w = _l1_normalize(self._check_similarity())

        if self.convex:
            weights = as_matrix(w, self.n_A, self.n_B)
        else:
            weights = None
        self.print("Building triangle index")
        self.tensor_ = TriangleTensor(self.A, self.B, weights=weights)

        self.converged_ = False
        self.scores_ = []
        self.eigenvalues_ = []
        return w

    def compute_tensor_product(self, x):
        self.print("Computing tensor-vector product")
        return self.tensor_.apply(x)

    def compute_score(self, X):
        self.print("Scoring alignment")
        return score_fn(X, self.A, self.B)

    def check_converged(self, lam, old_lam):
        return lam - old_lam < self.tol

    def solve(self):
        x = self.initialize()
        X_best = as_matrix(x, self.n_A, self.n_B)
        best_score = 0
        old_lam = 0.0

        n_iter = 0
        while n_iter < self.maxiter:
            self.n_iter = n_iter

            x_new = self.compute_tensor_product(x)
            # eigenvalue estimate of the unshifted operator
            lam = float(np.dot(x, x_new))
            x_new = _l1_normalize(x_new + self.beta * x)

            X = as_matrix(x_new, self.n_A, self.n_B)
            score = self.compute_score(X)
            self.print(f"Score: {score}, eigenvalue estimate: {lam:.6g}")
            if score >= best_score:
                best_score = score
                X_best = X

            x = x_new
            n_iter += 1
            self.scores_.append(score)
            self.eigenvalues_.append(lam)

            if n_iter == 1:
                old_lam = lam
            elif self.check_converged(lam, old_lam):
                self.converged_ = True
                break
            else:
                old_lam = lam

        self.finalize(x, X_best, best_score, n_iter)
        return self

    def finalize(self, x, X_best, best_score, n_iter):
        if self.converged_:
            self.print("Converged")
        else:
            self.print("Reached maximum number of iterations")
        self.x_ = x
        self.X_ = X_best
        self.score_ = best_score
        self.n_iter_ = n_iter
        self.matching_ = bipartite_matching(X_best)

    def _check_similarity(self):
        n_pairs = self.n_A * self.n_B
        if self.similarity is None:
            return np.full(n_pairs, 1 / n_pairs)

        similarity = check_array(self.similarity, dtype=np.float64, ensure_2d=False)
        if similarity.ndim == 2 and similarity.shape != (self.n_A, self.n_B):
            raise DimensionMismatch(
                f"Similarity matrix has shape {similarity.shape}, "
                f"expected ({self.n_A}, {self.n_B})."
            )
        similarity = similarity.ravel()
        if similarity.size != n_pairs:
            raise DimensionMismatch(
                f"Similarity vector has length {similarity.size}, expected {n_pairs}."
            )
        return similarity


def tame(A, B, similarity=None, beta=1.0, maxiter=10, tol=1e-12, verbose=False):
    """Align ``A`` and ``B`` with TAME and return the best alignment matrix.

    See :class:`TAMESolver` for the parameters.
    """
    solver = TAMESolver(
        A,
        B,
        similarity=similarity,
        beta=beta,
        maxiter=maxiter,
        tol=tol,
        convex=False,
        verbose=verbose,
    )
    solver.solve()
    return solver.X_


def ctame(A, B, similarity=None, beta=1.0, maxiter=10, tol=1e-12, verbose=False):
    """Align ``A`` and ``B`` with cTAME, which only uses pairs of nonzero similarity."""
    solver = TAMESolver(
        A,
        B,
        similarity=similarity,
        beta=beta,
        maxiter=maxiter,
        tol=tol,
        convex=True,
        verbose=verbose,
    )
    solver.solve()
    return solver.X_


def _l1_normalize(x):
    norm = np.abs(x).sum()
    if norm == 0 or not np.isfinite(norm):
        raise NumericDegenerate(f"Cannot normalize a vector with L1 norm {norm}.")
    return x / norm


def timer(f):
    @wraps(f)
    def wrap(*args, **kw):
        ts = time.time()
        result = f(*args, **kw)
        te = time.time()
        sec = te - ts
        output = f"Function {f.__name__} took {sec:.3f} seconds."
        print(output)
        return result

    return wrap
