import numpy as np
import pytest


def _adjacency(n, edges):
    A = np.zeros((n, n), dtype=int)
    for i, j in edges:
        A[i, j] = 1
        A[j, i] = 1
    return A


@pytest.fixture
def triangle():
    """A single 3-cycle."""
    return _adjacency(3, [(0, 1), (1, 2), (0, 2)])


@pytest.fixture
def single_edge():
    """Three vertices, one edge, no triangles."""
    return _adjacency(3, [(0, 1)])


@pytest.fixture
def diamond():
    """Two triangles sharing the edge 1-2."""
    return _adjacency(4, [(0, 1), (0, 2), (1, 2), (1, 3), (2, 3)])


@pytest.fixture
def path():
    """A triangle-free path 0-1-2-3."""
    return _adjacency(4, [(0, 1), (1, 2), (2, 3)])


@pytest.fixture
def k4():
    """Complete graph on four vertices, four triangles."""
    return _adjacency(4, [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)])
