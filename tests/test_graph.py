import numpy as np
import pytest
from scipy.sparse import csr_array, csr_matrix

from tame import DimensionMismatch, Graph, OutOfRange


def test_triangle_pairs_of_single_triangle(triangle):
    G = Graph(triangle)
    assert sorted(G.triangles(0)) == [(1, 2), (2, 1)]
    assert sorted(G.triangles(1)) == [(0, 2), (2, 0)]
    assert sorted(G.triangles(2)) == [(0, 1), (1, 0)]


def test_triangles_are_lazy(triangle):
    pairs = Graph(triangle).triangles(0)
    assert not isinstance(pairs, (list, tuple))
    assert next(pairs) in {(1, 2), (2, 1)}


def test_vertex_without_triangles(diamond, path):
    assert list(Graph(path).triangles(1)) == []
    # vertex 0 of the diamond is only in triangle 0-1-2
    assert sorted(Graph(diamond).triangles(0)) == [(1, 2), (2, 1)]
    assert sorted(Graph(diamond).triangles(1)) == [(0, 2), (2, 0), (2, 3), (3, 2)]


@pytest.mark.parametrize("fixture", ["triangle", "diamond", "k4", "path"])
def test_anchored_pairs_come_in_both_orientations(fixture, request):
    G = Graph(request.getfixturevalue(fixture))
    for v in range(G.n):
        pairs = list(G.triangles(v))
        assert len(pairs) % 2 == 0
        for j, k in pairs:
            assert (k, j) in pairs
            assert G.adjacency[v, j] and G.adjacency[v, k] and G.adjacency[j, k]


def test_count_triangles(triangle, single_edge, diamond, path, k4):
    assert Graph(triangle).count_triangles() == 1
    assert Graph(single_edge).count_triangles() == 0
    assert Graph(diamond).count_triangles() == 2
    assert Graph(path).count_triangles() == 0
    assert Graph(k4).count_triangles() == 4


def test_one_sided_and_duplicate_storage():
    # each edge stored once, one with a weight of 2
    upper = np.array([[0, 2, 1], [0, 0, 1], [0, 0, 0]])
    G = Graph(upper)
    assert G.n_edges == 3
    assert G.count_triangles() == 1
    assert sorted(G.triangles(0)) == [(1, 2), (2, 1)]


def test_self_loops_are_ignored(triangle):
    A = triangle + np.eye(3, dtype=int)
    G = Graph(A)
    assert G.adjacency.diagonal().sum() == 0
    assert G.count_triangles() == 1


def test_sparse_input_matches_dense(diamond):
    dense = Graph(diamond)
    for A in [csr_array(diamond), csr_matrix(diamond)]:
        G = Graph(A)
        for v in range(4):
            assert sorted(G.triangles(v)) == sorted(dense.triangles(v))


def test_input_is_not_modified(triangle):
    A = triangle.copy()
    A[0, 0] = 1
    before = A.copy()
    Graph(A)
    np.testing.assert_array_equal(A, before)


def test_out_of_range_vertex(triangle):
    G = Graph(triangle)
    with pytest.raises(OutOfRange):
        G.triangles(3)
    with pytest.raises(OutOfRange):
        G.triangles(-1)
    with pytest.raises(OutOfRange):
        G.neighbors(5)
    with pytest.raises(OutOfRange):
        G.subgraph([0, 3])


def test_non_square_adjacency():
    with pytest.raises(DimensionMismatch):
        Graph(np.zeros((3, 4)))
    with pytest.raises(DimensionMismatch):
        Graph(np.zeros(3))


def test_subgraph_follows_given_order(diamond):
    G = Graph(diamond)
    S = G.subgraph([3, 2, 1])
    assert S.n == 3
    assert S.count_triangles() == 1
    # 3-2 and 3-1 are edges of the diamond, relabelled to 0-1 and 0-2
    assert S.adjacency[0, 1] == 1
    assert S.adjacency[0, 2] == 1
    np.testing.assert_array_equal(G.neighbors(0), [1, 2])


def test_intersection(diamond, k4):
    C = Graph(k4).intersection(Graph(diamond))
    assert C.n_edges == 5
    assert C.count_triangles() == 2

    with pytest.raises(DimensionMismatch):
        Graph(k4).intersection(np.ones((3, 3)))
