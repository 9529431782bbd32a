"""
Face circulation and edge measure tests.

Run: python -m pytest tests/test_measures.py -v
"""

import math

import numpy as np
import pytest

import trikern.measures as measures
from trikern.builder import MeshBuilder
from trikern.connectivity import ConnectivityInfo


@pytest.fixture
def triangle():
    mesh = ConnectivityInfo()
    v = [mesh.new_vertex(p) for p in ([0, 0, 0], [3, 0, 0], [0, 4, 0])]
    f = mesh.create_face(*v)

    return mesh, v, f


def test_face_halfedges(triangle):
    mesh, v, f = triangle
    hs = list(measures.face_halfedges(mesh, f))

    assert len(hs) == 3
    assert hs[0] == mesh.face_halfedge(f)
    assert measures.face_vertices(mesh, f) == [v[1], v[2], v[0]]


def test_edge_vertices(triangle):
    mesh, v, f = triangle
    h1, h2, h3 = measures.face_halfedges(mesh, f)

    assert measures.edge_vertices(mesh, h1) == (v[0], v[1])
    assert measures.edge_vertices(mesh, h2) == (v[1], v[2])
    assert measures.edge_vertices(mesh, h3) == (v[2], v[0])


def test_edge_measures(triangle):
    mesh, v, f = triangle
    h1, h2, h3 = measures.face_halfedges(mesh, f)

    np.testing.assert_allclose(measures.edge_vector(mesh, h1), [3, 0, 0])
    assert measures.edge_length(mesh, h1) == pytest.approx(3.0)
    assert measures.edge_length(mesh, h2) == pytest.approx(5.0)
    assert measures.edge_sqr_length(mesh, h2) == pytest.approx(25.0)
    assert measures.edge_sqr_length(mesh, h3) == pytest.approx(16.0)

    p, q = measures.edge_positions(mesh, h3)
    np.testing.assert_allclose(p, [0, 4, 0])
    np.testing.assert_allclose(q, [0, 0, 0])


def test_boundary_halfedge_uses_twin(triangle):
    mesh, v, f = triangle
    h1 = mesh.face_halfedge(f)
    b = mesh.new_halfedge(v[0])
    mesh.set_halfedge_twin(h1, b)

    assert measures.edge_vertices(mesh, b) == (v[1], v[0])
    np.testing.assert_allclose(measures.edge_vector(mesh, b), [-3, 0, 0])


def test_undefined_origin(triangle):
    mesh, v, f = triangle
    b = mesh.new_halfedge(v[0])

    assert measures.edge_vertices(mesh, b) == (None, v[0])

    with pytest.raises(ValueError):
        measures.edge_length(mesh, b)


def test_icosahedron_edge_lengths():
    mesh = MeshBuilder().icosahedron().build()
    lengths = [measures.edge_length(mesh, h)
               for h in mesh.halfedge_iterator()]

    # Regular icosahedron inscribed in the unit sphere.
    expected = 4.0 / math.sqrt(10.0 + 2.0 * math.sqrt(5.0))
    np.testing.assert_allclose(lengths, expected)
