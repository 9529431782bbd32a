"""
Mesh builder tests.

Run: python -m pytest tests/test_builder.py -v
"""

import logging

import pytest

from trikern.builder import MeshBuilder, MissingInputError


def boundary_halfedges(mesh):
    return [h for h in mesh.halfedge_iterator()
            if mesh.halfedge(h).twin is None]


def test_missing_positions():
    with pytest.raises(MissingInputError):
        MeshBuilder().with_indices([0, 1, 2]).build()

    assert issubclass(MissingInputError, ValueError)


def test_indices_and_positions():
    indices = [0, 1, 2,  0, 2, 3,  0, 3, 1]
    positions = [0.0, 0.0, 0.0,  1.0, 0.0, -0.5,
                 -1.0, 0.0, -0.5,  0.0, 0.0, 1.0]
    mesh = MeshBuilder().with_indices(indices).with_positions(positions).build()

    assert mesh.no_faces() == 3
    assert mesh.no_vertices() == 4
    assert mesh.no_halfedges() == 9

    # Three interior edges are shared, the outer rim is open.
    assert len(boundary_halfedges(mesh)) == 3

    mesh._check()


def test_positions_only():
    positions = [0.0, 0.0, 0.0,  1.0, 0.0, -0.5,  -1.0, 0.0, -0.5,
                 0.0, 0.0, 0.0,  -1.0, 0.0, -0.5,  0.0, 0.0, 1.0,
                 0.0, 0.0, 0.0,  0.0, 0.0, 1.0,  1.0, 0.0, -0.5]
    mesh = MeshBuilder().with_positions(positions).build()

    assert mesh.no_faces() == 3
    assert mesh.no_vertices() == 9
    assert len(boundary_halfedges(mesh)) == 9


@pytest.mark.parametrize('shape, n_verts, n_faces', [
    ('cube', 8, 12),
    ('icosahedron', 12, 20),
])
def test_closed_shapes(shape, n_verts, n_faces):
    mesh = getattr(MeshBuilder(), shape)().build()

    assert mesh.no_vertices() == n_verts
    assert mesh.no_faces() == n_faces
    assert mesh.no_halfedges() == 3 * n_faces
    assert boundary_halfedges(mesh) == []

    mesh._check()


def test_unconnected_cube():
    mesh = MeshBuilder().cube().unconnected_cube().build()

    assert mesh.no_vertices() == 36
    assert mesh.no_faces() == 12
    assert len(boundary_halfedges(mesh)) == 36


def test_cylinder():
    mesh = MeshBuilder().cylinder(2, 8).build()

    assert mesh.no_vertices() == 24
    assert mesh.no_faces() == 32

    # Both end rings are open.
    assert len(boundary_halfedges(mesh)) == 16

    mesh._check()

    with pytest.raises(ValueError):
        MeshBuilder().cylinder(0, 8)


def test_face_tag():
    mesh = MeshBuilder().cube().build(tag=3)

    assert {mesh.face_tag(f) for f in mesh.face_iterator()} == {3}


def test_invalid_indices():
    builder = MeshBuilder().with_positions([0.0] * 9)

    with pytest.raises(ValueError):
        builder.with_indices([0, 1])

    with pytest.raises(IndexError):
        builder.with_indices([0, 1, 3]).build()

    with pytest.raises(ValueError):
        builder.with_indices([0, 1, 1]).build()

    with pytest.raises(ValueError):
        MeshBuilder().with_positions([0.0] * 4)


def test_isolated_vertices_warning(caplog):
    positions = [0, 0, 0,  1, 0, 0,  0, 1, 0,  5, 5, 5]

    with caplog.at_level(logging.WARNING, logger='trikern.builder'):
        mesh = MeshBuilder().with_positions(positions).with_indices(
            [0, 1, 2]).build()

    assert mesh.no_vertices() == 4
    assert 'isolated' in caplog.text
