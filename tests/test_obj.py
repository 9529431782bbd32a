"""
OBJ file I/O tests.

Run: python -m pytest tests/test_obj.py -v
"""

import numpy as np
import pytest

import trikern.obj as obj
from trikern.builder import MeshBuilder


def test_write_and_read_cube(tmp_path):
    filename = tmp_path / 'cube.obj'
    mesh = MeshBuilder().cube().build()

    obj.write(filename, mesh)
    points, faces = obj.read(filename)

    np.testing.assert_array_equal(points, mesh.points)
    assert len(faces) == 12

    copy = MeshBuilder().with_obj(filename).build()
    assert copy.no_vertices() == 8
    assert copy.no_faces() == 12
    assert all(copy.halfedge(h).twin is not None
               for h in copy.halfedge_iterator())


def test_write_renumbers_vertices(tmp_path):
    filename = tmp_path / 'tri.obj'
    mesh = MeshBuilder().with_positions(
        [0, 0, 0,  9, 9, 9,  1, 0, 0,  0, 1, 0]).with_indices(
        [0, 2, 3]).build()

    # Drop the isolated vertex.
    v = [v for v in mesh.vertex_iterator() if mesh.vertex_halfedge(v) is None]
    mesh.remove_vertex(v[0])

    obj.write(filename, mesh)
    points, faces = obj.read(filename)

    np.testing.assert_array_equal(points, [[0, 0, 0], [1, 0, 0], [0, 1, 0]])
    assert faces == [[1, 2, 0]]


def test_read_index_forms(tmp_path):
    filename = tmp_path / 'forms.obj'
    filename.write_text(
        '# comment\n'
        'v 0 0 0\n'
        'v 1 0 0\n'
        'vt 0.5 0.5\n'
        'v 0 1 0 1.0\n'
        'v 1 1 0\n'
        '\n'
        'f 1/1 2/1/1 3//1\n'
        'f -3 -1 -2\n'
    )

    points, faces = obj.read(filename)

    assert points.shape == (4, 3)
    assert faces == [[0, 1, 2], [1, 3, 2]]


def test_read_rejects_quads(tmp_path):
    filename = tmp_path / 'quad.obj'
    filename.write_text('v 0 0 0\nv 1 0 0\nv 1 1 0\nv 0 1 0\nf 1 2 3 4\n')

    with pytest.raises(ValueError):
        obj.read(filename)


def test_read_empty(tmp_path):
    filename = tmp_path / 'empty.obj'
    filename.write_text('')

    points, faces = obj.read(filename)

    assert points.shape == (0, 3)
    assert faces == []


def test_write_rejects_removed_corner(tmp_path):
    filename = tmp_path / 'broken.obj'
    mesh = MeshBuilder().with_positions(
        [0, 0, 0,  1, 0, 0,  0, 1, 0]).build()

    mesh.remove_vertex(next(mesh.vertex_iterator()))

    with pytest.raises(ValueError, match='face'):
        obj.write(filename, mesh)
