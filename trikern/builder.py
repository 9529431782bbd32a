# Copyright 2024, m3shware
#
# Permission is hereby granted, free of charge, to any person obtaining a
# copy of this software and associated documentation files (the "Software"),
# to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense,
# and/or sell copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
# FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
# IN THE SOFTWARE.

""" Mesh construction.

A :class:`MeshBuilder` collects vertex coordinates and triangle
definitions and turns them into a
:class:`~trikern.connectivity.ConnectivityInfo` instance. Data can be
given as arrays, read from an OBJ file, or generated for a few simple
shapes.


Build from indices and positions:

>>> indices = [0, 1, 2,  0, 2, 3,  0, 3, 1]
>>> positions = [0.0, 0.0, 0.0,  1.0, 0.0, -0.5,
...              -1.0, 0.0, -0.5,  0.0, 0.0, 1.0]
>>> mesh = MeshBuilder().with_indices(indices).with_positions(positions).build()
>>> mesh.no_faces(), mesh.no_vertices()
(3, 4)

Build a cube:

>>> mesh = MeshBuilder().cube().build()
>>> mesh.no_faces(), mesh.no_vertices()
(12, 8)
"""

import logging
import math

import numpy as np

import trikern.obj as obj
from trikern.connectivity import ConnectivityInfo

logger = logging.getLogger(__name__)


class MeshBuilder:
    """ Triangle mesh builder.

    All ``with_*`` and shape methods return the builder itself and can be
    chained. Positions and indices set later replace earlier ones.

    Note
    ----
    Positions are not deduplicated. Without indices every three
    consecutive positions form a separate triangle.
    """

    def __init__(self):
        self._indices = None
        self._positions = None

    def with_indices(self, indices):
        """ Set triangle definitions.

        Parameters
        ----------
        indices : array_like
            Flat sequence of vertex indices or array of shape (m, 3),
            0-based. Each triple defines a triangle in counter-clockwise
            order.

        Raises
        ------
        ValueError
            If the number of indices is not a multiple of three.
        """
        indices = np.asarray(indices, dtype=int)

        if indices.size % 3:
            msg = f'number of indices ({indices.size}) not divisible by 3'
            raise ValueError(msg)

        self._indices = indices.reshape(-1, 3)
        return self

    def with_positions(self, positions):
        """ Set vertex coordinates.

        Parameters
        ----------
        positions : array_like
            Flat sequence of coordinates or array of shape (n, 3).

        Raises
        ------
        ValueError
            If the number of coordinates is not a multiple of three.
        """
        positions = np.asarray(positions, dtype=float)

        if positions.size % 3:
            msg = f'number of coordinates ({positions.size}) not divisible by 3'
            raise ValueError(msg)

        self._positions = positions.reshape(-1, 3)
        return self

    def with_obj(self, filename):
        """ Read positions and triangles from an OBJ file.

        See :func:`trikern.obj.read`.
        """
        points, faces = obj.read(filename)

        return self.with_positions(points).with_indices(faces)

    def build(self, tag=None):
        """ Create the connectivity store.

        Parameters
        ----------
        tag : object, optional
            Payload assigned to every face.

        Raises
        ------
        MissingInputError
            If no positions have been specified.
        IndexError
            If an index does not refer to a position.
        ValueError
            If a triangle uses the same vertex more than once.

        Returns
        -------
        ConnectivityInfo
            The new mesh connectivity.
        """
        if self._positions is None:
            raise MissingInputError('did you forget to specify the ' +
                                    'vertex positions?')

        n = len(self._positions)

        if self._indices is None:
            if n % 3:
                raise ValueError(f'{n} positions cannot be grouped into ' +
                                 'triangles, specify indices')

            indices = np.arange(n).reshape(-1, 3)
        else:
            indices = self._indices

        if indices.size and (indices.min() < 0 or indices.max() >= n):
            raise IndexError(f'vertex indices out of range(0, {n})')

        mesh = ConnectivityInfo()
        verts = [mesh.new_vertex(p) for p in self._positions]

        # Maps pairs of vertex indices to the halfedge between them. The
        # reversed pair of a new halfedge yields its twin.
        halfs = dict()

        for i, j, k in indices.tolist():
            if len({i, j, k}) != 3:
                raise ValueError(f'face ({i}, {j}, {k}) contains ' +
                                 'duplicate vertices')

            f = mesh.create_face(verts[i], verts[j], verts[k], tag)
            h = mesh.face_halfedge(f)

            for v, w in ((i, j), (j, k), (k, i)):
                if (v, w) in halfs:
                    logger.warning('edge (%d, %d) is non-manifold', v, w)

                halfs[v, w] = h

                twin = halfs.get((w, v))
                if twin is not None:
                    mesh.set_halfedge_twin(h, twin)

                h = mesh.halfedge(h).next

        # Typically one does not expect isolated vertices in a mesh.
        isolated = sum(1 for v in mesh.vertex_iterator()
                       if mesh.vertex_halfedge(v) is None)

        if isolated:
            logger.warning('there are %d isolated vertices', isolated)

        logger.debug('built mesh with %d vertices, %d halfedges, %d faces',
                     mesh.no_vertices(), mesh.no_halfedges(),
                     mesh.no_faces())

        return mesh

    def cube(self):
        """ Cube with corners at (+-1, +-1, +-1).

        Eight shared vertices, twelve triangles.
        """
        return self.with_positions([
            1.0, -1.0, -1.0,
            1.0, -1.0, 1.0,
            -1.0, -1.0, 1.0,
            -1.0, -1.0, -1.0,
            1.0, 1.0, -1.0,
            1.0, 1.0, 1.0,
            -1.0, 1.0, 1.0,
            -1.0, 1.0, -1.0
        ]).with_indices([
            0, 1, 2,
            0, 2, 3,
            4, 7, 6,
            4, 6, 5,
            0, 4, 5,
            0, 5, 1,
            1, 5, 6,
            1, 6, 2,
            2, 6, 7,
            2, 7, 3,
            4, 0, 3,
            4, 3, 7
        ])

    def unconnected_cube(self):
        """ Cube made of twelve separate triangles.

        Every triangle has its own three vertices, 36 in total.
        """
        self._indices = None

        return self.with_positions([
            1.0, 1.0, -1.0,
            -1.0, 1.0, -1.0,
            1.0, 1.0, 1.0,
            -1.0, 1.0, 1.0,
            1.0, 1.0, 1.0,
            -1.0, 1.0, -1.0,

            -1.0, -1.0, -1.0,
            1.0, -1.0, -1.0,
            1.0, -1.0, 1.0,
            1.0, -1.0, 1.0,
            -1.0, -1.0, 1.0,
            -1.0, -1.0, -1.0,

            1.0, -1.0, -1.0,
            -1.0, -1.0, -1.0,
            1.0, 1.0, -1.0,
            -1.0, 1.0, -1.0,
            1.0, 1.0, -1.0,
            -1.0, -1.0, -1.0,

            -1.0, -1.0, 1.0,
            1.0, -1.0, 1.0,
            1.0, 1.0, 1.0,
            1.0, 1.0, 1.0,
            -1.0, 1.0, 1.0,
            -1.0, -1.0, 1.0,

            1.0, -1.0, -1.0,
            1.0, 1.0, -1.0,
            1.0, 1.0, 1.0,
            1.0, 1.0, 1.0,
            1.0, -1.0, 1.0,
            1.0, -1.0, -1.0,

            -1.0, 1.0, -1.0,
            -1.0, -1.0, -1.0,
            -1.0, 1.0, 1.0,
            -1.0, -1.0, 1.0,
            -1.0, 1.0, 1.0,
            -1.0, -1.0, -1.0
        ])

    def icosahedron(self):
        """ Icosahedron inscribed in the unit sphere.

        Twelve vertices, twenty triangles.
        """
        x = 0.525731112119133606
        z = 0.850650808352039932

        return self.with_positions([
            -x, 0.0, z, x, 0.0, z, -x, 0.0, -z, x, 0.0, -z,
            0.0, z, x, 0.0, z, -x, 0.0, -z, x, 0.0, -z, -x,
            z, x, 0.0, -z, x, 0.0, z, -x, 0.0, -z, -x, 0.0
        ]).with_indices([
            0, 1, 4, 0, 4, 9, 9, 4, 5, 4, 8, 5, 4, 1, 8,
            8, 1, 10, 8, 10, 3, 5, 8, 3, 5, 3, 2, 2, 3, 7,
            7, 3, 10, 7, 10, 6, 7, 6, 11, 11, 6, 0, 0, 6, 1,
            6, 10, 1, 9, 11, 0, 9, 2, 11, 9, 5, 2, 7, 11, 2
        ])

    def cylinder(self, x_subdivisions, angle_subdivisions):
        """ Open unit cylinder along the x-axis.

        Parameters
        ----------
        x_subdivisions : int
            Number of rings of triangles along the axis.
        angle_subdivisions : int
            Number of vertices per ring.

        Raises
        ------
        ValueError
            If there are less than one ring or less than three vertices
            per ring.
        """
        if x_subdivisions < 1 or angle_subdivisions < 3:
            raise ValueError('cylinder needs x_subdivisions >= 1 and ' +
                             'angle_subdivisions >= 3')

        positions = []

        for i in range(x_subdivisions + 1):
            x = i / x_subdivisions

            for j in range(angle_subdivisions):
                angle = 2.0 * math.pi * j / angle_subdivisions
                positions.append([x, math.cos(angle), math.sin(angle)])

        a = angle_subdivisions
        indices = []

        for i in range(x_subdivisions):
            for j in range(a):
                indices.append([i*a + j, i*a + (j + 1) % a,
                                (i + 1)*a + (j + 1) % a])
                indices.append([i*a + j, (i + 1)*a + (j + 1) % a,
                                (i + 1)*a + j])

        return self.with_positions(positions).with_indices(indices)


class MissingInputError(ValueError):
    """ Raised if a mesh is built without vertex positions.
    """

    pass
