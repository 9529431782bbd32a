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

""" OBJ file I/O.

Reads and writes the geometric vertices ('v' lines) and faces ('f' lines)
of triangle meshes. All other OBJ statements are ignored when reading.
Complete specifications can be found in the `Advanced Visualizer Manual`.
"""

import logging

import numpy as np

import trikern.measures as measures

logger = logging.getLogger(__name__)


def _parse_vertex(block):
    """ Vertex index of a face corner.

    Parameters
    ----------
    block : str
        A v, v/vt, v//vn, or v/vt/vn string.

    Raises
    ------
    ValueError
        If the string could not be parsed.

    Returns
    -------
    int
        Vertex index as written, i.e., 1-based or negative (relative).
    """
    v = block.split('/')[0]

    if not v or block.count('/') > 2:
        raise ValueError(f'invalid vertex definition: {block}')

    return int(v)


def read(filename):
    """ Read triangle mesh from file.

    Parameters
    ----------
    filename : str or ~pathlib.Path
        Name of an OBJ file.

    Raises
    ------
    ValueError
        If a line cannot be parsed or a face is not a triangle.

    Returns
    -------
    points : ~numpy.ndarray, shape (n, 3)
        Vertex coordinates.
    faces : list[list[int]]
        Face definitions, 0-based vertex indexing.
    """
    points = []
    faces = []

    with open(filename, 'r') as file:
        for lineno, line in enumerate(file, start=1):
            blocks = line.split()

            if not blocks:
                continue

            if blocks[0] == 'v':
                # Optional w coordinate is dropped.
                if len(blocks) < 4:
                    raise ValueError(f'line {lineno}: vertex needs ' +
                                     'three coordinates')

                points.append([float(x) for x in blocks[1:4]])
            elif blocks[0] == 'f':
                face = [_parse_vertex(block) for block in blocks[1:]]

                if len(face) != 3:
                    raise ValueError(f'line {lineno}: face with ' +
                                     f'{len(face)} vertices, only ' +
                                     'triangles are supported')

                # Negative indices are relative to the number of vertices
                # read up to this point.
                faces.append([len(points) + i if i < 0 else i - 1
                              for i in face])

    logger.debug('read %d vertices and %d faces from %s',
                 len(points), len(faces), filename)

    return np.array(points, dtype=float).reshape(-1, 3), faces


def write(filename, mesh):
    """ Write triangle mesh to file.

    Only live vertices and faces are written. Vertices are renumbered
    consecutively in the order of
    :meth:`~trikern.connectivity.ConnectivityInfo.vertex_iterator`.

    Parameters
    ----------
    filename : str or ~pathlib.Path
        Name of output file.
    mesh : ConnectivityInfo
        Connectivity store.

    Raises
    ------
    ValueError
        If a face corner is not a live vertex.
    """
    vmap = {}

    with open(filename, 'w') as file:
        for i, v in enumerate(mesh.vertex_iterator()):
            vmap[v] = i
            file.write('v')

            for x in mesh.position(v):
                file.write(f' {float(x)!r}')

            file.write('\n')

        for f in mesh.face_iterator():
            corners = measures.face_vertices(mesh, f)

            # Corners have to be live vertices written above.
            if any(v not in vmap for v in corners):
                msg = f'face {f} refers to a missing or removed vertex'
                raise ValueError(msg)

            file.write('f')

            for v in corners:
                file.write(f' {vmap[v] + 1}')

            file.write('\n')

    logger.debug('wrote %d vertices and %d faces to %s',
                 len(vmap), mesh.no_faces(), filename)
