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

""" Face circulation and edge measures.

Convenience functions built on top of the read access provided by
:class:`~trikern.connectivity.ConnectivityInfo`. All functions take the
connectivity store as their first argument.
"""

import math


def face_halfedges(mesh, face_id):
    """ Halfedges of a face.

    Parameters
    ----------
    mesh : ConnectivityInfo
        Connectivity store.
    face_id : FaceID
        Face handle.

    Yields
    ------
    HalfEdgeID
        Next halfedge in counter-clockwise order, starting with the
        face's halfedge.

    Note
    ----
    Traversal stops when the loop closes or when a halfedge has no
    next halfedge. A corrupt loop that never returns to its start is
    cut off after three steps with an assertion error.
    """
    h0 = mesh.face_halfedge(face_id)
    h = h0
    n = 0

    while h is not None:
        yield h

        h = mesh.halfedge(h).next
        n += 1

        if h == h0:
            return

        assert n < 3, f'face {face_id} is not a triangle'


def face_vertices(mesh, face_id):
    """ Corners of a face.

    The corners are reported in counter-clockwise order. The first corner
    is the destination of the face's halfedge.

    Returns
    -------
    list[VertexID]
    """
    return [mesh.halfedge(h).vertex for h in face_halfedges(mesh, face_id)]


def edge_vertices(mesh, halfedge_id):
    """ End vertices of a halfedge.

    The origin of a halfedge is the destination of the previous halfedge
    around its face. Halfedges without a face take their origin from the
    twin.

    Parameters
    ----------
    mesh : ConnectivityInfo
        Connectivity store.
    halfedge_id : HalfEdgeID
        Halfedge handle.

    Returns
    -------
    origin : VertexID or None
        Vertex the halfedge leaves. :obj:`None` if it cannot be
        determined.
    target : VertexID or None
        Vertex the halfedge points to.
    """
    h = mesh.halfedge(halfedge_id)

    if h.face is not None and h.next is not None:
        prev = mesh.halfedge(mesh.halfedge(h.next).next)
        origin = prev.vertex
    elif h.twin is not None:
        origin = mesh.halfedge(h.twin).vertex
    else:
        origin = None

    return origin, h.vertex


def edge_positions(mesh, halfedge_id):
    """ End points of a halfedge.

    Returns
    -------
    p : ~numpy.ndarray, shape (3, )
        Origin coordinates.
    q : ~numpy.ndarray, shape (3, )
        Target coordinates.
    """
    v, w = edge_vertices(mesh, halfedge_id)

    if v is None or w is None:
        raise ValueError(f'halfedge {halfedge_id} has an undefined end')

    return mesh.position(v), mesh.position(w)


def edge_vector(mesh, halfedge_id):
    """ Direction of a halfedge.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Target minus origin coordinates.
    """
    p, q = edge_positions(mesh, halfedge_id)

    return q - p


def edge_length(mesh, halfedge_id):
    """ Length of a halfedge.
    """
    return math.sqrt(edge_sqr_length(mesh, halfedge_id))


def edge_sqr_length(mesh, halfedge_id):
    """ Squared length of a halfedge.

    Cheaper than :func:`edge_length` when only comparing lengths.
    """
    d = edge_vector(mesh, halfedge_id)

    return float(d[0]*d[0] + d[1]*d[1] + d[2]*d[2])
