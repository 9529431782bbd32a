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

""" Triangle mesh connectivity.

The combinatorics of a triangle mesh are described by three containers
managed by a :class:`ConnectivityInfo` instance:

    - a container of :class:`Vertex` records,
    - a container of :class:`HalfEdge` records,
    - and a container of :class:`Face` records.

Records are addressed by handles of type :class:`~trikern.ids.VertexID`,
:class:`~trikern.ids.HalfEdgeID`, and :class:`~trikern.ids.FaceID`. A
halfedge points to its *destination* vertex, a vertex stores one of its
*outgoing* halfedges.

For every face created by :meth:`ConnectivityInfo.create_face` or
:meth:`ConnectivityInfo.create_face_with_existing_halfedge` the following
holds:

    1. Following :attr:`HalfEdge.next` three times starting with the
       face's halfedge returns to that halfedge.
    2. The three halfedges of this loop refer to the face.
    3. Twin references are symmetric and a halfedge is never its own
       twin.
    4. The halfedge of a vertex, if any, is a live halfedge leaving the
       vertex.

The store keeps (3) intact on its own (see :meth:`~ConnectivityInfo.
set_halfedge_twin` and :meth:`~ConnectivityInfo.remove_halfedge`). All
other relations are the caller's responsibility once the low level
setters are used.

Note
----
To ease debugging, :meth:`ConnectivityInfo._check` relies on assertions.
Assertions are disabled when running in optimized mode via the "-O"
command line argument.
"""

from copy import copy

import numpy as np

import trikern.measures as measures
from trikern.arena import IDMap
from trikern.ids import VertexID, HalfEdgeID, FaceID


class ConnectivityInfo:
    """ Connectivity store.

    Owns the vertex, halfedge and face containers and provides the
    primitive operations to build and tear down triangular faces.

    Note
    ----
    The store is meant to be used by a single writer. There is no
    locking of any kind.
    """

    def __init__(self):
        self._vertices = IDMap(VertexID)
        self._halfedges = IDMap(HalfEdgeID)
        self._faces = IDMap(FaceID)

    def __repr__(self):
        return (f'ConnectivityInfo(vertices={len(self._vertices)}, ' +
                f'halfedges={len(self._halfedges)}, ' +
                f'faces={len(self._faces)})')

    def __str__(self):
        lines = []

        for title, items in (('VERTICES', self._vertices),
                             ('HALFEDGES', self._halfedges),
                             ('FACES', self._faces)):
            lines.append(f'**** {title}: ****')
            lines.append(f'Count: {len(items)}')
            lines.extend(f'{i}: {items[i]!r}' for i in items)

        return '\n'.join(lines)

    @property
    def points(self):
        """ Coordinates of live vertices.

        One row per vertex in the order of :meth:`vertex_iterator`. The
        returned array is a copy.

        :type: ~numpy.ndarray, shape (n, 3)
        """
        if not self._vertices:
            return np.empty((0, 3))

        return np.array([self._vertices[v].position for v in self._vertices])

    def no_vertices(self):
        """ Number of live vertices.
        """
        return len(self._vertices)

    def no_halfedges(self):
        """ Number of live halfedges.
        """
        return len(self._halfedges)

    def no_faces(self):
        """ Number of live faces.
        """
        return len(self._faces)

    def is_vertex(self, vertex_id):
        """ Check if `vertex_id` refers to a live vertex.
        """
        return vertex_id in self._vertices

    def is_halfedge(self, halfedge_id):
        """ Check if `halfedge_id` refers to a live halfedge.
        """
        return halfedge_id in self._halfedges

    def is_face(self, face_id):
        """ Check if `face_id` refers to a live face.
        """
        return face_id in self._faces

    def create_face(self, vertex_id1, vertex_id2, vertex_id3, tag=None):
        """ Create triangle.

        Creates a face together with its three interior halfedges and
        connects them to each other and to the given vertices. The
        halfedges point to `vertex_id2`, `vertex_id3`, and `vertex_id1`
        (in this order) and form a counter-clockwise loop around the
        new face.

        Parameters
        ----------
        vertex_id1, vertex_id2, vertex_id3 : VertexID
            Corners of the triangle in counter-clockwise order.
        tag : object, optional
            Face payload.

        Raises
        ------
        InvalidHandleError
            If any vertex handle does not refer to a live vertex.

        Returns
        -------
        FaceID
            Handle of the new face.

        Note
        ----
        The halfedge of each corner vertex is **overwritten** with the
        outgoing halfedge of the new face. No twins are assigned, use
        :meth:`set_halfedge_twin` once the adjacent face exists.
        """
        # Fail before anything gets allocated.
        for v in (vertex_id1, vertex_id2, vertex_id3):
            self._vertices.get(v)

        face_id = self._new_face(tag)

        # Create inner halfedges. The loop is closed after the last
        # halfedge has been allocated.
        halfedge1 = self.new_halfedge(vertex_id2, None, face_id)
        halfedge3 = self.new_halfedge(vertex_id1, halfedge1, face_id)
        halfedge2 = self.new_halfedge(vertex_id3, halfedge3, face_id)

        self.set_halfedge_next(halfedge1, halfedge2)

        self.set_vertex_halfedge(vertex_id1, halfedge1)
        self.set_vertex_halfedge(vertex_id2, halfedge2)
        self.set_vertex_halfedge(vertex_id3, halfedge3)

        self.set_face_halfedge(face_id, halfedge1)

        return face_id

    def create_face_with_existing_halfedge(self, vertex_id1, vertex_id2,
                                           vertex_id3, halfedge_id,
                                           tag=None):
        """ Create triangle on an existing halfedge.

        Used to attach a triangle to a halfedge that is not yet claimed
        by a face, typically the boundary twin of an edge of an adjacent
        face. The existing halfedge becomes the edge from `vertex_id1` to
        `vertex_id2` of the new face, the two remaining halfedges are
        allocated.

        Parameters
        ----------
        vertex_id1, vertex_id2, vertex_id3 : VertexID
            Corners of the triangle in counter-clockwise order.
        halfedge_id : HalfEdgeID
            Halfedge from `vertex_id1` to `vertex_id2` without a face.
        tag : object, optional
            Face payload.

        Raises
        ------
        InvalidHandleError
            If any handle does not refer to a live item.
        ValueError
            If the halfedge already borders a face or points to a vertex
            other than `vertex_id2`.

        Returns
        -------
        FaceID
            Handle of the new face.

        Note
        ----
        The twin of `halfedge_id` is kept. Vertex halfedges are
        overwritten as done by :meth:`create_face`.
        """
        for v in (vertex_id1, vertex_id2, vertex_id3):
            self._vertices.get(v)

        h = self._halfedges[halfedge_id]

        if h.face is not None:
            msg = f'halfedge {halfedge_id} already borders face {h.face}'
            raise ValueError(msg)

        if h.vertex is not None and h.vertex != vertex_id2:
            msg = (f'halfedge {halfedge_id} points to vertex {h.vertex}, ' +
                   f'expected {vertex_id2}')
            raise ValueError(msg)

        face_id = self._new_face(tag)

        halfedge3 = self.new_halfedge(vertex_id1, halfedge_id, face_id)
        halfedge2 = self.new_halfedge(vertex_id3, halfedge3, face_id)

        h.vertex = vertex_id2
        h.next = halfedge2
        h.face = face_id

        self.set_vertex_halfedge(vertex_id1, halfedge_id)
        self.set_vertex_halfedge(vertex_id2, halfedge2)
        self.set_vertex_halfedge(vertex_id3, halfedge3)

        self.set_face_halfedge(face_id, halfedge_id)

        return face_id

    def new_vertex(self, position):
        """ Create vertex.

        The new vertex is isolated, i.e., it has no halfedge.

        Parameters
        ----------
        position : array_like, shape (3, )
            Vertex coordinates.

        Raises
        ------
        ValueError
            If `position` has the wrong shape.

        Returns
        -------
        VertexID
            Handle of the new vertex.
        """
        return self._vertices.insert(Vertex(None, _as_point(position)))

    def new_halfedge(self, vertex=None, next=None, face=None):
        """ Create halfedge.

        Parameters
        ----------
        vertex : VertexID, optional
            Destination vertex.
        next : HalfEdgeID, optional
            Next halfedge around the face.
        face : FaceID, optional
            Face to the left of the halfedge.

        Returns
        -------
        HalfEdgeID
            Handle of the new halfedge.

        Note
        ----
        Handles are stored as given, no liveness checks are performed.
        The new halfedge has no twin.
        """
        return self._halfedges.insert(HalfEdge(vertex, None, next, face))

    def _new_face(self, tag):
        return self._faces.insert(Face(None, tag))

    def remove_vertex(self, vertex_id):
        """ Remove vertex.

        Halfedges pointing to the vertex are not changed.

        Raises
        ------
        InvalidHandleError
            If the vertex has already been removed.
        """
        self._vertices.remove(vertex_id)

    def remove_halfedge(self, halfedge_id):
        """ Remove halfedge.

        The twin reference of the twin halfedge (if any) is cleared. All
        other references to the removed halfedge (from its face, its
        origin vertex and the preceding halfedge) have to be updated by
        the caller.

        Raises
        ------
        InvalidHandleError
            If the halfedge has already been removed.
        """
        h = self._halfedges[halfedge_id]

        if h.twin is not None and h.twin in self._halfedges:
            self._halfedges[h.twin].twin = None

        self._halfedges.remove(halfedge_id)

    def remove_face(self, face_id):
        """ Remove face.

        Does not cascade. The halfedges of the face still refer to it
        and have to be removed or relinked by the caller.

        Raises
        ------
        InvalidHandleError
            If the face has already been removed.
        """
        self._faces.remove(face_id)

    def clear(self):
        """ Remove all mesh items.

        Previously obtained handles become invalid and stay invalid when
        new items are created.
        """
        self._vertices.clear()
        self._halfedges.clear()
        self._faces.clear()

    def position(self, vertex_id):
        """ Vertex coordinates.

        Direct read and write access, the returned array is the one stored
        with the vertex.

        Returns
        -------
        ~numpy.ndarray, shape (3, )
        """
        return self._vertices[vertex_id].position

    def set_position(self, vertex_id, position):
        """ Move vertex.
        """
        self._vertices[vertex_id].position = _as_point(position)

    def vertex_halfedge(self, vertex_id):
        """ Outgoing halfedge of a vertex.

        Returns
        -------
        HalfEdgeID or None
            :obj:`None` for isolated vertices.
        """
        return self._vertices[vertex_id].halfedge

    def halfedge(self, halfedge_id):
        """ Halfedge record.

        Returns
        -------
        HalfEdge
            A copy of the stored record. Changing it has no effect on
            the mesh.
        """
        return copy(self._halfedges[halfedge_id])

    def face_halfedge(self, face_id):
        """ Some halfedge of a face.
        """
        return self._faces[face_id].halfedge

    def face_tag(self, face_id):
        """ Face payload.

        Returns
        -------
        object
            Shallow copy of the tag stored with the face.
        """
        return copy(self._faces[face_id].tag)

    def set_vertex_halfedge(self, vertex_id, halfedge_id):
        """ Assign outgoing halfedge of a vertex.

        The caller is responsible for `halfedge_id` leaving the vertex.
        """
        self._vertices[vertex_id].halfedge = halfedge_id

    def set_halfedge_next(self, halfedge_id, next_id):
        """ Assign next halfedge.

        The caller is responsible for keeping face loops closed.
        """
        self._halfedges[halfedge_id].next = next_id

    def set_halfedge_twin(self, halfedge_id1, halfedge_id2):
        """ Pair two halfedges.

        Both twin references are set. Halfedges previously paired with
        `halfedge_id1` or `halfedge_id2` lose their twin, so twin references
        stay symmetric.

        Raises
        ------
        ValueError
            If `halfedge_id1` and `halfedge_id2` are the same halfedge.
        """
        if halfedge_id1 == halfedge_id2:
            raise ValueError(f'halfedge {halfedge_id1} cannot be its own twin')

        h1 = self._halfedges[halfedge_id1]
        h2 = self._halfedges[halfedge_id2]

        for h, other in ((h1, halfedge_id2), (h2, halfedge_id1)):
            if (h.twin is not None and h.twin != other
                    and h.twin in self._halfedges):
                self._halfedges[h.twin].twin = None

        h1.twin = halfedge_id2
        h2.twin = halfedge_id1

    def set_halfedge_vertex(self, halfedge_id, vertex_id):
        """ Assign destination vertex.

        The caller is responsible for the outgoing halfedges of the old
        and new destination vertex.
        """
        self._halfedges[halfedge_id].vertex = vertex_id

    def set_halfedge_face(self, halfedge_id, face_id):
        """ Assign face.

        The caller is responsible for the halfedge of the old and new
        face.
        """
        self._halfedges[halfedge_id].face = face_id

    def set_face_halfedge(self, face_id, halfedge_id):
        """ Assign some halfedge of a face.

        The caller is responsible for `halfedge_id` bordering the face.
        """
        self._faces[face_id].halfedge = halfedge_id

    def vertex_iterator(self):
        """ Vertex handle iterator.

        Visits all live vertices in order of ascending indices. The set of
        visited vertices is fixed when this method is called.

        Returns
        -------
        iterator
        """
        return self._vertices.ids()

    def halfedge_iterator(self):
        """ Halfedge handle iterator.

        See :meth:`vertex_iterator`.
        """
        return self._halfedges.ids()

    def face_iterator(self):
        """ Face handle iterator.

        See :meth:`vertex_iterator`.
        """
        return self._faces.ids()

    def _check(self):
        """ Perform sanity checks.
        """
        for f in self._faces:
            h0 = self._faces[f].halfedge
            assert h0 in self._halfedges

            h = h0
            for _ in range(3):
                assert h is not None
                assert self._halfedges[h].face == f
                h = self._halfedges[h].next

            assert h == h0

        for h in self._halfedges:
            twin = self._halfedges[h].twin

            if twin is not None:
                assert twin != h
                assert twin in self._halfedges
                assert self._halfedges[twin].twin == h

        for v in self._vertices:
            h = self._vertices[v].halfedge

            if h is not None:
                assert h in self._halfedges
                assert measures.edge_vertices(self, h)[0] == v


class Vertex:
    """ Vertex record.

    Attributes
    ----------
    halfedge : HalfEdgeID or None
        Some outgoing halfedge.
    position : ~numpy.ndarray, shape (3, )
        Vertex coordinates.
    """

    __slots__ = ('halfedge', 'position')

    def __init__(self, halfedge, position):
        self.halfedge = halfedge
        self.position = position

    def __repr__(self):
        return f'Vertex(halfedge={self.halfedge!r}, position={self.position})'


class HalfEdge:
    """ Halfedge record.

    Attributes
    ----------
    vertex : VertexID or None
        Destination vertex.
    twin : HalfEdgeID or None
        Opposite halfedge, :obj:`None` on the boundary.
    next : HalfEdgeID or None
        Next halfedge in counter-clockwise order around the face.
    face : FaceID or None
        Face to the left of the halfedge.
    """

    __slots__ = ('vertex', 'twin', 'next', 'face')

    def __init__(self, vertex=None, twin=None, next=None, face=None):
        self.vertex = vertex
        self.twin = twin
        self.next = next
        self.face = face

    def __repr__(self):
        return (f'HalfEdge(vertex={self.vertex!r}, twin={self.twin!r}, ' +
                f'next={self.next!r}, face={self.face!r})')

    def __eq__(self, other):
        if not isinstance(other, HalfEdge):
            return NotImplemented

        return ((self.vertex, self.twin, self.next, self.face) ==
                (other.vertex, other.twin, other.next, other.face))

    __hash__ = None


class Face:
    """ Face record.

    Attributes
    ----------
    halfedge : HalfEdgeID or None
        Some halfedge of the face.
    tag : object
        Custom face payload, e.g. a material identifier.
    """

    __slots__ = ('halfedge', 'tag')

    def __init__(self, halfedge, tag=None):
        self.halfedge = halfedge
        self.tag = tag

    def __repr__(self):
        return f'Face(halfedge={self.halfedge!r}, tag={self.tag!r})'


def _as_point(position):
    """ Convert to coordinate array.
    """
    point = np.array(position, dtype=float)

    if point.shape != (3, ):
        raise ValueError(f'cannot use point with shape {point.shape}')

    return point

