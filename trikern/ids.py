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

""" Mesh item handles.

Vertices, halfedges, and faces are referred to by lightweight handles
instead of object references. A handle stores the index of a slot in the
container of its mesh item type together with the generation of that
slot. The generation changes whenever the slot is freed, which makes it
possible to detect handles that outlived the item they referred to.

Note
----
Handles of different types never compare equal, even if index and
generation agree. Ordering comparisons between handles of different
types raise a :class:`TypeError`.
"""


class ID:
    """ Handle base class.

    Parameters
    ----------
    index : int
        Non-negative slot index.
    generation : int, optional
        Slot generation the handle was issued for.

    Raises
    ------
    ValueError
        If `index` or `generation` is negative.

    Note
    ----
    Implementations of :meth:`~object.__int__` and :meth:`~object.__index__`
    are provided, i.e., handles can be used directly as list and array
    indices. The generation is ignored in this case.
    """

    __slots__ = ('_idx', '_gen')

    def __init__(self, index, generation=0):
        index = int(index)
        generation = int(generation)

        if index < 0:
            raise ValueError(f'handle index must be >= 0, got {index}')

        if generation < 0:
            raise ValueError(f'generation must be >= 0, got {generation}')

        object.__setattr__(self, '_idx', index)
        object.__setattr__(self, '_gen', generation)

    def __setattr__(self, name, value):
        raise AttributeError(f'{type(self).__name__} is immutable')

    def __repr__(self):
        if self._gen:
            return f'{type(self).__name__}({self._idx}, {self._gen})'

        return f'{type(self).__name__}({self._idx})'

    def __str__(self):
        return str(self._idx)

    def __index__(self):
        """ Slot index.

        Returns
        -------
        int
            Slot index of the handle.
        """
        return self._idx

    def __int__(self):
        return self._idx

    def __hash__(self):
        return hash((type(self), self._idx, self._gen))

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented

        return self._idx == other._idx and self._gen == other._gen

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented

        return (self._idx, self._gen) < (other._idx, other._gen)

    def __le__(self, other):
        if type(other) is not type(self):
            return NotImplemented

        return (self._idx, self._gen) <= (other._idx, other._gen)

    def __gt__(self, other):
        if type(other) is not type(self):
            return NotImplemented

        return (self._idx, self._gen) > (other._idx, other._gen)

    def __ge__(self, other):
        if type(other) is not type(self):
            return NotImplemented

        return (self._idx, self._gen) >= (other._idx, other._gen)

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (type(self), (self._idx, self._gen))

    @property
    def index(self):
        """ Slot index.

        Same as ``int(self)``.

        :type: int
        """
        return self._idx

    @property
    def generation(self):
        """ Slot generation.

        :type: int
        """
        return self._gen


class VertexID(ID):
    """ Vertex handle.
    """

    __slots__ = ()


class HalfEdgeID(ID):
    """ Halfedge handle.
    """

    __slots__ = ()


class FaceID(ID):
    """ Face handle.
    """

    __slots__ = ()
