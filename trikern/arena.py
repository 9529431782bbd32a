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

""" Slot arena.

Mesh items of one type are stored in a list of slots. A slot is addressed
by a handle (see :mod:`trikern.ids`). Removing an item frees its slot, the
slot index is pushed onto a free list and reused by the next insertion.
Slots are never released, the slot list only grows.

Every slot has a generation counter that is incremented when the slot is
freed. A handle remembers the generation it was issued for, hence a handle
to a removed item can be told apart from a handle to the item that now
occupies the same slot.
"""


class IDMap:
    """ Handle indexed container.

    Parameters
    ----------
    id_type : type
        Handle type, a subclass of :class:`~trikern.ids.ID`.

    Note
    ----
    Freed slot indices are reused in last-in-first-out order. The index of
    the most recently removed item is handed out first.
    """

    def __init__(self, id_type):
        self._id_type = id_type

        # Slot contents and slot generations are kept in two lists of
        # equal length. The free list is mirrored by a set for constant
        # time membership tests.
        self._values = []
        self._gens = []
        self._free = []
        self._freed = set()

    def __repr__(self):
        return f'IDMap({self._id_type.__name__}, size={len(self)})'

    def __len__(self):
        """ Number of live items.

        Returns
        -------
        int
            Number of slots minus number of free slots.
        """
        return len(self._values) - len(self._free)

    def __bool__(self):
        return len(self) > 0

    def __contains__(self, handle):
        """ Liveness check.

        Returns
        -------
        bool
            :obj:`True` if `handle` refers to a live item.
        """
        if type(handle) is not self._id_type:
            return False

        i = handle._idx

        return (i < len(self._values) and i not in self._freed
                and self._gens[i] == handle._gen)

    def __iter__(self):
        """ Handle iterator.

        Visits the handles of all live items in order of ascending slot
        indices. Free slots are skipped.

        Yields
        ------
        ID
            Next live handle.
        """
        return (self._id_type(i, self._gens[i])
                for i in range(len(self._values)) if i not in self._freed)

    def __getitem__(self, handle):
        return self.get(handle)

    def __setitem__(self, handle, value):
        self.set(handle, value)

    @property
    def id_type(self):
        """ Handle type of the container.

        :type: type
        """
        return self._id_type

    @property
    def capacity(self):
        """ Number of slots, live or free.

        :type: int
        """
        return len(self._values)

    def ids(self):
        """ Frozen handle iterator.

        Same as iterating over the container, but the set of live handles
        is determined when this method is called. Subsequent insertions and
        removals do not affect the returned iterator.

        Returns
        -------
        iterator
            Iterator over a list of live handles.
        """
        return iter(list(self))

    def insert(self, value):
        """ Store value in a slot.

        Reuses the most recently freed slot if there is one. Otherwise the
        slot list is extended.

        Parameters
        ----------
        value : object
            Item to be stored.

        Returns
        -------
        ID
            Handle of the slot holding `value`.
        """
        if self._free:
            i = self._free.pop()
            self._freed.remove(i)
            self._values[i] = value
        else:
            i = len(self._values)
            self._values.append(value)
            self._gens.append(0)

        return self._id_type(i, self._gens[i])

    def remove(self, handle):
        """ Free a slot.

        The contents of the slot are left untouched until the slot is
        reused. The slot's generation is incremented, which invalidates
        `handle` and every copy of it.

        Parameters
        ----------
        handle : ID
            Handle of a live item.

        Raises
        ------
        OutOfBoundsError
            If the handle index exceeds the number of slots.
        StaleHandleError
            If the item has already been removed.
        """
        i = self._validate(handle)

        self._gens[i] += 1
        self._free.append(i)
        self._freed.add(i)

    def get(self, handle):
        """ Access stored item.

        Parameters
        ----------
        handle : ID
            Handle of a live item.

        Raises
        ------
        OutOfBoundsError
            If the handle index exceeds the number of slots.
        StaleHandleError
            If the handle does not refer to a live item.
        TypeError
            If the handle has the wrong type.

        Returns
        -------
        object
            The stored item (not a copy).
        """
        return self._values[self._validate(handle)]

    def set(self, handle, value):
        """ Replace stored item.

        Parameters
        ----------
        handle : ID
            Handle of a live item.
        value : object
            New slot contents.

        Raises
        ------
        OutOfBoundsError
            If the handle index exceeds the number of slots.
        StaleHandleError
            If the handle does not refer to a live item.
        TypeError
            If the handle has the wrong type.
        """
        self._values[self._validate(handle)] = value

    def id_at(self, index):
        """ Handle from raw slot index.

        Parameters
        ----------
        index : int
            Slot index.

        Raises
        ------
        OutOfBoundsError
            If `index` exceeds the number of slots.
        StaleHandleError
            If the slot is free.

        Returns
        -------
        ID
            Handle of the item currently stored at `index`.
        """
        i = int(index)

        if not 0 <= i < len(self._values):
            raise OutOfBoundsError(f'{self._id_type.__name__} index {i} ' +
                                   f'out of range(0, {len(self._values)})')

        if i in self._freed:
            raise StaleHandleError(f'slot {i} is free')

        return self._id_type(i, self._gens[i])

    def clear(self):
        """ Remove all items.

        All slots become free, their contents are dropped. Generations of
        live slots are incremented, hence previously obtained handles stay
        invalid after the slots are reused. Slots are handed out again in
        order of ascending indices.
        """
        for i in range(len(self._values)):
            if i not in self._freed:
                self._gens[i] += 1

            self._values[i] = None

        self._free[:] = range(len(self._values) - 1, -1, -1)
        self._freed = set(self._free)

    def _validate(self, handle):
        """ Check handle and return its slot index.
        """
        if type(handle) is not self._id_type:
            raise TypeError(f'expected {self._id_type.__name__}, ' +
                            f'got {type(handle).__name__}')

        i = handle._idx

        if i >= len(self._values):
            raise OutOfBoundsError(f'{handle!r} out of range(0, ' +
                                   f'{len(self._values)})')

        if self._gens[i] != handle._gen or i in self._freed:
            raise StaleHandleError(f'{handle!r} refers to a removed item')

        return i


class InvalidHandleError(LookupError):
    """ Lookup exception base class.

    Raised if a handle does not refer to a live mesh item.
    """

    pass


class OutOfBoundsError(InvalidHandleError, IndexError):
    """ Raised if a handle index exceeds the number of slots.
    """

    pass


class StaleHandleError(InvalidHandleError):
    """ Raised if a handle refers to a removed or replaced mesh item.
    """

    pass
