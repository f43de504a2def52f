"""Live views over the mappings of a graph.

Every view is backed by its graph: removing through a view removes the
mapping from the graph, and changes made to the graph show up in the view.
Views cannot add mappings; add() and update() raise
UnsupportedOperationError.

Iterating a view walks a snapshot of the mappings taken when iteration
starts. Removing the element last returned through ViewIterator.remove(),
or replacing an entry's value with Entry.set_value(), is supported while
iterating. The result of any other change to the graph while a view is
being iterated is undefined.
"""
from collections.abc import Collection, MutableSet

from .entry import split_entry
from .errors import GraphError, UnsupportedOperationError
from .path import format_path, pathify


class ViewIterator:

    def __init__(self, graph, project):
        self._graph = graph
        self._entries = iter(graph.entries())
        self._project = project
        self._last = None

    def __iter__(self):
        return self

    def __next__(self):
        self._last = next(self._entries)
        return self._project(self._last)

    def remove(self):
        """Remove the mapping of the element last returned by next()."""
        if self._last is None:
            raise GraphError('No element to remove: call next() first.')
        self._graph.remove(self._last.path)
        self._last = None


class GraphView:

    def __init__(self, graph):
        self._graph = graph

    @classmethod
    def _from_iterable(cls, it):
        # Results of set operators are plain snapshots, not views.
        return set(it)

    def __len__(self):
        return self._graph.size()

    def __eq__(self, x):
        if not isinstance(x, Collection) or isinstance(x, str):
            return NotImplemented
        if len(x) != len(self):
            return False
        return all(element in self for element in x)

    def __hash__(self):
        return sum(hash(element) for element in self)

    def _element_str(self, element):
        return str(element)

    def __str__(self):
        return '[%s]' % (', '.join(self._element_str(e) for e in self),)

    def __repr__(self):
        return '%s(%s)' % (type(self).__name__, str(self))

    def add(self, element):
        raise UnsupportedOperationError(
            f'{type(self).__name__} does not support adding.')

    def update(self, *others):
        raise UnsupportedOperationError(
            f'{type(self).__name__} does not support adding.')

    def clear(self):
        self._graph.clear()

    def remove_all(self, elements):
        changed = False
        for element in elements:
            if self.discard(element):
                changed = True
        return changed

    def __iand__(self, it):
        self.retain_all(it)
        return self


class PathSetView(GraphView, MutableSet):
    """Set of the paths that hold a value."""

    def __contains__(self, p):
        return self._graph.contains_path(pathify(p))

    def __iter__(self):
        return ViewIterator(self._graph, lambda entry: entry.path)

    def _element_str(self, p):
        return format_path(p)

    def discard(self, p):
        p = pathify(p)
        if not self._graph.contains_path(p):
            return False
        self._graph.remove(p)
        return True

    def retain_all(self, paths):
        keep = {pathify(p) for p in paths}
        to_remove = [p for p in self if p not in keep]
        for p in to_remove:
            self._graph.remove(p)
        return bool(to_remove)


class ValuesView(GraphView, Collection):
    """Collection of the values stored in the graph, one per mapping."""

    def __contains__(self, value):
        return self._graph.contains_value(value)

    def __iter__(self):
        return ViewIterator(self._graph, lambda entry: entry.value)

    def discard(self, value):
        # Removes a single mapping: the first holding value, in pre-order.
        if value is None:
            return False
        p = self._graph.find_value(value)
        if p is None:
            return False
        self._graph.remove(p)
        return True

    def remove(self, value):
        if not self.discard(value):
            raise ValueError(f'{value!r} is not a value of the graph.')

    def remove_all(self, values):
        changed = False
        for value in values:
            while self.discard(value):
                changed = True
        return changed

    def retain_all(self, values):
        values = list(values)
        to_remove = [v for v in self if v not in values]
        for value in to_remove:
            self.discard(value)
        return bool(to_remove)


class EntrySetView(GraphView, MutableSet):
    """Set of the graph's entries.

    Membership accepts Entry objects as well as (path, value) pairs.
    """

    def __contains__(self, x):
        split = split_entry(x)
        if split is None:
            return False
        (p, value) = split
        mapped = self._graph.get(p)
        return mapped is not None and mapped == value

    def __iter__(self):
        return ViewIterator(self._graph, lambda entry: entry)

    def discard(self, x):
        if x not in self:
            return False
        (p, _) = split_entry(x)
        self._graph.remove(p)
        return True

    def retain_all(self, entries):
        keep = {}
        for x in entries:
            split = split_entry(x)
            if split is not None:
                keep.setdefault(split[0], []).append(split[1])
        to_remove = [entry for entry in self
                     if entry.value not in keep.get(entry.path, ())]
        for entry in to_remove:
            self._graph.remove(entry.path)
        return bool(to_remove)
