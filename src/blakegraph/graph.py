from .errors import UnsupportedOperationError
from .path import pathify
from .views import EntrySetView, PathSetView, ValuesView


class Graph:
    """Associative container mapping paths (sequences of keys) to values.

    A path is given as a tuple, a list or a pyrsistent vector of key
    segments; any other object is a path of one segment. The empty path
    addresses the root. Values are never None: None means "no mapping".

    Subclasses implement get, get_all, set, add, remove, entries, size and
    clear. Everything else is derived from those.
    """

    def get(self, path):
        raise NotImplementedError()

    def get_all(self, path):
        raise NotImplementedError()

    def set(self, value, path):
        raise NotImplementedError()

    def add(self, value, path):
        raise NotImplementedError()

    def remove(self, path):
        raise NotImplementedError()

    def entries(self):
        """Return a list snapshot of the Entry of every mapping, in pre-order."""
        raise NotImplementedError()

    def size(self):
        raise NotImplementedError()

    def clear(self):
        raise NotImplementedError()

    def _new_empty(self):
        raise NotImplementedError()

    # Derived API.

    def contains_path(self, path):
        return self.get(path) is not None

    def contains_value(self, value):
        if value is None:
            return False
        return self.find_value(value) is not None

    def find_value(self, value):
        """Return the path of the first mapping holding value, or None."""
        for entry in self.entries():
            if entry.value == value:
                return entry.path
        return None

    def is_empty(self):
        return self.size() == 0

    def path_set(self):
        return PathSetView(self)

    def values(self):
        return ValuesView(self)

    def entry_set(self):
        return EntrySetView(self)

    def update(self, other):
        """Copy every mapping of other (a Graph or a {path: value} dict)."""
        if isinstance(other, Graph):
            items = [(entry.path, entry.value) for entry in other.entries()]
        else:
            items = list(other.items())
        for (path, value) in items:
            self.set(value, path)

    def copy(self):
        graph = self._new_empty()
        graph.update(self)
        return graph

    def asdict(self):
        return {tuple(entry.path): entry.value for entry in self.entries()}

    # Python protocols.

    def __len__(self):
        return self.size()

    def __contains__(self, path):
        return self.contains_path(path)

    def __getitem__(self, path):
        value = self.get(path)
        if value is None:
            raise KeyError(pathify(path))
        return value

    def __setitem__(self, path, value):
        self.set(value, path)

    def __delitem__(self, path):
        if self.remove(path) is None:
            raise KeyError(pathify(path))

    def __iter__(self):
        raise UnsupportedOperationError('Cannot iterate over graph, '
            'use graph.path_set(), graph.values() or graph.entry_set().')

    def __eq__(self, x):
        if isinstance(x, Graph):
            return self.entry_set() == x.entry_set()
        return False

    def __hash__(self):
        return sum(hash(entry) for entry in self.entries())

    def __str__(self):
        return '{%s}' % (', '.join(str(entry) for entry in self.entries()),)

    def __repr__(self):
        return '%s(%s)' % (type(self).__name__, str(self))
