from .path import pathify, format_path


class Entry:
    """A single path -> value mapping of a graph.

    The path is an immutable snapshot taken when the entry was created.
    The value is read through from the graph, and set_value() writes
    through to it, so an entry stays in sync with the mapping it came from
    for as long as that mapping exists.

    Entries compare equal when both their paths and their values are
    equal, and unpack as (path, value).
    """

    def __init__(self, path):
        self._path = pathify(path)

    @property
    def path(self):
        return self._path

    @property
    def value(self):
        return self.get_value()

    def get_value(self):
        raise NotImplementedError()

    def set_value(self, value):
        raise NotImplementedError()

    def __iter__(self):
        yield self._path
        yield self.get_value()

    def __eq__(self, x):
        if isinstance(x, Entry):
            return self.path == x.path and self.value == x.value
        return False

    def __hash__(self):
        return hash(self.path) ^ hash(self.value)

    def __str__(self):
        return '%s=%s' % (format_path(self.path), self.value)

    def __repr__(self):
        return '%s(%s)' % (type(self).__name__, str(self))


def split_entry(x):
    """Return (path, value) for an Entry or a (path, value) pair, else None."""
    if isinstance(x, Entry):
        return (x.path, x.value)
    if isinstance(x, tuple) and len(x) == 2:
        return (pathify(x[0]), x[1])
    return None
