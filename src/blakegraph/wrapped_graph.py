from pyrsistent import pvector

from .entry import Entry
from .errors import NullValueError
from .graph import Graph
from .path import pathify
from .wrapper import XMLElementTranslator
from .xml_graph import XMLTreeGraph


class WrappedGraph(Graph):
    """Graph over arbitrary keys and values backed by a graph of wrappers.

    graph stores XMLWrapper keys and values (for example an XMLTreeGraph,
    which needs keys and values it can write). Every key segment and value
    given to this graph is put in a fresh wrapper from key_wrapper_factory
    or value_wrapper_factory before delegating, and results are unwrapped
    on the way out. Entries write through to the wrapped graph.
    """

    def __init__(self, graph, key_wrapper_factory, value_wrapper_factory):
        if graph is None or key_wrapper_factory is None or value_wrapper_factory is None:
            raise ValueError('Arguments cannot be None.')
        self.graph = graph
        self.key_wrapper_factory = key_wrapper_factory
        self.value_wrapper_factory = value_wrapper_factory

    def wrap_key(self, key):
        wrapper = self.key_wrapper_factory()
        wrapper.obj = key
        return wrapper

    def wrap_value(self, value):
        wrapper = self.value_wrapper_factory()
        wrapper.obj = value
        return wrapper

    def wrap_path(self, path):
        return pvector(self.wrap_key(key) for key in pathify(path))

    def _wrap_new_path(self, path):
        path = pathify(path)
        if None in path:
            raise NullValueError('Path segments cannot be None.')
        return self.wrap_path(path)

    @staticmethod
    def unwrap(wrapper):
        return None if wrapper is None else wrapper.obj

    @staticmethod
    def unwrap_path(path):
        return pvector(wrapper.obj for wrapper in path)

    # Graph API.

    def get(self, path):
        return self.unwrap(self.graph.get(self.wrap_path(path)))

    def get_all(self, path):
        return [wrapper.obj for wrapper in self.graph.get_all(self.wrap_path(path))]

    def set(self, value, path):
        if value is None:
            raise NullValueError()
        prev = self.graph.set(self.wrap_value(value), self._wrap_new_path(path))
        return self.unwrap(prev)

    def add(self, value, path):
        if value is None:
            raise NullValueError()
        return self.graph.add(self.wrap_value(value), self._wrap_new_path(path))

    def remove(self, path):
        return self.unwrap(self.graph.remove(self.wrap_path(path)))

    def entries(self):
        return [WrappedEntry(self, entry) for entry in self.graph.entries()]

    def find_value(self, value):
        path = self.graph.find_value(self.wrap_value(value))
        return None if path is None else self.unwrap_path(path)

    def size(self):
        return self.graph.size()

    def clear(self):
        self.graph.clear()

    def _new_empty(self):
        return WrappedGraph(self.graph._new_empty(), self.key_wrapper_factory,
                            self.value_wrapper_factory)

    # XML persistence, when the wrapped graph supports it.

    def read(self, reader):
        self.graph.read(reader)

    def write(self, writer):
        self.graph.write(writer)


class WrappedEntry(Entry):

    def __init__(self, graph, entry):
        super().__init__(WrappedGraph.unwrap_path(entry.path))
        self._graph = graph
        self._entry = entry

    def get_value(self):
        return WrappedGraph.unwrap(self._entry.value)

    def set_value(self, value):
        if value is None:
            raise NullValueError()
        prev = self._entry.set_value(self._graph.wrap_value(value))
        return WrappedGraph.unwrap(prev)


def xml_wrapped_graph(key_wrapper_cls, value_wrapper_cls):
    """WrappedGraph over an XMLTreeGraph of the given wrapper classes."""
    graph = XMLTreeGraph(XMLElementTranslator(key_wrapper_cls),
                         XMLElementTranslator(value_wrapper_cls))
    return WrappedGraph(graph, key_wrapper_cls, value_wrapper_cls)
