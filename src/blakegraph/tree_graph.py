from pyrsistent import pvector

from .entry import Entry
from .errors import GraphError, NullValueError
from .graph import Graph
from .path import format_path, pathify


class Node:
    """One node of a TreeGraph.

    key is the path segment leading to the node from its parent (None for
    the root), value the mapped value or None, and children maps each
    child's key to the child. A node holds no reference to its parent.
    """

    __slots__ = ('key', 'value', 'children')

    def __init__(self, key=None, value=None):
        self.key = key
        self.value = value
        self.children = {}

    def get_or_create_child(self, key, node_factory):
        child = self.children.get(key)
        if child is None:
            child = node_factory(key)
            self.children[key] = child
        return child

    def is_dead(self):
        return self.value is None and not self.children

    def __repr__(self):
        return 'Node(key=%r, value=%r, children=%d)' % (
            self.key, self.value, len(self.children))


class TreeGraph(Graph):
    """Graph stored as a trie, one node per distinct path prefix.

    Nodes along a path are created lazily by set() and add(), and nodes
    left with neither a value nor children are pruned by remove(), so the
    trie only holds prefixes of mapped paths. The root (empty path) may
    hold a value.

    node_factory is called with a key segment and must return a fresh
    empty Node (or subclass); it is used for every node the graph creates,
    including the root (with key None).

    The graph is not synchronized. Concurrent mutation from several
    threads must be serialized by the caller.
    """

    def __init__(self, root_value=None, node_factory=Node):
        self.node_factory = node_factory
        self.root = node_factory(None)
        self.n_mappings = 0
        if root_value is not None:
            self.root.value = root_value
            self.n_mappings = 1

    def _get_node(self, path):
        node = self.root
        for key in path:
            node = node.children.get(key)
            if node is None:
                return None
        return node

    def _get_or_create_node(self, path):
        if any(key is None for key in path):
            raise NullValueError('Path segments cannot be None.')
        node = self.root
        for key in path:
            node = node.get_or_create_child(key, self.node_factory)
        return node

    # Graph API.

    def get(self, path):
        node = self._get_node(pathify(path))
        return None if node is None else node.value

    def get_all(self, path):
        # The root value comes first: the empty path prefixes every path.
        node = self.root
        values = [] if node.value is None else [node.value]
        for key in pathify(path):
            node = node.children.get(key)
            if node is None:
                break
            if node.value is not None:
                values.append(node.value)
        return values

    def set(self, value, path):
        if value is None:
            raise NullValueError()
        node = self._get_or_create_node(pathify(path))
        prev = node.value
        node.value = value
        if prev is None:
            self.n_mappings += 1
        return prev

    def add(self, value, path):
        if value is None:
            raise NullValueError()
        node = self._get_or_create_node(pathify(path))
        if node.value is not None:
            return False
        node.value = value
        self.n_mappings += 1
        return True

    def remove(self, path):
        path = pathify(path)
        ancestors = []
        node = self.root
        for key in path:
            ancestors.append(node)
            node = node.children.get(key)
            if node is None:
                return None
        value = node.value
        if value is None:
            return None
        node.value = None
        self.n_mappings -= 1
        # Prune upwards until a node that still has content.
        for key in reversed(path):
            if not node.is_dead():
                break
            node = ancestors.pop()
            del node.children[key]
        return value

    def walk(self):
        """Yield (path, node) for every node of the trie, in pre-order."""
        stack = [(pvector(), self.root)]
        while stack:
            (path, node) = stack.pop()
            yield (path, node)
            # Reversed so that children come off the stack in insertion order.
            stack.extend((path.append(key), child)
                         for key, child in reversed(node.children.items()))

    def entries(self):
        return [TreeGraphEntry(path, node) for (path, node) in self.walk()
                if node.value is not None]

    def find_value(self, value):
        for (path, node) in self.walk():
            if node.value is not None and node.value == value:
                return path
        return None

    def node_count(self):
        return sum(1 for _ in self.walk())

    def size(self):
        return self.n_mappings

    def clear(self):
        self.root = self.node_factory(None)
        self.n_mappings = 0

    def _new_empty(self):
        return type(self)(node_factory=self.node_factory)


class TreeGraphEntry(Entry):

    def __init__(self, path, node):
        super().__init__(path)
        self._node = node

    def get_value(self):
        return self._node.value

    def set_value(self, value):
        if value is None:
            raise NullValueError()
        if self._node.value is None:
            raise GraphError(f'Mapping at {format_path(self.path)} has been removed.')
        prev = self._node.value
        self._node.value = value
        return prev
