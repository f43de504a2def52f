"""XML persistence for tree graphs.

A tree is written depth first, one <node> element per trie node:

    <treeGraph>
      <node>                          root, no key
        <value>...</value>            only if the node holds a value
        <node>
          <key>...</key>              the node's path segment
          <value>...</value>
          <node>...</node>            children, recursively
        </node>
      </node>
    </treeGraph>

Keys and values are written inside <key>/<value> by the graph's key and
value translators. A document whose root element is the root <node>
itself, without the <treeGraph> wrapper, is read as well. The format
carries no version number.

write_node and read_node recurse once per tree level, so a graph can be
written and read only while its deepest path is shorter than the
interpreter's recursion limit (sys.getrecursionlimit()) by a margin of a
few frames per level.
"""
import io

from .errors import XMLGraphError
from .translate import read_contained
from .tree_graph import Node, TreeGraph
from .wrapper import XMLGenericTranslator
from .xml_stream import DEFAULT_ENCODING, START_ELEMENT, XMLStreamReader, XMLStreamWriter

GRAPH_TAG = 'treeGraph'
NODE_TAG = 'node'
KEY_TAG = 'key'
VALUE_TAG = 'value'


def write_node(writer, node, key_translator, value_translator):
    writer.start_element(NODE_TAG)
    if node.key is not None:
        writer.start_element(KEY_TAG)
        key_translator.write(writer, node.key)
        writer.end_element()
    if node.value is not None:
        writer.start_element(VALUE_TAG)
        value_translator.write(writer, node.value)
        writer.end_element()
    for child in node.children.values():
        write_node(writer, child, key_translator, value_translator)
    writer.end_element()

def read_node(reader, key_translator, value_translator, node_factory=Node):
    """Read the <node> element the reader is positioned on.

    Returns the node, with its subtree, and the number of values found in
    that subtree. The reader is left on the node's end tag.
    """
    reader.require_start(NODE_TAG, 'Cannot find node start tag.')
    key = None
    value = None
    children = {}
    n_mappings = 0
    while reader.next_tag() == START_ELEMENT:
        if reader.tag == NODE_TAG:
            (child, count) = read_node(
                reader, key_translator, value_translator, node_factory)
            if child.key is None:
                raise XMLGraphError('Found child node without a key.')
            if child.is_dead():
                raise XMLGraphError('Found child node with neither a value nor children.')
            if child.key in children:
                raise XMLGraphError('Found child node with duplicate key.')
            children[child.key] = child
            n_mappings += count
        elif reader.tag == KEY_TAG:
            if key is not None:
                raise XMLGraphError('More than one key found.')
            key = read_contained(reader, KEY_TAG, key_translator)
        elif reader.tag == VALUE_TAG:
            if value is not None:
                raise XMLGraphError('More than one value found.')
            value = read_contained(reader, VALUE_TAG, value_translator)
            n_mappings += 1
        else:
            raise XMLGraphError(f'Unexpected <{reader.tag}> element in node.')
    reader.require_end(NODE_TAG, f'Unexpected </{reader.tag}> end tag in node.')
    node = node_factory(key)
    node.value = value
    node.children.update(children)
    return (node, n_mappings)


class XMLTreeGraph(TreeGraph):
    """TreeGraph that can be written to and read from XML.

    key_translator and value_translator write the path segments and the
    values. When one is not given, keys (or values) must be XMLElements and
    are written with XMLGenericTranslator.
    """

    def __init__(self, key_translator=None, value_translator=None,
            root_value=None, node_factory=Node):
        super().__init__(root_value=root_value, node_factory=node_factory)
        self.key_translator = key_translator or XMLGenericTranslator()
        self.value_translator = value_translator or XMLGenericTranslator()

    def read(self, reader):
        """Replace the contents of the graph with the <treeGraph> at reader.

        A bare root <node> element is accepted as well. On error the graph
        is left unchanged.
        """
        root = None
        n_mappings = 0
        if reader.event == START_ELEMENT and reader.tag == NODE_TAG:
            (root, n_mappings) = read_node(reader, self.key_translator,
                self.value_translator, self.node_factory)
        else:
            reader.require_start(GRAPH_TAG, 'Stream not in opening tag of expected graph.')
            while reader.next_tag() == START_ELEMENT:
                if reader.tag != NODE_TAG:
                    raise XMLGraphError(f'Unexpected <{reader.tag}> element in graph.')
                if root is not None:
                    raise XMLGraphError('Duplicate tree root found.')
                (root, n_mappings) = read_node(reader, self.key_translator,
                    self.value_translator, self.node_factory)
            reader.require_end(GRAPH_TAG, 'Unexpected closing tag found.')
        if root is None:
            root = self.node_factory(None)
        elif root.key is not None:
            raise XMLGraphError('Tree root cannot have a key.')
        self.root = root
        self.n_mappings = n_mappings

    def write(self, writer):
        writer.start_element(GRAPH_TAG)
        write_node(writer, self.root, self.key_translator, self.value_translator)
        writer.end_element()

    def _new_empty(self):
        return type(self)(self.key_translator, self.value_translator,
                          node_factory=self.node_factory)


def write_document(stream, element, encoding=DEFAULT_ENCODING, indent=None):
    """Write element (anything with write(writer)) as a whole XML document."""
    writer = XMLStreamWriter(stream, encoding=encoding, indent=indent)
    writer.start_document()
    element.write(writer)
    writer.end_document()

def read_document(stream, element):
    """Read a whole XML document into element (anything with read(reader)).

    stream may be a binary or text file object, bytes or a str holding
    the document.
    """
    reader = XMLStreamReader(stream)
    if reader.next_tag() != START_ELEMENT:
        raise XMLGraphError('Document has no root element.')
    element.read(reader)
    return element

def to_xml(element, encoding=DEFAULT_ENCODING, indent=None):
    buffer = io.BytesIO()
    write_document(buffer, element, encoding=encoding, indent=indent)
    return buffer.getvalue()

def from_xml(data, element):
    return read_document(data, element)
