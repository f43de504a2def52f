from .entry import Entry
from .errors import GraphError, NullValueError, UnsupportedOperationError, XMLGraphError
from .graph import Graph
from .path import path, pathify
from .tree_graph import Node, TreeGraph
from .views import EntrySetView, PathSetView, ValuesView, ViewIterator
from .wrapped_graph import WrappedGraph, xml_wrapped_graph
from .wrapper import (BooleanWrapper, FloatWrapper, IntegerWrapper, StringWrapper,
    XMLElement, XMLElementTranslator, XMLGenericTranslator, XMLWrapper)
from .xml_graph import XMLTreeGraph, from_xml, read_document, to_xml, write_document
