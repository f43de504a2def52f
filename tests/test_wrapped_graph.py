import pytest

from blakegraph.errors import NullValueError
from blakegraph.path import path
from blakegraph.tree_graph import TreeGraph
from blakegraph.wrapped_graph import WrappedGraph
from blakegraph.wrapped_graph import xml_wrapped_graph
from blakegraph.wrapper import IntegerWrapper
from blakegraph.wrapper import StringWrapper
from blakegraph.xml_graph import from_xml
from blakegraph.xml_graph import to_xml


def make_graph():
    return xml_wrapped_graph(StringWrapper, IntegerWrapper)

def test_constructor_rejects_none():
    with pytest.raises(ValueError):
        WrappedGraph(None, StringWrapper, IntegerWrapper)
    with pytest.raises(ValueError):
        WrappedGraph(TreeGraph(), None, IntegerWrapper)
    with pytest.raises(ValueError):
        WrappedGraph(TreeGraph(), StringWrapper, None)

def test_operations_wrap_and_unwrap():
    graph = make_graph()
    assert graph.set(1, ('a', 'b')) is None
    assert graph.set(2, ('a', 'b')) == 1
    assert graph.add(3, ('a',))
    assert not graph.add(4, ('a',))
    assert graph.get(('a', 'b')) == 2
    assert graph.get(('a',)) == 3
    assert graph.get(('x',)) is None
    assert graph.get_all(('a', 'b')) == [3, 2]
    assert graph.size() == 2
    assert graph.contains_value(2)
    assert not graph.contains_value(9)
    assert graph.find_value(2) == path('a', 'b')
    assert graph.asdict() == {('a',): 3, ('a', 'b'): 2}
    # The backing graph holds wrappers.
    inner = graph.graph
    assert inner.get((StringWrapper('a'), StringWrapper('b'))) == IntegerWrapper(2)
    assert isinstance(inner.get((StringWrapper('a'),)), IntegerWrapper)
    assert graph.remove(('a', 'b')) == 2
    assert graph.remove(('a', 'b')) is None
    assert graph.size() == 1
    graph.clear()
    assert graph.is_empty()

def test_null_rejection():
    graph = make_graph()
    with pytest.raises(NullValueError):
        graph.set(None, ('a',))
    with pytest.raises(NullValueError):
        graph.add(None, ('a',))
    with pytest.raises(NullValueError):
        graph.set(1, ('a', None))
    assert graph.is_empty()

def test_views_over_wrapped_graph():
    graph = make_graph()
    graph.set(1, ('a',))
    graph.set(2, ('b', 'c'))
    assert list(graph.path_set()) == [path('a'), path('b', 'c')]
    assert list(graph.values()) == [1, 2]
    assert ('b', 'c') in graph.path_set()
    assert 2 in graph.values()
    assert (('a',), 1) in graph.entry_set()
    graph.values().remove(1)
    assert graph.asdict() == {('b', 'c'): 2}
    graph.path_set().discard(('b', 'c'))
    assert graph.is_empty()
    assert graph.graph.node_count() == 1

def test_entry_set_value_rewraps():
    graph = make_graph()
    graph.set(1, ('a',))
    (entry,) = graph.entry_set()
    assert entry.path == path('a')
    assert entry.value == 1
    assert entry.set_value(5) == 1
    assert graph.get(('a',)) == 5
    assert graph.graph.get((StringWrapper('a'),)) == IntegerWrapper(5)
    with pytest.raises(NullValueError):
        entry.set_value(None)

def test_xml_round_trip():
    graph = make_graph()
    graph.set(1, ('a',))
    graph.set(2, ('a', 'b'))
    data = to_xml(graph)
    assert b'<key><string>a</string></key>' in data
    assert b'<value><long>2</long></value>' in data
    copy = from_xml(data, make_graph())
    assert copy == graph
    assert copy.asdict() == {('a',): 1, ('a', 'b'): 2}

def test_copy():
    graph = make_graph()
    graph.set(1, ('a',))
    copy = graph.copy()
    assert isinstance(copy, WrappedGraph)
    assert copy == graph
    copy.set(2, ('a',))
    assert graph.get(('a',)) == 1

def test_over_plain_tree_graph():
    graph = WrappedGraph(TreeGraph(), StringWrapper, StringWrapper)
    graph['k'] = 'v'
    assert graph['k'] == 'v'
    assert str(graph) == "{['k']=v}"
