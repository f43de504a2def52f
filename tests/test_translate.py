import io

import pytest

from blakegraph.errors import XMLGraphError
from blakegraph.translate import XMLBoolean
from blakegraph.translate import XMLFloat
from blakegraph.translate import XMLInteger
from blakegraph.translate import XMLList
from blakegraph.translate import XMLMap
from blakegraph.translate import XMLSet
from blakegraph.translate import XMLString
from blakegraph.translate import read_contained
from blakegraph.xml_stream import END_ELEMENT
from blakegraph.xml_stream import XMLStreamReader
from blakegraph.xml_stream import XMLStreamWriter


def write(translator, obj):
    buffer = io.StringIO()
    writer = XMLStreamWriter(buffer)
    translator.write(writer, obj)
    return buffer.getvalue()

def read(translator, text):
    reader = XMLStreamReader(text)
    reader.next_tag()
    obj = translator.read(reader)
    assert reader.event == END_ELEMENT
    return obj

def test_text_translators_write():
    assert write(XMLString(), 'a < b') == '<string>a &lt; b</string>'
    assert write(XMLString(), '') == '<string></string>'
    assert write(XMLInteger(), 42) == '<long>42</long>'
    assert write(XMLFloat(), 0.1) == '<double>0.1</double>'
    assert write(XMLFloat(), 2) == '<double>2.0</double>'
    assert write(XMLBoolean(), True) == '<boolean>true</boolean>'
    assert write(XMLBoolean(), False) == '<boolean>false</boolean>'

def test_text_translators_read():
    assert read(XMLString(), '<string>a &lt; b</string>') == 'a < b'
    assert read(XMLString(), '<string></string>') == ''
    assert read(XMLString(), '<string/>') == ''
    assert read(XMLString(), '<string>  padded </string>') == '  padded '
    assert read(XMLInteger(), '<long>-7</long>') == -7
    assert read(XMLFloat(), '<double>1e3</double>') == 1000.0
    assert read(XMLBoolean(), '<boolean>TRUE</boolean>') is True
    assert read(XMLBoolean(), '<boolean>false</boolean>') is False

def test_text_translators_bad_data():
    with pytest.raises(XMLGraphError, match='Could not read <long>') as info:
        read(XMLInteger(), '<long>seven</long>')
    assert isinstance(info.value.__cause__, ValueError)
    with pytest.raises(XMLGraphError):
        read(XMLBoolean(), '<boolean>yes</boolean>')
    with pytest.raises(XMLGraphError):
        read(XMLFloat(), '<double>x</double>')
    # Wrong element.
    with pytest.raises(XMLGraphError, match='Expected <long> start tag'):
        read(XMLInteger(), '<string>1</string>')
    # Nested elements are not text.
    with pytest.raises(XMLGraphError):
        read(XMLString(), '<string><b/></string>')

def test_list_and_set():
    translator = XMLList(XMLInteger())
    text = write(translator, [3, 1, 3])
    assert text == '<list><long>3</long><long>1</long><long>3</long></list>'
    assert read(translator, text) == [3, 1, 3]
    assert read(translator, '<list>\n  <long>5</long>\n</list>') == [5]
    assert read(translator, '<list/>') == []

    translator = XMLSet(XMLString())
    assert write(translator, ['a']) == '<set><string>a</string></set>'
    assert read(translator, '<set><string>a</string><string>a</string></set>') == {'a'}

def test_map():
    translator = XMLMap(XMLString(), XMLList(XMLInteger()))
    text = write(translator, {'a': [1], 'b': []})
    assert text == (
        '<map>'
        '<entry><key><string>a</string></key><value><list><long>1</long></list></value></entry>'
        '<entry><key><string>b</string></key><value><list></list></value></entry>'
        '</map>')
    assert read(translator, text) == {'a': [1], 'b': []}
    # Value before key is accepted.
    assert read(translator,
        '<map><entry><value><list/></value><key><string>k</string></key></entry></map>'
    ) == {'k': []}
    assert read(translator, '<map></map>') == {}

@pytest.mark.parametrize('text, message', [
    ('<map><item/></map>',
        'Unexpected XML element in map'),
    ('<map><entry><key><string>a</string></key><key><string>b</string></key></entry></map>',
        'multiple keys'),
    ('<map><entry><key><string>a</string></key><value><string>1</string></value>'
     '<value><string>2</string></value></entry></map>',
        'multiple values'),
    ('<map><entry><key><string>a</string></key></entry></map>',
        'missing its key or its value'),
    ('<map><entry><key><string>a</string></key><value><string>1</string></value></entry>'
     '<entry><key><string>a</string></key><value><string>2</string></value></entry></map>',
        'Duplicate map key'),
    ('<map><entry><key></key><value><string>1</string></value></entry></map>',
        'Reached end of key element without a value'),
    ('<map><entry><key><string>a</string><string>b</string></key></entry></map>',
        'Encountered start of <string> while a key was being read'),
    ('<map><entry><other/></entry></map>',
        'Unexpected <other> element in entry'),
])
def test_map_errors(text, message):
    translator = XMLMap(XMLString(), XMLString())
    with pytest.raises(XMLGraphError, match=message):
        read(translator, text)

def test_read_contained():
    reader = XMLStreamReader('<key>\n  <long>4</long>\n</key>')
    reader.next_tag()
    assert read_contained(reader, 'key', XMLInteger()) == 4
    assert reader.event == END_ELEMENT
    assert reader.tag == 'key'
