"""Translators: codecs that read and write one type of object as XML.

A translator's write(writer, obj) emits exactly one element. Its
read(reader) expects the reader to be positioned on that element's start
tag and leaves it positioned on the matching end tag.
"""
from .errors import XMLGraphError
from .xml_stream import CHARACTERS, END_ELEMENT, START_ELEMENT


class XMLTranslator:

    def read(self, reader):
        raise NotImplementedError()

    def write(self, writer, obj):
        raise NotImplementedError()


def read_text_element(reader, tag):
    reader.require_start(tag)
    text = ''
    if reader.next() == CHARACTERS:
        text = reader.text
        reader.next()
    reader.require_end(tag)
    return text

def read_contained(reader, tag, translator):
    """Read the single element wrapped by a <tag> element using translator.

    The reader must be on the <tag> start tag, and is left on its end tag.
    """
    if reader.next_tag() != START_ELEMENT:
        raise XMLGraphError(f'Reached end of {tag} element without a value.')
    obj = translator.read(reader)
    if obj is None:
        raise XMLGraphError(f'Reached end of {tag} element without a value.')
    if reader.next_tag() == START_ELEMENT:
        raise XMLGraphError(
            f'Encountered start of <{reader.tag}> while a {tag} was being read.')
    reader.require_end(tag)
    return obj


class XMLTextTranslator(XMLTranslator):
    """Translator for objects stored as the text of a single element."""

    tag = None

    def from_string(self, text):
        raise NotImplementedError()

    def to_string(self, obj):
        return str(obj)

    def read(self, reader):
        text = read_text_element(reader, self.tag)
        try:
            return self.from_string(text)
        except ValueError as exc:
            raise XMLGraphError(
                f'Could not read <{self.tag}> data from {text!r}.') from exc

    def write(self, writer, obj):
        writer.start_element(self.tag)
        writer.characters(self.to_string(obj))
        writer.end_element()


class XMLString(XMLTextTranslator):
    tag = 'string'

    def from_string(self, text):
        return text


class XMLInteger(XMLTextTranslator):
    tag = 'long'

    def from_string(self, text):
        return int(text)


class XMLFloat(XMLTextTranslator):
    tag = 'double'

    def from_string(self, text):
        return float(text)

    def to_string(self, obj):
        return repr(float(obj))


class XMLBoolean(XMLTextTranslator):
    tag = 'boolean'

    def from_string(self, text):
        text = text.strip().lower()
        if text == 'true':
            return True
        if text == 'false':
            return False
        raise ValueError(f'Not a boolean: {text!r}')

    def to_string(self, obj):
        return 'true' if obj else 'false'


class XMLList(XMLTranslator):
    """Sequence of elements, each written by element_translator."""

    tag = 'list'

    def __init__(self, element_translator):
        self.element_translator = element_translator

    def read_elements(self, reader):
        reader.require_start(self.tag)
        elements = []
        while reader.next_tag() == START_ELEMENT:
            elements.append(self.element_translator.read(reader))
        reader.require_end(self.tag)
        return elements

    def read(self, reader):
        return self.read_elements(reader)

    def write(self, writer, obj):
        writer.start_element(self.tag)
        for element in obj:
            self.element_translator.write(writer, element)
        writer.end_element()


class XMLSet(XMLList):
    tag = 'set'

    def read(self, reader):
        return set(self.read_elements(reader))


class XMLMap(XMLTranslator):
    """Dict written as <map><entry><key>..</key><value>..</value></entry></map>."""

    tag = 'map'
    ENTRY_TAG = 'entry'
    KEY_TAG = 'key'
    VALUE_TAG = 'value'

    def __init__(self, key_translator, value_translator):
        self.key_translator = key_translator
        self.value_translator = value_translator

    def _read_entry(self, reader):
        reader.require_start(self.ENTRY_TAG, 'Unexpected XML element in map.')
        key = value = None
        while reader.next_tag() == START_ELEMENT:
            if reader.tag == self.KEY_TAG:
                if key is not None:
                    raise XMLGraphError('Mapping has multiple keys.')
                key = read_contained(reader, self.KEY_TAG, self.key_translator)
            elif reader.tag == self.VALUE_TAG:
                if value is not None:
                    raise XMLGraphError('Mapping has multiple values.')
                value = read_contained(
                    reader, self.VALUE_TAG, self.value_translator)
            else:
                raise XMLGraphError(f'Unexpected <{reader.tag}> element in entry.')
        reader.require_end(self.ENTRY_TAG)
        if key is None or value is None:
            raise XMLGraphError('Mapping is missing its key or its value.')
        return (key, value)

    def read(self, reader):
        reader.require_start(self.tag)
        result = {}
        while reader.next_tag() == START_ELEMENT:
            (key, value) = self._read_entry(reader)
            if key in result:
                raise XMLGraphError(f'Duplicate map key {key!r}.')
            result[key] = value
        reader.require_end(self.tag)
        return result

    def write(self, writer, obj):
        writer.start_element(self.tag)
        for key, value in obj.items():
            writer.start_element(self.ENTRY_TAG)
            writer.start_element(self.KEY_TAG)
            self.key_translator.write(writer, key)
            writer.end_element()
            writer.start_element(self.VALUE_TAG)
            self.value_translator.write(writer, value)
            writer.end_element()
            writer.end_element()
        writer.end_element()
