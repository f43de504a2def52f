"""Streaming XML reading and writing.

XMLStreamReader is a pull reader in the style of StAX: the caller advances
it one event at a time with next() and inspects event, tag, text and
attribute(). It is built on xml.dom.pulldom, so the document is parsed
incrementally and never held in memory as a whole. Adjacent text chunks
are merged into a single CHARACTERS event; comments and processing
instructions are skipped.

XMLStreamWriter is the matching push writer built on
xml.sax.saxutils.XMLGenerator.
"""
import io
import re
import xml.sax
from xml.dom import pulldom
from xml.sax.saxutils import XMLGenerator

from .errors import XMLGraphError

DEFAULT_ENCODING = 'UTF-8'

START_ELEMENT = 'START_ELEMENT'
END_ELEMENT = 'END_ELEMENT'
CHARACTERS = 'CHARACTERS'
END_DOCUMENT = 'END_DOCUMENT'

_TEXT_EVENTS = (pulldom.CHARACTERS, pulldom.IGNORABLE_WHITESPACE)

# Characters XML 1.0 cannot represent, not even as character references.
_INVALID_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]')


def check_text(text):
    match = _INVALID_CHARS.search(text)
    if match:
        raise XMLGraphError(
            f'Character {match.group()!r} cannot be written to XML.')
    return text


class XMLStreamReader:

    def __init__(self, stream):
        if isinstance(stream, bytes):
            stream = io.BytesIO(stream)
        elif isinstance(stream, str):
            stream = io.StringIO(stream)
        self._events = pulldom.parse(stream)
        self._lookahead = None
        self._done = False
        self.event = None
        self.tag = None
        self.text = None
        self._element = None

    def _pull(self):
        if self._done:
            return (pulldom.END_DOCUMENT, None)
        try:
            raw = next(self._events, None)
        except xml.sax.SAXParseException as exc:
            raise XMLGraphError(f'Malformed XML: {exc.getMessage()}',
                exc.getLineNumber(), exc.getColumnNumber()) from exc
        except xml.sax.SAXException as exc:
            raise XMLGraphError(f'Malformed XML: {exc}') from exc
        if raw is None or raw[0] == pulldom.END_DOCUMENT:
            self._done = True
            return (pulldom.END_DOCUMENT, None)
        return raw

    def _peek(self):
        if self._lookahead is None:
            self._lookahead = self._pull()
        return self._lookahead

    def _set(self, event, element=None, text=None):
        self.event = event
        self._element = element
        self.tag = None if element is None else element.tagName
        self.text = text
        return event

    def next(self):
        """Advance to the next event and return its type."""
        chunks = []
        while True:
            (kind, node) = self._peek()
            if kind in _TEXT_EVENTS:
                chunks.append(node.data)
                self._lookahead = None
                continue
            if chunks:
                return self._set(CHARACTERS, text=''.join(chunks))
            if kind == pulldom.END_DOCUMENT:
                return self._set(END_DOCUMENT)
            self._lookahead = None
            if kind == pulldom.START_ELEMENT:
                return self._set(START_ELEMENT, element=node)
            if kind == pulldom.END_ELEMENT:
                return self._set(END_ELEMENT, element=node)
            # Document start, comments and processing instructions.

    def has_next(self):
        return self.event != END_DOCUMENT

    def next_tag(self):
        """Advance to the next start or end tag, skipping whitespace.

        Any other text, or the end of the document, is an error.
        """
        event = self.next()
        while event == CHARACTERS:
            if self.text.strip():
                raise XMLGraphError(f'Unexpected text {self.text.strip()!r}.')
            event = self.next()
        if event == END_DOCUMENT:
            raise XMLGraphError('Unexpected end of document.')
        return event

    def attribute(self, name):
        if self._element is None or not self._element.hasAttribute(name):
            return None
        return self._element.getAttribute(name)

    def require_start(self, tag, message=None):
        if self.event != START_ELEMENT or self.tag != tag:
            raise XMLGraphError(message or f'Expected <{tag}> start tag.')

    def require_end(self, tag, message=None):
        if self.event != END_ELEMENT or self.tag != tag:
            raise XMLGraphError(message or f'Expected </{tag}> end tag.')


class XMLStreamWriter:
    """Writes an XML document element by element.

    If indent is a string, every element that contains other elements is
    laid out one child per line, indented by that string per level. Text
    content is never reindented.
    """

    def __init__(self, stream, encoding=DEFAULT_ENCODING, indent=None):
        self._out = XMLGenerator(stream, encoding=encoding,
                                 short_empty_elements=False)
        self.encoding = encoding
        self.indent = indent
        self._open = []
        self._has_children = []

    def _newline(self, depth):
        if self.indent is not None:
            self._out.ignorableWhitespace('\n' + self.indent * depth)

    def start_document(self):
        self._out.startDocument()

    def end_document(self):
        if self._open:
            raise XMLGraphError(
                f'Document ended while <{self._open[-1]}> was still open.')
        if self.indent is not None:
            self._out.ignorableWhitespace('\n')
        self._out.endDocument()

    def start_element(self, tag, attributes=None):
        attributes = attributes or {}
        for value in attributes.values():
            check_text(value)
        if self._has_children:
            self._has_children[-1] = True
        if self._open:
            self._newline(len(self._open))
        self._out.startElement(tag, attributes)
        self._open.append(tag)
        self._has_children.append(False)

    def end_element(self):
        if not self._open:
            raise XMLGraphError('No open element to end.')
        tag = self._open.pop()
        if self._has_children.pop():
            self._newline(len(self._open))
        self._out.endElement(tag)

    def characters(self, text):
        """Write text content. Carriage returns are written as &#13; so
        that a parser does not normalise them away.
        """
        chunks = check_text(text).split('\r')
        self._out.characters(chunks[0])
        for chunk in chunks[1:]:
            self._out.ignorableWhitespace('&#13;')
            self._out.characters(chunk)
