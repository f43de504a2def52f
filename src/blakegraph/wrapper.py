import importlib

from .errors import XMLGraphError
from .translate import XMLBoolean, XMLFloat, XMLInteger, XMLString, XMLTranslator
from .xml_stream import START_ELEMENT


class XMLElement:
    """Object that writes itself as one XML element and reads itself back.

    read(reader) is called on an instance created with no arguments, with
    the reader positioned on the element's start tag, and must leave it on
    the matching end tag.
    """

    def read(self, reader):
        raise NotImplementedError()

    def write(self, writer):
        raise NotImplementedError()


class XMLWrapper(XMLElement):
    """XMLElement holding an arbitrary (possibly None) payload in obj.

    Wrappers compare and hash by payload, so they can stand in for their
    payload as graph keys and values. The wrapper class itself is the
    factory for empty wrappers.
    """

    def __init__(self, obj=None):
        self.obj = obj

    def __eq__(self, x):
        if isinstance(x, XMLWrapper):
            return self.obj == x.obj
        return False

    def __hash__(self):
        return 0 if self.obj is None else hash(self.obj)

    def __str__(self):
        return str(self.obj)

    def __repr__(self):
        return '%s(%r)' % (type(self).__name__, self.obj)


class XMLTextWrapper(XMLWrapper):

    translator = None

    def read(self, reader):
        self.obj = self.translator.read(reader)

    def write(self, writer):
        if self.obj is None:
            raise XMLGraphError(f'{type(self).__name__} has no object to write.')
        self.translator.write(writer, self.obj)


class StringWrapper(XMLTextWrapper):
    translator = XMLString()


class IntegerWrapper(XMLTextWrapper):
    translator = XMLInteger()


class FloatWrapper(XMLTextWrapper):
    translator = XMLFloat()


class BooleanWrapper(XMLTextWrapper):
    translator = XMLBoolean()


class XMLElementTranslator(XMLTranslator):
    """Translator for XMLElements produced by a zero-argument factory."""

    def __init__(self, factory):
        self.factory = factory

    def read(self, reader):
        element = self.factory()
        element.read(reader)
        return element

    def write(self, writer, element):
        element.write(writer)


def _load_element_class(name):
    (module_name, _, qualname) = name.partition(':')
    try:
        obj = importlib.import_module(module_name)
    except ImportError as exc:
        raise XMLGraphError(f'Element class module {module_name!r} '
                            'cannot be found.') from exc
    try:
        for attr in qualname.split('.'):
            obj = getattr(obj, attr)
    except AttributeError as exc:
        raise XMLGraphError(f'Element class {name!r} cannot be found.') from exc
    if not (isinstance(obj, type) and issubclass(obj, XMLElement)):
        raise XMLGraphError(f'{name!r} is not an XML element class.')
    return obj


class XMLGenericTranslator(XMLTranslator):
    """Translator for any XMLElement, recording its class in the document.

    Writes <element class="module:QualName">...</element> around the
    element's own output, and on read imports that class, instantiates it
    with no arguments and lets it read itself. Only use it on documents
    from a trusted source, since reading imports the named module.
    """

    tag = 'element'
    CLASS_ATTRIBUTE = 'class'

    def read(self, reader):
        reader.require_start(self.tag, 'Did not find element start.')
        name = reader.attribute(self.CLASS_ATTRIBUTE)
        if not name:
            raise XMLGraphError('Element does not specify its class.')
        element = _load_element_class(name)()
        if reader.next_tag() != START_ELEMENT:
            raise XMLGraphError('Element has no content.')
        element.read(reader)
        reader.next_tag()
        reader.require_end(self.tag, 'Did not find element end.')
        return element

    def write(self, writer, element):
        if not isinstance(element, XMLElement):
            raise XMLGraphError(f'{element!r} is not an XML element.')
        cls = type(element)
        writer.start_element(self.tag, {
            self.CLASS_ATTRIBUTE: f'{cls.__module__}:{cls.__qualname__}'})
        element.write(writer)
        writer.end_element()
