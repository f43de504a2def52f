class GraphError(Exception):
    pass


class NullValueError(GraphError, ValueError):
    """A graph was asked to store None as a value."""

    def __init__(self, message='Value cannot be None.'):
        super().__init__(message)


class UnsupportedOperationError(GraphError, NotImplementedError):
    pass


class XMLGraphError(GraphError):
    """Structural or encoding error while reading or writing graph XML.

    When raised because of a lower level failure (a SAX parse error, a
    translator that could not convert some text) the original exception is
    chained as __cause__.
    """

    def __init__(self, message, line=None, column=None):
        if line is not None:
            message = f'{message} (line {line}, column {column})'
        super().__init__(message)
        self.line = line
        self.column = column
