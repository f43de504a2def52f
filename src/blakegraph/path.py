from pyrsistent import PVector, pvector


def path(*keys):
    """Build a path from its key segments, root first."""
    return pvector(keys)

def pathify(x):
    """Normalise a user supplied path.

    Tuples, lists and persistent vectors are sequences of key segments.
    Anything else is a path made of that single segment, so
    graph.get('a') and graph.get(('a',)) address the same node.
    """
    if isinstance(x, PVector):
        return x
    if isinstance(x, (tuple, list)):
        return pvector(x)
    return pvector([x])

def format_path(p):
    return '[%s]' % (', '.join(repr(k) for k in p),)
