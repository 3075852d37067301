"""Uniform iteration over mappings, sequences and text.

Loops in templates go through a single protocol regardless of the
container behind the value. Each step reports its position, the total
count and a key/value pair of derived Values. Sequences and text only
fill in the key. Unsupported kinds behave as empty containers after a
diagnostic.
"""

__all__ = ["Visit", "walk", "iterate_order"]

import collections

import quill


Visit = collections.namedtuple("Visit", "index count key value")
Visit.__doc__ = """One step of an iteration.

Attributes:
    index: (int) Zero based position
    count: (int) Total number of steps
    key: (Value) Mapping key, sequence item or single character
    value: (Value | None) Mapped value, None for sequences and text
"""


def walk(value, reverse=False, sorted=False):
    """Generate the iteration steps for a value.

    Mappings follow insertion order unless sorted, `reverse` alone does not
    change their order. Sequences and text honor `reverse` on its own.
    Sorting uses the shared ordering, text sorts by code point.

    Args:
        value: (Value) Container to walk
        reverse: (bool) Reverse the order
        sorted: (bool) Order by the shared comparator
    Returns:
        (Iterator[Visit]) Steps in iteration order
    """
    kind = value.kind
    data = value.resolved

    if kind is quill.Kind.MAPPING:
        pairs = [(value.derive(key), mapped) for key, mapped in data.items()]
        if sorted:
            pairs = quill.sort_values(pairs, reverse, key=lambda pair: pair[0])
        count = len(pairs)
        for idx, (key, mapped) in enumerate(pairs):
            yield Visit(idx, count, key, value.derive(mapped))
        return

    if kind is quill.Kind.SEQUENCE:
        items = [value.derive(item) for item in data]
        if sorted:
            items = quill.sort_values(items, reverse)
        elif reverse:
            items.reverse()
        count = len(items)
        for idx, item in enumerate(items):
            yield Visit(idx, count, item, None)
        return

    if kind is quill.Kind.STRING:
        chars = list(data)
        if sorted:
            chars.sort()
        if reverse:
            chars.reverse()
        count = len(chars)
        for idx, char in enumerate(chars):
            yield Visit(idx, count, value.derive(char), None)
        return

    value.diagnose("iterate")


def iterate_order(value, visit, empty, reverse=False, sorted=False):
    """Drive a visitor over the steps of `walk`.

    The visitor returns a truthy value to continue, anything falsy stops
    the iteration. `empty` is called once, only when nothing was visited.

    Args:
        value: (Value) Container to iterate
        visit: (callable) Called as visit(index, count, key, value)
        empty: (callable) Called with no arguments for empty containers
        reverse: (bool) Reverse the order
        sorted: (bool) Order by the shared comparator
    """
    visited = False
    for step in walk(value, reverse, sorted):
        visited = True
        if not visit(*step):
            return
    if not visited:
        empty()
