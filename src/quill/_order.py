"""Ordering shared by sorted iteration of mappings and sequences."""

__all__ = ["less", "compare", "sort_values"]

import functools


def less(left, right):
    """Heterogeneous ordering between two values.

    Two integers compare numerically, as do two floats. Every other pairing,
    including an integer against a float, compares the text of both values.

    Args:
        left: (Value) Left operand
        right: (Value) Right operand
    Returns:
        (bool) True when left sorts before right
    """
    if left.is_integer and right.is_integer:
        return left.integer() < right.integer()
    if left.is_float and right.is_float:
        return left.float() < right.float()
    return left.string() < right.string()


def compare(left, right):
    """Three way form of `less`."""
    if less(left, right):
        return -1
    if less(right, left):
        return 1
    return 0


def sort_values(items, reverse=False, key=None):
    """Sort with the shared ordering.

    Args:
        items: (list) Values, or entries holding Values when `key` is given
        reverse: (bool) Descending order
        key: (callable | None) Extract the Value to order each entry by
    Returns:
        (list) New sorted list, `items` is not modified
    """
    if key is None:
        ordering = functools.cmp_to_key(compare)
    else:
        ordering = functools.cmp_to_key(lambda a, b: compare(key(a), key(b)))
    return sorted(items, key=ordering, reverse=reverse)
