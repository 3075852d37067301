"""Parse text into floats for numeric coercion."""

__all__ = ["parse_float"]

import math

import lark


class _FloatBuilder(lark.Transformer):
    """Convert a parsed number tree into a float, None when out of range."""

    def decimal(self, kids):
        value = float(kids[0])
        if math.isinf(value):
            return None
        return value

    def hexfloat(self, kids):
        try:
            return float.fromhex(kids[0].replace("_", ""))
        except OverflowError:
            return None

    def infinity(self, kids):
        return math.inf

    def start(self, kids):
        if len(kids) == 1 and isinstance(kids[0], lark.Token):
            return math.nan
        sign = kids[0] if len(kids) == 2 else None
        magnitude = kids[-1]
        if magnitude is None:
            return None
        return -magnitude if sign == "-" else magnitude


def parse_float(text):
    """Parse a float literal.

    Accepts an optional sign and a decimal literal (``1``, ``1.5``, ``.5``,
    ``1e3``), a hexadecimal float with a binary exponent (``0x1.8p1``) or
    ``inf``, ``infinity`` and ``nan`` in any case. Finite literals too
    large for a float are rejected.

    Args:
        text: (str) Text to parse
    Returns:
        (float | None) Parsed value, or None when the text is not a literal
    """
    try:
        tree = _lark_parser("number").parse(text)
    except lark.LarkError:
        return None
    return _FloatBuilder().transform(tree)


_parsers = {}


def _lark_parser(name):
    """Get globally shared lark parser.

    Args:
        name: (str) name of the grammar file (without .lark)

    Returns:
        (lark.Lark) Parser instance
    """
    parser = _parsers.get(name)
    if parser is not None:
        return parser

    path = f"lark/{name}.lark"
    parser = lark.Lark.open(path, rel_to=__file__, parser="lalr")
    _parsers[name] = parser
    return parser
