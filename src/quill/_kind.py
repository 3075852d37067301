"""Runtime kind classification for wrapped values."""

__all__ = ["Kind", "Ref", "kind_of"]

import collections.abc
import dataclasses
import datetime
import decimal
import enum
import fractions
import numbers
import types


class Kind(enum.Enum):
    """Closed set of categories a raw value is classified into."""

    NIL = "nil"
    REF = "ref"
    BOOL = "bool"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    TIME = "time"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    COLLECTION = "collection"
    RECORD = "record"
    OTHER = "other"

    def __str__(self):
        return self.value


class Ref:
    """Single level of indirection to another raw value.

    Wrapping a Ref makes every predicate and coercion act on the target.
    Only one level is followed, so a Ref pointing at another Ref resolves
    to that inner Ref, which is not a supported kind.

    Args:
        target: Referenced raw value

    Attributes:
        target: Referenced raw value
    """

    __slots__ = ("target",)

    def __init__(self, target):
        self.target = target

    def __repr__(self):
        return f"Ref({self.target!r})"


_float_types = (float, decimal.Decimal, fractions.Fraction)
_opaque_types = (
    type,
    types.ModuleType,
    types.FunctionType,
    types.MethodType,
    types.BuiltinFunctionType,
)


def kind_of(raw):
    """Classify a raw python object.

    The checks are ordered, bool is tested before the integers it subclasses
    and text before the sequences it would otherwise match. Signaling NaN
    decimals cannot be converted or compared, so they are not numbers.
    Instances with a __call__ method are still records.

    Args:
        raw: (object) Any python value, not resolved
    Returns:
        (Kind) Category of the value
    """
    if raw is None:
        return Kind.NIL
    if isinstance(raw, Ref):
        return Kind.REF
    if isinstance(raw, bool):
        return Kind.BOOL
    if isinstance(raw, numbers.Integral):
        return Kind.INTEGER
    if isinstance(raw, decimal.Decimal) and raw.is_snan():
        return Kind.OTHER
    if isinstance(raw, _float_types) or isinstance(raw, numbers.Real):
        return Kind.FLOAT
    if isinstance(raw, str):
        return Kind.STRING
    if isinstance(raw, datetime.datetime):
        return Kind.TIME
    if isinstance(raw, collections.abc.Mapping):
        return Kind.MAPPING
    if isinstance(raw, collections.abc.Sequence):
        return Kind.SEQUENCE
    if isinstance(raw, collections.abc.Collection):
        return Kind.COLLECTION
    if isinstance(raw, _opaque_types):
        return Kind.OTHER
    if dataclasses.is_dataclass(raw):
        return Kind.RECORD
    if hasattr(raw, "__dict__") or hasattr(type(raw), "__slots__"):
        return Kind.RECORD
    return Kind.OTHER
