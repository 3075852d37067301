"""Dynamic values for template evaluation."""

__all__ = ["Value", "wrap", "wrap_safe", "EPSILON", "ZERO_TIME"]

import dataclasses
import datetime
import decimal
import fractions
import math

import quill


EPSILON = 1e-9
ZERO_TIME = datetime.datetime(1, 1, 1, tzinfo=datetime.timezone.utc)

_K = quill.Kind
_numbers = (_K.INTEGER, _K.FLOAT)
_sized = (_K.SEQUENCE, _K.MAPPING, _K.COLLECTION, _K.STRING)
_records = (_K.RECORD, _K.TIME)
_sliceable = (_K.SEQUENCE, _K.STRING)
_lookup_keys = (_K.INTEGER, _K.STRING)

# Types whose __str__ is not a custom text rendering
_plain_text_types = frozenset({
    object, bool, int, float, complex, str, bytes, bytearray,
    list, tuple, dict, set, frozenset, range,
    decimal.Decimal, fractions.Fraction,
})


class Value:
    """Template runtime value.

    Wraps any python object so the evaluator, filters and tags can treat it
    uniformly. Classification, coercion, truthiness, comparison and
    iteration all act on the resolved value, which follows a single
    `Ref` indirection when the raw object is one.

    Values are immutable. Every operation that transforms a value returns a
    new one, which shares the sink of its parent and is never marked safe.

    Operations that meet a kind they do not support report a diagnostic to
    the sink and return a fallback, they never raise. The exceptions are
    negative indices and malformed slice ranges, which raise `RangeError`.

    Args:
        raw: Wrapped python object
        safe: (bool) Exempt from output escaping
        sink: (callable | None) Diagnostic sink, defaults to `log_sink`
    Attributes:
        raw: Wrapped python object, owned by the value and never modified
        safe: (bool) Marker for the output escaping policy
        sink: (callable) Receives diagnostic messages
    """
    __slots__ = ("raw", "safe", "sink")

    def __init__(self, raw, safe=False, sink=None):
        if isinstance(raw, Value):
            raise TypeError(f"Value init called with existing Value {raw!r}")
        object.__setattr__(self, "raw", raw)
        object.__setattr__(self, "safe", bool(safe))
        object.__setattr__(self, "sink", sink if sink is not None else quill.log_sink)

    def __setattr__(self, name, value):
        raise AttributeError(f"Value is immutable, cannot assign {name!r}")

    def __delattr__(self, name):
        raise AttributeError(f"Value is immutable, cannot delete {name!r}")

    def derive(self, raw):
        """Wrap a python object produced from this value.

        The result shares this value's sink. Objects that already are Values
        are returned unchanged.
        """
        if isinstance(raw, Value):
            return raw
        return Value(raw, sink=self.sink)

    def diagnose(self, operation):
        """Report that `operation` is not available for this value's kind."""
        self.sink(f"Value.{operation}() not available for kind: {self.kind}")

    @property
    def resolved(self):
        """The raw object with one level of `Ref` followed."""
        raw = self.raw
        if isinstance(raw, quill.Ref):
            return raw.target
        return raw

    @property
    def kind(self):
        """(Kind) Classification of the resolved value."""
        return quill.kind_of(self.resolved)

    @property
    def is_string(self):
        return self.kind is _K.STRING

    @property
    def is_bool(self):
        return self.kind is _K.BOOL

    @property
    def is_float(self):
        return self.kind is _K.FLOAT

    @property
    def is_integer(self):
        return self.kind is _K.INTEGER

    @property
    def is_number(self):
        """Integer or float."""
        return self.kind in _numbers

    @property
    def is_time(self):
        """Resolved value is a `datetime.datetime`."""
        return self.kind is _K.TIME

    @property
    def is_nil(self):
        """Resolved value carries no data at all."""
        return self.kind is _K.NIL

    @property
    def can_slice(self):
        """Supports `slice` and `index`, sequences and text."""
        return self.kind in _sliceable

    def to_python(self):
        """The wrapped python object, without resolving references."""
        return self.raw

    def string(self):
        """Render as text.

        Nil renders empty. Types defining their own ``__str__`` use it,
        otherwise integers render in base 10, floats with six fixed
        decimals and bools as ``True`` and ``False``.

        Returns:
            (str) Text form of the value
        """
        kind = self.kind
        data = self.resolved
        if kind is _K.NIL:
            return ""
        if _has_custom_text(data):
            return str(data)
        if kind is _K.STRING:
            return data
        if kind is _K.INTEGER:
            return str(int(data))
        if kind is _K.FLOAT:
            return "%f" % self.float()
        if kind is _K.BOOL:
            return "True" if data else "False"
        self.diagnose("string")
        return str(data)

    def integer(self):
        """Convert to an int, truncating floats toward zero.

        Text is parsed as a float literal, text that does not parse
        converts to 0 without a diagnostic.

        Returns:
            (int) Converted number, 0 when not convertible
        """
        kind = self.kind
        data = self.resolved
        if kind is _K.INTEGER:
            return int(data)
        if kind is _K.FLOAT:
            return _truncate(data)
        if kind is _K.STRING:
            number = quill.parse_float(data)
            if number is None:
                return 0
            return _truncate(number)
        self.diagnose("integer")
        return 0

    def float(self):
        """Convert to a float, text is parsed as a float literal.

        Returns:
            (float) Converted number, 0.0 when not convertible
        """
        kind = self.kind
        data = self.resolved
        if kind in _numbers:
            try:
                return float(data)
            except OverflowError:
                return math.inf if data > 0 else -math.inf
        if kind is _K.STRING:
            number = quill.parse_float(data)
            if number is None:
                return 0.0
            return number
        self.diagnose("float")
        return 0.0

    def bool(self):
        """Strict bool accessor, see `is_true` for truthiness."""
        if self.kind is _K.BOOL:
            return self.resolved
        self.diagnose("bool")
        return False

    def time(self):
        """The datetime, or `ZERO_TIME` for anything else."""
        if self.kind is _K.TIME:
            return self.resolved
        return ZERO_TIME

    def is_true(self):
        """Evaluate truthiness the way python does.

        Numbers are true when nonzero, containers and text when not empty.
        Records and datetimes are always true.
        """
        kind = self.kind
        data = self.resolved
        if kind in _numbers:
            return data != 0
        if kind in _sized:
            return len(data) > 0
        if kind is _K.BOOL:
            return data
        if kind in _records:
            return True
        self.diagnose("is_true")
        return False

    def negate(self):
        """Logical complement for the not operator.

        Numbers stay numbers: integers become 0 or 1, floats become 0.0 or
        1.1. Everything else becomes a bool.

        Returns:
            (Value) New negated value
        """
        kind = self.kind
        data = self.resolved
        if kind is _K.INTEGER:
            return self.derive(0 if data != 0 else 1)
        if kind is _K.FLOAT:
            return self.derive(0.0 if self.float() != 0.0 else 1.1)
        if kind in _sized:
            return self.derive(len(data) == 0)
        if kind is _K.BOOL:
            return self.derive(not data)
        if kind in _records:
            return self.derive(False)
        self.diagnose("negate")
        return self.derive(True)

    def len(self):
        """Number of items, text counts code points."""
        if self.kind in _sized:
            return len(self.resolved)
        self.diagnose("len")
        return 0

    def index(self, i):
        """Item or character at position `i`.

        Positions past the end give nil for sequences and empty text for
        strings. Negative positions raise.

        Args:
            i: (int) Zero based position
        Returns:
            (Value) Item at the position
        Raises:
            RangeError: For a negative position
        """
        kind = self.kind
        data = self.resolved
        if kind in _sliceable:
            if i < 0:
                raise quill.RangeError(f"index {i} out of range", (i,))
            if i >= len(data):
                return self.derive(None if kind is _K.SEQUENCE else "")
            return self.derive(data[i])
        self.diagnose("index")
        return self.derive([])

    def slice(self, i, j):
        """Items or characters in ``[i, j)``.

        Bounds are not clamped, the caller must provide a valid range.

        Args:
            i: (int) Start position
            j: (int) End position, exclusive
        Returns:
            (Value) New value of the same container type
        Raises:
            RangeError: Unless ``0 <= i <= j <= len``
        """
        kind = self.kind
        data = self.resolved
        if kind in _sliceable:
            size = len(data)
            if not 0 <= i <= j <= size:
                raise quill.RangeError(
                    f"slice bounds [{i}:{j}] out of range with length {size}", (i, j))
            return self.derive(data[i:j])
        self.diagnose("slice")
        return self.derive([])

    def equal_value_to(self, other):
        """Compare two values.

        Numbers of any kind are equal within `EPSILON`, datetimes when they
        are the same instant. Other values must share a type that supports
        hashing, unhashable containers never compare equal.

        Args:
            other: (Value) Value to compare with
        Returns:
            (bool) Values are equal
        """
        if self.is_number and other.is_number:
            left, right = self.float(), other.float()
            return (left - right) < EPSILON and (right - left) < EPSILON
        if self.is_time and other.is_time:
            return self.resolved == other.resolved
        left, right = self.raw, other.raw
        if left is None or right is None:
            return False
        if type(left) is not type(right) or type(left).__hash__ is None:
            return False
        try:
            return bool(left == right)
        except decimal.InvalidOperation:
            # signaling NaN
            return False

    def contains(self, other):
        """Membership test that depends on the container.

        Records check for a field named by the text of `other`. Mappings
        look up integer or text keys of the same kind as their own keys.
        Text checks for a substring and sequences for an equal item.

        Args:
            other: (Value) Item, key or field to look for
        Returns:
            (bool) Found
        """
        kind = self.kind
        data = self.resolved
        if kind in _records:
            return other.string() in _field_names(data)

        if kind is _K.MAPPING:
            if other.raw is None:
                return False
            key_kind = _key_kind(data)
            if key_kind is None or quill.kind_of(other.raw) is not key_kind:
                return False
            if key_kind not in _lookup_keys:
                self.sink(f"Value.contains() does not support lookup kind: {key_kind}")
                return False
            return other.raw in data

        if kind is _K.STRING:
            return other.string() in data

        if kind is _K.SEQUENCE:
            for item in data:
                if other.equal_value_to(self.derive(item)):
                    return True
            return False

        self.diagnose("contains")
        return False

    def walk(self, reverse=False, sorted=False):
        """Generate `Visit` steps, see `quill.walk`."""
        return quill.walk(self, reverse, sorted)

    def iterate(self, visit, empty):
        """Visit every item in natural order, or call `empty` once."""
        quill.iterate_order(self, visit, empty, False, False)

    def iterate_order(self, visit, empty, reverse=False, sorted=False):
        """Visit every item in the requested order, see `quill.iterate_order`."""
        quill.iterate_order(self, visit, empty, reverse, sorted)

    def __str__(self):
        return self.string()

    def __bool__(self):
        return self.is_true()

    def __len__(self):
        return self.len()

    def __contains__(self, item):
        if not isinstance(item, Value):
            item = self.derive(item)
        return self.contains(item)

    def __getitem__(self, key):
        if isinstance(key, slice):
            if key.step is not None:
                raise quill.RangeError("slice steps are not supported", (key.start, key.stop))
            start = 0 if key.start is None else key.start
            stop = self.len() if key.stop is None else key.stop
            return self.slice(start, stop)
        return self.index(key)

    def __iter__(self):
        """Iterate the `Visit` steps in natural order."""
        return self.walk()

    def __repr__(self):
        if self.safe:
            return f"Value({self.raw!r}, safe)"
        return f"Value({self.raw!r})"


def wrap(raw, sink=None):
    """Wrap a python object for template evaluation.

    Args:
        raw: Python object to wrap
        sink: (callable | None) Diagnostic sink
    Returns:
        (Value) New value, subject to output escaping
    """
    return Value(raw, False, sink)


def wrap_safe(raw, sink=None):
    """Like `wrap`, but the value is exempt from output escaping."""
    return Value(raw, True, sink)


def _truncate(number):
    """Truncate toward zero, non-finite numbers give 0."""
    try:
        return int(number)
    except (ValueError, OverflowError):
        return 0


def _has_custom_text(data):
    """Check if the type of data renders itself with its own __str__."""
    for klass in type(data).__mro__:
        if "__str__" in klass.__dict__:
            return klass not in _plain_text_types
    return False


def _field_names(data):
    """Names of the fields a record exposes."""
    names = set()
    if dataclasses.is_dataclass(data):
        names.update(field.name for field in dataclasses.fields(data))
    names.update(getattr(data, "__dict__", ()))
    for klass in type(data).__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.update(slots)
    names.discard("__dict__")
    names.discard("__weakref__")
    return names


def _key_kind(mapping):
    """Kind shared by every key of a mapping, None when empty or mixed."""
    kinds = {quill.kind_of(key) for key in mapping}
    if len(kinds) != 1:
        return None
    return kinds.pop()
