"""Length, indexing and slicing."""

import pytest

import quill
from valuetest import params, collecting


@params(
    "raw expected",
    text=("héllo", 5),
    wide=("日本語", 3),
    list=([1, 2, 3], 3),
    tuple=((), 0),
    dict=({"a": 1}, 1),
    set=({1, 2}, 2),
)
def test_len(key, raw, expected):
    value, diag = collecting(raw)
    assert value.len() == expected
    assert len(value) == expected
    assert not diag.messages


def test_len_unsupported():
    value, diag = collecting(5)
    assert value.len() == 0
    assert diag.messages == ["Value.len() not available for kind: integer"]


def test_index_sequence():
    value, diag = collecting([10, 20, 30])
    assert value.index(0).raw == 10
    assert value.index(2).raw == 30
    assert value.index(3).is_nil
    assert value.index(100).is_nil
    assert value[1].raw == 20
    assert not diag.messages


def test_index_text_by_code_point():
    value, diag = collecting("héllo")
    assert value.index(1).raw == "é"
    assert value.index(4).raw == "o"
    assert value.index(5).raw == ""
    assert value.index(5).is_string
    assert not diag.messages


@params(
    "raw",
    list=[1, 2],
    text="ab",
)
def test_index_negative(key, raw):
    with pytest.raises(quill.RangeError):
        quill.wrap(raw).index(-1)
    with pytest.raises(IndexError):
        quill.wrap(raw)[-1]


def test_index_unsupported():
    value, diag = collecting({"a": 1})
    assert value.index(0).raw == []
    assert diag.messages == ["Value.index() not available for kind: mapping"]


def test_slice():
    assert quill.wrap([1, 2, 3, 4]).slice(1, 3).raw == [2, 3]
    assert quill.wrap((1, 2, 3)).slice(0, 2).raw == (1, 2)
    assert quill.wrap("héllo").slice(1, 3).raw == "él"
    assert quill.wrap("abc").slice(3, 3).raw == ""
    assert quill.wrap([1, 2]).slice(0, 2).raw == [1, 2]


@params(
    "i j",
    reversed=(2, 1),
    past_end=(0, 10),
    negative=(-1, 2),
)
def test_slice_bad_bounds(key, i, j):
    with pytest.raises(quill.RangeError) as info:
        quill.wrap([1, 2, 3]).slice(i, j)
    assert info.value.bounds == (i, j)
    with pytest.raises(quill.RangeError):
        quill.wrap("abc").slice(i, j)


def test_slice_unsupported():
    value, diag = collecting(7)
    assert value.slice(0, 1).raw == []
    assert diag.messages == ["Value.slice() not available for kind: integer"]


def test_slice_syntax():
    value = quill.wrap([1, 2, 3, 4])
    assert value[1:].raw == [2, 3, 4]
    assert value[:2].raw == [1, 2]
    assert value[:].raw == [1, 2, 3, 4]
    with pytest.raises(quill.RangeError):
        value[::2]
    with pytest.raises(quill.RangeError):
        value[-2:]


def test_slice_new_value():
    safe = quill.wrap_safe("abc")
    sliced = safe.slice(0, 2)
    assert sliced is not safe
    assert not sliced.safe
    assert safe.raw == "abc"


@params(
    "raw expected",
    list=([1], True),
    tuple=((1,), True),
    text=("x", True),
    dict=({}, False),
    int=(5, False),
    none=(None, False),
)
def test_can_slice(key, raw, expected):
    assert quill.wrap(raw).can_slice == expected
