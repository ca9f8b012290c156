import pytest
from hypothesis import given, strategies as st

from tack.errors import StackUnderflowError, TypeMismatchError
from tack.interpreter import Interpreter

# One interpreter per hypothesis example: the stack is shared state
items = st.lists(st.integers(min_value=-1000, max_value=1000), min_size=1, max_size=12)


def _run(code, stack=()):
    interp = Interpreter()
    interp.stack.extend(stack)
    return list(interp.eval(code))


@pytest.mark.parametrize(
    "code,expected",
    [
        ("3 dup", [3, 3]),
        ("1 2 1 pick", [1, 2, 1]),
        ("1 2 0 pick", [1, 2, 2]),
        ("1 2 3 2 roll", [2, 3, 1]),
        ("1 2 3 0 roll", [1, 2, 3]),
        ('"a" "b" swap', ["b", "a"]),
        ("1 2 over", [1, 2, 1]),
        ("1 2 3 rot", [2, 3, 1]),
        ("1 2 3 -rot", [3, 1, 2]),
        ("1 2 nip", [2]),
        ("1 2 tuck", [2, 1, 2]),
        ("1 2 2dup", [1, 2, 1, 2]),
        ("1 2 3 2drop", [1]),
        ("1 2 drop", [1]),
        ("1 2 3 clear", []),
    ],
)
def test_canonical_shuffles(code, expected):
    assert _run(code) == expected


@pytest.mark.parametrize(
    "code",
    ["drop", "dup", "1 swap", "0 pick", "1 2 2 pick", "1 2 2 roll", "rot"],
)
def test_underflow(code):
    with pytest.raises(StackUnderflowError):
        _run(code)


@pytest.mark.parametrize("code", ['1 "x" pick', "1 -1 pick", "1 true roll", "1 1.5 pick"])
def test_bad_index(code):
    with pytest.raises(TypeMismatchError):
        _run(code)


@given(items, st.data())
def test_pick_copies_item_at_depth(stack, data):
    n = data.draw(st.integers(min_value=0, max_value=len(stack) - 1))
    result = _run(f"{n} pick", stack)
    assert len(result) == len(stack) + 1
    assert result[:-1] == stack
    assert result[-1] == stack[-1 - n]


@given(items, st.data())
def test_roll_moves_item_at_depth(stack, data):
    n = data.draw(st.integers(min_value=0, max_value=len(stack) - 1))
    result = _run(f"{n} roll", stack)
    assert len(result) == len(stack)
    assert result[-1] == stack[-1 - n]
    expected_rest = stack[:len(stack) - 1 - n] + stack[len(stack) - n:]
    assert result[:-1] == expected_rest


@given(items.filter(lambda s: len(s) >= 3))
def test_rot_three_times_is_identity(stack):
    assert _run("rot rot rot", stack) == stack


@given(items.filter(lambda s: len(s) >= 3))
def test_minus_rot_is_rot_rot(stack):
    assert _run("-rot", stack) == _run("rot rot", stack)


@given(items.filter(lambda s: len(s) >= 2))
def test_swap_swap_is_identity(stack):
    assert _run("swap swap", stack) == stack


@given(items)
def test_dup_drop_is_identity(stack):
    assert _run("dup drop", stack) == stack


def test_primitives_work_without_prelude(bare):
    assert bare.eval("1 2 3 2 roll 0 pick") == [2, 3, 1, 1]
