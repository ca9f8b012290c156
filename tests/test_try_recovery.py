import pytest
from hypothesis import given, strategies as st

from tack.errors import EmptySequenceError, EndOfInput, UndefinedWordError, UserError
from tack.interpreter import Interpreter


def test_undefined_word_is_echoed(interp, host):
    assert interp.eval("{ undefined_word } { echo } try") == []
    assert host.getvalue() == "UndefinedWordError: can't understand undefined_word\n"


def test_success_keeps_body_effects(interp):
    assert interp.eval("1 { 2 3 + } { drop 0 } try") == [1, 5]


def test_stack_is_restored_before_handler(interp):
    # The body consumes three items before failing
    assert interp.eval("1 2 3 { + + nope } { } try") == [
        1, 2, 3, "UndefinedWordError: can't understand nope",
    ]


@given(st.lists(st.integers(), max_size=8), st.integers(min_value=0, max_value=8))
def test_depth_restored_whatever_the_body_consumed(stack, consumed):
    interp = Interpreter()
    interp.stack.extend(stack)
    drops = " ".join(["drop"] * min(consumed, len(stack)))
    result = interp.eval(f"{{ {drops} 99 99 nope }} {{ drop }} try")
    assert result == stack


def test_fail_payload_is_the_value(interp):
    assert interp.eval('{ "boom" fail } { "caught: " swap strcat } try') == ["caught: boom"]


def test_fail_with_a_quotation(interp):
    interp.eval("clear { { 1 2 } fail } { } try")
    assert interp.eval("eval") == [1, 2]


def test_nested_try_catches_innermost_first(interp, host):
    interp.eval('{ { nope } { "inner" echo drop } try "after" echo } { "outer" echo } try')
    assert host.getvalue() == "inner\nafter\n"


def test_handler_errors_reach_outer_try(interp):
    result = interp.eval('{ { nope } { drop "again" fail } try } { } try')
    assert result == ["again"]


def test_uncaught_error_propagates(interp):
    with pytest.raises(UserError) as info:
        interp.eval('{ nope } { drop "again" fail } try')
    assert info.value.payload == "again"


def test_error_payload_names_kind(interp):
    assert interp.eval("{ [] } { } try") == ["UndefinedWordError: can't understand []"]
    interp.eval("clear 0 gather")
    assert interp.eval("{ shift } { } try")[-1].startswith("EmptySequenceError: ")


def test_host_output_is_not_undone(interp, host):
    interp.eval('{ "sent" echo nope } { drop } try')
    assert host.getvalue() == "sent\n"


def test_try_in_a_loop_recovers_each_time(interp, host):
    interp.eval('3 { { "x" fail } { echo } try } times')
    assert host.getvalue() == "x\nx\nx\n"


def test_end_of_input_is_not_caught(interp):
    with pytest.raises(EndOfInput):
        interp.eval("{ capture } { drop 1 } try")


def test_uncaught_error_without_try_keeps_type(interp):
    with pytest.raises(EmptySequenceError):
        interp.eval("0 gather pop")
    with pytest.raises(UndefinedWordError):
        interp.eval("nope")
