from tack.builtins import new_dictionary
from tack.evaluation.machine import Machine
from tack.interpreter import Interpreter
from tack.reader.parser import parse
from tack.types.dictionary import Primitive


def test_long_while_runs_in_constant_depth():
    """Far deeper than the Python recursion limit."""
    interp = Interpreter()
    result = interp.eval("0 { dup 20000 < } { 1 + } while")
    assert result == [20000]


def test_self_recursive_word_in_tail_position():
    interp = Interpreter()
    interp.eval("countdown = { dup 0 > { 1 - countdown } { } if }")
    assert interp.eval("50000 countdown") == [0]


def test_frames_stay_bounded():
    """Sample the work-list size from inside the loop body."""
    interp = Interpreter()
    machine = interp.machine
    depths = []

    def sample(vm):
        depths.append(len(vm.frames))

    interp.dictionary.register(Primitive("sample", sample))
    interp.eval("0 { dup 2000 < } { sample 1 + } while drop")
    assert len(depths) == 2000
    assert max(depths) == min(depths)
    assert machine.frames == []


def test_tail_call_keeps_try_marker():
    machine = Machine(new_dictionary())
    machine.dictionary.define("spin", parse("{ 0 pick 0 > { 1 - spin } { nope } if }")[0])
    stack = machine.evaluate(parse("3 { spin } { } try"))
    assert stack[-1] == "UndefinedWordError: can't understand nope"
    assert stack[:-1] == [3]
