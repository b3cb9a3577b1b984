"""Procedure definition, argument binding and name resolution."""

import asyncio
import logging
import sys

import pytest

from stepwise.ast_nodes import Program
from stepwise.config import RuntimeConfig
from stepwise.errors import (
    CallDepthExceededError, NotCallableError, StepwiseError, UnresolvedReferenceError,
)

from helpers import (
    Recorder, binop, call, do, forever, if_, native, num, proc, repeat,
)

ADD = proc("add", ["a", "b"], [do(native("return", binop("add", call("a"), call("b"))))])


def test_procedure_returns_value(recorder):
    recorder.run(ADD, do(native("log", call("add", num(2), num(3)))))
    assert recorder.logged == [5]


def test_extra_arguments_are_ignored(recorder):
    recorder.run(ADD, do(native("log", call("add", num(2), num(3), num(4)))))
    assert recorder.logged == [5]


def test_missing_argument_fails_when_read(recorder):
    with pytest.raises(UnresolvedReferenceError) as exc:
        recorder.run(ADD, do(native("log", call("add", num(2)))))
    assert exc.value.name == "b"


def test_missing_argument_is_fine_when_never_read(recorder):
    first = proc("first", ["a", "b"], [do(native("return", call("a")))])
    recorder.run(first, do(native("log", call("first", num(9)))))
    assert recorder.logged == [9]


def test_normal_completion_yields_zero(recorder):
    noop = proc("noop", [], [do(native("log", num("ran")))])
    recorder.run(noop, do(native("log", call("noop"))))
    assert recorder.logged == ["ran", 0]


def test_return_without_value_yields_zero(recorder):
    bare = proc("bare", [], [do(native("return")), do(native("log", num("unreachable")))])
    recorder.run(bare, do(native("log", call("bare"))))
    assert recorder.logged == [0]


def test_return_unwinds_nested_loops(recorder):
    find = proc("find", [], [
        forever(repeat(num(3), do(native("return", num(7))))),
    ])
    recorder.run(find, do(native("log", call("find"))))
    assert recorder.logged == [7]


def test_procedures_are_not_hoisted(recorder):
    with pytest.raises(UnresolvedReferenceError):
        recorder.run(do(call("later")), proc("later", [], []))


def test_redefinition_replaces_earlier_procedure(recorder):
    recorder.run(
        proc("f", [], [do(native("return", num(1)))]),
        do(native("log", call("f"))),
        proc("f", [], [do(native("return", num(2)))]),
        do(native("log", call("f"))),
    )
    assert recorder.logged == [1, 2]


def test_procedures_can_call_each_other_and_recurse(recorder):
    fact = proc("fact", ["n"], [
        if_([(binop("lte", call("n"), num(1)), [do(native("return", num(1)))])]),
        do(native("return", binop("multiply", call("n"),
                                  call("fact", binop("subtract", call("n"), num(1)))))),
    ])
    twice = proc("twice", ["x"], [do(native("return", binop("multiply", call("fact", call("x")), num(2))))])
    recorder.run(fact, twice, do(native("log", call("twice", num(5)))))
    assert recorder.logged == [240]


def test_callee_does_not_see_caller_locals(recorder):
    peek = proc("peek", [], [do(native("log", call("secret")))])
    outer = proc("outer", ["secret"], [do(call("peek"))])
    with pytest.raises(UnresolvedReferenceError):
        recorder.run(peek, outer, do(call("outer", num(1))))


def test_global_procedure_shadows_same_named_parameter(recorder):
    recorder.run(
        proc("x", [], [do(native("return", num(100)))]),
        proc("show", ["x"], [do(native("log", call("x")))]),
        do(call("show", num(1))),
    )
    assert recorder.logged == [100]


def test_sub_blocks_share_the_procedure_frame(recorder):
    body = [
        repeat(num(2), if_([(native("true"), [do(native("log", call("v")))])])),
    ]
    recorder.run(proc("p", ["v"], body), do(call("p", num(8))))
    assert recorder.logged == [8, 8]


def test_parameter_with_arguments_is_not_callable(recorder):
    bad = proc("bad", ["v"], [do(call("v", num(1)))])
    with pytest.raises(NotCallableError):
        recorder.run(bad, do(call("bad", num(3))))


def test_unresolved_native_fails_before_arguments_run(recorder):
    with pytest.raises(UnresolvedReferenceError) as exc:
        recorder.run(do(native("missing", native("log", num(1)))))
    assert exc.value.native
    assert recorder.logged == []


def test_definitions_do_not_leak_between_runs():
    recorder = Recorder()
    interp = recorder.interpreter()
    asyncio.run(interp.run(Program([ADD])))
    with pytest.raises(UnresolvedReferenceError):
        asyncio.run(interp.run(Program([do(call("add", num(1), num(2)))])))


def test_call_depth_limit(recorder):
    loop = proc("loop", [], [do(call("loop"))])
    with pytest.raises(CallDepthExceededError):
        recorder.run(loop, do(call("loop")), config=RuntimeConfig(max_call_depth=20))


def test_define_procedure_logs_redefinition(recorder, caplog):
    with caplog.at_level(logging.DEBUG, logger="stepwise.environment"):
        recorder.run(proc("f", [], []), proc("f", [], []))
    assert "redefining procedure f" in caplog.text


DOWN = proc("down", ["n"], [
    if_([(binop("gt", call("n"), num(0)),
          [do(native("return", call("down", binop("subtract", call("n"), num(1)))))])],
        [do(native("return", num(7)))]),
])


def test_recursion_deeper_than_one_hundred_levels(recorder):
    recorder.run(DOWN, do(native("log", call("down", num(300)))))
    assert recorder.logged == [7]


def test_depth_limit_counts_nested_calls(recorder):
    with pytest.raises(CallDepthExceededError) as exc:
        recorder.run(DOWN, do(call("down", num(50))), config=RuntimeConfig(max_call_depth=30))
    assert exc.value.limit == 30


def test_disabled_limit_still_fails_with_call_depth_error(recorder):
    loop = proc("loop", [], [do(call("loop"))])
    prev_limit = sys.getrecursionlimit()
    try:
        sys.setrecursionlimit(min(prev_limit, 1000))
        with pytest.raises(CallDepthExceededError) as exc:
            recorder.run(loop, do(call("loop")), config=RuntimeConfig(max_call_depth=0))
    finally:
        sys.setrecursionlimit(prev_limit)
    assert exc.value.name == "loop"
    assert isinstance(exc.value, StepwiseError)
