import pytest

from archscript.evaluation.evaluator import run_body, settle
from archscript.reader import parse, parse_all
from archscript.types import Integer, Nil, Return, Goto, Label
from archscript.types.errors import (
    ArchError,
    ArchKeyError,
    ArchTypeError,
    ArchUnboundSymbol,
    ArchUsageError,
)

# -----------------------------------------------------
# Atoms and symbols
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("42", "42"),
        ("-1.5", "-1.5"),
        ('"text"', '"text"'),
        ("nil", "Nil"),
        ("true", "True"),
        ("'(1 2)", "'(1 2)"),
        ("{a: (add 1 2)}", "{a: 3}"),
        ("add", "add"),
    ],
)
def test_self_evaluating_values(run, source, expected):
    assert run(source) == expected


def test_unbound_symbol(interp):
    with pytest.raises(ArchUnboundSymbol) as exc:
        interp.eval("zz")
    assert str(exc.value) == "unbound symbol [zz]"


def test_setq_and_alias(run):
    assert run("(setq x 5)") == "5"
    assert run("x") == "5"
    assert run("(= y (add x 1))") == "6"
    assert run("y") == "6"


def test_definitions_persist_across_eval_calls(interp):
    interp.eval("(setq counter 1)")
    interp.eval("(setq counter (add counter 1))")
    assert interp.eval("counter") == Integer(2)


def test_eval_returns_last_value_and_nil_for_blank(interp):
    assert interp.eval("1 2 3") == Integer(3)
    assert interp.eval("   ") is Nil


# -----------------------------------------------------
# Struct paths
# -----------------------------------------------------

def test_dotted_path_read_and_write(run):
    run("(setq p {x: 1 y: {z: 2}})")
    assert run("p.y.z") == "2"
    assert run("(setq p.y.z 9)") == "9"
    assert run("p") == "{x: 1 y: {z: 9}}"
    run("(setq p.w 3)")
    assert run("p.w") == "3"


def test_dotted_path_errors(interp):
    interp.eval("(setq p {x: 1})")
    with pytest.raises(ArchKeyError) as exc:
        interp.eval("p.q")
    assert exc.value.message == "unknown key [q] in [p]"

    interp.eval("(setq n 1)")
    with pytest.raises(ArchTypeError) as exc:
        interp.eval("n.a")
    assert exc.value.message == "Struct expected [n]"

    with pytest.raises(ArchTypeError):
        interp.eval("(setq n.a 2)")


def test_struct_literal_is_fresh_each_evaluation(run):
    run("(setq make (lambda () {count: 0}))")
    run("(setq a (make))")
    run("(setq a.count 5)")
    assert run("(make)") == "{count: 0}"


# -----------------------------------------------------
# Calls
# -----------------------------------------------------

def test_string_head_names_a_global_function(run, interp):
    assert run('("add" 1 2)') == "3"
    with pytest.raises(ArchTypeError) as exc:
        interp.eval('("nope" 1)')
    assert exc.value.message == "unknown function [nope]"


def test_non_function_head(interp):
    with pytest.raises(ArchTypeError) as exc:
        interp.eval("(1 2)")
    assert exc.value.message == "function expected [1]"


def test_errors_collect_enclosing_forms(interp):
    with pytest.raises(ArchTypeError) as exc:
        interp.eval('(add 1 (add 2 "x"))')
    assert str(exc.value) == 'Number expected ["x"] ### (add 2 "x") ### (add 1 (add 2 "x"))'
    assert exc.value.source() == 'Number expected ["x"]'


def test_eval_of_strings_and_values(run):
    assert run('(eval "(add 1 2)")') == "3"
    assert run("(eval '(1 2))") == "'(1 2)"
    run('(setq code "(setq z 4) (add z 1)")')
    assert run("(eval code)") == "5"
    assert run("z") == "4"


# -----------------------------------------------------
# Signals at the top level
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,message",
    [
        ("(return 1)", "return used outside of a block, loop or lambda"),
        ("(goto nowhere)", "unknown label [nowhere]"),
        ("(label a)", "improper use of labels [a]"),
        ("(add 1 (label x))", "improper use of labels [x]"),
    ],
)
def test_escaped_signals_are_errors(interp, source, message):
    with pytest.raises(ArchUsageError) as exc:
        interp.eval(source)
    assert exc.value.message == message


def test_settle_passes_plain_values():
    assert settle(Integer(1)) == Integer(1)
    with pytest.raises(ArchUsageError):
        settle(Return(Nil))
    with pytest.raises(ArchUsageError):
        settle(Goto("x"))
    with pytest.raises(ArchUsageError):
        settle(Label("x"))


def test_run_body_jumps_backward_and_forward(interp):
    forms = list(parse_all("(setq n 0) (label top) (setq n (add n 1)) (if (lt n 3) (goto top)) (goto out) (setq n 100) (label out) n"))
    assert run_body(forms, interp.env) == Integer(3)


def test_run_body_hands_back_unknown_goto_and_return(interp):
    assert run_body(list(parse_all("1 (goto elsewhere) 2")), interp.env).target == "elsewhere"
    result = run_body(list(parse_all("(return 5) 6")), interp.env)
    assert isinstance(result, Return) and result.value == Integer(5)


def test_evaluation_does_not_interpret_signals(interp):
    assert isinstance(parse("(return 1)").evaluate(interp.env), Return)


def test_runaway_recursion_becomes_an_error(interp):
    interp.eval("(setq f (lambda (n) (f n)))")
    with pytest.raises(ArchError) as exc:
        interp.eval("(f 1)")
    assert exc.value.message == "recursion too deep"
    assert interp.env.depth == 0
    assert interp.eval("(add 1 1)") == Integer(2)


def test_incomplete_input_asks_for_more(interp):
    requests = []

    def more(partial):
        requests.append(partial)
        return " 2)"

    assert interp.eval("(add 1", more) == Integer(3)
    assert requests == ["(add 1"]


@pytest.mark.parametrize("name", ["inf", "-inf"])
def test_non_finite_doubles_print_as_readable_calls(interp, name):
    value = interp.eval(f'(double "{name}")')
    assert value.source() == f'(double "{name}")'
    assert interp.eval(value.source()) == value


def test_large_products_print_readable_text(interp):
    value = interp.eval("(mul 10000000000.0 10000000000.0)")
    assert value.source() == "100000000000000000000.0"
    assert interp.eval(value.source()) == value
