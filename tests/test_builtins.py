import io

import pytest

from archscript.interpreter import Interpreter
from archscript.types import Nil, String
from archscript.types.errors import ArchArityError, ArchKeyError, ArchTypeError


@pytest.mark.parametrize(
    "source,expected",
    [
        ('(cat "a" 1 "b")', '"a1b"'),
        ("(cat)", '""'),
        ('(cat "x" nil)', '"xNil"'),
        ('(int "42")', "42"),
        ("(int 3.9)", "3"),
        ('(int "x")', "Nil"),
        ("(int nil)", "Nil"),
        ('(int (double "inf"))', "Nil"),
        ('(int (double "-inf"))', "Nil"),
        ('(int (double "nan"))', "Nil"),
        ("(double 2)", "2.0"),
        ('(double " 1.5 ")', "1.5"),
        ('(len "abc")', "3"),
        ("(len '(1 2))", "2"),
        ("(len {a: 1})", "1"),
        ("(len nil)", "0"),
        ("(list 1 2)", "'(1 2)"),
        ("(list)", "Nil"),
        ('(list (list 1 2) "a")', "'((1 2) \"a\")"),
        ("(append '(1) 2 3)", "'(1 2 3)"),
        ("(append nil 1)", "'(1)"),
        ("(append nil)", "Nil"),
        ("(@ '(10 20) 1)", "20"),
        ('(@ {a: 1} "a")', "1"),
        ('(struct "a" 1 "b" 2)', "{a: 1 b: 2}"),
        ("(struct)", "{}"),
        ("(keys {a: 1 b: 2})", "'(\"a\" \"b\")"),
        ("(keys {})", "Nil"),
    ],
)
def test_builtins(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize(
    "source,error,message",
    [
        ("(len 5)", ArchTypeError, "String, List or Struct expected [5]"),
        ("(append 1 2)", ArchTypeError, "List expected [1]"),
        ('(@ {a: 1} "b")', ArchKeyError, "unknown key [b]"),
        ("(@ '(1) 5)", ArchKeyError, "index out of range [5]"),
        ("(@ 1 1)", ArchTypeError, "Struct or List expected [1]"),
        ('(struct "a")', ArchArityError, "insufficient arguments [struct]"),
        ("(struct 1 2)", ArchTypeError, "invalid key [1]"),
        ("(keys '(1))", ArchTypeError, "Struct expected ['(1)]"),
    ],
)
def test_builtin_errors(interp, source, error, message):
    with pytest.raises(error) as exc:
        interp.eval(source)
    assert exc.value.message == message


def test_set_item_changes_container_in_place(run):
    run("(setq s {a: 1})")
    assert run('(set@ s "a" 2)') == "{a: 2}"
    assert run("s.a") == "2"
    run("(setq l '(1 2))")
    assert run("(set@ l 0 9)") == "'(9 2)"
    assert run("l") == "'(9 2)"


def test_quoted_list_literal_is_copied(run):
    run("(setq mk (lambda () '(1 2)))")
    run("(setq l (mk))")
    run("(set@ l 0 9)")
    assert run("(mk)") == "'(1 2)"


def test_help_lists_matching_functions(interp):
    text = interp.eval('(help "ad")').value
    assert text.startswith("(add n ...)")
    assert "\n" not in text
    assert "(setq name value)" in interp.eval("(help)").value


def test_print_writes_text_and_returns_nil(interp, out):
    assert interp.eval('(print "x" 1 "y z")') is Nil
    assert out.getvalue() == "x 1 y z\n"


def test_arguments_are_evaluated_left_to_right(interp, out):
    interp.eval('(list (print "a") (print "b"))')
    assert out.getvalue() == "a\nb\n"


def test_read_lines_until_end_of_input():
    out = io.StringIO()
    interp = Interpreter(stdout=out, stdin=io.StringIO("hello\n"))
    assert interp.eval('(read "? ")') == String("hello")
    assert out.getvalue() == "? "
    assert interp.eval("(read)") is Nil
