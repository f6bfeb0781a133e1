import pytest
from hypothesis import given, strategies as st

from archscript.reader import TokenClass, token_at, parse, parse_all
from archscript.types import Integer, Double, String, List, Struct, Symbol, Expression, Nil, T
from archscript.types.errors import ArchSyntaxError, ArchIncompleteInput


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(", TokenClass.OPEN_PAREN),
        (")", TokenClass.CLOSE_PAREN),
        ("{", TokenClass.OPEN_BRACE),
        ("}", TokenClass.CLOSE_BRACE),
        ("'", TokenClass.APOSTROPHE),
        ('"', TokenClass.QUOTE),
        (".", TokenClass.DOT),
        (" ", TokenClass.WHITESPACE),
        ("\n", TokenClass.WHITESPACE),
        ("a", TokenClass.LETTER),
        ("_", TokenClass.LETTER),
        ("7", TokenClass.DIGIT),
        (":", TokenClass.UNKNOWN),
        ("@", TokenClass.UNKNOWN),
        ("", TokenClass.END),
    ],
)
def test_token_at_classifies_characters(source, expected):
    assert token_at(source, 0) is expected


def test_token_at_past_end():
    assert token_at("ab", 2) is TokenClass.END


@pytest.mark.parametrize(
    "source,expected",
    [
        ("42", "42"),
        ("-7", "-7"),
        ("3.5", "3.5"),
        ('"hi there"', '"hi there"'),
        ("nil", "Nil"),
        ("NIL", "Nil"),
        ("TRUE", "True"),
        ("()", "Nil"),
        ("(add 1 2)", "(add 1 2)"),
        ("(  add\n 1   2 )", "(add 1 2)"),
        ("'(1 (2 3) x)", "'(1 (2 3) \"x\")"),
        ("'()", "Nil"),
        ("'abc", '"abc"'),
        ("'-4", "-4"),
        ("a.b.c", "a.b.c"),
        ("set@", "set@"),
        ("=", "="),
        ("{x: 1 y: (add 1 2)}", "{x: 1 y: (add 1 2)}"),
        ("{first-name: \"Ada\"}", '{first-name: "Ada"}'),
        ("'{a: (1 2) b: c}", "{a: '(1 2) b: \"c\"}"),
    ],
)
def test_parse_canonical_text(source, expected):
    assert parse(source).source() == expected


def test_parse_node_types():
    assert isinstance(parse("42"), Integer)
    assert isinstance(parse("2.0"), Double)
    assert isinstance(parse('"s"'), String)
    assert isinstance(parse("'(1)"), List)
    assert isinstance(parse("{a: 1}"), Struct)
    assert isinstance(parse("(f x)"), Expression)
    assert parse("nil") is Nil
    assert parse("true") is T


def test_dotted_symbol_segments():
    sym = parse("point.x")
    assert isinstance(sym, Symbol)
    assert sym.segments == ("point", "x")


def test_quoted_bare_words_are_strings_not_symbols():
    lst = parse("'(a nil)")
    assert lst.items == [String("a"), Nil]


def test_parse_all_and_blank_input():
    assert [f.source() for f in parse_all("1 x (f) \"s\"")] == ["1", "x", "(f)", '"s"']
    assert parse("   \n ") is None
    assert list(parse_all("")) == []


@pytest.mark.parametrize(
    "source,message",
    [
        (")", "mismatched close parenthesis"),
        ("}", "mismatched close brace"),
        ("(1 }", "mismatched close brace"),
        ("{a: 1)", "mismatched close parenthesis"),
        ("1.2.3", "invalid number format"),
        ("12ab", "invalid number format"),
        ("' 1", "bad literal"),
        ("a..b", "invalid symbol"),
        ("{1: 2}", "struct key expected"),
        ("{a 1}", "':' expected after key a"),
        (":", "unexpected character"),
        ("9223372036854775808", "invalid number format"),
        ("-9223372036854775809", "invalid number format"),
    ],
)
def test_syntax_errors(source, message):
    with pytest.raises(ArchSyntaxError) as exc:
        parse(source)
    assert exc.value.message.startswith(message)
    assert not isinstance(exc.value, ArchIncompleteInput)


def test_syntax_error_records_position_and_source():
    with pytest.raises(ArchSyntaxError) as exc:
        list(parse_all("(add 1 2))"))
    assert exc.value.position == 9
    assert exc.value.context == " ### (add 1 2))"


@pytest.mark.parametrize(
    "source,message",
    [
        ("(add 1", "unterminated expression [(add 1]"),
        ('"abc', 'unterminated string ["abc]'),
        ("'(1 2", "unterminated list [(1 2]"),
        ("{a: 1", "unterminated struct [{a: 1]"),
    ],
)
def test_incomplete_input_without_callback(source, message):
    with pytest.raises(ArchIncompleteInput) as exc:
        parse(source)
    assert exc.value.message == message


def test_more_input_continues_open_form():
    calls = []

    def more(partial):
        calls.append(partial)
        return "2)"

    assert parse("(add 1", more).source() == "(add 1 2)"
    assert calls == ["(add 1"]


def test_more_input_can_be_asked_repeatedly():
    answers = iter(["(mul 2", "3))"])
    form = parse("(add 1", lambda partial: next(answers))
    assert form.source() == "(add 1 (mul 2 3))"


def test_multiline_string_keeps_newline():
    assert parse('"ab', lambda partial: 'cd"').value == "ab\ncd"


def test_empty_continuation_ends_with_structural_error():
    with pytest.raises(ArchSyntaxError) as exc:
        parse("(add 1", lambda partial: "")
    assert not isinstance(exc.value, ArchIncompleteInput)
    assert exc.value.message.startswith("unterminated expression")


@given(st.integers(min_value=-(2**63), max_value=2**63 - 1))
def test_integer_literals_read_back(n):
    value = parse(str(n))
    assert value == Integer(n)
    assert value.source() == str(n)


@given(st.floats(allow_nan=False, allow_infinity=False))
def test_double_literals_read_back(x):
    assert parse(Double(x).source()) == Double(x)


@pytest.mark.parametrize(
    "value,expected",
    [
        (1e16, "10000000000000000.0"),
        (1e-05, "0.00001"),
        (-2.5e-07, "-0.00000025"),
        (3.0, "3.0"),
        (0.1, "0.1"),
    ],
)
def test_double_text_is_positional(value, expected):
    assert Double(value).source() == expected
    assert parse(expected) == Double(value)


@given(st.text(alphabet=st.characters(exclude_characters='"', exclude_categories=("Cs",)), max_size=30))
def test_string_literals_read_back(text):
    value = parse(f'"{text}"')
    assert value == String(text)
    assert parse(value.source()) == value
