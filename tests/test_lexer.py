import pytest
from hypothesis import given, strategies as st

from frothy.errors import FrothyLexError, FrothyUnbalancedBlock
from frothy.reader import lexer
from frothy.reader.lexer import TokenStream, lex, read


def _kinds(source):
    return [(t.kind, t.text) for t in lex(source)]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("42", [("number", "42")]),
        ("-5", [("number", "-5")]),
        ("+2.5", [("number", "+2.5")]),
        (".5 1. 1e3 2.5E-2", [("number", ".5"), ("number", "1."), ("number", "1e3"), ("number", "2.5E-2")]),
        ("3 -5", [("number", "3"), ("number", "-5")]),
        ("3 5 -", [("number", "3"), ("number", "5"), ("operator", "-")]),
        ("a-b", [("symbol", "a"), ("operator", "-"), ("symbol", "b")]),
        ("x 1 =", [("symbol", "x"), ("number", "1"), ("assign", "=")]),
        ("1 1 ==", [("number", "1"), ("number", "1"), ("operator", "==")]),
        ("< <= > >= != %", [("operator", op) for op in ["<", "<=", ">", ">=", "!=", "%"]]),
        ("+ - * /", [("operator", op) for op in "+-*/"]),
        ("fn call", [("reserved", "fn"), ("reserved", "call")]),
        ("fnord call_me _x9", [("symbol", "fnord"), ("symbol", "call_me"), ("symbol", "_x9")]),
        ("{ 1 }", [("lbrace", "{"), ("number", "1"), ("rbrace", "}")]),
        ("{1 2+}", [("lbrace", "{"), ("number", "1"), ("number", "2"), ("operator", "+"), ("rbrace", "}")]),
        ("1 # a comment = { \n2", [("number", "1"), ("number", "2")]),
        ("   \t\n ", []),
    ],
)
def test_lexer_basic(source, expected):
    assert _kinds(source) == expected


def test_token_values_and_positions():
    toks = list(lex("r 5 =\n  area call"))
    assert toks[1].value == 5.0
    assert toks[0].value == "r"
    assert toks[2].value is None
    area = toks[3]
    assert (area.line, area.col, area.offset) == (2, 3, 8)
    assert str(area) == "area"


@pytest.mark.parametrize(
    "source,bad,line,col",
    [
        ("1 $ 2", "$", 1, 3),
        ("5abc", "5abc", 1, 1),
        ("1.2.3", "1.2.3", 1, 1),
        ("x\n  @@@ y", "@@@", 2, 3),
        ("1e", "1e", 1, 1),
    ],
)
def test_lex_error_carries_text_and_position(source, bad, line, col):
    with pytest.raises(FrothyLexError) as info:
        list(lex(source))
    err = info.value
    assert err.text == bad
    assert err.position == (line, col)
    assert err.kind == "LexError"


def test_lex_is_lazy():
    tokens = lex("1 $")
    assert next(tokens).value == 1.0
    with pytest.raises(FrothyLexError):
        next(tokens)


def test_token_stream_is_restartable():
    stream = TokenStream("a 1 + { b }")
    assert [t.text for t in stream] == [t.text for t in stream]
    assert len(list(stream)) == 6


@pytest.mark.parametrize(
    "source,kind,col",
    [
        ("{ 1", lexer.LBRACE, 1),
        ("{ { 1 }", lexer.LBRACE, 1),
        ("1 }", lexer.RBRACE, 3),
        ("{ } }", lexer.RBRACE, 5),
    ],
)
def test_read_rejects_unbalanced_blocks(source, kind, col):
    with pytest.raises(FrothyUnbalancedBlock) as info:
        read(source)
    assert info.value.token.kind == kind
    assert info.value.position == (1, col)


def test_read_accepts_nested_blocks():
    assert len(read("{ { 1 } fn { } }")) == 8


@given(st.floats(allow_nan=False, allow_infinity=False))
def test_float_literals_round_trip(x):
    (tok,) = list(lex(repr(x)))
    assert tok.kind == lexer.NUMBER
    assert tok.value == x


@given(st.integers(min_value=-10**12, max_value=10**12))
def test_integer_literals(n):
    (tok,) = list(lex(str(n)))
    assert tok.value == float(n)
