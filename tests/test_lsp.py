import pytest
from lsprotocol.types import CompletionItemKind, DiagnosticSeverity, SymbolKind

from frothy_lsp.diagnostics import build_diagnostics
from frothy_lsp.indexer import BUILTIN_SIGNATURES, build_index, word_at
from frothy_lsp.server import completion_items, document_symbols, hover_text


def test_index_definitions(area_program):
    idx = build_index(area_program)
    assert {name: sdef.kind for name, sdef in idx.symbols.items()} == {
        "area": "function",
        "r": "var",
        "print_arg": "var",
    }
    assert (idx.symbols["r"].line, idx.symbols["r"].col) == (1, 0)
    assert not idx.lex_errors and not idx.brace_errors


@pytest.mark.parametrize(
    "source,name,kind",
    [
        ("b { 1 } =", "b", "block"),
        ("x 1 2 + =", "x", "var"),
        ("y PI =", "y", "var"),
        ("g { { 1 } fn } fn =", "g", "function"),
        ("  sq { n n * } fn = n 3 =", "sq", "function"),
    ],
)
def test_index_definition_kinds(source, name, kind):
    assert build_index(source).symbols[name].kind == kind


def test_index_ignores_assignments_inside_blocks():
    idx = build_index("f { inner 1 = } fn =")
    assert set(idx.symbols) == {"f"}


def test_index_keeps_first_definition():
    idx = build_index("x 1 =\nx 2 =")
    assert idx.symbols["x"].line == 0


def test_index_tolerates_lex_errors():
    idx = build_index("a 1 = $ b 2 =\n@@ c 3 =")
    assert set(idx.symbols) == {"a", "b", "c"}
    assert [(e.line, e.col, e.length) for e in idx.lex_errors] == [(0, 6, 1), (1, 0, 2)]


def test_index_brace_errors():
    idx = build_index("1 }\n{ 2")
    assert [(e.message, e.line, e.col) for e in idx.brace_errors] == [
        ("Unexpected '}' without a matching '{'", 0, 2),
        ("Unclosed '{'", 1, 0),
    ]


def test_diagnostics():
    diags = build_diagnostics(build_index("1 $\n{"))
    assert [d.code for d in diags] == ["LexError", "UnbalancedBlock"]
    assert all(d.severity == DiagnosticSeverity.Error for d in diags)
    assert all(d.source == "frothy-ls" for d in diags)
    assert diags[0].range.start.line == 0 and diags[0].range.start.character == 2
    assert diags[0].range.end.character == 3
    assert build_diagnostics(build_index("x 1 =")) == []


@pytest.mark.parametrize(
    "line,character,expected",
    [
        (0, 0, "area"),
        (0, 3, "area"),
        (0, 5, "call"),
        (0, 12, "x1"),
        (1, 0, None),
        (5, 0, None),
    ],
)
def test_word_at(line, character, expected):
    assert word_at("area call {x1}\n", line, character) == expected


def test_hover_text(area_program):
    idx = build_index(area_program)
    assert "print_arg" in hover_text("print", idx)
    assert hover_text("area", idx) == "area - function (defined at 1:1)"
    assert hover_text("fn", idx).startswith("{ body } fn")
    assert "3.14159" in hover_text("PI", idx)
    assert hover_text("unknown", idx) is None


def test_completion_items(area_program):
    items = {item.label: item for item in completion_items(build_index(area_program))}
    assert items["call"].kind == CompletionItemKind.Keyword
    assert items["print"].kind == CompletionItemKind.Function
    assert items["area"].kind == CompletionItemKind.Function
    assert items["r"].kind == CompletionItemKind.Variable
    assert set(BUILTIN_SIGNATURES) <= set(items)
    assert "area" not in {i.label for i in completion_items(None)}


def test_document_symbols(area_program):
    symbols = {s.name: s for s in document_symbols(build_index(area_program))}
    assert symbols["area"].kind == SymbolKind.Function
    assert symbols["r"].kind == SymbolKind.Variable
    assert symbols["print_arg"].range.end.character == len("print_arg")
