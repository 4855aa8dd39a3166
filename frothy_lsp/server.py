from __future__ import annotations

"""
A minimal pygls-based Language Server for Frothy.

Features:
- Text synchronization and a per-document index
- Diagnostics: lexing errors, unbalanced braces
- Hover: builtin signatures, reserved words and locally defined names
- Completion: builtins, constants, reserved words and local definitions
- Document Symbols: names bound at top level with `=`

Note: We avoid evaluating the buffer. We build a static index per document.
"""

import logging
from typing import Dict, List, Optional

from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)
from pygls.server import LanguageServer

from frothy import __version__
from frothy_lsp.diagnostics import build_diagnostics
from frothy_lsp.indexer import (
    BUILTIN_SIGNATURES,
    RESERVED_SIGNATURES,
    DocumentIndex,
    SymbolDef,
    build_index,
    word_at,
)

logger = logging.getLogger(__name__)

_SYMBOL_KINDS = {
    "function": SymbolKind.Function,
    "block": SymbolKind.Array,
    "var": SymbolKind.Variable,
}


class FrothyLanguageServer(LanguageServer):
    CMD_NAME = "frothy-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.indexes: Dict[str, DocumentIndex] = {}

    def reindex(self, uri: str) -> DocumentIndex:
        text = self.workspace.get_text_document(uri).source
        idx = build_index(text)
        self.indexes[uri] = idx
        self.publish_diagnostics(uri, build_diagnostics(idx))
        return idx


ls = FrothyLanguageServer()


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: FrothyLanguageServer, params: DidOpenTextDocumentParams):
    ls.reindex(params.text_document.uri)


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: FrothyLanguageServer, params: DidChangeTextDocumentParams):
    ls.reindex(params.text_document.uri)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: FrothyLanguageServer, params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.indexes.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Hover ---
def hover_text(word: str, idx: DocumentIndex) -> Optional[str]:
    if word in RESERVED_SIGNATURES:
        return RESERVED_SIGNATURES[word]
    if word in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[word]
    sdef = idx.symbols.get(word)
    if sdef is not None:
        return f"{word} - {sdef.kind} (defined at {sdef.line + 1}:{sdef.col + 1})"
    return None


@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(ls: FrothyLanguageServer, params: HoverParams) -> Optional[Hover]:
    uri = params.text_document.uri
    idx = ls.indexes.get(uri)
    if idx is None:
        return None
    text = ls.workspace.get_text_document(uri).source
    word = word_at(text, params.position.line, params.position.character)
    if not word:
        return None
    contents = hover_text(word, idx)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
def completion_items(idx: Optional[DocumentIndex]) -> List[CompletionItem]:
    items: List[CompletionItem] = []
    for name, sig in RESERVED_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Keyword, detail=sig))
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    if idx is not None:
        for name, sdef in idx.symbols.items():
            kind = CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable
            items.append(CompletionItem(label=name, kind=kind, detail=sdef.kind))
    return items


@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=[" "]))
def on_completion(ls: FrothyLanguageServer, params: CompletionParams) -> CompletionList:
    idx = ls.indexes.get(params.text_document.uri)
    return CompletionList(is_incomplete=False, items=completion_items(idx))


# --- Document Symbols ---
def _document_symbol(sdef: SymbolDef) -> DocumentSymbol:
    rng = Range(
        start=Position(line=sdef.line, character=sdef.col),
        end=Position(line=sdef.line, character=sdef.col + len(sdef.name)),
    )
    return DocumentSymbol(
        name=sdef.name,
        kind=_SYMBOL_KINDS.get(sdef.kind, SymbolKind.Variable),
        range=rng,
        selection_range=rng,
        detail=sdef.kind,
    )


def document_symbols(idx: DocumentIndex) -> List[DocumentSymbol]:
    return [_document_symbol(sdef) for sdef in idx.symbols.values()]


@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(ls: FrothyLanguageServer, params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    idx = ls.indexes.get(params.text_document.uri)
    if idx is None:
        return None
    return document_symbols(idx)


def main():
    # Run the language server over stdio
    logger.info("starting %s %s", ls.CMD_NAME, __version__)
    ls.start_io()


if __name__ == "__main__":
    main()
