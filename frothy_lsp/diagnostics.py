from __future__ import annotations

from typing import List

from lsprotocol.types import Diagnostic, DiagnosticSeverity, Position, Range

from frothy_lsp.indexer import DocumentIndex, Issue

SOURCE = "frothy-ls"


def _mk_range(issue: Issue) -> Range:
    return Range(
        start=Position(line=issue.line, character=issue.col),
        end=Position(line=issue.line, character=issue.col + issue.length),
    )


def build_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []

    for issue in idx.lex_errors:
        diags.append(
            Diagnostic(
                range=_mk_range(issue),
                message=issue.message,
                severity=DiagnosticSeverity.Error,
                source=SOURCE,
                code="LexError",
            )
        )

    for issue in idx.brace_errors:
        diags.append(
            Diagnostic(
                range=_mk_range(issue),
                message=issue.message,
                severity=DiagnosticSeverity.Error,
                source=SOURCE,
                code="UnbalancedBlock",
            )
        )

    return diags
