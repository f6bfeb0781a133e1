from __future__ import annotations

"""
A minimal pygls-based Language Server for ArchScript.

Features:
- Text synchronization and document store
- Diagnostics: the first reader error of the document
- Hover: builtin usage lines and locally defined symbols
- Completion: builtins and top-level definitions
- Signature Help: for known builtins
- Document Symbols: top-level setq definitions

The buffer is never evaluated; a static index is rebuilt on every change.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_SIGNATURE_HELP,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    ParameterInformation,
    Position,
    Range,
    SignatureHelp,
    SignatureHelpOptions,
    SignatureHelpParams,
    SignatureInformation,
    SymbolKind,
)

from archscript import __version__
from archscript_lsp.indexer import BUILTIN_SIGNATURES, DocumentIndex, build_index

logger = logging.getLogger(__name__)

_WORD_BREAKS = " \t()\n\r{}'\""


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class ArchLanguageServer(LanguageServer):
    CMD_NAME = "archscript-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.documents: Dict[str, DocumentState] = {}


ls = ArchLanguageServer()


# --- Text sync ---
def _reindex(uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    ls.publish_diagnostics(uri, diagnostics_for(text, idx))


@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(params: DidOpenTextDocumentParams):
    _reindex(params.text_document.uri, params.text_document.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        text = ls.documents[uri].text if uri in ls.documents else ""
    _reindex(uri, text)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def diagnostics_for(text: str, idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []
    for problem in idx.problems:
        diags.append(
            Diagnostic(
                range=Range(
                    start=Position(line=problem.line, character=problem.col),
                    end=Position(line=problem.line, character=problem.col + 1),
                ),
                message=problem.message,
                # An unfinished form is usually still being typed
                severity=DiagnosticSeverity.Warning if problem.incomplete else DiagnosticSeverity.Error,
                source=ArchLanguageServer.CMD_NAME,
            )
        )
    return diags


# --- Hover ---
@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    word = word_at(state.text, params.position)
    if not word:
        return None
    contents = hover_text(word, state.index)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


def hover_text(word: str, idx: DocumentIndex) -> Optional[str]:
    if word in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[word]
    sdef = idx.symbols.get(word)
    if sdef is None:
        return None
    return f"{word}: {sdef.kind} (defined at {sdef.line + 1}:{sdef.col + 1})"


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["("]))
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    return CompletionList(is_incomplete=False, items=completion_items(state.index if state else None))


def completion_items(idx: Optional[DocumentIndex]) -> List[CompletionItem]:
    items = [
        CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig)
        for name, sig in sorted(BUILTIN_SIGNATURES.items())
    ]
    if idx is not None:
        for name, sdef in idx.symbols.items():
            kind = CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable
            items.append(CompletionItem(label=name, kind=kind))
    return items


# --- Signature Help ---
@ls.feature(TEXT_DOCUMENT_SIGNATURE_HELP, SignatureHelpOptions(trigger_characters=["(", " "]))
def on_signature_help(params: SignatureHelpParams) -> Optional[SignatureHelp]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    callee = callee_name(line_prefix(state.text, params.position))
    sig = BUILTIN_SIGNATURES.get(callee or "")
    if not sig:
        return None
    # "(name p1 p2) -> result": parameters sit between the name and ')'
    label = sig.split(" -> ", 1)[0]
    inner = label[label.find("(") + 1 : label.rfind(")")]
    parameters = [ParameterInformation(label=p) for p in inner.split()[1:]]
    return SignatureHelp(
        signatures=[SignatureInformation(label=label, parameters=parameters)],
        active_signature=0,
        active_parameter=0,
    )


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    return document_symbols(state.index)


def document_symbols(idx: DocumentIndex) -> List[DocumentSymbol]:
    symbols: List[DocumentSymbol] = []
    for name, sdef in idx.symbols.items():
        rng = Range(
            start=Position(line=sdef.line, character=sdef.col),
            end=Position(line=sdef.line, character=sdef.col + len(name)),
        )
        symbols.append(
            DocumentSymbol(
                name=name,
                kind=SymbolKind.Function if sdef.kind == "function" else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


# --- Helpers ---
def line_prefix(text: str, pos: Position) -> str:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return ""
    return lines[pos.line][: pos.character]


def word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = end = min(pos.character, len(line))
    while start > 0 and line[start - 1] not in _WORD_BREAKS:
        start -= 1
    while end < len(line) and line[end] not in _WORD_BREAKS:
        end += 1
    return line[start:end] or None


def callee_name(prefix: str) -> Optional[str]:
    lp = prefix.rfind("(")
    if lp == -1:
        return None
    tokens = re.split(r"[\s()]+", prefix[lp + 1 :])
    return tokens[0] if tokens and tokens[0] else None


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    logger.info("starting %s over stdio", ArchLanguageServer.CMD_NAME)
    ls.start_io()


if __name__ == "__main__":
    main()
