"""Line-oriented helpers mapping declaration spans back onto source text."""

from __future__ import annotations

from typing import Iterable, List

from .models import Span

RISK_WORDS = ("panic", "unwrap", "expect", "todo", "unimplemented")
DOC_MARKER = "///"
COMMENT_MARKER = "//"
PANIC_WORD = "panic"


def contains_risk_keyword(lines: Iterable[str], *, include_comments: bool = False) -> bool:
    """Return True if any line mentions a risk word as a plain substring.

    Lines starting with ``//`` (after left-trimming) are ignored unless
    ``include_comments`` is set.
    """
    for line in lines:
        trimmed = line.lstrip()
        if not include_comments and trimmed.startswith(COMMENT_MARKER):
            continue
        if any(word in trimmed for word in RISK_WORDS):
            return True
    return False


def warns_about_panics(doc_block: str) -> bool:
    return bool(doc_block) and PANIC_WORD in doc_block


class LineIndex:
    """Raw text of one source file split into 0-indexed lines."""

    def __init__(self, source: str, *, include_comments: bool = False) -> None:
        # Rows break on "\n" only, matching the parser; "\r" is dropped from CRLF endings.
        self._lines: List[str] = [
            line[:-1] if line.endswith("\r") else line for line in source.split("\n")
        ]
        self._include_comments = include_comments

    @property
    def lines(self) -> List[str]:
        return self._lines

    def has_risk(self) -> bool:
        """Cheap whole-file rejection used before parsing."""
        return contains_risk_keyword(self._lines, include_comments=self._include_comments)

    def span_has_risk(self, span: Span) -> bool:
        """Return True if the lines covered by ``span`` mention a risk word."""
        fragment = self._lines[span.start_line - 1 : span.end_line]
        return contains_risk_keyword(fragment, include_comments=self._include_comments)

    def extract_doc_block(self, span: Span) -> str:
        """Return the lowercased ``///`` block opening ``span``.

        Collection starts at the span's first line and stops at the first
        line that is not a doc comment, never reaching the span's last line.
        """
        collected: List[str] = []
        for index in range(span.start_line - 1, span.end_line - 1):
            if index >= len(self._lines):
                break
            trimmed = self._lines[index].strip()
            if not trimmed.startswith(DOC_MARKER):
                break
            collected.append(trimmed)
        return "\n".join(collected).lower()


__all__ = [
    "DOC_MARKER",
    "LineIndex",
    "RISK_WORDS",
    "contains_risk_keyword",
    "warns_about_panics",
]
