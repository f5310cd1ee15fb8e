"""Flags public Rust items that may panic without documenting it."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from ..line_index import LineIndex, warns_about_panics
from ..logging import get_logger
from ..models import Declaration, DeclarationKind, Finding, Member, Span
from .tree_sitter import ParseError, RustParser

_LOGGER = get_logger("analyzers.panics")


def _qualify(namespace: Optional[str], *names: str) -> str:
    parts = [namespace] if namespace else []
    parts.extend(names)
    return "::".join(parts)


class PanicAnalyzer:
    """Walks the declarations of one file and reports undocumented panics.

    The analyzer keeps no state between files; each call reads, parses and
    discards one file.
    """

    def __init__(self, *, include_comments: bool = False, parser: RustParser | None = None) -> None:
        self._include_comments = include_comments
        self._parser = parser or RustParser()

    def analyze(self, path: Path) -> List[Finding]:
        """Return findings for ``path``; unreadable files yield nothing."""
        try:
            source = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            _LOGGER.debug("Skipping unreadable file %s: %s", path, exc)
            return []
        return self.analyze_source(source, origin=str(path))

    def analyze_source(self, source: str, *, origin: str = "<memory>") -> List[Finding]:
        index = LineIndex(source, include_comments=self._include_comments)
        if not index.has_risk():
            return []
        try:
            items = self._parser.parse(source)
        except ParseError as exc:
            _LOGGER.debug("Skipping %s: %s", origin, exc)
            return []

        findings: List[Finding] = []
        self._process_items(index, items, None, findings)
        return findings

    def _process_items(
        self,
        index: LineIndex,
        items: Sequence[Declaration],
        namespace: Optional[str],
        findings: List[Finding],
    ) -> None:
        for item in items:
            if not index.span_has_risk(item.span):
                continue
            kind = item.kind
            if kind is DeclarationKind.NAMESPACE and item.public:
                self._process_namespace(index, item, namespace, findings)
            elif kind is DeclarationKind.FUNCTION and item.public:
                self._process_function(index, item, namespace, findings)
            elif kind is DeclarationKind.TRAIT and item.public:
                self._process_trait(index, item, namespace, findings)
            elif kind is DeclarationKind.IMPL:
                # Impl members carry their own visibility; the block is not gated.
                self._process_impl(index, item, namespace, findings)
            # Macro definitions and invocations are never inspected.

    def _process_namespace(
        self,
        index: LineIndex,
        module: Declaration,
        namespace: Optional[str],
        findings: List[Finding],
    ) -> None:
        self._process_items(index, module.children, _qualify(namespace, module.ident), findings)

    def _process_function(
        self,
        index: LineIndex,
        func: Declaration,
        namespace: Optional[str],
        findings: List[Finding],
    ) -> None:
        if func.body_span is None or not index.span_has_risk(func.body_span):
            return
        self._check_docs(index, _qualify(namespace, func.ident), func.span, findings)

    def _process_trait(
        self,
        index: LineIndex,
        trait: Declaration,
        namespace: Optional[str],
        findings: List[Finding],
    ) -> None:
        for method in trait.members:
            if method.body_span is None:
                continue
            self._process_method(index, method, _qualify(namespace, trait.ident, method.ident), findings)

    def _process_impl(
        self,
        index: LineIndex,
        imp: Declaration,
        namespace: Optional[str],
        findings: List[Finding],
    ) -> None:
        self_type = imp.self_type or ""
        for method in imp.members:
            self._process_method(index, method, _qualify(namespace, self_type, method.ident), findings)

    def _process_method(
        self, index: LineIndex, method: Member, ident: str, findings: List[Finding]
    ) -> None:
        if method.body_span is None or not index.span_has_risk(method.body_span):
            return
        self._check_docs(index, ident, method.span, findings)

    @staticmethod
    def _check_docs(index: LineIndex, ident: str, span: Span, findings: List[Finding]) -> None:
        comment = index.extract_doc_block(span)
        if not warns_about_panics(comment):
            findings.append(Finding(ident=ident, span=span))


def analyze(path: Path, *, include_comments: bool = False) -> List[Finding]:
    """Convenience wrapper around :meth:`PanicAnalyzer.analyze`."""
    return PanicAnalyzer(include_comments=include_comments).analyze(path)


__all__ = ["PanicAnalyzer", "analyze"]
