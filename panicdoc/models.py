"""Core data models shared across panicdoc components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class Span:
    """Inclusive, 1-indexed line range of a declaration."""

    start_line: int
    end_line: int

    def __str__(self) -> str:
        return f"{self.start_line}:{self.end_line}"


class DeclarationKind(Enum):
    """Declaration variants the analyzer dispatches on."""

    NAMESPACE = "namespace"
    FUNCTION = "function"
    TRAIT = "trait"
    IMPL = "impl"
    MACRO = "macro"
    OTHER = "other"


@dataclass
class Member:
    """A method declared inside a trait or impl block."""

    ident: str
    span: Span
    body_span: Optional[Span] = None


@dataclass
class Declaration:
    """Item of a parsed source file.

    ``children`` is only populated for namespaces, ``members`` for traits and
    impl blocks, ``body_span`` for free functions and ``self_type`` for impl
    blocks.
    """

    kind: DeclarationKind
    ident: str
    span: Span
    public: bool = False
    body_span: Optional[Span] = None
    self_type: Optional[str] = None
    children: List["Declaration"] = field(default_factory=list)
    members: List[Member] = field(default_factory=list)


@dataclass(frozen=True)
class Finding:
    """A risky declaration whose documentation does not warn about panics."""

    ident: str
    span: Span

    def __str__(self) -> str:
        return f"{self.ident} {self.span}"


@dataclass
class FileReport:
    """Findings collected for a single source file."""

    path: Path
    findings: List[Finding]


@dataclass
class CheckResult:
    """Outcome of checking a whole project."""

    root: Path
    files_scanned: int = 0
    reports: List[FileReport] = field(default_factory=list)

    @property
    def total_findings(self) -> int:
        return sum(len(report.findings) for report in self.reports)
