"""Detect public Rust functions that can panic without documenting it."""

from .analyzers import PanicAnalyzer, analyze
from .checker import PanicChecker
from .models import CheckResult, Declaration, DeclarationKind, FileReport, Finding, Member, Span
from .source_walker import enumerate_source_files

__version__ = "0.1.0"

__all__ = [
    "CheckResult",
    "Declaration",
    "DeclarationKind",
    "FileReport",
    "Finding",
    "Member",
    "PanicAnalyzer",
    "PanicChecker",
    "Span",
    "analyze",
    "enumerate_source_files",
]
