"""Rust source analyzers."""

from __future__ import annotations

from .panics import PanicAnalyzer, analyze
from .tree_sitter import ParseError, RustParser

__all__ = ["PanicAnalyzer", "ParseError", "RustParser", "analyze"]
