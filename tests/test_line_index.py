"""Tests for panicdoc.line_index."""

from __future__ import annotations

from panicdoc.line_index import LineIndex, contains_risk_keyword, warns_about_panics
from panicdoc.models import Span

SOURCE = """\
/// Adds numbers.
/// Second line.
pub fn add() {
    value.unwrap();
}
// trailing
"""


def test_contains_risk_keyword_matches_plain_substrings() -> None:
    assert contains_risk_keyword(['let x = "unwrapped";'])
    assert contains_risk_keyword(["    todo!()"])
    assert not contains_risk_keyword(["let safe = 1;", "return safe;"])


def test_contains_risk_keyword_skips_comment_lines_by_default() -> None:
    lines = ["    // this used to unwrap", "/// may panic"]
    assert not contains_risk_keyword(lines)
    assert contains_risk_keyword(lines, include_comments=True)


def test_span_has_risk_includes_last_line() -> None:
    index = LineIndex("pub fn one() { x.expect(\"boom\") }\n")
    assert index.span_has_risk(Span(1, 1))


def test_span_has_risk_limits_to_span() -> None:
    index = LineIndex(SOURCE)
    assert index.span_has_risk(Span(3, 5))
    assert not index.span_has_risk(Span(1, 2))
    assert not index.span_has_risk(Span(5, 6))


def test_extract_doc_block_collects_leading_doc_lines() -> None:
    index = LineIndex(SOURCE)
    assert index.extract_doc_block(Span(1, 5)) == "/// adds numbers.\n/// second line."


def test_extract_doc_block_empty_when_first_line_is_code() -> None:
    index = LineIndex(SOURCE)
    assert index.extract_doc_block(Span(3, 5)) == ""


def test_extract_doc_block_never_reaches_last_line() -> None:
    index = LineIndex("/// only doc\n")
    assert index.extract_doc_block(Span(1, 1)) == ""


def test_extract_doc_block_stops_at_first_non_doc_line() -> None:
    index = LineIndex("/// First.\n#[inline]\n/// Panics.\npub fn f() {}\n")
    assert index.extract_doc_block(Span(1, 4)) == "/// first."


def test_warns_about_panics() -> None:
    assert warns_about_panics("/// # panics\n/// when empty")
    assert not warns_about_panics("/// returns the value")
    assert not warns_about_panics("")


def test_lines_break_on_newline_only() -> None:
    index = LineIndex("a\x0cb c\nd\r\ne\x85f\n")
    assert index.lines[:3] == ["a\x0cb c", "d", "e\x85f"]
    assert index.extract_doc_block(Span(1, 2)) == ""


def test_extract_doc_block_strips_crlf() -> None:
    index = LineIndex("/// Panics.\r\npub fn f() {}\r\n")
    assert index.extract_doc_block(Span(1, 2)) == "/// panics."
