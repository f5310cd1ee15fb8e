"""Tests for the tree-sitter Rust parser."""

from __future__ import annotations

import textwrap

import pytest

from panicdoc.analyzers.tree_sitter import ParseError, RustParser
from panicdoc.models import DeclarationKind, Span


def _parse(source: str):  # type: ignore[no-untyped-def]
    return RustParser().parse(textwrap.dedent(source).lstrip("\n"))


def test_parser_classifies_top_level_items() -> None:
    items = _parse(
        """
        use std::fmt;

        pub mod inner {
            fn hidden() {}
        }

        pub fn visible() {}

        pub trait Shape {
            fn area(&self) -> f64;
        }

        impl fmt::Display for Point {
            fn fmt(&self, f: &mut fmt::Formatter) -> fmt::Result { Ok(()) }
        }

        macro_rules! noisy {
            () => {};
        }

        const LIMIT: u32 = 3;
        """
    )

    kinds = [item.kind for item in items]
    assert kinds == [
        DeclarationKind.OTHER,
        DeclarationKind.NAMESPACE,
        DeclarationKind.FUNCTION,
        DeclarationKind.TRAIT,
        DeclarationKind.IMPL,
        DeclarationKind.MACRO,
        DeclarationKind.OTHER,
    ]
    module = items[1]
    assert module.ident == "inner"
    assert module.public is True
    assert [child.ident for child in module.children] == ["hidden"]
    assert module.children[0].public is False
    assert items[4].self_type == "Point"


def test_parser_only_treats_bare_pub_as_public() -> None:
    items = _parse(
        """
        pub fn a() {}
        pub(crate) fn b() {}
        pub(super) fn c() {}
        fn d() {}
        """
    )
    assert [(item.ident, item.public) for item in items] == [
        ("a", True),
        ("b", False),
        ("c", False),
        ("d", False),
    ]


def test_parser_spans_include_attached_docs_and_attributes() -> None:
    items = _parse(
        """
        // plain comment
        /// Documented.
        #[inline]
        pub fn documented() {
            body();
        }
        """
    )
    func = items[0]
    assert func.span == Span(2, 6)
    assert func.body_span == Span(4, 6)


def test_parser_collects_trait_defaults_and_impl_methods() -> None:
    items = _parse(
        """
        pub trait Store {
            fn required(&self);

            /// Has a default.
            fn provided(&self) {
                self.required();
            }
        }

        impl<T: Clone> Wrapper<T> {
            pub fn get(&self) -> T { self.0.clone() }
        }
        """
    )
    trait, imp = items
    assert [(m.ident, m.body_span is not None) for m in trait.members] == [("provided", True)]
    assert trait.members[0].span == Span(4, 7)
    assert imp.self_type == "Wrapper<T>"
    assert [m.ident for m in imp.members] == ["get"]


def test_parser_rejects_invalid_source() -> None:
    with pytest.raises(ParseError):
        RustParser().parse("pub fn broken( { panic!() }\n")
