"""Tree-sitter powered Rust declaration parser."""

from __future__ import annotations

from typing import Iterable, List, Optional

import tree_sitter_rust
from tree_sitter import Language, Node, Parser

from ..models import Declaration, DeclarationKind, Member, Span


_RUST_LANGUAGE: Optional[Language] = None

_KIND_BY_NODE_TYPE = {
    "mod_item": DeclarationKind.NAMESPACE,
    "function_item": DeclarationKind.FUNCTION,
    "trait_item": DeclarationKind.TRAIT,
    "impl_item": DeclarationKind.IMPL,
    "macro_definition": DeclarationKind.MACRO,
    "macro_invocation": DeclarationKind.MACRO,
}

_ITEM_SKIP_TYPES = {"{", "}", ";", "line_comment", "block_comment", "attribute_item"}


class ParseError(ValueError):
    """Raised when source text is not valid Rust."""


def rust_language() -> Language:
    global _RUST_LANGUAGE
    if _RUST_LANGUAGE is None:
        _RUST_LANGUAGE = Language(tree_sitter_rust.language())
    return _RUST_LANGUAGE


def _node_text(node: Node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def _is_outer_doc_comment(node: Node, source_bytes: bytes) -> bool:
    text = _node_text(node, source_bytes)
    if node.type == "line_comment":
        return text.startswith("///") and not text.startswith("////")
    if node.type == "block_comment":
        return text.startswith("/**") and not text.startswith(("/***", "/**/"))
    return False


class RustParser:
    """Parses Rust source into a tree of :class:`Declaration` objects.

    Spans follow the convention of Rust's own parsers: an item starts at its
    first outer attribute or ``///`` doc comment, so the documentation block
    is always the opening lines of the span.
    """

    def __init__(self) -> None:
        self._parser = Parser(rust_language())

    def parse(self, source: str) -> List[Declaration]:
        source_bytes = source.encode("utf-8")
        tree = self._parser.parse(source_bytes)
        root = tree.root_node
        if root.has_error:
            raise ParseError("source contains syntax errors")
        return self._collect_items(root.children, source_bytes)

    def _collect_items(self, nodes: Iterable[Node], source_bytes: bytes) -> List[Declaration]:
        declarations: List[Declaration] = []
        for node in nodes:
            if node.type in _ITEM_SKIP_TYPES:
                continue
            declarations.append(self._build_declaration(node, source_bytes))
        return declarations

    def _build_declaration(self, node: Node, source_bytes: bytes) -> Declaration:
        kind = self._kind_for(node)
        name_node = node.child_by_field_name("name")
        declaration = Declaration(
            kind=kind,
            ident=_node_text(name_node, source_bytes) if name_node else "",
            span=self._item_span(node, source_bytes),
            public=self._is_public(node, source_bytes),
        )

        if kind is DeclarationKind.NAMESPACE:
            body = node.child_by_field_name("body")
            if body is not None:
                declaration.children = self._collect_items(body.children, source_bytes)
        elif kind is DeclarationKind.FUNCTION:
            body = node.child_by_field_name("body")
            if body is not None:
                declaration.body_span = self._node_span(body)
        elif kind is DeclarationKind.TRAIT:
            declaration.members = self._collect_methods(node, source_bytes)
        elif kind is DeclarationKind.IMPL:
            type_node = node.child_by_field_name("type")
            declaration.self_type = _node_text(type_node, source_bytes) if type_node else ""
            declaration.members = self._collect_methods(node, source_bytes)
        return declaration

    def _collect_methods(self, node: Node, source_bytes: bytes) -> List[Member]:
        body = node.child_by_field_name("body")
        if body is None:
            return []
        members: List[Member] = []
        for child in body.children:
            # Trait methods without a default body are function_signature_item.
            if child.type != "function_item":
                continue
            name_node = child.child_by_field_name("name")
            block = child.child_by_field_name("body")
            members.append(
                Member(
                    ident=_node_text(name_node, source_bytes) if name_node else "",
                    span=self._item_span(child, source_bytes),
                    body_span=self._node_span(block) if block is not None else None,
                )
            )
        return members

    @staticmethod
    def _kind_for(node: Node) -> DeclarationKind:
        if node.type == "expression_statement":
            inner = node.named_children[0] if node.named_children else None
            if inner is not None and inner.type == "macro_invocation":
                return DeclarationKind.MACRO
            return DeclarationKind.OTHER
        return _KIND_BY_NODE_TYPE.get(node.type, DeclarationKind.OTHER)

    @staticmethod
    def _is_public(node: Node, source_bytes: bytes) -> bool:
        for child in node.children:
            if child.type == "visibility_modifier":
                # pub(crate), pub(super) and pub(in path) are restricted.
                return _node_text(child, source_bytes).strip() == "pub"
        return False

    @staticmethod
    def _node_span(node: Node) -> Span:
        return Span(node.start_point[0] + 1, node.end_point[0] + 1)

    def _item_span(self, node: Node, source_bytes: bytes) -> Span:
        start_row = node.start_point[0]
        sibling = node.prev_sibling
        while sibling is not None:
            if sibling.type == "attribute_item" or _is_outer_doc_comment(sibling, source_bytes):
                start_row = sibling.start_point[0]
            elif sibling.type not in {"line_comment", "block_comment"}:
                break
            sibling = sibling.prev_sibling
        return Span(start_row + 1, node.end_point[0] + 1)


__all__ = ["ParseError", "RustParser", "rust_language"]
