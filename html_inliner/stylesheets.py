"""CSS rewriting helpers that keep image URLs valid once stylesheets are inlined."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List, Tuple, Union

import tinycss2

from .files import relative_path, resolve_path
from .models import SourceRef
from .utils import CSS_URL_PATTERN, is_local_reference

logger = logging.getLogger("html_inliner")

# At-rules whose block holds rules rather than declarations.
_RULE_LIST_AT_RULES = {
    "media",
    "supports",
    "document",
    "-moz-document",
    "layer",
    "container",
    "scope",
    "starting-style",
}


def _holds_rule_list(at_keyword: str) -> bool:
    return at_keyword in _RULE_LIST_AT_RULES or at_keyword.endswith("keyframes")


def is_rewritable(name: str, value: str) -> bool:
    """Decide whether a declaration may carry an image URL worth re-basing."""
    return name.startswith("background") or (
        name.startswith("border-image") and "url" in value
    )


class StylesheetRewriter:
    """Re-base relative ``url()`` references from a stylesheet onto the document.

    ``base_dir`` is the stylesheet's directory relative to ``base_path``, the
    directory of the HTML document the stylesheet is being inlined into.
    """

    def __init__(self, base_path: Union[str, Path], base_dir: str) -> None:
        self.base_path = Path(base_path)
        self.base_dir = base_dir

    def rewrite(self, css: str) -> str:
        tokens = tinycss2.parse_component_value_list(css, skip_comments=False)
        return self._serialize_rule_list(tokens)

    def rewrite_value(self, name: str, value: str) -> str:
        """Return ``value`` with its first local ``url()`` re-based, if eligible."""
        if not is_rewritable(name, value):
            return value
        match = CSS_URL_PATTERN.search(value)
        if not match or not is_local_reference(match.group(1)):
            return value
        target = resolve_path(self.base_path, Path(self.base_dir) / match.group(1))
        url = relative_path(self.base_path, target)
        logger.debug("Rewrote %s url %s -> %s", name, match.group(1), url)
        return CSS_URL_PATTERN.sub(lambda _: f"url({url})", value, count=1)

    def _serialize_rule_list(self, tokens) -> str:
        parts = []
        for segment in _split_rules(tokens):
            nodes = tinycss2.parse_rule_list(
                segment, skip_comments=False, skip_whitespace=False
            )
            if _has_errors(nodes):
                logger.debug("Keeping unparseable CSS rule as written")
                parts.append(tinycss2.serialize(segment))
            else:
                parts.append("".join(self._serialize_node(node) for node in nodes))
        return "".join(parts)

    def _serialize_block(self, tokens) -> str:
        parts = []
        for segment, terminated in _split_declarations(tokens):
            parts.append(self._serialize_segment(segment))
            if terminated:
                parts.append(";")
        return "".join(parts)

    def _serialize_segment(self, segment) -> str:
        """Serialize one ``;``-delimited slice of a block.

        The slice is written back token for token unless it holds a rewritten
        declaration or a nested rule.
        """
        nodes = tinycss2.parse_blocks_contents(
            segment, skip_comments=False, skip_whitespace=False
        )
        if _has_errors(nodes):
            return tinycss2.serialize(segment)
        changed = False
        parts = []
        for node in nodes:
            if node.type == "declaration":
                value = tinycss2.serialize(node.value)
                rewritten = self.rewrite_value(node.name, value)
                if rewritten == value:
                    parts.append(node.serialize())
                    continue
                changed = True
                important = "!important" if node.important else ""
                parts.append(f"{node.name}:{rewritten}{important}")
            elif node.type == "qualified-rule" or (
                node.type == "at-rule" and node.content is not None
            ):
                changed = True
                parts.append(self._serialize_node(node))
            else:
                parts.append(node.serialize())
        if not changed:
            return tinycss2.serialize(segment)
        return "".join(parts)

    def _serialize_node(self, node) -> str:
        if node.type == "qualified-rule":
            return (
                tinycss2.serialize(node.prelude)
                + "{"
                + self._serialize_block(node.content)
                + "}"
            )
        if node.type == "at-rule":
            return self._serialize_at_rule(node)
        return node.serialize()

    def _serialize_at_rule(self, rule) -> str:
        head = "@" + rule.at_keyword + tinycss2.serialize(rule.prelude)
        if rule.content is None:
            return head + ";"
        if _holds_rule_list(rule.lower_at_keyword):
            body = self._serialize_rule_list(rule.content)
        else:
            body = self._serialize_block(rule.content)
        return head + "{" + body + "}"


def _has_errors(nodes) -> bool:
    return any(node.type == "error" for node in nodes)


def _split_rules(tokens) -> Iterator[list]:
    """Yield token slices holding at most one rule each.

    A qualified rule ends with its ``{}`` block, an at-rule with its block or
    a ``;``.
    """
    segment: list = []
    at_rule = None
    for token in tokens:
        segment.append(token)
        if at_rule is None and token.type not in ("whitespace", "comment"):
            at_rule = token.type == "at-keyword"
        if token.type == "{} block" or (
            at_rule and token.type == "literal" and token.value == ";"
        ):
            yield segment
            segment = []
            at_rule = None
    if segment:
        yield segment


def _split_declarations(tokens) -> Iterator[Tuple[list, bool]]:
    """Split block contents at top-level ``;``, flagging terminated slices."""
    segment: list = []
    for token in tokens:
        if token.type == "literal" and token.value == ";":
            yield segment, True
            segment = []
        else:
            segment.append(token)
    if segment:
        yield segment, False


def rewrite_stylesheet(css: str, base_path: Union[str, Path], base_dir: str) -> str:
    """Rewrite background and border-image URLs in ``css`` relative to ``base_path``."""
    return StylesheetRewriter(base_path, base_dir).rewrite(css)


def combine_stylesheets(refs: List[SourceRef], base_path: Union[str, Path]) -> str:
    """Rewrite and concatenate stylesheets in document order."""
    return "".join(
        rewrite_stylesheet(ref.raw_content, base_path, ref.base_dir) for ref in refs
    )


def combine_scripts(refs: List[SourceRef]) -> str:
    return "".join(ref.raw_content for ref in refs)
