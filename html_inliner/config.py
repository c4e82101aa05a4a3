"""Configuration objects and constants for the inliner."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_EMBED_ATTRIBUTE = "rome-embed"
DEFAULT_PARSER = "html.parser"
# "html.parser" lowercases attribute names (SVG viewBox becomes viewbox);
# "html5lib" keeps the SVG and MathML spelling.
PARSERS = ("html.parser", "html5lib")


@dataclass
class InlineConfig:
    """Settings that control asset collection, embedding and minification."""

    embed_attribute: str = DEFAULT_EMBED_ATTRIBUTE
    encoding: str = "utf-8"
    parser: str = DEFAULT_PARSER
    minify: bool = True
    remove_comments: bool = True
    minify_js: bool = True
    minify_css: bool = True
