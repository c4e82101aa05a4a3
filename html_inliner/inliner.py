"""High-level orchestration: collect, rewrite, embed, minify and save."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import minify_html
from bs4 import BeautifulSoup, Tag

from .config import InlineConfig
from .content import collect_scripts, collect_stylesheets, load_document
from .files import resolve_path, write_text
from .images import embed_images
from .models import HtmlDocument, InlineResult
from .stylesheets import combine_scripts, combine_stylesheets

logger = logging.getLogger("html_inliner")


def _ensure_section(soup: BeautifulSoup, name: str) -> Tag:
    """Return ``<head>`` or ``<body>``, creating it when the source omitted it."""
    section = soup.find(name)
    if section is not None:
        return section
    section = soup.new_tag(name)
    container = soup.html or soup
    if name == "head":
        container.insert(0, section)
    else:
        container.append(section)
    return section


def append_inline_assets(document: HtmlDocument, css: str, js: str) -> None:
    """Append the combined CSS to ``<head>`` and the combined JS to ``<body>``."""
    soup = document.soup
    if css:
        style = soup.new_tag("style")
        style.string = css
        _ensure_section(soup, "head").append(style)
    if js:
        script = soup.new_tag("script")
        script.string = js
        _ensure_section(soup, "body").append(script)


def minify_markup(markup: str, config: InlineConfig) -> str:
    """Minify serialized HTML along with its inline scripts and styles."""
    if not config.minify:
        return markup
    return minify_html.minify(
        markup,
        keep_comments=not config.remove_comments,
        keep_closing_tags=True,
        keep_html_and_head_opening_tags=True,
        minify_css=config.minify_css,
        minify_js=config.minify_js,
    )


def inline_document(
    source_path: Union[str, Path],
    dest_path: Optional[Union[str, Path]] = None,
    config: Optional[InlineConfig] = None,
) -> InlineResult:
    """Inline local scripts, stylesheets and marked images of an HTML file.

    ``dest_path`` is resolved against the source file's directory. The
    returned result carries the minified markup together with the collected
    references and any scripts that had to be skipped.
    """
    config = config or InlineConfig()
    document = load_document(source_path, config)

    scripts, warnings = collect_scripts(document, config)
    stylesheets = collect_stylesheets(document, config)

    css = combine_stylesheets(stylesheets, document.base_path)
    js = combine_scripts(scripts)
    append_inline_assets(document, css, js)
    embedded = embed_images(document, config)

    html = minify_markup(document.soup.decode(), config)
    logger.debug(
        "Inlined %d scripts, %d stylesheets and %d images from %s",
        len(scripts),
        len(stylesheets),
        embedded,
        document.source_path,
    )

    output_path = None
    if dest_path is not None:
        output_path = write_text(
            resolve_path(document.base_path, dest_path), html, config.encoding
        )
        logger.info("Saved inlined HTML to %s", output_path)

    return InlineResult(
        html=html,
        scripts=scripts,
        stylesheets=stylesheets,
        embedded_images=embedded,
        warnings=warnings,
        output_path=output_path,
    )


def inline_html(
    source_path: Union[str, Path],
    dest_path: Optional[Union[str, Path]] = None,
    config: Optional[InlineConfig] = None,
) -> str:
    """Return the minified, self-contained markup for ``source_path``."""
    return inline_document(source_path, dest_path, config).html
