"""Document loading and collection of local script and stylesheet references."""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path
from typing import List, Tuple, Union

from bs4 import BeautifulSoup

from .config import InlineConfig
from .files import FileError, read_text, resolve_path
from .models import SCRIPT, STYLESHEET, HtmlDocument, SourceRef
from .utils import is_local_reference

logger = logging.getLogger("html_inliner")


def load_document(source_path: Union[str, Path], config: InlineConfig) -> HtmlDocument:
    """Read and parse the source HTML file into a mutable document handle."""
    source_path = Path(source_path)
    html = read_text(source_path, config.encoding)
    soup = BeautifulSoup(html, config.parser)
    logger.debug("Loaded %s (%d characters)", source_path, len(html))
    return HtmlDocument(soup=soup, source_path=source_path, base_path=source_path.parent)


def collect_scripts(
    document: HtmlDocument, config: InlineConfig
) -> Tuple[List[SourceRef], List[str]]:
    """Remove local ``<script src>`` tags and read their sources.

    Unreadable scripts are skipped with a warning; their tags stay removed.
    """
    refs: List[SourceRef] = []
    warnings: List[str] = []
    for tag in document.soup.select("script[src]"):
        src = tag["src"]
        if not is_local_reference(src):
            continue
        tag.decompose()
        try:
            content = read_text(resolve_path(document.base_path, src), config.encoding)
        except FileError as exc:
            logger.warning("Skipping script %s: %s", src, exc)
            warnings.append(str(exc))
            continue
        refs.append(
            SourceRef(
                kind=SCRIPT,
                href=src,
                raw_content=content,
                base_dir=posixpath.dirname(src),
            )
        )
    return refs, warnings


def collect_stylesheets(document: HtmlDocument, config: InlineConfig) -> List[SourceRef]:
    """Remove local stylesheet links and read their sources.

    A stylesheet that cannot be read aborts the run.
    """
    refs: List[SourceRef] = []
    for tag in document.soup.select('link[rel="stylesheet"][href]'):
        href = tag["href"]
        if not is_local_reference(href):
            continue
        tag.decompose()
        content = read_text(resolve_path(document.base_path, href), config.encoding)
        logger.debug("Collected stylesheet %s", href)
        refs.append(
            SourceRef(
                kind=STYLESHEET,
                href=href,
                raw_content=content,
                base_dir=posixpath.dirname(href),
            )
        )
    return refs
