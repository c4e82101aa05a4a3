"""Data models used throughout the inlining pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from bs4 import BeautifulSoup

SCRIPT = "script"
STYLESHEET = "stylesheet"


@dataclass
class HtmlDocument:
    """Parsed source document owned by a single pipeline invocation."""

    soup: BeautifulSoup
    source_path: Path
    base_path: Path


@dataclass
class SourceRef:
    """Content of a script or stylesheet removed from the document."""

    kind: str
    href: str
    raw_content: str
    base_dir: str


@dataclass
class InlineResult:
    """Minified markup along with what was inlined and what was skipped."""

    html: str
    scripts: List[SourceRef] = field(default_factory=list)
    stylesheets: List[SourceRef] = field(default_factory=list)
    embedded_images: int = 0
    warnings: List[str] = field(default_factory=list)
    output_path: Optional[Path] = None
