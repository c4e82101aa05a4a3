"""Image embedding helpers producing base64 ``data:`` URIs."""

from __future__ import annotations

import base64
import logging
from pathlib import Path
from typing import Optional, Union

import filetype

from .config import InlineConfig
from .files import mime_type_of, read_bytes, resolve_path
from .models import HtmlDocument

logger = logging.getLogger("html_inliner")

FALLBACK_MIME_TYPE = "application/octet-stream"


def detect_mime_type(path: Union[str, Path], data: bytes) -> str:
    """Guess a MIME type from the extension, falling back to the file signature."""
    mime_type: Optional[str] = mime_type_of(path)
    if mime_type:
        return mime_type
    sniffed = filetype.guess_mime(data)
    if sniffed:
        return sniffed
    return FALLBACK_MIME_TYPE


def data_uri(path: Union[str, Path]) -> str:
    """Read ``path`` and return it as a base64 ``data:`` URI."""
    data = read_bytes(path)
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{detect_mime_type(path, data)};base64,{encoded}"


def embed_images(document: HtmlDocument, config: InlineConfig) -> int:
    """Replace the source of every marked ``<img>`` with its ``data:`` URI.

    The marker attribute is removed from each image. A missing file aborts
    the run. Returns the number of images embedded.
    """
    attribute = config.embed_attribute
    embedded = 0
    for img in document.soup.find_all("img", attrs={attribute: True}):
        del img[attribute]
        src = img.get("src")
        if not src:
            logger.warning("Image marked with %s has no src; leaving it as-is", attribute)
            continue
        img["src"] = data_uri(resolve_path(document.base_path, src))
        logger.debug("Embedded image %s", src)
        embedded += 1
    return embedded
