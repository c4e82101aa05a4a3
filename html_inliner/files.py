"""File-system helpers used by the inliner: reading, writing and path checks."""

from __future__ import annotations

import errno
import logging
import mimetypes
import os
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger("html_inliner")

PathLike = Union[str, os.PathLike]

_BOM = "\ufeff"


class FileError(OSError):
    """Raised when a file cannot be read or written."""


def _error_code(exc: OSError) -> str:
    if exc.errno is None:
        return type(exc).__name__
    return errno.errorcode.get(exc.errno, str(exc.errno))


def read_bytes(path: PathLike) -> bytes:
    """Return the raw contents of ``path``."""
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise FileError(
            f'Unable to read "{path}" file (Error code: {_error_code(exc)}).'
        ) from exc


def read_text(path: PathLike, encoding: str = "utf-8") -> str:
    """Decode ``path`` with ``encoding`` and strip a leading byte order mark."""
    data = read_bytes(path)
    try:
        contents = data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        raise FileError(f'Unable to read "{path}" file ({exc}).') from exc
    if contents.startswith(_BOM):
        contents = contents[1:]
    return contents


def write_text(path: PathLike, content: str, encoding: str = "utf-8") -> Path:
    """Write ``content`` to ``path``, creating parent directories as needed."""
    destination = Path(path)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps the bytes on disk identical to ``content``.
        with destination.open("w", encoding=encoding, newline="") as handle:
            handle.write(content)
    except OSError as exc:
        raise FileError(
            f'Unable to write "{path}" file (Error code: {_error_code(exc)}).'
        ) from exc
    logger.debug("Wrote %d characters to %s", len(content), destination)
    return destination


def resolve_path(base: PathLike, relative: PathLike) -> Path:
    """Join ``relative`` onto ``base``; an absolute ``relative`` is returned as-is."""
    return Path(base) / relative


def relative_path(start: PathLike, target: PathLike) -> str:
    """Return the normalized path from ``start`` to ``target`` using ``/``."""
    relative = os.path.relpath(os.path.normpath(target), os.path.normpath(start))
    return Path(relative).as_posix()


def mime_type_of(path: PathLike) -> Optional[str]:
    """Look up a MIME type from the file extension of ``path``."""
    mime_type, _ = mimetypes.guess_type(str(path), strict=False)
    return mime_type


def are_paths_equivalent(first: PathLike, *others: PathLike) -> bool:
    """Return True if every path resolves to the same location as ``first``."""
    resolved = Path(os.path.abspath(first))
    return all(Path(os.path.abspath(other)) == resolved for other in others)


def does_path_contain(ancestor: PathLike, *paths: PathLike) -> bool:
    """Return True if every path lies strictly inside ``ancestor``.

    The check is lexical; none of the paths need to exist.
    """
    root = Path(os.path.abspath(ancestor))
    for path in paths:
        candidate = Path(os.path.abspath(path))
        if candidate == root or root not in candidate.parents:
            return False
    return True
