"""Command-line entry point for the HTML inliner."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

from .config import DEFAULT_EMBED_ATTRIBUTE, DEFAULT_PARSER, PARSERS, InlineConfig
from .files import FileError, does_path_contain, resolve_path
from .inliner import inline_document

logger = logging.getLogger("html_inliner.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Inline local scripts, stylesheets and marked images of an HTML page "
            "into a single minified document."
        ),
    )
    parser.add_argument("source", type=Path, help="HTML file to bundle")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Where to write the result, relative to the source file's directory "
        "(default: print to STDOUT)",
    )
    parser.add_argument(
        "--embed-attribute",
        default=DEFAULT_EMBED_ATTRIBUTE,
        help="Attribute marking <img> elements to embed as data URIs",
    )
    parser.add_argument(
        "--parser",
        choices=PARSERS,
        default=DEFAULT_PARSER,
        help="BeautifulSoup tree builder; html5lib keeps SVG attribute case such as viewBox",
    )
    parser.add_argument(
        "--no-minify",
        action="store_true",
        help="Write the serialized document without minifying it",
    )
    parser.add_argument(
        "--keep-comments",
        action="store_true",
        help="Keep HTML comments when minifying",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Allow writing outside the source file's directory",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = InlineConfig(
        embed_attribute=args.embed_attribute,
        parser=args.parser,
        minify=not args.no_minify,
        remove_comments=not args.keep_comments,
    )

    if args.output is not None and not args.force:
        base_path = args.source.parent
        if not does_path_contain(base_path, resolve_path(base_path, args.output)):
            logger.error(
                "Refusing to write %s outside %s (use --force)",
                args.output,
                base_path.resolve(),
            )
            return 2

    start = time.perf_counter()
    try:
        result = inline_document(args.source, args.output, config)
    except FileError as exc:
        logger.error("%s", exc)
        return 1
    elapsed = time.perf_counter() - start

    logger.debug(
        "Finished in %.2fs (%d scripts, %d stylesheets, %d images, %d warnings)",
        elapsed,
        len(result.scripts),
        len(result.stylesheets),
        result.embedded_images,
        len(result.warnings),
    )

    if result.output_path is None:
        sys.stdout.write(result.html)
        sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
