"""Utility helpers for classifying references found in documents."""

from __future__ import annotations

import re

# Matches path-absolute and scheme-qualified references. ``data:`` has no
# ``//`` and is therefore treated as local.
ABSOLUTE_PATTERN = re.compile(r"^(?:/|[a-z]+://)")
CSS_URL_PATTERN = re.compile(r"url\(['\"]?([^)'\"]+)['\"]?\)")


def is_local_reference(value: str) -> bool:
    """Return True when ``value`` must be resolved against a base directory."""
    return not ABSOLUTE_PATTERN.match(value)
