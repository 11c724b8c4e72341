"""
Path and URI normalization so one physical file always maps to one index key.
"""

import os
import re
from typing import Final
from urllib.parse import quote, unquote

FILE_SCHEME: Final[str] = "file://"

# Characters left unescaped in canonical keys
_SAFE_CHARS: Final[str] = "/:@!$&'()*+,;=-._~"
_DRIVE_PREFIX = re.compile(r"^((?:file:)?/*)([A-Za-z]):(?=/|$)")
_SLASHED_DRIVE = re.compile(r"^/[A-Za-z]:")


def normalize_uri(raw: str) -> str:
    """
    Canonicalize a file identifier.

    Percent-escapes are decoded, a leading drive letter is lower-cased and
    backslashes become forward slashes. The result is re-escaped with a fixed
    safe set, so normalizing twice gives the same key.

    Args:
        raw: URI or path as received from a client or built from disk

    Returns:
        Normalized identifier used as index key
    """
    decoded = unquote(raw).replace("\\", "/")
    decoded = _DRIVE_PREFIX.sub(lambda m: m.group(1) + m.group(2).lower() + ":", decoded)
    return quote(decoded, safe=_SAFE_CHARS)


def path_to_uri(path: str) -> str:
    """Build the normalized file URI for a path on disk."""
    absolute = os.path.abspath(path).replace("\\", "/")
    if not absolute.startswith("/"):
        absolute = "/" + absolute
    # '%' in a file name stays literal in the key
    return normalize_uri(FILE_SCHEME + quote(absolute, safe=_SAFE_CHARS))


def uri_to_path(uri: str) -> str:
    """Map a file URI (or plain path) back to a host path."""
    decoded = unquote(uri)
    if decoded.startswith("file:"):
        decoded = decoded[len("file:"):]
        # Empty authority for local files
        if decoded.startswith("//"):
            decoded = decoded[2:]
    if _SLASHED_DRIVE.match(decoded):
        decoded = decoded[1:]
    return os.path.normpath(decoded)
