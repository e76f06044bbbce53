"""
Shared utility functions for the ResX resource engine.

All file writes use atomic temp-file-then-os.replace() so that a crash in
the middle of saving never leaves a half-written resource file behind.
"""

import json
import logging
import os
import tempfile

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------

def safe_read_json(path, default=None):
    """Read a JSON file, returning *default* if the file is missing or corrupt.

    Parameters
    ----------
    path : str or pathlib.Path
        Absolute path to the JSON file.
    default
        Value returned when the file cannot be read (default ``None``).

    Returns
    -------
    object
        Parsed JSON content, or *default* on failure.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return default


def safe_write_json(path, data, *, indent=2):
    """Atomically write *data* as JSON to *path*."""
    safe_write_bytes(
        path,
        json.dumps(data, indent=indent, ensure_ascii=False).encode("utf-8"),
    )


# ---------------------------------------------------------------------------
# Raw I/O (atomic writes)
# ---------------------------------------------------------------------------

def safe_write_bytes(path, payload: bytes) -> None:
    """Atomically write *payload* to *path*.

    Uses a temporary file in the same directory followed by
    ``os.replace()`` so that readers never see a partially-written file.
    Parent directories are created if they do not exist.

    Parameters
    ----------
    path : str or pathlib.Path
        Absolute path to the target file.
    payload : bytes
        The complete file content.
    """
    path = str(path)
    parent = os.path.dirname(path)
    os.makedirs(parent, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(payload)
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up the temp file on any failure.
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
    logger.debug("Wrote %d bytes to %s", len(payload), path)


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

def to_forward_slashes(path: str) -> str:
    """Normalise Windows separators so paths compare the same on every OS."""
    return path.replace("\\", "/")


def fold_case(text: str) -> str:
    """Upper-case *text* one character at a time, keeping its length.

    Characters whose upper case expands (``"ß"`` -> ``"SS"``) are kept as
    they are, so ``"Straße"`` and ``"STRASSE"`` stay different keys.
    """
    return "".join(c.upper() if len(c.upper()) == 1 else c for c in text)
