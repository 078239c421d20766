"""
Shared utility functions for the lore engine.

JSON reads never raise for missing or corrupt files; callers decide what a
missing file means.  JSONL appends are a single ``write`` call followed by
``fsync`` so a crash never leaves half a record behind.
"""

import json
import logging
import os
import re
import unicodedata

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------

def safe_read_json(path, default=None):
    """Read a JSON file, returning *default* if the file is missing or corrupt.

    Parameters
    ----------
    path : str or pathlib.Path
        Path to the JSON file, absolute or relative to the working directory.
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
    except (FileNotFoundError, json.JSONDecodeError, OSError, UnicodeDecodeError):
        return default


def safe_append_jsonl(path, record):
    """Append a single JSON record to a JSONL (JSON Lines) file.

    Parameters
    ----------
    path : str or pathlib.Path
        Path to the JSONL file.  A bare filename is written in the working
        directory; any missing parent directories are created.
    record
        JSON-serialisable object to append as one line.
    """
    path = str(path)
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    line = json.dumps(record, ensure_ascii=False) + "\n"
    with open(path, "a", encoding="utf-8") as fh:
        fh.write(line)
        fh.flush()
        os.fsync(fh.fileno())


def read_jsonl(path) -> list:
    """Read every well-formed record from a JSONL file.

    Blank and corrupt lines are skipped (logged at debug level).  A missing
    file yields an empty list.
    """
    records = []
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for lineno, line in enumerate(fh, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    records.append(json.loads(line))
                except json.JSONDecodeError:
                    logger.debug("Skipping corrupt line %d in %s", lineno, path)
    except FileNotFoundError:
        return []
    return records


# ---------------------------------------------------------------------------
# Slugs
# ---------------------------------------------------------------------------

def slugify(text: str) -> str:
    """Convert a human-readable name to a URL-friendly slug.

    Examples:
        "Petronai"          -> "petronai"
        "Shadowfen Marsh"   -> "shadowfen-marsh"
        "Kaelen's Rest"     -> "kaelens-rest"
    """
    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")
    text = text.lower()
    # Apostrophes join words rather than splitting them
    text = text.replace("'", "")
    text = re.sub(r"[^a-z0-9]+", "-", text)
    text = re.sub(r"-+", "-", text).strip("-")
    return text
