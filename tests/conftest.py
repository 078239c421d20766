"""
Shared pytest fixtures for the lore engine test suite.

Provides:
    - sample_entry_rows: raw almanac rows keyed by category, as stored on disk
    - sample_corpus: the same rows as a flat list of EntryRef
    - almanac_dir: a temporary directory with one <category>.json per category
    - proposals_path: a temporary JSONL path for stored proposals
"""

import json
import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Ensure lore_engine/ is importable regardless of where pytest is invoked
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from lore_engine.corpus import ALMANAC_CATEGORIES  # noqa: E402
from lore_engine.models.base import EntryRef  # noqa: E402


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_entry_rows():
    """Return almanac rows per category, in ALMANAC_CATEGORIES order.

    Not every category has rows; empty categories are still valid files.
    """
    return {
        "kingdoms": [
            {"id": "k1", "name": "Ember Throne", "slug": "ember-throne"},
            {"id": "k2", "name": "Valdris", "slug": "valdris"},
        ],
        "relics": [
            {"id": "r1", "name": "Crown of Ash", "slug": "crown-of-ash"},
        ],
        "races": [
            {"id": "ra1", "name": "Shadowkin", "slug": "shadowkin"},
        ],
        "titles": [],
        "locations": [
            {"id": "l1", "name": "Shadowfen Marsh", "slug": "shadowfen-marsh"},
            {"id": "l2", "name": "Thornwall"},
        ],
        "magic": [
            {"id": "m1", "name": "Veilweaving", "slug": "veilweaving"},
        ],
        "concepts": [],
        "characters": [
            {"id": "c1", "name": "Petronai", "slug": "petronai"},
            {"id": "c2", "name": "Kaelen", "slug": "kaelen"},
        ],
    }


@pytest.fixture
def sample_corpus(sample_entry_rows):
    """Flatten sample_entry_rows into EntryRef objects."""
    corpus = []
    for category in ALMANAC_CATEGORIES:
        for row in sample_entry_rows.get(category, []):
            corpus.append(EntryRef(category=category, **row))
    return corpus


@pytest.fixture
def almanac_dir(tmp_path, sample_entry_rows):
    """Write sample_entry_rows to <tmp>/almanac/<category>.json and return the dir."""
    root = tmp_path / "almanac"
    root.mkdir()
    for category, rows in sample_entry_rows.items():
        with open(root / f"{category}.json", "w", encoding="utf-8") as fh:
            json.dump(rows, fh, indent=2)
    return root


@pytest.fixture
def proposals_path(tmp_path):
    return tmp_path / "proposals.jsonl"
