"""
lore_engine/paths.py -- Default locations for engine data.

Uses platformdirs for the per-user data directory.  Every path can be
overridden by the caller; these are only the fallbacks the CLI uses.
Resolving a path never creates anything; writers create parents on demand.
"""

from __future__ import annotations

import os

from platformdirs import user_data_dir

_APP_NAME = "LoreEngine"
_APP_AUTHOR = "ThouArt"


def get_user_data_dir() -> str:
    """Return the platform-appropriate user data directory."""
    return user_data_dir(_APP_NAME, _APP_AUTHOR)


def get_corpus_dir() -> str:
    """Directory holding one ``<category>.json`` file per almanac category."""
    return os.path.join(get_user_data_dir(), "almanac")


def get_proposals_path() -> str:
    """JSONL file that accepted proposals are appended to."""
    return os.path.join(get_user_data_dir(), "proposals.jsonl")


def get_settings_path() -> str:
    return os.path.join(get_user_data_dir(), "settings.json")
