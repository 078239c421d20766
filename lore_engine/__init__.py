"""
lore_engine -- Name-conflict checking for the ThouArt lore almanac.

Submodules:
    conflict_checker    Exact and near-duplicate detection for proposed names.
    distance            Levenshtein edit distance.
    corpus              Providers that aggregate entries across categories.
    references          ``[[reference]]`` parsing for almanac articles.
    submission          Proposal submission flow built on the checker.
    config              Thresholds and submission policy.
"""

from lore_engine.conflict_checker import NameConflictDetector, check_conflicts, normalize
from lore_engine.distance import levenshtein
from lore_engine.models import Conflict, EntryRef

__all__ = [
    "Conflict",
    "EntryRef",
    "NameConflictDetector",
    "check_conflicts",
    "levenshtein",
    "normalize",
]
