"""
lore_engine/conflict_checker.py -- Near-duplicate name detection.

Checks a proposed lore name against a snapshot of existing almanac entries
and reports advisory conflicts:

    exact_duplicate / error    Normalized names are identical.
    near_duplicate / warning   Edit distance within the length threshold,
                               or one normalized name contains the other.

The check is a pure function of ``(proposed_name, corpus)``.  It performs
no I/O and keeps no state between calls; loading and caching the corpus is
the caller's job (see ``lore_engine.corpus`` and ``lore_engine.submission``).

Conflicts come back in corpus order, not sorted by distance or severity,
and are capped (5 by default).

Usage::

    from lore_engine.conflict_checker import check_conflicts

    conflicts = check_conflicts("Kaelan", corpus)
    for c in conflicts:
        print(c.severity, c.message)
"""

from __future__ import annotations

import logging
import re
from typing import Sequence

from lore_engine.config import DEFAULT_SETTINGS, ConflictSettings
from lore_engine.distance import DistanceFunc, levenshtein
from lore_engine.models.base import Conflict, EntryRef

logger = logging.getLogger(__name__)

_STRIP_PATTERN = re.compile(r"[^a-z0-9\s]")


def normalize(name: str) -> str:
    """Lowercase *name*, drop everything but ASCII letters, digits and
    whitespace, then trim.

    Trimming runs last so that punctuation sitting next to the outer
    whitespace cannot leave a dangling space behind; this keeps the
    function idempotent.

    Examples:
        "  Petronai  "     -> "petronai"
        "Kaelen's Rest!"   -> "kaelens rest"
        "Éowyn"            -> "owyn"
    """
    return _STRIP_PATTERN.sub("", name.lower()).strip()


class NameConflictDetector:
    """Classifies a proposed name against a corpus of existing entries.

    Parameters
    ----------
    settings : ConflictSettings, optional
        Thresholds and result cap.  Defaults to the stock settings.
    distance : callable, optional
        ``(a, b) -> int`` string metric.  Defaults to Levenshtein.
    """

    def __init__(
        self,
        settings: ConflictSettings | None = None,
        distance: DistanceFunc | None = None,
    ):
        self.settings = settings or DEFAULT_SETTINGS
        self._distance = distance or levenshtein

    def check(self, proposed_name: str, corpus: Sequence[EntryRef]) -> list[Conflict]:
        """Return up to ``max_results`` conflicts for *proposed_name*.

        Never raises for well-typed input: short names, empty corpora and
        names with nothing left after normalization all yield ``[]``.
        """
        if not proposed_name or len(proposed_name.strip()) < self.settings.min_name_length:
            return []
        if not corpus:
            return []

        settings = self.settings
        normalized_proposed = normalize(proposed_name)
        if not normalized_proposed:
            return []

        threshold = settings.threshold_for(len(normalized_proposed))
        found: list[Conflict] = []

        for entry in corpus:
            normalized_entry = normalize(entry.name)

            if normalized_proposed == normalized_entry:
                found.append(Conflict(
                    kind="exact_duplicate",
                    matched_name=entry.name,
                    matched_category=entry.category,
                    severity="error",
                    message=f'"{entry.name}" already exists in {entry.category}',
                ))
                continue

            distance = self._distance(normalized_proposed, normalized_entry)
            if 0 < distance <= threshold:
                found.append(Conflict(
                    kind="near_duplicate",
                    matched_name=entry.name,
                    matched_category=entry.category,
                    severity="warning",
                    message=f'Similar to "{entry.name}" in {entry.category}',
                ))

            if (
                len(normalized_proposed) >= settings.overlap_min_length
                and len(normalized_entry) >= settings.overlap_min_length
                and (
                    normalized_entry in normalized_proposed
                    or normalized_proposed in normalized_entry
                )
                and not any(c.matched_name == entry.name for c in found)
            ):
                found.append(Conflict(
                    kind="near_duplicate",
                    matched_name=entry.name,
                    matched_category=entry.category,
                    severity="warning",
                    message=f'Name overlaps with "{entry.name}" in {entry.category}',
                ))

        if len(found) > settings.max_results:
            logger.debug(
                "%d conflicts for %r, keeping the first %d",
                len(found), proposed_name, settings.max_results,
            )
        return found[:settings.max_results]


_default_detector = NameConflictDetector()


def check_conflicts(proposed_name: str, corpus: Sequence[EntryRef]) -> list[Conflict]:
    """Check *proposed_name* against *corpus* with the default settings."""
    return _default_detector.check(proposed_name, corpus)
