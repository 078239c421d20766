"""
lore_engine/corpus.py -- Almanac entry corpus providers.

A provider aggregates ``EntryRef`` rows across every almanac category into
one ``CorpusSnapshot``.  A category that cannot be read is recorded in
``failed_categories`` and skipped; it never aborts the others.  This lets
callers tell "no conflicts found" apart from "the check could not run".

On-disk layout used by ``JsonCorpusProvider``::

    <root>/
        kingdoms.json      [{"id": "...", "name": "...", "slug": "..."}, ...]
        relics.json
        ...
        characters.json

Usage::

    from lore_engine.corpus import JsonCorpusProvider

    provider = JsonCorpusProvider("/path/to/almanac")
    snapshot = provider.load()              # or: await provider.fetch()
    if not snapshot.available:
        ...
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from pydantic import ValidationError

from lore_engine.models.base import EntryRef
from lore_engine.utils import safe_read_json

logger = logging.getLogger(__name__)

ALMANAC_CATEGORIES: tuple[str, ...] = (
    "kingdoms",
    "relics",
    "races",
    "titles",
    "locations",
    "magic",
    "concepts",
    "characters",
)


@dataclass(frozen=True)
class CorpusSnapshot:
    """A consistent, read-only view of the almanac at one point in time."""
    entries: tuple[EntryRef, ...] = ()
    failed_categories: tuple[str, ...] = ()
    requested_categories: tuple[str, ...] = ALMANAC_CATEGORIES

    @property
    def available(self) -> bool:
        """False when every requested category failed to load."""
        if not self.requested_categories:
            return True
        return len(self.failed_categories) < len(self.requested_categories)

    @property
    def complete(self) -> bool:
        return not self.failed_categories

    def by_category(self, category: str) -> list[EntryRef]:
        return [e for e in self.entries if e.category == category]


class EntryCorpusProvider(ABC):
    """Base class for corpus providers.

    Subclasses implement ``load()``.  ``fetch()`` is the awaitable form and
    runs ``load()`` in a worker thread so event-loop callers never block on
    disk or network reads.
    """

    @abstractmethod
    def load(self) -> CorpusSnapshot:
        """Return a consistent snapshot of every category this provider covers."""

    async def fetch(self) -> CorpusSnapshot:
        return await asyncio.to_thread(self.load)


class StaticCorpusProvider(EntryCorpusProvider):
    """Provider over an in-memory list of entries."""

    def __init__(
        self,
        entries: Iterable[EntryRef],
        failed_categories: Sequence[str] = (),
    ):
        self._entries = tuple(entries)
        self._failed = tuple(failed_categories)

    def load(self) -> CorpusSnapshot:
        requested = tuple(dict.fromkeys(
            [e.category for e in self._entries] + list(self._failed)
        ))
        return CorpusSnapshot(
            entries=self._entries,
            failed_categories=self._failed,
            requested_categories=requested,
        )


class JsonCorpusProvider(EntryCorpusProvider):
    """Reads one JSON list per category from a directory.

    Parameters
    ----------
    root : str or Path
        Directory holding ``<category>.json`` files.
    categories : sequence of str, optional
        Categories to read, in order.  Defaults to ``ALMANAC_CATEGORIES``.
    """

    def __init__(self, root: str | Path, categories: Sequence[str] | None = None):
        self.root = Path(root)
        self.categories = tuple(categories) if categories is not None else ALMANAC_CATEGORIES

    def _category_path(self, category: str) -> Path:
        return self.root / f"{category}.json"

    def _load_category(self, category: str) -> list[EntryRef] | None:
        """Return the entries for *category*, or ``None`` if it failed."""
        path = self._category_path(category)
        data = safe_read_json(path)
        if data is None:
            logger.warning("Could not read almanac category '%s' from %s", category, path)
            return None
        if not isinstance(data, list):
            logger.warning(
                "Almanac category '%s' in %s is not a list (got %s)",
                category, path, type(data).__name__,
            )
            return None

        entries: list[EntryRef] = []
        for i, row in enumerate(data):
            if not isinstance(row, dict) or not str(row.get("name") or "").strip():
                logger.debug("Skipping %s[%d]: no usable name", category, i)
                continue
            try:
                entries.append(EntryRef.model_validate({**row, "category": category}))
            except ValidationError as exc:
                logger.warning(
                    "Almanac category '%s' has an invalid row at index %d: %s",
                    category, i, exc.errors()[0].get("msg", "invalid"),
                )
                return None
        return entries

    def load(self) -> CorpusSnapshot:
        entries: list[EntryRef] = []
        failed: list[str] = []

        for category in self.categories:
            loaded = self._load_category(category)
            if loaded is None:
                failed.append(category)
                continue
            entries.extend(loaded)

        logger.info(
            "Loaded %d almanac entries from %d categories (%d failed)",
            len(entries), len(self.categories) - len(failed), len(failed),
        )
        return CorpusSnapshot(
            entries=tuple(entries),
            failed_categories=tuple(failed),
            requested_categories=self.categories,
        )
