"""
lore_engine/references.py -- ``[[reference]]`` links in almanac articles.

Article text may name other entries inline::

    "He fought [[Petronai]] in the great battle"

``parse_references`` splits such text into plain-text and reference
segments and resolves each reference against the corpus, case-insensitively
on the entry name or on its slug.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Sequence

from lore_engine.models.base import EntryRef

REFERENCE_PATTERN = re.compile(r"\[\[([^\]]+)\]\]")


@dataclass(frozen=True)
class Segment:
    """One piece of parsed article text."""
    kind: Literal["text", "reference"]
    text: str
    entry: EntryRef | None = None
    is_self: bool = False

    @property
    def resolved(self) -> bool:
        return self.entry is not None


def resolve_reference(name: str, entries: Sequence[EntryRef]) -> EntryRef | None:
    """Return the first entry whose name or slug matches *name*."""
    lowered = name.lower()
    as_slug = re.sub(r"\s+", "-", lowered)
    for entry in entries:
        if entry.name.lower() == lowered or entry.slug.lower() == as_slug:
            return entry
    return None


def parse_references(
    content: str,
    entries: Sequence[EntryRef],
    current_entry_id: str | None = None,
) -> list[Segment]:
    """Split *content* into text and reference segments.

    A reference that points at ``current_entry_id`` is marked ``is_self``
    so renderers can show it without a link.
    """
    if not content:
        return []

    segments: list[Segment] = []
    last_index = 0

    for match in REFERENCE_PATTERN.finditer(content):
        if match.start() > last_index:
            segments.append(Segment("text", content[last_index:match.start()]))

        name = match.group(1).strip()
        entry = resolve_reference(name, entries)
        segments.append(Segment(
            "reference",
            name,
            entry=entry,
            is_self=entry is not None and entry.id == current_entry_id,
        ))
        last_index = match.end()

    if last_index < len(content):
        segments.append(Segment("text", content[last_index:]))

    return segments


def find_unresolved(content: str, entries: Sequence[EntryRef]) -> list[str]:
    """Return reference names in *content* that match no entry, in order."""
    return [
        s.text for s in parse_references(content, entries)
        if s.kind == "reference" and not s.resolved
    ]


def entry_link(entry: EntryRef) -> str:
    return f"/almanac/{entry.category}?entry={entry.slug}"


def render_plain(segments: Sequence[Segment]) -> str:
    """Join segments back into text with the ``[[ ]]`` markers removed."""
    return "".join(s.text for s in segments)
