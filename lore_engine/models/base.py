"""
lore_engine/models/base.py -- Core value types for almanac name checking.

    EntryRef    One existing almanac entry as seen by the checker.
    Conflict    One advisory finding produced for a proposed name.

Both are frozen: the corpus provider owns ``EntryRef`` instances and the
detector only reads them; ``Conflict`` objects are produced per call and
discarded after display.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from lore_engine.utils import slugify

ConflictKind = Literal["exact_duplicate", "near_duplicate"]
Severity = Literal["error", "warning"]


class EntryRef(BaseModel):
    """Snapshot of an existing named lore entity.

    ``slug`` is optional in stored rows; when absent it is derived from the
    name so reference links always have a target.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    id: str
    name: str
    category: str
    slug: str = Field(default="", validate_default=True)

    @field_validator("slug", mode="after")
    @classmethod
    def _default_slug(cls, value: str, info: ValidationInfo) -> str:
        if value:
            return value
        return slugify(info.data.get("name") or "")


class Conflict(BaseModel):
    """A potential naming conflict between a proposed name and an entry."""

    model_config = ConfigDict(frozen=True)

    kind: ConflictKind
    matched_name: str
    matched_category: str
    severity: Severity
    message: str

    @property
    def is_blocking(self) -> bool:
        """True for exact duplicates, which submission may refuse."""
        return self.severity == "error"
