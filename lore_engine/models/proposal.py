"""
lore_engine/models/proposal.py -- Community lore proposals.

A proposal is what a member submits for Loremaster review: a titled
suggestion for a new race, location, item, faction, ability or concept.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ProposalCategory = Literal["race", "location", "item", "faction", "ability", "concept"]
ProposalStatus = Literal["pending", "approved", "rejected"]

PROPOSAL_CATEGORIES: tuple[str, ...] = (
    "race", "location", "item", "faction", "ability", "concept",
)

# Fields that must hold non-blank text before a proposal can be submitted.
REQUIRED_FIELDS: tuple[str, ...] = ("title", "category", "name", "description")


def _now_iso() -> str:
    """Return the current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


class LoreProposal(BaseModel):
    """A member's proposed addition to the almanac.

    Blank strings are accepted here; the submission flow reports them as
    field-level issues instead of raising, matching how the proposal form
    highlights missing fields.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: str = ""
    category: ProposalCategory | Literal[""] = ""
    name: str = ""
    description: str = ""
    details: str = ""
    status: ProposalStatus = "pending"
    created_at: str = Field(default_factory=_now_iso)

    def missing_fields(self) -> list[str]:
        """Return the required fields that are still blank."""
        return [f for f in REQUIRED_FIELDS if not getattr(self, f)]

    def to_record(self) -> dict:
        """Serialise for storage, with ``content`` nested as the store expects."""
        return {
            "title": self.title,
            "category": self.category,
            "content": {
                "name": self.name,
                "description": self.description,
                "details": self.details,
            },
            "status": self.status,
            "created_at": self.created_at,
        }
