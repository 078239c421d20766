"""
lore_engine/models/ -- Pydantic v2 models for the lore engine.

Submodules:
    base        EntryRef and Conflict value types.
    proposal    LoreProposal submitted for Loremaster review.
"""

from lore_engine.models.base import Conflict, ConflictKind, EntryRef, Severity
from lore_engine.models.proposal import PROPOSAL_CATEGORIES, LoreProposal

__all__ = [
    "Conflict",
    "ConflictKind",
    "EntryRef",
    "LoreProposal",
    "PROPOSAL_CATEGORIES",
    "Severity",
]
