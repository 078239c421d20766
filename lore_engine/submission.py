"""
lore_engine/submission.py -- Lore proposal submission flow.

Runs the name-conflict check before a proposal is accepted and decides
what to do with the result:

    1. Required fields     title, category, name, description must be filled.
    2. Conflict check      the proposed name against the current corpus.
    3. Policy              exact duplicates block when ``block_on_error`` is
                           set; near-duplicate warnings never block.
    4. Store               accepted proposals are saved with status "pending".

If the corpus could not be loaded the check is reported as ``unavailable``
rather than as "no conflicts", and the submission goes ahead: the check is
advisory and must never be the reason a submission fails.

Usage::

    flow = ProposalSubmissionFlow(JsonCorpusProvider(root), JsonlProposalStore(path))
    report = flow.check_name("Kaelan")
    result = flow.submit(proposal)
    print(result.human_message)
"""

from __future__ import annotations

import logging
import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from lore_engine.config import DEFAULT_SETTINGS, ConflictSettings
from lore_engine.conflict_checker import NameConflictDetector
from lore_engine.corpus import CorpusSnapshot, EntryCorpusProvider
from lore_engine.models.base import Conflict
from lore_engine.models.proposal import LoreProposal
from lore_engine.utils import read_jsonl, safe_append_jsonl, slugify

logger = logging.getLogger(__name__)

CheckStatus = Literal["ok", "partial", "unavailable"]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass
class ConflictReport:
    """Outcome of checking one name against the corpus."""
    name: str
    status: CheckStatus
    conflicts: list[Conflict] = field(default_factory=list)
    failed_categories: list[str] = field(default_factory=list)

    @property
    def errors(self) -> list[Conflict]:
        return [c for c in self.conflicts if c.severity == "error"]

    @property
    def warnings(self) -> list[Conflict]:
        return [c for c in self.conflicts if c.severity == "warning"]

    def format_human(self) -> str:
        if self.status == "unavailable":
            return "Name check unavailable: the almanac could not be loaded."
        lines = []
        if not self.conflicts:
            lines.append(f'No conflicts found for "{self.name}".')
        for c in self.conflicts:
            label = "ERROR" if c.severity == "error" else "WARNING"
            lines.append(f"  [{label}] {c.message}")
        if self.status == "partial":
            lines.append(
                "Note: some categories could not be checked: "
                + ", ".join(self.failed_categories)
            )
        return "\n".join(lines)


@dataclass
class SubmissionResult:
    """Outcome of a proposal submission."""
    accepted: bool
    proposal_id: str = ""
    report: ConflictReport | None = None
    issues: list[str] = field(default_factory=list)
    human_message: str = ""

    @property
    def blocked(self) -> bool:
        """True when the conflict policy refused the proposal."""
        return not self.accepted and not self.issues and self.report is not None


# ---------------------------------------------------------------------------
# Proposal storage
# ---------------------------------------------------------------------------

class ProposalStore(ABC):
    """Where accepted proposals go."""

    @abstractmethod
    def save(self, proposal: LoreProposal) -> str:
        """Persist *proposal* and return its new id."""


class JsonlProposalStore(ProposalStore):
    """Appends proposals as JSON Lines records to a single file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def save(self, proposal: LoreProposal) -> str:
        slug = slugify(proposal.name) or "proposal"
        proposal_id = f"{slug}-{secrets.token_hex(4)}"
        safe_append_jsonl(self.path, {"id": proposal_id, **proposal.to_record()})
        logger.info("Stored proposal %s (%s)", proposal_id, proposal.category)
        return proposal_id

    def read_all(self) -> list[dict]:
        return read_jsonl(self.path)


# ---------------------------------------------------------------------------
# Flow
# ---------------------------------------------------------------------------

class ProposalSubmissionFlow:
    """Checks and stores lore proposals.

    The corpus snapshot is loaded on first use and reused until
    ``refresh()`` is called, so a burst of checks while a member types a
    name costs one corpus read.
    """

    def __init__(
        self,
        provider: EntryCorpusProvider,
        store: ProposalStore,
        settings: ConflictSettings | None = None,
        detector: NameConflictDetector | None = None,
    ):
        self.provider = provider
        self.store = store
        self.settings = settings or DEFAULT_SETTINGS
        self.detector = detector or NameConflictDetector(self.settings)
        self._snapshot: CorpusSnapshot | None = None

    def refresh(self) -> None:
        """Drop the cached corpus so the next check reloads it."""
        self._snapshot = None

    def _get_snapshot(self) -> CorpusSnapshot | None:
        if self._snapshot is None:
            try:
                self._snapshot = self.provider.load()
            except Exception:
                logger.exception("Corpus provider failed")
                return None
        return self._snapshot

    def check_name(self, name: str) -> ConflictReport:
        """Check *name* against the current corpus snapshot."""
        snapshot = self._get_snapshot()
        if snapshot is None or not snapshot.available:
            failed = list(snapshot.failed_categories) if snapshot else []
            return ConflictReport(name=name, status="unavailable", failed_categories=failed)

        conflicts = self.detector.check(name, snapshot.entries)
        return ConflictReport(
            name=name,
            status="ok" if snapshot.complete else "partial",
            conflicts=conflicts,
            failed_categories=list(snapshot.failed_categories),
        )

    def submit(self, proposal: LoreProposal) -> SubmissionResult:
        """Validate, check and store *proposal*."""
        missing = proposal.missing_fields()
        if missing:
            issues = [f"'{f}' is required." for f in missing]
            return SubmissionResult(
                accepted=False,
                issues=issues,
                human_message="Proposal is incomplete:\n" + "\n".join(f"  {i}" for i in issues),
            )

        report = self.check_name(proposal.name)
        if report.errors and self.settings.block_on_error:
            logger.info(
                "Proposal '%s' blocked by %d exact duplicate(s)",
                proposal.name, len(report.errors),
            )
            return SubmissionResult(
                accepted=False,
                report=report,
                human_message="Proposal not submitted.\n" + report.format_human(),
            )

        proposal_id = self.store.save(proposal)
        return SubmissionResult(
            accepted=True,
            proposal_id=proposal_id,
            report=report,
            human_message=f"Proposal submitted as {proposal_id}.\n" + report.format_human(),
        )
