"""
lore_engine/main.py -- Command-line entry point.

Usage::

    python -m lore_engine check "Kaelan" --corpus ./almanac
    python -m lore_engine refs article.txt --corpus ./almanac
    python -m lore_engine submit --title "The Shadowkin" --category race \\
        --name "Shadowkin" --description "..." --corpus ./almanac
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from lore_engine.config import load_settings
from lore_engine.corpus import JsonCorpusProvider
from lore_engine.models.proposal import PROPOSAL_CATEGORIES, LoreProposal
from lore_engine.paths import get_corpus_dir, get_proposals_path
from lore_engine.references import find_unresolved
from lore_engine.submission import JsonlProposalStore, ProposalSubmissionFlow

logger = logging.getLogger("lore_engine")

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_UNAVAILABLE = 2


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging for command-line use."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lore-engine",
        description="Check proposed almanac names for duplicates and near-duplicates.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--settings", help="path to a settings.json file")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="check one name against the almanac")
    check.add_argument("name")
    check.add_argument("--corpus", help="almanac directory (default: user data dir)")
    check.add_argument("--json", action="store_true", help="print conflicts as JSON")

    refs = sub.add_parser("refs", help="list unresolved [[references]] in a text file")
    refs.add_argument("file")
    refs.add_argument("--corpus", help="almanac directory (default: user data dir)")

    submit = sub.add_parser("submit", help="submit a lore proposal")
    submit.add_argument("--title", required=True)
    submit.add_argument("--category", required=True, choices=PROPOSAL_CATEGORIES)
    submit.add_argument("--name", required=True)
    submit.add_argument("--description", required=True)
    submit.add_argument("--details", default="")
    submit.add_argument("--corpus", help="almanac directory (default: user data dir)")
    submit.add_argument("--store", help="proposals JSONL file (default: user data dir)")

    return parser


def _make_flow(args: argparse.Namespace) -> ProposalSubmissionFlow:
    settings = load_settings(args.settings)
    provider = JsonCorpusProvider(args.corpus or get_corpus_dir())
    store = JsonlProposalStore(getattr(args, "store", None) or get_proposals_path())
    return ProposalSubmissionFlow(provider, store, settings=settings)


def _cmd_check(args: argparse.Namespace) -> int:
    report = _make_flow(args).check_name(args.name)
    if args.json:
        print(json.dumps({
            "name": report.name,
            "status": report.status,
            "failed_categories": report.failed_categories,
            "conflicts": [c.model_dump() for c in report.conflicts],
        }, indent=2, ensure_ascii=False))
    else:
        print(report.format_human())
    return EXIT_UNAVAILABLE if report.status == "unavailable" else EXIT_OK


def _cmd_refs(args: argparse.Namespace) -> int:
    try:
        content = Path(args.file).read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Cannot read {args.file}: {exc}", file=sys.stderr)
        return EXIT_REJECTED

    snapshot = JsonCorpusProvider(args.corpus or get_corpus_dir()).load()
    if not snapshot.available:
        print("Almanac could not be loaded.", file=sys.stderr)
        return EXIT_UNAVAILABLE

    unresolved = find_unresolved(content, snapshot.entries)
    for name in unresolved:
        print(f"Unresolved reference: [[{name}]]")
    if not unresolved:
        print("All references resolved.")
    return EXIT_REJECTED if unresolved else EXIT_OK


def _cmd_submit(args: argparse.Namespace) -> int:
    proposal = LoreProposal(
        title=args.title,
        category=args.category,
        name=args.name,
        description=args.description,
        details=args.details,
    )
    result = _make_flow(args).submit(proposal)
    print(result.human_message)
    return EXIT_OK if result.accepted else EXIT_REJECTED


_COMMANDS = {
    "check": _cmd_check,
    "refs": _cmd_refs,
    "submit": _cmd_submit,
}


def main(argv: list[str] | None = None) -> int:
    """Run the lore-engine command line."""
    args = _build_parser().parse_args(argv)
    _setup_logging(args.verbose)
    logger.debug("Running command %r", args.command)

    try:
        return _COMMANDS[args.command](args)
    except ValueError as exc:
        # Bad settings file or invalid proposal values
        print(str(exc), file=sys.stderr)
        return EXIT_REJECTED


if __name__ == "__main__":
    sys.exit(main())
