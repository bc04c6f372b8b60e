#!/usr/bin/env python3
"""
Show Matcher v1.0
Command-line host for the show selection evaluator and the episode title
chain propagator.

    show-matcher evaluate "The.Night.Manager" --candidates candidates.json
    show-matcher chain rows.json --source 0 --title "Crash Diet"
    show-matcher chain rows.json --source 0 --filename "CHiPs.S03E18.Off.Road.1080p" --season 3 --episode 18

Candidate files hold ``{"candidates": [{"id", "name", "aliases", "first_aired_year"}]}``
(or the bare list); row files hold ``{"rows": [{"show_key", "options", "chosen_index"}]}``.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from config import configure_logging, get_settings
from showmatch import (
    Ambiguous,
    EpisodeTable,
    InMemoryPinnedIdStore,
    ShowResolver,
    StaticCandidateSource,
    extract_title_text,
)
from showmatch.exceptions import ConfigurationError, InvalidInputError, ShowMatchError
from showmatch.models import Outcome
from showmatch.schemas import CandidateList, EpisodeTablePayload

logger = logging.getLogger(__name__)
console = Console()

EXIT_CODES = {
    Outcome.RESOLVED: 0,
    Outcome.AMBIGUOUS: 2,
    Outcome.NOT_FOUND: 3,
}


def _read_json(path: Path):
    if not path.is_file():
        raise InvalidInputError(str(path), "File not found")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidInputError(str(path), str(e)) from e


def load_candidates(path: Path):
    """Read and validate a candidate file."""
    data = _read_json(path)
    if isinstance(data, list):
        data = {"candidates": data}
    try:
        return CandidateList.model_validate(data).to_candidates()
    except ValidationError as e:
        raise InvalidInputError(str(path), str(e)) from e


def load_rows(path: Path):
    """Read and validate an episode row file."""
    data = _read_json(path)
    if isinstance(data, list):
        data = {"rows": data}
    try:
        return EpisodeTablePayload.model_validate(data).to_rows()
    except ValidationError as e:
        raise InvalidInputError(str(path), str(e)) from e


def _load_settings():
    try:
        return get_settings()
    except ValidationError as e:
        raise ConfigurationError("settings", str(e)) from e


def cmd_evaluate(args, settings) -> int:
    candidates = load_candidates(Path(args.candidates))
    source = StaticCandidateSource({args.name: candidates})
    pins = InMemoryPinnedIdStore({args.name: args.pin} if args.pin else None)
    resolver = ShowResolver.from_settings(source, settings, pins=pins)
    decision = resolver.resolve(args.name).decision

    if args.json:
        print(json.dumps(decision.to_dict(), indent=2, ensure_ascii=False))
        return EXIT_CODES[decision.kind]

    style = {"resolved": "green", "ambiguous": "yellow", "not_found": "red"}[decision.kind.value]
    console.print(f"[{style}]{decision.kind.value.upper()}[/{style}]: {decision.reason}")
    if decision.is_resolved:
        chosen = decision.chosen
        console.print(f"  → {chosen.name} [dim](id {chosen.id})[/dim]")
    elif isinstance(decision, Ambiguous):
        table = Table(title=f"Candidates for '{args.name}'")
        table.add_column("#", justify="right")
        table.add_column("ID")
        table.add_column("Name")
        table.add_column("Year")
        table.add_column("Score", justify="right")
        for rank, scored in enumerate(decision.ranked, start=1):
            c = scored.candidate
            table.add_row(str(rank), c.id, c.name, str(c.first_aired_year or ""), f"{scored.score:.0%}")
        console.print(table)
    return EXIT_CODES[decision.kind]


def cmd_chain(args, settings) -> int:
    table = EpisodeTable(load_rows(Path(args.rows)), settings.preselect_thresholds())

    if args.filename:
        title_text = extract_title_text(args.filename, args.season, args.episode)
        logger.info(f"Title text from filename: {title_text!r}")
        changed = table.preselect(args.source, title_text)
    else:
        changed = table.select(args.source, args.title)

    titles = table.chosen_titles()
    if args.json:
        print(json.dumps({"changed": changed, "chosen": titles}, indent=2, ensure_ascii=False))
        return 0

    out = Table(title="Episode choices")
    out.add_column("Row", justify="right")
    out.add_column("Show")
    out.add_column("Chosen title")
    out.add_column("Changed")
    for index, title in enumerate(titles):
        out.add_row(str(index), str(table[index].show_key), title or "", "✓" if index in changed else "")
    console.print(out)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show Matcher - resolve show names and cascade episode title choices"
    )
    parser.add_argument('--json', action='store_true', help='Print machine-readable JSON')
    sub = parser.add_subparsers(dest='command', required=True)

    ev = sub.add_parser('evaluate', help='Decide which candidate an extracted show name refers to')
    ev.add_argument('name', help='Extracted (or overridden) show name')
    ev.add_argument('--candidates', '-c', required=True, help='JSON file with provider candidates')
    ev.add_argument('--pin', help='Pinned candidate id for this show name')
    ev.set_defaults(func=cmd_evaluate)

    ch = sub.add_parser('chain', help='Select an episode title and cascade it across sibling rows')
    ch.add_argument('rows', help='JSON file with episode rows')
    ch.add_argument('--source', '-s', type=int, required=True, help='Index of the row being selected')
    how = ch.add_mutually_exclusive_group(required=True)
    how.add_argument('--title', '-t', help='Title chosen for the source row')
    how.add_argument('--filename', '-f', help='Original filename to pre-select the title from')
    ch.add_argument('--season', type=int, help='Season number (with --filename)')
    ch.add_argument('--episode', type=int, help='Episode number (with --filename)')
    ch.set_defaults(func=cmd_chain)
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = _load_settings()
        configure_logging(settings)
        return args.func(args, settings)
    except ShowMatchError as e:
        logger.error(e.message)
        if e.details:
            logger.error(e.details)
        return 1


if __name__ == "__main__":
    sys.exit(main())
