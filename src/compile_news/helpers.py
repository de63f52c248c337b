"""Helper functions for compile_news CLI."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from common.config import load_yaml
from compile_news.models import Candidate

logger = logging.getLogger(__name__)


def parse_compile_news_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for compile_news.'''

    parser = argparse.ArgumentParser(
        description="Compile relevant, summarized news articles for election candidates"
    )

    # Input options
    parser.add_argument("--candidate-name", help="Name of the candidate to search for")
    parser.add_argument("--candidate-id", help="ID of the candidate the articles belong to")
    parser.add_argument("--party-name", default=None, help="Candidate's party affiliation")
    parser.add_argument(
        "--candidates",
        type=Path,
        default=None,
        help="YAML file with a list of candidates ({name, id, party})",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config name (test/prod) or path to YAML file (default: $COMPILE_NEWS_CONFIG or prod)",
    )

    # Output options
    parser.add_argument("--load-s3", action="store_true", help="Upload records to S3")
    parser.add_argument("--load-local", action="store_true", help="Save records to a local file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")

    args = parser.parse_args(argv)
    if args.candidates is None and not (args.candidate_name and args.candidate_id):
        parser.error("either --candidates or both --candidate-name and --candidate-id are required")
    return args


def load_candidates(path: Path) -> list[Candidate]:
    '''Load candidates from a YAML list, skipping entries without a name or id.'''

    data = load_yaml(path)
    entries = data.get("candidates", []) if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise ValueError(f"Expected a list of candidates in {path}")

    candidates = []
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("name") or entry.get("id") is None:
            logger.warning("Skipping candidate with missing name or id: %s", entry)
            continue
        candidates.append(Candidate(name=entry["name"], id=str(entry["id"]), party=entry.get("party")))
    return candidates


def candidates_from_args(args: argparse.Namespace) -> list[Candidate]:
    if args.candidates is not None:
        return load_candidates(args.candidates)
    return [Candidate(name=args.candidate_name, id=str(args.candidate_id), party=args.party_name)]
