"""CLI entrypoint for the crossword filler."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List

from crossfill.core.constants import FillStrategy
from crossfill.data.patterns import MINI_PATTERNS, get_pattern
from crossfill.data.vocabulary import Vocabulary, VocabularyConfig
from crossfill.engine.filler import CrosswordFiller, FillerConfig
from crossfill.utils.logger import configure_logging, parse_level
from crossfill.utils.pretty import print_fill_summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fill a crossword grid pattern from a word list",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--pattern",
        type=Path,
        metavar="FILE",
        help="Grid pattern file ('_' fillable, any other character blocked)",
    )
    source.add_argument(
        "--preset",
        type=int,
        metavar="N",
        help=f"Built-in 5x5 pattern index (0-{len(MINI_PATTERNS) - 1})",
    )
    parser.add_argument(
        "--words",
        type=Path,
        required=True,
        metavar="FILE",
        help="Word list: one word per line, or CSV/TSV rows ending in a rating",
    )
    parser.add_argument(
        "--strategy",
        type=str,
        choices=[s.value for s in FillStrategy],
        default=FillStrategy.CSP.value,
        help="Fill strategy (default: csp)",
    )
    parser.add_argument(
        "--allow-repeats",
        action="store_true",
        help="Allow the same word in more than one slot",
    )
    parser.add_argument(
        "--no-inference",
        action="store_true",
        help="Disable forward checking during backtracking search",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for tie-breaking")
    parser.add_argument(
        "--randomize",
        action="store_true",
        help="Break heuristic ties randomly for varied fills",
    )
    parser.add_argument("--max-nodes", type=int, default=None, help="Search node budget")
    parser.add_argument("--time-limit", type=float, default=None, help="Search time budget in seconds")
    parser.add_argument(
        "--max-rating",
        type=int,
        default=4,
        help="Drop rated words at or above this rating (default 4)",
    )
    parser.add_argument("--json", action="store_true", help="Print a JSON payload instead of the grid")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        level = parse_level(args.log_level)
    except ValueError as exc:
        parser.error(str(exc))
    configure_logging(level)

    if args.preset is not None:
        try:
            pattern = get_pattern(args.preset)
        except IndexError as exc:
            parser.error(str(exc))
    else:
        pattern = args.pattern.read_text(encoding="utf-8")

    vocabulary = Vocabulary.from_file(
        VocabularyConfig(path=args.words, max_rating=args.max_rating)
    )
    config = FillerConfig(
        strategy=args.strategy,
        unique_words=not args.allow_repeats,
        inference=not args.no_inference,
        seed=args.seed,
        randomize=args.randomize,
        max_nodes=args.max_nodes,
        time_limit=args.time_limit,
    )
    result = CrosswordFiller(config).fill(pattern, vocabulary)

    if args.json or args.output:
        output_text = json.dumps(result.to_jsonable(), ensure_ascii=False, indent=2)
        if args.output:
            args.output.write_text(output_text, encoding="utf-8")
        else:
            print(output_text)
    else:
        print_fill_summary(result)
    return 0 if result.solved else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
