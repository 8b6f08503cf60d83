"""CLI entry point for Maternal Wellness.

Usage:
    maternal-wellness questions EPDS
    maternal-wellness score PHQ-9 --answers 1=0,2=1,3=0,4=2,5=0,6=1,7=0,8=0,9=0
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import TYPE_CHECKING

import maternal_wellness
from maternal_wellness.config import get_settings
from maternal_wellness.domain.enums import Instrument
from maternal_wellness.domain.exceptions import AssessmentError
from maternal_wellness.domain.question_bank import get_questions
from maternal_wellness.infrastructure.logging import setup_logging, with_context
from maternal_wellness.services.pipeline import build_result
from maternal_wellness.services.recommendations import recommendations_for

if TYPE_CHECKING:
    from collections.abc import Sequence

EXIT_USAGE = 2
CLI_USER_ID = "cli"


def parse_answers(raw: str) -> dict[int, int]:
    """Parse ``"1=0,2=3"`` into ``{1: 0, 2: 3}``.

    Raises:
        argparse.ArgumentTypeError: If a pair is malformed or repeated.
    """
    answers: dict[int, int] = {}
    for pair in filter(None, (part.strip() for part in raw.split(","))):
        key, sep, value = pair.partition("=")
        try:
            if not sep:
                raise ValueError(pair)
            question_id, option_value = int(key), int(value)
        except ValueError as e:
            raise argparse.ArgumentTypeError(f"expected QUESTION=VALUE, got {pair!r}") from e
        if question_id in answers:
            raise argparse.ArgumentTypeError(f"question {question_id} answered twice")
        answers[question_id] = option_value
    return answers


def _instrument(raw: str) -> Instrument:
    try:
        return Instrument.parse(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="maternal-wellness",
        description="Perinatal depression screening (EPDS, PHQ-9)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Maternal Wellness v{maternal_wellness.__version__}",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    questions = sub.add_parser("questions", help="List an instrument's questions")
    questions.add_argument("instrument", type=_instrument, help="EPDS or PHQ-9")

    score = sub.add_parser("score", help="Score a complete set of answers")
    score.add_argument("instrument", type=_instrument, help="EPDS or PHQ-9")
    score.add_argument(
        "--answers",
        type=parse_answers,
        required=True,
        help="Comma-separated QUESTION=VALUE pairs, e.g. 1=0,2=3",
    )
    return parser


def _print_questions(instrument: Instrument) -> None:
    print(f"{instrument.value} ({len(get_questions(instrument))} questions)")
    for question in get_questions(instrument):
        print(f"\n{question.id}. {question.text}")
        for option in question.options:
            print(f"   [{option.value}] {option.label}")


@with_context(entrypoint="cli")
def _score(instrument: Instrument, answers: dict[int, int]) -> int:
    try:
        result = build_result(CLI_USER_ID, instrument, answers)
    except AssessmentError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE

    payload = {
        "instrument": result.instrument.value,
        "score": result.score,
        "max_score": result.max_score,
        "severity": result.interpretation.severity_label,
        "description": result.interpretation.description,
        "color": result.interpretation.color_tag.value,
        "self_harm_risk": result.self_harm_risk,
        "recommendations": recommendations_for(result, get_settings().crisis),
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the Maternal Wellness CLI."""
    args = build_parser().parse_args(argv)
    setup_logging(get_settings().logging, stream=sys.stderr)
    if args.command == "questions":
        _print_questions(args.instrument)
        return 0
    return _score(args.instrument, args.answers)


if __name__ == "__main__":
    sys.exit(main())
