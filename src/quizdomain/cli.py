"""Command line entry point.

    quizdomain import QUESTIONS.xlsx [--nest]
    quizdomain score QUIZ.json SHEET.json [--any-quiz]

JSON results go to stdout, logs and error payloads to stderr.
"""

import argparse
import sys
from collections.abc import Sequence

from loguru import logger

from quizdomain import __version__
from quizdomain.exceptions import ImportFileError, QuizDomainException
from quizdomain.logging_config import configure_logging
from quizdomain.schemas import ErrorResponse, ImportReport, ImportRowError
from quizdomain.serialization import load_answer_sheet, load_quiz
from quizdomain.services import (
    ScoringService,
    SpreadsheetImportService,
    nest_sub_questions,
)

EXIT_OK = 0
EXIT_ROW_ERRORS = 1
EXIT_INVALID = 2
EXIT_IO = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quizdomain",
        description="Import quiz questions and score answer sheets",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override the configured log level (e.g. DEBUG)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    import_cmd = commands.add_parser(
        "import", help="Import questions from an .xlsx or .csv spreadsheet"
    )
    import_cmd.add_argument("spreadsheet", help="Spreadsheet to read")
    import_cmd.add_argument(
        "--nest",
        action="store_true",
        help="Attach '<id>-<n>' rows to the material question '<id>'",
    )

    score_cmd = commands.add_parser("score", help="Score an answer sheet")
    score_cmd.add_argument("quiz", help="Quiz JSON file")
    score_cmd.add_argument("sheet", help="Answer sheet JSON file")
    score_cmd.add_argument(
        "--any-quiz",
        action="store_true",
        help="Score even if the sheet was submitted for another quiz id",
    )
    return parser


def run_import(args: argparse.Namespace) -> int:
    result = SpreadsheetImportService().import_file(args.spreadsheet)
    questions = result.questions
    if args.nest:
        questions = nest_sub_questions(questions)

    report = ImportReport(
        source=result.source,
        questions=questions,
        errors=[
            ImportRowError(row_number=row.row_number, detail=row.error or "")
            for row in result.errors
        ],
    )
    print(report.model_dump_json(indent=2))
    return EXIT_ROW_ERRORS if report.errors else EXIT_OK


def run_score(args: argparse.Namespace) -> int:
    quiz = load_quiz(args.quiz)
    sheet = load_answer_sheet(args.sheet)
    service = ScoringService()
    if args.any_quiz:
        report = service.build_report(sheet, quiz.questions)
    else:
        report = service.score_for_quiz(sheet, quiz)
    print(report.model_dump_json(indent=2))
    return EXIT_OK


def _exit_code(exc: QuizDomainException) -> int:
    return EXIT_IO if isinstance(exc, ImportFileError) else EXIT_INVALID


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    handlers = {"import": run_import, "score": run_score}
    try:
        return handlers[args.command](args)
    except QuizDomainException as exc:
        logger.error(
            "Command failed",
            command=args.command,
            error_code=exc.error_code,
        )
        payload = ErrorResponse(
            detail=exc.message,
            error_code=exc.error_code,
            errors=exc.details.get("errors"),
        )
        print(payload.model_dump_json(), file=sys.stderr)
        return _exit_code(exc)
