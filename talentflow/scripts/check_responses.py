"""TalentFlow – Check a response set against an assessment document.

Loads an assessment document and a responses mapping from JSON files,
then prints the integrity issues of the document, which questions are
visible, and every validation error. Exits with status 1 when the
responses could not be submitted.

Example
-------

    python -m talentflow.scripts.check_responses \
        --assessment assessment-job-1.json \
        --responses responses.json \
        --show-results
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Optional, Sequence

from talentflow.assessment.documents import from_document
from talentflow.assessment.engine import AssessmentRuleEngine
from talentflow.assessment.results import summarize_results
from talentflow.core.config import get_config


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Validate a responses JSON file against an assessment document.",
    )

    parser.add_argument(
        "--assessment",
        type=Path,
        required=True,
        help="Path to the assessment document (JSON)",
    )
    parser.add_argument(
        "--responses",
        type=Path,
        required=True,
        help="Path to the responses mapping (JSON object keyed by question id)",
    )
    parser.add_argument(
        "--show-results",
        action="store_true",
        help="Also print the results view for the responses",
    )
    parser.add_argument(
        "--lenient-options",
        action="store_true",
        help="Accept choice answers that are not among the question options",
    )

    return parser.parse_args(argv)


def _load_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)

    assessment = from_document(_load_json(args.assessment))
    responses = _load_json(args.responses)
    if not isinstance(responses, dict):
        print("Responses file must contain a JSON object")
        return 2

    config = get_config().assessment
    if args.lenient_options:
        config = config.model_copy(update={"strict_option_membership": False})
    engine = AssessmentRuleEngine(config=config)

    print(f"Assessment {assessment.id!r} ({assessment.title})")
    print("".ljust(80, "="))

    for issue in engine.check_assessment(assessment):
        print(f"[integrity] {issue.kind.value:<18} {issue.question_id}: {issue.message}")

    visible = {q.id for _, q in engine.visible_questions(assessment, responses)}
    print(f"Visible questions: {len(visible)}/{assessment.question_count}")

    errors = engine.validate_assessment(assessment, responses)
    for question_id, error in errors.items():
        print(f"[error] {question_id:<24} {error.kind.value:<16} {error.message}")

    if args.show_results:
        print("".ljust(80, "-"))
        summary = summarize_results(assessment, responses)
        for row in summary.rows:
            marker = "" if row.visible else " (hidden)"
            print(
                f"{row.section_number}.{row.question_number} {row.prompt}{marker}: "
                f"{row.display}"
            )

    if errors:
        print(f"Not submittable: {len(errors)} error(s)")
        return 1

    print("Submittable")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
