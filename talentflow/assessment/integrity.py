"""TalentFlow – Structural integrity checks for assessment documents.

Builder operations never repair references, so a document can end up
with conditions pointing at deleted questions, at questions further down
the document (or at the question itself), or with choice questions that
have nothing to choose from. :func:`check_assessment` reports those
problems without changing the document; callers decide whether to block
a save on them.
"""

from __future__ import annotations

from typing import Dict, List

from talentflow.assessment.types import (
    Assessment,
    IntegrityIssue,
    IntegrityIssueKind,
)


def check_assessment(assessment: Assessment) -> List[IntegrityIssue]:
    """Return all integrity issues of ``assessment`` in document order."""

    positions: Dict[str, int] = {}
    for index, (_, question) in enumerate(assessment.iter_questions()):
        positions.setdefault(question.id, index)

    issues: List[IntegrityIssue] = []
    for index, (_, question) in enumerate(assessment.iter_questions()):
        rule = question.conditional_on
        if rule is not None:
            target_position = positions.get(rule.question_id)
            if target_position is None:
                issues.append(
                    IntegrityIssue(
                        kind=IntegrityIssueKind.DANGLING_REFERENCE,
                        question_id=question.id,
                        target_id=rule.question_id,
                        message=(
                            f"Question {question.id} depends on missing question "
                            f"{rule.question_id}"
                        ),
                    )
                )
            elif target_position >= index:
                issues.append(
                    IntegrityIssue(
                        kind=IntegrityIssueKind.FORWARD_REFERENCE,
                        question_id=question.id,
                        target_id=rule.question_id,
                        message=(
                            f"Question {question.id} depends on question "
                            f"{rule.question_id}, which does not come before it"
                        ),
                    )
                )

        if question.type.is_choice and not question.options:
            issues.append(
                IntegrityIssue(
                    kind=IntegrityIssueKind.MISSING_OPTIONS,
                    question_id=question.id,
                    message=f"Choice question {question.id} has no options",
                )
            )

    return issues


def dangling_references(assessment: Assessment) -> List[IntegrityIssue]:
    """Return only the ``DANGLING_REFERENCE`` issues of ``assessment``."""

    return [
        issue
        for issue in check_assessment(assessment)
        if issue.kind == IntegrityIssueKind.DANGLING_REFERENCE
    ]
