"""TalentFlow – Read-only results view.

Turns an assessment and a stored response set into display rows, one per
question in document order, the way the results page lists them:
numbered sections and questions, the answer text (or the list of chosen
options for multi-choice questions) and a ``"No response"`` placeholder
for anything unanswered.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional, Tuple

from talentflow.assessment.types import Assessment, QuestionType
from talentflow.assessment.validation import is_empty_answer
from talentflow.assessment.visibility import is_visible
from talentflow.core.types import RawResponses


NO_RESPONSE = "No response"


@dataclass(frozen=True)
class AnswerRow:
    """Display row for one question.

    Attributes:
        section_number: 1-based section position.
        section_title: Section title.
        question_number: 1-based position inside the section.
        question_id: Question identifier.
        prompt: Question text.
        question_type: Question type value (e.g. ``"numeric"``).
        required: Whether the question is required.
        visible: Whether the question was visible for these responses.
        answered: Whether a non-empty answer is stored.
        display: Answer text, or :data:`NO_RESPONSE`.
        selections: Chosen options for multi-choice questions.
    """

    section_number: int
    section_title: str
    question_number: int
    question_id: str
    prompt: str
    question_type: str
    required: bool
    visible: bool
    answered: bool
    display: str
    selections: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ResultsSummary:
    assessment_id: str
    title: str
    rows: List[AnswerRow]
    submitted_at: Optional[datetime] = None

    @property
    def answered_count(self) -> int:
        return sum(1 for row in self.rows if row.answered)

    @property
    def question_count(self) -> int:
        return len(self.rows)


def _display(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def summarize_results(
    assessment: Assessment,
    responses: RawResponses,
    submitted_at: Optional[datetime] = None,
) -> ResultsSummary:
    """Build the results view for ``responses`` to ``assessment``."""

    rows: List[AnswerRow] = []
    for section_number, section in enumerate(assessment.sections, start=1):
        for question_number, question in enumerate(section.questions, start=1):
            value = responses.get(question.id)
            answered = not is_empty_answer(value)

            selections: Tuple[str, ...] = ()
            if not answered:
                display = NO_RESPONSE
            elif question.type == QuestionType.MULTI_CHOICE and isinstance(
                value, (list, tuple, set, frozenset)
            ):
                items = sorted(value) if isinstance(value, (set, frozenset)) else value
                selections = tuple(str(item) for item in items)
                display = ", ".join(selections)
            else:
                display = _display(value)

            rows.append(
                AnswerRow(
                    section_number=section_number,
                    section_title=section.title,
                    question_number=question_number,
                    question_id=question.id,
                    prompt=question.prompt,
                    question_type=question.type.value,
                    required=question.required,
                    visible=is_visible(question, responses),
                    answered=answered,
                    display=display,
                    selections=selections,
                )
            )

    return ResultsSummary(
        assessment_id=assessment.id,
        title=assessment.title,
        rows=rows,
        submitted_at=submitted_at,
    )
