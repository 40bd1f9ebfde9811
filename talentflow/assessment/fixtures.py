"""TalentFlow – Assessment fixture builders.

Deterministic generators for demo and test assessments. Randomness is
drawn from an explicit ``numpy.random.Generator`` seeded by the caller,
so the same seed always yields the same documents and nothing in the
engine depends on global random state.

- :func:`generate_assessment` / :func:`seed_assessments` – random
  multi-section questionnaires for the demo jobs.
- :func:`screening_assessment` – a small hand-built questionnaire with
  conditional logic, useful as a known-good example.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

import numpy as np

from talentflow.assessment.types import (
    Assessment,
    ConditionalRule,
    Question,
    QuestionType,
    Section,
    ValidationRules,
)
from talentflow.core.ids import assessment_id_for_job


DEMO_JOB_IDS: tuple[str, ...] = ("job-1", "job-2", "job-3")
DEMO_SEED = 98765

# Question types the random generator draws from; file uploads are never
# generated because nothing can answer them in a demo.
_GENERATED_TYPES: tuple[QuestionType, ...] = (
    QuestionType.SINGLE_CHOICE,
    QuestionType.MULTI_CHOICE,
    QuestionType.SHORT_TEXT,
    QuestionType.LONG_TEXT,
    QuestionType.NUMERIC,
)

_WORDS: tuple[str, ...] = (
    "team", "product", "design", "deliver", "customer", "quality", "review",
    "process", "system", "data", "project", "feature", "release", "testing",
    "support", "strategy", "growth", "research", "impact", "tools", "metrics",
    "workflow", "priority", "feedback", "planning", "security", "platform",
    "mobile", "service", "budget", "scope", "deadline", "mentor", "remote",
)


def _words(rng: np.random.Generator, count: int) -> str:
    return " ".join(str(w) for w in rng.choice(_WORDS, size=count))


def _sentence(rng: np.random.Generator) -> str:
    text = _words(rng, int(rng.integers(5, 11)))
    return text[0].upper() + text[1:]


def generate_question(
    section_index: int, question_index: int, rng: np.random.Generator
) -> Question:
    """Generate one random question with type-appropriate options/bounds."""

    qtype = _GENERATED_TYPES[int(rng.integers(0, len(_GENERATED_TYPES)))]
    required = bool(rng.random() < 0.7)

    options = None
    validation = None
    if qtype.is_choice:
        count = int(rng.integers(3, 6))
        # Suffix keeps options unique within the question.
        options = tuple(f"{_words(rng, 2)} {i + 1}" for i in range(count))
    elif qtype.is_text:
        validation = ValidationRules(
            min_length=int(rng.integers(5, 21)),
            max_length=int(rng.integers(50, 501)),
        )
    elif qtype == QuestionType.NUMERIC:
        validation = ValidationRules(
            min=int(rng.integers(0, 11)),
            max=int(rng.integers(10, 101)),
        )

    return Question(
        id=f"q-{section_index}-{question_index}",
        type=qtype,
        prompt=_sentence(rng) + "?",
        required=required,
        options=options,
        validation=validation,
    )


def generate_assessment(
    job_id: str,
    rng: np.random.Generator,
    now: Optional[datetime] = None,
) -> Assessment:
    """Generate a random 2-4 section assessment for ``job_id``."""

    if now is None:
        now = datetime.now(timezone.utc)

    sections: List[Section] = []
    for section_index in range(int(rng.integers(2, 5))):
        question_count = int(rng.integers(3, 7))
        sections.append(
            Section(
                id=f"section-{section_index}",
                title=_words(rng, 3).title(),
                questions=tuple(
                    generate_question(section_index, question_index, rng)
                    for question_index in range(question_count)
                ),
            )
        )

    description = " ".join(_sentence(rng) + "." for _ in range(3))
    created_at = now - timedelta(days=int(rng.integers(0, 365)))

    return Assessment(
        id=assessment_id_for_job(job_id),
        job_id=job_id,
        title=f"Assessment for {job_id}",
        description=description,
        sections=tuple(sections),
        created_at=created_at,
    )


def seed_assessments(
    job_ids: Sequence[str] = DEMO_JOB_IDS,
    seed: int = DEMO_SEED,
    now: Optional[datetime] = None,
) -> List[Assessment]:
    """Return one generated assessment per job id, reproducible for ``seed``."""

    rng = np.random.default_rng(seed)
    return [generate_assessment(job_id, rng, now=now) for job_id in job_ids]


def screening_assessment(job_id: str = "job-1") -> Assessment:
    """Return a fixed screening questionnaire with conditional questions.

    Layout::

        section-basics
          q-relocate   single-choice Yes/No, required
          q-city       short-text, required, shown when q-relocate == "Yes"
          q-years      numeric 0..50, required
        section-skills
          q-stack      multi-choice, required
          q-level      single-choice, shown when q-relocate in {"Yes", "Maybe"}
          q-portfolio  file-upload, optional
          q-summary    long-text 20..500, optional
    """

    basics = Section(
        id="section-basics",
        title="Basics",
        questions=(
            Question(
                id="q-relocate",
                type=QuestionType.SINGLE_CHOICE,
                prompt="Are you willing to relocate?",
                required=True,
                options=("Yes", "No", "Maybe"),
            ),
            Question(
                id="q-city",
                type=QuestionType.SHORT_TEXT,
                prompt="Which city would you move to?",
                required=True,
                validation=ValidationRules(min_length=2, max_length=80),
                conditional_on=ConditionalRule(question_id="q-relocate", value="Yes"),
            ),
            Question(
                id="q-years",
                type=QuestionType.NUMERIC,
                prompt="Years of professional experience?",
                required=True,
                validation=ValidationRules(min=0, max=50),
            ),
        ),
    )
    skills = Section(
        id="section-skills",
        title="Skills",
        questions=(
            Question(
                id="q-stack",
                type=QuestionType.MULTI_CHOICE,
                prompt="Which technologies have you used?",
                required=True,
                options=("React", "TypeScript", "Python", "SQL"),
            ),
            Question(
                id="q-level",
                type=QuestionType.SINGLE_CHOICE,
                prompt="Preferred seniority level?",
                required=False,
                options=("Junior", "Mid", "Senior"),
                conditional_on=ConditionalRule(
                    question_id="q-relocate", value=("Yes", "Maybe")
                ),
            ),
            Question(
                id="q-portfolio",
                type=QuestionType.FILE_UPLOAD,
                prompt="Upload your portfolio",
                required=False,
            ),
            Question(
                id="q-summary",
                type=QuestionType.LONG_TEXT,
                prompt="Tell us about a project you are proud of.",
                required=False,
                validation=ValidationRules(min_length=20, max_length=500),
            ),
        ),
    )

    return Assessment(
        id=assessment_id_for_job(job_id),
        job_id=job_id,
        title=f"Screening for {job_id}",
        description="Initial screening questionnaire.",
        sections=(basics, skills),
        created_at=datetime(2026, 1, 15, 9, 0, tzinfo=timezone.utc),
    )
