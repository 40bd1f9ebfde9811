"""TalentFlow – Assessment builder operations.

Structural edits used while an assessment is being authored. Every
operation is a pure function: it takes a document and returns a new one,
never touching storage.

Operations addressed by an id that no longer exists (stale builder state)
are no-ops and return the input document unchanged. Deleting a question
that other questions reference through ``conditional_on`` leaves the
references dangling; use :func:`talentflow.assessment.integrity.check_assessment`
to find them before saving.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Iterable, Optional, Union

from talentflow.assessment.config import AssessmentConfig
from talentflow.assessment.types import (
    Assessment,
    ConditionalRule,
    Question,
    QuestionType,
    Section,
    ValidationRules,
)
from talentflow.core.ids import (
    assessment_id_for_job,
    generate_question_id,
    generate_section_id,
)
from talentflow.core.logging import get_logger


logger = get_logger(__name__)

_DEFAULT_CONFIG = AssessmentConfig()

_SECTION_FIELDS = frozenset({"title"})
_QUESTION_FIELDS = frozenset(
    {"type", "prompt", "required", "options", "validation", "conditional_on"}
)


# ============================================================================
# Assessment level
# ============================================================================


def new_assessment(
    job_id: str,
    job_title: str,
    *,
    description: str = "",
    created_at: Optional[datetime] = None,
) -> Assessment:
    """Create the empty draft assessment for a job that has none yet."""

    kwargs: dict[str, Any] = {}
    if created_at is not None:
        kwargs["created_at"] = created_at
    return Assessment(
        id=assessment_id_for_job(job_id),
        job_id=job_id,
        title=f"Assessment for {job_title}",
        description=description,
        sections=(),
        **kwargs,
    )


# ============================================================================
# Sections
# ============================================================================


def add_section(
    assessment: Assessment,
    *,
    title: Optional[str] = None,
    config: Optional[AssessmentConfig] = None,
) -> Assessment:
    """Append an empty section with a generated id."""

    cfg = config or _DEFAULT_CONFIG
    if title is None:
        title = cfg.default_section_title.format(number=len(assessment.sections) + 1)
    section = Section(id=generate_section_id(), title=title, questions=())
    return replace(assessment, sections=assessment.sections + (section,))


def update_section(assessment: Assessment, section_id: str, **updates: Any) -> Assessment:
    """Apply field updates (currently only ``title``) to a section."""

    unknown = set(updates) - _SECTION_FIELDS
    if unknown:
        raise ValueError(f"Unknown section field(s): {', '.join(sorted(unknown))}")

    if assessment.find_section(section_id) is None:
        logger.debug("update_section: no section %s in %s", section_id, assessment.id)
        return assessment

    sections = tuple(
        replace(section, **updates) if section.id == section_id else section
        for section in assessment.sections
    )
    return replace(assessment, sections=sections)


def delete_section(assessment: Assessment, section_id: str) -> Assessment:
    """Remove a section and all of its questions."""

    if assessment.find_section(section_id) is None:
        logger.debug("delete_section: no section %s in %s", section_id, assessment.id)
        return assessment

    sections = tuple(s for s in assessment.sections if s.id != section_id)
    return replace(assessment, sections=sections)


# ============================================================================
# Questions
# ============================================================================


def default_question(
    question_type: Union[QuestionType, str],
    section_id: str,
    config: Optional[AssessmentConfig] = None,
) -> Question:
    """Build a new question with type-appropriate defaults."""

    cfg = config or _DEFAULT_CONFIG
    qtype = QuestionType(question_type)

    options = None
    validation = None
    if qtype.is_choice:
        options = tuple(cfg.default_choice_options)
    elif qtype.is_text:
        validation = ValidationRules(
            min_length=cfg.default_text_min_length,
            max_length=cfg.default_text_max_length,
        )
    elif qtype == QuestionType.NUMERIC:
        validation = ValidationRules(
            min=cfg.default_numeric_min,
            max=cfg.default_numeric_max,
        )

    return Question(
        id=generate_question_id(section_id),
        type=qtype,
        prompt="",
        required=False,
        options=options,
        validation=validation,
    )


def add_question(
    assessment: Assessment,
    section_id: str,
    question_type: Union[QuestionType, str],
    *,
    config: Optional[AssessmentConfig] = None,
) -> Assessment:
    """Append a new question of ``question_type`` to a section.

    The new question is the last one of the section in the returned
    document.
    """

    section = assessment.find_section(section_id)
    if section is None:
        logger.debug("add_question: no section %s in %s", section_id, assessment.id)
        return assessment

    question = default_question(question_type, section_id, config)
    updated = replace(section, questions=section.questions + (question,))
    sections = tuple(updated if s.id == section_id else s for s in assessment.sections)
    return replace(assessment, sections=sections)


def _normalise_question_updates(updates: dict[str, Any]) -> dict[str, Any]:
    unknown = set(updates) - _QUESTION_FIELDS
    if unknown:
        raise ValueError(f"Unknown question field(s): {', '.join(sorted(unknown))}")

    normalised = dict(updates)
    if "type" in normalised:
        normalised["type"] = QuestionType(normalised["type"])
    if normalised.get("options") is not None:
        normalised["options"] = tuple(normalised["options"])
    rule = normalised.get("conditional_on")
    if rule is not None and isinstance(rule.value, (list, set, frozenset)):
        normalised["conditional_on"] = ConditionalRule(
            question_id=rule.question_id, value=tuple(rule.value)
        )
    return normalised


def _map_question(
    assessment: Assessment, question_id: str, fn: Callable[[Question], Question]
) -> Assessment:
    sections = []
    for section in assessment.sections:
        if any(q.id == question_id for q in section.questions):
            section = replace(
                section,
                questions=tuple(fn(q) if q.id == question_id else q for q in section.questions),
            )
        sections.append(section)
    return replace(assessment, sections=tuple(sections))


def update_question(assessment: Assessment, question_id: str, **updates: Any) -> Assessment:
    """Apply field updates to a question addressed by id.

    Updatable fields: ``type``, ``prompt``, ``required``, ``options``,
    ``validation`` and ``conditional_on``.

    Raises:
        ValueError: If ``updates`` names an unknown field.
    """

    normalised = _normalise_question_updates(updates)
    if assessment.find_question(question_id) is None:
        logger.debug("update_question: no question %s in %s", question_id, assessment.id)
        return assessment

    return _map_question(assessment, question_id, lambda q: replace(q, **normalised))


def delete_question(assessment: Assessment, question_id: str) -> Assessment:
    """Remove a question. References to it are left as they are."""

    if assessment.find_question(question_id) is None:
        logger.debug("delete_question: no question %s in %s", question_id, assessment.id)
        return assessment

    sections = tuple(
        replace(s, questions=tuple(q for q in s.questions if q.id != question_id))
        for s in assessment.sections
    )
    return replace(assessment, sections=sections)


def set_conditional(
    assessment: Assessment,
    question_id: str,
    controller_id: str,
    value: Union[str, Iterable[str]],
) -> Assessment:
    """Make a question visible only when ``controller_id`` matches ``value``."""

    rule_value: Union[str, tuple[str, ...]]
    if isinstance(value, str):
        rule_value = value
    else:
        rule_value = tuple(value)
    rule = ConditionalRule(question_id=controller_id, value=rule_value)
    return update_question(assessment, question_id, conditional_on=rule)


def clear_conditional(assessment: Assessment, question_id: str) -> Assessment:
    """Remove a question's visibility condition."""

    return update_question(assessment, question_id, conditional_on=None)
