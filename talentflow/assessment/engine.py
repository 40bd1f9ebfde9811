"""TalentFlow – Assessment rule engine.

This module provides :class:`AssessmentRuleEngine`, the single entry
point used by the builder, preview and results flows. The engine is
stateless between calls: every method is a pure function of the
documents and responses passed in, parameterised only by an
:class:`~talentflow.assessment.config.AssessmentConfig`.

Responsibilities:
- Conditional visibility (:mod:`talentflow.assessment.visibility`).
- Per-question and whole-document validation
  (:mod:`talentflow.assessment.validation`).
- Builder mutations (:mod:`talentflow.assessment.builder`).
- Optional integrity pass (:mod:`talentflow.assessment.integrity`).

Persistence is handled by :class:`~talentflow.assessment.service.AssessmentService`.
"""

from __future__ import annotations

# ============================================================================
# Imports
# ============================================================================

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from talentflow.assessment import builder, integrity, validation, visibility
from talentflow.assessment.config import AssessmentConfig
from talentflow.assessment.types import (
    Assessment,
    IntegrityIssue,
    Question,
    QuestionType,
    Section,
    ValidationError,
)
from talentflow.core.config import get_config
from talentflow.core.logging import get_logger
from talentflow.core.types import RawResponses

logger = get_logger(__name__)


# ============================================================================
# Engine
# ============================================================================


@dataclass
class AssessmentRuleEngine:
    """Evaluate and edit assessment documents.

    Attributes:
        config: Validation strictness and builder defaults. Defaults to
            the ``ASSESSMENT_*`` environment settings from
            :func:`talentflow.core.config.get_config`.

    Example:
        >>> engine = AssessmentRuleEngine()
        >>> draft = engine.new_assessment("job-1", "Frontend Developer")
        >>> draft = engine.add_section(draft)
        >>> draft = engine.add_question(draft, draft.sections[0].id, "numeric")
        >>> engine.validate_assessment(draft, {})
        {}
    """

    config: AssessmentConfig = field(default_factory=lambda: get_config().assessment)

    # ========================================================================
    # Visibility and validation
    # ========================================================================

    def is_visible(self, question: Question, responses: RawResponses) -> bool:
        """Return whether ``question`` is shown for ``responses``."""

        return visibility.is_visible(question, responses)

    def visible_questions(
        self, assessment: Assessment, responses: RawResponses
    ) -> List[Tuple[Section, Question]]:
        return visibility.visible_questions(assessment, responses)

    def validate(self, question: Question, value: Any) -> Optional[ValidationError]:
        """Validate one raw answer; visibility is the caller's concern."""

        return validation.validate_question(
            question,
            value,
            strict_options=self.config.strict_option_membership,
        )

    def validate_assessment(
        self, assessment: Assessment, responses: RawResponses
    ) -> Dict[str, ValidationError]:
        """Collect the validation errors of every visible question.

        Returns a mapping from question id to error; an empty mapping
        means the responses can be submitted.
        """

        errors = validation.validate_assessment(
            assessment,
            responses,
            strict_options=self.config.strict_option_membership,
        )
        logger.debug(
            "AssessmentRuleEngine.validate_assessment: assessment=%s answers=%d errors=%d",
            assessment.id,
            len(responses),
            len(errors),
        )
        return errors

    def is_submittable(self, assessment: Assessment, responses: RawResponses) -> bool:
        return not self.validate_assessment(assessment, responses)

    def check_assessment(self, assessment: Assessment) -> List[IntegrityIssue]:
        """Report dangling/forward references and choice questions without options."""

        return integrity.check_assessment(assessment)

    # ========================================================================
    # Builder operations
    # ========================================================================

    def new_assessment(self, job_id: str, job_title: str, description: str = "") -> Assessment:
        return builder.new_assessment(job_id, job_title, description=description)

    def add_section(self, assessment: Assessment, title: Optional[str] = None) -> Assessment:
        return builder.add_section(assessment, title=title, config=self.config)

    def update_section(self, assessment: Assessment, section_id: str, **updates: Any) -> Assessment:
        return builder.update_section(assessment, section_id, **updates)

    def delete_section(self, assessment: Assessment, section_id: str) -> Assessment:
        return builder.delete_section(assessment, section_id)

    def add_question(
        self,
        assessment: Assessment,
        section_id: str,
        question_type: Union[QuestionType, str],
    ) -> Assessment:
        return builder.add_question(
            assessment, section_id, question_type, config=self.config
        )

    def update_question(
        self, assessment: Assessment, question_id: str, **updates: Any
    ) -> Assessment:
        return builder.update_question(assessment, question_id, **updates)

    def delete_question(self, assessment: Assessment, question_id: str) -> Assessment:
        return builder.delete_question(assessment, question_id)

    def set_conditional(
        self,
        assessment: Assessment,
        question_id: str,
        controller_id: str,
        value: Union[str, Iterable[str]],
    ) -> Assessment:
        return builder.set_conditional(assessment, question_id, controller_id, value)

    def clear_conditional(self, assessment: Assessment, question_id: str) -> Assessment:
        return builder.clear_conditional(assessment, question_id)
