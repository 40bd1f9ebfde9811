"""TalentFlow – Assessment engine configuration models.

This module defines a small Pydantic model describing configuration for
:class:`~talentflow.assessment.engine.AssessmentRuleEngine` instances:
validation strictness, the save-time integrity policy, and the defaults
the builder seeds new sections and questions with.

The environment-driven fields are populated by
:attr:`talentflow.core.config.TalentFlowConfig.assessment`.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class AssessmentConfig(BaseModel):
    """Configuration for an assessment rule engine.

    Attributes:
        strict_option_membership: Reject choice answers that are not one
            of the question's options.
        reject_invalid_references: Refuse to save documents whose
            integrity check reports issues (otherwise they are only
            logged).
        default_section_title: Format string for new section titles;
            receives the 1-based section number as ``{number}``.
        default_choice_options: Options seeded into new choice questions.
        default_text_min_length: ``min_length`` for new text questions.
        default_text_max_length: ``max_length`` for new text questions.
        default_numeric_min: ``min`` for new numeric questions.
        default_numeric_max: ``max`` for new numeric questions.
    """

    strict_option_membership: bool = True
    reject_invalid_references: bool = False
    default_section_title: str = "Section {number}"
    default_choice_options: List[str] = Field(
        default_factory=lambda: ["Option 1", "Option 2"], min_length=1
    )
    default_text_min_length: int = 0
    default_text_max_length: int = 1000
    default_numeric_min: float = 0
    default_numeric_max: float = 100
