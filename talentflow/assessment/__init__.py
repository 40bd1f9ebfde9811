"""TalentFlow – Assessment package.

This package provides the assessment rule engine, including:

- :mod:`talentflow.assessment.types` – document model, response value
  variants and validation/integrity results.
- :mod:`talentflow.assessment.engine` – stateless rule engine façade.
- :mod:`talentflow.assessment.visibility`,
  :mod:`talentflow.assessment.validation`,
  :mod:`talentflow.assessment.builder`,
  :mod:`talentflow.assessment.integrity` – the rules themselves.
- :mod:`talentflow.assessment.storage` – PostgreSQL document and
  response stores.
- :mod:`talentflow.assessment.service` – persistence façade.
- :mod:`talentflow.assessment.config` – configuration models.

Higher-level code should generally import :class:`AssessmentRuleEngine`
and :class:`AssessmentService` from this package.
"""

from .config import AssessmentConfig
from .engine import AssessmentRuleEngine
from .service import AssessmentService, AssessmentStatistics, SubmissionResult
from .types import (
    Assessment,
    ConditionalRule,
    Question,
    QuestionType,
    Section,
    ValidationError,
    ValidationErrorKind,
    ValidationRules,
)

__all__ = [
    "AssessmentConfig",
    "AssessmentRuleEngine",
    "AssessmentService",
    "AssessmentStatistics",
    "SubmissionResult",
    "Assessment",
    "ConditionalRule",
    "Question",
    "QuestionType",
    "Section",
    "ValidationError",
    "ValidationErrorKind",
    "ValidationRules",
]
