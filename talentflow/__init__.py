"""TalentFlow – top-level package exports.

This module re-exports the assessment engine components most callers
need.
"""

from talentflow.assessment.engine import AssessmentRuleEngine
from talentflow.assessment.service import AssessmentService
from talentflow.assessment.types import Assessment, Question, QuestionType, Section
