"""TalentFlow – Assessment service.

This module wires the stateless :class:`AssessmentRuleEngine` to the
document and response stores. It covers the flows of the hiring
dashboard:

- open the builder for a job (load the stored assessment or start an
  empty draft);
- save and delete whole documents;
- submit a response set, persisting it only when it validates;
- read back responses and the results view;
- dashboard statistics (total / completed / pending assessments).

The stores are addressed through small protocols so tests and tools can
substitute in-memory implementations for
:class:`~talentflow.assessment.storage.AssessmentStorage` and
:class:`~talentflow.assessment.storage.ResponseStorage`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Protocol, Sequence

from talentflow.assessment.engine import AssessmentRuleEngine
from talentflow.assessment.results import ResultsSummary, summarize_results
from talentflow.assessment.types import (
    Assessment,
    AssessmentIntegrityError,
    StoredResponses,
    ValidationError,
)
from talentflow.core.logging import get_logger
from talentflow.core.types import RawResponses


logger = get_logger(__name__)


class AssessmentStoreLike(Protocol):
    """Minimal protocol for the assessment document store."""

    def get(self, assessment_id: str) -> Optional[Assessment]:  # pragma: no cover - interface
        ...

    def get_by_job_id(self, job_id: str) -> Optional[Assessment]:  # pragma: no cover - interface
        ...

    def list_all(self) -> List[Assessment]:  # pragma: no cover - interface
        ...

    def save(self, assessment: Assessment) -> Assessment:  # pragma: no cover - interface
        ...

    def delete(self, assessment_id: str) -> bool:  # pragma: no cover - interface
        ...


class ResponseStoreLike(Protocol):
    """Minimal protocol for the response store."""

    def get(self, assessment_id: str) -> Optional[StoredResponses]:  # pragma: no cover - interface
        ...

    def save(  # pragma: no cover - interface
        self,
        assessment_id: str,
        responses: RawResponses,
        submitted_at: Optional[datetime] = None,
    ) -> StoredResponses:
        ...

    def delete(self, assessment_id: str) -> bool:  # pragma: no cover - interface
        ...

    def count_completed(self, assessment_ids: Sequence[str]) -> int:  # pragma: no cover - interface
        ...


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of a submission attempt.

    Attributes:
        assessment_id: Assessment the responses were submitted for.
        errors: Validation errors keyed by question id (empty when
            accepted).
        stored: Persisted response set when accepted.
    """

    assessment_id: str
    errors: Dict[str, ValidationError]
    stored: Optional[StoredResponses] = None

    @property
    def accepted(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class AssessmentOverview:
    """Row of the assessments dashboard list."""

    assessment_id: str
    job_id: str
    title: str
    section_count: int
    question_count: int
    completed: bool


@dataclass(frozen=True)
class AssessmentStatistics:
    total: int
    completed: int

    @property
    def pending(self) -> int:
        return self.total - self.completed


@dataclass
class AssessmentService:
    """Persistence façade around :class:`AssessmentRuleEngine`.

    Attributes:
        assessments: Document store.
        responses: Response store.
        engine: Rule engine used for validation and integrity checks.
    """

    assessments: AssessmentStoreLike
    responses: ResponseStoreLike
    engine: AssessmentRuleEngine = field(default_factory=AssessmentRuleEngine)

    # ========================================================================
    # Documents
    # ========================================================================

    def open_for_job(self, job_id: str, job_title: str) -> Assessment:
        """Return the stored assessment for ``job_id`` or a new empty draft.

        The draft is not persisted until :meth:`save` is called.
        """

        existing = self.assessments.get_by_job_id(job_id)
        if existing is not None:
            return existing

        logger.info("AssessmentService.open_for_job: starting new draft for job=%s", job_id)
        return self.engine.new_assessment(job_id, job_title)

    def get(self, assessment_id: str) -> Optional[Assessment]:
        return self.assessments.get(assessment_id)

    def save(self, assessment: Assessment) -> Assessment:
        """Persist the whole document.

        Integrity issues are logged; when the engine config sets
        ``reject_invalid_references`` they abort the save instead.

        Raises:
            AssessmentIntegrityError: If issues exist and rejection is
                enabled.
        """

        issues = self.engine.check_assessment(assessment)
        if issues:
            for issue in issues:
                logger.warning(
                    "AssessmentService.save: assessment=%s %s: %s",
                    assessment.id,
                    issue.kind.value,
                    issue.message,
                )
            if self.engine.config.reject_invalid_references:
                raise AssessmentIntegrityError(tuple(issues))

        return self.assessments.save(assessment)

    def delete(self, assessment_id: str) -> bool:
        """Delete a document together with its stored responses.

        Returns whether the document existed.
        """

        self.responses.delete(assessment_id)
        return self.assessments.delete(assessment_id)

    def list_overview(self) -> List[AssessmentOverview]:
        """Return dashboard rows for all stored assessments."""

        overview: List[AssessmentOverview] = []
        for assessment in self.assessments.list_all():
            overview.append(
                AssessmentOverview(
                    assessment_id=assessment.id,
                    job_id=assessment.job_id,
                    title=assessment.title,
                    section_count=len(assessment.sections),
                    question_count=assessment.question_count,
                    completed=self.responses.get(assessment.id) is not None,
                )
            )
        return overview

    def statistics(self) -> AssessmentStatistics:
        """Return total / completed / pending assessment counts."""

        ids = [assessment.id for assessment in self.assessments.list_all()]
        completed = self.responses.count_completed(ids)
        return AssessmentStatistics(total=len(ids), completed=completed)

    # ========================================================================
    # Responses
    # ========================================================================

    def submit(
        self,
        assessment: Assessment,
        responses: RawResponses,
        submitted_at: Optional[datetime] = None,
    ) -> SubmissionResult:
        """Validate and, when valid, persist a response set.

        Invalid submissions are not stored; the returned result carries
        every error so a caller can show them all at once.
        """

        errors = self.engine.validate_assessment(assessment, responses)
        if errors:
            logger.info(
                "AssessmentService.submit: assessment=%s rejected errors=%d",
                assessment.id,
                len(errors),
            )
            return SubmissionResult(assessment_id=assessment.id, errors=errors)

        stored = self.responses.save(assessment.id, responses, submitted_at)
        return SubmissionResult(assessment_id=assessment.id, errors={}, stored=stored)

    def load_responses(self, assessment_id: str) -> Optional[StoredResponses]:
        return self.responses.get(assessment_id)

    def results(self, assessment_id: str) -> Optional[ResultsSummary]:
        """Return the results view, or ``None`` if the assessment is unknown.

        An assessment without stored responses yields rows that all read
        "No response".
        """

        assessment = self.assessments.get(assessment_id)
        if assessment is None:
            return None

        stored = self.responses.get(assessment_id)
        if stored is None:
            return summarize_results(assessment, {})
        return summarize_results(assessment, stored.responses, stored.submitted_at)
