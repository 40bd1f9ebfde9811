"""TalentFlow: Integration tests for assessment storage.

These tests exercise AssessmentStorage, ResponseStorage and
AssessmentService against a real runtime database. They require the
``assessments`` and ``assessment_responses`` tables created by the
Alembic migrations and are excluded from the default test run.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from talentflow.assessment import AssessmentService
from talentflow.assessment.fixtures import screening_assessment
from talentflow.assessment.storage import AssessmentStorage, ResponseStorage
from talentflow.core.database import get_db_manager


_JOB_ID = "job-integration-test"


@pytest.fixture
def service():  # type: ignore[no-untyped-def]
    db_manager = get_db_manager()
    svc = AssessmentService(
        assessments=AssessmentStorage(db_manager=db_manager),
        responses=ResponseStorage(db_manager=db_manager),
    )
    yield svc

    assessment_id = screening_assessment(_JOB_ID).id
    with db_manager.get_runtime_connection() as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "DELETE FROM assessment_responses WHERE assessment_id = %s", (assessment_id,)
            )
            cursor.execute("DELETE FROM assessments WHERE assessment_id = %s", (assessment_id,))
            conn.commit()
        finally:
            cursor.close()


@pytest.mark.integration
class TestAssessmentStorageIntegration:
    def test_save_and_reload_document(self, service: AssessmentService) -> None:
        assessment = screening_assessment(_JOB_ID)

        service.save(assessment)
        service.save(assessment)

        assert service.get(assessment.id) == assessment
        assert service.open_for_job(_JOB_ID, "ignored") == assessment

    def test_submit_and_read_results(self, service: AssessmentService) -> None:
        assessment = service.save(screening_assessment(_JOB_ID))
        submitted = datetime(2026, 4, 2, 8, 30, tzinfo=timezone.utc)

        result = service.submit(
            assessment,
            {"q-relocate": "No", "q-years": 3, "q-stack": ["Python", "SQL"]},
            submitted_at=submitted,
        )
        assert result.accepted

        stored = service.load_responses(assessment.id)
        assert stored is not None
        assert stored.responses["q-stack"] == ["Python", "SQL"]
        assert stored.submitted_at == submitted

        summary = service.results(assessment.id)
        assert summary is not None
        assert summary.answered_count == 3

    def test_delete(self, service: AssessmentService) -> None:
        assessment = service.save(screening_assessment(_JOB_ID))

        assert service.delete(assessment.id) is True
        assert service.get(assessment.id) is None
