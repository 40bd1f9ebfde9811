"""TalentFlow: Tests for the structural integrity pass."""

from __future__ import annotations

from talentflow.assessment import builder
from talentflow.assessment.fixtures import screening_assessment
from talentflow.assessment.integrity import check_assessment, dangling_references
from talentflow.assessment.types import IntegrityIssueKind


class TestCheckAssessment:
    def test_screening_assessment_is_clean(self) -> None:
        assert check_assessment(screening_assessment()) == []

    def test_deleted_controller_is_dangling(self) -> None:
        assessment = builder.delete_question(screening_assessment(), "q-relocate")

        issues = check_assessment(assessment)

        assert [(i.kind, i.question_id) for i in issues] == [
            (IntegrityIssueKind.DANGLING_REFERENCE, "q-city"),
            (IntegrityIssueKind.DANGLING_REFERENCE, "q-level"),
        ]
        assert all(i.target_id == "q-relocate" for i in issues)
        assert dangling_references(assessment) == issues

    def test_forward_and_self_references(self) -> None:
        assessment = builder.set_conditional(
            screening_assessment(), "q-relocate", "q-years", "5"
        )
        assessment = builder.set_conditional(assessment, "q-summary", "q-summary", "x")

        issues = check_assessment(assessment)

        assert [(i.kind, i.question_id) for i in issues] == [
            (IntegrityIssueKind.FORWARD_REFERENCE, "q-relocate"),
            (IntegrityIssueKind.FORWARD_REFERENCE, "q-summary"),
        ]
        assert dangling_references(assessment) == []

    def test_choice_question_without_options(self) -> None:
        assessment = builder.update_question(screening_assessment(), "q-stack", options=[])

        issues = check_assessment(assessment)

        assert len(issues) == 1
        assert issues[0].kind == IntegrityIssueKind.MISSING_OPTIONS
        assert issues[0].question_id == "q-stack"
        assert issues[0].target_id is None
