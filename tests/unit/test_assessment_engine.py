"""TalentFlow: Tests for the AssessmentRuleEngine façade.

The engine delegates to the rule modules; these tests check that its
configuration (option strictness, builder defaults) is applied and walk
through a complete authoring and filling session.
"""

from __future__ import annotations

from talentflow.assessment import AssessmentConfig, AssessmentRuleEngine
from talentflow.assessment.fixtures import screening_assessment
from talentflow.assessment.types import QuestionType, ValidationErrorKind


class TestAssessmentRuleEngine:
    def test_strict_options_follow_config(self) -> None:
        assessment = screening_assessment()
        question = assessment.find_question("q-stack")
        assert question is not None

        strict = AssessmentRuleEngine()
        lenient = AssessmentRuleEngine(config=AssessmentConfig(strict_option_membership=False))

        error = strict.validate(question, ["Rust"])
        assert error is not None
        assert error.kind == ValidationErrorKind.UNKNOWN_OPTION
        assert lenient.validate(question, ["Rust"]) is None

    def test_builder_defaults_follow_config(self) -> None:
        engine = AssessmentRuleEngine(
            config=AssessmentConfig(default_section_title="Part {number}", default_numeric_max=10)
        )

        draft = engine.add_section(engine.new_assessment("job-2", "Analyst"))
        draft = engine.add_question(draft, draft.sections[0].id, QuestionType.NUMERIC)

        assert draft.sections[0].title == "Part 1"
        question = draft.sections[0].questions[0]
        assert question.validation is not None
        assert question.validation.max == 10

    def test_authoring_and_filling_session(self) -> None:
        engine = AssessmentRuleEngine()

        draft = engine.new_assessment("job-3", "Frontend Developer")
        draft = engine.add_section(draft, title="Availability")
        section_id = draft.sections[0].id

        draft = engine.add_question(draft, section_id, "single-choice")
        draft = engine.add_question(draft, section_id, "numeric")
        first, second = draft.sections[0].questions

        draft = engine.update_question(
            draft, first.id, prompt="Can you start immediately?", required=True,
            options=["Yes", "No"],
        )
        draft = engine.update_question(draft, second.id, prompt="Notice period (weeks)?", required=True)
        draft = engine.set_conditional(draft, second.id, first.id, "No")

        assert engine.check_assessment(draft) == []

        shown = [q.id for _, q in engine.visible_questions(draft, {first.id: "Yes"})]
        assert shown == [first.id]
        assert engine.is_submittable(draft, {first.id: "Yes"}) is True

        errors = engine.validate_assessment(draft, {first.id: "No", second.id: 120})
        assert list(errors) == [second.id]
        assert errors[second.id].kind == ValidationErrorKind.ABOVE_MAX

        draft = engine.clear_conditional(draft, second.id)
        assert engine.is_visible(draft.sections[0].questions[1], {}) is True

        draft = engine.delete_question(draft, first.id)
        draft = engine.update_section(draft, section_id, title="Start date")
        assert draft.sections[0].title == "Start date"
        assert [q.id for q in draft.sections[0].questions] == [second.id]

        draft = engine.delete_section(draft, section_id)
        assert draft.sections == ()
