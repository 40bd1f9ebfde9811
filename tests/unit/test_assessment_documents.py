"""TalentFlow: Tests for assessment document (de)serialisation."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from talentflow.assessment.documents import (
    from_document,
    responses_to_document,
    to_document,
)
from talentflow.assessment.fixtures import screening_assessment
from talentflow.assessment.types import (
    ConditionalRule,
    DocumentFormatError,
    QuestionType,
    ValidationErrorKind,
    ValidationRules,
)
from talentflow.assessment.validation import validate_question


class TestToDocument:
    def test_document_uses_camel_case_keys(self) -> None:
        doc = to_document(screening_assessment())

        assert doc["id"] == "assessment-job-1"
        assert doc["jobId"] == "job-1"
        assert doc["createdAt"] == "2026-01-15T09:00:00+00:00"

        city = doc["sections"][0]["questions"][1]
        assert city == {
            "id": "q-city",
            "type": "short-text",
            "question": "Which city would you move to?",
            "required": True,
            "validation": {"minLength": 2, "maxLength": 80},
            "conditionalOn": {"questionId": "q-relocate", "value": "Yes"},
        }

    def test_set_valued_condition_becomes_list(self) -> None:
        doc = to_document(screening_assessment())

        level = doc["sections"][1]["questions"][1]
        assert level["conditionalOn"]["value"] == ["Yes", "Maybe"]
        assert "validation" not in level

    def test_document_is_json_serialisable(self) -> None:
        text = json.dumps(to_document(screening_assessment()))
        assert '"multi-choice"' in text


class TestFromDocument:
    def test_round_trip_preserves_assessment(self) -> None:
        assessment = screening_assessment()

        restored = from_document(json.loads(json.dumps(to_document(assessment))))

        assert restored == assessment

    def test_accepts_prompt_alias_and_zulu_timestamps(self) -> None:
        doc = {
            "id": "assessment-job-9",
            "jobId": "job-9",
            "title": "T",
            "createdAt": "2026-02-01T10:00:00Z",
            "sections": [
                {
                    "id": "s1",
                    "title": "S",
                    "questions": [
                        {
                            "id": "q1",
                            "type": "numeric",
                            "prompt": "How many?",
                            "validation": {"min": 0},
                            "conditionalOn": {"questionId": "q0", "value": ["a", "b"]},
                        }
                    ],
                }
            ],
        }

        assessment = from_document(doc)

        question = assessment.sections[0].questions[0]
        assert assessment.created_at == datetime(2026, 2, 1, 10, 0, tzinfo=timezone.utc)
        assert question.type == QuestionType.NUMERIC
        assert question.prompt == "How many?"
        assert question.required is False
        assert question.validation == ValidationRules(min=0)
        assert question.conditional_on == ConditionalRule(question_id="q0", value=("a", "b"))

    def test_naive_timestamp_is_treated_as_utc(self) -> None:
        assessment = from_document(
            {"id": "a", "jobId": "j", "createdAt": "2026-02-01T10:00:00"}
        )
        assert assessment.created_at.tzinfo is timezone.utc

    def test_missing_sections_yield_empty_assessment(self) -> None:
        assessment = from_document({"id": "a", "jobId": "j", "title": "Empty"})
        assert assessment.sections == ()

    @pytest.mark.parametrize(
        "doc",
        [
            [],
            {"jobId": "j"},
            {"id": "a"},
            {"id": "a", "jobId": "j", "createdAt": "yesterday"},
            {"id": "a", "jobId": "j", "sections": [{"title": "no id"}]},
            {
                "id": "a",
                "jobId": "j",
                "sections": [{"id": "s", "questions": [{"id": "q", "type": "matrix"}]}],
            },
            {
                "id": "a",
                "jobId": "j",
                "sections": [
                    {
                        "id": "s",
                        "questions": [
                            {
                                "id": "q",
                                "type": "short-text",
                                "conditionalOn": {"questionId": "p", "value": 5},
                            }
                        ],
                    }
                ],
            },
        ],
    )
    def test_malformed_documents_raise(self, doc: object) -> None:
        with pytest.raises(DocumentFormatError):
            from_document(doc)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "question",
        [
            {"id": "q", "type": "short-text", "validation": {"minLength": "5"}},
            {"id": "q", "type": "short-text", "validation": {"maxLength": 10.5}},
            {"id": "q", "type": "numeric", "validation": {"max": "100"}},
            {"id": "q", "type": "numeric", "validation": {"min": True}},
            {"id": "q", "type": "numeric", "validation": [0, 100]},
            {"id": "q", "type": "single-choice", "options": "Yes"},
            {"id": "q", "type": "multi-choice", "options": ["A", 2]},
            {"id": "q", "type": "short-text", "required": "false"},
            {"id": "q", "type": "short-text", "required": 1},
            {"id": "q", "type": "short-text", "question": 42},
            {"id": "q", "type": "short-text", "conditionalOn": "q0"},
        ],
    )
    def test_wrongly_typed_question_fields_raise(self, question: dict) -> None:
        doc = {"id": "a", "jobId": "j", "sections": [{"id": "s", "questions": [question]}]}

        with pytest.raises(DocumentFormatError):
            from_document(doc)

    def test_loaded_bounds_are_usable_by_validation(self) -> None:
        doc = {
            "id": "a",
            "jobId": "j",
            "sections": [
                {
                    "id": "s",
                    "questions": [
                        {
                            "id": "q",
                            "type": "short-text",
                            "required": True,
                            "validation": {"minLength": 5, "maxLength": 8},
                        }
                    ],
                }
            ],
        }

        question = from_document(doc).sections[0].questions[0]

        error = validate_question(question, "hello world")
        assert error is not None
        assert error.kind == ValidationErrorKind.TOO_LONG


class TestResponsesToDocument:
    def test_collections_become_lists(self) -> None:
        doc = responses_to_document(
            {"a": {"Z", "A"}, "b": ("x", "y"), "c": 3, "d": None, "e": ["k"]}
        )

        assert doc == {"a": ["A", "Z"], "b": ["x", "y"], "c": 3, "d": None, "e": ["k"]}
