"""TalentFlow – Assessment document (de)serialisation.

Assessments are stored and exchanged as JSON documents with the camelCase
keys used by the builder UI::

    {"id": ..., "jobId": ..., "title": ..., "description": ...,
     "createdAt": "2026-10-12T09:30:00+00:00",
     "sections": [{"id": ..., "title": ..., "questions": [
         {"id": ..., "type": "numeric", "question": ..., "required": true,
          "options": [...],
          "validation": {"minLength": 1, "maxLength": 10, "min": 0, "max": 100},
          "conditionalOn": {"questionId": ..., "value": "Yes" | [...]}}]}]}

Optional keys are omitted when unset. The prompt is stored under
``question``; ``prompt`` is accepted as an alias when loading.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from talentflow.assessment.types import (
    Assessment,
    ConditionalRule,
    DocumentFormatError,
    Question,
    QuestionType,
    Section,
    ValidationRules,
)
from talentflow.core.types import DocumentDict, RawResponses


_VALIDATION_KEYS = (
    ("min_length", "minLength"),
    ("max_length", "maxLength"),
    ("min", "min"),
    ("max", "max"),
)


# ============================================================================
# Serialisation
# ============================================================================


def _question_to_document(question: Question) -> DocumentDict:
    doc: DocumentDict = {
        "id": question.id,
        "type": question.type.value,
        "question": question.prompt,
        "required": question.required,
    }
    if question.options is not None:
        doc["options"] = list(question.options)
    if question.validation is not None:
        doc["validation"] = {
            key: getattr(question.validation, attr)
            for attr, key in _VALIDATION_KEYS
            if getattr(question.validation, attr) is not None
        }
    if question.conditional_on is not None:
        rule = question.conditional_on
        value = list(rule.value) if rule.is_set_valued else rule.value
        doc["conditionalOn"] = {"questionId": rule.question_id, "value": value}
    return doc


def to_document(assessment: Assessment) -> DocumentDict:
    """Serialise ``assessment`` into a JSON-compatible document."""

    return {
        "id": assessment.id,
        "jobId": assessment.job_id,
        "title": assessment.title,
        "description": assessment.description,
        "createdAt": assessment.created_at.isoformat(),
        "sections": [
            {
                "id": section.id,
                "title": section.title,
                "questions": [_question_to_document(q) for q in section.questions],
            }
            for section in assessment.sections
        ],
    }


def responses_to_document(responses: RawResponses) -> Dict[str, Any]:
    """Return a JSON-compatible copy of raw responses.

    Sets and tuples (multi-choice answers) become sorted lists.
    """

    doc: Dict[str, Any] = {}
    for question_id, value in responses.items():
        if isinstance(value, (set, frozenset)):
            value = sorted(value)
        elif isinstance(value, tuple):
            value = list(value)
        doc[question_id] = value
    return doc


# ============================================================================
# Deserialisation
# ============================================================================


def _require(doc: Mapping[str, Any], key: str, where: str) -> Any:
    try:
        return doc[key]
    except KeyError:
        raise DocumentFormatError(f"{where}: missing required key '{key}'") from None


def _parse_created_at(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        value = raw
    elif isinstance(raw, str):
        try:
            value = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            raise DocumentFormatError(f"Invalid createdAt timestamp: {raw!r}") from None
    else:
        raise DocumentFormatError(f"Invalid createdAt timestamp: {raw!r}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _validation_from_document(
    raw: Optional[Mapping[str, Any]], where: str
) -> Optional[ValidationRules]:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise DocumentFormatError(f"{where}: validation must be an object")

    bounds: Dict[str, Any] = {}
    for attr, key in _VALIDATION_KEYS:
        value = raw.get(key)
        # Lengths are character counts; value bounds may be fractional.
        is_length = attr in ("min_length", "max_length")
        allowed = (int,) if is_length else (int, float)
        if value is not None and (isinstance(value, bool) or not isinstance(value, allowed)):
            expected = "an integer" if is_length else "a number"
            raise DocumentFormatError(f"{where}: validation.{key} must be {expected}, got {value!r}")
        bounds[attr] = value
    return ValidationRules(**bounds)


def _options_from_document(raw: Any, where: str) -> Optional[tuple[str, ...]]:
    if raw is None:
        return None
    if not isinstance(raw, (list, tuple)) or not all(isinstance(item, str) for item in raw):
        raise DocumentFormatError(f"{where}: options must be a list of strings")
    return tuple(raw)


def _conditional_from_document(
    raw: Optional[Mapping[str, Any]], where: str
) -> Optional[ConditionalRule]:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise DocumentFormatError(f"{where}: conditionalOn must be an object")
    question_id = _require(raw, "questionId", where)
    value = _require(raw, "value", where)
    if isinstance(value, list):
        if not all(isinstance(item, str) for item in value):
            raise DocumentFormatError(f"{where}: conditionalOn values must be strings")
        value = tuple(value)
    elif not isinstance(value, str):
        raise DocumentFormatError(f"{where}: conditionalOn value must be a string or list")
    return ConditionalRule(question_id=question_id, value=value)


def _question_from_document(raw: Mapping[str, Any]) -> Question:
    if not isinstance(raw, Mapping):
        raise DocumentFormatError("question must be an object")
    question_id = _require(raw, "id", "question")
    where = f"question {question_id}"
    try:
        qtype = QuestionType(_require(raw, "type", where))
    except ValueError as exc:
        raise DocumentFormatError(f"{where}: {exc}") from None

    prompt = raw.get("question", raw.get("prompt", ""))
    if not isinstance(prompt, str):
        raise DocumentFormatError(f"{where}: question text must be a string")

    required = raw.get("required", False)
    if not isinstance(required, bool):
        raise DocumentFormatError(f"{where}: required must be true or false, got {required!r}")

    return Question(
        id=question_id,
        type=qtype,
        prompt=prompt,
        required=required,
        options=_options_from_document(raw.get("options"), where),
        validation=_validation_from_document(raw.get("validation"), where),
        conditional_on=_conditional_from_document(raw.get("conditionalOn"), where),
    )


def from_document(doc: Mapping[str, Any]) -> Assessment:
    """Build an :class:`Assessment` from a stored document.

    Raises:
        DocumentFormatError: If required keys are missing or have the
            wrong shape.
    """

    if not isinstance(doc, Mapping):
        raise DocumentFormatError("assessment document must be an object")

    sections = []
    for raw_section in doc.get("sections") or []:
        if not isinstance(raw_section, Mapping):
            raise DocumentFormatError("section must be an object")
        section_id = _require(raw_section, "id", "section")
        sections.append(
            Section(
                id=section_id,
                title=raw_section.get("title", ""),
                questions=tuple(
                    _question_from_document(q) for q in raw_section.get("questions") or []
                ),
            )
        )

    kwargs: Dict[str, Any] = {}
    if doc.get("createdAt") is not None:
        kwargs["created_at"] = _parse_created_at(doc["createdAt"])

    return Assessment(
        id=_require(doc, "id", "assessment"),
        job_id=_require(doc, "jobId", "assessment"),
        title=doc.get("title", ""),
        description=doc.get("description", ""),
        sections=tuple(sections),
        **kwargs,
    )
