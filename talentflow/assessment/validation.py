"""TalentFlow – Response validation.

This module validates raw answers against their questions. Raw answers
arrive exactly as a filling session stored them (strings, numbers, lists
of strings, ``None``); :func:`coerce_response` turns each one into the
tagged :data:`~talentflow.assessment.types.ResponseValue` variant the
question type expects, and :func:`validate_question` applies the rules in
a fixed order:

1. required check (absent, ``None``, ``""`` and empty collections all
   count as unanswered);
2. optional and unanswered is always valid;
3. shape check (``MALFORMED_VALUE``);
4. text length bounds / numeric value bounds;
5. option membership for choice questions (when strict).

The first failing rule wins. :func:`validate_assessment` accumulates the
errors of every visible question instead of stopping at the first.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

from talentflow.assessment.types import (
    ABSENT,
    Assessment,
    FileRef,
    MultiSelect,
    Question,
    QuestionType,
    ResponseValue,
    Scalar,
    ValidationError,
    ValidationErrorKind,
)
from talentflow.assessment.visibility import is_visible
from talentflow.core.types import RawResponses


class MalformedValueError(ValueError):
    """Raised when a raw answer does not have the shape its question expects."""


_COLLECTION_TYPES = (list, tuple, set, frozenset)


def is_empty_answer(value: Any) -> bool:
    """Return whether ``value`` counts as "not answered"."""

    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, _COLLECTION_TYPES):
        return len(value) == 0
    return False


def _coerce_number(value: Any) -> float | int:
    if isinstance(value, bool):
        raise MalformedValueError("Expected a number")
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise MalformedValueError("Expected a number") from None
    else:
        raise MalformedValueError("Expected a number")

    if isinstance(number, float) and not math.isfinite(number):
        raise MalformedValueError("Expected a finite number")
    return number


def coerce_response(question: Question, value: Any) -> ResponseValue:
    """Convert a raw answer into the variant selected by the question type.

    Raises:
        MalformedValueError: If the raw answer has the wrong shape.
    """

    if is_empty_answer(value):
        return ABSENT

    qtype = question.type
    if qtype == QuestionType.NUMERIC:
        return Scalar(_coerce_number(value))

    if qtype == QuestionType.MULTI_CHOICE:
        if not isinstance(value, _COLLECTION_TYPES):
            raise MalformedValueError("Expected a list of selected options")
        if not all(isinstance(item, str) for item in value):
            raise MalformedValueError("Selected options must be text")
        return MultiSelect(frozenset(value))

    if qtype == QuestionType.FILE_UPLOAD:
        if not isinstance(value, str):
            raise MalformedValueError("Expected a file name")
        return FileRef(value)

    # Single choice and both text types take a single string.
    if not isinstance(value, str):
        raise MalformedValueError("Expected text")
    return Scalar(value)


def _fmt_bound(bound: float) -> str:
    if isinstance(bound, float) and bound.is_integer():
        return str(int(bound))
    return str(bound)


def _error(
    kind: ValidationErrorKind, question: Question, message: str
) -> ValidationError:
    return ValidationError(kind=kind, question_id=question.id, message=message)


def validate_question(
    question: Question,
    value: Any,
    *,
    strict_options: bool = True,
) -> Optional[ValidationError]:
    """Validate a single raw answer against ``question``.

    Visibility is not checked here; callers validating a whole document
    should use :func:`validate_assessment`.

    Args:
        question: Question being answered.
        value: Raw answer, ``None`` when absent.
        strict_options: Reject choice answers outside ``question.options``.

    Returns:
        A :class:`ValidationError` describing the first failed rule, or
        ``None`` when the answer is acceptable.
    """

    if is_empty_answer(value):
        if question.required:
            return _error(
                ValidationErrorKind.REQUIRED, question, "This question is required"
            )
        return None

    try:
        coerced = coerce_response(question, value)
    except MalformedValueError as exc:
        return _error(ValidationErrorKind.MALFORMED_VALUE, question, str(exc))

    rules = question.validation

    if question.type.is_text and rules is not None and isinstance(coerced, Scalar):
        length = len(str(coerced.value))
        if rules.min_length is not None and length < rules.min_length:
            return _error(
                ValidationErrorKind.TOO_SHORT,
                question,
                f"Minimum length is {rules.min_length} characters",
            )
        if rules.max_length is not None and length > rules.max_length:
            return _error(
                ValidationErrorKind.TOO_LONG,
                question,
                f"Maximum length is {rules.max_length} characters",
            )

    is_numeric = question.type == QuestionType.NUMERIC
    if is_numeric and rules is not None and isinstance(coerced, Scalar):
        number = coerced.value
        if rules.min is not None and number < rules.min:
            return _error(
                ValidationErrorKind.BELOW_MIN,
                question,
                f"Minimum value is {_fmt_bound(rules.min)}",
            )
        if rules.max is not None and number > rules.max:
            return _error(
                ValidationErrorKind.ABOVE_MAX,
                question,
                f"Maximum value is {_fmt_bound(rules.max)}",
            )

    if question.type.is_choice and strict_options:
        options = set(question.options or ())
        if isinstance(coerced, MultiSelect):
            selected = sorted(coerced.values)
        elif isinstance(coerced, Scalar):
            selected = [str(coerced.value)]
        else:
            selected = []
        for choice in selected:
            if choice not in options:
                return _error(
                    ValidationErrorKind.UNKNOWN_OPTION,
                    question,
                    f"'{choice}' is not one of the available options",
                )

    return None


def validate_assessment(
    assessment: Assessment,
    responses: RawResponses,
    *,
    strict_options: bool = True,
) -> Dict[str, ValidationError]:
    """Validate every visible question of ``assessment``.

    Hidden questions are skipped entirely, including their required flag.
    The result maps question id to error in document order and is empty
    exactly when the responses are submittable.
    """

    errors: Dict[str, ValidationError] = {}
    for _, question in assessment.iter_questions():
        if not is_visible(question, responses):
            continue
        error = validate_question(
            question,
            responses.get(question.id),
            strict_options=strict_options,
        )
        if error is not None:
            errors[question.id] = error
    return errors


def is_submittable(
    assessment: Assessment,
    responses: RawResponses,
    *,
    strict_options: bool = True,
) -> bool:
    """Return whether ``responses`` pass validation for ``assessment``."""

    return not validate_assessment(assessment, responses, strict_options=strict_options)


__all__ = [
    "MalformedValueError",
    "coerce_response",
    "is_empty_answer",
    "is_submittable",
    "validate_assessment",
    "validate_question",
]
