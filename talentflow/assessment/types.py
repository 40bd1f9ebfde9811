"""TalentFlow – Assessment document types.

This module defines the core data structures and enums used by the
assessment rule engine.

Key responsibilities:
- Define the questionnaire document model (Assessment, Section,
  Question, ValidationRules, ConditionalRule).
- Define the tagged response value variants the engine coerces raw
  answers into.
- Define the value objects returned by validation and integrity checks.

Documents are immutable: every collection is a tuple and every dataclass
is frozen, so builder operations always return new documents and callers
can share them freely.

Thread safety: Dataclasses are immutable value objects; this module
itself is stateless.

Author: TalentFlow Team
Created: 2026-10-12
Last Modified: 2026-10-16
Status: Development
Version: v0.1.0
"""

from __future__ import annotations

# ============================================================================
# Imports
# ============================================================================

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterator, Optional, Tuple, Union

# ============================================================================
# Question types
# ============================================================================


class QuestionType(str, Enum):
    """Closed set of question types supported by the builder."""

    SINGLE_CHOICE = "single-choice"
    MULTI_CHOICE = "multi-choice"
    SHORT_TEXT = "short-text"
    LONG_TEXT = "long-text"
    NUMERIC = "numeric"
    FILE_UPLOAD = "file-upload"

    @property
    def is_choice(self) -> bool:
        return self in (QuestionType.SINGLE_CHOICE, QuestionType.MULTI_CHOICE)

    @property
    def is_text(self) -> bool:
        return self in (QuestionType.SHORT_TEXT, QuestionType.LONG_TEXT)


# ============================================================================
# Document model
# ============================================================================


@dataclass(frozen=True)
class ValidationRules:
    """Optional per-question bounds.

    ``min_length``/``max_length`` only apply to text questions and
    ``min``/``max`` only to numeric questions; bounds set on other types
    are carried but ignored. A bound is active whenever it is not
    ``None``, including ``0``.
    """

    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min: Optional[float] = None
    max: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return (
            self.min_length is None
            and self.max_length is None
            and self.min is None
            and self.max is None
        )


@dataclass(frozen=True)
class ConditionalRule:
    """Visibility condition attached to a question.

    Attributes:
        question_id: Identifier of the controlling question.
        value: Either a single string the controller's answer must equal,
            or a tuple of accepted strings (set semantics, order kept
            only for stable serialisation).
    """

    question_id: str
    value: Union[str, Tuple[str, ...]]

    @property
    def is_set_valued(self) -> bool:
        return isinstance(self.value, tuple)


@dataclass(frozen=True)
class Question:
    """A single prompt inside a section.

    Attributes:
        id: Identifier, unique within the assessment.
        type: Question type.
        prompt: Display text.
        required: Whether a visible instance must be answered.
        options: Choice options for single/multi-choice questions.
        validation: Optional length/value bounds.
        conditional_on: Optional visibility condition.
    """

    id: str
    type: QuestionType
    prompt: str = ""
    required: bool = False
    options: Optional[Tuple[str, ...]] = None
    validation: Optional[ValidationRules] = None
    conditional_on: Optional[ConditionalRule] = None


@dataclass(frozen=True)
class Section:
    """Named, ordered group of questions."""

    id: str
    title: str
    questions: Tuple[Question, ...] = ()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Assessment:
    """Questionnaire document tied to one (opaque) job.

    Attributes:
        id: Assessment identifier (``assessment-<job_id>`` by convention).
        job_id: Foreign reference to a job; never dereferenced here.
        title: Display title.
        description: Free-text description.
        sections: Ordered sections.
        created_at: Creation timestamp (timezone-aware).
    """

    id: str
    job_id: str
    title: str
    description: str = ""
    sections: Tuple[Section, ...] = ()
    created_at: datetime = field(default_factory=_utc_now)

    def iter_questions(self) -> Iterator[Tuple[Section, Question]]:
        """Yield ``(section, question)`` pairs in document order."""

        for section in self.sections:
            for question in section.questions:
                yield section, question

    def find_question(self, question_id: str) -> Optional[Question]:
        for _, question in self.iter_questions():
            if question.id == question_id:
                return question
        return None

    def find_section(self, section_id: str) -> Optional[Section]:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    @property
    def question_count(self) -> int:
        return sum(len(section.questions) for section in self.sections)


# ============================================================================
# Response values
# ============================================================================


@dataclass(frozen=True)
class Scalar:
    """Single answer: text, a chosen option, or a number."""

    value: Union[str, int, float]


@dataclass(frozen=True)
class MultiSelect:
    """Unordered set of chosen options for a multi-choice question."""

    values: FrozenSet[str]


@dataclass(frozen=True)
class FileRef:
    """Label (file name) standing in for an uploaded file."""

    filename: str


@dataclass(frozen=True)
class Absent:
    """No answer, or an explicitly empty one."""


ABSENT = Absent()

ResponseValue = Union[Scalar, MultiSelect, FileRef, Absent]


@dataclass(frozen=True)
class StoredResponses:
    """A response set as persisted by the response store.

    Attributes:
        assessment_id: Assessment the responses belong to.
        responses: Raw answers keyed by question id.
        submitted_at: Submission timestamp.
    """

    assessment_id: str
    responses: Dict[str, Any]
    submitted_at: datetime


# ============================================================================
# Validation and integrity results
# ============================================================================


class ValidationErrorKind(str, Enum):
    """Kinds of per-question validation failures."""

    REQUIRED = "REQUIRED"
    TOO_SHORT = "TOO_SHORT"
    TOO_LONG = "TOO_LONG"
    BELOW_MIN = "BELOW_MIN"
    ABOVE_MAX = "ABOVE_MAX"
    MALFORMED_VALUE = "MALFORMED_VALUE"
    UNKNOWN_OPTION = "UNKNOWN_OPTION"


@dataclass(frozen=True)
class ValidationError:
    """Validation failure for a single question.

    This is a value, not an exception: validation results are collected
    so a caller can render every problem at once.
    """

    kind: ValidationErrorKind
    question_id: str
    message: str


class IntegrityIssueKind(str, Enum):
    """Structural problems detected by the optional pre-save pass."""

    DANGLING_REFERENCE = "DANGLING_REFERENCE"
    FORWARD_REFERENCE = "FORWARD_REFERENCE"
    MISSING_OPTIONS = "MISSING_OPTIONS"


@dataclass(frozen=True)
class IntegrityIssue:
    """Structural problem attached to a question.

    Attributes:
        kind: Issue kind.
        question_id: Question carrying the problem.
        message: Human-readable description.
        target_id: Referenced question id for reference issues.
    """

    kind: IntegrityIssueKind
    question_id: str
    message: str
    target_id: Optional[str] = None


# ============================================================================
# Exceptions
# ============================================================================


class DocumentFormatError(ValueError):
    """Raised when a stored document cannot be turned into an Assessment."""


class AssessmentIntegrityError(Exception):
    """Raised when saving a document with integrity issues is refused."""

    def __init__(self, issues: Tuple[IntegrityIssue, ...]) -> None:
        self.issues = issues
        summary = "; ".join(issue.message for issue in issues)
        super().__init__(f"Assessment has {len(issues)} integrity issue(s): {summary}")
