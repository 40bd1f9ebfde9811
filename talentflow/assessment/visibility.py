"""TalentFlow – Conditional visibility evaluation.

A question carrying a :class:`~talentflow.assessment.types.ConditionalRule`
is shown only while the controlling question's stored answer matches the
rule:

- single-string rule: the stored answer equals the string exactly (no
  trimming, no case folding, no numeric/string coercion);
- set-valued rule: the stored answer is a string contained in the set.

A collection-valued answer (for example a multi-choice controller) never
matches either kind of rule. Evaluation is non-transitive:
the controller's own visibility is not consulted, so a stale answer left
behind by a hidden controller still drives its dependents.
"""

from __future__ import annotations

from typing import List, Tuple

from talentflow.assessment.types import Assessment, Question, Section
from talentflow.core.types import RawResponses


def is_visible(question: Question, responses: RawResponses) -> bool:
    """Return whether ``question`` is visible for ``responses``."""

    rule = question.conditional_on
    if rule is None:
        return True

    controlling_value = responses.get(rule.question_id)
    if not isinstance(controlling_value, str):
        return False

    if rule.is_set_valued:
        return controlling_value in rule.value
    return controlling_value == rule.value


def visible_questions(
    assessment: Assessment, responses: RawResponses
) -> List[Tuple[Section, Question]]:
    """Return the visible ``(section, question)`` pairs in document order."""

    return [
        (section, question)
        for section, question in assessment.iter_questions()
        if is_visible(question, responses)
    ]
