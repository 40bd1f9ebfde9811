"""
TalentFlow: ID Generation Utilities

This module contains helper functions for generating unique identifiers
used throughout the system. Centralising ID generation ensures
consistency and makes it easier to change ID formats in future
iterations.

Key responsibilities:
- Generate UUID-based identifiers
- Provide readable, prefixed ids for assessment sections and questions
- Derive the canonical assessment id for a job

External dependencies:
- uuid: Standard library UUID generation

Database tables accessed:
- None (pure utility functions)

Thread safety: Thread-safe (stateless functions)

Author: TalentFlow Team
Created: 2026-10-12
Last Modified: 2026-10-14
Status: Development
Version: v0.1.0
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

import uuid

# ============================================================================
# Public API
# ============================================================================


def generate_uuid() -> str:
    """Generate a random UUIDv4 string.

    Returns:
        A UUID string in standard 8-4-4-4-12 hexadecimal format.
    """

    return str(uuid.uuid4())


def generate_short_id(length: int = 12) -> str:
    """Generate a compact random hexadecimal identifier.

    Args:
        length: Number of hex characters to keep (1-32).

    Raises:
        ValueError: If ``length`` is outside the supported range.
    """

    if not 1 <= length <= 32:
        raise ValueError("length must be between 1 and 32")
    return uuid.uuid4().hex[:length]


def generate_section_id() -> str:
    """Generate a unique identifier for a new assessment section.

    Returns:
        A string of the form ``section-<hex>``.
    """

    return f"section-{generate_short_id()}"


def generate_question_id(section_id: str) -> str:
    """Generate a unique identifier for a question inside ``section_id``.

    Returns:
        A string of the form ``q-<section_id>-<hex>``.
    """

    return f"q-{section_id}-{generate_short_id()}"


def assessment_id_for_job(job_id: str) -> str:
    """Return the canonical assessment identifier for a job.

    Each job owns at most one assessment, so the id is derived from the
    job id rather than generated.
    """

    return f"assessment-{job_id}"
