"""TalentFlow – Assessment storage helpers.

This module provides thin persistence helpers for assessment documents
and submitted response sets in the runtime database. Both stores treat
their payload as an opaque JSONB document: assessments are always
written as a whole (idempotent upsert keyed by id) and responses are
stored without schema enforcement, since validation is the engine's job.

Database tables accessed (runtime_db via DatabaseManager):
- assessments
- assessment_responses

Thread safety: Not thread-safe; intended for single-threaded callers.

Author: TalentFlow Team
Created: 2026-10-13
Last Modified: 2026-10-16
Status: Development
Version: v0.1.0
"""

from __future__ import annotations

# ============================================================================
# Imports
# ============================================================================

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from psycopg2.extras import Json

from talentflow.assessment.documents import (
    from_document,
    responses_to_document,
    to_document,
)
from talentflow.assessment.types import Assessment, StoredResponses
from talentflow.core.database import DatabaseManager
from talentflow.core.logging import get_logger
from talentflow.core.types import RawResponses

# ============================================================================
# Module setup
# ============================================================================

logger = get_logger(__name__)


@dataclass
class AssessmentStorage:
    """Document store for assessments.

    The expected schema (see migration ``0001``) is::

        assessments(
            assessment_id TEXT PRIMARY KEY,
            job_id        TEXT,
            title         TEXT,
            document      JSONB,
            created_at    TIMESTAMPTZ,
            updated_at    TIMESTAMPTZ
        )

    Attributes:
        db_manager: DatabaseManager instance for connection management
    """

    db_manager: DatabaseManager

    # ========================================================================
    # Public API: writes
    # ========================================================================

    def save(self, assessment: Assessment) -> Assessment:
        """Upsert the full document for ``assessment``.

        Saving the same document twice leaves a single row with the same
        content; there are no partial updates.
        """

        sql = """
            INSERT INTO assessments (
                assessment_id,
                job_id,
                title,
                document,
                created_at,
                updated_at
            ) VALUES (%s, %s, %s, %s, %s, NOW())
            ON CONFLICT (assessment_id) DO UPDATE SET
                job_id = EXCLUDED.job_id,
                title = EXCLUDED.title,
                document = EXCLUDED.document,
                updated_at = NOW()
        """

        with self.db_manager.get_runtime_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    sql,
                    (
                        assessment.id,
                        assessment.job_id,
                        assessment.title,
                        Json(to_document(assessment)),
                        assessment.created_at,
                    ),
                )
                conn.commit()
            finally:
                cursor.close()

        logger.info(
            "AssessmentStorage.save: assessment=%s job=%s sections=%d questions=%d",
            assessment.id,
            assessment.job_id,
            len(assessment.sections),
            assessment.question_count,
        )
        return assessment

    def delete(self, assessment_id: str) -> bool:
        """Delete an assessment; return whether a row was removed."""

        sql = "DELETE FROM assessments WHERE assessment_id = %s"

        with self.db_manager.get_runtime_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(sql, (assessment_id,))
                deleted = cursor.rowcount > 0
                conn.commit()
            finally:
                cursor.close()

        logger.info("AssessmentStorage.delete: assessment=%s deleted=%s", assessment_id, deleted)
        return deleted

    # ========================================================================
    # Public API: reads
    # ========================================================================

    def get(self, assessment_id: str) -> Optional[Assessment]:
        """Return the assessment with ``assessment_id`` or ``None``."""

        sql = "SELECT document FROM assessments WHERE assessment_id = %s"

        with self.db_manager.get_runtime_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(sql, (assessment_id,))
                row = cursor.fetchone()
            finally:
                cursor.close()

        if row is None:
            return None
        return from_document(row[0])

    def get_by_job_id(self, job_id: str) -> Optional[Assessment]:
        """Return the most recently saved assessment for ``job_id``."""

        sql = """
            SELECT document
            FROM assessments
            WHERE job_id = %s
            ORDER BY updated_at DESC
            LIMIT 1
        """

        with self.db_manager.get_runtime_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(sql, (job_id,))
                row = cursor.fetchone()
            finally:
                cursor.close()

        if row is None:
            return None
        return from_document(row[0])

    def list_all(self) -> List[Assessment]:
        """Return every stored assessment ordered by creation time."""

        sql = "SELECT document FROM assessments ORDER BY created_at ASC, assessment_id ASC"

        with self.db_manager.get_runtime_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(sql)
                rows = cursor.fetchall()
            finally:
                cursor.close()

        return [from_document(document) for (document,) in rows]


@dataclass
class ResponseStorage:
    """Store for submitted response sets, one per assessment.

    The expected schema (see migration ``0001``) is::

        assessment_responses(
            assessment_id TEXT PRIMARY KEY,
            responses     JSONB,
            submitted_at  TIMESTAMPTZ
        )
    """

    db_manager: DatabaseManager

    def save(
        self,
        assessment_id: str,
        responses: RawResponses,
        submitted_at: Optional[datetime] = None,
    ) -> StoredResponses:
        """Upsert the response set for ``assessment_id``."""

        if submitted_at is None:
            submitted_at = datetime.now(timezone.utc)
        payload = responses_to_document(responses)

        sql = """
            INSERT INTO assessment_responses (
                assessment_id,
                responses,
                submitted_at
            ) VALUES (%s, %s, %s)
            ON CONFLICT (assessment_id) DO UPDATE SET
                responses = EXCLUDED.responses,
                submitted_at = EXCLUDED.submitted_at
        """

        with self.db_manager.get_runtime_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(sql, (assessment_id, Json(payload), submitted_at))
                conn.commit()
            finally:
                cursor.close()

        logger.info(
            "ResponseStorage.save: assessment=%s answers=%d", assessment_id, len(payload)
        )
        return StoredResponses(
            assessment_id=assessment_id,
            responses=payload,
            submitted_at=submitted_at,
        )

    def get(self, assessment_id: str) -> Optional[StoredResponses]:
        """Return the stored responses for ``assessment_id`` or ``None``."""

        sql = """
            SELECT responses, submitted_at
            FROM assessment_responses
            WHERE assessment_id = %s
        """

        with self.db_manager.get_runtime_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(sql, (assessment_id,))
                row = cursor.fetchone()
            finally:
                cursor.close()

        if row is None:
            return None

        responses, submitted_at = row
        return StoredResponses(
            assessment_id=assessment_id,
            responses=dict(responses or {}),
            submitted_at=submitted_at,
        )

    def delete(self, assessment_id: str) -> bool:
        """Delete the response set for ``assessment_id``; return whether one existed."""

        sql = "DELETE FROM assessment_responses WHERE assessment_id = %s"

        with self.db_manager.get_runtime_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(sql, (assessment_id,))
                deleted = cursor.rowcount > 0
                conn.commit()
            finally:
                cursor.close()

        logger.info("ResponseStorage.delete: assessment=%s deleted=%s", assessment_id, deleted)
        return deleted

    def count_completed(self, assessment_ids: Sequence[str]) -> int:
        """Return how many of ``assessment_ids`` have stored responses."""

        if not assessment_ids:
            return 0

        sql = """
            SELECT COUNT(*)
            FROM assessment_responses
            WHERE assessment_id = ANY(%s)
        """

        with self.db_manager.get_runtime_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(sql, (list(assessment_ids),))
                row = cursor.fetchone()
            finally:
                cursor.close()

        return int(row[0]) if row is not None else 0
