"""TalentFlow: Tests for assessment and response storage.

AssessmentStorage and ResponseStorage are exercised against a stubbed
DatabaseManager that records the SQL and parameters issued and returns
canned rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from talentflow.assessment.documents import to_document
from talentflow.assessment.fixtures import screening_assessment
from talentflow.assessment.storage import AssessmentStorage, ResponseStorage


@dataclass
class _StubConn:
    parent: "_StubDBManager"

    def cursor(self):  # type: ignore[no-untyped-def]
        return _StubCursor(self.parent)

    def commit(self) -> None:  # type: ignore[no-untyped-def]
        self.parent.commits += 1

    def __enter__(self):  # type: ignore[no-untyped-def]
        return self

    def __exit__(self, exc_type, exc, tb):  # type: ignore[no-untyped-def]
        return False


@dataclass
class _StubDBManager:
    """Very small stub for DatabaseManager runtime connection.

    It records SQL calls and parameters, and serves ``rows`` to
    ``fetchone``/``fetchall`` in order.
    """

    calls: list[tuple[str, Any]]
    rows: list[Any]
    commits: int
    rowcount: int

    def __init__(self, rows: list[Any] | None = None, rowcount: int = 1) -> None:  # type: ignore[no-untyped-def]
        self.calls = []
        self.rows = list(rows or [])
        self.commits = 0
        self.rowcount = rowcount

    def get_runtime_connection(self):  # type: ignore[no-untyped-def]
        return _StubConn(self)


class _StubCursor:
    def __init__(self, parent: _StubDBManager) -> None:  # type: ignore[no-untyped-def]
        self._parent = parent
        self.rowcount = parent.rowcount

    def execute(self, sql, params=None):  # type: ignore[no-untyped-def]
        self._parent.calls.append((sql, params))

    def fetchone(self):  # type: ignore[no-untyped-def]
        return self._parent.rows.pop(0) if self._parent.rows else None

    def fetchall(self):  # type: ignore[no-untyped-def]
        rows, self._parent.rows = self._parent.rows, []
        return rows

    def close(self):  # type: ignore[no-untyped-def]
        return None


class TestAssessmentStorage:
    def test_save_emits_upsert_with_full_document(self) -> None:
        db = _StubDBManager()
        storage = AssessmentStorage(db_manager=db)  # type: ignore[arg-type]
        assessment = screening_assessment()

        assert storage.save(assessment) is assessment

        assert len(db.calls) == 1
        sql, params = db.calls[0]
        assert "INSERT INTO assessments" in sql
        assert "ON CONFLICT (assessment_id) DO UPDATE" in sql
        assert params[0] == "assessment-job-1"
        assert params[1] == "job-1"
        assert params[2] == "Screening for job-1"
        # psycopg2 Json adapter keeps the wrapped object on ``adapted``.
        assert params[3].adapted == to_document(assessment)
        assert params[4] == assessment.created_at
        assert db.commits == 1

    def test_get_parses_stored_document(self) -> None:
        assessment = screening_assessment()
        db = _StubDBManager(rows=[(to_document(assessment),)])
        storage = AssessmentStorage(db_manager=db)  # type: ignore[arg-type]

        assert storage.get("assessment-job-1") == assessment
        assert db.calls[0][1] == ("assessment-job-1",)

    def test_get_missing_returns_none(self) -> None:
        storage = AssessmentStorage(db_manager=_StubDBManager())  # type: ignore[arg-type]

        assert storage.get("assessment-missing") is None
        assert storage.get_by_job_id("job-missing") is None

    def test_get_by_job_id_orders_by_update_time(self) -> None:
        assessment = screening_assessment("job-2")
        db = _StubDBManager(rows=[(to_document(assessment),)])
        storage = AssessmentStorage(db_manager=db)  # type: ignore[arg-type]

        assert storage.get_by_job_id("job-2") == assessment
        sql, params = db.calls[0]
        assert "ORDER BY updated_at DESC" in sql
        assert params == ("job-2",)

    def test_list_all(self) -> None:
        docs = [(to_document(screening_assessment(j)),) for j in ("job-1", "job-2")]
        storage = AssessmentStorage(db_manager=_StubDBManager(rows=docs))  # type: ignore[arg-type]

        assert [a.job_id for a in storage.list_all()] == ["job-1", "job-2"]

    def test_delete_reports_rowcount(self) -> None:
        assert AssessmentStorage(db_manager=_StubDBManager(rowcount=1)).delete("a") is True  # type: ignore[arg-type]
        assert AssessmentStorage(db_manager=_StubDBManager(rowcount=0)).delete("a") is False  # type: ignore[arg-type]


class TestResponseStorage:
    def test_save_serialises_collections(self) -> None:
        db = _StubDBManager()
        storage = ResponseStorage(db_manager=db)  # type: ignore[arg-type]
        submitted = datetime(2026, 4, 2, tzinfo=timezone.utc)

        stored = storage.save(
            "assessment-job-1", {"q-stack": {"SQL", "Python"}, "q-years": 3}, submitted
        )

        sql, params = db.calls[0]
        assert "INSERT INTO assessment_responses" in sql
        assert params[0] == "assessment-job-1"
        assert params[1].adapted == {"q-stack": ["Python", "SQL"], "q-years": 3}
        assert params[2] == submitted
        assert stored.responses == {"q-stack": ["Python", "SQL"], "q-years": 3}
        assert db.commits == 1

    def test_save_defaults_submitted_at_to_now(self) -> None:
        storage = ResponseStorage(db_manager=_StubDBManager())  # type: ignore[arg-type]

        stored = storage.save("assessment-job-1", {})

        assert stored.submitted_at.tzinfo is not None

    def test_get(self) -> None:
        submitted = datetime(2026, 4, 2, tzinfo=timezone.utc)
        db = _StubDBManager(rows=[({"q-years": 3}, submitted)])
        storage = ResponseStorage(db_manager=db)  # type: ignore[arg-type]

        stored = storage.get("assessment-job-1")

        assert stored is not None
        assert stored.responses == {"q-years": 3}
        assert stored.submitted_at == submitted
        assert storage.get("assessment-job-1") is None

    def test_count_completed(self) -> None:
        db = _StubDBManager(rows=[(2,)])
        storage = ResponseStorage(db_manager=db)  # type: ignore[arg-type]

        assert storage.count_completed(["a", "b", "c"]) == 2
        assert db.calls[0][1] == (["a", "b", "c"],)

    def test_count_completed_without_ids_skips_query(self) -> None:
        db = _StubDBManager()
        storage = ResponseStorage(db_manager=db)  # type: ignore[arg-type]

        assert storage.count_completed([]) == 0
        assert db.calls == []

    def test_delete_reports_rowcount(self) -> None:
        db = _StubDBManager(rowcount=1)
        storage = ResponseStorage(db_manager=db)  # type: ignore[arg-type]

        assert storage.delete("assessment-job-1") is True
        sql, params = db.calls[0]
        assert "DELETE FROM assessment_responses" in sql
        assert params == ("assessment-job-1",)
        assert db.commits == 1

        assert ResponseStorage(db_manager=_StubDBManager(rowcount=0)).delete("a") is False  # type: ignore[arg-type]
