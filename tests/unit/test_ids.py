"""
TalentFlow: Tests for ID Generation Utilities

Test suite for ``talentflow.core.ids``. Covers:
- UUID format and uniqueness
- Section and question id structure
- Canonical assessment ids
"""

from __future__ import annotations

import pytest

from talentflow.core.ids import (
    assessment_id_for_job,
    generate_question_id,
    generate_section_id,
    generate_short_id,
    generate_uuid,
)


class TestIDGeneration:
    """Tests for ID generation functions."""

    def test_generate_uuid_format(self) -> None:
        """Generated UUIDs should have 5 dash-separated components."""

        uuid_str = generate_uuid()
        parts = uuid_str.split("-")

        assert len(parts) == 5
        assert len(parts[0]) == 8
        assert len(parts[1]) == 4
        assert len(parts[4]) == 12

    def test_generate_uuid_unique(self) -> None:
        uuids = {generate_uuid() for _ in range(100)}
        assert len(uuids) == 100

    def test_generate_short_id_length_and_alphabet(self) -> None:
        short = generate_short_id()
        assert len(short) == 12
        int(short, 16)

        assert len(generate_short_id(length=4)) == 4

    @pytest.mark.parametrize("length", [0, 33, -1])
    def test_generate_short_id_rejects_bad_length(self, length: int) -> None:
        with pytest.raises(ValueError):
            generate_short_id(length=length)

    def test_section_ids_are_prefixed_and_unique(self) -> None:
        ids = {generate_section_id() for _ in range(50)}

        assert len(ids) == 50
        assert all(section_id.startswith("section-") for section_id in ids)

    def test_question_id_embeds_section_id(self) -> None:
        """Question ids should be scoped by the owning section id."""

        question_id = generate_question_id("section-abc")

        assert question_id.startswith("q-section-abc-")
        assert len(question_id) == len("q-section-abc-") + 12

    def test_assessment_id_for_job(self) -> None:
        assert assessment_id_for_job("job-1") == "assessment-job-1"
