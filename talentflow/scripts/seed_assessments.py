"""TalentFlow – Seed demo assessments.

Generates one reproducible demo assessment per job id and either writes
the documents to the ``assessments`` table or prints them as JSON.

Example
-------

    python -m talentflow.scripts.seed_assessments --job-ids job-1 job-2 job-3

    python -m talentflow.scripts.seed_assessments --seed 42 --dry-run
"""

from __future__ import annotations

import argparse
import json
from typing import Optional, Sequence

from talentflow.assessment.documents import to_document
from talentflow.assessment.fixtures import DEMO_JOB_IDS, DEMO_SEED, seed_assessments
from talentflow.core.logging import get_logger


logger = get_logger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate demo assessments and store them in the runtime DB.",
    )

    parser.add_argument(
        "--job-ids",
        nargs="+",
        default=list(DEMO_JOB_IDS),
        help="Job identifiers to generate assessments for (default: job-1 job-2 job-3)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEMO_SEED,
        help=f"Random seed for the generator (default: {DEMO_SEED})",
    )
    parser.add_argument(
        "--skip-existing",
        action="store_true",
        help="Do not overwrite jobs that already have an assessment",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated documents as JSON instead of saving them",
    )

    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    assessments = seed_assessments(job_ids=args.job_ids, seed=args.seed)

    if args.dry_run:
        print(json.dumps([to_document(a) for a in assessments], indent=2))
        return

    from talentflow.assessment.storage import AssessmentStorage
    from talentflow.core.database import get_db_manager

    storage = AssessmentStorage(db_manager=get_db_manager())

    saved = 0
    for assessment in assessments:
        if args.skip_existing and storage.get_by_job_id(assessment.job_id) is not None:
            logger.info("Skipping job=%s: assessment already exists", assessment.job_id)
            continue
        storage.save(assessment)
        saved += 1

    print(f"Seeded {saved} assessment(s) with seed={args.seed}")


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
