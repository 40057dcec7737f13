"""
Paper templates — fixed quota tables.

Each template lists (unit, kind, count) requirements in draw order. The
multiple-choice block comes first so the paper reads Q1-Q5 MCQ, Q6-Q10
fill-in-the-blank.
"""

from typing import Dict, Optional, Tuple

from ingestion.schemas import QuestionKind
from generation.schemas import QuotaRequirement

MC = QuestionKind.MULTIPLE_CHOICE
FIB = QuestionKind.FILL_IN_THE_BLANK

QUOTA_TABLES: Dict[str, Tuple[QuotaRequirement, ...]] = {
    # Mid 1: 2 MCQ + 2 FIB from Unit 1, 2 MCQ + 2 FIB from Unit 2, 1 MCQ + 1 FIB from Unit 3
    "mid1": (
        QuotaRequirement(unit=1, kind=MC, count=2),
        QuotaRequirement(unit=2, kind=MC, count=2),
        QuotaRequirement(unit=3, kind=MC, count=1),
        QuotaRequirement(unit=1, kind=FIB, count=2),
        QuotaRequirement(unit=2, kind=FIB, count=2),
        QuotaRequirement(unit=3, kind=FIB, count=1),
    ),
    # Mid 2: 1 MCQ + 1 FIB from Unit 3, 2 MCQ + 2 FIB from Unit 4, 2 MCQ + 2 FIB from Unit 5
    "mid2": (
        QuotaRequirement(unit=3, kind=MC, count=1),
        QuotaRequirement(unit=4, kind=MC, count=2),
        QuotaRequirement(unit=5, kind=MC, count=2),
        QuotaRequirement(unit=3, kind=FIB, count=1),
        QuotaRequirement(unit=4, kind=FIB, count=2),
        QuotaRequirement(unit=5, kind=FIB, count=2),
    ),
}

PAPER_LABELS: Dict[str, str] = {
    "mid1": "Mid 1",
    "mid2": "Mid 2",
}


def get_quota(paper_type: Optional[str]) -> Tuple[QuotaRequirement, ...]:
    """Requirements for a template; KeyError for unknown ids."""
    return QUOTA_TABLES[paper_type]


def total_questions(paper_type: str) -> int:
    return sum(req.count for req in get_quota(paper_type))
