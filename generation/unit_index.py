"""
Unit Index — question bank partitioned by (unit, kind).

Read-only view derived from a bank. There are no mutators: a new bank means
a new index.
"""

import logging
from typing import Dict, Iterable, Tuple

from ingestion.schemas import Question, QuestionKind

log = logging.getLogger("generation.pipeline")

UNITS = (1, 2, 3, 4, 5)


class UnitIndex:
    """Pools of questions keyed by (unit, kind)."""

    def __init__(self, pools: Dict[Tuple[int, QuestionKind], Tuple[Question, ...]]):
        self._pools = dict(pools)

    @classmethod
    def from_bank(cls, questions: Iterable[Question]) -> "UnitIndex":
        questions = tuple(questions)
        pools = {
            (unit, kind): tuple(q for q in questions if q.unit == unit and q.kind == kind)
            for unit in UNITS
            for kind in QuestionKind
        }
        index = cls(pools)
        for kind, per_unit in index.counts().items():
            log.info(f"[INDEX] {kind.value} by unit: {per_unit}")
        return index

    def pool(self, unit: int, kind: QuestionKind) -> Tuple[Question, ...]:
        """Questions for one (unit, kind); empty for units outside 1-5."""
        return self._pools.get((unit, kind), ())

    def pool_size(self, unit: int, kind: QuestionKind) -> int:
        return len(self.pool(unit, kind))

    def counts(self) -> Dict[QuestionKind, Dict[int, int]]:
        """{kind: {unit: pool size}} for every unit and kind."""
        return {
            kind: {unit: self.pool_size(unit, kind) for unit in UNITS}
            for kind in QuestionKind
        }
