"""
Paper Assembly Engine

Draws a complete paper from the unit index according to a fixed template.
Either every quota requirement is met or nothing is drawn: pool sizes are
checked up front and all shortfalls are reported together.
"""

import logging
from typing import List, Optional, Sequence

from ingestion.errors import PaperGenerationError
from ingestion.schemas import Question, QuestionKind
from generation.quota import PAPER_LABELS, QUOTA_TABLES, get_quota, total_questions
from generation.schemas import (
    FillInTheBlankPaperQuestion, GeneratedPaper, MultipleChoicePaperQuestion,
    PaperDetails, QuotaRequirement, Shortfall,
)
from generation.shuffler import Shuffler
from generation.unit_index import UnitIndex

log = logging.getLogger("generation.pipeline")

DETAIL_FIELDS = ("subject_code", "subject", "branch", "regulation", "year", "semester", "month")


class UnknownPaperTypeError(PaperGenerationError):
    def __init__(self, paper_type: Optional[str]):
        self.paper_type = paper_type
        valid = " or ".join(f'"{name}"' for name in QUOTA_TABLES)
        super().__init__(f"Invalid paperType. Use {valid}.")


class InsufficientQuestionsError(PaperGenerationError):
    """The bank cannot satisfy one or more quota requirements."""

    def __init__(self, paper_type: str, shortfalls: Sequence[Shortfall]):
        self.paper_type = paper_type
        self.shortfalls = list(shortfalls)
        super().__init__(describe_shortfalls(paper_type, self.shortfalls))


def describe_shortfalls(paper_type: str, shortfalls: Sequence[Shortfall]) -> str:
    """
    One sentence per question kind, listing every unmet requirement, e.g.
    "Insufficient multiple-choice questions for Mid 1: Need 2 from Unit 2 (found 1)"
    """
    label = PAPER_LABELS.get(paper_type, paper_type)
    parts = []
    for kind in QuestionKind:
        needs = [
            f"Need {s.required} from Unit {s.unit} (found {s.found})"
            for s in shortfalls if s.kind == kind
        ]
        if needs:
            parts.append(f"Insufficient {kind.value} questions for {label}: {', '.join(needs)}")
    return "; ".join(parts)


def find_shortfalls(requirements: Sequence[QuotaRequirement], index: UnitIndex) -> List[Shortfall]:
    """Every requirement whose pool is smaller than its count."""
    shortfalls = []
    for req in requirements:
        found = index.pool_size(req.unit, req.kind)
        if found < req.count:
            shortfalls.append(Shortfall(unit=req.unit, kind=req.kind, required=req.count, found=found))
    return shortfalls


def _to_paper_question(q: Question):
    """Strip internal fields from a bank question."""
    if q.is_multiple_choice:
        return MultipleChoicePaperQuestion(
            question=q.question,
            unit=q.unit,
            image_url=q.image_url,
            option_a=q.option_a,
            option_b=q.option_b,
            option_c=q.option_c,
            option_d=q.option_d,
        )
    return FillInTheBlankPaperQuestion(question=q.question, unit=q.unit, image_url=q.image_url)


def _paper_details(selected: Sequence[Question]) -> PaperDetails:
    """
    Header fields come from the first selected question. Sheets mixing
    subjects are not rejected, only logged.
    """
    first = selected[0]
    mismatched = sorted({
        field
        for q in selected[1:]
        for field in DETAIL_FIELDS
        if getattr(q, field) != getattr(first, field)
    })
    if mismatched:
        log.warning(f"[ASSEMBLE] Selected questions disagree on {mismatched}; using row {first.row_number}")
    return PaperDetails(**{field: getattr(first, field) for field in DETAIL_FIELDS})


def select_questions(
    requirements: Sequence[QuotaRequirement],
    index: UnitIndex,
    shuffler: Shuffler,
) -> List[Question]:
    """Fresh shuffle per requirement, first `count` of each, in template order."""
    selected: List[Question] = []
    for req in requirements:
        drawn = shuffler.sample(index.pool(req.unit, req.kind), req.count)
        log.info(
            f"[ASSEMBLE] Unit {req.unit} {req.kind.value}: drew rows "
            f"{[q.row_number for q in drawn]}"
        )
        selected.extend(drawn)
    return selected


def assemble_paper(
    paper_type: Optional[str],
    index: UnitIndex,
    shuffler: Optional[Shuffler] = None,
) -> GeneratedPaper:
    """
    Assemble a paper for a template.

    Args:
        paper_type: Template id ("mid1" | "mid2")
        index: Pools built from the uploaded bank
        shuffler: Randomness for the draw (process-wide default if omitted)

    Returns:
        GeneratedPaper with paper details and the selected questions

    Raises:
        UnknownPaperTypeError: template id not recognised
        InsufficientQuestionsError: one or more pools too small (all listed)
    """
    try:
        requirements = get_quota(paper_type)
    except KeyError:
        raise UnknownPaperTypeError(paper_type)

    shortfalls = find_shortfalls(requirements, index)
    if shortfalls:
        error = InsufficientQuestionsError(paper_type, shortfalls)
        log.warning(f"[ASSEMBLE] {error}")
        raise error

    selected = select_questions(requirements, index, shuffler or Shuffler())
    log.info(f"[ASSEMBLE] OK — {len(selected)}/{total_questions(paper_type)} questions for {PAPER_LABELS[paper_type]}")

    return GeneratedPaper(
        paper_details=_paper_details(selected),
        questions=[_to_paper_question(q) for q in selected],
    )
