"""
Pydantic schemas for paper generation.
Supports: multiple-choice AND fill-in-the-blank questions.

Internal types use snake_case; everything that leaves the service is
serialised with camelCase aliases (paperDetails, imageUrl, optionA, ...).
"""

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ingestion.schemas import CellValue, QuestionKind


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─── Quota types ───────────────────────────────────────────────────────────────

class QuotaRequirement(BaseModel):
    """One (unit, kind, count) line of a paper template."""
    model_config = ConfigDict(frozen=True)

    unit: int = Field(..., ge=1, le=5)
    kind: QuestionKind
    count: int = Field(..., ge=1)


class Shortfall(_ApiModel):
    """A quota requirement the uploaded bank cannot satisfy."""
    unit: int
    kind: QuestionKind
    required: int
    found: int


# ─── Output types ──────────────────────────────────────────────────────────────

class PaperDetails(_ApiModel):
    """Header block of the paper, copied from the first selected question."""
    subject_code: CellValue = ""
    subject: CellValue = ""
    branch: CellValue = ""
    regulation: CellValue = ""
    year: CellValue = 0
    semester: CellValue = 0
    month: CellValue = ""


class _PaperQuestionBase(_ApiModel):
    question: str
    unit: int
    image_url: Optional[str] = None


class MultipleChoicePaperQuestion(_PaperQuestionBase):
    """MCQ as printed on the paper: stem plus four (nullable) options."""
    type: Literal["multiple-choice"] = "multiple-choice"
    option_a: Optional[str] = None
    option_b: Optional[str] = None
    option_c: Optional[str] = None
    option_d: Optional[str] = None


class FillInTheBlankPaperQuestion(_PaperQuestionBase):
    """Fill-in-the-blank question as printed on the paper (no option fields)."""
    type: Literal["fill-in-the-blank"] = "fill-in-the-blank"


PaperQuestion = Annotated[
    Union[MultipleChoicePaperQuestion, FillInTheBlankPaperQuestion],
    Field(discriminator="type"),
]


class GeneratedPaper(_ApiModel):
    """Complete generated paper."""
    paper_details: PaperDetails
    questions: List[PaperQuestion]


# ─── API responses ─────────────────────────────────────────────────────────────

class PoolSizes(_ApiModel):
    """Questions available per unit for one kind."""
    multiple_choice: Dict[int, int] = Field(default_factory=dict)
    fill_in_the_blank: Dict[int, int] = Field(default_factory=dict)


class SkippedRow(_ApiModel):
    """One dropped row, as reported to the caller."""
    row_number: int
    reason: str
    detail: str = ""


class BankSummaryResponse(_ApiModel):
    """Response from POST /api/bank — what the sheet contains before generating."""
    total_rows: int
    kept_rows: int
    skipped_rows: int
    skip_reasons: Dict[str, int] = Field(default_factory=dict)
    skipped: List[SkippedRow] = Field(default_factory=list)
    pools: PoolSizes
