"""
Pydantic schemas for question ingestion
Question entities recovered from spreadsheet rows, plus the skip log
"""

import enum
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, model_validator


class QuestionKind(str, enum.Enum):
    """Question kinds a paper can hold (value is the wire name)."""
    MULTIPLE_CHOICE = "multiple-choice"
    FILL_IN_THE_BLANK = "fill-in-the-blank"


# Spreadsheet cells arrive as text or numbers; identifying fields keep them verbatim.
CellValue = Union[str, int, float]


class Question(BaseModel):
    """
    A single validated question from the bank.

    Immutable once built. Option slots are only populated for
    multiple-choice questions; fill-in-the-blank questions keep all four None.
    """
    subject_code: CellValue = Field("", description="Subject code, e.g. CS101")
    subject: CellValue = ""
    branch: CellValue = ""
    regulation: CellValue = ""
    year: CellValue = 0
    semester: CellValue = 0
    month: CellValue = ""
    unit: int = Field(..., ge=1, le=5, description="Syllabus unit (1-5)")
    question: str = Field(..., min_length=1, description="Normalized question stem")
    image_url: Optional[str] = None
    kind: QuestionKind
    option_a: Optional[str] = None
    option_b: Optional[str] = None
    option_c: Optional[str] = None
    option_d: Optional[str] = None
    # Internal bookkeeping: 1-based position of the source row
    row_number: int = Field(0, ge=0)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "subject_code": "CS101",
                "subject": "Programming in C",
                "unit": 1,
                "question": "2+2=?",
                "kind": "multiple-choice",
                "option_a": "3",
                "option_b": "4",
                "option_c": "5",
                "option_d": "6",
                "row_number": 2,
            }
        }

    @model_validator(mode="after")
    def _options_only_for_mcq(self):
        if self.kind == QuestionKind.FILL_IN_THE_BLANK and any(
            opt is not None for opt in (self.option_a, self.option_b, self.option_c, self.option_d)
        ):
            raise ValueError("fill-in-the-blank questions cannot carry options")
        return self

    @property
    def is_multiple_choice(self) -> bool:
        return self.kind == QuestionKind.MULTIPLE_CHOICE

    @property
    def options(self) -> Optional[Tuple[Optional[str], Optional[str], Optional[str], Optional[str]]]:
        """The four option slots for MCQs, None for fill-in-the-blank."""
        if not self.is_multiple_choice:
            return None
        return (self.option_a, self.option_b, self.option_c, self.option_d)


class SkipReason:
    """Row skip reason constants"""
    INVALID_TYPE = "invalid_type"
    INSUFFICIENT_OPTIONS = "insufficient_options"
    OPTION_MARKER_NOT_FOUND = "option_marker_not_found"
    EMPTY_QUESTION = "empty_question"
    MISSING_SUBJECT_CODE = "missing_subject_code"
    INVALID_UNIT = "invalid_unit"


class RowSkip(BaseModel):
    """A row dropped while building the question bank."""
    row_number: int = Field(..., ge=1, description="1-based data row position")
    reason: str = Field(..., description="One of the SkipReason constants")
    detail: str = ""


class BankStatistics(BaseModel):
    """Statistics about a question bank build"""
    total_rows: int = Field(..., ge=0)
    kept_rows: int = Field(..., ge=0)
    skipped_rows: int = Field(..., ge=0)
    skip_reasons: Dict[str, int] = Field(default_factory=dict)
    skipped: List[RowSkip] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "total_rows": 42,
                "kept_rows": 39,
                "skipped_rows": 3,
                "skip_reasons": {"invalid_type": 1, "insufficient_options": 2},
                "skipped": [
                    {"row_number": 7, "reason": "invalid_type", "detail": "type code 'x'"},
                ],
            }
        }
