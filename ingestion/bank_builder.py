"""
Question Bank Builder
Turns decoded spreadsheet rows into validated Question entities.

Row-level defects (bad type code, too few options, bad unit, empty stem or
subject code) drop the row and are recorded on the result; processing never
stops for a single bad row. Request-level defects (missing column, nothing
left) raise.
"""

import logging
import math
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ingestion.classifier import QuestionClassifier
from ingestion.errors import MissingColumnError, NoValidQuestionsError
from ingestion.normalizer import normalize_question_text
from ingestion.option_extractor import extract_options
from ingestion.schemas import (
    BankStatistics, CellValue, Question, QuestionKind, RowSkip, SkipReason,
)

log = logging.getLogger("generation.pipeline")

# ─── Column names ──────────────────────────────────────────────────────────────

QUESTION_COLUMN = "Question"
TYPE_COLUMN = "Type"
REQUIRED_COLUMNS = (QUESTION_COLUMN, TYPE_COLUMN)

# Question field → sheet column, with the default used when the cell is empty
IDENTIFYING_COLUMNS: Dict[str, Tuple[str, CellValue]] = {
    "subject_code": ("Subject Code", ""),
    "subject":      ("Subject", ""),
    "branch":       ("Branch", ""),
    "regulation":   ("Regulation", ""),
    "year":         ("Year", 0),
    "semester":     ("Sem", 0),
    "month":        ("Month", ""),
}
UNIT_COLUMN = "Unit"
IMAGE_URL_COLUMN = "Image Url"

MIN_UNIT = 1
MAX_UNIT = 5

LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


class QuestionBank:
    """Result of a bank build: the valid questions plus why other rows were dropped"""

    def __init__(self, questions: Iterable[Question], skipped: Iterable[RowSkip], total_rows: int):
        self.questions: Tuple[Question, ...] = tuple(questions)
        self.skipped: Tuple[RowSkip, ...] = tuple(skipped)
        self.total_rows = total_rows

    def __len__(self) -> int:
        return len(self.questions)

    def __iter__(self):
        return iter(self.questions)

    @property
    def statistics(self) -> BankStatistics:
        reasons: Dict[str, int] = {}
        for skip in self.skipped:
            reasons[skip.reason] = reasons.get(skip.reason, 0) + 1
        return BankStatistics(
            total_rows=self.total_rows,
            kept_rows=len(self.questions),
            skipped_rows=len(self.skipped),
            skip_reasons=reasons,
            skipped=list(self.skipped),
        )


class _RowRejected(Exception):
    """Internal signal: the current row is dropped."""

    def __init__(self, reason: str, detail: str = ""):
        super().__init__(detail)
        self.reason = reason
        self.detail = detail


# ─── Cell helpers ──────────────────────────────────────────────────────────────

def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _cell_value(value: Any, default: CellValue) -> CellValue:
    """Copy a cell verbatim; empty cells fall back to the default."""
    if _is_blank(value):
        return default
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return value
    # Dates and other rich cell types are kept as their text form
    return str(value)


def parse_unit(value: Any) -> Optional[int]:
    """
    Parse the Unit cell as an integer.

    Integers pass through, finite floats are truncated, strings are read up
    to the first non-digit ("3", " 2 ", "4th"). Anything else gives None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def resolve_columns(rows: List[Mapping[str, Any]]) -> Dict[str, str]:
    """
    Map trimmed column names to the raw keys used in the rows.

    Raises:
        MissingColumnError: if "Question" or "Type" is absent
    """
    columns: Dict[str, str] = {}
    for row in rows:
        for key in row.keys():
            if not isinstance(key, str):
                continue
            columns.setdefault(key.strip(), key)

    for required in REQUIRED_COLUMNS:
        if required not in columns:
            raise MissingColumnError(required)
    return columns


# ─── Row → Question ───────────────────────────────────────────────────────────

def build_question(row: Mapping[str, Any], columns: Dict[str, str], row_number: int) -> Question:
    """
    Build one Question from a row, raising _RowRejected on any row-level defect.
    """
    def cell(name: str) -> Any:
        key = columns.get(name)
        return row.get(key) if key is not None else None

    text = normalize_question_text(cell(QUESTION_COLUMN))

    type_code = cell(TYPE_COLUMN)
    kind = QuestionClassifier.classify(type_code)
    if kind is None:
        raise _RowRejected(SkipReason.INVALID_TYPE, f"type code {type_code!r}")

    stem = text
    options: Dict[str, Optional[str]] = {}
    if kind == QuestionKind.MULTIPLE_CHOICE:
        extraction = extract_options(text)
        if not extraction.ok:
            raise _RowRejected(
                extraction.rejection,
                f"{len(extraction.matches)} option(s) found in: {text[:80]}",
            )
        stem = extraction.stem
        options = {
            "option_a": extraction.option("A"),
            "option_b": extraction.option("B"),
            "option_c": extraction.option("C"),
            "option_d": extraction.option("D"),
        }

    raw_unit = cell(UNIT_COLUMN)
    unit = parse_unit(raw_unit)
    if unit is None:
        log.info(f"[BANK] row {row_number}: invalid unit value {raw_unit!r}, defaulting to 0")
        unit = 0

    identifying = {
        field: _cell_value(cell(column), default)
        for field, (column, default) in IDENTIFYING_COLUMNS.items()
    }

    if not stem:
        raise _RowRejected(SkipReason.EMPTY_QUESTION, "question text is empty")
    if not str(identifying["subject_code"]).strip():
        raise _RowRejected(SkipReason.MISSING_SUBJECT_CODE, f"no subject code for: {stem[:80]}")
    if not MIN_UNIT <= unit <= MAX_UNIT:
        raise _RowRejected(SkipReason.INVALID_UNIT, f"unit {raw_unit!r} outside {MIN_UNIT}-{MAX_UNIT}")

    image_url = cell(IMAGE_URL_COLUMN)

    return Question(
        **identifying,
        unit=unit,
        question=stem,
        image_url=None if _is_blank(image_url) else str(image_url).strip(),
        kind=kind,
        row_number=row_number,
        **options,
    )


def build_question_bank(rows: Iterable[Mapping[str, Any]]) -> QuestionBank:
    """
    Build the question bank from decoded rows.

    Args:
        rows: Row records (column name → cell value), in sheet order

    Returns:
        QuestionBank with valid questions and the skip log

    Raises:
        MissingColumnError: required column absent
        NoValidQuestionsError: no row survived validation
    """
    rows = list(rows)
    if not rows:
        raise NoValidQuestionsError()

    columns = resolve_columns(rows)
    log.info(f"[BANK] Building question bank from {len(rows)} rows")

    questions: List[Question] = []
    skipped: List[RowSkip] = []

    for row_number, row in enumerate(rows, start=1):
        try:
            questions.append(build_question(row, columns, row_number))
        except _RowRejected as rejected:
            log.info(f"[BANK] row {row_number}: skipped ({rejected.reason}) {rejected.detail}")
            skipped.append(RowSkip(row_number=row_number, reason=rejected.reason, detail=rejected.detail))

    bank = QuestionBank(questions, skipped, total_rows=len(rows))
    log.info(f"[BANK] OK — kept {len(bank)}/{len(rows)} rows, skipped {len(skipped)}")

    if not bank.questions:
        raise NoValidQuestionsError()
    return bank
