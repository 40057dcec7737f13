"""
Question Ingestion Package

Spreadsheet rows → validated question bank:
1. Read (openpyxl) → row records
2. Normalize question text → single clean line
3. Classify type code → multiple-choice | fill-in-the-blank
4. Extract options (MCQ only) → stem + options A-D
5. Build bank → validated Question entities + skip log

Bad rows are dropped and recorded, never fatal.
"""

from .errors import (
    PaperGenerationError,
    SpreadsheetError,
    MissingColumnError,
    NoValidQuestionsError,
)
from .schemas import Question, QuestionKind, RowSkip, SkipReason, BankStatistics
from .normalizer import normalize_question_text
from .classifier import QuestionClassifier
from .option_extractor import extract_options, OptionExtraction
from .bank_builder import build_question_bank, QuestionBank
from .spreadsheet import read_question_rows

__all__ = [
    # Errors
    "PaperGenerationError",
    "SpreadsheetError",
    "MissingColumnError",
    "NoValidQuestionsError",

    # Schemas
    "Question",
    "QuestionKind",
    "RowSkip",
    "SkipReason",
    "BankStatistics",

    # Step 1: Read
    "read_question_rows",

    # Step 2: Normalize
    "normalize_question_text",

    # Step 3: Classify
    "QuestionClassifier",

    # Step 4: Extract options
    "extract_options",
    "OptionExtraction",

    # Step 5: Build bank
    "build_question_bank",
    "QuestionBank",
]
