"""
Question Type Classifier
Maps the one-letter "Type" column to a question kind.
Rule-based, no guessing: unknown codes are rejected.
"""

from typing import Any, Dict, Optional

from ingestion.schemas import QuestionKind


class QuestionClassifier:
    """
    Classifies spreadsheet type codes into question kinds

    M → multiple-choice
    F / O → fill-in-the-blank
    """

    TYPE_CODES: Dict[str, QuestionKind] = {
        "m": QuestionKind.MULTIPLE_CHOICE,
        "f": QuestionKind.FILL_IN_THE_BLANK,
        "o": QuestionKind.FILL_IN_THE_BLANK,
    }

    @staticmethod
    def classify(code: Any) -> Optional[QuestionKind]:
        """
        Classify a type code (case-insensitive)

        Args:
            code: Raw "Type" cell value

        Returns:
            QuestionKind, or None when the code is missing or unrecognised
        """
        if not isinstance(code, str):
            return None
        return QuestionClassifier.TYPE_CODES.get(code.strip().lower())
