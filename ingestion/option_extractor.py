"""
MCQ Option Extractor
Splits "stem A. opt B. opt C. opt D. opt" text into a stem and four options.

Pattern-based: a question that legitimately contains
"A." outside its option list can be mis-split. When the pattern does not
yield at least four options the row is rejected instead of guessed at.
"""

import logging
import re
from typing import List, Optional, Tuple

from ingestion.schemas import SkipReason

log = logging.getLogger(__name__)

OPTION_LETTERS = ("A", "B", "C", "D")
MIN_OPTIONS = 4

# Letter A-D + "." or ")" then the text up to the next marker or end of string
OPTION_PATTERN = re.compile(r'([A-Da-d])[.)]\s*(.*?)(?=\s*[A-Da-d][.)]\s*|$)')
MARKER_PATTERN = re.compile(r'([A-Da-d])[.)]\s*')


class OptionExtraction:
    """Result of splitting one multiple-choice question"""

    def __init__(
        self,
        stem: str = "",
        options: Optional[Tuple[Optional[str], ...]] = None,
        matches: Optional[List[Tuple[str, str]]] = None,
        rejection: Optional[str] = None,
    ):
        self.stem = stem
        self.options = options or (None, None, None, None)
        self.matches = matches or []
        self.rejection = rejection

    @property
    def ok(self) -> bool:
        return self.rejection is None

    @property
    def duplicate_letters(self) -> List[str]:
        """Letters that appeared more than once (first occurrence was kept)."""
        seen = set()
        duplicates = []
        for letter, _ in self.matches:
            if letter in seen and letter not in duplicates:
                duplicates.append(letter)
            seen.add(letter)
        return duplicates

    def option(self, letter: str) -> Optional[str]:
        return self.options[OPTION_LETTERS.index(letter.upper())]


def find_option_matches(text: str) -> List[Tuple[str, str]]:
    """All (LETTER, text) option matches in order of appearance."""
    return [
        (m.group(1).upper(), m.group(2).strip())
        for m in OPTION_PATTERN.finditer(text)
    ]


def extract_options(text: str) -> OptionExtraction:
    """
    Extract the stem and options A-D from normalized question text.

    Args:
        text: Output of normalize_question_text()

    Returns:
        OptionExtraction; check .ok / .rejection before using stem and options
    """
    matches = find_option_matches(text)

    if len(matches) < MIN_OPTIONS:
        return OptionExtraction(matches=matches, rejection=SkipReason.INSUFFICIENT_OPTIONS)

    first_marker = MARKER_PATTERN.search(text)
    if first_marker is None:
        return OptionExtraction(matches=matches, rejection=SkipReason.OPTION_MARKER_NOT_FOUND)

    stem = text[:first_marker.start()].strip()

    # First match per letter wins; empty option text counts as missing
    by_letter = {}
    for letter, option_text in matches:
        by_letter.setdefault(letter, option_text)
    options = tuple(by_letter.get(letter) or None for letter in OPTION_LETTERS)

    result = OptionExtraction(stem=stem, options=options, matches=matches)
    if result.duplicate_letters:
        log.debug("Duplicate option letters %s in: %s", result.duplicate_letters, text[:80])
    return result
