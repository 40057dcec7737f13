"""
Question Text Normalization
Step 1 of bank building: flatten spreadsheet cell text into a single clean line.

Spreadsheet editors keep hard line breaks inside cells (Alt+Enter) and users
paste options on separate lines; both must end up as single spaces so the
option extractor sees one continuous string.
"""

import re
from typing import Any

LINE_BREAKS = re.compile(r'[\r\n]+')
WHITESPACE = re.compile(r'\s+')


def normalize_question_text(text: Any) -> str:
    """
    Normalize raw question text from a row.

    - Any run of line-break characters → single space
    - Any run of whitespace → single space
    - Leading/trailing whitespace trimmed

    Total: None gives "", non-strings are stringified first.
    """
    if text is None:
        return ""
    text = str(text)

    text = LINE_BREAKS.sub(' ', text)
    text = WHITESPACE.sub(' ', text)

    return text.strip()
