"""
Request-level errors for the paper generation pipeline.

Row-level problems never raise; they are recorded as RowSkip entries on the
QuestionBank. Everything below aborts the whole request and is turned into an
HTTP 400 by the routers.
"""


class PaperGenerationError(ValueError):
    """Base class for errors that make a paper request fail."""


class SpreadsheetError(PaperGenerationError):
    """Uploaded file could not be decoded as an .xlsx workbook."""


class MissingColumnError(PaperGenerationError):
    """A required column is absent from the uploaded sheet."""

    def __init__(self, column: str):
        self.column = column
        super().__init__(f'No "{column}" column found in the Excel file')


class NoValidQuestionsError(PaperGenerationError):
    """Every row was dropped while building the question bank."""

    def __init__(self, message: str = "No valid questions found in the Excel file"):
        super().__init__(message)
