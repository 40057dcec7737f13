"""
Spreadsheet Reader
Decodes an uploaded .xlsx workbook into row records (column name → value).

Only the first worksheet is read. The first row is the header; empty cells
are left out of each record and completely blank rows are skipped, so a
record only carries the columns that were actually filled in.
"""

import logging
from io import BytesIO
from typing import Any, Dict, List

from openpyxl import load_workbook

from ingestion.errors import SpreadsheetError

log = logging.getLogger(__name__)


def _is_empty_cell(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def read_question_rows(content: bytes) -> List[Dict[str, Any]]:
    """
    Read the first worksheet of an .xlsx file.

    Args:
        content: Raw bytes of the uploaded workbook

    Returns:
        One dict per non-blank data row, keyed by header text

    Raises:
        SpreadsheetError: if the bytes are not a readable workbook
    """
    if not content:
        raise SpreadsheetError("Uploaded Excel file is empty")

    try:
        workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
    except Exception as e:
        log.error(f"Error reading workbook: {e}")
        raise SpreadsheetError(f"Could not read Excel file: {e}") from e

    try:
        if not workbook.worksheets:
            return []
        sheet = workbook.worksheets[0]
        row_iter = sheet.iter_rows(values_only=True)

        header_row = next(row_iter, None)
        if header_row is None:
            return []
        headers = [
            None if _is_empty_cell(cell) else str(cell)
            for cell in header_row
        ]

        rows: List[Dict[str, Any]] = []
        for values in row_iter:
            record = {
                header: value
                for header, value in zip(headers, values)
                if header is not None and not _is_empty_cell(value)
            }
            if record:
                rows.append(record)
    finally:
        workbook.close()

    log.info(f"Read {len(rows)} rows from sheet '{sheet.title}' ({len([h for h in headers if h])} columns)")
    return rows
