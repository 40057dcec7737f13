from io import BytesIO

import pytest
from openpyxl import Workbook

from ingestion.errors import SpreadsheetError
from ingestion.spreadsheet import read_question_rows
from tests.conftest import workbook_bytes


def test_rows_keyed_by_header():
    content = workbook_bytes(
        [{"Question": "2+2=? A. 3 B. 4 C. 5 D. 6", "Type": "M", "Unit": 1}],
        headers=["Question", "Type", "Unit"],
    )
    assert read_question_rows(content) == [
        {"Question": "2+2=? A. 3 B. 4 C. 5 D. 6", "Type": "M", "Unit": 1},
    ]


def test_empty_cells_omitted_and_blank_rows_skipped():
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["Question", "Type", "Image Url"])
    sheet.append(["Blank ____", "F", None])
    sheet.append([None, None, None])
    sheet.append(["Other ____", "O", "http://img.example/a.png"])
    buffer = BytesIO()
    workbook.save(buffer)

    rows = read_question_rows(buffer.getvalue())
    assert rows == [
        {"Question": "Blank ____", "Type": "F"},
        {"Question": "Other ____", "Type": "O", "Image Url": "http://img.example/a.png"},
    ]


def test_only_first_sheet_is_read():
    workbook = Workbook()
    workbook.active.append(["Question", "Type"])
    workbook.active.append(["first ____", "F"])
    other = workbook.create_sheet("Other")
    other.append(["Question", "Type"])
    other.append(["second ____", "F"])
    buffer = BytesIO()
    workbook.save(buffer)

    assert read_question_rows(buffer.getvalue()) == [{"Question": "first ____", "Type": "F"}]


def test_header_only_sheet():
    assert read_question_rows(workbook_bytes([], headers=["Question", "Type"])) == []


def test_not_a_workbook():
    with pytest.raises(SpreadsheetError):
        read_question_rows(b"this is not an xlsx file")


def test_empty_upload():
    with pytest.raises(SpreadsheetError):
        read_question_rows(b"")
