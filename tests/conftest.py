"""Shared fixtures: row factories and in-memory workbooks."""

from io import BytesIO
from typing import Any, Dict, List, Optional, Sequence

import pytest
from openpyxl import Workbook

HEADERS = ["Subject Code", "Subject", "Branch", "Regulation", "Year", "Sem", "Month",
           "Unit", "Type", "Question", "Image Url"]

MID1_MC = {1: 2, 2: 2, 3: 1}
MID1_FIB = {1: 2, 2: 2, 3: 1}
MID2_MC = {3: 1, 4: 2, 5: 2}
MID2_FIB = {3: 1, 4: 2, 5: 2}


def make_row(question: str, type_code: Any = "M", unit: Any = 1,
             subject_code: Any = "CS101", **extra: Any) -> Dict[str, Any]:
    row = {
        "Subject Code": subject_code,
        "Subject": "Programming in C",
        "Branch": "CSE",
        "Regulation": "R22",
        "Year": 2,
        "Sem": 1,
        "Month": "March",
        "Unit": unit,
        "Type": type_code,
        "Question": question,
    }
    row.update(extra)
    return {k: v for k, v in row.items() if v is not None}


def mc_text(unit: int, n: int) -> str:
    return f"U{unit} MCQ {n} ? A. first B. second C. third D. fourth"


def make_bank_rows(mc: Optional[Dict[int, int]] = None,
                   fib: Optional[Dict[int, int]] = None,
                   **extra: Any) -> List[Dict[str, Any]]:
    """`count` distinct questions per unit for each kind."""
    rows = []
    for unit, count in (mc or {}).items():
        for n in range(count):
            rows.append(make_row(mc_text(unit, n), "M", unit, **extra))
    for unit, count in (fib or {}).items():
        for n in range(count):
            rows.append(make_row(f"U{unit} blank {n} is ____", "F", unit, **extra))
    return rows


def workbook_bytes(rows: Sequence[Dict[str, Any]], headers: Sequence[str] = HEADERS) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Questions"
    sheet.append(list(headers))
    for row in rows:
        sheet.append([row.get(h) for h in headers])
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def mid1_rows():
    return make_bank_rows(MID1_MC, MID1_FIB)


@pytest.fixture
def mid2_rows():
    return make_bank_rows(MID2_MC, MID2_FIB)


@pytest.fixture
def full_rows():
    """Enough questions in every unit for either paper, with spares."""
    per_unit = {unit: 3 for unit in range(1, 6)}
    return make_bank_rows(per_unit, per_unit)
