"""
Generation Router — /api

Turns an uploaded question bank spreadsheet into a mid-term paper.
Endpoints:
  POST /api/generate  — generate a mid1 / mid2 paper from an .xlsx upload
  POST /api/bank      — inspect an upload: kept / skipped rows and pool sizes
"""

import logging
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from config import config
from ingestion import PaperGenerationError, QuestionBank, build_question_bank, read_question_rows
from generation.paper_assembler import InsufficientQuestionsError, assemble_paper
from generation.schemas import BankSummaryResponse, GeneratedPaper, PoolSizes, SkippedRow
from generation.shuffler import Shuffler
from generation.unit_index import UnitIndex
from ingestion.schemas import QuestionKind

router = APIRouter(prefix="/api", tags=["generation"])

log = logging.getLogger("generation.pipeline")


async def _read_upload(excel_file: Optional[UploadFile]) -> bytes:
    if excel_file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    content = await excel_file.read()
    limit = config.max_upload_bytes()
    if len(content) > limit:
        raise HTTPException(
            status_code=413,
            detail=f"File too large ({len(content)} bytes, limit {config.MAX_UPLOAD_MB} MB)",
        )
    log.info(f"[UPLOAD] '{excel_file.filename}' ({len(content)} bytes)")
    return content


def _load_bank(content: bytes) -> QuestionBank:
    return build_question_bank(read_question_rows(content))


# ─── Generate ──────────────────────────────────────────────────────────────────

@router.post("/generate", response_model=GeneratedPaper, response_model_by_alias=True)
async def generate_paper(
    excelFile: Optional[UploadFile] = File(None),
    paperType: Optional[str] = Form(None),
    seed: Optional[int] = Form(None),
):
    """
    **Generate a mid-term paper from a question bank spreadsheet.**

    The sheet needs `Question` and `Type` columns (M = multiple-choice,
    F / O = fill-in-the-blank) plus `Unit` and `Subject Code`. A `seed`
    makes the draw reproducible.
    """
    content = await _read_upload(excelFile)

    try:
        bank = _load_bank(content)
        index = UnitIndex.from_bank(bank)
        shuffler = Shuffler.seeded(seed) if seed is not None else Shuffler()
        paper = assemble_paper(paperType, index, shuffler)

    except InsufficientQuestionsError as e:
        raise HTTPException(
            status_code=400,
            detail={
                "message": str(e),
                "shortfalls": [s.model_dump(by_alias=True, mode="json") for s in e.shortfalls],
            },
        )
    except PaperGenerationError as e:
        log.warning(f"[GENERATE] Rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.exception(f"[GENERATE] Unexpected failure: {e}")
        raise HTTPException(status_code=500, detail=f"Error generating question paper: {e}")

    log.info(f"[GENERATE] {paperType}: {len(paper.questions)} questions (skipped {len(bank.skipped)} rows)")
    return paper


# ─── Bank summary ──────────────────────────────────────────────────────────────

@router.post("/bank", response_model=BankSummaryResponse, response_model_by_alias=True)
async def summarize_bank(excelFile: Optional[UploadFile] = File(None)):
    """
    Decode and validate an upload without generating a paper.

    Reports how many rows survived, why the others were dropped, and how many
    questions each (unit, kind) pool holds.
    """
    content = await _read_upload(excelFile)

    try:
        bank = _load_bank(content)
    except PaperGenerationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.exception(f"[BANK] Unexpected failure: {e}")
        raise HTTPException(status_code=500, detail=f"Error reading question bank: {e}")

    stats = bank.statistics
    counts = UnitIndex.from_bank(bank).counts()

    return BankSummaryResponse(
        total_rows=stats.total_rows,
        kept_rows=stats.kept_rows,
        skipped_rows=stats.skipped_rows,
        skip_reasons=stats.skip_reasons,
        skipped=[
            SkippedRow(row_number=s.row_number, reason=s.reason, detail=s.detail)
            for s in stats.skipped
        ],
        pools=PoolSizes(
            multiple_choice=counts[QuestionKind.MULTIPLE_CHOICE],
            fill_in_the_blank=counts[QuestionKind.FILL_IN_THE_BLANK],
        ),
    )
