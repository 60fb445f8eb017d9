# /examcell/services/upload_helpers/csv_ingestion.py

"""
The CSV ingestion engine for bulk result uploads.

An upload is one all-or-nothing unit of work on the request session: rows
are validated in file order, accumulated into batches of `batch_size` and
flushed with one batch insert each, and only committed once the whole file
has been read. Any fatal condition rolls back every row of the attempt,
including batches that were already flushed, and marks the ledger entry
Failed. GPA recalculation runs after the commit, one student at a time, each
in its own transaction scope.

Expected file layout (header row required, extra columns ignored):

    student_id,subject_code,marks,grade,status
    S1,CS101,85,A,Pass

The `status` column is stored as given. Unlike the direct results API, this
path does not re-derive pass/fail from the marks.
"""

import logging
import math
import re
import time
from dataclasses import dataclass, field
from typing import BinaryIO, Dict, List, Optional, Set

import pandas as pd

from examcell.core import config
from examcell.core.exceptions import AppError, BadInputError, UnknownReferenceError
from ..database_service import DatabaseService
from .. import gpa_service
from .upload_ledger import UploadLedger

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("student_id", "subject_code", "marks", "grade", "status")
CSV_CONTENT_TYPE = "text/csv"
# ASCII decimal notation with an optional exponent, e.g. "85", "72.5", "1e2".
MARKS_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)


@dataclass
class IngestOutcome:
    upload_id: str
    records_processed: int
    affected_students: List[str] = field(default_factory=list)
    gpa_failures: List[str] = field(default_factory=list)


# --- Preconditions ---

def _declares_csv(filename: Optional[str], content_type: Optional[str]) -> bool:
    media_type = (content_type or "").split(";")[0].strip().lower()
    return media_type == CSV_CONTENT_TYPE or (filename or "").lower().endswith(".csv")


def ensure_csv_upload(stream: BinaryIO, filename: Optional[str], content_type: Optional[str]) -> None:
    """Rejects empty or non-CSV uploads before any ledger entry is written."""
    head = stream.read(1)
    stream.seek(0)
    if not head:
        logger.error("Upload failed: File is empty.")
        raise BadInputError("Uploaded file is empty.")
    if not _declares_csv(filename, content_type):
        logger.error("Upload failed: Invalid file type '%s' for file %s", content_type, filename)
        raise BadInputError("Invalid file type. Please upload a CSV file.")


# --- Parsing helpers ---

def _read_results_frame(stream: BinaryIO) -> pd.DataFrame:
    """Parses the whole stream as strings and checks the header."""
    frame = pd.read_csv(
        stream,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        index_col=False,
        encoding="utf-8-sig",
    )
    frame.columns = [str(c).strip() for c in frame.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if missing:
        raise BadInputError(
            f"CSV header is missing required column(s): {', '.join(missing)}. "
            f"Expected header: {','.join(REQUIRED_COLUMNS)}."
        )
    return frame[list(REQUIRED_COLUMNS)]


def _clean(value) -> str:
    if value is None or pd.isna(value):
        return ""
    return str(value).strip()


def _parse_marks(raw: str, row_number: int) -> float:
    marks = float(raw) if MARKS_PATTERN.fullmatch(raw) else math.nan
    if not math.isfinite(marks):
        logger.error("CSV parsing error at row %d: Invalid number format for marks '%s'", row_number, raw)
        raise BadInputError(f"CSV contains invalid numeric data for marks at row {row_number}.")
    return marks


def _resolve_subject_name(code: str, row_number: int, db: DatabaseService, cache: Dict[str, str]) -> str:
    if code not in cache:
        subject = db.get_subject_by_code(code)
        if subject is None:
            raise UnknownReferenceError(f"Row {row_number}: Invalid subject code found in CSV: {code}")
        cache[code] = subject.name
    return cache[code]


# --- GPA follow-up ---

def _recalculate_affected_gpas(student_ids: Set[str], db: DatabaseService) -> List[str]:
    """Recalculates each student independently. Returns the ids that failed."""
    logger.info("Triggering GPA updates for %d affected students...", len(student_ids))
    start = time.perf_counter()
    failed: List[str] = []
    for student_id in sorted(student_ids):
        try:
            gpa_service.recalculate_student_gpa(student_id, db)
        except Exception as e:
            db.rollback()
            failed.append(student_id)
            logger.error("Failed to update GPA for student %s during batch update: %s", student_id, e)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "Finished GPA updates for batch. Success: %d, Failed: %d. Time: %.0f ms",
        len(student_ids) - len(failed), len(failed), elapsed_ms,
    )
    return failed


# --- Engine ---

def ingest_results_csv(
    stream: BinaryIO,
    filename: Optional[str],
    content_type: Optional[str],
    semester: str,
    upload_type: str,
    db: DatabaseService,
    ledger: Optional[UploadLedger] = None,
    batch_size: Optional[int] = None,
) -> IngestOutcome:
    """
    Ingests one CSV of results for `semester`.

    Rows with an empty required field are skipped and logged. A malformed
    `marks` value, an unknown subject code, a bad header or an unreadable
    file aborts the whole upload: nothing from it is kept and the ledger
    entry ends Failed. The exception is re-raised to the caller.
    """
    ensure_csv_upload(stream, filename, content_type)

    ledger = ledger or UploadLedger()
    batch_size = max(1, batch_size or config.UPLOAD_BATCH_SIZE)
    display_name = filename or "upload.csv"

    logger.info("Starting CSV processing for file: %s, semester: %s, type: %s", display_name, semester, upload_type)
    start = time.perf_counter()
    upload_id = ledger.open_entry(display_name, upload_type)

    affected_students: Set[str] = set()
    subject_names: Dict[str, str] = {}
    batch: List[Dict] = []
    records_processed = 0
    total_rows = 0

    try:
        frame = _read_results_frame(stream)

        for row_number, row in enumerate(frame.itertuples(index=False, name=None), start=1):
            total_rows += 1
            student_id, subject_code, marks_raw, grade, status = (_clean(v) for v in row)

            if not all((student_id, subject_code, marks_raw, grade, status)):
                logger.warning(
                    "Skipping row %d due to missing mandatory field(s): %s",
                    row_number, dict(zip(REQUIRED_COLUMNS, row)),
                )
                continue

            marks = _parse_marks(marks_raw, row_number)
            subject_name = _resolve_subject_name(subject_code, row_number, db, subject_names)

            batch.append({
                "student_id": student_id,
                "semester": semester,
                "subject_code": subject_code,
                "subject_name": subject_name,
                "marks": marks,
                "grade": grade,
                "status": status,
            })
            affected_students.add(student_id)
            records_processed += 1

            if len(batch) >= batch_size:
                db.add_results_batch(batch)
                logger.debug("Saved batch of %d results.", len(batch))
                batch = []

        if batch:
            db.add_results_batch(batch)
            logger.debug("Saved final batch of %d results.", len(batch))

        db.commit()

    except Exception as e:
        db.rollback()
        logger.error("Error processing CSV file '%s': %s", display_name, e)
        try:
            ledger.mark_failed(upload_id, records_processed)
        except Exception:
            logger.exception("Could not mark upload ledger entry %s as Failed.", upload_id)
        if isinstance(e, AppError):
            raise
        if isinstance(e, (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError)):
            raise BadInputError(f"The uploaded file could not be parsed as CSV: {e}") from e
        raise

    ledger.mark_completed(upload_id, records_processed)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "Finished processing CSV '%s'. %d/%d records successfully processed in %.0f ms.",
        display_name, records_processed, total_rows, elapsed_ms,
    )

    gpa_failures = _recalculate_affected_gpas(affected_students, db)

    return IngestOutcome(
        upload_id=upload_id,
        records_processed=records_processed,
        affected_students=sorted(affected_students),
        gpa_failures=gpa_failures,
    )
