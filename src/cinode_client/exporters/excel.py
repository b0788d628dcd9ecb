"""Candidate export to an Excel workbook."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from cinode_core.constants import CANDIDATE_EXPORT_COLUMNS
from cinode_core.exceptions import ExportError

if TYPE_CHECKING:
    from cinode_core.models.candidate import CandidateDetails

logger = structlog.get_logger()

SHEET_NAME = "Candidates"
DEFAULT_COLUMN_WIDTH = 15
EVENTS_COLUMN_WIDTH = 100


def _cell(value: object) -> object:
    """Scalars pass through; nested objects are written as JSON text."""
    if value is None or isinstance(value, str | int | float | bool):
        return value
    return json.dumps(value, ensure_ascii=False)


def build_candidate_rows(candidates: list[CandidateDetails]) -> list[dict[str, object]]:
    """One row per candidate in CANDIDATE_EXPORT_COLUMNS order.

    Events are serialized one JSON object each, joined by ' | '.
    """
    rows: list[dict[str, object]] = []
    for candidate in candidates:
        payload = candidate.to_payload()
        events = payload.get("events") or []
        row: dict[str, object] = {}
        for column in CANDIDATE_EXPORT_COLUMNS:
            if column == "events":
                row[column] = " | ".join(json.dumps(e, ensure_ascii=False) for e in events)
            else:
                row[column] = _cell(payload.get(column))
        rows.append(row)
    return rows


def export_candidates_to_excel(candidates: list[CandidateDetails], path: Path) -> Path:
    """Write candidates to a single-sheet workbook at path.

    Raises ExportError when there is nothing to export or the file cannot
    be written.
    """
    import pandas as pd
    from openpyxl import load_workbook
    from openpyxl.styles import Font, PatternFill
    from openpyxl.utils import get_column_letter

    if not candidates:
        msg = "No candidates found"
        raise ExportError(msg)

    rows = build_candidate_rows(candidates)
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        df = pd.DataFrame(rows, columns=CANDIDATE_EXPORT_COLUMNS)
        df.to_excel(str(path), index=False, sheet_name=SHEET_NAME)

        wb = load_workbook(str(path))
        ws = wb[SHEET_NAME]

        header_fill = PatternFill(start_color="438EFC", end_color="438EFC", fill_type="solid")
        header_font = Font(bold=True, color="FFFFFF")
        for col_idx, column in enumerate(CANDIDATE_EXPORT_COLUMNS, start=1):
            header = ws.cell(row=1, column=col_idx)
            header.fill = header_fill
            header.font = header_font
            width = EVENTS_COLUMN_WIDTH if column == "events" else DEFAULT_COLUMN_WIDTH
            ws.column_dimensions[get_column_letter(col_idx)].width = width

        ws.freeze_panes = "A2"
        wb.save(str(path))
    except OSError as e:
        msg = f"Failed to write {path}: {e}"
        raise ExportError(msg) from e

    logger.info("excel_written", path=str(path), rows=len(rows))
    return path
