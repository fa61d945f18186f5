from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Dict, List

import pandas as pd

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = {".csv"}
EXCEL_EXTENSIONS = {".xlsx", ".xls"}


class FileParseError(ValueError):
    """Raised when an uploaded file cannot be turned into rows."""


class UnsupportedFileError(FileParseError):
    pass


@dataclass
class ParsedTable:
    file_name: str
    column_names: List[str]
    rows: List[Dict[str, object]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)


def _read_frame(content: bytes, extension: str) -> pd.DataFrame:
    buffer = io.BytesIO(content)
    if extension in CSV_EXTENSIONS:
        return pd.read_csv(buffer, skip_blank_lines=True)
    return pd.read_excel(buffer, sheet_name=0)


def frame_to_rows(df: pd.DataFrame) -> List[Dict[str, object]]:
    """Convert a frame to plain row dicts with NaN/NaT cells as ``None``."""
    cleaned = df.astype(object).where(pd.notna(df), None)
    return cleaned.to_dict(orient="records")


def parse_table(content: bytes, file_name: str) -> ParsedTable:
    """Parse CSV or Excel bytes into ordered column names and rows.

    Only the first sheet of a workbook is read. Raises
    ``UnsupportedFileError`` for other extensions and ``FileParseError`` when
    the content is empty or unreadable.
    """
    extension = PurePath(file_name).suffix.lower()
    if extension not in CSV_EXTENSIONS | EXCEL_EXTENSIONS:
        raise UnsupportedFileError("Unsupported file format. Please upload CSV or Excel files.")
    if not content:
        raise FileParseError("Uploaded file is empty.")

    try:
        df = _read_frame(content, extension)
    except pd.errors.EmptyDataError as exc:
        raise FileParseError("Uploaded file has no data.") from exc
    except Exception as exc:  # pandas/openpyxl raise a wide range of errors here
        raise FileParseError(f"Failed to parse {extension.lstrip('.').upper()} file.") from exc

    df.columns = [str(column) for column in df.columns]
    table = ParsedTable(file_name=file_name, column_names=list(df.columns), rows=frame_to_rows(df))
    logger.info("Parsed %s: %d rows, %d columns", file_name, table.row_count, len(table.column_names))
    return table
