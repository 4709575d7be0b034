from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import List

import pandas as pd

from .errors import ParseError, SourceIOError

logger = logging.getLogger(__name__)


def read_csv_source(path: Path | str, **kwargs) -> pd.DataFrame:
    """Read a CSV source as untyped strings.

    Cells are never NA-converted, so an empty cell stays ``""``. An empty file
    yields an empty frame rather than an error.
    """
    path = Path(path)
    try:
        return pd.read_csv(
            path,
            dtype=str,
            na_filter=False,
            skip_blank_lines=True,
            **kwargs,
        )
    except pd.errors.EmptyDataError:
        logger.warning("CSV source %s is empty", path)
        return pd.DataFrame()
    except OSError as exc:
        raise SourceIOError(f"failed to open CSV: {path}: {exc}", path) from exc
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise ParseError(f"failed to parse CSV row in {path}: {exc}", path) from exc


def read_text_source(path: Path | str) -> str:
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(f"failed to decode {path} as UTF-8", path) from exc
    except OSError as exc:
        raise SourceIOError(f"failed to read file: {path}: {exc}", path) from exc


def write_text_output(path: Path | str, text: str) -> None:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise SourceIOError(f"failed to write file: {path}: {exc}", path) from exc


def csv_record_widths(path: Path | str) -> List[int]:
    """Field count of every non-blank CSV record, header first.

    pandas pads short records with empty cells, so a missing trailing field
    cannot be told apart from an empty one once the frame is built.
    """
    text = read_text_source(path)
    try:
        return [len(record) for record in csv.reader(io.StringIO(text)) if record]
    except csv.Error as exc:
        raise ParseError(f"failed to parse CSV row in {path}: {exc}", Path(path)) from exc
