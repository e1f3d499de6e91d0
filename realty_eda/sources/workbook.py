from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import Union

import pandas as pd

from ..errors import LoadError
from .remote import fetch_bytes, is_url

logger = logging.getLogger(__name__)

Source = Union[str, Path, bytes]

EXCEL_SUFFIXES = (".xlsx", ".xlsm", ".xls")


def _suffix(src: Source) -> str:
    if isinstance(src, bytes):
        return ""
    # drop any query string from URLs
    return Path(str(src).split("?", 1)[0]).suffix.lower()


def read_table(src: Source, sheet: Union[str, int] = 0) -> pd.DataFrame:
    """
    Read one table from an Excel workbook or a csv file.

    src can be a local path, an http(s) URL or raw bytes. Raw bytes and URLs
    without a .csv suffix are read as Excel.
    """
    suffix = _suffix(src)
    label = "<bytes>" if isinstance(src, bytes) else str(src)

    if is_url(src):
        data = fetch_bytes(str(src))
    elif isinstance(src, bytes):
        data = src
    else:
        path = Path(src)
        if not path.exists():
            raise LoadError(f"Missing source file at {path}")
        data = None

    try:
        if suffix == ".csv":
            df = pd.read_csv(io.BytesIO(data) if data is not None else path)
        elif suffix in EXCEL_SUFFIXES or data is not None:
            df = pd.read_excel(
                io.BytesIO(data) if data is not None else path, sheet_name=sheet
            )
        else:
            raise LoadError(f"Unsupported file type {suffix!r} for {label}")
    except LoadError:
        raise
    except (OSError, ValueError, KeyError, zipfile.BadZipFile) as e:
        raise LoadError(f"Could not read {label}: {e}") from e

    logger.info("Read %d rows x %d columns from %s", len(df), df.shape[1], label)
    return df
