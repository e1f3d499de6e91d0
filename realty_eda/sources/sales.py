from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd

from ..config import AREA_COL, PRICE_COL, RAW_DATA_DIR, SALES_SOURCES, SalesSource
from ..errors import LoadError
from ..model import SALE_COLUMNS
from ..util import clean_names
from .remote import is_url
from .workbook import read_table

logger = logging.getLogger(__name__)


def resolve_path(source: SalesSource, raw_dir: Optional[Path] = None) -> str | Path:
    if is_url(source.path):
        return source.path
    path = Path(source.path)
    if path.is_absolute():
        return path
    return (raw_dir or RAW_DATA_DIR) / path


def validate_sales(df: pd.DataFrame, name: str) -> None:
    """
    Check a loaded sales table against the SaleRow contract:
      - every SaleRow column is present
      - price and area are numeric and never negative
    """
    missing = [c for c in SALE_COLUMNS if c not in df.columns]
    if missing:
        raise LoadError(f"{name}: missing columns {missing}")

    for col in (PRICE_COL, AREA_COL):
        if not pd.api.types.is_numeric_dtype(df[col]):
            raise LoadError(f"{name}: column {col!r} is not numeric")
        negative = int((df[col] < 0).sum())
        if negative:
            raise LoadError(f"{name}: {negative} rows with negative {col}")


def load_sales_source(source: SalesSource, raw_dir: Optional[Path] = None) -> pd.DataFrame:
    """
    Load one sales workbook into the shared schema.

    Column names are normalized, the source's renames applied and its
    constant columns added, so that every source ends up with the same
    SaleRow columns (plus whatever passthrough columns it carries).
    """
    src = resolve_path(source, raw_dir)
    try:
        df = read_table(src, sheet=source.sheet)
    except LoadError:
        logger.error("Failed to load sales source %r from %s", source.name, src)
        raise

    df = clean_names(df)
    if source.rename:
        df = df.rename(columns=source.rename)
    for col, value in source.constants.items():
        if col in df.columns:
            logger.warning(
                "%s already has a %r column; not filling it with %r", source.name, col, value
            )
            continue
        df[col] = value

    validate_sales(df, source.name)
    logger.info("Loaded %d %s sales", len(df), source.name)
    return df


def load_sales_sources(
    sources: Iterable[SalesSource] = SALES_SOURCES,
    raw_dir: Optional[Path] = None,
) -> List[pd.DataFrame]:
    return [load_sales_source(s, raw_dir) for s in sources]
