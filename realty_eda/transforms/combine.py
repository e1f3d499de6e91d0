from __future__ import annotations

import logging
from typing import Iterable, Tuple

import pandas as pd

from ..config import CATEGORY_COL, EXCLUDED_CATEGORIES
from ..errors import LoadError
from ..model import SALE_COLUMNS

logger = logging.getLogger(__name__)


def _is_textual(s: pd.Series) -> bool:
    return pd.api.types.is_object_dtype(s) or pd.api.types.is_string_dtype(s)


def _as_text(s: pd.Series) -> pd.Series:
    # missing values stay missing rather than becoming "nan"
    return s.map(str, na_action="ignore").astype(object)


def align_types(a: pd.DataFrame, b: pd.DataFrame) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Make shared columns unionable: a column that is numeric on one side and
    text on the other becomes text on both sides (e.g. a parcel id stored as
    a number in one workbook and as a string in the other).
    """
    a = a.copy()
    b = b.copy()
    for col in a.columns.intersection(b.columns):
        left_num = pd.api.types.is_numeric_dtype(a[col])
        right_num = pd.api.types.is_numeric_dtype(b[col])
        if (left_num and _is_textual(b[col])) or (right_num and _is_textual(a[col])):
            logger.info("Coercing column %r to text before union", col)
            a[col] = _as_text(a[col])
            b[col] = _as_text(b[col])
    return a, b


def union_tables(a: pd.DataFrame, b: pd.DataFrame) -> pd.DataFrame:
    """
    Rows of a followed by rows of b, each in original order, with a fresh
    0..n-1 index. Passthrough columns present on one side only are kept and
    left missing on the other.
    """
    for name, df in (("first", a), ("second", b)):
        missing = [c for c in SALE_COLUMNS if c not in df.columns]
        if missing:
            raise LoadError(f"Cannot union sales tables: {name} table lacks {missing}")

    a, b = align_types(a, b)
    return pd.concat([a, b], ignore_index=True, sort=False)


def drop_categories(
    df: pd.DataFrame,
    excluded: Iterable[str] = EXCLUDED_CATEGORIES,
    column: str = CATEGORY_COL,
) -> pd.DataFrame:
    mask = df[column].isin(list(excluded))
    if mask.any():
        logger.info("Dropping %d rows with %s in %s", int(mask.sum()), column, list(excluded))
    return df.loc[~mask].copy()


def combine_sales(
    a: pd.DataFrame,
    b: pd.DataFrame,
    excluded: Iterable[str] = EXCLUDED_CATEGORIES,
) -> pd.DataFrame:
    combined = drop_categories(union_tables(a, b), excluded)
    logger.info("Combined %d + %d sales into %d rows", len(a), len(b), len(combined))
    return combined
