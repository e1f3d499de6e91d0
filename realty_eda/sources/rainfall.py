from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from ..config import RAIN_DATE_COL
from ..errors import LoadError
from ..util import clean_names
from .workbook import read_table

logger = logging.getLogger(__name__)


def load_rainfall(
    src: Union[str, Path, bytes],
    date_col: str = RAIN_DATE_COL,
    sheet: Union[str, int] = 0,
) -> pd.DataFrame:
    """
    Load the wide rain-gauge table: one date column plus one column per gauge.
    """
    df = clean_names(read_table(src, sheet=sheet))
    if date_col not in df.columns:
        raise LoadError(f"Rainfall table has no {date_col!r} column")
    try:
        df[date_col] = pd.to_datetime(df[date_col])
    except (ValueError, TypeError) as e:
        raise LoadError(f"Unparseable dates in {date_col!r}: {e}") from e
    logger.info("Loaded rainfall for %d gauges over %d days", df.shape[1] - 1, len(df))
    return df
