from typing import Dict, Optional

import pandas as pd

from ..config import RAIN_DATE_COL, RAIN_SERIES_COL, RAIN_VALUE_COL
from ..errors import ReshapeError

# long.attrs key holding the wide value-column dtypes, used by long_to_wide
DTYPES_ATTR = "value_dtypes"


def wide_to_long(
    df: pd.DataFrame,
    id_col: str = RAIN_DATE_COL,
    names_to: str = RAIN_SERIES_COL,
    values_to: str = RAIN_VALUE_COL,
) -> pd.DataFrame:
    """
    Pivot every column except id_col into (name, value) pairs.

    N rows x (1 + K) columns become N*K rows, ordered by original row and
    then by original column. Missing values are kept. The value columns'
    dtypes are stored in long.attrs so long_to_wide can restore them.
    """
    if id_col not in df.columns:
        raise ReshapeError(f"No {id_col!r} column to pivot around")
    if df.columns.duplicated().any():
        dupes = sorted(set(df.columns[df.columns.duplicated()]))
        raise ReshapeError(f"Duplicate column names {dupes}")
    value_cols = [c for c in df.columns if c != id_col]
    if not value_cols:
        raise ReshapeError("No measurement columns besides the id column")
    clashes = sorted({names_to, values_to} & set(df.columns))
    if clashes or names_to == values_to:
        raise ReshapeError(
            f"Output column names {names_to!r}/{values_to!r} clash with {clashes or 'each other'}"
        )

    long = (
        df.reset_index(drop=True)
        .melt(
            id_vars=[id_col],
            value_vars=value_cols,
            var_name=names_to,
            value_name=values_to,
            ignore_index=False,
        )
        .sort_index(kind="stable")
        .reset_index(drop=True)
    )

    expected = len(df) * len(value_cols)
    if len(long) != expected:
        raise ReshapeError(f"Reshape produced {len(long)} rows, expected {expected}")
    long.attrs[DTYPES_ATTR] = df[value_cols].dtypes.to_dict()
    return long


def long_to_wide(
    df: pd.DataFrame,
    id_col: str = RAIN_DATE_COL,
    names_from: str = RAIN_SERIES_COL,
    values_from: str = RAIN_VALUE_COL,
    dtypes: Optional[Dict[str, object]] = None,
) -> pd.DataFrame:
    """
    Inverse of wide_to_long; ids and series keep first-appearance order.

    Value columns are cast back to dtypes (default: the ones wide_to_long
    recorded), except integer columns that now hold missing values.
    """
    missing = [c for c in (id_col, names_from, values_from) if c not in df.columns]
    if missing:
        raise ReshapeError(f"Long table lacks columns {missing}")
    dupes = df.duplicated([id_col, names_from])
    if dupes.any():
        raise ReshapeError(f"{int(dupes.sum())} duplicate ({id_col}, {names_from}) pairs")

    ids = pd.unique(df[id_col])
    names = pd.unique(df[names_from])
    wide = df.pivot(index=id_col, columns=names_from, values=values_from)
    wide = wide.reindex(index=ids, columns=names)
    wide.index.name = id_col
    wide.columns.name = None

    if dtypes is None:
        dtypes = df.attrs.get(DTYPES_ATTR, {})
    for col, dtype in dtypes.items():
        if col not in wide.columns or wide[col].dtype == dtype:
            continue
        if pd.api.types.is_integer_dtype(dtype) and wide[col].isna().any():
            continue
        wide[col] = wide[col].astype(dtype)

    wide = wide.reset_index()
    wide.attrs = {}
    return wide
