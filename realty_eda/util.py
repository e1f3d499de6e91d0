import re
from pathlib import Path

import pandas as pd

_NON_ALNUM = re.compile(r"[^0-9a-z]+")


def normalize_name(name: object) -> str:
    """'Actual Year Built' -> 'actual_year_built'."""
    return _NON_ALNUM.sub("_", str(name).strip().lower()).strip("_")


def clean_names(df: pd.DataFrame) -> pd.DataFrame:
    return df.rename(columns=normalize_name)


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def write_json(df: pd.DataFrame, path: Path) -> None:
    """
    Write a table as a JSON array of records.

    Datetime columns are written as YYYY-MM-DD strings; an empty table is
    written as [].
    """
    ensure_dir(path.parent)
    if df.empty:
        path.write_text("[]", encoding="utf-8")
        return
    out = df
    date_cols = [c for c in df.columns if pd.api.types.is_datetime64_any_dtype(df[c])]
    if date_cols:
        out = df.copy()
        for col in date_cols:
            out[col] = out[col].dt.strftime("%Y-%m-%d")
    path.write_text(
        out.to_json(orient="records", date_format="iso"), encoding="utf-8"
    )
