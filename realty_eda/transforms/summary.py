from typing import List, Union

import pandas as pd

from ..config import PRICE_COL

STATS = ["count", "mean", "median", "std", "min", "max"]


def describe_by(
    df: pd.DataFrame,
    by: Union[str, List[str]],
    value: str = PRICE_COL,
) -> pd.DataFrame:
    """
    Descriptive statistics of value for each group, one row per group,
    sorted by the group keys.
    """
    keys = [by] if isinstance(by, str) else list(by)
    return df.groupby(keys, sort=True)[value].agg(STATS).reset_index()
