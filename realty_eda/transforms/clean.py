import logging
from typing import Iterable

import pandas as pd

from ..config import CATEGORY_COL, KNOWN_BAD_RECORDS, LOCATION_COL, PRICE_COL, BadRecord

logger = logging.getLogger(__name__)


def drop_known_bad(
    df: pd.DataFrame,
    records: Iterable[BadRecord] = KNOWN_BAD_RECORDS,
) -> pd.DataFrame:
    """
    Drop rows that exactly match a known erroneous sale (location,
    classification and price all equal). This is a literal exclusion list,
    not an outlier filter, so applying it twice changes nothing.
    """
    bad = pd.Series(False, index=df.index)
    for rec in records:
        bad |= (
            (df[LOCATION_COL] == rec.location)
            & (df[CATEGORY_COL] == rec.classification)
            & (df[PRICE_COL] == rec.price)
        )
    if bad.any():
        logger.info("Dropping %d known bad sale record(s)", int(bad.sum()))
    return df.loc[~bad].copy()
