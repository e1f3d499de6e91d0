from dataclasses import dataclass, field, fields
from typing import Dict, List

import pandas as pd


@dataclass
class SaleRow:
    price: float           # sale price, >= 0
    area: float            # living area, >= 0
    classification: str    # "Condominium" | "Single Family" | ...
    location: str          # neighbourhood / town
    year_built: int


SALE_COLUMNS: List[str] = [f.name for f in fields(SaleRow)]


@dataclass
class GroupedFit:
    """
    Tidy outputs of one regression per group.

    Every frame carries the group key as a column; groups that could not be
    fitted are listed in ``skipped`` (key -> reason) and appear in no frame.
    """
    coefficients: pd.DataFrame
    observations: pd.DataFrame
    summary: pd.DataFrame
    skipped: Dict[str, str] = field(default_factory=dict)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def skipped_frame(self, group_col: str) -> pd.DataFrame:
        return pd.DataFrame(
            {group_col: list(self.skipped), "reason": list(self.skipped.values())}
        )
