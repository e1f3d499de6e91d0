import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Union

ROOT_DIR = Path(__file__).resolve().parents[1]
RAW_DATA_DIR = Path(os.getenv("REALTY_EDA_RAW_DIR", ROOT_DIR / "data" / "raw"))
PROCESSED_DIR = Path(
    os.getenv("REALTY_EDA_PROCESSED_DIR", ROOT_DIR / "data" / "processed")
)
FIGURES_DIR = PROCESSED_DIR / "figures"

# Column names after normalization (see util.clean_names)
PRICE_COL = "price"
AREA_COL = "area"
CATEGORY_COL = "classification"
LOCATION_COL = "location"
YEAR_BUILT_COL = "year_built"


@dataclass
class SalesSource:
    name: str
    path: str                    # file under RAW_DATA_DIR, absolute path or http(s) URL
    sheet: Union[str, int] = 0   # ignored for csv
    rename: Dict[str, str] = field(default_factory=dict)     # applied after clean_names
    constants: Dict[str, str] = field(default_factory=dict)  # columns the source lacks


@dataclass(frozen=True)
class BadRecord:
    location: str
    classification: str
    price: float


SALES_SOURCES: List[SalesSource] = [
    SalesSource("condos", "condo_sales.xlsx"),
    SalesSource(
        "single_family",
        "single_family_sales.xlsx",
        rename={"actual_year_built": YEAR_BUILT_COL},
        constants={CATEGORY_COL: "Single Family"},
    ),
]

EXCLUDED_CATEGORIES: List[str] = ["Garage Only"]

# Keyed-in price with extra zeros; drop by exact match only.
KNOWN_BAD_RECORDS: List[BadRecord] = [
    BadRecord("Downtown", "Condominium", 105_000_000.0),
]

# Per-location regression of price on area
GROUP_COL = LOCATION_COL
RESPONSE_COL = PRICE_COL
PREDICTOR_COL = AREA_COL
MIN_GROUP_ROWS = 2

RAINFALL_FILE = "rain_gauges.csv"
RAIN_DATE_COL = "date"
RAIN_SERIES_COL = "gauge"
RAIN_VALUE_COL = "rainfall"

OUTPUT_FILES = {
    "sales": "sales.json",
    "coefficients": "coefficients.json",
    "observations": "observations.json",
    "summary": "model_summary.json",
    "skipped": "skipped_groups.json",
    "sales_by_location": "sales_by_location.json",
    "sales_by_classification": "sales_by_classification.json",
    "rainfall": "rainfall_long.json",
}

FIGURE_FILES = {
    "price_area": "price_area.html",
    "slopes": "slopes.html",
    "residuals": "residuals.html",
    "rainfall": "rainfall.html",
}
