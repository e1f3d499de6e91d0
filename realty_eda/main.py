from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

import pandas as pd

from .config import (
    CATEGORY_COL,
    FIGURE_FILES,
    FIGURES_DIR,
    GROUP_COL,
    KNOWN_BAD_RECORDS,
    OUTPUT_FILES,
    PROCESSED_DIR,
    RAINFALL_FILE,
    RAW_DATA_DIR,
    SALES_SOURCES,
    SalesSource,
)
from .errors import LoadError
from .plotting import coefficient_chart, price_area_scatter, rainfall_chart, residual_chart
from .sources.rainfall import load_rainfall
from .sources.sales import load_sales_sources
from .transforms.clean import drop_known_bad
from .transforms.combine import combine_sales
from .transforms.grouped_fit import fit_by_group
from .transforms.reshape import wide_to_long
from .transforms.summary import describe_by
from .util import ensure_dir, write_json

logger = logging.getLogger(__name__)


def run_pipeline(
    raw_dir: Optional[Path] = None,
    sources: Iterable[SalesSource] = SALES_SOURCES,
    rainfall_file: Optional[str] = RAINFALL_FILE,
) -> Dict[str, pd.DataFrame]:
    """
    Load -> combine -> clean -> per-location fits, plus the rainfall reshape.

    Returns the named tables written by main(). A missing rainfall file is
    skipped; every other load failure propagates.
    """
    raw_dir = Path(raw_dir or RAW_DATA_DIR)

    frames = load_sales_sources(sources, raw_dir)
    if len(frames) != 2:
        raise LoadError(f"Expected two sales sources, got {len(frames)}")
    sales = drop_known_bad(combine_sales(*frames), KNOWN_BAD_RECORDS)

    fits = fit_by_group(sales)
    tables = {
        "sales": sales.reset_index(drop=True),
        "coefficients": fits.coefficients,
        "observations": fits.observations,
        "summary": fits.summary,
        "skipped": fits.skipped_frame(GROUP_COL),
        "sales_by_location": describe_by(sales, GROUP_COL),
        "sales_by_classification": describe_by(sales, CATEGORY_COL),
    }

    if rainfall_file:
        rain_path = raw_dir / rainfall_file
        if rain_path.exists():
            tables["rainfall"] = wide_to_long(load_rainfall(rain_path))
        else:
            logger.warning("No rainfall table at %s; skipping", rain_path)

    return tables


def build_figures(tables: Dict[str, pd.DataFrame]) -> dict:
    sales = tables["sales"]
    fitted = sales[sales[GROUP_COL].isin(tables["summary"][GROUP_COL])]
    figures = {
        "price_area": price_area_scatter(fitted),
        "slopes": coefficient_chart(tables["coefficients"]),
        "residuals": residual_chart(tables["observations"]),
    }
    if "rainfall" in tables:
        figures["rainfall"] = rainfall_chart(tables["rainfall"])
    return figures


def write_outputs(
    tables: Dict[str, pd.DataFrame],
    figures: dict,
    out_dir: Path = PROCESSED_DIR,
    figures_dir: Optional[Path] = None,
) -> None:
    ensure_dir(out_dir)
    for name, df in tables.items():
        write_json(df, out_dir / OUTPUT_FILES[name])

    figures_dir = ensure_dir(figures_dir or (out_dir / FIGURES_DIR.name))
    for name, fig in figures.items():
        fig.write_html(figures_dir / FIGURE_FILES[name], include_plotlyjs="cdn")


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    tables = run_pipeline()
    write_outputs(tables, build_figures(tables), PROCESSED_DIR)

    n_skipped = len(tables["skipped"])
    logger.info(
        "Wrote %d tables to %s (%d sales, %d groups fitted, %d skipped)",
        len(tables),
        PROCESSED_DIR,
        len(tables["sales"]),
        len(tables["summary"]),
        n_skipped,
    )


if __name__ == "__main__":
    main()
