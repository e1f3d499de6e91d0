"""
Per-group simple linear regression with tidy outputs.

The procedure runs in four stages:

  NEST     split the sales table by location into sub-tables
  FIT      ordinary least squares of price on area for each sub-table
  EXTRACT  three views per fit: coefficients, per-observation diagnostics
           and a one-row model summary
  COMBINE  stack each view across groups, with the group key as a column

Groups are visited in sorted key order, so output row order is stable no
matter how the input rows were arranged. A group that cannot be fitted is
skipped, logged, and reported in GroupedFit.skipped.
"""
from __future__ import annotations

import logging
from typing import Dict, List

import numpy as np
import pandas as pd
import statsmodels.api as sm

from ..config import GROUP_COL, MIN_GROUP_ROWS, PREDICTOR_COL, RESPONSE_COL
from ..errors import FitError
from ..model import GroupedFit

logger = logging.getLogger(__name__)

INTERCEPT_TERM = "intercept"

COEF_COLUMNS = [
    "term",
    "estimate",
    "std_error",
    "statistic",
    "p_value",
    "conf_low",
    "conf_high",
]
OBS_STAT_COLUMNS = ["fitted", "resid", "hat", "std_resid", "cooksd"]
SUMMARY_COLUMNS = [
    "r_squared",
    "adj_r_squared",
    "sigma",
    "statistic",
    "p_value",
    "df",
    "df_residual",
    "nobs",
    "log_lik",
    "aic",
    "bic",
    "deviance",
]


# ---------------------------------------------------------------------------
# NEST
# ---------------------------------------------------------------------------

def nest(df: pd.DataFrame, by: str = GROUP_COL) -> Dict[str, pd.DataFrame]:
    """
    Split df into {key: sub-table}, keys in sorted order.

    Sub-tables keep the row labels of df, which become row_id in the
    per-observation view. A frame with repeated labels is renumbered
    0..n-1 first so row_id stays unique. Rows with no key are dropped.
    """
    if not df.index.is_unique:
        logger.warning("Row labels are not unique; using row positions as row_id")
        df = df.reset_index(drop=True)

    no_key = df[by].isna()
    if no_key.any():
        logger.warning("Dropping %d rows with no %s", int(no_key.sum()), by)

    return {key: sub for key, sub in df.loc[~no_key].groupby(by, sort=True)}


# ---------------------------------------------------------------------------
# FIT
# ---------------------------------------------------------------------------

def fit_group(
    sub: pd.DataFrame,
    response: str = RESPONSE_COL,
    predictor: str = PREDICTOR_COL,
    min_rows: int = MIN_GROUP_ROWS,
):
    """
    OLS fit of response ~ predictor for one group.

    Rows missing either variable are left out. Raises FitError when fewer
    than min_rows rows remain or the predictor takes a single value, since
    the slope is then undefined.
    """
    data = sub[[predictor, response]].dropna()
    needed = max(min_rows, 2)
    if len(data) < needed:
        raise FitError(f"{len(data)} usable rows, need at least {needed}")
    if data[predictor].nunique() < 2:
        raise FitError(f"no variation in {predictor}")

    X = sm.add_constant(data[predictor].astype(float), has_constant="add")
    return sm.OLS(data[response].astype(float), X).fit()


# ---------------------------------------------------------------------------
# EXTRACT
# ---------------------------------------------------------------------------

# Statistics that need a residual variance; undefined when n == 2
NEEDS_RESID_DF = {
    "coefficients": ["std_error", "statistic", "p_value", "conf_low", "conf_high"],
    "observations": ["std_resid", "cooksd"],
    "summary": ["adj_r_squared", "sigma", "statistic", "p_value", "log_lik", "aic", "bic"],
}


def _blank_if_no_resid_df(out: pd.DataFrame, fit, view: str) -> pd.DataFrame:
    if fit.df_resid <= 0:
        out[NEEDS_RESID_DF[view]] = np.nan
    return out


def tidy_coefficients(fit, key: str, group_col: str = GROUP_COL) -> pd.DataFrame:
    conf = fit.conf_int()
    terms = [INTERCEPT_TERM if t == "const" else t for t in fit.params.index]
    out = pd.DataFrame(
        {
            "term": terms,
            "estimate": fit.params.to_numpy(),
            "std_error": fit.bse.to_numpy(),
            "statistic": fit.tvalues.to_numpy(),
            "p_value": fit.pvalues.to_numpy(),
            "conf_low": conf.iloc[:, 0].to_numpy(),
            "conf_high": conf.iloc[:, 1].to_numpy(),
        }
    )
    out.insert(0, group_col, key)
    return _blank_if_no_resid_df(out, fit, "coefficients")


def augment_observations(
    fit,
    sub: pd.DataFrame,
    key: str,
    group_col: str = GROUP_COL,
    response: str = RESPONSE_COL,
    predictor: str = PREDICTOR_COL,
) -> pd.DataFrame:
    """One row per fitted input row: fitted value, residual, leverage,
    internally studentized residual and Cook's distance."""
    # same rows, same order as fit_group used
    data = sub[[predictor, response]].dropna()
    influence = fit.get_influence()
    out = pd.DataFrame(
        {
            "row_id": data.index.to_numpy(),
            predictor: data[predictor].to_numpy(),
            response: data[response].to_numpy(),
            "fitted": fit.fittedvalues.to_numpy(),
            "resid": fit.resid.to_numpy(),
            "hat": np.asarray(influence.hat_matrix_diag),
            "std_resid": np.asarray(influence.resid_studentized_internal),
            "cooksd": np.asarray(influence.cooks_distance[0]),
        }
    )
    out.insert(0, group_col, key)
    return _blank_if_no_resid_df(out, fit, "observations")


def glance_summary(fit, key: str, group_col: str = GROUP_COL) -> pd.DataFrame:
    out = pd.DataFrame(
        [
            {
                group_col: key,
                "r_squared": fit.rsquared,
                "adj_r_squared": fit.rsquared_adj,
                "sigma": np.sqrt(fit.scale),
                "statistic": fit.fvalue,
                "p_value": fit.f_pvalue,
                "df": fit.df_model,
                "df_residual": fit.df_resid,
                "nobs": int(fit.nobs),
                "log_lik": fit.llf,
                "aic": fit.aic,
                "bic": fit.bic,
                "deviance": fit.ssr,
            }
        ]
    )
    return _blank_if_no_resid_df(out, fit, "summary")


# ---------------------------------------------------------------------------
# COMBINE
# ---------------------------------------------------------------------------

def _stack(frames: List[pd.DataFrame], columns: List[str]) -> pd.DataFrame:
    if not frames:
        return pd.DataFrame(columns=columns)
    return pd.concat(frames, ignore_index=True)


def fit_by_group(
    df: pd.DataFrame,
    group_col: str = GROUP_COL,
    response: str = RESPONSE_COL,
    predictor: str = PREDICTOR_COL,
    min_rows: int = MIN_GROUP_ROWS,
) -> GroupedFit:
    coefs: List[pd.DataFrame] = []
    observations: List[pd.DataFrame] = []
    summaries: List[pd.DataFrame] = []
    skipped: Dict[str, str] = {}

    groups = nest(df, group_col)
    for key, sub in groups.items():
        # perfect or two-point fits divide by a zero residual variance
        with np.errstate(divide="ignore", invalid="ignore"):
            try:
                fit = fit_group(sub, response, predictor, min_rows)
            except FitError as e:
                logger.warning("Skipping %s %r: %s", group_col, key, e)
                skipped[key] = str(e)
                continue
            coefs.append(tidy_coefficients(fit, key, group_col))
            observations.append(
                augment_observations(fit, sub, key, group_col, response, predictor)
            )
            summaries.append(glance_summary(fit, key, group_col))

    if skipped:
        logger.warning("Skipped %d of %d %s groups", len(skipped), len(groups), group_col)
    logger.info("Fitted %s ~ %s for %d groups", response, predictor, len(summaries))

    return GroupedFit(
        coefficients=_stack(coefs, [group_col] + COEF_COLUMNS),
        observations=_stack(
            observations, [group_col, "row_id", predictor, response] + OBS_STAT_COLUMNS
        ),
        summary=_stack(summaries, [group_col] + SUMMARY_COLUMNS),
        skipped=skipped,
    )
