"""Plotly figures for the slide deck."""
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .config import (
    AREA_COL,
    CATEGORY_COL,
    GROUP_COL,
    PREDICTOR_COL,
    PRICE_COL,
    RAIN_DATE_COL,
    RAIN_SERIES_COL,
    RAIN_VALUE_COL,
)

AXIS_LABELS = {
    PRICE_COL: "Sale Price ($)",
    AREA_COL: "Living Area (sq ft)",
    CATEGORY_COL: "Classification",
    GROUP_COL: "Location",
    RAIN_VALUE_COL: "Rainfall (in)",
    RAIN_SERIES_COL: "Gauge",
    RAIN_DATE_COL: "Date",
}


def apply_common_layout(fig, title=None, height=500):
    """Slide styling: white template, larger type, legend under the plot."""
    fig.update_layout(
        template="simple_white",
        height=height,
        title=title,
        title_x=0.02,
        font=dict(size=15),
        legend=dict(orientation="h", yanchor="top", y=-0.15, x=0),
        margin=dict(t=70, b=90, l=70, r=30),
    )
    fig.update_yaxes(tickformat="~s")
    return fig


def price_area_scatter(df, x=AREA_COL, y=PRICE_COL, color=GROUP_COL, title=None, height=600):
    """Scatter of price against area with one OLS trendline per color group."""
    fig = px.scatter(
        df, x=x, y=y, color=color,
        trendline="ols", labels=AXIS_LABELS, opacity=0.5,
    )
    return apply_common_layout(fig, title or "Price vs. Area", height)


def coefficient_chart(coefficients, term=PREDICTOR_COL, group_col=GROUP_COL, title=None, height=500):
    """Estimate +/- 2 standard errors of one term, one point per group."""
    coefs = coefficients[coefficients["term"] == term].sort_values("estimate")
    fig = go.Figure(
        go.Scatter(
            x=coefs["estimate"],
            y=coefs[group_col],
            mode="markers",
            error_x=dict(type="data", array=2 * coefs["std_error"], visible=True),
        )
    )
    fig.update_layout(xaxis_title=f"{term} coefficient", yaxis_title=AXIS_LABELS.get(group_col, group_col))
    return apply_common_layout(fig, title or f"{term} coefficient by {group_col}", height)


def residual_chart(observations, group_col=GROUP_COL, title=None, height=500):
    fig = px.scatter(
        observations, x="fitted", y="resid", color=group_col,
        labels={**AXIS_LABELS, "fitted": "Fitted", "resid": "Residual"},
    )
    fig.add_hline(y=0, line_dash="dash", line_color="gray")
    return apply_common_layout(fig, title or "Residuals vs. Fitted", height)


def rainfall_chart(long_df: pd.DataFrame, title=None, height=500):
    fig = px.line(
        long_df, x=RAIN_DATE_COL, y=RAIN_VALUE_COL, color=RAIN_SERIES_COL,
        labels=AXIS_LABELS,
    )
    return apply_common_layout(fig, title or "Rainfall by Gauge", height)
