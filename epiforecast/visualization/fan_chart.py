"""Interactive fan chart of projected totals."""

from __future__ import annotations

from typing import Optional

import plotly.graph_objects as go

from ..models.results import ForecastResults
from ..models.series import HistoricalSeries

PRIMARY_NAVY = "#1F4788"
SECONDARY_TEAL = "#06A77D"
NEUTRAL_GRAY = "#757575"


def build_fan_chart(
    results: ForecastResults,
    *,
    history: Optional[HistoricalSeries] = None,
    title: str = "Projected Total Cases",
) -> go.Figure:
    """
    Construct a fan chart with the 5th-95th band, median and mean.
    """
    daily = results.summary.daily
    dates = results.future_dates

    figure = go.Figure()
    if history is not None:
        figure.add_trace(
            go.Scatter(
                x=history.dates,
                y=history.total_cases,
                line=dict(color=NEUTRAL_GRAY, width=2),
                name="Historical",
                hovertemplate="%{x|%Y-%m-%d}<br>Total %{y:,.0f}<extra></extra>",
            )
        )

    figure.add_trace(
        go.Scatter(
            x=dates,
            y=daily["p95"],
            line=dict(width=0),
            hoverinfo="skip",
            showlegend=False,
            name="P95",
        )
    )
    figure.add_trace(
        go.Scatter(
            x=dates,
            y=daily["p05"],
            line=dict(width=0),
            fill="tonexty",
            fillcolor="rgba(46, 134, 171, 0.18)",
            name="P05 to P95",
            hovertemplate="%{x|%Y-%m-%d}<br>P05 %{y:,.0f}<extra>P05-P95 band</extra>",
        )
    )
    figure.add_trace(
        go.Scatter(
            x=dates,
            y=daily["median"],
            line=dict(color=PRIMARY_NAVY, width=3),
            name="Median",
            hovertemplate="%{x|%Y-%m-%d}<br>Median %{y:,.0f}<extra></extra>",
        )
    )
    figure.add_trace(
        go.Scatter(
            x=dates,
            y=daily["mean"],
            line=dict(color=SECONDARY_TEAL, width=2, dash="dot"),
            name="Mean",
            hovertemplate="%{x|%Y-%m-%d}<br>Mean %{y:,.0f}<extra></extra>",
        )
    )

    figure.update_layout(
        title=title,
        hovermode="x unified",
        margin=dict(l=60, r=30, t=60, b=60),
        xaxis=dict(title="Date"),
        yaxis=dict(title="Total Cases"),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1.0),
    )
    return figure


__all__ = ["build_fan_chart"]
