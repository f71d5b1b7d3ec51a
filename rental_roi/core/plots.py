from __future__ import annotations

from typing import List, Optional

import numpy as np
import plotly.graph_objects as go

from .inputs import InputSet
from .model import NPVResult, breakeven_year, calc_npv


def cashflow_bars(result: NPVResult, title: str = "Annual cash flow", template: Optional[str] = None) -> go.Figure:
    df = result.to_frame()
    colors = ["#2ca02c" if v >= 0 else "#d62728" for v in df["net_cash_flow"]]
    fig = go.Figure()
    fig.add_bar(x=df["year"], y=df["net_cash_flow"], name="Net cash flow", marker_color=colors)
    fig.add_bar(x=df["year"], y=df["present_value"], name="Present value", opacity=0.6)
    fig.update_layout(title=title, xaxis_title="Year", yaxis_title="$", barmode="group", template=template)
    return fig


def cumulative_pv_curve(
    result: NPVResult,
    title: str = "Cumulative present value",
    template: Optional[str] = None,
) -> go.Figure:
    df = result.to_frame()
    fig = go.Figure(
        go.Scatter(x=df["year"], y=df["cumulative_present_value"], mode="lines+markers", name="Cumulative PV")
    )
    fig.add_hline(y=0, line_dash="dot", line_color="grey")

    year = breakeven_year(result)
    if year is not None:
        value = float(df.loc[df["year"] == year, "cumulative_present_value"].values[0])
        fig.add_trace(
            go.Scatter(
                x=[year],
                y=[value],
                mode="markers",
                marker=dict(size=14, symbol="star", color="#ff7f0e"),
                name=f"Breakeven (year {year})",
            )
        )
    fig.update_layout(title=title, xaxis_title="Year", yaxis_title="$", template=template)
    return fig


def discount_rate_range(current_percent: float, spread: float = 4.0, n: int = 9) -> List[float]:
    """Evenly spaced discount rates (in %) around the current one, never below -99%."""
    low = max(-99.0, current_percent - spread)
    high = max(low + 1.0, current_percent + spread)
    return np.linspace(low, high, n).tolist()


def npv_sensitivity(inputs: InputSet, rates_percent: List[float]) -> List[float]:
    values = []
    for rate in rates_percent:
        data = inputs.as_dict()
        data["discount_rate_percent"] = float(rate)
        values.append(calc_npv(InputSet(**data)).net_present_value)
    return values


def npv_sensitivity_curve(
    xs: List[float],
    ys: List[float],
    title: str = "NPV vs discount rate",
    template: Optional[str] = None,
) -> go.Figure:
    fig = go.Figure(go.Scatter(x=xs, y=ys, mode="lines+markers", name="NPV"))
    fig.add_hline(y=0, line_dash="dot", line_color="grey")
    fig.update_layout(title=title, xaxis_title="Discount rate (%)", yaxis_title="$", template=template)
    return fig
