from __future__ import annotations

from typing import List

import pandas as pd

from .model import NPVResult, ROIResult, breakeven_year
from .utils import DASH, fmt_currency, fmt_number, fmt_percent, fmt_years

NPV_COLUMNS = ["Year", "Net cash flow", "Discount factor", "Present value", "Cumulative PV"]


def npv_table(result: NPVResult) -> pd.DataFrame:
    """Display version of the cash-flow table (formatted strings)."""
    rows = []
    for row in result.rows:
        rows.append(
            {
                "Year": row.year,
                "Net cash flow": DASH if row.year == 0 else fmt_currency(row.net_cash_flow),
                "Discount factor": fmt_number(row.discount_factor, 4),
                "Present value": fmt_currency(row.present_value),
                "Cumulative PV": fmt_currency(row.cumulative_present_value),
            }
        )
    return pd.DataFrame(rows, columns=NPV_COLUMNS)


def _sign(value: float) -> str:
    return "positive" if value >= 0 else "negative"


def row_classes(result: NPVResult) -> List[str]:
    """'highlight' for the breakeven row, '' otherwise."""
    highlight = breakeven_year(result)
    return ["highlight" if highlight is not None and row.year == highlight else "" for row in result.rows]


def cell_classes(result: NPVResult) -> pd.DataFrame:
    """Sign classes aligned with :func:`npv_table` for cell colouring."""
    rows = []
    for row in result.rows:
        rows.append(
            {
                "Year": "",
                "Net cash flow": _sign(row.net_cash_flow),
                "Discount factor": "",
                "Present value": _sign(row.present_value),
                "Cumulative PV": _sign(row.cumulative_present_value),
            }
        )
    return pd.DataFrame(rows, columns=NPV_COLUMNS)


def roi_summary(roi: ROIResult) -> pd.DataFrame:
    return pd.DataFrame(
        [
            ("Total investment", fmt_currency(roi.total_investment)),
            ("Annual rent income", fmt_currency(roi.annual_rent_income)),
            ("Annual costs", fmt_currency(roi.annual_costs)),
            ("Annual net income", fmt_currency(roi.annual_net_income)),
            ("ROI", fmt_percent(roi.roi_percent)),
            ("Payback", fmt_years(roi.payback_years)),
        ],
        columns=["Metric", "Value"],
    )
