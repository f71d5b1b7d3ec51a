from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Tuple

import pandas as pd

from .inputs import InputSet
from .utils import discount_factor


logger = logging.getLogger(__name__)

MONTHS_IN_YEAR = 12
MIN_DISCOUNT_RATE = -0.99


@dataclass(frozen=True)
class ROIResult:
    total_investment: float
    annual_rent_income: float
    annual_costs: float
    annual_net_income: float
    roi_percent: float
    payback_years: float  # math.inf when the investment never pays back

    @property
    def pays_back(self) -> bool:
        return math.isfinite(self.payback_years)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class CashFlowRow:
    year: int
    net_cash_flow: float
    discount_factor: float
    present_value: float
    cumulative_present_value: float


@dataclass(frozen=True)
class NPVResult:
    net_present_value: float
    rows: Tuple[CashFlowRow, ...]
    discount_rate_percent: float
    horizon_years: int

    def to_frame(self) -> pd.DataFrame:
        """Rows as a DataFrame.

        Columns: year, net_cash_flow, discount_factor, present_value, cumulative_present_value
        """
        return pd.DataFrame(
            [asdict(row) for row in self.rows],
            columns=[
                "year",
                "net_cash_flow",
                "discount_factor",
                "present_value",
                "cumulative_present_value",
            ],
        )


def total_investment(inputs: InputSet) -> float:
    return inputs.price + inputs.renovation_cost


def annual_costs(inputs: InputSet) -> float:
    return inputs.management_fee + inputs.property_tax


def annual_net_income(inputs: InputSet) -> float:
    return inputs.monthly_rent * MONTHS_IN_YEAR - annual_costs(inputs)


def effective_discount_rate(discount_rate_percent: float) -> float:
    """Decimal discount rate, floored at -99% to keep (1 + r) away from zero."""
    return max(MIN_DISCOUNT_RATE, discount_rate_percent / 100.0)


def calc_roi(inputs: InputSet) -> ROIResult:
    invest = total_investment(inputs)
    rent = inputs.monthly_rent * MONTHS_IN_YEAR
    costs = annual_costs(inputs)
    net = rent - costs

    roi = 0.0 if invest == 0 else net / invest * 100.0
    payback = invest / net if net > 0 else math.inf

    logger.debug("ROI: invest=%.2f net=%.2f roi=%.4f%% payback=%s", invest, net, roi, payback)
    return ROIResult(
        total_investment=invest,
        annual_rent_income=rent,
        annual_costs=costs,
        annual_net_income=net,
        roi_percent=roi,
        payback_years=payback,
    )


def calc_npv(inputs: InputSet) -> NPVResult:
    """Discounted cash-flow table over the horizon.

    Year 0 carries the initial outlay undiscounted; years 1..N each carry the
    constant annual net income discounted by 1 / (1 + r)^t. The net present
    value is the cumulative present value at the last year.
    """
    years = max(1, int(math.floor(inputs.horizon_years)))
    rate = effective_discount_rate(inputs.discount_rate_percent)

    invest = total_investment(inputs)
    net_annual = annual_net_income(inputs)

    rows: List[CashFlowRow] = []
    cumulative = -invest
    rows.append(
        CashFlowRow(
            year=0,
            net_cash_flow=-invest,
            discount_factor=1.0,
            present_value=-invest,
            cumulative_present_value=cumulative,
        )
    )
    for t in range(1, years + 1):
        factor = discount_factor(rate, t)
        pv = net_annual * factor
        cumulative += pv
        rows.append(
            CashFlowRow(
                year=t,
                net_cash_flow=net_annual,
                discount_factor=factor,
                present_value=pv,
                cumulative_present_value=cumulative,
            )
        )

    logger.debug("NPV: rate=%.4f years=%d npv=%.2f", rate, years, cumulative)
    return NPVResult(
        net_present_value=cumulative,
        rows=tuple(rows),
        discount_rate_percent=inputs.discount_rate_percent,
        horizon_years=years,
    )


def breakeven_year(result: NPVResult) -> Optional[int]:
    """First year whose cumulative present value is non-negative, if any."""
    for row in result.rows:
        if row.cumulative_present_value >= 0:
            return row.year
    return None


def cashflows(result: NPVResult) -> List[float]:
    """Undiscounted cash flows CF_0..CF_N."""
    return [row.net_cash_flow for row in result.rows]
