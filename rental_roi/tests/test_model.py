import math

from rental_roi.core.inputs import InputSet
from rental_roi.core.model import breakeven_year, calc_npv, calc_roi, cashflows
from rental_roi.core.utils import npv


def test_default_property_roi():
    roi = calc_roi(InputSet())
    assert roi.total_investment == 277_000
    assert roi.annual_rent_income == 20_400
    assert roi.annual_costs == 5_661
    assert roi.annual_net_income == 14_739
    assert math.isclose(roi.roi_percent, 5.3209, abs_tol=1e-3)
    assert math.isclose(roi.payback_years, 18.79, abs_tol=1e-2)
    assert roi.pays_back


def test_zero_investment_roi_is_zero():
    roi = calc_roi(InputSet(price=0, renovation_cost=0))
    assert roi.roi_percent == 0
    assert roi.payback_years == 0


def test_non_positive_net_income_never_pays_back():
    roi = calc_roi(InputSet(monthly_rent=0))
    assert roi.annual_net_income < 0
    assert math.isinf(roi.payback_years)
    assert not roi.pays_back

    # exactly zero net income
    roi = calc_roi(InputSet(monthly_rent=1, management_fee=12, property_tax=0))
    assert roi.annual_net_income == 0
    assert math.isinf(roi.payback_years)


def test_npv_rows_cover_every_year():
    result = calc_npv(InputSet(horizon_years=30))
    assert len(result.rows) == 31
    assert [r.year for r in result.rows] == list(range(31))
    assert result.horizon_years == 30


def test_first_row_is_initial_outlay():
    result = calc_npv(InputSet())
    first = result.rows[0]
    assert first.net_cash_flow == -277_000
    assert first.discount_factor == 1
    assert first.present_value == -277_000
    assert first.cumulative_present_value == -277_000


def test_default_property_first_year_discounting():
    result = calc_npv(InputSet())
    year_1 = result.rows[1]
    assert math.isclose(year_1.discount_factor, 0.9804, abs_tol=1e-4)
    assert math.isclose(year_1.present_value, 14_739 / 1.02, rel_tol=1e-12)
    assert math.isclose(year_1.cumulative_present_value, -277_000 + 14_739 / 1.02, rel_tol=1e-12)


def test_npv_equals_sum_of_present_values():
    result = calc_npv(InputSet(discount_rate_percent=7.5, horizon_years=12))
    total = sum(r.present_value for r in result.rows)
    assert math.isclose(result.net_present_value, total, rel_tol=1e-9)
    assert result.net_present_value == result.rows[-1].cumulative_present_value


def test_npv_matches_generic_discounting():
    result = calc_npv(InputSet())
    assert math.isclose(result.net_present_value, npv(0.02, cashflows(result)), rel_tol=1e-9)


def test_zero_discount_rate_is_plain_sum():
    result = calc_npv(InputSet(discount_rate_percent=0, horizon_years=10))
    assert math.isclose(result.net_present_value, -277_000 + 10 * 14_739)
    assert all(r.discount_factor == 1 for r in result.rows)


def test_very_negative_discount_rate_is_floored():
    result = calc_npv(InputSet(discount_rate_percent=-150, horizon_years=3))
    # r = -0.99 -> (1 + r) = 0.01
    assert math.isclose(result.rows[1].discount_factor, 100.0)
    assert math.isclose(result.rows[3].discount_factor, 1e6)
    assert result.discount_rate_percent == -150
    assert all(math.isfinite(r.present_value) for r in result.rows)


def test_horizon_is_floored_to_at_least_one_year():
    assert calc_npv(InputSet(horizon_years=0)).horizon_years == 1
    assert len(calc_npv(InputSet(horizon_years=-4)).rows) == 2
    assert calc_npv(InputSet(horizon_years=2.7)).horizon_years == 2


def test_cumulative_is_monotonic_for_positive_income():
    result = calc_npv(InputSet())
    cumulative = [r.cumulative_present_value for r in result.rows]
    assert cumulative == sorted(cumulative)


def test_breakeven_year_for_default_property():
    result = calc_npv(InputSet())
    year = breakeven_year(result)
    assert year == 24
    assert result.rows[23].cumulative_present_value < 0 <= result.rows[24].cumulative_present_value


def test_breakeven_year_absent_when_never_recovered():
    assert breakeven_year(calc_npv(InputSet(monthly_rent=0))) is None
    assert breakeven_year(calc_npv(InputSet(horizon_years=5))) is None


def test_breakeven_year_zero_for_free_property():
    assert breakeven_year(calc_npv(InputSet(price=0, renovation_cost=0))) == 0


def test_to_frame_columns():
    df = calc_npv(InputSet(horizon_years=4)).to_frame()
    assert list(df.columns) == [
        "year",
        "net_cash_flow",
        "discount_factor",
        "present_value",
        "cumulative_present_value",
    ]
    assert len(df) == 5
    assert df["year"].tolist() == [0, 1, 2, 3, 4]
