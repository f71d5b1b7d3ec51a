from __future__ import annotations

import logging
from typing import Dict, List, Optional

import pandas as pd
import streamlit as st

from rental_roi.core import plots
from rental_roi.core.inputs import NPV_FIELDS, InputSet, has_errors, read_inputs, validate_inputs
from rental_roi.core.model import NPVResult, ROIResult, breakeven_year, calc_npv, calc_roi
from rental_roi.core.report import build_pdf, to_csv
from rental_roi.core.storage import JsonFileStore, load_inputs, save_inputs
from rental_roi.core.tables import cell_classes, npv_table, row_classes
from rental_roi.core.theme import DARK, LIGHT, apply_theme, page_css, plotly_template, resolve_theme
from rental_roi.core.utils import DASH, fmt_currency, fmt_percent, fmt_years
from config import (
    PRICE,
    RENOVATION_COST,
    MANAGEMENT_FEE,
    PROPERTY_TAX,
    MONTHLY_RENT,
    DISCOUNT_RATE_PERCENT,
    HORIZON_YEARS,
    DEFAULT_THEME,
    STORAGE_PATH,
    LOG_LEVEL,
)


logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Rental investment calculator", layout="wide")

STORE = JsonFileStore(STORAGE_PATH)
MODES = ["ROI", "NPV"]


def default_inputs() -> InputSet:
    return InputSet(
        price=PRICE,
        renovation_cost=RENOVATION_COST,
        management_fee=MANAGEMENT_FEE,
        property_tax=PROPERTY_TAX,
        monthly_rent=MONTHLY_RENT,
        discount_rate_percent=DISCOUNT_RATE_PERCENT,
        horizon_years=HORIZON_YEARS,
    )


def _widget_key(name: str) -> str:
    return f"input_{name}"


def _widget_value(name: str, value: float):
    return int(value) if name == "horizon_years" else float(value)


def populate_inputs(inputs: InputSet) -> None:
    # widgets hidden in ROI mode drop their state, so "values" is the source of truth
    st.session_state["values"] = inputs.as_dict()
    for name, value in inputs.as_dict().items():
        st.session_state[_widget_key(name)] = _widget_value(name, value)


def current_inputs() -> InputSet:
    raw = st.session_state.get("values", {})
    return read_inputs(raw, default_inputs())


def init_state() -> None:
    if st.session_state.get("initialized"):
        return
    theme = resolve_theme(STORE, DEFAULT_THEME)
    st.session_state["theme"] = theme
    st.session_state["dark_theme"] = theme == DARK

    saved = load_inputs(STORE) or {}
    merged = {**default_inputs().as_dict(), **saved}
    populate_inputs(read_inputs(merged, default_inputs()))

    st.session_state["show_results"] = False
    st.session_state["show_npv"] = False
    st.session_state["initialized"] = True
    logger.info("Session initialised (theme=%s, saved inputs=%s)", theme, bool(saved))


# ------------------------- Callbacks ------------------------- #
def _persist(name: str) -> None:
    st.session_state["values"][name] = st.session_state[_widget_key(name)]
    save_inputs(STORE, current_inputs())


def _on_mode_change() -> None:
    # the detail panel is only revealed by a calculation
    st.session_state["show_npv"] = False
    # hidden NPV widgets keep stale state; show the values the calculation will use
    for name in NPV_FIELDS:
        st.session_state[_widget_key(name)] = _widget_value(name, st.session_state["values"][name])


def _on_theme_change() -> None:
    st.session_state["theme"] = apply_theme(STORE, DARK if st.session_state["dark_theme"] else LIGHT)


def _calculate() -> None:
    inputs = current_inputs()
    save_inputs(STORE, inputs)
    if has_errors(validate_inputs(inputs)):
        logger.warning("Calculating with questionable inputs: %s", inputs)

    previous = st.session_state.get("roi")
    st.session_state["previous_roi"] = previous
    st.session_state["roi"] = calc_roi(inputs)
    st.session_state["npv"] = calc_npv(inputs)
    st.session_state["calc_inputs"] = inputs
    st.session_state["show_results"] = True
    st.session_state["show_npv"] = st.session_state.get("mode") == "NPV"
    logger.info("Calculated ROI/NPV for price=%.0f rent=%.0f", inputs.price, inputs.monthly_rent)


def _reset() -> None:
    defaults = default_inputs()
    populate_inputs(defaults)
    save_inputs(STORE, defaults)
    st.session_state["show_results"] = False
    st.session_state["show_npv"] = False
    st.session_state["previous_roi"] = None
    st.session_state["roi"] = None


# ------------------------- Sidebar ------------------------- #
def number_field(label: str, name: str, messages: Dict[str, str], help_text: str, **kwargs) -> None:
    key = _widget_key(name)
    if key not in st.session_state:
        st.session_state[key] = _widget_value(name, st.session_state["values"][name])
    st.sidebar.number_input(label, key=key, on_change=_persist, args=(name,), help=help_text, **kwargs)
    if messages.get(name):
        st.sidebar.caption(f":red[{messages[name]}]")


def sidebar_inputs() -> InputSet:
    st.sidebar.toggle("Dark theme", key="dark_theme", on_change=_on_theme_change)
    mode = st.sidebar.radio("Calculator", MODES, key="mode", horizontal=True, on_change=_on_mode_change)
    messages = validate_inputs(current_inputs())

    st.sidebar.header("Property")
    number_field("Purchase price ($)", "price", messages,
                 "Price paid for the property, excluding renovation.", step=5_000.0)
    number_field("Renovation cost ($)", "renovation_cost", messages,
                 "One-off works paid at purchase; added to the total investment.", step=1_000.0)

    st.sidebar.subheader("Yearly figures")
    number_field("Management fee ($/year)", "management_fee", messages,
                 "Annual property management cost.", step=100.0)
    number_field("Property tax ($/year)", "property_tax", messages, "Annual property tax.", step=100.0)
    number_field("Rent ($/month)", "monthly_rent", messages,
                 "Monthly rent received; multiplied by 12 for the annual income.", step=50.0)

    if mode == "NPV":
        st.sidebar.subheader("Discounting")
        number_field("Discount rate (%)", "discount_rate_percent", messages,
                     "Annual rate used to discount future cash flows. Floored at -99%.", step=0.5, format="%0.2f")
        number_field("Years", "horizon_years", messages, "Number of years of rent to project.", min_value=1, step=1)

    c1, c2 = st.sidebar.columns(2)
    c1.button("Calculate", type="primary", on_click=_calculate, width="stretch")
    c2.button("Reset", on_click=_reset, width="stretch")
    return current_inputs()


# ------------------------- Results ------------------------- #
def kpi_card(label: str, value: str, delta: Optional[str] = None, help_text: str | None = None):
    st.metric(label, value, delta=delta, help=help_text)


def _delta(current: float, previous: Optional[float], fmt) -> Optional[str]:
    if previous is None or current == previous:
        return None
    return fmt(current - previous)


def render_cards(roi: ROIResult, previous: Optional[ROIResult]):
    st.subheader("Return on investment")
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        kpi_card("Total investment", fmt_currency(roi.total_investment),
                 _delta(roi.total_investment, previous.total_investment if previous else None, fmt_currency),
                 "Price + renovation")
    with c2:
        kpi_card("Annual net income", fmt_currency(roi.annual_net_income),
                 _delta(roi.annual_net_income, previous.annual_net_income if previous else None, fmt_currency),
                 "Rent x 12 - (management + tax)")
    with c3:
        kpi_card("ROI", fmt_percent(roi.roi_percent),
                 _delta(roi.roi_percent, previous.roi_percent if previous else None, fmt_percent))
    with c4:
        if roi.pays_back:
            prev = previous.payback_years if previous and previous.pays_back else None
            kpi_card("Payback", fmt_years(roi.payback_years), _delta(roi.payback_years, prev, fmt_years))
        else:
            kpi_card("Payback", DASH, help_text="Net income is not positive: the investment never pays back")


def style_npv_table(result: NPVResult):
    df = npv_table(result)
    highlights = row_classes(result)
    cells = cell_classes(result)
    colours = {"positive": "color: #2ca02c;", "negative": "color: #d62728;", "": ""}

    def _css(_: pd.DataFrame) -> pd.DataFrame:
        css = cells.apply(lambda col: col.map(colours))
        for i, cls in enumerate(highlights):
            if cls == "highlight":
                css.iloc[i] = css.iloc[i] + " background-color: rgba(255, 193, 7, 0.25); font-weight: bold;"
        return css

    return df.style.apply(_css, axis=None)


def render_npv(inputs: InputSet, roi: ROIResult, result: NPVResult, theme: str):
    st.subheader("Net present value")
    year = breakeven_year(result)
    c1, c2, c3 = st.columns(3)
    with c1:
        kpi_card("NPV", fmt_currency(result.net_present_value))
    with c2:
        kpi_card("Discount rate", fmt_percent(result.discount_rate_percent), help_text="Floored at -99%")
    with c3:
        kpi_card("Breakeven year", str(year) if year is not None else DASH,
                 help_text="First year where the cumulative present value turns non-negative")

    tabs = st.tabs(["Table", "Graphs", "Sensitivity"])
    template = plotly_template(theme)
    with tabs[0]:
        st.dataframe(style_npv_table(result), width="stretch", hide_index=True)
    with tabs[1]:
        g1, g2 = st.columns(2)
        with g1:
            st.plotly_chart(plots.cashflow_bars(result, template=template), width="stretch")
        with g2:
            st.plotly_chart(plots.cumulative_pv_curve(result, template=template), width="stretch")
    with tabs[2]:
        rates: List[float] = plots.discount_rate_range(inputs.discount_rate_percent)
        values = plots.npv_sensitivity(inputs, rates)
        st.plotly_chart(plots.npv_sensitivity_curve(rates, values, template=template), width="stretch")

    d1, d2 = st.columns(2)
    d1.download_button("Export CSV", data=to_csv(result), file_name="npv_cash_flows.csv", mime="text/csv")
    d2.download_button("Export PDF", data=build_pdf(roi, result), file_name="rental_report.pdf",
                       mime="application/pdf")


def main():
    init_state()
    st.markdown(page_css(st.session_state["theme"]), unsafe_allow_html=True)
    st.title("Rental investment calculator")
    sidebar_inputs()

    if not st.session_state.get("show_results") or st.session_state.get("roi") is None:
        st.info("Enter the property figures and press Calculate.")
        return

    roi: ROIResult = st.session_state["roi"]
    render_cards(roi, st.session_state.get("previous_roi"))
    if st.session_state.get("show_npv"):
        st.divider()
        render_npv(st.session_state["calc_inputs"], roi, st.session_state["npv"], st.session_state["theme"])


if __name__ == "__main__":
    main()
