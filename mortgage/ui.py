import logging

import pandas as pd
import streamlit as st

from state import reset_state

from .calculations import compute_mortgage, household_income
from .energy import ENERGY_LABEL_COLORS, describe_adjustment
from .formatting import format_eur, format_percent
from .models import DomainError, EnergyLabel, MortgageCalculationResult
from .validation import validate_all, validate_appraised_value, validate_home_value

logger = logging.getLogger(__name__)

LABEL_OPTIONS = [label.value for label in EnergyLabel]
BUYING_OPTIONS = ["Alone", "Together"]

# Form field -> key in the aggregated validation errors
FIELD_ERROR_KEYS = {
    "income": "income",
    "partner_income": "partner_income",
    "buying_alone": "buying_type",
    "home_value": "home_value",
    "appraised_value": "appraised_value",
    "energy_label": "energy_label",
    "annual_rate_pct": "interest_rate",
    "duration_years": "duration",
}


def _energy_badge(label: str) -> str:
    color = ENERGY_LABEL_COLORS[EnergyLabel.parse(label)]
    return f"""
        <span style="
            display: inline-block;
            min-width: 34px;
            padding: 4px 10px;
            border-radius: 4px;
            background: {color};
            color: white;
            font-size: 20px;
            font-weight: 700;
            text-align: center;
        ">{label}</span>
    """


def _field_error(errors: dict, field: str) -> None:
    message = errors.get(FIELD_ERROR_KEYS[field])
    if message:
        st.error(message)


def collect_errors(inputs: dict) -> dict[str, str]:
    buying_alone = inputs.get("buying_alone")
    validation = validate_all(
        inputs.get("income"),
        inputs.get("annual_rate_pct"),
        inputs.get("duration_years"),
        buying_alone=buying_alone,
        energy_label=inputs.get("energy_label"),
        partner_income=inputs.get("partner_income"),
    )
    errors = dict(validation.errors)

    home_result = validate_home_value(inputs.get("home_value"))
    if not home_result.is_valid:
        errors["home_value"] = home_result.message
    appraisal_result = validate_appraised_value(inputs.get("appraised_value"))
    if not appraisal_result.is_valid:
        errors["appraised_value"] = appraisal_result.message
    return errors


def calculate_from_inputs(inputs: dict) -> MortgageCalculationResult:
    """Run the calculation for already-validated form inputs (rate in percent)."""
    buying_alone = bool(inputs["buying_alone"])
    income = household_income(
        float(inputs["income"]),
        float(inputs["partner_income"]) if inputs.get("partner_income") is not None else None,
        buying_alone=buying_alone,
    )
    appraised = inputs.get("appraised_value")
    return compute_mortgage(
        income,
        float(inputs["home_value"]),
        inputs["energy_label"],
        float(inputs["annual_rate_pct"]) / 100.0,
        int(inputs["duration_years"]),
        appraised_value=float(appraised) if appraised is not None else None,
    )


def _render_result(result: MortgageCalculationResult, income: float, annual_rate: float) -> None:
    st.markdown(
        f"""
        <div style="
            padding: 14px;
            border-radius: 6px;
            background: #2e7d32;
            color: white;
            font-size: 22px;
            font-weight: 700;
        ">
            Maximum mortgage: {format_eur(result.final_loan_amount)}  |
            Monthly payment: {format_eur(result.monthly_payment)}
        </div>
        """,
        unsafe_allow_html=True
    )

    st.markdown("### Summary")
    c1, c2 = st.columns(2)
    with c1:
        st.metric("Maximum Mortgage", format_eur(result.final_loan_amount))
        st.metric("Monthly Payment", format_eur(result.monthly_payment))
        st.metric("Out of Pocket", format_eur(result.out_of_pocket))
    with c2:
        st.caption("Energy Label")
        st.markdown(_energy_badge(result.energy_label.value), unsafe_allow_html=True)
        st.caption(describe_adjustment(result.energy_label, income))
        st.metric("Interest Rate", format_percent(annual_rate))

    breakdown = pd.DataFrame(result.as_rows(), columns=["Item", "Amount"])
    breakdown["Amount"] = breakdown["Amount"].map(format_eur)
    st.dataframe(breakdown, width="stretch", hide_index=True)


def render_mortgage():
    inputs = st.session_state["mortgage_inputs"]
    errors = st.session_state["mortgage_errors"]

    with st.expander(
            f"Energy-Label Mortgage  •  {st.session_state['mortgage_badge']}",
            expanded=True,
    ):
        left, right = st.columns([1.05, 1.25], gap="large")

        with left:
            st.subheader("Your situation")

            with st.expander("ℹ️ How is the maximum calculated?", expanded=False):
                st.markdown("""
**Base capacity** – Gross annual income × 4.5.

**Energy label** – Efficient homes (A, B) add €10,000. C and D are neutral.
Homes labelled E, F or G reduce capacity by €5,500, rising to €30,000 for
incomes of €150,000 and above.

**Appraised value** – The mortgage never exceeds the appraised value of the
home. Without a separate appraisal the home value is used.

**Monthly payment** – Fixed-rate annuity: M = P × r(1+r)^n / ((1+r)^n − 1),
with r = annual rate ÷ 12 and n = years × 12.
""")

            buying_index = None
            if inputs.get("buying_alone") is not None:
                buying_index = 0 if inputs["buying_alone"] else 1
            buying_choice = st.radio(
                "Are you buying alone or together?",
                BUYING_OPTIONS,
                index=buying_index,
                horizontal=True,
            )
            buying_alone = None if buying_choice is None else buying_choice == "Alone"
            _field_error(errors, "buying_alone")

            income = st.number_input(
                "Gross annual income (€)",
                min_value=0.0,
                value=float(inputs.get("income") or 0.0),
                step=1000.0,
                format="%.2f"
            )
            _field_error(errors, "income")

            partner_income = inputs.get("partner_income")
            if buying_alone is False:
                partner_income = st.number_input(
                    "Partner gross annual income (€)",
                    min_value=0.0,
                    value=float(partner_income or 0.0),
                    step=1000.0,
                    format="%.2f"
                )
                _field_error(errors, "partner_income")

            st.markdown("#### The home")

            home_value = st.number_input(
                "Home value (€)",
                min_value=0.0,
                value=float(inputs.get("home_value") or 0.0),
                step=1000.0,
                format="%.2f"
            )
            _field_error(errors, "home_value")

            has_appraisal = st.checkbox(
                "The home has a separate appraised value",
                value=inputs.get("appraised_value") is not None
            )
            appraised_value = None
            if has_appraisal:
                appraised_value = st.number_input(
                    "Appraised value (€)",
                    min_value=0.0,
                    value=float(inputs.get("appraised_value") or home_value),
                    step=1000.0,
                    format="%.2f"
                )
                _field_error(errors, "appraised_value")

            label_cols = st.columns([0.75, 0.25], gap="small")
            with label_cols[0]:
                current_label = inputs.get("energy_label")
                energy_label = st.selectbox(
                    "Energy label",
                    LABEL_OPTIONS,
                    index=LABEL_OPTIONS.index(current_label) if current_label in LABEL_OPTIONS else None,
                    placeholder="Choose a label",
                )
            with label_cols[1]:
                if energy_label:
                    st.markdown(_energy_badge(energy_label), unsafe_allow_html=True)
            _field_error(errors, "energy_label")

            st.markdown("#### Loan terms")

            annual_rate_pct = st.number_input(
                "Interest Rate (%)",
                min_value=0.0,
                max_value=100.0,
                value=float(inputs.get("annual_rate_pct") or 0.0),
                step=0.01,
                format="%.2f"
            )
            _field_error(errors, "annual_rate_pct")

            duration_years = st.number_input(
                "Duration (years)",
                min_value=0,
                value=int(inputs.get("duration_years") or 0),
                step=1
            )
            _field_error(errors, "duration_years")

            st.session_state["mortgage_inputs"] = {
                "income": income,
                "partner_income": partner_income,
                "buying_alone": buying_alone,
                "home_value": home_value,
                "appraised_value": appraised_value,
                "energy_label": energy_label,
                "annual_rate_pct": annual_rate_pct,
                "duration_years": duration_years,
            }

            with st.form("calculate_form"):
                calculate = st.form_submit_button("Calculate", type="primary")

            if st.button("Reset", key="reset_mortgage"):
                reset_state()
                st.rerun()

        if calculate:
            form_inputs = st.session_state["mortgage_inputs"]
            errors = collect_errors(form_inputs)
            st.session_state["mortgage_errors"] = errors
            st.session_state["mortgage_result"] = None

            if errors:
                logger.info("Mortgage form rejected: %s", ", ".join(sorted(errors)))
            else:
                try:
                    result = calculate_from_inputs(form_inputs)
                except DomainError as exc:
                    logger.error("Mortgage calculation failed on %s: %s", exc.field, exc)
                    st.session_state["mortgage_errors"] = {exc.field: exc.message}
                else:
                    st.session_state["mortgage_result"] = {
                        "result": result,
                        "income": household_income(
                            float(form_inputs["income"]),
                            form_inputs.get("partner_income"),
                            buying_alone=bool(form_inputs["buying_alone"]),
                        ),
                        "annual_rate": float(form_inputs["annual_rate_pct"]) / 100.0,
                    }
                    st.session_state["mortgage_badge"] = f"Monthly: {format_eur(result.monthly_payment)}"
            st.rerun()

        with right:
            calculated = st.session_state.get("mortgage_result")
            if errors:
                st.error(
                    "**Cannot calculate:** Fix the errors below before proceeding.\n"
                    + "\n".join([f"• {msg}" for msg in errors.values()])
                )
            elif calculated is None:
                st.caption("Fill in the form and click Calculate.")
            else:
                _render_result(calculated["result"], calculated["income"], calculated["annual_rate"])
