import streamlit as st

from config.settings import get_settings


def init_state():
    settings = get_settings()

    if "mortgage_inputs" not in st.session_state:
        st.session_state["mortgage_inputs"] = {
            "income": settings.default_income,
            "partner_income": 0.0,
            "buying_alone": None,
            "home_value": settings.default_home_value,
            "appraised_value": None,
            "energy_label": settings.default_energy_label.value,
            "annual_rate_pct": settings.default_rate_pct,
            "duration_years": settings.default_duration_years,
        }

    if "mortgage_result" not in st.session_state:
        st.session_state["mortgage_result"] = None

    if "mortgage_errors" not in st.session_state:
        st.session_state["mortgage_errors"] = {}

    if "mortgage_badge" not in st.session_state:
        st.session_state["mortgage_badge"] = "Monthly: —"


def reset_state():
    for key in ("mortgage_inputs", "mortgage_result", "mortgage_errors", "mortgage_badge"):
        st.session_state.pop(key, None)
    init_state()
