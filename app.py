import logging

import streamlit as st
from dotenv import load_dotenv

# ---------------------------------------------
# Load environment variables (.env)
# ---------------------------------------------
load_dotenv()

from config.settings import get_settings
from mortgage.ui import render_mortgage
from state import init_state

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# -----------------------------
# Streamlit UI
# -----------------------------
st.set_page_config(page_title="Energy-Label Mortgage Calculator", layout="wide")

st.title("Energy-Label Mortgage Calculator")
st.caption("Calculate your maximum mortgage quickly and easily")

init_state()
render_mortgage()
