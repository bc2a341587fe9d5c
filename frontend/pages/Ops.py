import os
import sys

import requests
import streamlit as st

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from frontend import api_client

st.set_page_config(page_title="Ops", layout="wide", page_icon="📊")

st.title("Backend Status")
st.markdown(f"Health of the analysis backend at `{api_client.API_URL}`")

try:
    health = api_client.fetch_health()
except requests.exceptions.RequestException as e:
    st.error(f"Cannot connect to backend: {e}")
    st.stop()

col1, col2, col3, col4 = st.columns(4)

with col1:
    st.metric("Status", health.get("status", "unknown").upper())

with col2:
    st.metric("Gemini Model", health.get("model", "N/A"))

with col3:
    st.metric("API Key", "Configured" if health.get("api_key_configured") else "Missing",
              help="GEMINI_API_KEY must be set on the backend for analyses to run")

with col4:
    st.metric("W&B Tracking", "Enabled" if health.get("tracking_enabled") else "Disabled",
              help="Set WANDB_API_KEY on the backend to log every analysis")

if not health.get("api_key_configured"):
    st.warning("⚠️ The backend has no Gemini API key. Analyses will fail with a 503 until one is set.")

st.markdown("---")

st.subheader("📋 Supported Family Categories")
try:
    categories = api_client.fetch_categories()
    cols = st.columns(2)
    for i, category in enumerate(categories):
        with cols[i % 2]:
            st.write(f"• {category}")
except requests.exceptions.RequestException as e:
    st.error(f"Error fetching categories: {e}")

st.markdown("---")
if st.button("🔄 Refresh Now", use_container_width=True):
    st.rerun()
