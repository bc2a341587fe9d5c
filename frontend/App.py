import os
import sys

import streamlit as st

# Add repository root to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from frontend import api_client
from frontend.form import render_form
from frontend.report import REPORT_CSS, render_report
from frontend.state import Failure, Idle, Loading, Success, reset, run_analysis, start

st.set_page_config(page_title="Revit Family Optimizer", page_icon="🧊", layout="wide")
st.markdown(REPORT_CSS, unsafe_allow_html=True)

# Initialize session state
if 'analysis_state' not in st.session_state:
    st.session_state.analysis_state = Idle()


def render_sidebar():
    with st.sidebar:
        st.header("ℹ️ About")
        st.markdown("""
        Upload a screenshot of your Revit Family. The AI identifies:
        - Over-modeled geometry
        - Elements that should be 2D symbolic lines
        - Items to delete or simplify for lower LODs
        - Potential unused parameters
        """)

        st.markdown("---")
        st.caption(f"Backend: `{api_client.API_URL}`")
        st.caption("AI analysis may vary. Always verify changes in Revit.")


def main():
    st.title("Revit Family Optimizer")
    render_sidebar()

    state = st.session_state.analysis_state

    if isinstance(state, Success):
        if render_report(state.result):
            st.session_state.analysis_state = reset()
            st.rerun()
        return

    st.markdown("""
    ### Optimize Your Content
    Upload a screenshot of your Revit Family. Our AI identifies over-modeling,
    unused parameters, and geometry that should be symbolic.
    """)

    if isinstance(state, Failure):
        st.error(f"❌ {state.message}")

    submitted = render_form(state)
    if submitted is not None:
        st.session_state.analysis_state = start(submitted)
        st.rerun()

    if isinstance(state, Loading):
        with st.spinner("Analyzing Geometry..."):
            st.session_state.analysis_state = run_analysis(state.request, api_client.analyze)
        st.rerun()

    st.divider()
    st.markdown("""
    <div style='text-align: center; color: #888;'>
        <p>Revit Family Optimizer. Not affiliated with Autodesk.</p>
    </div>
    """, unsafe_allow_html=True)


if __name__ == "__main__":
    main()
