import bootstrap
import streamlit as st

from materialwise.config import get_settings
from wizard_state import init_state, reset_wizard

st.set_page_config(page_title="MaterialWise", layout="wide")

st.title("MaterialWise (TOPSIS)")
st.caption("Wizard workflow: Network → Materials → Criteria → Costs & Weights → Results")

init_state()

with st.sidebar:
    st.header("Workflow")

    network_ok = bool(st.session_state.get("network") and st.session_state.get("subtype"))
    materials_ok = bool(st.session_state.get("selected_materials"))
    criteria_ok = bool(st.session_state.get("selected_criteria"))
    run_ok = st.session_state.get("topsis_run") is not None

    st.write("Step 1: Network", "✅" if network_ok else "⬜")
    st.write("Step 2: Materials", "✅" if materials_ok else "⬜")
    st.write("Step 3: Criteria", "✅" if criteria_ok else "⬜")
    st.write("Step 4: Costs & Weights", "✅" if run_ok else "⬜")
    st.write("Step 5: Results", "✅" if run_ok else "⬜")

    st.divider()
    st.write("AI cost suggestions:", "✅" if get_settings().cost_suggestions_enabled else "❌ (OPENAI_API_KEY not set)")

    st.divider()
    st.subheader("Quick jump")
    if st.button("Go to Step 1"):
        st.switch_page("pages/1_network_setup.py")

    if st.button("Restart"):
        reset_wizard()
        st.rerun()

st.write("Use the sidebar steps. The pages will guide you with Next and Back buttons.")

if st.button("Start", type="primary"):
    st.switch_page("pages/1_network_setup.py")
