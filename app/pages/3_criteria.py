import bootstrap

import streamlit as st

from materialwise.services.selection_service import SelectionService
from wizard_state import init_state

st.title("Step 3: Criteria")

init_state()
selection_service = SelectionService()

network = st.session_state.get("network")
subtype = st.session_state.get("subtype")

if not st.session_state.get("selected_materials"):
    st.info("Go to Step 2 and select materials first.")
    st.stop()

# Navigation
nav_left, nav_right = st.columns(2)
with nav_left:
    if st.button("Back: Step 2 (Materials)"):
        st.switch_page("pages/2_materials.py")
with nav_right:
    can_next = bool(st.session_state.get("selected_criteria"))
    if st.button("Next: Step 4 (Costs & Weights)", type="primary", disabled=not can_next):
        st.switch_page("pages/4_costs_weights.py")

st.divider()

criteria = selection_service.selectable_criteria(network, subtype)
selectable_keys = {c.key for c in criteria}

selected = [k for k in st.session_state.get("selected_criteria", []) if k in selectable_keys]

st.subheader("Decision criteria")
for c in criteria:
    direction = "higher is better" if c.is_benefit else "lower is better"
    checked = st.checkbox(f"{c.label} ({direction})", value=c.key in selected, key=f"crit_{c.key}")
    if checked and c.key not in selected:
        selected.append(c.key)
    elif not checked and c.key in selected:
        selected.remove(c.key)

if selected != st.session_state.get("selected_criteria"):
    st.session_state["selected_criteria"] = selected
    st.session_state["topsis_run"] = None
    st.rerun()

if not selected:
    st.info("Select at least one criterion.")
