import bootstrap

import pandas as pd
import streamlit as st

from materialwise.core.catalog import get_criterion
from materialwise.services.selection_service import SelectionService
from wizard_state import init_state

st.title("Step 2: Materials")

init_state()
selection_service = SelectionService()

network = st.session_state.get("network")
subtype = st.session_state.get("subtype")
pn = st.session_state.get("pn")

if not network or not subtype:
    st.info("Go to Step 1 and choose a network first.")
    st.stop()

# Navigation
nav_left, nav_right = st.columns(2)
with nav_left:
    if st.button("Back: Step 1 (Network)"):
        st.switch_page("pages/1_network_setup.py")
with nav_right:
    can_next = bool(st.session_state.get("selected_materials"))
    if st.button("Next: Step 3 (Criteria)", type="primary", disabled=not can_next):
        st.switch_page("pages/3_criteria.py")

st.divider()

available = selection_service.available_materials(network, subtype, pn)
if not available:
    st.warning("No compatible material for these specifications. Go back to Step 1.")
    st.stop()

st.subheader("Compatible materials")

catalog_df = pd.DataFrame([
    {
        "Material": m.name,
        "Networks": ", ".join(m.network_types),
        "PN": ", ".join(str(p) for p in m.pressure_ratings),
        **{get_criterion(k).label: v for k, v in m.attributes.items()},
    }
    for m in available
])
st.dataframe(catalog_df, use_container_width=True, hide_index=True)

# keep click order: it is the row order of the decision matrix
selected = list(st.session_state.get("selected_materials", []))
for m in available:
    checked = st.checkbox(m.name, value=m.name in selected, key=f"mat_{m.name}")
    if checked and m.name not in selected:
        selected.append(m.name)
    elif not checked and m.name in selected:
        selected.remove(m.name)

if selected != st.session_state.get("selected_materials"):
    st.session_state["selected_materials"] = selected
    st.session_state["topsis_run"] = None
    st.rerun()

if selected:
    st.caption(f"Selected: {', '.join(selected)}")
else:
    st.info("Select at least one material.")
