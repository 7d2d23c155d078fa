import bootstrap

import streamlit as st

from materialwise.core.catalog import ALIMENTATION, EVACUATION, NETWORK_SUBTYPES, PRESSURE_NOMINAL_VALUES
from materialwise.services.selection_service import SelectionService
from wizard_state import clear_from_materials, init_state

st.title("Step 1: Network Type and Specifications")

init_state()
selection_service = SelectionService()

st.subheader("1A) Network type")

networks = [ALIMENTATION, EVACUATION]
current_network = st.session_state.get("network")

network = st.radio(
    "Network",
    options=networks,
    index=networks.index(current_network) if current_network in networks else None,
    format_func=lambda x: "Alimentation (supply)" if x == ALIMENTATION else "Evacuation (drainage)",
    horizontal=True,
)

if not network:
    st.info("Choose a network type to continue.")
    st.stop()

st.divider()
st.subheader("1B) Specifications")

subtypes = NETWORK_SUBTYPES[network]
current_subtype = st.session_state.get("subtype")
subtype = st.selectbox(
    "Subtype",
    options=subtypes,
    index=subtypes.index(current_subtype) if current_subtype in subtypes else None,
    placeholder="Choose a subtype…",
)

pn = None
if network == ALIMENTATION:
    current_pn = st.session_state.get("pn")
    pn = st.selectbox(
        "Nominal pressure (PN)",
        options=PRESSURE_NOMINAL_VALUES,
        index=PRESSURE_NOMINAL_VALUES.index(current_pn) if current_pn in PRESSURE_NOMINAL_VALUES else None,
        format_func=lambda x: f"PN{x}",
        placeholder="Choose a pressure rating…",
    )
else:
    st.caption("Pressure rating does not apply to drainage networks.")

changed = (
    network != st.session_state.get("network")
    or subtype != st.session_state.get("subtype")
    or pn != st.session_state.get("pn")
)
if changed:
    st.session_state["network"] = network
    st.session_state["subtype"] = subtype
    st.session_state["pn"] = pn
    clear_from_materials()

specs_ok = bool(subtype) and (network == EVACUATION or pn is not None)
available = selection_service.available_materials(network, subtype, pn) if specs_ok else []

if specs_ok:
    if available:
        st.success(f"{len(available)} compatible material(s): {', '.join(m.name for m in available)}")
    else:
        st.warning("No compatible material for these specifications. Try other options.")

st.divider()

col1, col2 = st.columns(2)
with col1:
    st.button("Back", disabled=True)
with col2:
    can_next = specs_ok and bool(available)
    if st.button("Next: Select Materials", type="primary", disabled=not can_next):
        st.switch_page("pages/2_materials.py")
