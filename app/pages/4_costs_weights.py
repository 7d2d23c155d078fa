import bootstrap

import streamlit as st

from materialwise.core.catalog import get_criterion
from materialwise.services.cost_suggestion import CostSuggestionClient
from materialwise.services.selection_service import SelectionData
from materialwise.services.topsis_service import SelectionError, TopsisService
from wizard_state import apply_cost_suggestion, init_state, save_inputs

st.title("Step 4: Costs and Weights")

init_state()
topsis_service = TopsisService()
suggestion_client = CostSuggestionClient()

materials = st.session_state.get("selected_materials", [])
criteria_keys = st.session_state.get("selected_criteria", [])
pn = st.session_state.get("pn")

if not materials or not criteria_keys:
    st.info("Go to Steps 2 and 3 and select materials and criteria first.")
    st.stop()


def _suggest_cost(name: str) -> None:
    # runs before the rerun, so the cost widget can still be written
    apply_cost_suggestion(name, suggestion_client.suggest(name, pn))


# Navigation
nav_left, nav_right = st.columns(2)
with nav_left:
    if st.button("Back: Step 3 (Criteria)"):
        st.switch_page("pages/3_criteria.py")
with nav_right:
    if st.button("Next: Step 5 (Results)", disabled=st.session_state.get("topsis_run") is None):
        st.switch_page("pages/5_results.py")

st.divider()

# ----------------------------
# Costs
# ----------------------------
st.subheader("Cost per material (MAD/m)")

costs = dict(st.session_state.get("costs", {}))
suggestions = st.session_state["cost_suggestions"]

for name in materials:
    st.session_state.setdefault(f"cost_{name}", float(costs.get(name, 0.0)))
    col_input, col_button, col_hint = st.columns([2, 1, 2])
    with col_input:
        costs[name] = st.number_input(name, min_value=0.0, step=1.0, key=f"cost_{name}")
    with col_button:
        st.write("")
        st.button(
            "Suggest cost",
            key=f"suggest_{name}",
            disabled=pn is None or not suggestion_client.enabled,
            help="PN required for a suggestion" if pn is None else None,
            on_click=_suggest_cost,
            args=(name,),
        )
    with col_hint:
        if name in suggestions:
            if suggestions[name] is None:
                st.caption("Could not get a cost suggestion.")
            else:
                st.caption(f"Suggested: {suggestions[name]}")

st.divider()

# ----------------------------
# Weights
# ----------------------------
st.subheader("Weights (between 0 and 1, sum = 1)")

weights = dict(st.session_state.get("weights", {}))
default_weights = topsis_service.selection_service.default_weights(list(criteria_keys))

wcols = st.columns(min(4, len(criteria_keys)))
for i, key in enumerate(criteria_keys):
    st.session_state.setdefault(f"w_{key}", float(weights.get(key, default_weights[key])))
    with wcols[i % len(wcols)]:
        weights[key] = st.number_input(
            get_criterion(key).label,
            min_value=0.0,
            max_value=1.0,
            step=0.05,
            key=f"w_{key}",
        )

if save_inputs(costs, weights):
    # results on Step 5 were computed from the previous inputs
    st.rerun()

total = sum(float(weights[k]) for k in criteria_keys)
st.caption(f"Current sum: {total:.3f}")

st.divider()

# ----------------------------
# Run
# ----------------------------
if st.button("Calculate", type="primary"):
    data = SelectionData(
        network=st.session_state.get("network"),
        subtype=st.session_state.get("subtype"),
        pn=pn,
        material_names=list(materials),
        criteria_keys=list(criteria_keys),
        costs=costs,
        weights=weights,
    )
    try:
        st.session_state["topsis_run"] = topsis_service.run(data)
    except SelectionError as e:
        for msg in e.issues:
            st.error(msg)
        st.stop()

    st.switch_page("pages/5_results.py")
