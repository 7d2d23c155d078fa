# app/wizard_state.py
import streamlit as st

DEFAULTS = {
    "network": None,
    "subtype": None,
    "pn": None,
    "selected_materials": [],
    "selected_criteria": [],
    "costs": {},
    "weights": {},
    "cost_suggestions": {},
    "topsis_run": None,
}

# widget keys created by the material, criteria, cost and weight pages
WIDGET_PREFIXES = ("mat_", "crit_", "cost_", "w_", "suggest_")


def _fresh(value):
    return value.copy() if isinstance(value, (list, dict)) else value


def _drop_widget_state() -> None:
    for key in list(st.session_state.keys()):
        if str(key).startswith(WIDGET_PREFIXES):
            del st.session_state[key]


def init_state() -> None:
    for key, value in DEFAULTS.items():
        st.session_state.setdefault(key, _fresh(value))


def clear_from_materials() -> None:
    """Network choice changed: everything chosen after it no longer applies."""
    for key in ("selected_materials", "selected_criteria", "costs", "weights", "cost_suggestions", "topsis_run"):
        st.session_state[key] = _fresh(DEFAULTS[key])
    _drop_widget_state()


def reset_wizard() -> None:
    for key, value in DEFAULTS.items():
        st.session_state[key] = _fresh(value)
    _drop_widget_state()


def save_inputs(costs, weights, state=None) -> bool:
    """Store the Step 4 costs and weights. Returns True when a run made with other inputs was dropped."""
    state = st.session_state if state is None else state
    changed = costs != state.get("costs") or weights != state.get("weights")
    state["costs"] = costs
    state["weights"] = weights
    if changed and state.get("topsis_run") is not None:
        state["topsis_run"] = None
        return True
    return False


def apply_cost_suggestion(name, suggestion, state=None) -> None:
    """Record a cost suggestion and pre-fill the cost input with its midpoint."""
    state = st.session_state if state is None else state
    state.setdefault("cost_suggestions", {})[name] = suggestion.cost_range if suggestion else None
    if suggestion is not None and suggestion.midpoint is not None:
        state[f"cost_{name}"] = suggestion.midpoint
