import bootstrap

import streamlit as st
import plotly.express as px

from wizard_state import init_state, reset_wizard

st.title("Step 5: Results")

init_state()

run = st.session_state.get("topsis_run")
if run is None:
    st.warning("No results yet. Go to Step 4 and run the calculation first.")
    st.stop()

# Navigation
nav_left, nav_right = st.columns(2)
with nav_left:
    if st.button("Back: Step 4 (Costs & Weights)"):
        st.switch_page("pages/4_costs_weights.py")
with nav_right:
    if st.button("Restart"):
        reset_wizard()
        st.switch_page("pages/1_network_setup.py")

st.divider()

best = run.best()
if best is None:
    st.warning("No material could be scored: every candidate is equidistant from the ideal and anti-ideal solutions.")
else:
    st.success(
        f"Recommended material: **{best.name}** (TOPSIS score {best.score:.4f}). "
        "It offers the best trade-off for the chosen criteria and weights."
    )

# Ranking table
st.subheader("Ranking")
scores_df = run.ranking()
st.dataframe(scores_df, use_container_width=True, hide_index=True)

st.download_button(
    "Download Ranking CSV",
    data=scores_df.to_csv(index=False).encode("utf-8"),
    file_name="ranking.csv",
    mime="text/csv",
)

st.divider()

# TOPSIS details
st.subheader("TOPSIS Details")

init_df = run.initial_matrix()
norm_df = run.normalized_matrix()
w_df = run.weighted_matrix()
ideals_df = run.ideals()
dist_df = run.distances()
weights_df = run.weights_used()

tab1, tab2, tab3, tab4, tab5, tab6 = st.tabs(
    ["Decision Matrix", "Normalized Matrix", "Weighted Matrix", "Ideals (PIS/NIS)", "Distances", "Weights Used"]
)

with tab1:
    st.dataframe(init_df.round(2), use_container_width=True)
    st.download_button(
        "Download Decision Matrix CSV",
        data=init_df.to_csv().encode("utf-8"),
        file_name="topsis_decision_matrix.csv",
        mime="text/csv",
    )

with tab2:
    st.dataframe(norm_df.round(4), use_container_width=True)
    st.download_button(
        "Download Normalized Matrix CSV",
        data=norm_df.to_csv().encode("utf-8"),
        file_name="topsis_normalized_matrix.csv",
        mime="text/csv",
    )

with tab3:
    st.dataframe(w_df.round(4), use_container_width=True)
    st.download_button(
        "Download Weighted Matrix CSV",
        data=w_df.to_csv().encode("utf-8"),
        file_name="topsis_weighted_matrix.csv",
        mime="text/csv",
    )

with tab4:
    st.dataframe(ideals_df, use_container_width=True, hide_index=True)
    st.download_button(
        "Download Ideals CSV",
        data=ideals_df.to_csv(index=False).encode("utf-8"),
        file_name="topsis_ideals.csv",
        mime="text/csv",
    )

with tab5:
    st.dataframe(dist_df, use_container_width=True, hide_index=True)
    st.download_button(
        "Download Distances CSV",
        data=dist_df.to_csv(index=False).encode("utf-8"),
        file_name="topsis_distances.csv",
        mime="text/csv",
    )

with tab6:
    st.dataframe(weights_df, use_container_width=True, hide_index=True)
    st.download_button(
        "Download Weights CSV",
        data=weights_df.to_csv(index=False).encode("utf-8"),
        file_name="topsis_weights.csv",
        mime="text/csv",
    )

st.subheader("Charts")

chart_df = scores_df.dropna(subset=["score"])
if not chart_df.empty:
    fig_scores = px.bar(
        chart_df,
        x="material",
        y="score",
        hover_data=["rank"],
        title="TOPSIS Score (C*) by Material",
    )
    st.plotly_chart(fig_scores, use_container_width=True)

if not dist_df.empty:
    fig_scatter = px.scatter(
        dist_df,
        x="s_pos",
        y="s_neg",
        text="material",
        hover_data=["c_star"],
        title="Separation Measures: S+ vs S-",
    )
    fig_scatter.update_traces(textposition="top center")
    st.plotly_chart(fig_scatter, use_container_width=True)

if not w_df.empty:
    fig_heat = px.imshow(
        w_df.values,
        x=list(w_df.columns),
        y=list(w_df.index),
        aspect="auto",
        title="Weighted Matrix Heatmap",
    )
    st.plotly_chart(fig_heat, use_container_width=True)

if not ideals_df.empty:
    ideals_long = ideals_df.melt(id_vars=["criterion"], value_vars=["pos_ideal", "neg_ideal"],
                                 var_name="ideal_type", value_name="value")
    fig_ideals = px.bar(
        ideals_long,
        x="criterion",
        y="value",
        color="ideal_type",
        barmode="group",
        title="PIS vs NIS by Criterion",
    )
    st.plotly_chart(fig_ideals, use_container_width=True)
