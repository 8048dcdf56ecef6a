"""
Longitudinal Flight Dynamics Simulator - Streamlit Dashboard

Interactive web UI for the Cessna 182 longitudinal model.

Features:
- Trim condition selection (cruise / climb / approach)
- Coefficient sliders with live pole map and mode table
- Real-time playback with elevator perturbation
- Offline elevator pulse response

Run: streamlit run streamlit_app.py   (or: longsim-ui)
"""

import os
import sys
import time

import numpy as np
import streamlit as st

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from aero.coefficients import COEFFICIENT_BOUNDS, EDITABLE_COEFFICIENTS
from analysis.plots import build_history_figure, build_pole_figure, build_response_figure
from config import ELEVATOR_DEFLECTION, TRIM_PRESETS, TrimCondition
from eom.longitudinal import LongitudinalLinearModel
from sim.realtime import RealTimeSimulation
from sim.responses import elevator_pulse, simulate_with_input

PLAYBACK_FRAME = 0.05     # Seconds between chart refreshes during playback


def _simulation() -> RealTimeSimulation:
    if 'simulation' not in st.session_state:
        st.session_state.simulation = RealTimeSimulation(running=False)
    return st.session_state.simulation


def _sidebar(sim: RealTimeSimulation):
    st.sidebar.header("Trim Condition")
    trim = st.sidebar.selectbox(
        "Preset",
        list(TrimCondition),
        index=int(TrimCondition[sim.preset.name.upper()]),
        format_func=lambda t: TRIM_PRESETS[t].label
    )
    if TRIM_PRESETS[trim] is not sim.preset:
        sim.select_trim(trim)

    summary = sim.steady_state_summary()
    st.sidebar.markdown("---")
    st.sidebar.metric("Altitude", f"{summary['altitude']:.0f} m")
    st.sidebar.metric("TAS", f"{summary['TAS']:.2f} m/s")
    st.sidebar.metric("alpha", f"{summary['alpha']:.2f} deg")
    st.sidebar.metric("theta", f"{summary['theta']:.2f} deg")
    st.sidebar.text(f"CL = {summary['CL']:.3f}   CD = {summary['CD']:.3f}   de = {summary['de']:.2f} deg")

    st.sidebar.markdown("---")
    st.sidebar.subheader("Coefficients (1/rad)")
    lo, hi = COEFFICIENT_BOUNDS
    for name in EDITABLE_COEFFICIENTS:
        current = float(getattr(sim.coefficients, name))
        value = st.sidebar.slider(name, min_value=lo, max_value=hi, value=current, step=0.01,
                                  key=f"coef_{sim.preset.name}_{name}")
        if value != current:
            sim.set_coefficient(name, value)

    if st.sidebar.button("Reset Coefficients"):
        sim.reset_coefficients()
        for name in EDITABLE_COEFFICIENTS:
            st.session_state.pop(f"coef_{sim.preset.name}_{name}", None)
        st.rerun()


def _modes_tab(sim: RealTimeSimulation):
    col1, col2 = st.columns([1, 1])
    with col1:
        st.plotly_chart(build_pole_figure(sim.poles), use_container_width=True)
    with col2:
        mode_data = []
        for m in sim.modes:
            if m.is_oscillatory:
                eig_str = f"{m.eigenvalue.real:.4f} +/- {abs(m.eigenvalue.imag):.4f}j"
                time_str = f"T = {m.period:.2f} s"
            else:
                eig_str = f"{m.eigenvalue.real:.4f}"
                time_str = f"tau = {m.time_constant:.2f} s"
            mode_data.append({
                "Mode": m.name,
                "Eigenvalue": eig_str,
                "wn (rad/s)": f"{m.omega_n:.3f}",
                "zeta": f"{m.zeta:.3f}",
                "Period/Time Const": time_str
            })
        st.table(mode_data)
        st.markdown("**A matrix**")
        st.dataframe(np.round(sim.model.A, 4))
        st.markdown("**B vector**")
        st.dataframe(np.round(sim.model.B.reshape(-1, 1), 4))


def _playback_tab(sim: RealTimeSimulation):
    col1, col2, col3, col4 = st.columns(4)
    duration = col1.slider("Play for (s)", 1.0, 60.0, 10.0, 1.0)
    hold = col2.slider("Hold elevator (s)", 0.0, 5.0, 1.0, 0.5)
    state_index = col3.selectbox("State", [0, 1, 2, 3],
                                 format_func=lambda i: ['Δu', 'Δα', 'Δq', 'Δθ'][i])
    if col4.button("Reset"):
        sim.reset()

    chart = st.empty()
    status = st.empty()

    if st.button("Play", type="primary"):
        sim.play()
        t_start = time.perf_counter()
        sim.deflect_elevator()
        while time.perf_counter() - t_start < duration:
            if time.perf_counter() - t_start >= hold:
                sim.release_elevator()
            sim.tick()
            chart.plotly_chart(
                build_history_figure(sim.history_time_axis(), sim.history.padded(), state_index),
                use_container_width=True
            )
            s = sim.state_summary()
            status.text(f"t = {s['time']:.2f} s   elevator = {s['elevator']:.2f} deg")
            time.sleep(PLAYBACK_FRAME)
        sim.release_elevator()
        sim.pause()
    else:
        chart.plotly_chart(
            build_history_figure(sim.history_time_axis(), sim.history.padded(), state_index),
            use_container_width=True
        )


def _response_tab(sim: RealTimeSimulation):
    col1, col2 = st.columns([1, 2])
    with col1:
        magnitude = st.slider("Elevator (deg)", -5.0, 5.0, float(np.degrees(ELEVATOR_DEFLECTION)), 0.5)
        pulse = st.slider("Pulse length (s)", 0.1, 5.0, 1.0, 0.1)
        sim_duration = st.slider("Duration (s)", 5.0, 120.0, 30.0, 5.0)

    with col2:
        model = LongitudinalLinearModel(sim.aircraft, sim.steady_state, sim.coefficients)
        amplitude = np.radians(magnitude)
        result = simulate_with_input(
            model,
            lambda t: elevator_pulse(t, 0.0, pulse, amplitude),
            t_final=sim_duration,
            dt=sim.dt
        )
        fig = build_response_figure(result)
        fig.update_layout(title=f"Response to {magnitude} deg Elevator Pulse")
        st.plotly_chart(fig, use_container_width=True)
        st.dataframe(result.to_dataframe(degrees=True).iloc[::max(1, int(0.5 / sim.dt))])


def render():
    st.set_page_config(
        page_title="Longitudinal Flight Dynamics",
        page_icon="✈️",
        layout="wide"
    )
    st.title("✈️ Longitudinal Flight Dynamics Simulator")
    st.markdown("*Cessna 182 small-perturbation model (Roskam Chapter 5)*")

    sim = _simulation()
    _sidebar(sim)

    tab1, tab2, tab3 = st.tabs(["📊 Modes", "▶️ Playback", "📉 Responses"])
    with tab1:
        _modes_tab(sim)
    with tab2:
        _playback_tab(sim)
    with tab3:
        _response_tab(sim)

    st.markdown("---")
    st.markdown("*Based on Roskam 'Airplane Flight Dynamics and Automatic Flight Controls'*")


def main():
    """Console entry point: launch the dashboard with streamlit."""
    from streamlit.web import cli as stcli

    sys.argv = ["streamlit", "run", os.path.abspath(__file__)]
    sys.exit(stcli.main())


if __name__ == "__main__":
    render()
