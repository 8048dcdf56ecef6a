"""
Plotly Figures

Pole-zero style pole map and state-history charts for the dashboard.
Figures are plain plotly.graph_objects, so they can be shown by
Streamlit or written to HTML.
"""

import math
from typing import Sequence

import numpy as np
import plotly.graph_objects as go

from config import RAD2DEG

STATE_LABELS = ['Δu (m/s)', 'Δα (deg)', 'Δq (deg/s)', 'Δθ (deg)']


def pole_axis_limit(values: Sequence[float]) -> float:
    """Symmetric axis half-range: 1.2x the largest magnitude, rounded up, at least 1."""
    largest = max((abs(v) for v in values), default=0.0)
    return float(max(1, math.ceil(largest * 1.2)))


def build_pole_figure(poles: Sequence[complex], height: int = 400) -> go.Figure:
    """
    Scatter of the system poles in the complex plane.

    Stable poles (negative real part) are green, unstable red. Hover text
    gives λ, natural frequency in Hz and damping ratio.
    """
    poles = np.asarray(poles, dtype=complex)
    re, im = poles.real, poles.imag
    colors = ['green' if r < 0 else 'red' for r in re]

    hover = []
    for r, i in zip(re, im):
        omega_n = math.hypot(r, i)
        zeta = -r / omega_n if omega_n > 1e-10 else 0.0
        hover.append(
            f"λ = {r:.2f} {'+' if i >= 0 else '-'} {abs(i):.2f}j<br>"
            f"fₙ = {omega_n / (2 * math.pi):.2f} Hz<br>"
            f"ζ = {zeta:.2f}"
        )

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=re, y=im,
        mode='markers', name='System Poles',
        marker=dict(symbol='x', size=12, color=colors),
        hovertext=hover, hoverinfo='text'
    ))

    x_lim = pole_axis_limit(re)
    y_lim = pole_axis_limit(im)
    fig.update_layout(
        title="System Poles",
        xaxis=dict(title="Real", range=[-x_lim, x_lim], zeroline=True, zerolinewidth=2),
        yaxis=dict(title="Imag", range=[-y_lim, y_lim], zeroline=True, zerolinewidth=2),
        showlegend=False,
        height=height
    )
    return fig


def build_history_figure(t: np.ndarray, history: np.ndarray, state_index: int = 0,
                         height: int = 350) -> go.Figure:
    """
    Time history of one state; angles and rates are plotted in degrees.

    Args:
        t: Time axis (s)
        history: State samples, shape (n, 4)
        state_index: 0=Δu, 1=Δα, 2=Δq, 3=Δθ
    """
    if not 0 <= state_index < len(STATE_LABELS):
        raise ValueError(f"state_index must be 0-3, got {state_index}")

    data = np.asarray(history, dtype=float)[:, state_index]
    if state_index >= 1:
        data = data * RAD2DEG

    y_lim = max(float(np.max(np.abs(data), initial=0.0)), 0.1) * 1.1

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=t, y=data,
        mode='lines', name=STATE_LABELS[state_index],
        line=dict(color='black', width=2)
    ))
    fig.update_layout(
        xaxis_title="Time (s)",
        yaxis=dict(title=STATE_LABELS[state_index], range=[-y_lim, y_lim]),
        showlegend=False,
        height=height
    )
    return fig


def build_response_figure(result, height: int = 500) -> go.Figure:
    """All angle/rate states of a SimulationResult on one chart (degrees)."""
    fig = go.Figure()
    for values, name, color in (
        (result.q, 'q (deg/s)', 'blue'),
        (result.theta, 'theta (deg)', 'green'),
        (result.alpha, 'alpha (deg)', 'red'),
    ):
        fig.add_trace(go.Scatter(
            x=result.t, y=np.degrees(values),
            mode='lines', name=name,
            line=dict(color=color, width=2)
        ))
    fig.update_layout(
        xaxis_title="Time (s)",
        yaxis_title="State Variables (deg or deg/s)",
        height=height
    )
    return fig
