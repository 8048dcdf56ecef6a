"""
Cessna 182 Demo: Elevator Pulse Response

Complete runnable example of the longitudinal model:
    δe → Mδe → q → θ → phugoid

Features:
1. Model built from Roskam Appendix B1 coefficients at cruise
2. A, B matrices and mode table
3. -2° elevator held for 1 s, then released (Euler, dt = 0.01 s)
4. Euler vs RK45 reference comparison
5. 3x2 plots of states and elevator input

Run: python examples/cessna182_demo.py
"""

import numpy as np
import matplotlib.pyplot as plt
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import CESSNA_182, ELEVATOR_DEFLECTION, TRIM_PRESETS, TrimCondition
from eom.longitudinal import LongitudinalLinearModel
from sim.responses import dominant_period, elevator_pulse, simulate_reference, simulate_with_input


def main():
    # =========================================================================
    # 1. Create model at cruise
    # =========================================================================
    print("=" * 70)
    print("Cessna 182 - Elevator Pulse Response")
    print("Reference: Roskam Appendix B1, Chapter 5")
    print("=" * 70)

    preset = TRIM_PRESETS[TrimCondition.CRUISE]
    ss = preset.steady_state
    model = LongitudinalLinearModel(CESSNA_182, ss, preset.coefficients)
    d = model.derivs

    print(f"\nTrim: h = {ss.altitude:.0f} m, U1 = {ss.TAS:.1f} m/s, q_bar = {d.q_bar:.1f} Pa")
    print(f"\nDimensional Derivatives (SI units):")
    for name, value in d.as_dict().items():
        print(f"  {name:<6} = {value:+.5f}")

    # =========================================================================
    # 2. Print A, B matrices
    # =========================================================================
    np.set_printoptions(precision=4, suppress=True, linewidth=100)
    print(f"\nA matrix:")
    print(model.A)
    print(f"\nB vector:")
    print(model.B)

    # =========================================================================
    # 3. Modal analysis
    # =========================================================================
    print("\n" + model.print_modes_table())

    # =========================================================================
    # 4. Simulate pulse response
    # =========================================================================
    hold = 1.0
    control = lambda t: elevator_pulse(t, 0.0, hold, ELEVATOR_DEFLECTION)
    result = simulate_with_input(model, control, t_final=120.0, dt=preset.dt)
    reference = simulate_reference(model, control, t_final=120.0, dt=preset.dt)

    err = np.max(np.abs(result.y - reference.y), axis=1)
    print(f"\nMax |Euler - RK45|: du={err[0]:.2e} m/s, dalpha={np.degrees(err[1]):.2e} deg, "
          f"dq={np.degrees(err[2]):.2e} deg/s, dtheta={np.degrees(err[3]):.2e} deg")

    phugoid = next(m for m in model.analyze_modes() if m.name == 'Phugoid')
    print(f"Phugoid period: poles {phugoid.period:.2f} s, "
          f"simulated {dominant_period(result.t, result.u, t_start=5.0):.2f} s")

    # =========================================================================
    # 5. Create 3x2 plot
    # =========================================================================
    fig, axes = plt.subplots(3, 2, figsize=(14, 10))
    fig.suptitle("Cessna 182 cruise: -2° elevator pulse", fontsize=14, fontweight='bold')

    panels = [
        (axes[0, 0], result.u, 'Δu (m/s)', 'Forward Velocity (Phugoid)'),
        (axes[0, 1], np.degrees(result.alpha), 'Δα (°)', 'Angle of Attack (Short-Period)'),
        (axes[1, 0], np.degrees(result.q), 'Δq (°/s)', 'Pitch Rate'),
        (axes[1, 1], np.degrees(result.theta), 'Δθ (°)', 'Pitch Angle'),
    ]
    for ax, values, ylabel, title in panels:
        ax.plot(result.t, values, 'b-', linewidth=1.5)
        ax.axvspan(0.0, hold, color='r', alpha=0.1, label='δe held')
        ax.axhline(y=0, color='k', linestyle='-', alpha=0.3)
        ax.set_xlabel('Time (s)')
        ax.set_ylabel(ylabel)
        ax.set_title(title)
        ax.grid(True, alpha=0.3)
        ax.legend(loc='upper right')

    ax = axes[2, 0]
    ax.plot(result.t[:500], np.degrees(result.q[:500]), 'b-', label='Euler')
    ax.plot(reference.t[:500], np.degrees(reference.q[:500]), 'r--', label='RK45')
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Δq (°/s)')
    ax.set_title('Short-Period Detail')
    ax.grid(True, alpha=0.3)
    ax.legend(loc='upper right')

    ax = axes[2, 1]
    ax.plot(result.t, np.degrees(result.delta_e), 'k-', linewidth=2)
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('δe (°)')
    ax.set_title('Elevator Input (TEU negative)')
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    output_path = os.path.join(os.path.dirname(__file__), 'cessna182_response.png')
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    print(f"\nFigure saved: {output_path}")

    return result, model


if __name__ == "__main__":
    result, model = main()
