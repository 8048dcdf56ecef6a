"""
Trim Condition Comparison

Loads every aircraft and trim condition from planes.yaml and compares
the longitudinal modes side-by-side, plus a Cm_q sensitivity sweep at
cruise.

Usage: python examples/trim_comparison.py
"""

import numpy as np
import matplotlib.pyplot as plt

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config_loader import get_available_aircraft, load_aircraft
from eom.longitudinal import LongitudinalLinearModel
from analysis.modes import coefficient_sensitivity


def main():
    print("=" * 70)
    print("Trim Condition Comparison")
    print("=" * 70)

    rows = []
    for name in get_available_aircraft():
        setup = load_aircraft(name)
        for trim_name, ss in setup.steady_states.items():
            model = LongitudinalLinearModel(setup.properties, ss, setup.coefficients)
            print("\n" + model.print_modes_table().replace(
                "LONGITUDINAL MODE ANALYSIS (Roskam Chapter 5)", f"{setup.label} - {trim_name}"))
            rows.append((f"{name}/{trim_name}", model.analyze_modes()))

    # Cm_q sensitivity at cruise
    setup = load_aircraft('cessna_182')
    scales = np.linspace(0.5, 1.5, 11)
    results = coefficient_sensitivity(
        setup.properties, setup.steady_states['cruise'], setup.coefficients, 'Cm_q', scales)

    sp_zeta = [next(m.zeta for m in r['modes'] if m.name.startswith('Short-Period')) for r in results]
    ph_zeta = [next(m.zeta for m in r['modes'] if m.name.startswith('Phugoid')) for r in results]

    print(f"\nSensitivity to Cm_q")
    print("-" * 40)
    print(f"{'Scale':<10}{'Cm_q':<10}{'z_SP':<10}{'z_PH':<10}")
    for r, z_sp, z_ph in zip(results, sp_zeta, ph_zeta):
        print(f"{r['scale']:<10.1f}{r['coefficient_value']:<10.2f}{z_sp:<10.3f}{z_ph:<10.3f}")

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.plot(scales, sp_zeta, 'b-o', label='Short-Period ζ')
    ax.plot(scales, ph_zeta, 'r-s', label='Phugoid ζ')
    ax.set_xlabel('Cm_q scale factor')
    ax.set_ylabel('Damping ratio ζ')
    ax.set_title('Cessna 182 cruise: damping vs pitch damping derivative')
    ax.grid(True, alpha=0.3)
    ax.legend()

    output_path = os.path.join(os.path.dirname(__file__), 'cmq_sensitivity.png')
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    print(f"\nFigure saved: {output_path}")

    return rows


if __name__ == "__main__":
    main()
