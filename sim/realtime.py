"""
Real-Time Simulation Driver

Fixed-step playback of the longitudinal model against wall-clock time.

The host calls tick() from its own loop (a Streamlit rerun loop, a GUI
timer, a test). Each tick adds the elapsed wall time to an accumulator and
integrates one Euler step per dt while the accumulator holds at least dt,
so simulated time tracks real time even when ticks arrive irregularly.
Catch-up is capped per tick; backlog beyond the cap is dropped.

The driver owns the whole simulation context: aircraft, trim preset,
coefficients, the {A, B} snapshot and its poles, the state vector, the
elevator command and the state history. Every edit rebuilds the snapshot
and swaps it in with a single assignment.
"""

import logging
import time
from typing import Callable, Dict, List, Optional, Union

import numpy as np

from aero.coefficients import AerodynamicCoefficients
from analysis.modes import ModeInfo, classify_longitudinal_modes, poles
from config import (
    CESSNA_182, ELEVATOR_DEFLECTION, RAD2DEG,
    AircraftProperties, SteadyState, TrimCondition, TrimPreset,
    get_trim_preset, steady_state_summary,
)
from eom.longitudinal import StateSpaceModel, state_space_matrices
from errors import NumericalInstability
from sim.integrator import check_finite, euler_step

logger = logging.getLogger("longsim.realtime")

MAX_CATCH_UP_STEPS = 250
HISTORY_PERIOD = 60.0     # Seconds of history kept for charts
N_STATES = 4


class StateHistory:
    """
    Fixed-size ring buffer of state vectors.

    Holds the most recent `size` samples; ordered() returns them
    oldest-first.
    """

    def __init__(self, size: int, n_states: int = N_STATES):
        if size < 1:
            raise ValueError(f"History size must be >= 1, got {size}")
        self.size = size
        self._buffer = np.zeros((size, n_states))
        self._index = 0
        self._full = False

    def __len__(self) -> int:
        return self.size if self._full else self._index

    def append(self, x: np.ndarray):
        self._buffer[self._index] = x
        self._index = (self._index + 1) % self.size
        if self._index == 0:
            self._full = True

    def clear(self):
        self._buffer[:] = 0.0
        self._index = 0
        self._full = False

    def ordered(self) -> np.ndarray:
        """Recorded samples, oldest first, shape (len, n_states)."""
        if self._full:
            return np.concatenate([self._buffer[self._index:], self._buffer[:self._index]])
        return self._buffer[:self._index].copy()

    def padded(self) -> np.ndarray:
        """Full-length history, left-padded with the oldest sample (zeros when empty)."""
        data = self.ordered()
        n_pad = self.size - len(data)
        if n_pad == 0:
            return data
        pad_value = data[0] if len(data) else np.zeros(self._buffer.shape[1])
        return np.concatenate([np.tile(pad_value, (n_pad, 1)), data])


class RealTimeSimulation:
    """
    Simulation context and fixed-step scheduler.

    Args:
        aircraft: Mass and geometry
        trim: Initial trim preset (enum, index or name)
        coefficients: Starting coefficients, defaults to the preset baseline
        dt: Integration step, defaults to the preset step
        history_period: Seconds of state history kept
        max_catch_up_steps: Cap on steps integrated in a single tick
        clock: Wall-clock source in seconds
        running: Start in the running state
    """

    def __init__(
        self,
        aircraft: AircraftProperties = CESSNA_182,
        trim: Union[TrimCondition, int, str] = TrimCondition.CRUISE,
        coefficients: Optional[AerodynamicCoefficients] = None,
        dt: Optional[float] = None,
        history_period: float = HISTORY_PERIOD,
        max_catch_up_steps: int = MAX_CATCH_UP_STEPS,
        clock: Callable[[], float] = time.perf_counter,
        running: bool = True
    ):
        if max_catch_up_steps < 1:
            raise ValueError(f"max_catch_up_steps must be >= 1, got {max_catch_up_steps}")
        self.aircraft = aircraft
        self.history_period = history_period
        self.max_catch_up_steps = max_catch_up_steps
        self._clock = clock
        self._dt_override = dt

        self.preset: TrimPreset = get_trim_preset(trim)
        self.coefficients = coefficients if coefficients is not None else self.preset.coefficients
        self.dt = self._check_dt(dt if dt is not None else self.preset.dt)

        self._model: StateSpaceModel = None
        self._poles: np.ndarray = None
        self._rebuild()

        self.x = np.zeros(N_STATES)
        self.delta_e = 0.0
        self.time = 0.0
        self.history = StateHistory(self._history_size())
        self.history.append(self.x)

        self.is_running = running
        self._accumulated = 0.0
        self._last_update = self._clock()

    # ------------------------------------------------------------------
    # Model context
    # ------------------------------------------------------------------

    @staticmethod
    def _check_dt(dt: float) -> float:
        dt = float(dt)
        if not dt > 0.0:
            raise ValueError(f"Time step must be positive, got {dt}")
        return dt

    def _history_size(self) -> int:
        return max(1, int(round(self.history_period / self.dt)))

    def _rebuild(self, preset: Optional[TrimPreset] = None,
                 coefficients: Optional[AerodynamicCoefficients] = None):
        """
        Recompute {A, B} and the poles, then commit the new inputs.

        Nothing is committed if the build fails.
        """
        preset = preset if preset is not None else self.preset
        coefficients = coefficients if coefficients is not None else self.coefficients
        model = state_space_matrices(self.aircraft, preset.steady_state, coefficients)
        model_poles = poles(model.A)
        self.preset, self.coefficients = preset, coefficients
        self._model, self._poles = model, model_poles
        logger.debug("Rebuilt state-space model, poles: %s",
                     ", ".join(f"{p.real:+.3f}{p.imag:+.3f}j" for p in model_poles))

    @property
    def steady_state(self) -> SteadyState:
        return self.preset.steady_state

    @property
    def model(self) -> StateSpaceModel:
        return self._model

    @property
    def poles(self) -> np.ndarray:
        return self._poles.copy()

    @property
    def modes(self) -> List[ModeInfo]:
        return classify_longitudinal_modes(self._model.A)

    @property
    def state(self) -> np.ndarray:
        return self.x.copy()

    def select_trim(self, trim: Union[TrimCondition, int, str]):
        """Switch trim preset: baseline coefficients, preset dt, zeroed state."""
        preset = get_trim_preset(trim)
        dt = self._check_dt(self._dt_override if self._dt_override is not None else preset.dt)
        self._rebuild(preset, preset.coefficients)
        self.dt = dt
        self.history = StateHistory(self._history_size())
        self.reset()
        logger.info("Selected %s trim (dt=%g s)", self.preset.label, self.dt)

    def set_coefficient(self, name: str, value: float) -> float:
        """
        Edit one coefficient and rebuild the model.

        Returns:
            The stored (clamped) value
        """
        self._rebuild(coefficients=self.coefficients.with_value(name, value))
        return getattr(self.coefficients, name)

    def reset_coefficients(self):
        """Restore the editable coefficients to the preset baseline."""
        self._rebuild(coefficients=self.coefficients.with_defaults_for_editable(self.preset.coefficients))

    # ------------------------------------------------------------------
    # Pilot input
    # ------------------------------------------------------------------

    def deflect_elevator(self, deflection: float = ELEVATOR_DEFLECTION):
        self.delta_e = float(deflection)

    def release_elevator(self):
        self.delta_e = 0.0

    @property
    def elevator_deflection(self) -> float:
        """Total elevator angle for display: trim deflection plus command (rad)."""
        return self.steady_state.de + self.delta_e

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def play(self):
        """Start or resume; time spent paused is not replayed."""
        if not self.is_running:
            self._last_update = self._clock()
            self._accumulated = 0.0
            self.is_running = True

    def pause(self):
        self.is_running = False

    def toggle(self) -> bool:
        if self.is_running:
            self.pause()
        else:
            self.play()
        return self.is_running

    def reset(self):
        """Zero the state, the history and the time accumulator."""
        self.x = np.zeros(N_STATES)
        self.time = 0.0
        self.history.clear()
        self.history.append(self.x)
        self._accumulated = 0.0
        self._last_update = self._clock()

    def step(self) -> np.ndarray:
        """
        Integrate one dt with the current model and elevator command.

        Raises:
            NumericalInstability: Non-finite state; the simulation is paused
        """
        model = self._model
        x_next = euler_step(self.x, self.delta_e, model.A, model.B, self.dt)
        try:
            check_finite(x_next, "state vector")
        except NumericalInstability:
            self.pause()
            logger.error("State diverged at t=%.3f s, simulation paused", self.time)
            raise
        self.x = x_next
        self.time += self.dt
        self.history.append(self.x)
        return self.x

    def tick(self, now: Optional[float] = None) -> int:
        """
        Advance simulated time to match the wall clock.

        Args:
            now: Current wall-clock time (s), defaults to the driver's clock

        Returns:
            Number of integration steps run
        """
        if not self.is_running:
            return 0
        if now is None:
            now = self._clock()
        elapsed = max(0.0, now - self._last_update)
        self._last_update = now
        self._accumulated += elapsed

        steps = 0
        while self._accumulated >= self.dt and steps < self.max_catch_up_steps:
            self.step()
            self._accumulated -= self.dt
            steps += 1

        if self._accumulated >= self.dt:
            dropped = int(self._accumulated // self.dt)
            logger.warning("Catch-up limit of %d steps reached, dropping %d steps (%.3f s)",
                           self.max_catch_up_steps, dropped, dropped * self.dt)
            self._accumulated -= dropped * self.dt

        return steps

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------

    def history_time_axis(self) -> np.ndarray:
        """Time axis for padded(): from -(size-1)·dt to 0."""
        n = self.history.size
        return (np.arange(n) - n + 1) * self.dt

    def steady_state_summary(self) -> Dict[str, float]:
        return steady_state_summary(self.steady_state)

    def state_summary(self) -> Dict[str, float]:
        """Current perturbation state in display units (angles in degrees)."""
        return {
            'time': self.time,
            'du': self.x[0],
            'dalpha': self.x[1] * RAD2DEG,
            'dq': self.x[2] * RAD2DEG,
            'dtheta': self.x[3] * RAD2DEG,
            'elevator': self.elevator_deflection * RAD2DEG,
        }
