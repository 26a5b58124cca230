"""CHIP-8 delay and sound timers."""

import jax.numpy as jnp
from chipjax.constants import TIMER_FREQUENCY
from chipjax.state import EmulatorState


def _count_down(timer: jnp.ndarray) -> jnp.ndarray:
    return jnp.where(timer > 0, timer - 1, timer).astype(jnp.uint8)


def tick_timers(state: EmulatorState) -> tuple[EmulatorState, bool]:
    """Decrement both timers once; call at 60 Hz regardless of instruction count.

    Returns the new state and whether the sound should be playing, judged
    on the sound timer before this tick.
    """
    sound_active = bool(state.sound_timer > 0)
    return state.replace(
        delay_timer=_count_down(state.delay_timer),
        sound_timer=_count_down(state.sound_timer),
    ), sound_active


def tick_timers_n(state: EmulatorState, ticks: int) -> tuple[EmulatorState, bool]:
    """Apply ``ticks`` timer ticks; sound is active if any of them saw it running."""
    sound_active = bool(state.sound_timer > 0)
    for _ in range(ticks):
        state, active = tick_timers(state)
        sound_active = sound_active or active
    return state, sound_active


class TimerClock:
    """Turns host frame durations into whole timer ticks.

    Elapsed time is accumulated in integer milliseconds, so a host running
    at any frame rate gets exactly ``frequency`` ticks per second of wall
    time.
    """

    def __init__(self, frequency: int = TIMER_FREQUENCY):
        self.frequency = frequency
        self._pending = 0

    def ticks(self, elapsed_ms: int) -> int:
        self._pending += int(elapsed_ms) * self.frequency
        due, self._pending = divmod(self._pending, 1000)
        return due
