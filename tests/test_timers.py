"""Tests for the 60 Hz timer tick."""

import jax.numpy as jnp
import pytest
from chipjax import execute, step, tick_timers, tick_timers_n, TimerClock, TIMER_FREQUENCY
from chipjax.config import EmulatorConfig
from conftest import load_program


def _with_timers(state, delay, sound):
    return state.replace(
        delay_timer=jnp.astype(delay, jnp.uint8),
        sound_timer=jnp.astype(sound, jnp.uint8),
    )


class TestTick:
    """Test tick_timers."""

    def test_both_timers_count_down(self, fresh_state):
        state = _with_timers(fresh_state, 5, 3)

        state, _ = tick_timers(state)

        assert state.delay_timer == 4
        assert state.sound_timer == 2

    def test_timers_stop_at_zero(self, fresh_state):
        state = _with_timers(fresh_state, 1, 0)

        for _ in range(3):
            state, sound = tick_timers(state)

        assert state.delay_timer == 0
        assert state.sound_timer == 0
        assert not sound

    def test_sound_judged_before_decrement(self, fresh_state):
        """A sound timer of 1 still beeps for the tick that clears it."""
        state = _with_timers(fresh_state, 0, 1)

        state, sound = tick_timers(state)
        assert sound
        assert state.sound_timer == 0

        state, sound = tick_timers(state)
        assert not sound

    def test_tick_leaves_other_state_alone(self, fresh_state):
        state = execute(fresh_state, 0x6042)

        new_state, _ = tick_timers(state)

        assert new_state.pc == state.pc
        assert new_state.V[0] == 0x42


class TestTimersDuringExecution:
    """Timers only move when the host ticks them."""

    def test_steps_do_not_decrement(self):
        # V0 = 0x20, delay = V0, JP 0x204
        state = load_program(0x6020, 0xF015, 0x1204)

        for _ in range(100):
            state = step(state)

        assert state.delay_timer == 0x20

    def test_delay_round_trip(self, fresh_state):
        """6XNN, FX15, FX07 hands the value back unchanged."""
        state = execute(fresh_state, 0x6A99)
        state = execute(state, 0xFA15)
        state = execute(state, 0xFB07)

        assert state.V[0xB] == 0x99

    def test_delay_read_after_ticks(self, fresh_state):
        state = execute(fresh_state, 0x600A)
        state = execute(state, 0xF015)
        for _ in range(4):
            state, _ = tick_timers(state)

        state = execute(state, 0xF107)

        assert state.V[1] == 6


def _one_second_of_frames(fps):
    """Whole-millisecond frame durations that add up to exactly one second."""
    return [(i + 1) * 1000 // fps - i * 1000 // fps for i in range(fps)]


class TestTickN:
    """Test tick_timers_n."""

    def test_applies_each_tick(self, fresh_state):
        state, _ = tick_timers_n(_with_timers(fresh_state, 10, 0), 4)
        assert state.delay_timer == 6

    def test_zero_ticks_reports_current_sound(self, fresh_state):
        state = _with_timers(fresh_state, 3, 2)

        new_state, sound = tick_timers_n(state, 0)

        assert sound
        assert new_state.delay_timer == 3
        assert new_state.sound_timer == 2

    def test_sound_seen_by_any_tick(self, fresh_state):
        state, sound = tick_timers_n(_with_timers(fresh_state, 0, 1), 3)

        assert sound
        assert state.sound_timer == 0


class TestTimerClock:
    """Timers follow wall time, not the host frame rate."""

    @pytest.mark.parametrize("fps", [30, 60, 144])
    def test_sixty_ticks_per_second_at_any_fps(self, fps):
        clock = TimerClock()

        ticks = sum(clock.ticks(ms) for ms in _one_second_of_frames(fps))

        assert ticks == TIMER_FREQUENCY

    @pytest.mark.parametrize("fps", [30, 60, 144])
    def test_delay_timer_drains_in_one_second(self, fresh_state, fps):
        config = EmulatorConfig(rom="x.ch8", fps=fps)
        clock = TimerClock()
        state = _with_timers(fresh_state, 200, 0)

        for ms in _one_second_of_frames(config.fps):
            state, _ = tick_timers_n(state, clock.ticks(ms))

        assert state.delay_timer == 200 - 60

    def test_short_frames_carry_remainder(self):
        clock = TimerClock()

        assert clock.ticks(10) == 0
        assert clock.ticks(7) == 1  # 17 ms at 60 Hz is 1.02 ticks
        assert clock.ticks(0) == 0
