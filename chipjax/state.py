"""CHIP-8 emulator state structures."""

import enum

import jax
import jax.numpy as jnp
import numpy as np
from flax.struct import dataclass, PyTreeNode, field

from chipjax.constants import (
    MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA, SCREEN_WIDTH, SCREEN_HEIGHT,
    STACK_SIZE, NUM_REGISTERS, NUM_KEYS
)


class ExecutionState(enum.Enum):
    """Host-controlled run state of a session."""
    RUNNING = "running"
    PAUSED = "paused"
    HALTED = "halted"


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    The display is indexed ``[y, x]`` so that flattening it row-major gives
    ``y * SCREEN_WIDTH + x``.
    """
    rng: jax.random.PRNGKey
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.astype(PROGRAM_START, jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=jnp.bool_))
    stack: StackState = StackState()
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    execution_state: ExecutionState = field(pytree_node=False, default=ExecutionState.RUNNING)
    scan_key_f: bool = field(pytree_node=False, default=False)


def create_state(rng: jax.random.PRNGKey = jax.random.PRNGKey(0), scan_key_f: bool = False) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    state = EmulatorState(rng, scan_key_f=scan_key_f)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(
        jnp.array(FONT_DATA, dtype=jnp.uint8)
    ))


def set_key(state: EmulatorState, key: int, pressed: bool) -> EmulatorState:
    """Set or clear one keypad flag."""
    if not 0 <= key < NUM_KEYS:
        raise ValueError(f"Key index must be in 0x0..0xF, got {key}")
    return state.replace(keypad=state.keypad.at[key].set(bool(pressed)))


def toggle_pause(state: EmulatorState) -> EmulatorState:
    """Switch between RUNNING and PAUSED; a halted session stays halted."""
    if state.execution_state is ExecutionState.RUNNING:
        return state.replace(execution_state=ExecutionState.PAUSED)
    if state.execution_state is ExecutionState.PAUSED:
        return state.replace(execution_state=ExecutionState.RUNNING)
    return state


def halt(state: EmulatorState) -> EmulatorState:
    return state.replace(execution_state=ExecutionState.HALTED)


def framebuffer(state: EmulatorState) -> np.ndarray:
    """Flat row-major copy of the display (``index = y * 64 + x``)."""
    return np.asarray(state.display, dtype=np.bool_).reshape(-1)
