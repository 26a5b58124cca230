"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction
from chipjax.constants import (
    ADDRESS_MASK, FONT_START, FONT_CHAR_SIZE, MEMORY_SIZE, NUM_KEYS, WAIT_KEY_SCAN_LIMIT
)
from chipjax.errors import AddressOutOfRangeError


def _check_range(start: int, length: int) -> None:
    if start + length > MEMORY_SIZE:
        raise AddressOutOfRangeError(start, length)


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I, wrapping at 0xFFF. VF is not touched."""
    new_i = jnp.astype(state.I + state.V[instruction.x], jnp.uint16)
    return state.replace(I=new_i & ADDRESS_MASK)


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    Never blocks: with no key down the PC is rewound so the same
    instruction runs again on the next step. Key 0xF is only scanned when
    ``scan_key_f`` is set.
    """
    scanned = state.keypad[:NUM_KEYS if state.scan_key_f else WAIT_KEY_SCAN_LIMIT]

    if not bool(jnp.any(scanned)):
        return state.replace(pc=state.pc - 2)

    pressed_key = int(jnp.argmax(scanned))
    return state.replace(V=state.V.at[instruction.x].set(pressed_key))


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    font_address = FONT_START + jnp.astype(state.V[instruction.x], jnp.uint16) * FONT_CHAR_SIZE
    return state.replace(I=jnp.astype(font_address, jnp.uint16))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    start = int(state.I)
    _check_range(start, 3)
    value = state.V[instruction.x]

    digits = jnp.array([
        value // 100,
        (value // 10) % 10,
        value % 10
    ], dtype=jnp.uint8)

    new_memory = state.memory.at[start:start + 3].set(digits)
    return state.replace(memory=new_memory)


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I. I is unchanged."""
    start = int(state.I)
    count = instruction.x + 1
    _check_range(start, count)
    new_memory = state.memory.at[start:start + count].set(state.V[:count])
    return state.replace(memory=new_memory)


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I. I is unchanged."""
    start = int(state.I)
    count = instruction.x + 1
    _check_range(start, count)
    new_V = state.V.at[:count].set(state.memory[start:start + count])
    return state.replace(V=new_V)
