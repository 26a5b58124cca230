"""Main CHIP-8 emulator execution engine."""

import os
from typing import Union

import jax
import jax.numpy as jnp
from chipjax.state import EmulatorState, ExecutionState, create_state
from chipjax.decode import Op, decode
from chipjax.constants import MEMORY_SIZE, PROGRAM_START, MAX_ROM_SIZE
from chipjax.errors import AddressOutOfRangeError, RomTooLargeError, RomUnreadableError
from chipjax.timers import tick_timers
from chipjax.instructions.system import no_op, execute_clear_screen, execute_return
from chipjax.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key
)
from chipjax.instructions.alu import (
    execute_alu_set, execute_alu_or, execute_alu_and, execute_alu_xor, execute_alu_add,
    execute_alu_sub_xy, execute_alu_shift_right, execute_alu_sub_yx, execute_alu_shift_left
)
from chipjax.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipjax.instructions.display import execute_display
from chipjax.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)

RomSource = Union[bytes, bytearray, memoryview, str, os.PathLike]

INSTRUCTION_HANDLERS = {
    Op.SYS: no_op,
    Op.CLS: execute_clear_screen,
    Op.RET: execute_return,
    Op.JP: execute_jump,
    Op.CALL: execute_call,
    Op.SE_IMM: execute_skip_if_equal_immediate,
    Op.SNE_IMM: execute_skip_if_not_equal_immediate,
    Op.SE_REG: execute_skip_if_equal_register,
    Op.LD_IMM: execute_set,
    Op.ADD_IMM: execute_add,
    Op.LD_REG: execute_alu_set,
    Op.OR: execute_alu_or,
    Op.AND: execute_alu_and,
    Op.XOR: execute_alu_xor,
    Op.ADD_REG: execute_alu_add,
    Op.SUB: execute_alu_sub_xy,
    Op.SHR: execute_alu_shift_right,
    Op.SUBN: execute_alu_sub_yx,
    Op.SHL: execute_alu_shift_left,
    Op.SNE_REG: execute_skip_if_not_equal_register,
    Op.LD_I: execute_set_index,
    Op.JP_V0: execute_jump_with_offset,
    Op.RND: execute_random,
    Op.DRW: execute_display,
    Op.SKP: execute_skip_if_key,
    Op.SKNP: execute_skip_if_not_key,
    Op.LD_VX_DT: execute_get_delay_timer,
    Op.LD_KEY: execute_wait_for_key,
    Op.LD_DT: execute_set_delay_timer,
    Op.LD_ST: execute_set_sound_timer,
    Op.ADD_I: execute_add_to_index,
    Op.LD_F: execute_font_character,
    Op.LD_BCD: execute_bcd_conversion,
    Op.LD_MEM: execute_store_registers,
    Op.LD_REGS: execute_load_registers,
    Op.UNKNOWN: no_op,
}


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    decoded_instruction = decode(instruction)
    return INSTRUCTION_HANDLERS[decoded_instruction.op](state, decoded_instruction)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Pack two bytes into uint16."""
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


def fetch(state: EmulatorState) -> tuple[EmulatorState, jnp.uint16]:
    """Fetch next instruction from memory and advance the PC past it."""
    pc = int(state.pc)
    if pc + 1 >= MEMORY_SIZE:
        raise AddressOutOfRangeError(pc, 2)
    instruction = _pack_u16(state.memory[pc], state.memory[pc + 1])
    return state.replace(pc=state.pc + 2), instruction


def step(state: EmulatorState) -> EmulatorState:
    """Run one fetch-decode-execute cycle. Does nothing unless RUNNING."""
    if state.execution_state is not ExecutionState.RUNNING:
        return state
    state, instruction = fetch(state)
    return execute(state, int(instruction))


def run_n_instruction(state: EmulatorState, n: int) -> EmulatorState:
    """Step up to ``n`` times, stopping early if the session leaves RUNNING."""
    for _ in range(n):
        if state.execution_state is not ExecutionState.RUNNING:
            break
        state = step(state)
    return state


def run_frame(state: EmulatorState, instructions_per_frame: int) -> tuple[EmulatorState, bool]:
    """One host frame: a burst of instructions followed by a single timer tick."""
    state = run_n_instruction(state, instructions_per_frame)
    return tick_timers(state)


def _read_rom(rom: RomSource) -> tuple[bytes, str]:
    """ROM bytes and a display name from a path or any bytes-like object."""
    if not isinstance(rom, (str, os.PathLike)):
        try:
            return bytes(memoryview(rom)), "<bytes>"
        except TypeError as e:
            raise RomUnreadableError(f"<{type(rom).__name__}>", str(e)) from e
    name = os.fspath(rom)
    try:
        with open(name, 'rb') as f:
            return f.read(), name
    except OSError as e:
        raise RomUnreadableError(name, e.strerror or str(e)) from e


def load_rom(state: EmulatorState, rom: RomSource) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    rom_data, name = _read_rom(rom)
    if len(rom_data) > MAX_ROM_SIZE:
        raise RomTooLargeError(len(rom_data), MAX_ROM_SIZE, name)
    new_memory = state.memory
    if rom_data:
        rom_array = jnp.array(list(rom_data), dtype=jnp.uint8)
        new_memory = new_memory.at[PROGRAM_START:PROGRAM_START + len(rom_data)].set(rom_array)
    return state.replace(
        memory=new_memory,
        pc=jnp.astype(PROGRAM_START, jnp.uint16),
        execution_state=ExecutionState.RUNNING,
    )


def load(rom: RomSource, rng: jax.random.PRNGKey = None, scan_key_f: bool = False) -> EmulatorState:
    """Create a fresh state and load a ROM into it."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    return load_rom(create_state(rng, scan_key_f=scan_key_f), rom)
