"""CHIP-8 emulator package."""

from chipjax.state import (
    EmulatorState, ExecutionState, StackState, create_state, set_key, toggle_pause, halt, framebuffer
)
from chipjax.emulator import execute, fetch, step, load, load_rom, run_frame, run_n_instruction
from chipjax.timers import TimerClock, tick_timers, tick_timers_n
from chipjax.decode import DecodedInstruction, Op, decode
from chipjax.errors import (
    Chip8Error, LoadError, RomTooLargeError, RomUnreadableError, ExecutionError,
    StackOverflowError, StackUnderflowError, AddressOutOfRangeError
)
from chipjax.constants import *
from chipjax.rendering import display_to_rgb, display_to_text, create_color_scheme

__all__ = [
    "EmulatorState",
    "ExecutionState",
    "StackState",
    "create_state",
    "set_key",
    "toggle_pause",
    "halt",
    "framebuffer",
    "fetch",
    "execute",
    "step",
    "load",
    "load_rom",
    "run_frame",
    "run_n_instruction",
    "tick_timers",
    "tick_timers_n",
    "TimerClock",
    "DecodedInstruction",
    "Op",
    "decode",
    "Chip8Error",
    "LoadError",
    "RomTooLargeError",
    "RomUnreadableError",
    "ExecutionError",
    "StackOverflowError",
    "StackUnderflowError",
    "AddressOutOfRangeError",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "MEMORY_SIZE",
    "MAX_ROM_SIZE",
    "STACK_SIZE",
    "display_to_rgb",
    "display_to_text",
    "create_color_scheme",
]
