"""Headless session driver."""

import time
from typing import Optional

import jax
from tqdm import tqdm

from chipjax.config import EmulatorConfig
from chipjax.emulator import load, run_frame
from chipjax.errors import ExecutionError, LoadError
from chipjax.logging import ConsoleLogger
from chipjax.rendering import display_to_text
from chipjax.state import EmulatorState, ExecutionState, halt


def run_headless(
    state: EmulatorState,
    frames: int,
    instructions_per_frame: int,
    progress: bool = True,
    logger: Optional[ConsoleLogger] = None,
) -> tuple[EmulatorState, int]:
    """Run ``frames`` host frames without a window.

    Returns the final state and the number of frames in which the sound
    timer was active. An execution error halts the session and is logged;
    the state from before the faulting frame is kept.
    """
    logger = logger or ConsoleLogger("headless")
    sound_frames = 0

    with tqdm(total=frames, desc="Emulating", unit="frame", disable=not progress) as bar:
        for frame in range(frames):
            if state.execution_state is ExecutionState.HALTED:
                break
            try:
                state, sound_active = run_frame(state, instructions_per_frame)
            except ExecutionError as e:
                logger.error(f"Frame {frame}: {e}")
                state = halt(state)
                break
            sound_frames += sound_active
            bar.update(1)

    logger.debug(f"PC=0x{int(state.pc):03X} I=0x{int(state.I):03X} state={state.execution_state.value}")
    return state, sound_frames


def run_without_window(config: EmulatorConfig, logger: Optional[ConsoleLogger] = None) -> int:
    """Headless counterpart of the pygame frontend; prints the final screen."""
    logger = logger or ConsoleLogger("chipjax", config.log_level)
    try:
        state = load(config.rom, jax.random.PRNGKey(config.seed), scan_key_f=config.scan_key_f)
    except LoadError as e:
        logger.error(str(e))
        return 1
    logger.info(f"Loaded: {config.rom}")

    start = time.time()
    state, sound_frames = run_headless(state, config.frames, config.instructions_per_frame, logger=logger)
    logger.info(f"Ran {config.frames} frames in {time.time() - start:.2f}s, sound active in {sound_frames}")
    print(display_to_text(state.display))
    return 1 if state.execution_state is ExecutionState.HALTED else 0
