"""Pygame desktop frontend for the CHIP-8 emulator."""

import jax
import numpy as np
import pygame

from chipjax.config import EmulatorConfig
from chipjax.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chipjax.emulator import load, run_n_instruction
from chipjax.errors import ExecutionError, LoadError
from chipjax.logging import ConsoleLogger
from chipjax.rendering import display_to_rgb, resolve_colors
from chipjax.state import EmulatorState, ExecutionState, halt, set_key, toggle_pause
from chipjax.timers import TimerClock, tick_timers_n

# CHIP-8 keypad      Keyboard
#   1 2 3 C           1 2 3 4
#   4 5 6 D           Q W E R
#   7 8 9 E           A S D F
#   A 0 B F           Z X C V
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}

MIN_IPF, MAX_IPF, IPF_STEP = 1, 100, 2


def build_beep(frequency: int, volume: float) -> pygame.mixer.Sound:
    """One period of a square wave, looped while the sound timer runs."""
    sample_rate, size, _ = pygame.mixer.get_init()
    period = max(2, int(round(sample_rate / frequency)))
    amplitude = int((2 ** (abs(size) - 1) - 1) * volume)
    samples = np.full(period, -amplitude, dtype=np.int16)
    samples[:period // 2] = amplitude
    return pygame.mixer.Sound(buffer=samples.tobytes())


def draw_overlay_text(surface, text_lines, position, font, bg_color=(0, 0, 0), text_color=(255, 255, 255), alpha=120):
    """Draw text with semi-transparent background overlay"""
    if not text_lines:
        return

    line_height = font.get_height()
    max_width = max(font.size(line)[0] for line in text_lines)
    overlay = pygame.Surface((max_width + 16, len(text_lines) * line_height + 8))
    overlay.set_alpha(alpha)
    overlay.fill(bg_color)
    surface.blit(overlay, position)

    x, y = position
    for i, line in enumerate(text_lines):
        text_surface = font.render(line, True, text_color)
        surface.blit(text_surface, (x + 8, y + 4 + i * line_height))


def new_session(config: EmulatorConfig) -> EmulatorState:
    return load(config.rom, jax.random.PRNGKey(config.seed), scan_key_f=config.scan_key_f)


def run_emulator(config: EmulatorConfig, logger: ConsoleLogger = None) -> int:
    """Open a window and run the ROM until the user quits. Returns an exit code."""
    logger = logger or ConsoleLogger("chipjax", config.log_level)

    try:
        state = new_session(config)
    except LoadError as e:
        logger.error(str(e))
        return 1
    logger.info(f"Loaded: {config.rom}")

    on_color, off_color = resolve_colors(config.color_scheme, config.fg_color, config.bg_color)
    ipf = config.instructions_per_frame

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH * config.scale, SCREEN_HEIGHT * config.scale))
    pygame.display.set_caption("CHIP8 Emulator")
    clock = pygame.time.Clock()
    font = pygame.font.Font(None, 18)

    beep = None
    if config.audio:
        try:
            pygame.mixer.init(frequency=44100, size=-16, channels=1)
            beep = build_beep(config.beep_frequency, config.volume)
        except pygame.error as e:
            logger.warning(f"Audio disabled: {e}")
    beeping = False
    show_debug = False
    timer_clock = TimerClock()
    elapsed_ms = 0

    logger.info("Controls: ESC=Quit, SPACE=Pause, BACKSPACE=Reset, +/-=Speed, F1=Debug")

    try:
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    logger.info("Exiting")
                    return 0
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        logger.info("Exiting")
                        return 0
                    elif event.key == pygame.K_SPACE:
                        state = toggle_pause(state)
                        logger.info(state.execution_state.value.upper())
                    elif event.key == pygame.K_BACKSPACE:
                        state = new_session(config)
                        logger.info("Reset")
                    elif event.key == pygame.K_EQUALS:
                        ipf = min(MAX_IPF, ipf + IPF_STEP)
                        logger.info(f"Speed: {ipf} IPF")
                    elif event.key == pygame.K_MINUS:
                        ipf = max(MIN_IPF, ipf - IPF_STEP)
                        logger.info(f"Speed: {ipf} IPF")
                    elif event.key == pygame.K_F1:
                        show_debug = not show_debug
                    elif event.key in KEY_MAP:
                        state = set_key(state, KEY_MAP[event.key], True)
                elif event.type == pygame.KEYUP and event.key in KEY_MAP:
                    state = set_key(state, KEY_MAP[event.key], False)

            sound_active = False
            timer_ticks = timer_clock.ticks(elapsed_ms)
            if state.execution_state is ExecutionState.RUNNING:
                try:
                    state = run_n_instruction(state, ipf)
                except ExecutionError as e:
                    logger.error(f"Halted at PC=0x{int(state.pc):03X}: {e}")
                    state = halt(state)
                else:
                    state, sound_active = tick_timers_n(state, timer_ticks)

            if beep is not None and sound_active != beeping:
                if sound_active:
                    beep.play(loops=-1)
                else:
                    beep.stop()
                beeping = sound_active

            frame = display_to_rgb(state.display, config.scale, on_color, off_color, config.pixel_outlines)
            pygame.surfarray.blit_array(screen, frame.swapaxes(0, 1))

            if show_debug:
                draw_overlay_text(screen, [
                    f"PC: 0x{int(state.pc):03X}",
                    f"I: 0x{int(state.I):03X}",
                    f"IPF: {ipf}",
                    f"FPS: {clock.get_fps():.1f} (target: {config.fps})",
                    f"Delay: {int(state.delay_timer)} Sound: {int(state.sound_timer)}",
                    f"Status: {state.execution_state.value.upper()}",
                ], (5, 5), font, alpha=100)
            elif state.execution_state is not ExecutionState.RUNNING:
                draw_overlay_text(screen, [state.execution_state.value.upper()], (5, 5), font)

            pygame.display.flip()
            elapsed_ms = clock.tick(config.fps)
    finally:
        pygame.quit()
