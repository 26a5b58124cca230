import time

import jax

from chipjax import load, display_to_text
from chipjax.runner import run_headless


def glyph_rom() -> bytes:
    """Draw the sixteen font glyphs in two rows of eight, then spin."""
    program = [
        0x6000,  # V0 = 0 (digit)
        0x6102,  # V1 = 2 (x)
        0x6202,  # V2 = 2 (y)
        0xF029,  # I = glyph V0
        0xD125,  # draw 5 rows at (V1, V2)
        0x7001,  # V0 += 1
        0x7108,  # x += 8
        0x3008,  # if V0 == 8, move to the second row
        0x1216,
        0x6102,  # x = 2
        0x7208,  # y += 8
        0x3010,  # loop until all 16 glyphs are drawn
        0x1206,
        0x121A,  # spin
    ]
    return b"".join(word.to_bytes(2, "big") for word in program)


if __name__ == "__main__":
    state = load(glyph_rom(), jax.random.PRNGKey(0))

    start = time.time()
    state, _ = run_headless(state, frames=30, instructions_per_frame=8)
    print("Execution time (s):", time.time() - start)

    print(display_to_text(state.display))
