"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chipjax import create_state, load


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def scan_f_state():
    """Provide a fresh state whose FX0A scan includes key F."""
    return create_state(scan_key_f=True)


def assemble(*instructions):
    """Pack 16-bit instructions into big-endian ROM bytes."""
    return b"".join(i.to_bytes(2, "big") for i in instructions)


def load_program(*instructions):
    """Load a program made of raw instructions at 0x200."""
    return load(assemble(*instructions))


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )
