"""Tests for the host configuration schema."""

from pathlib import Path

import pytest
from omegaconf import OmegaConf
from omegaconf.errors import MissingMandatoryValue

from chipjax.config import EmulatorConfig, load_config


class TestLoadConfig:
    """Test merging raw config into the schema."""

    def test_defaults_filled_in(self):
        config = load_config(OmegaConf.create({"rom": "pong.ch8"}))

        assert isinstance(config, EmulatorConfig)
        assert config.rom == "pong.ch8"
        assert config.instructions_per_second == 500
        assert config.fps == 60
        assert config.scan_key_f is False

    def test_overrides_applied(self):
        config = load_config(OmegaConf.create({
            "rom": "pong.ch8",
            "scale": 10,
            "fg_color": [255, 0, 0],
            "headless": True,
        }))

        assert config.scale == 10
        assert config.fg_color == [255, 0, 0]
        assert config.headless

    def test_yaml_file_matches_schema(self):
        cfg = OmegaConf.load(Path(__file__).parent.parent / "conf" / "config.yaml")
        cfg.rom = "game.ch8"

        config = load_config(cfg)

        assert config.frames == 600
        assert config.log_level == "INFO"

    def test_rom_is_required(self):
        with pytest.raises(MissingMandatoryValue):
            load_config(OmegaConf.create({}))


class TestValidation:
    """Test value checks."""

    @pytest.mark.parametrize("key,value", [
        ("instructions_per_second", 0),
        ("fps", -1),
        ("scale", 0),
        ("volume", 1.5),
        ("color_scheme", "plaid"),
        ("fg_color", [300, 0, 0]),
        ("bg_color", [0, 0]),
        ("log_level", "LOUD"),
    ])
    def test_invalid_values(self, key, value):
        with pytest.raises(ValueError):
            load_config(OmegaConf.create({"rom": "pong.ch8", key: value}))

    def test_direct_construction_validates(self):
        with pytest.raises(ValueError):
            EmulatorConfig(rom="pong.ch8", frames=0)


class TestInstructionsPerFrame:

    def test_default_rate(self):
        assert EmulatorConfig(rom="x").instructions_per_frame == 8

    def test_never_below_one(self):
        assert EmulatorConfig(rom="x", instructions_per_second=10, fps=60).instructions_per_frame == 1
