"""Host configuration schema.

The frontend is configured through hydra (``conf/config.yaml`` plus
``key=value`` overrides). ``load_config`` merges whatever hydra hands over
into the structured ``EmulatorConfig`` schema and validates it.
"""

from dataclasses import dataclass
from typing import List, Optional

from omegaconf import MISSING, DictConfig, OmegaConf

from chipjax.rendering import COLOR_SCHEMES


@dataclass
class EmulatorConfig:
    """Settings for one emulation session."""
    rom: str = MISSING
    instructions_per_second: int = 500
    fps: int = 60
    scale: int = 20
    color_scheme: str = "white"
    fg_color: Optional[List[int]] = None
    bg_color: Optional[List[int]] = None
    pixel_outlines: bool = True
    audio: bool = True
    beep_frequency: int = 440
    volume: float = 0.25
    seed: int = 0
    scan_key_f: bool = False
    headless: bool = False
    frames: int = 600
    log_level: str = "INFO"

    def __post_init__(self):
        for name in ("instructions_per_second", "fps", "scale", "beep_frequency", "frames"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if not 0.0 <= self.volume <= 1.0:
            raise ValueError(f"volume must be in [0, 1], got {self.volume}")
        if self.color_scheme not in COLOR_SCHEMES:
            raise ValueError(
                f"Unknown color scheme '{self.color_scheme}'. Available: {list(COLOR_SCHEMES)}"
            )
        for name in ("fg_color", "bg_color"):
            color = getattr(self, name)
            if color is not None and (len(color) != 3 or not all(0 <= c <= 255 for c in color)):
                raise ValueError(f"{name} must be three values in 0..255, got {list(color)}")
        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level '{self.log_level}'")

    @property
    def instructions_per_frame(self) -> int:
        return max(1, self.instructions_per_second // self.fps)


def load_config(cfg: DictConfig) -> EmulatorConfig:
    """Merge a raw DictConfig over the schema defaults and validate it."""
    schema = OmegaConf.structured(EmulatorConfig)
    merged = OmegaConf.merge(schema, cfg)
    return OmegaConf.to_object(merged)
