"""
CHIP-8 emulator entry point
"""

import sys

import hydra
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import MissingMandatoryValue
from hydra.utils import to_absolute_path

from chipjax.config import load_config
from chipjax.logging import ConsoleLogger


def run(cfg: DictConfig) -> int:
    """Validate the config and start a session. Returns an exit code."""
    try:
        config = load_config(cfg)
    except MissingMandatoryValue as e:
        message = str(e).splitlines()[0]
        ConsoleLogger("chipjax").error(f"{message} (run with e.g. rom=path/to/game.ch8)")
        return 1
    except ValueError as e:
        ConsoleLogger("chipjax").error(f"Invalid configuration: {e}")
        return 1
    config.rom = to_absolute_path(config.rom)

    logger = ConsoleLogger("chipjax", config.log_level)
    logger.log_config(OmegaConf.to_container(cfg))

    if config.headless:
        from chipjax.runner import run_without_window
        return run_without_window(config, logger)

    from chipjax.frontend import run_emulator
    return run_emulator(config, logger)


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    sys.exit(run(cfg))


if __name__ == "__main__":
    main()
