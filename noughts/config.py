# noughts/config.py
from dataclasses import dataclass, field
from typing import Optional
import logging
import os
import tomllib

logger = logging.getLogger(__name__)


@dataclass
class BoardConfig:
    size: int = 3


@dataclass
class UIConfig:
    engine_name: str = "Noughts"
    log_file: Optional[str] = None  # curses UI only logs when this is set


@dataclass
class Config:
    board: BoardConfig = field(default_factory=BoardConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("board", "ui"):
            for k, v in raw.get(section, {}).items():
                target = getattr(cfg, section)
                if hasattr(target, k):
                    setattr(target, k, v)
                else:
                    logger.warning("Unknown config key [%s] %s in %s", section, k, path)
        if "log_level" in raw:
            cfg.log_level = raw["log_level"]
        return cfg


def configure_logging(config: Config):
    """Apply the configured level; log to ui.log_file instead of stderr when it is set."""
    kwargs = {
        "level": getattr(logging, str(config.log_level).upper(), logging.INFO),
        "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
    }
    if config.ui.log_file:
        kwargs["filename"] = config.ui.log_file
    logging.basicConfig(**kwargs)


# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("NOUGHTS_CONFIG_TOML", "config.toml"))
# allow env override of board size for quick experiments
override_size = os.environ.get("NOUGHTS_BOARD_SIZE")
if override_size:
    try:
        CONFIG.board.size = int(override_size)
    except ValueError:
        logger.warning("Ignoring NOUGHTS_BOARD_SIZE=%r, not an integer", override_size)
