# config.py
from dataclasses import dataclass, field
import os
import tomllib

from game import MARKS, PLAYER_X


@dataclass
class SearchConfig:
    win_score: int = 10
    ai_player: str = PLAYER_X


@dataclass
class PlayConfig:
    human_first: bool = True  # the human opens, as in the original desktop game
    plots_dir: str = "plots"


@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    play: PlayConfig = field(default_factory=PlayConfig)
    log_level: str = "WARNING"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "play"):
            for k, v in raw.get(section, {}).items():
                target = getattr(cfg, section)
                if hasattr(target, k):
                    setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = raw["log_level"]
        if cfg.search.ai_player not in MARKS:
            raise ValueError(f"search.ai_player must be one of {MARKS}, got {cfg.search.ai_player!r}")
        win_score = cfg.search.win_score
        if isinstance(win_score, bool) or not isinstance(win_score, int) or win_score <= 0:
            raise ValueError(f"search.win_score must be a positive int, got {win_score!r}")
        return cfg


def load_config() -> Config:
    cfg = Config.load_from_toml(os.environ.get("TTT_CONFIG_TOML", "config.toml"))
    # allow env override of the engine's side for quick games
    override_player = os.environ.get("TTT_AI_PLAYER")
    if override_player:
        if override_player.upper() not in MARKS:
            raise ValueError(f"TTT_AI_PLAYER must be X or O, got {override_player!r}")
        cfg.search.ai_player = override_player.upper()
    return cfg


# single globally importable config instance
CONFIG = load_config()
