# gambit/config.py
from dataclasses import dataclass, field
from typing import List, Optional
import os
import tomllib  # python >=3.11

# Material (centipawns)
PIECE_VALUES = {
    "PAWN": 100,
    "KNIGHT": 320,
    "BISHOP": 330,
    "ROOK": 500,
    "QUEEN": 900,
    "KING": 20000,
}

# Centre bonus, a1..h1 first, scaled by BONUS_SCALE and truncated.
CENTER_BONUS: List[float] = [
    0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 0.0, 0.5, 0.5, 0.5, 0.5, 0.0, 0.0,
    0.0, 0.0, 1.0, 1.0, 1.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 1.0, 1.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 0.5, 0.5, 0.5, 0.5, 0.0, 0.0,
    0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
]
BONUS_SCALE = 10

@dataclass
class SearchConfig:
    default_difficulty: str = "random"
    random_seed: Optional[int] = None  # None means a fresh seed per engine

@dataclass
class WorkerConfig:
    use_processes: bool = True  # False runs searches on a worker thread

@dataclass
class UIConfig:
    engine_name: str = "Gambit"
    api_port: int = 8000
    human_color: str = "white"

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    worker: WorkerConfig = field(default_factory=WorkerConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "worker", "ui"):
            if section in raw:
                target = getattr(cfg, section)
                for k, v in raw[section].items():
                    if hasattr(target, k):
                        setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"])
        return cfg

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("GAMBIT_CONFIG_TOML", "config.toml"))
# allow env overrides for quick debugging
if os.environ.get("GAMBIT_LOG_LEVEL"):
    CONFIG.log_level = os.environ["GAMBIT_LOG_LEVEL"]
if os.environ.get("GAMBIT_DIFFICULTY"):
    CONFIG.search.default_difficulty = os.environ["GAMBIT_DIFFICULTY"]
