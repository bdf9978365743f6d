"""Gameplay configuration: defaults plus a validated, immutable view read once at startup"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

CONFIG = {
    "BOARD_WIDTH": 8,
    "BOARD_HEIGHT": 20,
    "BLOCK_PIXELS": 50,
    "FALL_INTERVAL_MS": 700,
    "FLASH_STAGES": 18,
    "FLASH_STAGE_MS": 50,
    "WALL_KICKS": (0, -1),
    "PRE_ROTATE": False,
    "SEED": None,
}


class ConfigError(ValueError):
    """Raised when configuration values cannot describe a playable board."""


@dataclass(frozen=True)
class Settings:
    board_width: int
    board_height: int
    block_pixels: int
    fall_interval_ms: int
    flash_stages: int
    flash_stage_ms: int
    wall_kicks: Tuple[int, ...]
    pre_rotate: bool
    seed: Optional[int]

    def __post_init__(self):
        for name in ("board_width", "board_height", "block_pixels",
                     "fall_interval_ms", "flash_stage_ms"):
            v = getattr(self, name)
            if not _is_int(v) or v <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {v!r}")
        if not _is_int(self.flash_stages) or self.flash_stages < 0:
            raise ConfigError(f"flash_stages must be a non-negative integer, got {self.flash_stages!r}")
        kicks = self.wall_kicks
        if not isinstance(kicks, tuple) or not kicks or not all(_is_int(k) for k in kicks):
            raise ConfigError(f"wall_kicks must be a non-empty tuple of ints, got {kicks!r}")
        if self.seed is not None and not _is_int(self.seed):
            raise ConfigError(f"seed must be an int or None, got {self.seed!r}")


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def load_settings(overrides: Optional[Mapping[str, Any]] = None) -> Settings:
    """Merge overrides onto CONFIG and build validated Settings.

    Unknown keys are rejected so a typo never silently falls back to a default.
    """
    cfg = dict(CONFIG)
    if overrides:
        unknown = set(overrides) - set(CONFIG)
        if unknown:
            raise ConfigError(f"unknown config keys: {sorted(unknown)}")
        cfg.update(overrides)

    kicks = cfg["WALL_KICKS"]
    return Settings(
        board_width=cfg["BOARD_WIDTH"],
        board_height=cfg["BOARD_HEIGHT"],
        block_pixels=cfg["BLOCK_PIXELS"],
        fall_interval_ms=cfg["FALL_INTERVAL_MS"],
        flash_stages=cfg["FLASH_STAGES"],
        flash_stage_ms=cfg["FLASH_STAGE_MS"],
        wall_kicks=tuple(kicks) if isinstance(kicks, (list, tuple)) else kicks,
        pre_rotate=bool(cfg["PRE_ROTATE"]),
        seed=cfg["SEED"],
    )
