from __future__ import annotations

import logging
import os
from dataclasses import fields, replace
from importlib.resources import files as resource_files
from typing import Any, Dict, Optional

import yaml

from ..exceptions import ConfigError
from ..rng import coerce_seed
from . import DisplayConfig, DungeonConfig, GameConfig, InputConfig, PlacementConfig

logger = logging.getLogger(__name__)


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping, got {type(value).__name__}")
    return value


def _int_fields(base: Any, data: Dict[str, Any], section: str) -> Any:
    """Overlay integer fields from ``data`` onto the dataclass instance ``base``."""
    known = {f.name for f in fields(base)}
    updates: Dict[str, int] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown config key %s.%s", section, key)
            continue
        try:
            updates[key] = int(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"{section}.{key} must be an integer, got {value!r}") from exc
    return replace(base, **updates)


def _key(value: Any) -> Any:
    # YAML gives ints for bare numbers; keep them as backend codes
    if isinstance(value, int):
        return value
    return str(value)


def _input_config(data: Dict[str, Any]) -> InputConfig:
    base = InputConfig()
    bindings = dict(base.bindings)
    aliases = dict(base.aliases)

    raw_bindings = data.get("bindings")
    if raw_bindings is not None:
        if not isinstance(raw_bindings, dict):
            raise ConfigError("input.bindings must map action names to key lists")
        bindings = {}
        for action, keys in raw_bindings.items():
            if not isinstance(keys, list):
                keys = [keys]
            bindings[str(action).upper()] = tuple(_key(k) for k in keys)

    raw_aliases = data.get("aliases")
    if raw_aliases is not None:
        if not isinstance(raw_aliases, dict):
            raise ConfigError("input.aliases must map key codes to key names")
        aliases = {_key(code): str(name) for code, name in raw_aliases.items()}

    return InputConfig(bindings=bindings, aliases=aliases)


def parse_config(raw: Optional[Dict[str, Any]]) -> GameConfig:
    """Build a GameConfig from already-decoded YAML data. Missing keys use defaults."""
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ConfigError("Top-level config must be a mapping")

    dungeon = _int_fields(DungeonConfig(), _section(raw, "dungeon"), "dungeon")
    placement = _int_fields(PlacementConfig(), _section(raw, "placement"), "placement")
    display = _int_fields(DisplayConfig(), _section(raw, "display"), "display")
    input_cfg = _input_config(_section(raw, "input"))

    if dungeon.width < 3 or dungeon.height < 3:
        raise ConfigError("dungeon.width and dungeon.height must be at least 3")
    if dungeon.min_leaf_size < 1 or dungeon.room_min_size < 1:
        raise ConfigError("dungeon.min_leaf_size and dungeon.room_min_size must be at least 1")
    if dungeon.min_leaf_size > dungeon.max_leaf_size:
        raise ConfigError("dungeon.min_leaf_size must not exceed dungeon.max_leaf_size")
    if dungeon.room_min_size > dungeon.room_max_size:
        raise ConfigError("dungeon.room_min_size must not exceed dungeon.room_max_size")
    if placement.box_count < 1:
        raise ConfigError("placement.box_count must be at least 1")

    seed = raw.get("seed")
    if seed is not None and not isinstance(seed, int):
        seed = coerce_seed(str(seed))

    return GameConfig(
        dungeon=dungeon,
        placement=placement,
        input=input_cfg,
        display=display,
        seed=seed,
    )


def load_config(path: Optional[str] = None) -> GameConfig:
    """Load game configuration from YAML.

    If path is None, loads the embedded default resource at
    rogue_pursuit/config/defaults.yaml. RP_SEED, when set, overrides the seed.
    """
    if path is None:
        data = resource_files("rogue_pursuit.config").joinpath("defaults.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded embedded default config resource")
    else:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = f.read()
        except OSError as exc:
            raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
        logger.debug("Loaded config from path: %s", path)

    try:
        raw = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config: {exc}") from exc

    cfg = parse_config(raw)

    env_seed = coerce_seed(os.getenv("RP_SEED"))
    if env_seed is not None:
        cfg = replace(cfg, seed=env_seed)

    logger.info(
        "Config: map=%dx%d boxes=%d seed=%r",
        cfg.dungeon.width,
        cfg.dungeon.height,
        cfg.placement.box_count,
        cfg.seed,
    )
    return cfg
