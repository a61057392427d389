# src/boundedseq/config.py
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

from boundedseq.core import log
from boundedseq.core.errors import ConfigError
from boundedseq.core.sequence import BoundedSequence

_log = log.get(__name__)

ENV_DEFAULT_CAPACITY = "BOUNDEDSEQ_DEFAULT_CAPACITY"


@dataclass(slots=True)
class SequenceConfig:
    name: str
    capacity: int

    def build(self) -> BoundedSequence[Any]:
        return BoundedSequence(self.capacity, name=self.name)


def _as_capacity(raw: Any, where: str) -> int:
    if isinstance(raw, str) and re.fullmatch(r"[+-]?\d+", raw.strip()):
        raw = int(raw.strip())
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ConfigError(f"{where}: capacity must be an integer, got {raw!r}")
    if raw <= 0:
        raise ConfigError(f"{where}: capacity must be > 0, got {raw}")
    return raw


def _env_default() -> Optional[int]:
    raw = os.getenv(ENV_DEFAULT_CAPACITY)
    if raw is None or raw.strip() == "":
        return None
    return _as_capacity(raw.strip(), ENV_DEFAULT_CAPACITY)


def parse_config(data: Any) -> List[SequenceConfig]:
    """Validate an already-loaded YAML document."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("top level must be a mapping")

    default_cap = _env_default()
    if default_cap is None and data.get("default_capacity") is not None:
        default_cap = _as_capacity(data["default_capacity"], "default_capacity")

    entries = data.get("sequences") or []
    if not isinstance(entries, list):
        raise ConfigError("'sequences' must be a list")

    out: List[SequenceConfig] = []
    seen = set()
    for i, s in enumerate(entries):
        where = f"sequences[{i}]"
        if not isinstance(s, dict) or s.get("name") is None or s["name"] == "":
            raise ConfigError(f"{where}: needs a 'name'")
        name = str(s["name"])
        if name in seen:
            raise ConfigError(f"{where}: duplicate name {name!r}")
        seen.add(name)

        if s.get("capacity") is not None:
            cap = _as_capacity(s["capacity"], where)
        elif default_cap is not None:
            cap = default_cap
        else:
            raise ConfigError(f"{where}: no capacity and no default_capacity")
        out.append(SequenceConfig(name=name, capacity=cap))
    return out


def load_config(yaml_path: str | Path) -> List[SequenceConfig]:
    """Read a YAML file (plus .env overrides) into sequence configs."""
    load_dotenv()
    path = Path(yaml_path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}") from e
    cfgs = parse_config(data)
    _log.info("loaded %d sequence configs from %s", len(cfgs), path.as_posix())
    return cfgs


def build_from_yaml(yaml_path: str | Path) -> Dict[str, BoundedSequence[Any]]:
    """Read a config file and build one named sequence per entry."""
    return {c.name: c.build() for c in load_config(yaml_path)}
