"""
Load and expose app config (YAML). Used by the scripts to get render defaults,
animation export params and the output dir.
"""
from pathlib import Path
from typing import Any

import yaml


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load config from YAML. Path is optional; defaults to config/default.yaml."""
    if config_path is None:
        config_path = _project_root() / "config" / "default.yaml"
    path = Path(config_path)
    if not path.exists():
        return _defaults()
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return _merge(_defaults(), data)


def _defaults() -> dict[str, Any]:
    return {
        "render": {
            "size": 64,
            "mode": "gradient",
            "animated": False,
            "dot_scale": None,
            "tones": [],
            "pixel_ratio": 1.0,
        },
        "animation": {"fps": 30, "duration_seconds": 4.0},
        "output": {"dir": "output", "filename_prefix": "hashvatar"},
        "logging": {"level": "INFO"},
    }


def _merge(defaults: dict[str, Any], data: dict[str, Any]) -> dict[str, Any]:
    """Section-wise merge: file values override defaults key by key."""
    out = dict(defaults)
    for key, value in data.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = {**out[key], **value}
        else:
            out[key] = value
    return out


def get_output_dir(config: dict[str, Any]) -> Path:
    """Resolve output directory (relative to project root if needed)."""
    out = config.get("output", {})
    d = out.get("dir", "output")
    p = Path(d)
    if not p.is_absolute():
        p = _project_root() / p
    return p
