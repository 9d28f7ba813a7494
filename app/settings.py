from __future__ import annotations

"""Application settings.

Resolution order: dataclass defaults, then user_data/settings.json (if present),
then command-line flags (applied by the caller via `apply_overrides`).
A broken settings file is reported and ignored; it never stops the app.
"""

import json
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional

from app.log_buffer import warn

ROOT = Path(__file__).resolve().parents[1]
DEFAULT_SETTINGS_PATH = ROOT / "user_data" / "settings.json"


@dataclass
class AppSettings:
    fps: float = 30.0            # nominal rate of the virtual clock
    tick_ms: int = 33            # QTimer interval for the interactive window
    seed: int = 1337
    sketch: str = "0"            # sketch key or index
    debug: bool = False          # show the parameter panel on startup
    font_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_FIELD_TYPES = {"fps": float, "tick_ms": int, "seed": int, "sketch": str, "debug": bool}


def _coerce_field(name: str, value: Any) -> Any:
    if name == "font_path":
        return None if value in (None, "") else str(value)
    return _FIELD_TYPES[name](value)


def apply_overrides(settings: AppSettings, values: Dict[str, Any]) -> AppSettings:
    """Return a copy with known, non-None keys replaced. Unknown keys are ignored."""
    known = {f.name for f in fields(AppSettings)}
    data = settings.to_dict()
    for k, v in (values or {}).items():
        if k not in known or v is None:
            continue
        try:
            data[k] = _coerce_field(k, v)
        except (TypeError, ValueError):
            warn(f"settings: ignoring bad value for {k!r}: {v!r}")
    if data["fps"] <= 0:
        warn(f"settings: fps must be > 0, got {data['fps']}; using 30")
        data["fps"] = 30.0
    if data["tick_ms"] < 1:
        data["tick_ms"] = 1
    return AppSettings(**data)


def load_settings(path: Path | None = None) -> AppSettings:
    cfg_path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    base = AppSettings()
    if not cfg_path.exists():
        return base
    try:
        with cfg_path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        warn(f"settings: could not read {cfg_path}: {e}")
        return base
    if not isinstance(data, dict):
        warn(f"settings: {cfg_path} must hold a JSON object")
        return base
    return apply_overrides(base, data)
