from __future__ import annotations

"""Live parameter store.

Written by slider widgets, read by the frame driver at the start of every tick.
Writes never fail on range: they are clamped into [min, max] and snapped onto
the step grid that starts at `min`.
"""

import math
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping

from behaviors.state_runtime import clamp
from .registry import ParamDefs, validate_defs


def _step_decimals(step: float) -> int:
    exp = Decimal(repr(float(step))).normalize().as_tuple().exponent
    return max(0, -int(exp))


def quantize(spec: Dict[str, Any], v: float) -> float:
    """Clamp `v` to the declared range and snap it to the step grid."""
    mn = float(spec["min"])
    mx = float(spec["max"])
    step = float(spec.get("step", 0.0) or 0.0)
    v = clamp(float(v), mn, mx)
    if step <= 0:
        return v
    n = round((v - mn) / step)
    q = round(mn + n * step, _step_decimals(step))
    # max is not always on the grid (e.g. 0..100 step 3)
    if q > mx:
        q = round(mn + (n - 1) * step, _step_decimals(step))
    if q < mn:
        q = mn
    return q


def _coerce(spec: Dict[str, Any], v: float):
    if spec.get("type") == "int":
        return int(round(v))
    return float(v)


class ParameterStore:
    def __init__(self, defs: ParamDefs):
        validate_defs(defs)
        self._defs: ParamDefs = {k: dict(v) for k, v in defs.items()}
        self._values: Dict[str, Any] = {}
        self.reset()

    @property
    def defs(self) -> Mapping[str, Dict[str, Any]]:
        return MappingProxyType(self._defs)

    def names(self) -> List[str]:
        return list(self._defs.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._defs

    def __iter__(self) -> Iterator[str]:
        return iter(self._defs)

    def reset(self) -> None:
        """Back to defaults. Defaults are trusted as written (clamped only)."""
        for k, spec in self._defs.items():
            v = clamp(float(spec["default"]), float(spec["min"]), float(spec["max"]))
            self._values[k] = _coerce(spec, v)

    def get(self, name: str):
        if name not in self._defs:
            raise KeyError(f"Unknown parameter: {name}")
        return self._values[name]

    def set(self, name: str, value: Any):
        """Clamp + quantize `value` and store it. Returns the stored value."""
        spec = self._defs.get(name)
        if spec is None:
            raise KeyError(f"Unknown parameter: {name}")
        try:
            v = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"Parameter '{name}' needs a number, got {value!r}") from None
        if math.isnan(v):
            v = clamp(float(spec["default"]), float(spec["min"]), float(spec["max"]))
        else:
            v = quantize(spec, v)
        self._values[name] = _coerce(spec, v)
        return self._values[name]

    def update(self, values: Mapping[str, Any]) -> None:
        for k, v in values.items():
            self.set(k, v)

    def snapshot(self) -> Mapping[str, Any]:
        """Read-only copy for one frame."""
        return MappingProxyType(dict(self._values))
