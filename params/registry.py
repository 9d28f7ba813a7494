# Parameter registry (single source of truth)
# - Every slider a sketch exposes is declared here, one dict per sketch.
# - Sketches reference their dict from behaviors/sketches/*.py.
#
# Types supported by ParameterStore + ParamsPanel:
#   float, int
# Keys: type, default, min, max, step (optional: label)

from __future__ import annotations

from typing import Any, Dict

ParamDefs = Dict[str, Dict[str, Any]]

ECHO_CIRCLES_PARAMS: ParamDefs = {
    "timeMultiplier":       {"type": "float", "default": 0.265, "min": 0.001, "max": 1.0, "step": 0.001},
    "circleSizeMin":        {"type": "int",   "default": 10,    "min": 0,     "max": 100, "step": 1},
    "circleSizeMaxInc":     {"type": "int",   "default": 50,    "min": 0,     "max": 50,  "step": 1},
    # alpha (0..255) of the black overlay laid over the echo buffer every frame
    "transparencyStrength": {"type": "int",   "default": 1,     "min": 0,     "max": 255, "step": 1},
    "echoDelay":            {"type": "int",   "default": 14,    "min": 0,     "max": 150, "step": 1},
    # default sits off the step grid on purpose; the first slider move snaps it
    "echoCount":            {"type": "int",   "default": 5,     "min": 0,     "max": 100, "step": 3},
    "blurRadius":           {"type": "int",   "default": 1,     "min": 0,     "max": 8,   "step": 1},
}

MELTED_TEXT_PARAMS: ParamDefs = {
    "timeMultiplier":            {"type": "float", "default": 1.0,   "min": 0.0,  "max": 5.0,  "step": 0.01},
    "particleMaxCount":          {"type": "int",   "default": 1500,  "min": 10,   "max": 2000, "step": 10},
    "particleForceStrength":     {"type": "float", "default": 0.1,   "min": 0.01, "max": 0.5,  "step": 0.01},
    "particleMaxSpeed":          {"type": "float", "default": 2.4,   "min": 0.5,  "max": 5.0,  "step": 0.1},
    "particleTrailWeight":       {"type": "float", "default": 1.0,   "min": 1.0,  "max": 5.0,  "step": 0.5},
    "particleNoiseStrength":     {"type": "float", "default": 2.0,   "min": 0.0,  "max": 16.0, "step": 0.1},
    # signed: negative values brighten the canvas instead of fading it
    "particleTrailFadeStrength": {"type": "float", "default": 0.003, "min": -0.2, "max": 0.2,  "step": 0.001},
    "textSize":                  {"type": "int",   "default": 90,    "min": 10,   "max": 200,  "step": 5},
    "maxWordCount":              {"type": "int",   "default": 15,    "min": 1,    "max": 25,   "step": 1},
}

TRANSPARENCY_TEST_PARAMS: ParamDefs = {
    "timeMultiplier":       {"type": "float", "default": 0.5, "min": 0.0, "max": 1.0, "step": 0.01},
    "transparencyStrength": {"type": "int",   "default": 1,   "min": 0,   "max": 255, "step": 1},
    "steps":                {"type": "int",   "default": 400, "min": 1,   "max": 400, "step": 1},
}


def defaults_for(defs: ParamDefs) -> Dict[str, Any]:
    return {k: spec.get("default") for k, spec in defs.items()}


def validate_defs(defs: ParamDefs) -> None:
    """Raise ValueError on a malformed definition table."""
    for key, spec in defs.items():
        t = spec.get("type")
        if t not in ("float", "int"):
            raise ValueError(f"Parameter '{key}' has unsupported type {t!r}")
        for field in ("default", "min", "max", "step"):
            if field not in spec:
                raise ValueError(f"Parameter '{key}' missing '{field}'")
        if float(spec["min"]) > float(spec["max"]):
            raise ValueError(f"Parameter '{key}' has min > max")
        if float(spec["step"]) < 0:
            raise ValueError(f"Parameter '{key}' has a negative step")
