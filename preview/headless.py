from __future__ import annotations
"""Headless sketch runner for regression tests.

It runs a sketch through the frame driver on the pure-Python raster surface,
without any Qt, producing a stable hash of the final canvas for a given sketch,
seed and set of parameter overrides.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import hashlib
import json

import behaviors  # noqa: F401  (registers built-in sketches)
from behaviors.registry import resolve_sketch
from params.store import ParameterStore
from preview.frame_driver import build_driver


@dataclass
class HeadlessResult:
    sketch: str
    sha256: str
    frames: int
    fps: float
    seed: int
    failed_frames: int = 0
    params: Dict[str, Any] = field(default_factory=dict)


def run_headless_result(sketch: str, frames: int = 30, *, seed: int = 1337, fps: float = 30.0,
                        overrides: Optional[Mapping[str, Any]] = None) -> HeadlessResult:
    defn = resolve_sketch(sketch)
    store = ParameterStore(defn.params)
    if overrides:
        store.update(overrides)

    drv = build_driver(defn, store, seed=seed, frame_rate=fps)
    try:
        drv.run(frames)
        return HeadlessResult(
            sketch=defn.key,
            sha256=hashlib.sha256(drv.canvas.to_bytes()).hexdigest(),
            frames=int(frames),
            fps=float(fps),
            seed=int(seed),
            failed_frames=drv.failed_frames,
            params=dict(store.snapshot()),
        )
    finally:
        drv.teardown()


def run_headless(sketch: str, frames: int = 30, *, seed: int = 1337, fps: float = 30.0,
                 overrides: Optional[Mapping[str, Any]] = None) -> str:
    return run_headless_result(sketch, frames, seed=seed, fps=fps, overrides=overrides).sha256


def run_and_write(sketch: str, out_json: Path, frames: int = 30, *, seed: int = 1337, fps: float = 30.0,
                  overrides: Optional[Mapping[str, Any]] = None) -> HeadlessResult:
    res = run_headless_result(sketch, frames, seed=seed, fps=fps, overrides=overrides)
    Path(out_json).write_text(json.dumps(res.__dict__, indent=2), encoding="utf-8")
    return res
