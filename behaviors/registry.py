from __future__ import annotations

from typing import Callable, Dict, List, Tuple

from params.registry import ParamDefs, validate_defs
from behaviors.sketch_base import Sketch

# Registration order is the selection order (`--sketch 0`, `--sketch 1`, ...).
REGISTRY: Dict[str, "SketchDef"] = {}


class SketchDef:
    def __init__(self, key, *, factory: Callable[[], Sketch], params: ParamDefs,
                 size: Tuple[int, int], title=None):
        self.key = str(key)
        self.title = title or self.key
        self.factory = factory
        self.params = params
        self.size = (int(size[0]), int(size[1]))

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    def create(self) -> Sketch:
        return self.factory()


def register(defn: SketchDef) -> SketchDef:
    if defn.key in REGISTRY:
        raise ValueError(f"Duplicate sketch key: {defn.key}")
    if defn.width <= 0 or defn.height <= 0:
        raise ValueError(f"Sketch '{defn.key}' needs a positive canvas size, got {defn.size}")
    validate_defs(defn.params)
    REGISTRY[defn.key] = defn
    return defn


def get_sketch(key: str) -> SketchDef:
    try:
        return REGISTRY[str(key)]
    except KeyError:
        raise KeyError(f"Unknown sketch: {key}") from None


def list_sketch_keys() -> List[str]:
    return list(REGISTRY.keys())


def sketch_at(index: int) -> SketchDef:
    """Sketch by position; out-of-range indexes fall back to the first sketch."""
    keys = list_sketch_keys()
    if not keys:
        raise KeyError("No sketches registered")
    i = int(index)
    if 0 <= i < len(keys):
        return REGISTRY[keys[i]]
    return REGISTRY[keys[0]]


def resolve_sketch(ref: str) -> SketchDef:
    """Accept a key ('melted_text') or an index ('1')."""
    ref = str(ref).strip()
    if ref in REGISTRY:
        return REGISTRY[ref]
    try:
        return sketch_at(int(ref))
    except ValueError:
        raise KeyError(f"Unknown sketch: {ref}") from None


def next_sketch_key(current: str) -> str:
    keys = list_sketch_keys()
    if not keys:
        raise KeyError("No sketches registered")
    if current not in REGISTRY:
        return keys[0]
    return keys[(keys.index(current) + 1) % len(keys)]
