from __future__ import annotations

"""Minimal selftest runner.

Repository sanity checks that should always pass: every module compiles,
every built-in sketch starts and renders a few frames headlessly.
"""

from pathlib import Path
import compileall
import re


def _fail(msg: str) -> None:
    raise SystemExit("SELFTEST FAILED: " + msg)


def test_compileall() -> None:
    root = Path(__file__).resolve().parents[1]
    ok = compileall.compile_dir(str(root), quiet=1, rx=re.compile(r"[\\/](\.|build|dist|user_data)"))
    if not ok:
        _fail("compileall failed")


def test_every_sketch_renders() -> None:
    """Each registered sketch sets up and ticks without a failed frame."""
    from behaviors.registry import list_sketch_keys
    from preview.headless import run_headless_result

    # keep the pure-Python raster cheap
    light = {
        "echo_circles": {"blurRadius": 0},
        "melted_text": {"particleMaxCount": 20},
        "transparency_test": {"steps": 4},
    }
    for key in list_sketch_keys():
        res = run_headless_result(key, 3, seed=1, overrides=light.get(key))
        if res.failed_frames:
            _fail(f"{key}: {res.failed_frames} failed frame(s)")


def main() -> None:
    test_compileall()
    test_every_sketch_renders()
    print("OK: selftest.runner passed.")


if __name__ == "__main__":
    main()
