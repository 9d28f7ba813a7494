"""Selftest for the application shell: settings, log buffer, crash reports, CLI, headless runs."""

import argparse
import json
import sys
import tempfile
from pathlib import Path

from app import log_buffer
from app.crash_reporter import write_report
from app.settings import AppSettings, apply_overrides, load_settings
from preview.headless import run_and_write, run_headless


def test_settings_defaults_and_file():
    with tempfile.TemporaryDirectory() as td:
        missing = Path(td) / "absent.json"
        assert load_settings(missing) == AppSettings()

        good = Path(td) / "settings.json"
        good.write_text(json.dumps({"fps": 60, "sketch": "melted_text", "seed": "7", "bogus": 1}), encoding="utf-8")
        s = load_settings(good)
        assert s.fps == 60.0 and s.sketch == "melted_text" and s.seed == 7

        broken = Path(td) / "broken.json"
        broken.write_text("{not json", encoding="utf-8")
        assert load_settings(broken) == AppSettings()

        listy = Path(td) / "list.json"
        listy.write_text("[1, 2]", encoding="utf-8")
        assert load_settings(listy) == AppSettings()


def test_settings_overrides():
    base = AppSettings()
    s = apply_overrides(base, {"fps": -5, "tick_ms": 0, "debug": True, "sketch": None, "font_path": ""})
    assert s.fps == 30.0
    assert s.tick_ms == 1
    assert s.debug is True
    assert s.sketch == base.sketch
    assert s.font_path is None
    # a bad value is ignored, the rest still applies
    s2 = apply_overrides(base, {"seed": "many", "sketch": 2})
    assert s2.seed == base.seed and s2.sketch == "2"


def test_log_buffer_tags_and_tail():
    log_buffer.clear()
    log_buffer.log("hello")
    log_buffer.warn("careful")
    log_buffer.error("broken")
    t = log_buffer.tail(10)
    assert t == ["[Flowbook] hello\n", "[Flowbook] WARN: careful\n", "[Flowbook] ERROR: broken\n"]
    assert log_buffer.tail(1) == ["[Flowbook] ERROR: broken\n"]
    assert log_buffer.tail(0) == []


def test_crash_report_includes_log_tail():
    log_buffer.clear()
    log_buffer.log("before the crash")
    try:
        raise RuntimeError("kaput")
    except RuntimeError:
        exc_type, exc, tb = sys.exc_info()
    with tempfile.TemporaryDirectory() as td:
        p = write_report(exc_type, exc, tb, outdir=Path(td))
        text = p.read_text(encoding="utf-8")
    assert text.startswith("FLOWBOOK CRASH REPORT")
    assert "before the crash" in text
    assert "RuntimeError: kaput" in text


def test_cli_param_parsing():
    from sketchbook import _param_pair, build_parser

    assert _param_pair("echoDelay=3") == ("echoDelay", 3.0)
    assert _param_pair(" textSize = 40") == ("textSize", 40.0)
    for bad in ("echoDelay", "=3", "echoDelay=lots"):
        try:
            _param_pair(bad)
            assert False, f"accepted {bad!r}"
        except argparse.ArgumentTypeError:
            pass
    args = build_parser().parse_args(["--sketch", "1", "--param", "textSize=40", "--param", "maxWordCount=3"])
    assert args.sketch == "1"
    assert dict(args.param) == {"textSize": 40.0, "maxWordCount": 3.0}
    assert args.debug is None


def test_headless_is_deterministic():
    a = run_headless("transparency_test", 2, seed=1, overrides={"steps": 4})
    b = run_headless("transparency_test", 2, seed=1, overrides={"steps": 4})
    assert a == b and len(a) == 64

    small = {"particleMaxCount": 10, "timeMultiplier": 0.01}
    m1 = run_headless("melted_text", 2, seed=1, overrides=small)
    assert m1 == run_headless("melted_text", 2, seed=1, overrides=small)
    assert m1 != run_headless("melted_text", 2, seed=2, overrides=small)


def test_headless_writes_result_json():
    with tempfile.TemporaryDirectory() as td:
        out = Path(td) / "res.json"
        res = run_and_write("2", out, 1, seed=3, overrides={"steps": 1})
        data = json.loads(out.read_text(encoding="utf-8"))
    assert data["sketch"] == "transparency_test"
    assert data["sha256"] == res.sha256
    assert data["failed_frames"] == 0
    assert data["params"]["steps"] == 1


def test_soak_uses_light_overrides():
    from tools.soak_run import main as soak_main, soak_overrides

    assert soak_overrides("echo_circles") == {"blurRadius": 0}
    assert soak_overrides("echo_circles", full=True) == {}
    assert soak_overrides("echo_circles", [("blurRadius", 2.0)]) == {"blurRadius": 2.0}
    assert soak_overrides("melted_text") == {}
    # zero-length soak: setup, overrides and teardown only
    assert soak_main(["--sketch", "echo_circles", "--seconds", "0"]) == 0
    assert soak_main(["--sketch", "echo_circles", "--seconds", "0", "--param", "nope=1"]) == 2


def main():
    test_settings_defaults_and_file()
    test_settings_overrides()
    test_log_buffer_tags_and_tail()
    test_crash_report_includes_log_tail()
    test_cli_param_parsing()
    test_headless_is_deterministic()
    test_headless_writes_result_json()
    test_soak_uses_light_overrides()
    print("OK: test_app_shell")


if __name__ == "__main__":
    main()
