"""Soak runner.

Purpose:
- Tick a sketch headlessly for an extended duration to catch crashes/leaks.
- Does not require UI interaction; uses the frame driver on the raster surface.

Usage:
  python3 tools/soak_run.py --sketch melted_text --seconds 300 --fps 30
  python3 tools/soak_run.py --sketch echo_circles --full --param echoDelay=2

Notes:
- Frame errors are counted, not fatal; the exit code is non-zero if any frame failed
  or setup raised.
- The raster blur is pure Python and dominates echo_circles frames, so the soak
  turns it off unless --full is given. --param always wins.
- It prints periodic status.
"""
from __future__ import annotations
import argparse, time, traceback

# cheaper settings that keep every code path except the named one busy
LIGHT_OVERRIDES = {
    "echo_circles": {"blurRadius": 0},
}


def soak_overrides(key, params=(), full=False):
    out = {} if full else dict(LIGHT_OVERRIDES.get(key, {}))
    out.update(dict(params))
    return out


def main(argv=None):
    from sketchbook import _param_pair

    ap = argparse.ArgumentParser()
    ap.add_argument("--sketch", default="0")
    ap.add_argument("--seconds", type=float, default=300)
    ap.add_argument("--fps", type=float, default=30.0)
    ap.add_argument("--seed", type=int, default=1337)
    ap.add_argument("--log_every", type=int, default=5)
    ap.add_argument("--realtime", action="store_true", help="sleep between frames")
    ap.add_argument("--full", action="store_true", help="keep expensive defaults (e.g. blur)")
    ap.add_argument("--param", action="append", type=_param_pair, default=[], metavar="NAME=VALUE")
    args = ap.parse_args(argv)

    import behaviors  # noqa: F401
    from behaviors.registry import resolve_sketch
    from params.store import ParameterStore
    from preview.frame_driver import build_driver

    defn = resolve_sketch(args.sketch)
    store = ParameterStore(defn.params)
    try:
        store.update(soak_overrides(defn.key, args.param, args.full))
        drv = build_driver(defn, store, seed=args.seed, frame_rate=args.fps)
    except Exception as e:
        print("[soak] FAIL setup:", type(e).__name__, e)
        traceback.print_exc()
        return 2

    dt = 1.0 / max(1.0, float(args.fps))
    t0 = time.time()
    last_log = t0
    try:
        while True:
            now = time.time()
            if now - t0 >= args.seconds:
                break
            drv.tick()
            if now - last_log >= args.log_every:
                last_log = now
                print(f"[soak] {defn.key} t={now-t0:.1f}s frames={drv.frame} "
                      f"particles={len(drv.pool)} echoes={len(drv.echoes)} failed={drv.failed_frames}")
            if args.realtime:
                time.sleep(dt)
        failed = drv.failed_frames
        print(f"[soak] {'OK' if not failed else 'FAIL'} duration={time.time()-t0:.1f}s "
              f"frames={drv.frame} failed={failed} params={dict(store.snapshot())}")
        return 0 if not failed else 2
    finally:
        drv.teardown()


if __name__ == "__main__":
    raise SystemExit(main())
