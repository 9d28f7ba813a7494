import argparse
import os


def _param_pair(text: str):
    name, sep, value = str(text).partition("=")
    name = name.strip()
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected name=value, got {text!r}")
    try:
        return name, float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{name}: not a number: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="flowbook", description="Generative flow-field sketchbook")
    ap.add_argument("--sketch", help="sketch key or index (default from settings, else 0)")
    ap.add_argument("--debug", action="store_true", default=None, help="show the parameter panel")
    ap.add_argument("--settings", help="path to a settings.json")
    ap.add_argument("--param", action="append", type=_param_pair, default=[], metavar="NAME=VALUE",
                    help="override a sketch parameter (repeatable)")
    ap.add_argument("--seed", type=int)
    ap.add_argument("--fps", type=float)
    ap.add_argument("--font", dest="font_path", help="font file for text sketches")
    ap.add_argument("--headless", type=int, metavar="FRAMES",
                    help="render FRAMES frames without a window and print the canvas hash")
    ap.add_argument("--list", action="store_true", help="list sketches and exit")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    from app.crash_reporter import install_global
    install_global()

    from app.settings import apply_overrides, load_settings
    settings = load_settings(args.settings)
    settings = apply_overrides(settings, {
        "sketch": args.sketch,
        "debug": args.debug,
        "seed": args.seed,
        "fps": args.fps,
        "font_path": args.font_path,
    })
    overrides = dict(args.param)

    if args.list:
        import behaviors  # noqa: F401
        from behaviors.registry import REGISTRY
        for i, (key, defn) in enumerate(REGISTRY.items()):
            print(f"{i}  {key:<20} {defn.width}x{defn.height}  {defn.title}")
        return 0

    if args.headless is not None:
        from app.log_buffer import error
        from behaviors.sketch_base import SketchSetupError
        from preview.headless import run_headless_result
        try:
            res = run_headless_result(settings.sketch, args.headless, seed=settings.seed,
                                      fps=settings.fps, overrides=overrides)
        except (KeyError, SketchSetupError) as e:
            error(f"headless: {e}")
            return 2
        print(f"{res.sketch} frames={res.frames} failed={res.failed_frames} sha256={res.sha256}")
        return 0 if not res.failed_frames else 1

    from qt.qt_app import run_qt
    here = os.path.dirname(os.path.abspath(__file__))
    print(f"=== FLOWBOOK STARTUP ===\nrun_root: {here}\nsketch: {settings.sketch}\n=== END STARTUP ===")
    return run_qt(settings, overrides)


if __name__ == "__main__":
    raise SystemExit(main())
