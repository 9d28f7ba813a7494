from __future__ import annotations
import platform, sys, time, traceback
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def _now_stamp() -> str:
    return time.strftime("%Y%m%d_%H%M%S", time.localtime())


def write_report(exc_type, exc, tb, *, outdir: Path | None = None) -> Path:
    outdir = outdir or (ROOT / "user_data" / "crash_reports")
    outdir.mkdir(parents=True, exist_ok=True)
    p = outdir / f"crash_{_now_stamp()}.txt"

    from app.log_buffer import tail
    log_tail = "".join(tail(250)) or "(empty)\n"

    trace = "".join(traceback.format_exception(exc_type, exc, tb))

    p.write_text(
        "FLOWBOOK CRASH REPORT\n"
        f"timestamp={_now_stamp()}\n"
        f"argv={sys.argv}\n"
        f"python={sys.version.split()[0]}\n"
        f"platform={platform.platform()}\n"
        "\n--- recent log ---\n"
        + log_tail +
        "\n--- traceback ---\n"
        + trace,
        encoding="utf-8",
        errors="ignore",
    )
    return p


def install_global():
    def _hook(exc_type, exc, tb):
        try:
            rp = write_report(exc_type, exc, tb)
            sys.stderr.write(f"\n[Flowbook] Crash report written: {rp}\n")
        except OSError as e:
            sys.stderr.write(f"\n[Flowbook] Could not write crash report: {e}\n")
        # also print default
        sys.__excepthook__(exc_type, exc, tb)
    sys.excepthook = _hook
