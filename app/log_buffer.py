from __future__ import annotations
import sys
from collections import deque
from typing import Deque, List

_MAX = 400
_TAG = "Flowbook"
_buf: Deque[str] = deque(maxlen=_MAX)


def push(line: str) -> None:
    _buf.append(str(line))


def tail(n: int = 200) -> List[str]:
    if n <= 0:
        return []
    return list(_buf)[-n:]


def clear() -> None:
    _buf.clear()


def log(msg: str, *, tag: str = _TAG, level: str = "") -> None:
    """Print a tagged line and keep it for crash reports."""
    prefix = f"[{tag}]" + (f" {level}:" if level else "")
    line = f"{prefix} {msg}"
    push(line + "\n")
    stream = sys.stderr if level in ("WARN", "ERROR") else sys.stdout
    print(line, file=stream)


def warn(msg: str, *, tag: str = _TAG) -> None:
    log(msg, tag=tag, level="WARN")


def error(msg: str, *, tag: str = _TAG) -> None:
    log(msg, tag=tag, level="ERROR")
