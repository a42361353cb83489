"""Keyboard input for POSIX terminals: cbreak mode, stdin polling, key decoding."""

from __future__ import annotations

import os
import sys
import termios
import tty
from contextlib import contextmanager
from select import select
from typing import Iterator, List, Optional, Tuple

from .menu import KeyEvent


_CSI_KEYS = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}
_TILDE_KEYS = {"1": "home", "7": "home", "4": "end", "8": "end"}


@contextmanager
def cbreak(fd: Optional[int] = None) -> Iterator[int]:
    """Put the terminal in cbreak mode for the duration; always restored."""
    if fd is None:
        fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        yield fd
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def decode_keys(buf: str) -> Tuple[List[KeyEvent], str]:
    """
    Parse `buf` into key events.

    Returns the events and whatever trailing bytes form an incomplete escape
    sequence, to be prepended to the next read.
    """
    out: List[KeyEvent] = []
    i = 0
    n = len(buf)
    while i < n:
        c = buf[i]
        if c == "\x03":
            out.append(KeyEvent("ctrl+c"))
            i += 1
            continue
        if c in ("\r", "\n"):
            out.append(KeyEvent("enter"))
            i += 1
            continue
        if c == "\x1b":
            if i + 1 >= n:
                break  # keep ESC for the next read
            n1 = buf[i + 1]
            # SS3 arrows: ESC O A/B/C/D
            if n1 == "O":
                if i + 2 >= n:
                    break
                key = _CSI_KEYS.get(buf[i + 2])
                if key:
                    out.append(KeyEvent(key))
                    i += 3
                else:
                    i += 1
                continue
            # CSI: ESC [ params final
            if n1 == "[":
                j = i + 2
                while j < n and not ("@" <= buf[j] <= "~"):
                    j += 1
                if j >= n:
                    break  # incomplete
                final = buf[j]
                if final == "~":
                    key = _TILDE_KEYS.get(buf[i + 2:j])
                else:
                    key = _CSI_KEYS.get(final)
                if key:
                    out.append(KeyEvent(key))
                i = j + 1
                continue
            out.append(KeyEvent("esc"))
            i += 1
            continue

        out.append(KeyEvent(c))
        i += 1
    return out, buf[i:]


class KeyReader:
    """Reads whatever is waiting on `fd` and turns it into key events."""

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._pending = ""

    def poll(self, timeout: float) -> List[KeyEvent]:
        r, _w, _e = select([self.fd], [], [], timeout)
        if not r:
            return []
        chunk = os.read(self.fd, 4096)
        if not chunk:
            return []
        events, self._pending = decode_keys(
            self._pending + chunk.decode("utf-8", errors="replace")
        )
        return events
