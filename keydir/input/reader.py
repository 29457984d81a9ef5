"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into key tokens matching the
menu's vocabulary: printable characters as themselves, control bytes as
``"C-x"``, and arrow keys as ``"UP"``/``"DOWN"``/``"LEFT"``/``"RIGHT"``.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_NAMED_CONTROL_BYTES = {
    b"\t": "TAB",
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
}

_ARROW_FINALS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, first: bytes) -> str:
    """Collect continuation bytes for a multi-byte UTF-8 character."""
    lead = first[0]
    if lead >= 0xF0:
        needed = 3
    elif lead >= 0xE0:
        needed = 2
    elif lead >= 0xC0:
        needed = 1
    else:
        needed = 0
    data = first
    for _ in range(needed):
        more = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if more is None:
            break
        data += more
    return data.decode("utf-8", errors="replace")


def decode_control_byte(ch: bytes) -> str | None:
    """Return the token for a C0 control byte, or ``None`` for other bytes."""
    named = _NAMED_CONTROL_BYTES.get(ch)
    if named is not None:
        return named
    code = ch[0]
    if 1 <= code <= 26:
        return f"C-{chr(code + 96)}"
    if code == 0x1F:
        return "C-_"
    return None


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``; returns ``""`` on timeout or EOF."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    control = decode_control_byte(ch)
    if control is not None:
        return control

    if ch != b"\x1b":
        return _read_utf8_tail(fd, ch)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    arrow = _ARROW_FINALS.get(seq)
    if arrow is not None:
        return arrow
    return "ESC"


__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "decode_control_byte",
    "read_key",
]
