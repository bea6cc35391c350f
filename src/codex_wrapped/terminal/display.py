"""Inline image output for the Kitty and iTerm2 terminal protocols.

Kitty graphics protocol: https://sw.kovidgoyal.net/kitty/graphics-protocol/
iTerm2 inline images: https://iterm2.com/documentation-images.html
"""

from __future__ import annotations

import base64
import logging
import sys
from typing import TextIO

from codex_wrapped.models.terminal import TerminalCapability
from codex_wrapped.terminal.detect import detect_terminal

logger = logging.getLogger(__name__)

ESC = "\x1b"
BEL = "\x07"
KITTY_CHUNK_SIZE = 4096
DISPLAY_FILENAME = "codex-wrapped.png"


def kitty_frames(png: bytes, chunk_size: int = KITTY_CHUNK_SIZE) -> list[str]:
    """Encode a PNG as Kitty graphics protocol frames.

    The first frame carries ``a=T`` (transmit and display) and ``f=100``
    (PNG); continuation frames carry only ``m``. ``m=1`` means more chunks follow.
    """
    data = base64.b64encode(png).decode("ascii")
    chunks = [data[i : i + chunk_size] for i in range(0, len(data), chunk_size)] or [""]

    frames: list[str] = []
    for index, chunk in enumerate(chunks):
        more = 0 if index == len(chunks) - 1 else 1
        if index == 0:
            frames.append(f"{ESC}_Ga=T,f=100,m={more};{chunk}{ESC}\\")
        else:
            frames.append(f"{ESC}_Gm={more};{chunk}{ESC}\\")
    return frames


def iterm2_frame(png: bytes, filename: str = DISPLAY_FILENAME) -> str:
    """Encode a PNG as a single iTerm2 ``OSC 1337`` inline image frame."""
    data = base64.b64encode(png).decode("ascii")
    name = base64.b64encode(filename.encode("utf-8")).decode("ascii")
    return f"{ESC}]1337;File=name={name};size={len(png)};inline=1:{data}{BEL}"


def display_in_terminal(
    png: bytes,
    capability: TerminalCapability | None = None,
    stream: TextIO | None = None,
) -> bool:
    """Write ``png`` inline to the terminal.

    Returns:
        True if the image was written, False if the terminal has no supported
        protocol or writing failed. Never raises.
    """
    if capability is None:
        capability = detect_terminal()
    if not capability.supports_images:
        return False

    try:
        out = stream or sys.stdout
        if capability.supports_kitty_protocol:
            for frame in kitty_frames(png):
                out.write(frame)
        else:
            out.write(iterm2_frame(png))
        out.write("\n")
        out.flush()
    except Exception as exc:
        logger.debug("Inline image display failed on %s: %s", capability.type, exc)
        return False
    return True
