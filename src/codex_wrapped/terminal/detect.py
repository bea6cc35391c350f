"""Detect which inline image protocols the terminal supports."""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping

from codex_wrapped.models.terminal import TerminalCapability, TerminalType

_Env = Mapping[str, str]


def _term(value: str) -> Callable[[_Env], bool]:
    return lambda env: env.get("TERM") == value


def _term_program(value: str) -> Callable[[_Env], bool]:
    return lambda env: env.get("TERM_PROGRAM") == value


def _marker(name: str) -> Callable[[_Env], bool]:
    return lambda env: bool(env.get(name))


def _any(*checks: Callable[[_Env], bool]) -> Callable[[_Env], bool]:
    return lambda env: any(check(env) for check in checks)


# Checked in order; the first match wins.
TERMINAL_RULES: list[tuple[Callable[[_Env], bool], TerminalCapability]] = [
    (
        _term("xterm-ghostty"),
        TerminalCapability(type=TerminalType.GHOSTTY, supports_kitty_protocol=True),
    ),
    (
        _any(_term("xterm-kitty"), _marker("KITTY_WINDOW_ID")),
        TerminalCapability(type=TerminalType.KITTY, supports_kitty_protocol=True),
    ),
    (
        _term_program("WezTerm"),
        TerminalCapability(
            type=TerminalType.WEZTERM,
            supports_kitty_protocol=True,
            supports_iterm2_protocol=True,
        ),
    ),
    (
        _term_program("iTerm.app"),
        TerminalCapability(type=TerminalType.ITERM, supports_iterm2_protocol=True),
    ),
    (
        _any(_term_program("konsole"), _marker("KONSOLE_VERSION")),
        TerminalCapability(type=TerminalType.KONSOLE, supports_kitty_protocol=True),
    ),
    (
        _term_program("vscode"),
        TerminalCapability(type=TerminalType.VSCODE, supports_iterm2_protocol=True),
    ),
    (
        _term_program("WarpTerminal"),
        TerminalCapability(type=TerminalType.WARP, supports_kitty_protocol=True),
    ),
]

STANDARD_TERMINAL = TerminalCapability()


def detect_terminal(env: Mapping[str, str] | None = None) -> TerminalCapability:
    """Detect the terminal from an environment snapshot (default: ``os.environ``)."""
    if env is None:
        env = os.environ
    for matches, capability in TERMINAL_RULES:
        if matches(env):
            return capability
    return STANDARD_TERMINAL


def get_terminal_name(env: Mapping[str, str] | None = None) -> str:
    return detect_terminal(env).type.value
