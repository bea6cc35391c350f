"""Terminal capability detection and inline image output."""

from codex_wrapped.terminal.detect import detect_terminal, get_terminal_name
from codex_wrapped.terminal.display import display_in_terminal

__all__ = ["detect_terminal", "display_in_terminal", "get_terminal_name"]
