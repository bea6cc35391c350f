"""Terminal capability models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class TerminalType(StrEnum):
    """Terminal emulators we know how to talk to."""

    GHOSTTY = "ghostty"
    KITTY = "kitty"
    WEZTERM = "wezterm"
    ITERM = "iterm"
    KONSOLE = "konsole"
    VSCODE = "vscode"
    WARP = "warp"
    STANDARD = "standard"


class TerminalCapability(BaseModel):
    """Which inline image protocols the current terminal accepts."""

    model_config = ConfigDict(frozen=True)

    type: TerminalType = TerminalType.STANDARD
    supports_kitty_protocol: bool = False
    supports_iterm2_protocol: bool = False

    @property
    def supports_images(self) -> bool:
        return self.supports_kitty_protocol or self.supports_iterm2_protocol
