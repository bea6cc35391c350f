"""Tests for terminal detection and inline image protocols."""

from __future__ import annotations

import base64
import io
import math

import pytest

from codex_wrapped.models.terminal import TerminalCapability, TerminalType
from codex_wrapped.terminal.detect import detect_terminal, get_terminal_name
from codex_wrapped.terminal.display import (
    KITTY_CHUNK_SIZE,
    display_in_terminal,
    iterm2_frame,
    kitty_frames,
)

KITTY = TerminalCapability(type=TerminalType.KITTY, supports_kitty_protocol=True)
ITERM = TerminalCapability(type=TerminalType.ITERM, supports_iterm2_protocol=True)
WEZTERM = TerminalCapability(
    type=TerminalType.WEZTERM, supports_kitty_protocol=True, supports_iterm2_protocol=True
)


class TestDetectTerminal:
    @pytest.mark.parametrize(
        ("env", "expected", "kitty", "iterm2"),
        [
            ({"TERM": "xterm-ghostty"}, TerminalType.GHOSTTY, True, False),
            ({"TERM": "xterm-kitty"}, TerminalType.KITTY, True, False),
            ({"KITTY_WINDOW_ID": "1"}, TerminalType.KITTY, True, False),
            ({"TERM_PROGRAM": "WezTerm"}, TerminalType.WEZTERM, True, True),
            ({"TERM_PROGRAM": "iTerm.app"}, TerminalType.ITERM, False, True),
            ({"TERM_PROGRAM": "konsole"}, TerminalType.KONSOLE, True, False),
            ({"KONSOLE_VERSION": "230804"}, TerminalType.KONSOLE, True, False),
            ({"TERM_PROGRAM": "vscode"}, TerminalType.VSCODE, False, True),
            ({"TERM_PROGRAM": "WarpTerminal"}, TerminalType.WARP, True, False),
            ({"TERM": "xterm-256color"}, TerminalType.STANDARD, False, False),
            ({}, TerminalType.STANDARD, False, False),
        ],
    )
    def test_families(
        self, env: dict[str, str], expected: TerminalType, kitty: bool, iterm2: bool
    ) -> None:
        capability = detect_terminal(env)
        assert capability.type == expected
        assert capability.supports_kitty_protocol is kitty
        assert capability.supports_iterm2_protocol is iterm2

    def test_first_match_wins(self) -> None:
        env = {"TERM": "xterm-ghostty", "TERM_PROGRAM": "iTerm.app", "KITTY_WINDOW_ID": "3"}
        assert detect_terminal(env).type == TerminalType.GHOSTTY

    def test_term_outranks_term_program(self) -> None:
        env = {"TERM": "xterm-kitty", "TERM_PROGRAM": "vscode"}
        assert detect_terminal(env).type == TerminalType.KITTY

    def test_empty_marker_is_not_present(self) -> None:
        assert detect_terminal({"KITTY_WINDOW_ID": ""}).type == TerminalType.STANDARD

    def test_defaults_to_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("TERM", "KITTY_WINDOW_ID", "KONSOLE_VERSION"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("TERM_PROGRAM", "iTerm.app")
        assert detect_terminal().type == TerminalType.ITERM
        assert get_terminal_name() == "iterm"

    def test_get_terminal_name(self) -> None:
        assert get_terminal_name({"TERM_PROGRAM": "WezTerm"}) == "wezterm"


class TestKittyProtocol:
    def test_empty_payload_is_single_final_frame(self) -> None:
        assert kitty_frames(b"") == ["\x1b_Ga=T,f=100,m=0;\x1b\\"]

    def test_small_payload_single_frame(self) -> None:
        frames = kitty_frames(b"png")
        assert frames == [f"\x1b_Ga=T,f=100,m=0;{base64.b64encode(b'png').decode()}\x1b\\"]

    @pytest.mark.parametrize("size", [3072, 3073, 6144, 10_000])
    def test_chunk_count(self, size: int) -> None:
        payload = bytes(range(256)) * (size // 256) + bytes(size % 256)
        encoded_length = len(base64.b64encode(payload))
        frames = kitty_frames(payload)
        assert len(frames) == math.ceil(encoded_length / KITTY_CHUNK_SIZE)

    def test_multi_chunk_frames(self) -> None:
        payload = b"\x89PNG" * 2000
        encoded = base64.b64encode(payload).decode()
        frames = kitty_frames(payload)

        assert len(frames) == 3
        assert frames[0].startswith("\x1b_Ga=T,f=100,m=1;")
        assert frames[1].startswith("\x1b_Gm=1;")
        assert frames[2].startswith("\x1b_Gm=0;")
        assert all(frame.endswith("\x1b\\") for frame in frames)

        body = "".join(frame.split(";", 1)[1].removesuffix("\x1b\\") for frame in frames)
        assert body == encoded
        assert len(frames[0].split(";", 1)[1].removesuffix("\x1b\\")) == KITTY_CHUNK_SIZE


class TestITerm2Protocol:
    def test_single_osc_frame(self) -> None:
        png = b"\x89PNG\r\n"
        frame = iterm2_frame(png)
        name = base64.b64encode(b"codex-wrapped.png").decode()
        data = base64.b64encode(png).decode()
        assert frame == f"\x1b]1337;File=name={name};size={len(png)};inline=1:{data}\x07"


class TestDisplayInTerminal:
    def test_kitty_output_ends_with_newline(self) -> None:
        out = io.StringIO()
        assert display_in_terminal(b"", KITTY, out) is True
        assert out.getvalue() == "\x1b_Ga=T,f=100,m=0;\x1b\\\n"

    def test_iterm2_output(self) -> None:
        out = io.StringIO()
        assert display_in_terminal(b"abc", ITERM, out) is True
        assert out.getvalue() == iterm2_frame(b"abc") + "\n"

    def test_kitty_preferred_when_both_supported(self) -> None:
        out = io.StringIO()
        assert display_in_terminal(b"abc", WEZTERM, out) is True
        assert out.getvalue().startswith("\x1b_G")

    def test_unsupported_writes_nothing(self) -> None:
        out = io.StringIO()
        assert display_in_terminal(b"abc", TerminalCapability(), out) is False
        assert out.getvalue() == ""

    def test_write_failure_returns_false(self) -> None:
        class BrokenStream(io.StringIO):
            def write(self, _s: str) -> int:
                raise OSError("broken pipe")

        assert display_in_terminal(b"abc", KITTY, BrokenStream()) is False

    def test_defaults_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert display_in_terminal(b"", ITERM) is True
        assert capsys.readouterr().out.startswith("\x1b]1337;File=")
