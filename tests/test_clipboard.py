# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import sys

import pytest

from diagramgen import clipboard

from .conftest import FakeClipboard


def python_command(code: str):
    def command(mimetype: str) -> list[str]:
        del mimetype
        return [sys.executable, "-c", code]

    return command


def test_fake_clipboard_satisfies_the_protocol():
    assert isinstance(FakeClipboard(), clipboard.Clipboard)


def test_subprocess_clipboard_pipes_data_to_the_tool():
    board = clipboard.SubprocessClipboard(
        python_command(
            "import sys; assert sys.stdin.buffer.read() == b'PNG'"
        )
    )

    board.write_image(b"PNG")


def test_missing_tool_makes_the_clipboard_unavailable():
    board = clipboard.SubprocessClipboard(
        lambda _: ["diagramgen-no-such-clipboard-tool"]
    )

    with pytest.raises(clipboard.ClipboardUnavailableError):
        board.write_image(b"PNG")


def test_failing_tool_raises_ClipboardError():
    board = clipboard.SubprocessClipboard(
        python_command("import sys; print('denied', file=sys.stderr); 1/0")
    )

    with pytest.raises(clipboard.ClipboardError, match="exited with status"):
        board.write_image(b"PNG")


def test_slow_tool_times_out():
    board = clipboard.SubprocessClipboard(
        python_command("import time; time.sleep(5)"), timeout=0.1
    )

    with pytest.raises(clipboard.ClipboardError, match="timed out"):
        board.write_image(b"PNG")


def test_system_clipboard_without_tools_is_unavailable(monkeypatch):
    monkeypatch.setattr(clipboard.shutil, "which", lambda _: None)

    with pytest.raises(clipboard.ClipboardUnavailableError):
        clipboard.system_clipboard()


def test_system_clipboard_prefers_wayland(monkeypatch):
    monkeypatch.setattr(clipboard.sys, "platform", "linux")
    monkeypatch.setenv("WAYLAND_DISPLAY", "wayland-0")
    monkeypatch.setattr(clipboard.shutil, "which", lambda exe: exe)

    board = clipboard.system_clipboard()

    assert isinstance(board, clipboard.SubprocessClipboard)
    assert board.command("image/png")[0] == "wl-copy"


def test_system_clipboard_falls_back_to_xclip(monkeypatch):
    monkeypatch.setattr(clipboard.sys, "platform", "linux")
    monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)
    monkeypatch.setattr(
        clipboard.shutil, "which", lambda exe: exe if exe == "xclip" else None
    )

    board = clipboard.system_clipboard()

    assert isinstance(board, clipboard.SubprocessClipboard)
    assert board.command("image/png")[:3] == [
        "xclip",
        "-selection",
        "clipboard",
    ]
