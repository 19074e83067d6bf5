# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Access to the system clipboard for image payloads."""

from __future__ import annotations

__all__ = [
    "Clipboard",
    "ClipboardError",
    "ClipboardUnavailableError",
    "SubprocessClipboard",
    "system_clipboard",
]

import collections.abc as cabc
import logging
import os
import shutil
import subprocess
import sys
import typing as t

LOGGER = logging.getLogger(__name__)

PNG_MIMETYPE = "image/png"


class ClipboardError(RuntimeError):
    """The clipboard rejected the written data."""


class ClipboardUnavailableError(ClipboardError):
    """There is no way to put images on the system clipboard."""


@t.runtime_checkable
class Clipboard(t.Protocol):
    """A sink for clipboard payloads."""

    def write_image(self, data: bytes, mimetype: str = PNG_MIMETYPE) -> None:
        """Replace the clipboard contents with an image."""


def _wayland_command(mimetype: str) -> list[str]:
    return ["wl-copy", "--type", mimetype]


def _x11_command(mimetype: str) -> list[str]:
    return ["xclip", "-selection", "clipboard", "-t", mimetype, "-i"]


def _macos_command(mimetype: str) -> list[str]:
    del mimetype
    return [
        "osascript",
        "-e",
        "set the clipboard to"
        " (read (POSIX file \"/dev/stdin\") as «class PNGf»)",
    ]


class SubprocessClipboard:
    """Write to the clipboard using an external command line tool.

    Parameters
    ----------
    command
        A callable that returns the command line for a given MIME type.
    timeout
        Seconds to wait for the tool before giving up.
    """

    def __init__(
        self,
        command: cabc.Callable[[str], list[str]],
        *,
        timeout: float = 10,
    ) -> None:
        self.command = command
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.command(PNG_MIMETYPE)[0]!r}>"

    def write_image(self, data: bytes, mimetype: str = PNG_MIMETYPE) -> None:
        cmd = self.command(mimetype)
        LOGGER.debug("Writing %d bytes to clipboard via %s", len(data), cmd)
        try:
            proc = subprocess.run(
                cmd,
                input=data,
                capture_output=True,
                check=False,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise ClipboardUnavailableError(
                f"Clipboard tool not found: {cmd[0]}"
            ) from None
        except subprocess.TimeoutExpired as err:
            raise ClipboardError(
                f"Clipboard tool timed out after {self.timeout}s"
            ) from err

        if proc.returncode != 0:
            stderr = proc.stderr.decode("utf-8", errors="replace").strip()
            raise ClipboardError(
                f"{cmd[0]} exited with status {proc.returncode}: {stderr}"
            )


def system_clipboard() -> Clipboard:
    """Find a usable clipboard backend for the current system.

    Raises
    ------
    ClipboardUnavailableError
        If no supported clipboard tool is installed.
    """
    candidates: list[tuple[str, cabc.Callable[[str], list[str]]]] = []
    if sys.platform == "darwin":
        candidates.append(("osascript", _macos_command))
    if os.getenv("WAYLAND_DISPLAY"):
        candidates.append(("wl-copy", _wayland_command))
    candidates.append(("xclip", _x11_command))

    for exe, command in candidates:
        if shutil.which(exe):
            return SubprocessClipboard(command)
    raise ClipboardUnavailableError(
        "No clipboard tool found, tried: "
        + ", ".join(exe for exe, _ in candidates)
    )
