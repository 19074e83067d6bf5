# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Miscellaneous utility functions used throughout the modules."""

from __future__ import annotations

__all__ = [
    "DEFAULT_FONT",
    "DEFAULT_FONT_SIZE",
    "Measure",
    "center_offsets",
    "ellipsize",
    "estimate_line_count",
    "extent_func",
    "load_font",
    "make_measure",
    "sanitize_filename",
    "word_wrap",
]

import collections.abc as cabc
import functools
import logging
import math
import os
import re

from PIL import ImageFont

LOGGER = logging.getLogger(__name__)

DEFAULT_FONT = os.getenv("DIAGRAMGEN_FONT", "Inter.ttf")
"""Font file used to measure text; falls back to Pillow's bundled font."""
DEFAULT_FONT_SIZE = int(os.getenv("DIAGRAMGEN_FONT_SIZE", "12"))
FONT_FAMILY = "'Inter', 'Segoe UI', Arial, sans-serif"
"""The CSS font stack written into generated SVG documents."""
FALLBACK_FONTS = ("DejaVuSans.ttf", "Arial.ttf", "arial.ttf")
BAD_FILENAMES = frozenset(
    {"AUX", "CON", "NUL", "PRN"}
    | {f"COM{i}" for i in range(1, 10)}
    | {f"LPT{i}" for i in range(1, 10)}
)

Measure = cabc.Callable[[str], float]
"""Callable returning the rendered width of a string in pixels."""


# Text processing and rendering
@functools.lru_cache(maxsize=16)
def load_font(
    fonttype: str, size: int
) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    for name in (
        fonttype,
        fonttype.upper(),
        fonttype.lower(),
        *FALLBACK_FONTS,
    ):
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            pass

    LOGGER.debug("Font %r not found, using Pillow's default font", fonttype)
    return ImageFont.load_default(size)


@functools.lru_cache(maxsize=1024)
def extent_func(
    text: str,
    fonttype: str = DEFAULT_FONT,
    size: int = DEFAULT_FONT_SIZE,
) -> tuple[float, float]:
    """Calculate the display size of the given text.

    Parameters
    ----------
    text
        Text to calculate pixel size on
    fonttype
        The font type / face
    size
        Font size (px)

    Returns
    -------
    width
        The calculated width of the text (px).
    height
        The calculated height of the text (px).
    """
    font = load_font(fonttype, size)
    width = font.getlength(text)
    _, top, _, bottom = font.getbbox(text or " ")
    return (float(width), float(max(bottom - top, size)))


def make_measure(
    size: int = DEFAULT_FONT_SIZE, fonttype: str = DEFAULT_FONT
) -> Measure:
    """Create a width measuring function for the given font parameters."""

    def measure(text: str) -> float:
        return extent_func(text, fonttype, size)[0]

    return measure


def word_wrap(
    text: str | None,
    width: float | int,
    measure: Measure | None = None,
) -> list[str]:
    """Perform greedy word wrapping for proportional fonts.

    Words are accumulated into the current line as long as the measured
    width of the line stays within ``width``. A word that is wider than
    ``width`` on its own is placed on a line by itself without being
    split. Whitespace is collapsed to single spaces.

    Parameters
    ----------
    text
        The text to wrap.
    width
        The width in pixels to wrap to.
    measure
        Function that calculates the rendered width of a string. It must
        use the same font parameters as the text will be drawn with.
        Defaults to the default font at the default size.

    Returns
    -------
    lines
        A list of strings, one for each line, after wrapping. Empty or
        missing input produces an empty list.
    """
    if not text:
        return []
    if measure is None:
        measure = make_measure()

    lines: list[str] = []
    current: list[str] = []
    for word in text.split():
        if current and measure(" ".join((*current, word))) > width:
            lines.append(" ".join(current))
            current = [word]
        else:
            current.append(word)

    if current:
        lines.append(" ".join(current))
    return lines


def center_offsets(
    line_count: int, line_height: float | int
) -> list[float]:
    """Calculate vertical offsets that center lines around an anchor.

    Every line is shifted by ``-(line_count - 1) / 2 * line_height``,
    so that single-line and multi-line labels are both visually
    centered on the anchor point. The offsets always sum up to zero.
    """
    shift = -(line_count - 1) / 2 * line_height
    return [shift + i * line_height for i in range(line_count)]


def ellipsize(
    text: str | None,
    width: float | int,
    measure: Measure | None = None,
    *,
    ellipsis: str = "...",
) -> str:
    """Shorten ``text`` so that it fits into ``width`` pixels.

    If the text has to be shortened, ``ellipsis`` is appended to it.
    """
    if not text:
        return ""
    if measure is None:
        measure = make_measure()
    if measure(text) <= width:
        return text

    cut = len(text)
    while cut > 0 and measure(text[:cut].rstrip() + ellipsis) > width:
        cut -= 1
    return text[:cut].rstrip() + ellipsis


def estimate_line_count(
    text: str | None, width: float | int, char_width: float | int
) -> int:
    """Estimate the number of wrapped lines without measuring glyphs."""
    if not text or width <= 0:
        return 0
    return math.ceil(len(text) * char_width / width)


def sanitize_filename(fname: str) -> str:
    r"""Sanitize the filename.

    This function removes all characters that are illegal in file
    names on Windows operating systems, and prefixes reserved names
    with an underscore.

    Note that this also includes the two common directory separators
    (``/`` and ``\``).
    """
    fname = fname.rstrip(" .")
    fname = re.sub(
        '[\x00-\x1f<>:"/\\\\|?*]',
        lambda m: "-"[ord(m.group(0)) < ord(" ") :],
        fname,
    )
    if fname.split(".")[0].upper() in BAD_FILENAMES:
        fname = f"_{fname}"
    return fname
