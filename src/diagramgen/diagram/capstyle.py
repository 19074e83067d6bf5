# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""The color palette and the light and dark themes used by all layouts."""

from __future__ import annotations

__all__ = [
    "COLORS",
    "RGB",
    "THEMES",
    "Quadrant",
    "Theme",
    "resolve_theme",
]

import dataclasses
import functools
import logging
import typing as t

LOGGER = logging.getLogger(__name__)


class RGB(t.NamedTuple):
    """A color.

    Each color component (red, green, blue) is an integer in the range
    of 0..255 (inclusive). The alpha channel is a float between 0.0 and
    1.0 (inclusive). If it is 1, then the ``str()`` form does not
    include transparency information.
    """

    r: int = 0
    g: int = 0
    b: int = 0
    a: float = 1.0

    def __str__(self) -> str:
        return "#" + self.tohex()

    def tohex(self) -> str:
        assert all(0 <= n <= 255 for n in self[:3])
        assert 0.0 <= self.a <= 1.0
        if self.a >= 1.0:
            return f"{self.r:02X}{self.g:02X}{self.b:02X}"
        return f"{self.r:02X}{self.g:02X}{self.b:02X}{int(self.a * 255):02X}"

    @property
    def rgb(self) -> tuple[int, int, int]:
        """The color without its alpha channel, e.g. for Pillow."""
        return (self.r, self.g, self.b)

    @classmethod
    def fromhex(cls, hexstring: str) -> RGB:
        """Create an RGB from a hexadecimal string.

        The string can have 3, 6 or 8 hexadecimal characters. In the
        cases of 3 and 6 characters, the alpha channel is set to 1.0
        (fully opaque).
        """
        hs = hexstring.removeprefix("#")
        alpha = 1.0
        if len(hs) == 3:
            r, g, b = (int(x * 2, base=16) for x in hs)
            return cls(r, g, b, alpha)

        if len(hs) == 8:
            hs, alpha = hs[:6], int(hs[6:], base=16) / 255
        if len(hs) == 6:
            r, g, b = (int(hs[i : i + 2], base=16) for i in range(0, 6, 2))
            return cls(r, g, b, alpha)

        raise ValueError(
            "Invalid length of hex string, expected 3, 6 or 8 characters"
        )


#: The named colors that the themes are composed of.
COLORS: dict[str, RGB] = {
    "white": RGB(255, 255, 255),
    "slate_50": RGB.fromhex("f8fafc"),
    "slate_100": RGB.fromhex("f1f5f9"),
    "slate_200": RGB.fromhex("e2e8f0"),
    "slate_300": RGB.fromhex("cbd5e1"),
    "slate_400": RGB.fromhex("94a3b8"),
    "slate_500": RGB.fromhex("64748b"),
    "slate_600": RGB.fromhex("475569"),
    "slate_700": RGB.fromhex("334155"),
    "slate_800": RGB.fromhex("1e293b"),
    "slate_900": RGB.fromhex("0f172a"),
    "blue_50": RGB.fromhex("eff6ff"),
    "blue_400": RGB.fromhex("60a5fa"),
    "blue_500": RGB.fromhex("3b82f6"),
    "blue_600": RGB.fromhex("2563eb"),
    "blue_800": RGB.fromhex("1e40af"),
    "blue_900": RGB.fromhex("1e3a8a"),
    "blue_950": RGB.fromhex("172554"),
    "emerald_50": RGB.fromhex("ecfdf5"),
    "emerald_500": RGB.fromhex("10b981"),
    "emerald_600": RGB.fromhex("059669"),
    "emerald_900": RGB.fromhex("064e3b"),
    "red_50": RGB.fromhex("fef2f2"),
    "red_500": RGB.fromhex("ef4444"),
    "red_600": RGB.fromhex("dc2626"),
    "red_900": RGB.fromhex("7f1d1d"),
    "amber_50": RGB.fromhex("fffbeb"),
    "amber_500": RGB.fromhex("f59e0b"),
    "amber_600": RGB.fromhex("d97706"),
    "amber_900": RGB.fromhex("78350f"),
    "violet_500": RGB.fromhex("8b5cf6"),
    "violet_600": RGB.fromhex("7c3aed"),
    "pink_500": RGB.fromhex("ec4899"),
    "pink_900": RGB.fromhex("831843"),
    "cyan_500": RGB.fromhex("06b6d4"),
}

BRANCH_COLORS = (
    COLORS["blue_500"],
    COLORS["emerald_500"],
    COLORS["amber_500"],
    COLORS["violet_500"],
    COLORS["red_500"],
    COLORS["cyan_500"],
)
"""The accent palette that mind map branches cycle through."""


class Quadrant(t.NamedTuple):
    """Colors of one SWOT quadrant."""

    fill: RGB
    fill_opacity: float
    accent: RGB


@dataclasses.dataclass(frozen=True)
class Theme:
    """A concrete set of colors consumed by the layout algorithms."""

    dark: bool
    background: RGB
    surface: RGB
    """Fill of boxes, cards and table cells."""
    surface_alt: RGB
    """Fill of box headers and alternating table rows."""
    border: RGB
    stroke: RGB
    """Strong strokes, like a fishbone's spine."""
    stroke_muted: RGB
    connector: RGB
    grid: RGB
    axis: RGB
    text_title: RGB
    text_heading: RGB
    text_body: RGB
    text_muted: RGB
    accents: t.Mapping[str, RGB]
    branch_colors: tuple[RGB, ...] = BRANCH_COLORS
    quadrants: t.Mapping[str, Quadrant] = dataclasses.field(
        default_factory=dict
    )

    def accent(self, name: str) -> RGB:
        """Look up a named accent color."""
        return self.accents[name]

    def branch_color(self, index: int) -> RGB:
        """Return the branch accent for ``index``, cycling the palette."""
        return self.branch_colors[index % len(self.branch_colors)]


_ACCENTS_COMMON = {
    "bar": COLORS["blue_500"],
    "cumulative": COLORS["red_500"],
    "radar_fill": COLORS["violet_500"],
    "radar_stroke": COLORS["violet_600"],
    "timeline_dot": COLORS["blue_500"],
    "center_fill": COLORS["blue_800"],
    "center_text": COLORS["white"],
    "mindmap_fill": COLORS["pink_500"],
    "mindmap_stroke": COLORS["pink_900"],
}

#: The two themes, keyed by whether they are dark.
THEMES: dict[bool, Theme] = {
    False: Theme(
        dark=False,
        background=COLORS["white"],
        surface=COLORS["white"],
        surface_alt=COLORS["slate_100"],
        border=COLORS["slate_200"],
        stroke=COLORS["slate_700"],
        stroke_muted=COLORS["slate_600"],
        connector=COLORS["slate_400"],
        grid=COLORS["slate_200"],
        axis=COLORS["slate_300"],
        text_title=COLORS["slate_800"],
        text_heading=COLORS["slate_900"],
        text_body=COLORS["slate_700"],
        text_muted=COLORS["slate_500"],
        accents={
            **_ACCENTS_COMMON,
            "center_stroke": COLORS["blue_950"],
            "head_fill": COLORS["blue_50"],
            "head_stroke": COLORS["blue_600"],
            "head_text": COLORS["blue_900"],
            "ring_fill": COLORS["slate_50"],
            "row_odd": COLORS["slate_50"],
        },
        quadrants={
            "strengths": Quadrant(
                COLORS["emerald_50"], 1.0, COLORS["emerald_600"]
            ),
            "weaknesses": Quadrant(COLORS["red_50"], 1.0, COLORS["red_600"]),
            "opportunities": Quadrant(
                COLORS["blue_50"], 1.0, COLORS["blue_600"]
            ),
            "threats": Quadrant(COLORS["amber_50"], 1.0, COLORS["amber_600"]),
        },
    ),
    True: Theme(
        dark=True,
        background=COLORS["slate_900"],
        surface=COLORS["slate_800"],
        surface_alt=COLORS["slate_700"],
        border=COLORS["slate_600"],
        stroke=COLORS["slate_400"],
        stroke_muted=COLORS["slate_500"],
        connector=COLORS["slate_500"],
        grid=COLORS["slate_700"],
        axis=COLORS["slate_600"],
        text_title=COLORS["slate_200"],
        text_heading=COLORS["slate_100"],
        text_body=COLORS["slate_300"],
        text_muted=COLORS["slate_400"],
        accents={
            **_ACCENTS_COMMON,
            "center_stroke": COLORS["blue_400"],
            "head_fill": COLORS["blue_800"],
            "head_stroke": COLORS["blue_500"],
            "head_text": COLORS["white"],
            "ring_fill": RGB(0, 0, 0, 0.0),
            "row_odd": COLORS["slate_900"],
        },
        quadrants={
            "strengths": Quadrant(
                COLORS["emerald_900"], 0.3, COLORS["emerald_600"]
            ),
            "weaknesses": Quadrant(COLORS["red_900"], 0.3, COLORS["red_600"]),
            "opportunities": Quadrant(
                COLORS["blue_900"], 0.3, COLORS["blue_600"]
            ),
            "threats": Quadrant(
                COLORS["amber_900"], 0.3, COLORS["amber_600"]
            ),
        },
    ),
}


@functools.cache
def resolve_theme(is_dark: bool) -> Theme:
    """Return the theme for light or dark mode."""
    return THEMES[bool(is_dark)]
