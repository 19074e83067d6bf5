# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""The immutable scene graph produced by the layout algorithms."""

from __future__ import annotations

__all__ = [
    "Circle",
    "Ellipse",
    "Line",
    "Path",
    "Rect",
    "Scene",
    "SceneElement",
    "Style",
    "Text",
    "make_style",
]

import collections.abc as cabc
import dataclasses
import types
import typing as t

from . import _vector2d
from .capstyle import RGB

StyleValue = t.Union[str, int, float, RGB, None]
Style = t.Mapping[str, StyleValue]


def make_style(**attrs: StyleValue) -> Style:
    """Create a read-only style mapping.

    Keyword names use underscores, which are converted to the hyphens
    used by SVG presentation attributes (``stroke_width`` becomes
    ``stroke-width``). Attributes set to None are dropped.
    """
    return types.MappingProxyType(
        {
            k.replace("_", "-"): v
            for k, v in attrs.items()
            if v is not None
        }
    )


@dataclasses.dataclass(frozen=True)
class Rect:
    pos: _vector2d.Vector2D
    size: _vector2d.Vector2D
    rx: float = 0
    style: Style = dataclasses.field(default_factory=make_style)
    class_: str = ""

    JSON_TYPE: t.ClassVar[str] = "rect"

    @property
    def bottom(self) -> float:
        return self.pos.y + self.size.y


@dataclasses.dataclass(frozen=True)
class Line:
    start: _vector2d.Vector2D
    end: _vector2d.Vector2D
    style: Style = dataclasses.field(default_factory=make_style)
    class_: str = ""

    JSON_TYPE: t.ClassVar[str] = "line"


@dataclasses.dataclass(frozen=True)
class Circle:
    center: _vector2d.Vector2D
    radius: float
    style: Style = dataclasses.field(default_factory=make_style)
    class_: str = ""

    JSON_TYPE: t.ClassVar[str] = "circle"


@dataclasses.dataclass(frozen=True)
class Ellipse:
    center: _vector2d.Vector2D
    radii: _vector2d.Vector2D
    style: Style = dataclasses.field(default_factory=make_style)
    class_: str = ""

    JSON_TYPE: t.ClassVar[str] = "ellipse"


@dataclasses.dataclass(frozen=True)
class Path:
    """An arbitrary shape described by SVG path data."""

    d: str
    style: Style = dataclasses.field(default_factory=make_style)
    class_: str = ""

    JSON_TYPE: t.ClassVar[str] = "path"


@dataclasses.dataclass(frozen=True)
class Text:
    """A block of one or more lines of text.

    ``pos`` is the anchor point of the block. Each line is drawn at the
    anchor's X coordinate and ``pos.y + offsets[i]``, so that callers
    can decide how the block is aligned vertically.
    """

    pos: _vector2d.Vector2D
    lines: tuple[str, ...]
    offsets: tuple[float, ...]
    font_size: float
    fill: RGB
    anchor: t.Literal["start", "middle", "end"] = "start"
    font_weight: str | int = "normal"
    rotate: float = 0
    """Rotation in degrees around the anchor point."""
    baseline_shift: str = "0"
    """Extra vertical shift of every line, in CSS units (e.g. ``0.35em``)."""
    style: Style = dataclasses.field(default_factory=make_style)
    class_: str = ""

    JSON_TYPE: t.ClassVar[str] = "text"

    def __post_init__(self) -> None:
        if len(self.lines) != len(self.offsets):
            raise ValueError(
                f"Got {len(self.lines)} lines but {len(self.offsets)} offsets"
            )

    @property
    def content(self) -> str:
        """The full text with lines joined by spaces."""
        return " ".join(self.lines)


SceneElement = t.Union[Rect, Line, Circle, Ellipse, Path, Text]


@dataclasses.dataclass(frozen=True)
class Scene:
    """A fully positioned drawing, ready for presentation or export.

    Scenes are discarded and rebuilt whenever the source record, theme
    or size changes; nothing in them is ever modified in place.
    """

    width: float
    height: float
    background: RGB | None
    elements: tuple[SceneElement, ...]
    diagram_type: str = ""

    @classmethod
    def empty(cls, diagram_type: str = "") -> Scene:
        """Create a scene that contains nothing."""
        return cls(0, 0, None, (), diagram_type)

    def __bool__(self) -> bool:
        return bool(self.elements)

    def __iter__(self) -> cabc.Iterator[SceneElement]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    @property
    def size(self) -> _vector2d.Vector2D:
        return _vector2d.Vector2D(self.width, self.height)

    def by_class(self, class_: str) -> list[SceneElement]:
        """Return all elements that carry the given class."""
        return [
            i for i in self.elements if class_ in i.class_.split()
        ]
