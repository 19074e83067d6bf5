# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Module that handles converting scenes to the intermediary JSON format."""

from __future__ import annotations

__all__ = ["SceneJSONEncoder"]

import json

from . import _scene
from ._vector2d import Vector2D
from .capstyle import RGB


class SceneJSONEncoder(json.JSONEncoder):
    """JSON encoder that knows how to handle scenes and their elements."""

    def default(self, o: object) -> object:
        if isinstance(o, _scene.Scene):
            return self.__encode_scene(o)
        if isinstance(o, _scene.Text):
            return self.__encode_text(o)
        if isinstance(
            o,
            (
                _scene.Rect,
                _scene.Line,
                _scene.Circle,
                _scene.Ellipse,
                _scene.Path,
            ),
        ):
            return self.__encode_shape(o)
        return super().default(o)

    @staticmethod
    def __encode_scene(o: _scene.Scene) -> object:
        return {
            "type": o.diagram_type,
            "width": _round(o.width),
            "height": _round(o.height),
            "background": _color(o.background),
            "contents": list(o.elements),
        }

    @staticmethod
    def __encode_text(o: _scene.Text) -> object:
        jsonobj: dict[str, object] = {
            "type": o.JSON_TYPE,
            "x": _round(o.pos.x),
            "y": _round(o.pos.y),
            "lines": list(o.lines),
            "offsets": [_round(i) for i in o.offsets],
            "font_size": o.font_size,
            "fill": _color(o.fill),
            "anchor": o.anchor,
        }
        if o.font_weight != "normal":
            jsonobj["font_weight"] = o.font_weight
        if o.rotate:
            jsonobj["rotate"] = o.rotate
        if o.class_:
            jsonobj["class"] = o.class_
        return jsonobj

    @staticmethod
    def __encode_shape(o: _scene.SceneElement) -> object:
        jsonobj: dict[str, object] = {"type": o.JSON_TYPE}
        for attr in ("pos", "size", "start", "end", "center", "radii"):
            value = getattr(o, attr, None)
            if isinstance(value, Vector2D):
                jsonobj[attr] = [_round(value.x), _round(value.y)]
        for attr in ("radius", "rx", "d"):
            value = getattr(o, attr, None)
            if value:
                jsonobj[attr] = value
        if o.style:
            jsonobj["style"] = {k: _color(v) for k, v in o.style.items()}
        if o.class_:
            jsonobj["class"] = o.class_
        return jsonobj


def _color(value: object) -> object:
    if isinstance(value, RGB):
        return str(value)
    return value


def _round(value: float) -> float:
    return round(value, 2)
