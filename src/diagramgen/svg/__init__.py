# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Presentation of scenes as self-contained SVG documents."""

from __future__ import annotations

__all__ = ["Drawing", "svg_attributes", "to_svg"]

import typing as t

from diagramgen import diagram

from .drawing import Drawing, svg_attributes


def to_svg(scene: diagram.Scene, **kw: t.Any) -> str:
    """Serialize a scene to an SVG string.

    Keyword arguments are passed on to :class:`Drawing`.
    """
    return Drawing(scene, **kw).to_string()
