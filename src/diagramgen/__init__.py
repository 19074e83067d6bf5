# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""The diagramgen package."""

from importlib import metadata

try:
    __version__ = metadata.version("diagramgen")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+unknown"
del metadata

from .records import *
from .render import DiagramSurface as DiagramSurface
from .render import RenderResult as RenderResult
