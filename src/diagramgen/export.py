# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Raster export of rendered diagrams.

Every export runs through an :class:`ExportJob`, which moves through
the states of :class:`ExportState`:

1. The intrinsic size of the surface is resolved, preferring the
   ``viewBox``, then absolute ``width``/``height`` attributes and
   finally the bounding box of the drawn elements.
2. The live SVG tree is cloned, its size is multiplied by the export
   scale and an opaque background in the theme's color is inserted.
3. The clone is serialized into a standalone document.
4. The document is decoded with cairosvg and composited onto a bitmap
   that was filled with the background color beforehand. This step
   runs in a worker thread, as does writing the finished image to the
   clipboard or a file.

The following environment variables change the export scale:

DIAGRAMGEN_CLIPBOARD_SCALE
    Scale factor for images copied to the clipboard. Defaults to 2.

DIAGRAMGEN_DOWNLOAD_SCALE
    Scale factor for images saved as files. Defaults to 3.

Values that are not positive numbers are ignored with a warning.
"""

from __future__ import annotations

__all__ = [
    "ClipboardError",
    "ClipboardUnavailableError",
    "DecodeError",
    "Download",
    "ExportError",
    "ExportJob",
    "ExportState",
    "IntrinsicSizeError",
    "ViewBox",
    "clipboard_scale",
    "download_scale",
    "encode_png",
    "export_to_clipboard",
    "export_to_file",
    "make_filename",
    "prepare_for_export",
    "rasterize",
    "resolve_intrinsic_size",
    "scaled_size",
    "serialize",
    "to_data_uri",
]

import asyncio
import base64
import copy
import enum
import io
import logging
import math
import os
import pathlib
import time
import typing as t

import platformdirs
from lxml import etree
from PIL import Image

from diagramgen import diagram, helpers, records
from diagramgen.clipboard import (
    Clipboard,
    ClipboardError,
    ClipboardUnavailableError,
    system_clipboard,
)

if t.TYPE_CHECKING:
    from diagramgen.render import DiagramSurface

LOGGER = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
PNG_PREAMBLE = "data:image/png;base64,"


class ExportError(RuntimeError):
    """Base class for errors while exporting a diagram."""


class IntrinsicSizeError(ExportError):
    """The surface has no usable size."""


class DecodeError(ExportError):
    """The serialized diagram could not be decoded into an image."""


class ExportState(enum.Enum):
    IDLE = enum.auto()
    SIZE_RESOLVED = enum.auto()
    CLONED_AND_SCALED = enum.auto()
    SERIALIZED = enum.auto()
    RASTERIZING = enum.auto()
    COMPLETE = enum.auto()
    FAILED = enum.auto()


class ViewBox(t.NamedTuple):
    x: float
    y: float
    width: float
    height: float


class Extents(t.NamedTuple):
    x_min: float
    x_max: float
    y_min: float
    y_max: float


class Download(t.NamedTuple):
    path: pathlib.Path
    data_uri: str


def _env_scale(envvar: str, default: float) -> float:
    value = os.getenv(envvar)
    if not value:
        return default
    try:
        scale = float(value)
    except ValueError:
        scale = 0.0
    if not 0 < scale < math.inf:
        LOGGER.warning(
            "Ignoring invalid %s=%r, using %g", envvar, value, default
        )
        return default
    return scale


def clipboard_scale() -> float:
    return _env_scale("DIAGRAMGEN_CLIPBOARD_SCALE", 2)


def download_scale() -> float:
    return _env_scale("DIAGRAMGEN_DOWNLOAD_SCALE", 3)


def _absolute_length(value: str | None) -> float | None:
    if not value:
        return None
    value = value.strip()
    if value.endswith("%"):
        return None
    value = value.removesuffix("px")
    try:
        length = float(value)
    except ValueError:
        return None
    if length <= 0:
        return None
    return length


def _circle_extents(element: etree._Element) -> Extents:
    cx = float(element.get("cx", 0))
    cy = float(element.get("cy", 0))
    r = float(element.get("r", 0))
    return Extents(cx - r, cx + r, cy - r, cy + r)


def _ellipse_extents(element: etree._Element) -> Extents:
    cx = float(element.get("cx", 0))
    cy = float(element.get("cy", 0))
    rx = float(element.get("rx", 0))
    ry = float(element.get("ry", 0))
    return Extents(cx - rx, cx + rx, cy - ry, cy + ry)


def _box_extents(element: etree._Element) -> Extents:
    """Compute extents for elements with x, y, width and height."""
    x = float(element.get("x", 0))
    y = float(element.get("y", 0))
    width = float(element.get("width", 0))
    height = float(element.get("height", 0))
    return Extents(x, x + width, y, y + height)


def _line_extents(element: etree._Element) -> Extents:
    x1 = float(element.get("x1", 0))
    y1 = float(element.get("y1", 0))
    x2 = float(element.get("x2", 0))
    y2 = float(element.get("y2", 0))
    return Extents(min(x1, x2), max(x1, x2), min(y1, y2), max(y1, y2))


def _polyline_extents(element: etree._Element) -> Extents:
    points = [
        tuple(map(float, p.split(",")))
        for p in element.get("points", "").strip().split()
    ]
    if not points:
        raise ValueError("No points")
    x_coords, y_coords = zip(*points)
    return Extents(min(x_coords), max(x_coords), min(y_coords), max(y_coords))


def _text_extents(element: etree._Element) -> Extents:
    x = element.get("x")
    y = element.get("y")
    if x is None or y is None:
        tspan = element.find(f"{{{SVG_NS}}}tspan")
        if tspan is None:
            tspan = element.find("tspan")
        if tspan is not None:
            x = tspan.get("x", x)
            y = tspan.get("y", y)
    left = float((x or "0").split()[0])
    baseline = float((y or "0").split()[0])
    text = "".join(element.itertext())
    font_size = (
        _absolute_length(element.get("font-size"))
        or helpers.DEFAULT_FONT_SIZE
    )
    width = len(text) * font_size * 0.6
    return Extents(left, left + width, baseline - font_size, baseline)


EXTENT_FUNCTIONS: dict[str, t.Callable[[etree._Element], Extents]] = {
    "circle": _circle_extents,
    "ellipse": _ellipse_extents,
    "image": _box_extents,
    "line": _line_extents,
    "polygon": _polyline_extents,
    "polyline": _polyline_extents,
    "rect": _box_extents,
    "text": _text_extents,
    "use": _box_extents,
}


def _bounding_box(root: etree._Element) -> ViewBox:
    x_min = y_min = float("inf")
    x_max = y_max = float("-inf")
    for element in root.iter():
        if not isinstance(element.tag, str) or element.get("transform"):
            continue
        func = EXTENT_FUNCTIONS.get(etree.QName(element).localname)
        if func is None:
            continue
        try:
            extents = func(element)
        except ValueError:
            continue
        x_min = min(x_min, extents.x_min)
        y_min = min(y_min, extents.y_min)
        x_max = max(x_max, extents.x_max)
        y_max = max(y_max, extents.y_max)

    if any(abs(i) == float("inf") for i in (x_min, x_max, y_min, y_max)):
        raise IntrinsicSizeError("Surface contains no measurable elements")
    return ViewBox(x_min, y_min, x_max - x_min, y_max - y_min)


def resolve_intrinsic_size(root: etree._Element) -> ViewBox:
    """Determine the logical area of an SVG tree.

    The size is looked up in this order:

    1. The ``viewBox``, if its width and height are positive.
    2. The ``width`` and ``height`` attributes, unless they are
       relative (percentages) or missing.
    3. The bounding box of all drawn elements.

    Raises
    ------
    IntrinsicSizeError
        If none of these yields a non-empty area.
    """
    viewbox = root.get("viewBox")
    if viewbox:
        try:
            x, y, w, h = map(float, viewbox.replace(",", " ").split())
        except ValueError:
            LOGGER.debug("Ignoring malformed viewBox %r", viewbox)
        else:
            if w > 0 and h > 0:
                return ViewBox(x, y, w, h)

    width = _absolute_length(root.get("width"))
    height = _absolute_length(root.get("height"))
    if width and height:
        return ViewBox(0, 0, width, height)

    box = _bounding_box(root)
    if box.width <= 0 or box.height <= 0:
        raise IntrinsicSizeError(
            f"Surface has no area: {box.width:g}x{box.height:g}"
        )
    return box


def scaled_size(viewbox: ViewBox, scale: float) -> tuple[int, int]:
    return (round(viewbox.width * scale), round(viewbox.height * scale))


def prepare_for_export(
    root: etree._Element,
    viewbox: ViewBox,
    scale: float,
    background: diagram.RGB,
) -> etree._Element:
    """Create a scaled copy of ``root`` with an opaque background.

    The passed tree is not modified.
    """
    clone = copy.deepcopy(root)
    width, height = scaled_size(viewbox, scale)
    clone.set("viewBox", " ".join(f"{i:g}" for i in viewbox))
    clone.set("width", str(width))
    clone.set("height", str(height))

    ns = clone.nsmap.get(None, SVG_NS)
    background_elem = etree.Element(
        f"{{{ns}}}rect",
        x=f"{viewbox.x:g}",
        y=f"{viewbox.y:g}",
        width=f"{viewbox.width:g}",
        height=f"{viewbox.height:g}",
        fill="#" + diagram.RGB(*background.rgb).tohex(),
    )
    background_elem.set("class", "export-background")
    clone.insert(0, background_elem)
    return clone


def serialize(root: etree._Element) -> bytes:
    return etree.tostring(root, xml_declaration=True, encoding="utf-8")


def _decode(document: bytes, size: tuple[int, int]) -> Image.Image:
    try:
        import cairosvg  # noqa: PLC0415
    except OSError as error:
        raise DecodeError(
            "Cannot import cairosvg. You are likely missing the cairo"
            " shared libraries."
        ) from error

    width, height = size
    try:
        png = cairosvg.svg2png(
            bytestring=document, output_width=width, output_height=height
        )
        image = Image.open(io.BytesIO(png))
        image.load()
    except Exception as err:
        raise DecodeError(f"Cannot decode diagram: {err}") from err
    return image


def _composite(
    document: bytes, size: tuple[int, int], background: diagram.RGB
) -> Image.Image:
    decoded = _decode(document, size).convert("RGBA")
    if decoded.size != size:
        decoded = decoded.resize(size)
    bitmap = Image.new("RGB", size, background.rgb)
    bitmap.paste(decoded, (0, 0), decoded)
    return bitmap


async def rasterize(
    document: bytes, size: tuple[int, int], background: diagram.RGB
) -> Image.Image:
    """Decode a serialized SVG document into an opaque bitmap.

    The bitmap is filled with ``background`` before the decoded image
    is drawn onto it, so that no transparency remains.

    Raises
    ------
    DecodeError
        If the document could not be decoded.
    """
    return await asyncio.to_thread(_composite, document, size, background)


def encode_png(bitmap: Image.Image) -> bytes:
    buffer = io.BytesIO()
    bitmap.save(buffer, format="PNG")
    return buffer.getvalue()


def to_data_uri(png: bytes) -> str:
    b64 = base64.standard_b64encode(png)
    return "".join((PNG_PREAMBLE, b64.decode("ascii")))


def make_filename(
    diagram_type: str | records.DiagramType, timestamp: float | None = None
) -> str:
    """Derive a download file name from the diagram type and time.

    The name has the form ``{type}_{milliseconds since epoch}.png``.
    """
    if isinstance(diagram_type, records.DiagramType):
        diagram_type = diagram_type.value
    if timestamp is None:
        timestamp = time.time()
    name = "_".join(diagram_type.lower().split()) or "diagram"
    return helpers.sanitize_filename(f"{name}_{int(timestamp * 1000)}.png")


class ExportJob:
    """A single run of the export pipeline for one surface.

    Jobs share no state with each other, so several of them may run
    concurrently, even for the same surface.
    """

    def __init__(
        self,
        surface: DiagramSurface,
        *,
        scale: float,
        is_dark: bool = False,
        theme: diagram.Theme | None = None,
    ) -> None:
        if theme is None:
            theme = diagram.resolve_theme(is_dark)
        self.surface = surface
        self.scale = scale
        self.background = theme.background
        self.state = ExportState.IDLE
        self.size: tuple[int, int] | None = None
        self.bitmap: Image.Image | None = None
        self.error: Exception | None = None

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} {self.surface.diagram_type or 'empty'}"
            f" x{self.scale:g} {self.state.name}>"
        )

    def _advance(self, state: ExportState) -> None:
        LOGGER.debug("%r -> %s", self, state.name)
        self.state = state

    def fail(self, error: Exception) -> None:
        self.error = error
        self._advance(ExportState.FAILED)

    async def run(self) -> Image.Image:
        """Run the pipeline and return the finished bitmap.

        Raises
        ------
        ExportError
            If any step fails. The job is left in the ``FAILED`` state.
        """
        if self.state is not ExportState.IDLE:
            raise RuntimeError(f"Export job already ran: {self!r}")

        try:
            viewbox = resolve_intrinsic_size(self.surface.tree)
            self.size = scaled_size(viewbox, self.scale)
            self._advance(ExportState.SIZE_RESOLVED)

            clone = prepare_for_export(
                self.surface.tree, viewbox, self.scale, self.background
            )
            self._advance(ExportState.CLONED_AND_SCALED)

            document = serialize(clone)
            self._advance(ExportState.SERIALIZED)

            self._advance(ExportState.RASTERIZING)
            self.bitmap = await rasterize(
                document, self.size, self.background
            )
        except ExportError as err:
            self.fail(err)
            raise

        self._advance(ExportState.COMPLETE)
        return self.bitmap


async def export_to_clipboard(
    surface: DiagramSurface,
    is_dark: bool = False,
    clipboard: Clipboard | None = None,
) -> bool:
    """Copy the diagram to the clipboard as a PNG image.

    Parameters
    ----------
    surface
        The rendered diagram.
    is_dark
        Whether the diagram was rendered in dark mode. This determines
        the background color of the image.
    clipboard
        The clipboard to write to. Defaults to the system clipboard.

    Returns
    -------
    bool
        Whether the image was copied. Failures are logged.
    """
    job = ExportJob(surface, scale=clipboard_scale(), is_dark=is_dark)
    try:
        bitmap = await job.run()
        if clipboard is None:
            clipboard = system_clipboard()
        await asyncio.to_thread(clipboard.write_image, encode_png(bitmap))
    except (ExportError, ClipboardError) as err:
        if job.state is not ExportState.FAILED:
            job.fail(err)
        LOGGER.error("Cannot copy diagram to the clipboard", exc_info=True)
        return False
    return True


async def export_to_file(
    surface: DiagramSurface,
    diagram_type: str | records.DiagramType,
    is_dark: bool = False,
    directory: str | os.PathLike[str] | None = None,
) -> Download:
    """Save the diagram as a PNG file.

    Parameters
    ----------
    surface
        The rendered diagram.
    diagram_type
        The diagram type or its label, used for the file name.
    is_dark
        Whether the diagram was rendered in dark mode.
    directory
        Where to save the file. Defaults to the user's downloads
        directory.

    Returns
    -------
    Download
        The path of the written file and the image as data URI.

    Raises
    ------
    ExportError
        If the image could not be created or written.
    """
    if directory is None:
        directory = platformdirs.user_downloads_path()
    job = ExportJob(surface, scale=download_scale(), is_dark=is_dark)
    try:
        png = encode_png(await job.run())
    except ExportError:
        LOGGER.error("Cannot export diagram", exc_info=True)
        raise

    path = pathlib.Path(directory, make_filename(diagram_type))
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        await asyncio.to_thread(path.write_bytes, png)
    except OSError as err:
        LOGGER.error("Cannot write %s", path, exc_info=True)
        raise ExportError(f"Cannot write {path}: {err}") from err
    LOGGER.info("Saved %s", path)
    return Download(path, to_data_uri(png))
