"""
Figure rendering helpers.

pyplot keeps global state (current figure, rcParams), so every render in the
process goes through RENDER_LOCK, and every figure is closed after saving.
"""
from __future__ import annotations

import base64
import io
import struct
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import seaborn as sns  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

MEDIA_TYPES = {
    "png": "image/png",
    "svg": "image/svg+xml",
    "pdf": "application/pdf",
}

RENDER_LOCK = threading.Lock()


@dataclass(frozen=True)
class RenderedImage:
    format: str
    media_type: str
    data: bytes
    width_px: Optional[int] = None
    height_px: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "format": self.format,
            "media_type": self.media_type,
            "width_px": self.width_px,
            "height_px": self.height_px,
            "size_bytes": len(self.data),
            "data_base64": base64.b64encode(self.data).decode("ascii"),
        }


@contextmanager
def theme(style: str, context: str, palette: str) -> Iterator[None]:
    """Scoped seaborn theme; rcParams are restored on exit."""
    with sns.axes_style(style), sns.plotting_context(context), sns.color_palette(palette):
        yield


def _png_size(data: bytes) -> tuple[Optional[int], Optional[int]]:
    # IHDR chunk: 8-byte signature, 4-byte length, b"IHDR", then width/height
    if len(data) < 24 or data[12:16] != b"IHDR":
        return None, None
    width, height = struct.unpack(">II", data[16:24])
    return int(width), int(height)


def figure_to_image(fig: Figure, fmt: str = "png", dpi: int = 100) -> RenderedImage:
    """Serialize a figure and close it, whether or not saving succeeds."""
    if fmt not in MEDIA_TYPES:
        raise ValueError(f"Unsupported image format: {fmt}")

    buf = io.BytesIO()
    try:
        fig.savefig(buf, format=fmt, dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)

    data = buf.getvalue()
    width, height = _png_size(data) if fmt == "png" else (None, None)
    return RenderedImage(
        format=fmt,
        media_type=MEDIA_TYPES[fmt],
        data=data,
        width_px=width,
        height_px=height,
    )


def close_all() -> None:
    """Close any figure a failed chart left behind."""
    plt.close("all")
