"""
Export encoding for finished scans.

Encodes a PixelBuffer into PNG or SVG bytes and builds the names the host
uses to persist them. Nothing here touches the filesystem.
"""

import base64
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import cv2

from pagescan.common.types import PixelBuffer

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("png", "svg")

_INVALID_FILENAME_CHARS = re.compile(r'[/\\:*?"<>|]')


@dataclass
class ExportConfig:
    """Configuration for export naming and format."""

    filename_prefix: str = "scan"
    default_format: str = "png"


@dataclass
class FilenameValidation:
    valid: bool
    message: str


def generate_default_filename(prefix: str = "scan", now: Optional[datetime] = None) -> str:
    """
    Timestamped filename without extension.

    Example:
        >>> generate_default_filename(now=datetime(2026, 1, 12, 9, 51, 23))
        'scan-2026-01-12-095123'
    """
    now = now or datetime.now()
    return f"{prefix}-{now:%Y-%m-%d-%H%M%S}"


def validate_filename(filename: str) -> FilenameValidation:
    """Reject empty names and characters that are invalid on common filesystems."""
    if not filename or not filename.strip():
        return FilenameValidation(False, "Filename cannot be empty")

    match = _INVALID_FILENAME_CHARS.search(filename)
    if match:
        return FilenameValidation(
            False, f"Filename contains invalid character: {match.group(0)}"
        )

    return FilenameValidation(True, "")


def get_file_extension(fmt: str) -> str:
    """File extension with leading dot for an export format."""
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}. Must be one of {SUPPORTED_FORMATS}")
    return f".{fmt}"


def normalize_folder_path(path: str) -> str:
    """
    Normalize a user-entered folder path.

    Trims whitespace, strips leading/trailing slashes and collapses repeated
    slashes, e.g. ``" /Notes//Scans/ "`` -> ``"Notes/Scans"``. An empty
    result means the root folder.
    """
    if not path:
        return ""
    normalized = path.strip().strip("/")
    return re.sub(r"/+", "/", normalized)


def build_export_path(folder: str, filename: str, fmt: str) -> str:
    """Join a folder, a filename and the format's extension."""
    name = f"{filename}{get_file_extension(fmt)}"
    folder = normalize_folder_path(folder)
    return f"{folder}/{name}" if folder else name


def encode_png(buf: PixelBuffer) -> bytes:
    """
    Encode a buffer as PNG, keeping transparency.

    Raises:
        ValueError: If the buffer is empty or encoding fails.
    """
    if buf.width == 0 or buf.height == 0:
        raise ValueError("Cannot encode an empty buffer")

    bgra = cv2.cvtColor(buf.data, cv2.COLOR_RGBA2BGRA)
    ok, encoded = cv2.imencode(".png", bgra)
    if not ok:
        raise ValueError("Failed to create PNG data")

    logger.debug(f"Encoded {buf.width}x{buf.height} PNG ({encoded.size} bytes)")
    return encoded.tobytes()


def encode_svg(buf: PixelBuffer) -> bytes:
    """Encode a buffer as an SVG document embedding the PNG as a data URL."""
    png_data = base64.b64encode(encode_png(buf)).decode("ascii")
    svg = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{buf.width}" '
        f'height="{buf.height}" viewBox="0 0 {buf.width} {buf.height}">\n'
        f'  <image href="data:image/png;base64,{png_data}" '
        f'width="{buf.width}" height="{buf.height}"/>\n'
        "</svg>"
    )
    return svg.encode("utf-8")


def export_buffer(buf: PixelBuffer, fmt: str = "png") -> bytes:
    """Encode a buffer in the requested export format."""
    get_file_extension(fmt)
    if fmt == "svg":
        return encode_svg(buf)
    return encode_png(buf)
