"""
Export Encoder

Serializes a rendered surface to PNG or JPEG, in memory or as a
`bg-<width>x<height>.<ext>` file next to other exports.
"""

from typing import Optional, Union
from io import BytesIO
from pathlib import Path
import logging
import os
import tempfile

from PIL import Image

JPEG_QUALITY = 0.92

# format name -> (Pillow format, file extension)
EXPORT_FORMATS = {
    'png': ('PNG', 'png'),
    'jpeg': ('JPEG', 'jpg'),
}
FORMAT_ALIASES = {'jpg': 'jpeg'}


class ExportError(Exception):
    """Encoding or writing an export failed; no file was left behind"""


def normalize_format(fmt: str) -> str:
    """
    Canonical export format name.

    Raises:
        ExportError: For formats other than png / jpeg / jpg
    """
    name = str(fmt).lower()
    name = FORMAT_ALIASES.get(name, name)
    if name not in EXPORT_FORMATS:
        raise ExportError(f"Unsupported export format: {fmt!r}")
    return name


def export_filename(width: int, height: int, fmt: str) -> str:
    """File name convention for exports, e.g. bg-1920x1080.jpg"""
    ext = EXPORT_FORMATS[normalize_format(fmt)][1]
    return f"bg-{width}x{height}.{ext}"


def encode(surface: Image.Image, fmt: str = 'png', quality: Optional[float] = None) -> bytes:
    """
    Encode a surface to image bytes.

    Args:
        surface: Rendered RGB surface
        fmt: "png" (lossless) or "jpeg"/"jpg"
        quality: JPEG quality in (0, 1]; defaults to JPEG_QUALITY. Ignored
                 for PNG.

    Returns:
        Encoded file contents

    Raises:
        ExportError: Unknown format or encoder failure
    """
    name = normalize_format(fmt)
    pil_format = EXPORT_FORMATS[name][0]

    options = {}
    if name == 'jpeg':
        quality = JPEG_QUALITY if quality is None else quality
        options['quality'] = max(1, min(100, int(round(quality * 100))))
        if surface.mode != 'RGB':
            surface = surface.convert('RGB')

    buf = BytesIO()
    try:
        surface.save(buf, format=pil_format, **options)
    except (OSError, ValueError) as e:
        logging.error(f"Failed to encode {name} export: {e}")
        raise ExportError(f"Failed to encode {name}: {e}") from e
    return buf.getvalue()


def save_export(surface: Image.Image, fmt: str = 'png',
                directory: Union[str, Path] = '.') -> Path:
    """
    Encode a surface and write it as bg-<width>x<height>.<ext>.

    The bytes go to a temporary file in the target directory that is renamed
    into place, so a failure never leaves a partial export.

    Returns:
        Path of the written file

    Raises:
        ExportError: Encoding or writing failed
    """
    data = encode(surface, fmt)
    width, height = surface.size
    target = Path(directory) / export_filename(width, height, fmt)

    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(dir=str(target.parent), prefix='.bg-', suffix='.tmp')
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        os.replace(tmp_path, target)
    except OSError as e:
        if tmp_path and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        logging.error(f"Failed to write export {target}: {e}")
        raise ExportError(f"Failed to write {target}: {e}") from e

    logging.info(f"Exported {target} ({len(data)} bytes)")
    return target
