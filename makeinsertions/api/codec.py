"""
Image Codec

Reads and writes images with Qt, keeping text attributes (PNG tEXt chunks)
intact in both directions.
"""

import os
from pathlib import Path
from typing import Optional, Union

from PySide6.QtGui import QColorSpace, QImage, QImageReader, QImageWriter

from makeinsertions import logger
from makeinsertions.core.configs import InsertionConfig
from makeinsertions.core.defs import ImageIOError
from makeinsertions.utils.image import copy_text
from makeinsertions.utils.utils import ensure_qapp

METADATA_FORMATS = {"png"}


def _normalize_color_space(image: QImage, path: Path) -> QImage:
    color_space = image.colorSpace()
    srgb = QColorSpace(QColorSpace.NamedColorSpace.SRgb)
    if not color_space.isValid() or color_space == srgb:
        return image

    logger.warning(
        f"{path} uses colour space '{color_space.description()}', converting to sRGB"
    )
    converted = image.convertedToColorSpace(srgb)
    if converted.isNull():
        logger.warning(f"Could not convert {path} to sRGB, keeping original pixels")
        return image
    copy_text(image, converted)
    return converted


def read_image(
    path: Union[str, Path], config: Optional[InsertionConfig] = None
) -> QImage:
    """
    Decode an image file.

    Args:
        path: Image file to read
        config: force_srgb decides whether non-sRGB images are converted

    Returns:
        QImage: Decoded image, text attributes included

    Raises:
        ImageIOError: The file is missing or cannot be decoded
    """
    ensure_qapp()
    config = config or InsertionConfig()
    path = Path(path)
    if not path.exists():
        raise ImageIOError(path, "Image not found")

    reader = QImageReader(str(path))
    reader.setAutoTransform(False)
    image = reader.read()
    if image.isNull():
        raise ImageIOError(path, f"Failed to read image ({reader.errorString()})")

    if config.force_srgb:
        image = _normalize_color_space(image, path)

    logger.info(f"Read {path} ({image.width()}x{image.height()})")
    return image


def write_image(image: QImage, path: Union[str, Path]) -> Path:
    """
    Encode an image to path.

    The image is first written to a hidden sibling file and then moved into
    place, so a failed write never leaves a partial output behind.

    Raises:
        ImageIOError: The image could not be encoded
    """
    ensure_qapp()
    path = Path(path)
    fmt = path.suffix.lstrip(".").lower() or "png"
    if fmt not in METADATA_FORMATS:
        logger.warning(
            f"{fmt} output may not keep insertion metadata, prefer png for templates"
        )

    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")

    writer = QImageWriter(str(tmp_path), fmt.encode())
    if not writer.write(image):
        message = writer.errorString()
        if tmp_path.exists():
            tmp_path.unlink()
        raise ImageIOError(path, f"Failed to write image ({message})")

    os.replace(tmp_path, path)
    logger.info(f"Saved image to {path}")
    return path
