import cv2
import numpy as np
from PySide6.QtCore import QPoint, Qt
from PySide6.QtGui import QImage, QPainter, QTransform


def qimage_to_numpy(image: QImage) -> np.ndarray:
    """
    Convert QImage to RGBA numpy array.

    Args:
        image: The QImage to convert

    Returns:
        numpy.ndarray: Array with shape (height, width, 4) containing RGBA values
    """
    # Convert to Format_RGBA8888 for consistent channel ordering
    if image.format() != QImage.Format_RGBA8888:
        image = image.convertToFormat(QImage.Format_RGBA8888)

    width = image.width()
    height = image.height()
    bytes_per_line = image.bytesPerLine()

    bytes_data = bytes(image.constBits())
    arr = np.frombuffer(bytes_data, dtype=np.uint8).reshape((height, bytes_per_line))

    return arr[:, : width * 4].reshape((height, width, 4)).copy()


def numpy_to_qimage(arr: np.ndarray) -> QImage:
    """Convert an RGBA (H, W, 4) uint8 array back to a QImage."""
    if arr.ndim != 3 or arr.shape[2] != 4:
        raise ValueError("Image must have 4 channels")

    arr = np.ascontiguousarray(arr, dtype=np.uint8)
    height, width = arr.shape[:2]
    qimage = QImage(arr.data, width, height, arr.strides[0], QImage.Format_RGBA8888)
    return qimage.copy()


def copy_text(source: QImage, target: QImage):
    """Copy every text attribute of source onto target."""
    for key in source.textKeys():
        target.setText(key, source.text(key))


def rotate(image: QImage, degrees: float, smooth: bool = True) -> QImage:
    """
    Rotate an image clockwise by the given angle.

    The result grows to the rotated bounding box; uncovered corners are
    transparent.
    """
    if degrees % 360 == 0:
        return image.copy()

    transform = QTransform()
    transform.rotate(degrees)
    mode = Qt.SmoothTransformation if smooth else Qt.FastTransformation
    source = image.convertToFormat(QImage.Format_ARGB32_Premultiplied)
    return source.transformed(transform, mode)


def resize_to(
    image: QImage,
    width: int,
    height: int,
    keep_aspect_ratio: bool = True,
    smooth: bool = True,
) -> QImage:
    """
    Zoom an image to width x height.

    With keep_aspect_ratio the result is the largest size that fits inside the
    box, so one side may come out smaller than requested.
    """
    aspect = Qt.KeepAspectRatio if keep_aspect_ratio else Qt.IgnoreAspectRatio
    mode = Qt.SmoothTransformation if smooth else Qt.FastTransformation
    if smooth and image.hasAlphaChannel():
        # interpolate premultiplied pixels so transparent ones carry no colour
        image = image.convertToFormat(QImage.Format_ARGB32_Premultiplied)
    return image.scaled(width, height, aspect, mode)


def key_color_transparent(
    image: QImage, color: tuple[int, int, int], tolerance: int = 0
) -> QImage:
    """
    Make every pixel matching color fully transparent.

    Args:
        image: Image to key
        color: (r, g, b) colour to remove
        tolerance: Per channel distance still counted as a match

    Returns:
        QImage: RGBA copy of the image with the colour keyed out
    """
    arr = qimage_to_numpy(image)

    lower = np.array([max(0, c - tolerance) for c in color], dtype=np.uint8)
    upper = np.array([min(255, c + tolerance) for c in color], dtype=np.uint8)
    mask = cv2.inRange(np.ascontiguousarray(arr[:, :, :3]), lower, upper)
    arr[mask > 0, 3] = 0

    return numpy_to_qimage(arr)


def composite_over(dest: QImage, source: QImage, x: int, y: int):
    """Blend source onto dest in place at (x, y) using source-over."""
    painter = QPainter(dest)
    try:
        painter.setCompositionMode(QPainter.CompositionMode_SourceOver)
        painter.drawImage(QPoint(x, y), source)
    finally:
        painter.end()
