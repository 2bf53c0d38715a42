import os

import pytest
from PySide6.QtGui import QColor, QImage

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from makeinsertions.utils.utils import ensure_qapp  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    """Create a QGuiApplication instance for testing."""
    yield ensure_qapp()


@pytest.fixture
def make_image():
    """Factory for solid colour images."""

    def _make(width, height, color, fmt=QImage.Format_RGB32):
        image = QImage(width, height, fmt)
        image.fill(QColor(*color))
        return image

    return _make

