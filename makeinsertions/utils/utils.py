import os

from PySide6.QtGui import QGuiApplication

_app = None


def ensure_qapp():
    """Ensure a QGuiApplication exists; rasters are painted headless."""
    global _app
    if _app is None:
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
        _app = QGuiApplication.instance() or QGuiApplication([])
    return _app
