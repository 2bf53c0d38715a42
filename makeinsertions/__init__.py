from loguru import logger  # noqa
from importlib.metadata import version, PackageNotFoundError

logger.debug("makeinsertions package loaded with loguru logger.")

try:
    __version__ = version("makeinsertions")
except PackageNotFoundError:
    __version__ = "0.0.0"
