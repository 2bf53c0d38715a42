"""
Insertion Metadata

Reads and writes the ``insert_loc_<N>`` text attributes that make a processed
template self-describing. Keys are 1-based and contiguous; the first missing
or empty key ends the sequence.
"""

from typing import List, Optional

from PySide6.QtGui import QImage

from makeinsertions import logger
from makeinsertions.api.spec import format_insert_spec
from makeinsertions.core.configs import InsertionConfig
from makeinsertions.core.defs import InsertSpec


def read_insertions(
    image: QImage, config: Optional[InsertionConfig] = None
) -> List[str]:
    """
    List the insertion descriptors embedded in an image, in placement order.

    Args:
        image: Image whose text attributes are scanned
        config: Supplies the key prefix and count key

    Returns:
        List[str]: Descriptors for insert_loc_1, insert_loc_2, ... up to the first gap
    """
    config = config or InsertionConfig()

    texts = []
    index = 1
    while True:
        value = image.text(config.metadata_key(index))
        if not value:
            break
        texts.append(value)
        index += 1

    count = image.text(config.count_key)
    if count and count != str(len(texts)):
        logger.warning(
            f"Template declares {count} insertion(s) but {len(texts)} were found"
        )
    return texts


def write_insertion(
    image: QImage,
    index: int,
    spec: InsertSpec,
    config: Optional[InsertionConfig] = None,
) -> str:
    """
    Record spec under insert_loc_<index>, replacing any previous value.

    Returns:
        str: The key written
    """
    config = config or InsertionConfig()
    key = config.metadata_key(index)
    image.setText(key, format_insert_spec(spec))
    logger.debug(f"Wrote {key}={image.text(key)}")
    return key


def clear_insertions(
    image: QImage, start: int, config: Optional[InsertionConfig] = None
) -> int:
    """
    Blank every insert_loc key numbered start or higher.

    QImage cannot drop a text key, so stale entries are set to an empty
    string, which the reader treats as the end of the sequence.

    Returns:
        int: Number of keys cleared
    """
    config = config or InsertionConfig()
    prefix = config.metadata_key_prefix

    cleared = 0
    for key in image.textKeys():
        suffix = key[len(prefix):]
        if not key.startswith(prefix) or not suffix.isdigit():
            continue
        if int(suffix) >= start and image.text(key):
            image.setText(key, "")
            cleared += 1
    if cleared:
        logger.info(f"Cleared {cleared} stale insertion key(s)")
    return cleared


def write_count(image: QImage, count: int, config: Optional[InsertionConfig] = None):
    config = config or InsertionConfig()
    if config.write_count:
        image.setText(config.count_key, str(count))
