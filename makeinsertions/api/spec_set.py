"""
Specification Set Builder

Turns raw insertion descriptors into a sorted, duplicate free list of
InsertSpec values, aborting on the first bad entry.
"""

from typing import Iterable, List, Optional, Sequence

from PySide6.QtGui import QImage

from makeinsertions import logger
from makeinsertions.api.metadata import read_insertions
from makeinsertions.api.spec import parse_insert_spec
from makeinsertions.core.configs import InsertionConfig
from makeinsertions.core.defs import (
    DuplicateSpecError,
    EmptySpecSetError,
    InsertSpec,
    MalformedSpecError,
)


def collect_spec_texts(
    explicit: Optional[Sequence[str]],
    target: Optional[QImage] = None,
    config: Optional[InsertionConfig] = None,
) -> List[str]:
    """
    Pick the descriptors for a run.

    Explicit descriptors win; otherwise they are recovered from the target
    image's metadata.
    """
    if explicit:
        return list(explicit)
    if target is None:
        return []
    texts = read_insertions(target, config)
    logger.info(f"Recovered {len(texts)} insertion spec(s) from template metadata")
    return texts


def build_spec_set(
    texts: Iterable[str], config: Optional[InsertionConfig] = None
) -> List[InsertSpec]:
    """
    Parse, validate, sort and deduplicate insertion descriptors.

    Args:
        texts: Raw descriptors
        config: Controls rotation strictness and the duplicate policy

    Returns:
        List[InsertSpec]: Ascending, no two elements equal

    Raises:
        MalformedSpecError: A descriptor did not parse
        DuplicateSpecError: Two descriptors are equal and the policy is "abort"
        EmptySpecSetError: No descriptors at all
    """
    config = config or InsertionConfig()

    parsed = []
    for text in texts:
        result = parse_insert_spec(text, strict_rotation=config.strict_rotation)
        if not result.ok:
            raise MalformedSpecError(text, result.error)
        parsed.append((result.spec, text))

    if not parsed:
        raise EmptySpecSetError()

    # sorted() is stable, so the first text seen for a spec is the one kept
    parsed = sorted(parsed, key=lambda item: item[0])
    specs: List[InsertSpec] = []
    for spec, text in parsed:
        if specs and specs[-1] == spec:
            if config.duplicate_policy == "abort":
                raise DuplicateSpecError(text)
            logger.warning(f'Coalescing duplicate insertion spec "{text}"')
            continue
        specs.append(spec)

    logger.info(f"Built insertion spec set with {len(specs)} spec(s)")
    return specs
