"""
MakeInsertions API Module

This module provides programmatic access to insertion parsing, compositing
and metadata round-tripping for use as a Python library.
"""

from .codec import read_image, write_image
from .compositor import Compositor, placement_region
from .metadata import clear_insertions, read_insertions, write_insertion
from .spec import format_insert_spec, parse_insert_spec
from .spec_set import build_spec_set, collect_spec_texts

__all__ = [
    "Compositor",
    "build_spec_set",
    "clear_insertions",
    "collect_spec_texts",
    "format_insert_spec",
    "parse_insert_spec",
    "placement_region",
    "read_image",
    "read_insertions",
    "write_image",
    "write_insertion",
]
