import runpy
from pathlib import Path
from typing import Literal, Tuple

from pydantic import BaseModel, Field

from makeinsertions.core.defs import InsertionError
from makeinsertions import logger


class BaseConfig(BaseModel):
    project_name: str = "MakeInsertions"
    version: str = "0.1.0"
    project_dir: Path = Path(".")

    is_debug: bool = False

    class Config:
        arbitrary_types_allowed = True


class InsertionConfig(BaseConfig):
    # parsing
    # when False, an unreadable rotation such as "200x150+50+60/abc" becomes 0
    strict_rotation: bool = False
    duplicate_policy: Literal["abort", "coalesce"] = "abort"

    # metadata
    metadata_key_prefix: str = "insert_loc_"
    count_key: str = "insert_count"
    write_count: bool = True

    # compositing
    # ImageMagick's default background colour
    background_color: Tuple[int, int, int] = (255, 255, 255)
    # key the insert's top-left pixel instead of background_color
    sample_background: bool = False
    key_tolerance: int = Field(default=0, ge=0, le=255)
    keep_aspect_ratio: bool = True
    smooth_transform: bool = True

    # codec
    force_srgb: bool = True

    def metadata_key(self, index: int) -> str:
        return f"{self.metadata_key_prefix}{index}"


def load_config(path: Path | str) -> InsertionConfig:
    """
    Load an InsertionConfig from a Python file.

    The file must define an ``insertion_config`` dictionary, e.g.::

        insertion_config = {
            "duplicate_policy": "coalesce",
            "background_color": (255, 255, 255),
        }
    """
    path = Path(path)
    if not path.exists():
        raise InsertionError(f'config file not found: "{path}"')

    config_globals = runpy.run_path(str(path))
    if "insertion_config" not in config_globals:
        raise InsertionError(
            f'config file "{path}" must define an \'insertion_config\' dictionary'
        )

    config = InsertionConfig(**config_globals["insertion_config"])
    logger.info(f"Loaded insertion config from {path}")
    return config
