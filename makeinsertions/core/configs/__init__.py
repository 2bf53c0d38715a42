from .configs import BaseConfig, InsertionConfig, load_config  # noqa
