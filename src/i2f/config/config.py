# src/i2f/config/config.py
import os
from dataclasses import dataclass
from functools import lru_cache

import yaml


def _env_list(name: str, default: str) -> list:
    return [item.strip() for item in os.getenv(name, default).split(',') if item.strip()]


@lru_cache()
def load_config(path: str = 'config.yaml') -> dict:
    """
    Load configuration from a YAML file or fall back to environment variables.
    """
    # Default settings
    defaults = {
        'TEMPLATE_EXTENSION': os.getenv('I2F_TEMPLATE_EXTENSION', '.html'),
        'STYLE_EXTENSION': os.getenv('I2F_STYLE_EXTENSION', '.scss'),
        'CANDIDATE_SUFFIX': os.getenv('I2F_CANDIDATE_SUFFIX', '.component.ts'),
        'SOURCE_SUFFIX': os.getenv('I2F_SOURCE_SUFFIX', '.ts'),
        'DECORATOR_NAME': os.getenv('I2F_DECORATOR_NAME', 'Component'),
        'QUOTE': os.getenv('I2F_QUOTE', "'"),
        'SKIP_DIRS': _env_list('I2F_SKIP_DIRS', 'node_modules,.git'),
    }

    if path and os.path.exists(path):
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"❌ Config file {path} must contain a mapping, got {type(data).__name__}")
        # Merge defaults with YAML overrides
        return {**defaults, **data}

    return defaults


@dataclass(frozen=True)
class MigrationSettings:
    template_extension: str = '.html'
    style_extension: str = '.scss'
    candidate_suffix: str = '.component.ts'
    source_suffix: str = '.ts'
    decorator_name: str = 'Component'
    quote: str = "'"
    skip_dirs: tuple = ('node_modules', '.git')

    @classmethod
    def from_config(cls, config: dict) -> "MigrationSettings":
        skip_dirs = config.get('SKIP_DIRS', cls.skip_dirs)
        if isinstance(skip_dirs, str):
            skip_dirs = [item.strip() for item in skip_dirs.split(',') if item.strip()]
        quote = str(config.get('QUOTE', cls.quote))
        if quote not in ("'", '"'):
            raise ValueError(f"❌ QUOTE must be ' or \", got {quote!r}")
        return cls(
            template_extension=str(config.get('TEMPLATE_EXTENSION', cls.template_extension)),
            style_extension=str(config.get('STYLE_EXTENSION', cls.style_extension)),
            candidate_suffix=str(config.get('CANDIDATE_SUFFIX', cls.candidate_suffix)),
            source_suffix=str(config.get('SOURCE_SUFFIX', cls.source_suffix)),
            decorator_name=str(config.get('DECORATOR_NAME', cls.decorator_name)),
            quote=quote,
            skip_dirs=tuple(skip_dirs or ()),
        )


def load_settings(path: str = 'config.yaml') -> MigrationSettings:
    return MigrationSettings.from_config(load_config(path))
