"""
Engine settings.

Settings are a plain dict. Defaults come from get_default_settings() and can be
overridden section by section from a YAML file, e.g.::

    swiss:
      max_attempts: 5000
      random_seed: 42
    single_elimination:
      third_place: true
"""
import copy
import logging
import os
from typing import Dict, Optional

import yaml

logger = logging.getLogger(__name__)


def get_default_settings() -> Dict:
    """Return the default engine settings."""
    return {
        'swiss': {
            'max_attempts': 1000,
            'random_seed': None,
        },
        'single_elimination': {
            'third_place': False,
        },
        'validate_brackets': True,
    }


def merge_settings(base: Dict, overrides: Optional[Dict]) -> Dict:
    """Merge overrides into a copy of base; nested sections are merged key by key."""
    merged = copy.deepcopy(base)
    for key, value in (overrides or {}).items():
        if isinstance(merged.get(key), dict):
            if not isinstance(value, dict):
                logger.warning("Ignoring settings section %r: expected a mapping, got %s", key, type(value).__name__)
                continue
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(file_path: Optional[str] = None) -> Dict:
    """
    Load settings from a YAML file on top of the defaults.

    A missing path, an empty file or a file that fails to parse yields the
    defaults unchanged.
    """
    settings = get_default_settings()
    if not file_path or not os.path.exists(file_path):
        return settings

    with open(file_path, mode='r', encoding='utf-8') as file:
        try:
            data = yaml.safe_load(file) or {}
        except yaml.YAMLError as e:
            logger.warning("Could not parse settings file %s, using defaults: %s", file_path, e)
            return settings

    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected a mapping, got %s", file_path, type(data).__name__)
        return settings

    return merge_settings(settings, data)
