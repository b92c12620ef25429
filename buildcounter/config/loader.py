"""
Copyright 2025 Adobe
All Rights Reserved.

NOTICE: Adobe permits you to use, modify, and distribute this file in accordance
with the terms of the Adobe license agreement accompanying it.
"""

import codecs
import logging

from buildcounter.errors import BuildCounterConfigurationError
from buildcounter.utils import load_config


LOGGER = logging.getLogger(__name__)


def _deep_merge_dicts(a_dict: dict, b_dict: dict, path=None) -> dict:
    if path is None:
        path = []
    for key in b_dict:
        if key in a_dict:
            if isinstance(a_dict[key], dict) and isinstance(b_dict[key], dict):
                _deep_merge_dicts(a_dict[key], b_dict[key], path + [str(key)])
            elif a_dict[key] != b_dict[key]:
                a_dict[key] = b_dict[key]
        else:
            a_dict[key] = b_dict[key]
    return a_dict


def load_config_file(config_file: str) -> dict:
    """
    Load a buildcounter.yaml file.

    Returns:
      A dictionary of configuration, empty if the file is empty
    """
    try:
        with codecs.open(config_file, "r", encoding="utf-8") as _file:
            config = load_config(_file, config_file)
    except OSError as exc:
        raise BuildCounterConfigurationError(
            f"Unable to read configuration file {config_file}: {exc}"
        ) from exc

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise BuildCounterConfigurationError(
            f"The {config_file} file must contain a dictionary"
        )
    return config


def load_config_data(config_file: str, config_overrides: dict) -> dict:
    """
    Load the configuration file (if any) and deep merge the overrides over it.
    """
    config = {}
    if config_file:
        LOGGER.debug(f"Loading configuration from {config_file}")
        config = load_config_file(config_file)
    return _deep_merge_dicts(config, config_overrides or {})
