"""
Copyright 2025 Adobe
All Rights Reserved.

NOTICE: Adobe permits you to use, modify, and distribute this file in accordance
with the terms of the Adobe license agreement accompanying it.
"""

import logging
import os
from typing import Optional

from buildcounter.errors import BuildCounterConfigurationError
from .loader import load_config_data
from .models import generate_and_validate_config, Config


DEFAULT_CONFIG_FILES = ["buildcounter.yaml", "buildcounter.yml"]
LOGGER = logging.getLogger(__name__)


class BuildCounterConfig:
    """
    Class used to manage buildcounter config.
    """

    def __init__(
        self,
        *,
        build_dir: str,
        config_file: Optional[str] = None,
        config_overrides: Optional[dict] = None,
    ):
        self.build_dir = build_dir
        self.config_file = self._find_config_file(config_file)
        self.config = self._load_config(config_overrides)

    def _find_config_file(self, config_file: Optional[str]) -> Optional[str]:
        if config_file:
            _config_file = self.to_abs_path(config_file)
            if not os.path.exists(_config_file):
                raise BuildCounterConfigurationError(
                    f"Cannot find configuration file {_config_file}"
                )
            return _config_file

        for name_to_try in DEFAULT_CONFIG_FILES:
            _to_try = self.to_abs_path(name_to_try)
            if os.path.exists(_to_try):
                LOGGER.debug(f"Found configuration in {name_to_try}")
                return _to_try
        return None

    def _load_config(self, config_overrides: Optional[dict]) -> Config:
        config, errors = generate_and_validate_config(
            **load_config_data(self.config_file, config_overrides)
        )
        if errors:
            errors_str = "\n".join(errors)
            raise BuildCounterConfigurationError(
                f"Invalid configuration, {len(errors)} error(s) found:\n{errors_str}"
            )
        return config

    @property
    def version_file(self) -> str:
        return self.to_abs_path(self.config.version_file)

    def to_abs_path(self, path: str) -> str:
        """
        Convert a path to an absolute path (if it isn't one already).
        """
        _path = os.path.expanduser(path)
        if os.path.isabs(_path):
            return os.path.realpath(_path)
        return os.path.realpath(os.path.join(self.build_dir, _path))
