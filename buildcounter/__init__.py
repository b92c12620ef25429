"""
Copyright 2025 Adobe
All Rights Reserved.

NOTICE: Adobe permits you to use, modify, and distribute this file in accordance
with the terms of the Adobe license agreement accompanying it.
"""

import importlib.machinery
import logging
import os
import types
from typing import List, Optional, Union

from buildcounter import lifecycle
from buildcounter.config import BuildCounterConfig
from buildcounter.counter import VersionCounter
from buildcounter.errors import (
    BuildCounterConfigurationError,
    BuildCounterError,
    BuildCounterResourceError,
    BuildCounterWriteError,
)
from buildcounter.lifecycle import Phase
from buildcounter.record import VersionRecord
from buildcounter.resources import ResourceFilter
from buildcounter.store import (
    MemoryVersionStore,
    PropertiesFileVersionStore,
    VersionStore,
)


LOGGER = logging.getLogger(__name__)

__version__ = "DEVELOPMENT"
try:
    _VERSION_FILE = os.path.join(os.path.dirname(__file__), "version.py")
    if os.path.exists(_VERSION_FILE):
        loader = importlib.machinery.SourceFileLoader(
            "buildcounterversion", _VERSION_FILE
        )
        _VERSION_MOD = types.ModuleType(loader.name)
        loader.exec_module(_VERSION_MOD)
        __version__ = getattr(_VERSION_MOD, "__version__", __version__)
except Exception:  # pylint: disable=broad-except
    pass


class BuildCounter:
    """
    Class used to manage the build version of a project for one invocation.
    """

    def __init__(
        self,
        *,
        build_dir: str,
        config_file: Optional[str] = None,
        config_overrides: Optional[dict] = None,
        dry_run: bool = False,
        store: Optional[VersionStore] = None,
    ):
        self.build_dir = build_dir
        self.dry_run = dry_run
        self.buildcounter_config = BuildCounterConfig(
            build_dir=build_dir,
            config_file=config_file,
            config_overrides=config_overrides,
        )
        config = self.buildcounter_config.config

        if store is None:
            store = PropertiesFileVersionStore(
                self.buildcounter_config.version_file,
                lock=config.lock,
                lock_timeout_seconds=config.lock_timeout_seconds,
            )
            if dry_run:
                LOGGER.info(f"Dry run, {store.location} will not be modified")
                store = MemoryVersionStore(store.load())
        self.store = store
        self.counter = VersionCounter(store)

    def version(self) -> VersionRecord:
        return self.counter.read()

    def advance(self) -> VersionRecord:
        return self.counter.advance()

    def finalize(
        self, phase: Union[Phase, str], full_build_requested: bool = False
    ) -> Optional[VersionRecord]:
        return lifecycle.finalize(
            self.counter, phase, full_build_requested, dry_run=self.dry_run
        )

    def process_resources(
        self, source_dir: Optional[str] = None, destination_dir: Optional[str] = None
    ) -> List[str]:
        """
        Copy the project resources expanding the version placeholders.

        :param source_dir: the resources directory, defaults to the configured one
        :param destination_dir: the output directory, defaults to the configured one
        :return: the relative paths of the expanded files
        """
        resources = self.buildcounter_config.config.resources
        source_dir = self.buildcounter_config.to_abs_path(
            source_dir or resources.source
        )
        destination_dir = self.buildcounter_config.to_abs_path(
            destination_dir or resources.destination
        )

        record = self.version()
        resource_filter = ResourceFilter.for_version(
            record, resources.patterns, resources.properties
        )
        rendered = resource_filter.process(source_dir, destination_dir)
        LOGGER.info(
            f"Expanded version {record} in {len(rendered)} resource file(s) "
            f"from {source_dir} to {destination_dir}"
        )
        if not rendered:
            LOGGER.warning(
                f"No resources matched the patterns: {', '.join(resource_filter.patterns)}"
            )
        return rendered

