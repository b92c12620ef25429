"""
Copyright 2025 Adobe
All Rights Reserved.

NOTICE: Adobe permits you to use, modify, and distribute this file in accordance
with the terms of the Adobe license agreement accompanying it.
"""

from collections import OrderedDict
import contextlib
from datetime import datetime
import logging
import os
import stat
from typing import Mapping, Optional

from buildcounter.errors import BuildCounterWriteError
from buildcounter.properties import dump_properties, load_properties
from buildcounter.utils import (
    LOCK_TIMEOUT_SECONDS,
    acquire_flock_open_write_binary,
    release_flock,
    tempfile,
)


DEFAULT_VERSION_FILE = "version.properties"
LOGGER = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now().astimezone().strftime("%a %b %d %H:%M:%S %Z %Y")


class VersionStore:
    """
    Base class for the backing store of the version record.
    """

    location = "<unknown>"

    def load(self) -> Optional[OrderedDict]:
        """
        Subclasses override this method to return the stored key/values, or None
        if there is nothing stored or it cannot be read.
        """
        raise NotImplementedError()

    def save(self, values: Mapping[str, str], comment: str) -> None:
        """
        Subclasses override this method to replace the stored key/values, raising
        BuildCounterWriteError on failure.
        """
        raise NotImplementedError()

    @contextlib.contextmanager
    def exclusive(self):
        """
        Context held around a read-modify-write of the store. Subclasses may override
        this to serialize writers, by default nothing is locked.
        """
        yield self


class MemoryVersionStore(VersionStore):
    """
    Keeps the key/values in memory, used for dry runs and tests.
    """

    location = "<memory>"

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        self.values = None if values is None else OrderedDict(values)
        self.comment = None

    def load(self) -> Optional[OrderedDict]:
        if self.values is None:
            return None
        return OrderedDict(self.values)

    def save(self, values: Mapping[str, str], comment: str) -> None:
        self.values = OrderedDict(values)
        self.comment = comment


class PropertiesFileVersionStore(VersionStore):
    """
    Stores the key/values in a property file on disk.
    """

    def __init__(
        self,
        path: str,
        lock: bool = False,
        lock_timeout_seconds: float = LOCK_TIMEOUT_SECONDS,
    ):
        self.path = path
        self.lock = lock
        self.lock_timeout_seconds = lock_timeout_seconds

    @property
    def location(self) -> str:
        return self.path

    @property
    def lock_file(self) -> str:
        return f"{self.path}.lock"

    def load(self) -> Optional[OrderedDict]:
        if not os.path.exists(self.path):
            LOGGER.debug(f"Version file {self.path} does not exist")
            return None
        try:
            # Undecodable bytes only spoil the values they appear in
            with open(self.path, "r", encoding="utf8", errors="replace") as fobj:
                return load_properties(fobj.read())
        except OSError as exc:
            LOGGER.debug(f"Unable to read version file {self.path}: {exc}")
            return None

    def save(self, values: Mapping[str, str], comment: str) -> None:
        contents = dump_properties(values, comments=[comment], timestamp=_timestamp())
        directory, file_name = os.path.split(os.path.abspath(self.path))
        tmp_path = tempfile(prefix=f".{file_name}.", suffix=".tmp", temp_dir=directory)
        try:
            with open(tmp_path, "w", encoding="utf8") as fobj:
                fobj.write(contents)
                fobj.flush()
                os.fsync(fobj.fileno())
            if os.path.exists(self.path):
                os.chmod(tmp_path, stat.S_IMODE(os.stat(self.path).st_mode))
            os.replace(tmp_path, self.path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                os.remove(tmp_path)
            raise BuildCounterWriteError(
                f"Unable to write version file {self.path}: {exc}"
            ) from exc

    @contextlib.contextmanager
    def exclusive(self):
        if not self.lock:
            yield self
            return
        try:
            lock_file_obj = acquire_flock_open_write_binary(
                self.lock_file, LOGGER, timeout_seconds=self.lock_timeout_seconds
            )
        except OSError as exc:
            raise BuildCounterWriteError(
                f"Unable to open lock file {self.lock_file}: {exc}"
            ) from exc
        try:
            yield self
        finally:
            release_flock(lock_file_obj, LOGGER)
