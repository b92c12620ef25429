"""
Copyright 2025 Adobe
All Rights Reserved.

NOTICE: Adobe permits you to use, modify, and distribute this file in accordance
with the terms of the Adobe license agreement accompanying it.
"""

from collections import OrderedDict
import io
import logging
import os
import uuid
import portalocker
import timeout_decorator
import yaml.resolver
from typing import Optional

from buildcounter.errors import BuildCounterConfigurationError


LOCK_TIMEOUT_SECONDS = 60.0
LOGGER = logging.getLogger(__name__)


class FailureToAcquireLockException(Exception):
    """
    Raised when there is failure to acquire file lock
    """

    pass


class OrderedLoader(yaml.SafeLoader):  # pylint: disable=too-many-ancestors
    """
    Custom loader class that preserves dictionary order.
    """

    pass


def construct_mapping(loader, node):
    """
    :param loader:
    :param node:
    """
    loader.flatten_mapping(node)
    return OrderedDict(loader.construct_pairs(node))


OrderedLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, construct_mapping
)


def load_config(stream, cfg_file):
    """
    Load yaml while preserving the order of attributes in maps/dictionaries.
    """
    try:
        return yaml.load(stream, Loader=OrderedLoader)
    except yaml.YAMLError as err:
        raise BuildCounterConfigurationError(
            f"The {cfg_file} file contains malformed yaml, "
            f"please check the syntax and try again: {err}"
        ) from err


def tempfile(prefix=None, suffix=None, temp_dir="/tmp"):
    """
    Generate a temporary file path.
    """
    name = str(uuid.uuid4())
    if suffix:
        name = name + suffix
    if prefix:
        name = prefix + name

    return os.path.join(temp_dir, name)


def _acquire_flock_open(
    lock_file: str,
    logger: logging.Logger,
    mode: str,
    timeout_seconds: float = LOCK_TIMEOUT_SECONDS,
) -> io.IOBase:
    """
    Acquire an exclusive file lock and open file with configurable timeout

    :param lock_file: path and file name of file open and lock
    :param logger: logger to log messages
    :param mode: mode used by open()
    :param timeout_seconds: number of seconds for timeout
    :return: opened file object if successful else None
    """

    @timeout_decorator.timeout(
        seconds=timeout_seconds, timeout_exception=FailureToAcquireLockException
    )
    def get_lock(file_obj, flags):
        portalocker.lock(
            file_obj,
            flags,
        )
        return file_obj

    # pylint: disable=unspecified-encoding,consider-using-with
    file_obj = open(lock_file, mode)
    lock_file_obj = None
    pid = os.getpid()

    try:
        lock_file_obj = get_lock(file_obj, portalocker.LockFlags.EXCLUSIVE)
    except FailureToAcquireLockException:
        file_obj.close()
        raise FailureToAcquireLockException(
            f"PID:{pid} failed to acquire file lock for {lock_file} after timeout of {timeout_seconds} seconds"
        )

    logger.debug(f"PID:{pid} file opened and lock acquired for {lock_file}")

    return lock_file_obj


def acquire_flock_open_write_binary(
    lock_file: str,
    logger: logging.Logger,
    timeout_seconds: float = LOCK_TIMEOUT_SECONDS,
    mode: str = "ab",
) -> io.BufferedWriter:
    """
    Acquire an exclusive file lock and open binary file in write mode with configurable timeout

    :param lock_file: path and file name of file open and lock
    :param logger: logger to log messages
    :param timeout_seconds: number of seconds for timeout
    :param mode: mode used by open(), appends by default so the lock file is never truncated
    :return: opened file object
    """
    return _acquire_flock_open(
        lock_file=lock_file,
        logger=logger,
        mode=mode,
        timeout_seconds=timeout_seconds,
    )


def release_flock(lock_file_obj: Optional[io.BufferedWriter], logger: logging.Logger):
    """
    Release the file lock and close file descriptor

    :param lock_file_obj: opened lock file object
    :param logger: logger to log messages
    """
    if lock_file_obj is None:
        return
    portalocker.unlock(lock_file_obj)
    lock_file_obj.close()
    logger.debug(f"PID:{os.getpid()} released and closed file {lock_file_obj.name}")
