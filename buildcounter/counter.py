"""
Copyright 2025 Adobe
All Rights Reserved.

NOTICE: Adobe permits you to use, modify, and distribute this file in accordance
with the terms of the Adobe license agreement accompanying it.
"""

from collections import OrderedDict
import logging
import re
from typing import Mapping, Optional

from buildcounter.record import (
    BUILD_KEY,
    DEFAULT_BUILD,
    DEFAULT_MAJOR,
    DEFAULT_MINOR,
    MAJOR_KEY,
    MINOR_KEY,
    VersionRecord,
)
from buildcounter.store import VersionStore


VERSION_COMMENT = "Auto-incremented on build. Build 0-9 then minor bumps."
LOGGER = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
# Stored fields are 32-bit signed integers
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def parse_or_default(values: Mapping[str, str], key: str, default: int) -> int:
    """
    Parse a single field as an integer, returning the default if it is missing or invalid.
    """
    value = values.get(key)
    if value is None:
        return default
    value = value.strip()
    if not _INTEGER_RE.fullmatch(value):
        LOGGER.debug(f"Invalid value for {key!r} ({value!r}), using {default}")
        return default
    digits = value.lstrip("+-").lstrip("0") or "0"
    number = None
    # More than 10 significant digits is always out of range
    if len(digits) <= 10:
        number = -int(digits) if value.startswith("-") else int(digits)
    if number is None or not INT_MIN <= number <= INT_MAX:
        LOGGER.debug(f"Out of range value for {key!r} ({value!r}), using {default}")
        return default
    return number


def _to_record(values: Optional[Mapping[str, str]]) -> VersionRecord:
    if values is None:
        return VersionRecord()
    return VersionRecord(
        major=parse_or_default(values, MAJOR_KEY, DEFAULT_MAJOR),
        minor=parse_or_default(values, MINOR_KEY, DEFAULT_MINOR),
        build=parse_or_default(values, BUILD_KEY, DEFAULT_BUILD),
    )


class VersionCounter:
    """
    Reads and advances the version record kept in a VersionStore.
    """

    def __init__(self, store: VersionStore):
        self.store = store

    def read(self) -> VersionRecord:
        """
        Returns the current version record. Missing or unreadable storage and invalid
        fields fall back to their defaults, this never raises.
        """
        return _to_record(self.store.load())

    def advance(self) -> VersionRecord:
        """
        Increment the stored version record and persist it.

        :return: the new version record
        :raises BuildCounterWriteError: if the record could not be persisted
        """
        with self.store.exclusive():
            values = self.store.load()
            current = _to_record(values)
            record = current.increment()

            new_values = record.as_properties()
            # Keep any other keys in the file
            for key, value in (values or OrderedDict()).items():
                if key not in new_values:
                    new_values[key] = value
            self.store.save(new_values, VERSION_COMMENT)

        LOGGER.debug(f"Advanced version in {self.store.location}: {current} => {record}")
        return record
