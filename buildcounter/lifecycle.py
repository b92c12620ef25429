"""
Copyright 2025 Adobe
All Rights Reserved.

NOTICE: Adobe permits you to use, modify, and distribute this file in accordance
with the terms of the Adobe license agreement accompanying it.

Finalization hooks called by the host build pipeline once a build or package
step has succeeded.
"""

from enum import Enum
import logging
from typing import Iterable, Optional, Union

from buildcounter.counter import VersionCounter
from buildcounter.record import VersionRecord


FULL_BUILD_TASK = "build"
LOGGER = logging.getLogger(__name__)


class Phase(Enum):
    # A full build lifecycle, the version is always advanced when it finishes
    BUILD = "build"
    # Packaging only, skipped when a full build was requested in the same invocation
    PACKAGE = "package"


def should_advance(phase: Union[Phase, str], full_build_requested: bool) -> bool:
    if Phase(phase) == Phase.BUILD:
        return True
    return not full_build_requested


def full_build_requested_from_tasks(tasks: Optional[Iterable[str]]) -> bool:
    """
    Returns whether a full build was requested given the task names of the invocation.
    Only the request is checked, not whether the build task completed.
    """
    return FULL_BUILD_TASK in (tasks or [])


def finalize(
    counter: VersionCounter,
    phase: Union[Phase, str],
    full_build_requested: bool = False,
    dry_run: bool = False,
) -> Optional[VersionRecord]:
    """
    Advance the version after a successful phase, at most once per invocation.

    :param counter: the version counter
    :param phase: the phase that just succeeded
    :param full_build_requested: whether a full build was requested in this invocation
    :param dry_run: whether the counter only keeps the new version in memory
    :return: the new version record, or None if the version was not advanced
    """
    phase = Phase(phase)
    if not should_advance(phase, full_build_requested):
        LOGGER.debug(
            f"Not advancing the version after {phase.value}, "
            f"it is advanced when the requested build finishes"
        )
        return None

    record = counter.advance()
    if dry_run:
        LOGGER.info(f"Dry run, version file would be updated for next build: {record}")
    else:
        LOGGER.info(f"Version file updated for next build: {counter.read()}")
    return record
