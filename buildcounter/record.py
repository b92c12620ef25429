"""
Copyright 2025 Adobe
All Rights Reserved.

NOTICE: Adobe permits you to use, modify, and distribute this file in accordance
with the terms of the Adobe license agreement accompanying it.
"""

from collections import OrderedDict

from pydantic import BaseModel


DEFAULT_MAJOR = 1
DEFAULT_MINOR = 0
DEFAULT_BUILD = 0
# Build numbers roll over to 0 (bumping minor) once they pass this value
MAX_BUILD = 9

MAJOR_KEY = "major"
MINOR_KEY = "minor"
BUILD_KEY = "build"


class VersionRecord(BaseModel, frozen=True):
    """
    The (major, minor, build) triple persisted between build invocations.
    """

    major: int = DEFAULT_MAJOR
    minor: int = DEFAULT_MINOR
    build: int = DEFAULT_BUILD

    @property
    def label(self) -> str:
        """Returns the dotted version string (e.g. 1.0.3)"""
        return f"{self.major}.{self.minor}.{self.build}"

    def __str__(self) -> str:
        return self.label

    def increment(self) -> "VersionRecord":
        """
        Returns the record that follows this one. The build number is bumped and carried
        into minor once it passes MAX_BUILD, minor is never carried into major.
        """
        minor = self.minor
        build = self.build + 1
        if build > MAX_BUILD:
            build = 0
            minor += 1
        return VersionRecord(major=self.major, minor=minor, build=build)

    def as_properties(self) -> OrderedDict:
        return OrderedDict(
            [
                (MAJOR_KEY, str(self.major)),
                (MINOR_KEY, str(self.minor)),
                (BUILD_KEY, str(self.build)),
            ]
        )
