"""
Copyright 2025 Adobe
All Rights Reserved.

NOTICE: Adobe permits you to use, modify, and distribute this file in accordance
with the terms of the Adobe license agreement accompanying it.
"""


class BuildCounterError(Exception):
    """Base BuildCounter Exception"""
    pass


class BuildCounterConfigurationError(BuildCounterError):
    """Error indicating an issue with the buildcounter configuration"""
    pass


class BuildCounterWriteError(BuildCounterError):
    """
    Error indicating the version record could not be persisted. This is always fatal,
    the message names the storage location and the underlying cause.
    """
    pass


class BuildCounterResourceError(BuildCounterError):
    """Error indicating a resource file could not be filtered"""
    pass
