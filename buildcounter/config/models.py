"""
Copyright 2025 Adobe
All Rights Reserved.

NOTICE: Adobe permits you to use, modify, and distribute this file in accordance
with the terms of the Adobe license agreement accompanying it.
"""

from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator, ValidationError

from buildcounter.resources import DEFAULT_PATTERNS
from buildcounter.store import DEFAULT_VERSION_FILE
from buildcounter.utils import LOCK_TIMEOUT_SECONDS


DEFAULT_RESOURCES_SOURCE = "src/main/resources"
DEFAULT_RESOURCES_DESTINATION = "build/resources/main"


class ResourcesConfig(BaseModel, extra="forbid"):
    source: str = DEFAULT_RESOURCES_SOURCE
    destination: str = DEFAULT_RESOURCES_DESTINATION
    # File name (or relative path) patterns of the resources to expand
    patterns: List[str] = DEFAULT_PATTERNS
    # Extra ${name} values available to the expanded resources
    properties: Dict[str, Union[str, int, float, bool]] = {}


class Config(BaseModel, extra="forbid"):
    """
    The buildcounter.yaml project configuration.
    """

    version_file: str = Field(DEFAULT_VERSION_FILE, alias="version-file")
    lock: bool = False
    lock_timeout_seconds: float = Field(
        LOCK_TIMEOUT_SECONDS, alias="lock-timeout-seconds"
    )
    resources: ResourcesConfig = Field(default_factory=ResourcesConfig)

    @field_validator("version_file")
    @classmethod
    def validate_version_file(cls, val: str) -> str:
        if not val or not val.strip():
            raise ValueError("version-file must not be empty")
        return val

    @field_validator("lock_timeout_seconds")
    @classmethod
    def validate_lock_timeout_seconds(cls, val: float) -> float:
        if val <= 0:
            raise ValueError("lock-timeout-seconds must be greater than 0")
        return val


def get_validation_errors(exc: ValidationError) -> List[str]:
    """Get validation errors as a list of strings"""
    errors = []
    for error in exc.errors():
        field = ".".join(str(item) for item in error["loc"])
        if error["type"] == "extra_forbidden":
            errors.append(
                f"  {field}:  not a valid field, please check the spelling and documentation"
            )
        else:
            errors.append(f"  {field}:  {error['msg']} ({error['type']})")
    return errors


def generate_and_validate_config(
    **kwargs,
) -> Tuple[Optional[Config], Optional[List[str]]]:
    try:
        return Config(**kwargs), None
    except ValidationError as exc:
        return None, get_validation_errors(exc)
