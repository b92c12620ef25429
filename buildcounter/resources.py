"""
Copyright 2025 Adobe
All Rights Reserved.

NOTICE: Adobe permits you to use, modify, and distribute this file in accordance
with the terms of the Adobe license agreement accompanying it.
"""

import codecs
import fnmatch
import logging
import os
import shutil
from typing import Iterable, List, Mapping, Optional

import jinja2

from buildcounter.errors import BuildCounterResourceError
from buildcounter.record import VersionRecord


DEFAULT_PATTERNS = ["plugin.yml"]
# Resources are text, so block and comment tags starting with NUL never match
_DISABLED_BLOCK = ("\x00{%", "%}\x00")
_DISABLED_COMMENT = ("\x00{#", "#}\x00")
LOGGER = logging.getLogger(__name__)


class ResourceFilter:
    """
    Expands ${name} placeholders (e.g. ${version}) in resource files matching a set of
    file name patterns.
    """

    def __init__(
        self, patterns: Optional[Iterable[str]] = None, context: Optional[dict] = None
    ):
        self.patterns = list(DEFAULT_PATTERNS if patterns is None else patterns)
        self.context = dict(context or {})
        self._jenv = jinja2.Environment(
            variable_start_string="${",
            variable_end_string="}",
            block_start_string=_DISABLED_BLOCK[0],
            block_end_string=_DISABLED_BLOCK[1],
            comment_start_string=_DISABLED_COMMENT[0],
            comment_end_string=_DISABLED_COMMENT[1],
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
        )

    @classmethod
    def for_version(
        cls,
        record: VersionRecord,
        patterns: Optional[Iterable[str]] = None,
        properties: Optional[Mapping] = None,
    ) -> "ResourceFilter":
        """
        Return a filter with the version fields of the record in its context. Extra
        properties cannot override the version fields.
        """
        context = dict(properties or {})
        context.update(
            {
                "version": record.label,
                "major": record.major,
                "minor": record.minor,
                "build": record.build,
            }
        )
        return cls(patterns, context)

    def matches(self, relative_path: str) -> bool:
        relative_path = relative_path.replace(os.sep, "/")
        file_name = relative_path.rsplit("/", 1)[-1]
        return any(
            fnmatch.fnmatch(file_name, pattern) or fnmatch.fnmatch(relative_path, pattern)
            for pattern in self.patterns
        )

    def render(self, text: str, name: str = "<string>") -> str:
        try:
            return self._jenv.from_string(text).render(self.context)
        except jinja2.TemplateError as exc:
            raise BuildCounterResourceError(
                f"Unable to expand placeholders in {name}: {exc}"
            ) from exc

    def _render_file(self, source: str, destination: str) -> None:
        try:
            with codecs.open(source, "r", encoding="utf-8") as _file:
                contents = _file.read()
        except UnicodeDecodeError as exc:
            raise BuildCounterResourceError(
                f"Unable to read resource {source}: {exc}"
            ) from exc
        contents = self.render(contents, source)
        with codecs.open(destination, "w", encoding="utf-8") as _file:
            _file.write(contents)

    def process(self, source_dir: str, destination_dir: str) -> List[str]:
        """
        Copy the resource tree to the destination, expanding placeholders in the files
        matching the patterns and copying the others as-is.

        :param source_dir: the resources directory
        :param destination_dir: the output directory, created if needed
        :return: the relative paths of the files that were expanded
        """
        if not os.path.isdir(source_dir):
            raise BuildCounterResourceError(
                f"Resource directory {source_dir} does not exist"
            )

        rendered = []
        for root, dirs, files in os.walk(source_dir):
            dirs.sort()
            for file_name in sorted(files):
                source = os.path.join(root, file_name)
                relative_path = os.path.relpath(source, source_dir)
                destination = os.path.join(destination_dir, relative_path)
                try:
                    os.makedirs(os.path.dirname(destination), exist_ok=True)
                    if self.matches(relative_path):
                        LOGGER.debug(f"Expanding placeholders in {relative_path}")
                        self._render_file(source, destination)
                        rendered.append(relative_path)
                    else:
                        shutil.copyfile(source, destination)
                except OSError as exc:
                    raise BuildCounterResourceError(
                        f"Unable to copy resource {relative_path} to {destination_dir}: {exc}"
                    ) from exc
        return rendered
