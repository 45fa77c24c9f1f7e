"""Detect and compare the Rails version of the target project."""

import os
import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Tuple

from kickstart.scaffold.errors import ProjectFileNotFound, ScaffoldError

# Resolved gems in Gemfile.lock are indented four spaces under "specs:".
_LOCKED_RAILS = re.compile(r"^    rails \(([^)]+)\)\s*$", re.MULTILINE)


def _numeric_segments(text):
    segments = []
    for part in text.split("."):
        match = re.match(r"\d+", part)
        if not match:
            break
        segments.append(int(match.group(0)))
    return tuple(segments)


@total_ordering
@dataclass(frozen=True)
class RailsVersion:
    """A Rails release such as ``6.1.4`` or ``7.0.0.rc1``.

    Ordering uses the numeric segments only, padded with zeros, so
    ``6.0 == 6.0.0`` and ``6.10.0 > 6.9.0``.
    """

    text: str
    segments: Tuple[int, ...]

    @classmethod
    def parse(cls, text: str) -> "RailsVersion":
        text = text.strip()
        segments = _numeric_segments(text)
        if not segments:
            raise ScaffoldError(f"Unrecognized Rails version: {text!r}")
        return cls(text, segments)

    def _key(self, other):
        width = max(len(self.segments), len(other.segments))
        return (
            self.segments + (0,) * (width - len(self.segments)),
            other.segments + (0,) * (width - len(other.segments)),
        )

    @staticmethod
    def _coerce(other):
        if isinstance(other, str):
            return RailsVersion.parse(other)
        return other

    def __eq__(self, other):
        other = self._coerce(other)
        if not isinstance(other, RailsVersion):
            return NotImplemented
        mine, theirs = self._key(other)
        return mine == theirs

    def __lt__(self, other):
        other = self._coerce(other)
        if not isinstance(other, RailsVersion):
            return NotImplemented
        mine, theirs = self._key(other)
        return mine < theirs

    def __hash__(self):
        segments = list(self.segments)
        while segments and segments[-1] == 0:
            segments.pop()
        return hash(tuple(segments))

    def __str__(self):
        return self.text

    def dashed(self):
        """Version with dots replaced by dashes, for use in file names."""
        return self.text.replace(".", "-")


def detect_rails_version(project_dir):
    """Read the locked ``rails`` gem version from the project's Gemfile.lock.

    Raises:
        ProjectFileNotFound: If Gemfile.lock does not exist.
        ScaffoldError: If the lockfile does not resolve ``rails``.
    """
    lockfile = os.path.join(project_dir, "Gemfile.lock")
    if not os.path.isfile(lockfile):
        raise ProjectFileNotFound(lockfile)
    with open(lockfile, "r", encoding="utf-8") as f:
        match = _LOCKED_RAILS.search(f.read())
    if not match:
        raise ScaffoldError(f"No rails gem found in {lockfile}")
    return RailsVersion.parse(match.group(1))
