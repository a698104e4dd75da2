"""Errors raised while scaffolding a workspace member.

Every error carries the process exit code the CLI reports for it, so copy
failures and manifest failures can be told apart by callers and scripts.
"""

from __future__ import annotations

from pathlib import Path

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_COPY = 3
EXIT_MANIFEST = 4


class ScaffoldError(Exception):
    """Base class for scaffolding failures."""

    exit_code: int = 1


class UsageError(ScaffoldError):
    """The member name is missing, empty or unusable. Nothing was changed."""

    exit_code = EXIT_USAGE


class CopyError(ScaffoldError):
    """The template could not be copied. No manifest was edited."""

    exit_code = EXIT_COPY

    def __init__(self, message: str, source: Path | None = None, destination: Path | None = None):
        self.source = source
        self.destination = destination
        super().__init__(message)


class ManifestFormatError(ScaffoldError):
    """A manifest lacks the line an edit expects, or would be corrupted."""

    exit_code = EXIT_MANIFEST

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(message)


class ManifestIOError(ManifestFormatError):
    """A manifest could not be read or written."""
