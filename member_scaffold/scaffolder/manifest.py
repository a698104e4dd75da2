"""Line-oriented edits of member and workspace manifests.

The manifests are never parsed: each edit reads the file as a list of lines
(line endings kept), rewrites or inserts exactly one line, and writes the
file back, so every untouched line stays byte-identical. Whether the expected
line was found is reported through an ``EditResult`` rather than silently
ignored; read and write failures raise ``ManifestIOError``.
"""

from __future__ import annotations

import io
import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, computed_field

from .errors import ManifestFormatError, ManifestIOError

# ``name = "<value>"`` at the start of a line; the value may not contain quotes.
NAME_LINE = re.compile(r'^(?P<prefix>name\s*=\s*)"(?P<value>[^"]*)"(?P<suffix>.*)$')

LIST_TERMINATOR = "]"
# ``members = [`` or ``members = ["a",``: the line that opens a list block.
LIST_OPENER = re.compile(r"^\s*[\w.-]+\s*=\s*\[")
MEMBER_INDENT = "    "


class EditStatus(str, Enum):
    """Whether an edit found the line it looks for."""

    EDITED = "edited"
    PATTERN_NOT_FOUND = "pattern_not_found"


class EditResult(BaseModel):
    """Outcome of a single manifest edit."""

    path: Path = Field(..., description="Manifest that was inspected")
    status: EditStatus
    line_number: int | None = Field(
        default=None, ge=1, description="1-based line that was rewritten or inserted"
    )
    old_line: str = Field(default="", description="Previous content, without line ending")
    new_line: str = Field(default="", description="New content, without line ending")

    @computed_field  # type: ignore[misc]
    @property
    def edited(self) -> bool:
        return self.status is EditStatus.EDITED


# ---------------------------------------------------------------------------
# Line helpers
# ---------------------------------------------------------------------------


def split_lines(text: str) -> list[str]:
    """Split *text* into lines, keeping ``\\n``, ``\\r\\n`` or ``\\r`` endings."""
    return io.StringIO(text, newline="").readlines()


def _split_ending(line: str) -> tuple[str, str]:
    for ending in ("\r\n", "\n", "\r"):
        if line.endswith(ending):
            return line[: -len(ending)], ending
    return line, ""


def _first_ending(lines: list[str]) -> str:
    for line in lines:
        _, ending = _split_ending(line)
        if ending:
            return ending
    return "\n"


def _read_lines(path: Path) -> list[str]:
    try:
        raw = path.read_bytes()
    except FileNotFoundError as exc:
        raise ManifestFormatError(f"Manifest not found: {path}", path=path) from exc
    except OSError as exc:
        raise ManifestIOError(f"Cannot read manifest {path}: {exc}", path=path) from exc
    try:
        return split_lines(raw.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise ManifestFormatError(f"Manifest is not valid UTF-8: {path}", path=path) from exc


def _write_lines(path: Path, lines: list[str]) -> None:
    try:
        path.write_bytes("".join(lines).encode("utf-8"))
    except OSError as exc:
        raise ManifestIOError(f"Cannot write manifest {path}: {exc}", path=path) from exc


# ---------------------------------------------------------------------------
# Edits
# ---------------------------------------------------------------------------


def rewrite_name_field(path: str | Path, name: str) -> EditResult:
    """Set the quoted value of the first ``name = "..."`` line to *name*.

    The key, the spacing around ``=`` and anything after the closing quote
    are kept as they were.

    Args:
        path: The member manifest.
        name: New value for the name field.

    Returns:
        An ``EditResult``; its status is ``PATTERN_NOT_FOUND`` (and the file
        is left untouched) when no line matches.

    Raises:
        ManifestFormatError: If the manifest is missing or not UTF-8.
        ManifestIOError: If the manifest cannot be read or written.
    """
    manifest = Path(path)
    lines = _read_lines(manifest)

    for index, line in enumerate(lines):
        body, ending = _split_ending(line)
        match = NAME_LINE.match(body)
        if match is None:
            continue
        new_body = f'{match["prefix"]}"{name}"{match["suffix"]}'
        lines[index] = new_body + ending
        _write_lines(manifest, lines)
        return EditResult(
            path=manifest,
            status=EditStatus.EDITED,
            line_number=index + 1,
            old_line=body,
            new_line=new_body,
        )

    return EditResult(path=manifest, status=EditStatus.PATTERN_NOT_FOUND)


def _find_terminator(lines: list[str]) -> int | None:
    for index, line in enumerate(lines):
        body, _ = _split_ending(line)
        if body == LIST_TERMINATOR:
            return index
    return None


def _list_block_contains(lines: list[str], entry: str) -> bool:
    """Check the lines above a terminator, back to the list's opening line.

    Comment lines are skipped, so brackets or names inside them neither end
    the block nor count as entries.
    """
    for line in reversed(lines):
        body, _ = _split_ending(line)
        if body.lstrip().startswith("#"):
            continue
        if entry in body:
            return True
        if LIST_OPENER.match(body):
            break
    return False


def is_workspace_member(path: str | Path, name: str) -> bool:
    """Return ``True`` if the list closed by the first ``]`` line holds *name*.

    Raises:
        ManifestFormatError: If the manifest is missing or not UTF-8.
        ManifestIOError: If the manifest cannot be read.
    """
    lines = _read_lines(Path(path))
    index = _find_terminator(lines)
    if index is None:
        return False
    return _list_block_contains(lines[:index], f'"{name}"')


def insert_workspace_member(path: str | Path, name: str) -> EditResult:
    """Insert ``    "<name>",`` directly above the first line that is only ``]``.

    The inserted line takes the terminator's line ending, or the file's first
    line ending when the terminator is the unterminated last line.

    Args:
        path: The workspace manifest.
        name: Member to register.

    Returns:
        An ``EditResult``; its status is ``PATTERN_NOT_FOUND`` (and the file
        is left untouched) when no terminator line exists.

    Raises:
        ManifestFormatError: If the manifest is missing, not UTF-8, or the
            list already contains the entry.
        ManifestIOError: If the manifest cannot be read or written.
    """
    manifest = Path(path)
    lines = _read_lines(manifest)
    entry = f'"{name}"'

    index = _find_terminator(lines)
    if index is None:
        return EditResult(path=manifest, status=EditStatus.PATTERN_NOT_FOUND)
    if _list_block_contains(lines[:index], entry):
        raise ManifestFormatError(f"{entry} is already listed in {manifest}", path=manifest)

    _, ending = _split_ending(lines[index])
    new_body = f"{MEMBER_INDENT}{entry},"
    lines.insert(index, new_body + (ending or _first_ending(lines)))
    _write_lines(manifest, lines)
    return EditResult(
        path=manifest,
        status=EditStatus.EDITED,
        line_number=index + 1,
        new_line=new_body,
    )
