"""Main scaffolding orchestrator.

Copies the template directory to a new member directory, points the member
manifest's ``name`` field at the new member, and registers the member in the
workspace manifest. The steps run in order and each one must succeed before
the next is attempted. Nothing is rolled back: a failed manifest edit leaves
the copied directory on disk.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from pydantic import BaseModel, Field, computed_field

from member_scaffold.config import ScaffoldConfig
from member_scaffold.utils import member_name_problem, print_copied, print_warning

from .errors import CopyError, ManifestFormatError, UsageError
from .manifest import (
    EditResult,
    insert_workspace_member,
    is_workspace_member,
    rewrite_name_field,
)


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


class ScaffoldResult(BaseModel):
    """What a scaffolding run created and edited."""

    name: str
    destination: Path
    copied_files: list[str] = Field(
        default_factory=list, description="Copied files and links, relative to the destination"
    )
    member_manifest: EditResult
    workspace_manifest: EditResult

    @computed_field  # type: ignore[misc]
    @property
    def success(self) -> bool:
        """True when the member was renamed and registered."""
        return self.member_manifest.edited and self.workspace_manifest.edited


# ---------------------------------------------------------------------------
# Scaffolder
# ---------------------------------------------------------------------------


class MemberScaffolder:
    """Creates a new workspace member from the template directory.

    The workspace manifest is taken from the configuration rather than from
    the process working directory, so a scaffolder can be pointed at any
    workspace (tests use a temporary one).

    Concurrent runs against the same workspace are not coordinated: two runs
    with the same name race on the directory, and any two runs race on the
    workspace manifest.
    """

    def __init__(self, config: ScaffoldConfig | None = None) -> None:
        self.config = config or ScaffoldConfig()

    # -- Public API --------------------------------------------------------

    def scaffold(self, name: str | None) -> ScaffoldResult:
        """Create, rename and register the member *name*.

        Args:
            name: The new member's name; used verbatim as the directory name
                and as the quoted workspace entry.

        Returns:
            A ``ScaffoldResult``. With ``strict`` disabled a missing manifest
            line gives a warning and a result whose ``success`` is ``False``.

        Raises:
            UsageError: *name* is missing or invalid. Nothing was changed.
            CopyError: The template could not be copied. No manifest was edited.
            ManifestFormatError: *name* is already registered or the workspace
                manifest is unreadable, in which case nothing was created; or
                an edit failed after the copy (strict mode, missing file, I/O
                failure), in which case the copied directory stays and the
                message names it.
        """
        problem = member_name_problem(name)
        if problem:
            raise UsageError(problem)
        assert name is not None  # guaranteed by member_name_problem

        destination = self.config.destination_for(name)
        self._check_copy(destination)
        workspace_manifest = self.config.workspace_manifest_path
        if is_workspace_member(workspace_manifest, name):
            raise ManifestFormatError(
                f'"{name}" is already listed in {workspace_manifest}; nothing was created',
                path=workspace_manifest,
            )

        # 1. Copy the template tree
        copied = self.copy_template(destination)

        # 2. Rename the member
        try:
            member_result = rewrite_name_field(destination / self.config.member_manifest, name)
        except ManifestFormatError as exc:
            raise type(exc)(
                f"{exc}; {destination} was created but not renamed", path=exc.path
            ) from exc
        self._check_edit(
            member_result,
            f"no 'name = \"...\"' line in {member_result.path}; "
            f"{destination} was created but not renamed",
        )

        # 3. Register the member
        try:
            workspace_result = insert_workspace_member(workspace_manifest, name)
        except ManifestFormatError as exc:
            raise type(exc)(
                f"{exc}; {destination} was created but not registered", path=exc.path
            ) from exc
        self._check_edit(
            workspace_result,
            f"no line consisting of ']' in {workspace_result.path}; "
            f"{destination} was created but not registered",
        )

        return ScaffoldResult(
            name=name,
            destination=destination,
            copied_files=copied,
            member_manifest=member_result,
            workspace_manifest=workspace_result,
        )

    def copy_template(self, destination: Path) -> list[str]:
        """Recursively copy the template to *destination*.

        Hidden entries are copied like any other; symlinks are copied as
        links. When ``verbose`` is set each copied file or link is printed as
        ``'src' -> 'dst'``.

        Returns:
            The copied files and links as POSIX paths relative to
            *destination*, in copy order.

        Raises:
            CopyError: If the template is missing or not a directory, the
                destination exists, or the copy fails.
        """
        template = self.config.template_path
        self._check_copy(destination)

        copied: list[str] = []

        def _record(src: str, dst: str) -> None:
            copied.append(Path(os.path.relpath(dst, destination)).as_posix())
            if self.config.verbose:
                print_copied(src, dst)

        def _copy(src: str, dst: str) -> str:
            result = shutil.copy2(src, dst)
            _record(src, dst)
            return result

        # copytree recreates links itself without calling copy_function, so
        # they are listed from the ignore hook, which sees every directory.
        def _list_links(directory: str, names: list[str]) -> set[str]:
            target_dir = destination / os.path.relpath(directory, template)
            for entry in names:
                source = os.path.join(directory, entry)
                if os.path.islink(source):
                    _record(source, os.path.normpath(target_dir / entry))
            return set()

        try:
            shutil.copytree(
                template,
                destination,
                symlinks=True,
                ignore=_list_links,
                copy_function=_copy,
            )
        except FileExistsError as exc:
            raise CopyError(
                f"Destination already exists: {destination}",
                source=template,
                destination=destination,
            ) from exc
        except OSError as exc:
            raise CopyError(
                f"Failed to copy {template} to {destination}: {exc}",
                source=template,
                destination=destination,
            ) from exc

        return copied

    # -- Internal helpers --------------------------------------------------

    def _check_copy(self, destination: Path) -> None:
        template = self.config.template_path
        if not template.is_dir():
            raise CopyError(
                f"Template directory not found: {template}",
                source=template,
                destination=destination,
            )
        if destination.exists() or destination.is_symlink():
            raise CopyError(
                f"Destination already exists: {destination}",
                source=template,
                destination=destination,
            )

    def _check_edit(self, result: EditResult, message: str) -> None:
        if result.edited:
            return
        if self.config.strict:
            raise ManifestFormatError(message, path=result.path)
        print_warning(f"Warning: {message}")
