"""Shared pytest fixtures for the member scaffold test suite.

Provides reusable fixtures for:
- A temporary workspace with a template directory and a root manifest
- A ``ScaffoldConfig`` / ``MemberScaffolder`` pointed at that workspace
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from member_scaffold.config import ScaffoldConfig
from member_scaffold.scaffolder import MemberScaffolder


# ---------------------------------------------------------------------------
# Manifest contents
# ---------------------------------------------------------------------------

MEMBER_MANIFEST = textwrap.dedent("""\
    [package]
    name = "template"
    version = "0.1.0"
    edition = "2018"

    [dependencies]
    intcode = { path = "../intcode" }
""")

WORKSPACE_MANIFEST = textwrap.dedent("""\
    [workspace]

    members = [
        "intcode",
        "01-tyranny-of-the-rocket-equation",
        "02-1202-program-alarm",
    ]

    [profile.release]
    debug = true
""")


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------

@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Temporary workspace root laid out like the real repository.

    ``template/`` holds ``a.txt``, ``sub/b.txt``, a dot-file and a member
    manifest; the root holds the workspace manifest.
    """
    root = tmp_path / "workspace"
    template = root / "template"
    (template / "sub").mkdir(parents=True)
    (template / "a.txt").write_text("alpha\n", encoding="utf-8")
    (template / "sub" / "b.txt").write_text("beta\n", encoding="utf-8")
    (template / ".gitignore").write_text("/target\n", encoding="utf-8")
    (template / "Cargo.toml").write_text(MEMBER_MANIFEST, encoding="utf-8")
    (root / "Cargo.toml").write_text(WORKSPACE_MANIFEST, encoding="utf-8")
    yield root


@pytest.fixture
def scaffold_config(workspace: Path) -> ScaffoldConfig:
    """Quiet configuration rooted at the temporary workspace."""
    return ScaffoldConfig(root=workspace, verbose=False)


@pytest.fixture
def scaffolder(scaffold_config: ScaffoldConfig) -> MemberScaffolder:
    return MemberScaffolder(scaffold_config)


def relative_files(root: Path) -> set[str]:
    """Every regular file under *root*, as POSIX paths relative to it."""
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}
