"""Integration tests for the ``scaffold`` command.

These run the installed entry point logic end-to-end against a workspace laid
out like a multi-crate repository (template crate, shared library crate and
numbered puzzle crates) and check the files the command leaves behind.
"""

from __future__ import annotations

import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

from member_scaffold.cli import main
from member_scaffold.utils import console


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_repository(root: Path) -> Path:
    """Create a workspace with ``template/`` and a root ``Cargo.toml``."""
    template = root / "template"
    (template / "src").mkdir(parents=True)
    (template / "src" / "main.rs").write_text(
        'fn main() {\n    println!("Please supply input file!");\n}\n', encoding="utf-8"
    )
    (template / ".gitignore").write_text("/target\n**/*.rs.bk\n", encoding="utf-8")
    (template / "Cargo.toml").write_text(
        textwrap.dedent("""\
            [package]
            name = "template"
            version = "0.1.0"
            authors = ["Someone <someone@example.com>"]
            edition = "2018"

            [dependencies]
            aoc_util = { git = "https://example.com/aoc_util" }
        """),
        encoding="utf-8",
    )
    (root / "Cargo.toml").write_text(
        textwrap.dedent("""\
            [workspace]

            members = [
                "intcode",
                "01-tyranny-of-the-rocket-equation",
            ]
        """),
        encoding="utf-8",
    )
    return root


def _scaffold(root: Path, name: str) -> int:
    with console.capture():
        with pytest.raises(SystemExit) as excinfo:
            main([name, "--root", str(root)])
    return excinfo.value.code


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

@pytest.mark.integration
class TestScaffoldEndToEnd:
    def test_new_puzzle_crate(self, tmp_path: Path):
        root = _make_repository(tmp_path)

        assert _scaffold(root, "02-1202-program-alarm") == 0

        crate = root / "02-1202-program-alarm"
        assert (crate / "src" / "main.rs").read_text(encoding="utf-8") == (
            root / "template" / "src" / "main.rs"
        ).read_text(encoding="utf-8")
        assert (crate / ".gitignore").exists()

        manifest_lines = (crate / "Cargo.toml").read_text(encoding="utf-8").splitlines()
        template_lines = (root / "template" / "Cargo.toml").read_text(encoding="utf-8").splitlines()
        assert manifest_lines[1] == 'name = "02-1202-program-alarm"'
        assert manifest_lines[:1] + manifest_lines[2:] == template_lines[:1] + template_lines[2:]

        assert (root / "Cargo.toml").read_text(encoding="utf-8") == textwrap.dedent("""\
            [workspace]

            members = [
                "intcode",
                "01-tyranny-of-the-rocket-equation",
                "02-1202-program-alarm",
            ]
        """)

    def test_several_members_in_sequence(self, tmp_path: Path):
        root = _make_repository(tmp_path)
        names = ["03-crossed-wires", "04-secure-container", "05-sunny-with-a-chance-of-asteroids"]

        for name in names:
            assert _scaffold(root, name) == 0

        content = (root / "Cargo.toml").read_text(encoding="utf-8")
        positions = [content.index(f'    "{name}",\n') for name in names]
        assert positions == sorted(positions)
        assert content.endswith('    "05-sunny-with-a-chance-of-asteroids",\n]\n')

    def test_repeat_is_rejected(self, tmp_path: Path):
        root = _make_repository(tmp_path)
        assert _scaffold(root, "06-universal-orbit-map") == 0
        before = (root / "Cargo.toml").read_text(encoding="utf-8")

        assert _scaffold(root, "06-universal-orbit-map") == 3
        assert (root / "Cargo.toml").read_text(encoding="utf-8") == before

    def test_module_entry_point(self, tmp_path: Path):
        root = _make_repository(tmp_path)

        completed = subprocess.run(
            [sys.executable, "-m", "member_scaffold", "widget", "--root", str(root), "-q"],
            capture_output=True,
            text=True,
            timeout=60,
        )

        assert completed.returncode == 0, completed.stderr
        assert (root / "widget" / "Cargo.toml").exists()
