"""Command-line entry point: ``scaffold <NAME>``.

Exit codes: 0 on success, 2 for a usage error, 3 when the template could not
be copied, 4 when a manifest edit failed.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from member_scaffold.config import ScaffoldConfig
from member_scaffold.scaffolder import MemberScaffolder, ScaffoldError, ScaffoldResult
from member_scaffold.scaffolder.errors import EXIT_OK, EXIT_USAGE
from member_scaffold.utils import print_error, print_success, print_summary_table, print_warning


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scaffold",
        description="Create a new workspace member from the template directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  scaffold 18-many-worlds\n"
            "  scaffold 18-many-worlds --root ~/aoc --template template\n"
            "  scaffold widget --manifest pyproject.toml --no-strict\n"
        ),
    )

    parser.add_argument(
        "name",
        help="Name of the new member (directory name and workspace entry)",
    )
    parser.add_argument(
        "--root",
        default=None,
        help="Workspace root (default: current directory or $SCAFFOLD_ROOT)",
    )
    parser.add_argument(
        "--template",
        default=None,
        help="Template directory, relative to the root (default: template)",
    )
    parser.add_argument(
        "--manifest",
        default=None,
        help="Member manifest file name inside the template (default: Cargo.toml)",
    )
    parser.add_argument(
        "--workspace-manifest",
        default=None,
        help="Workspace manifest, relative to the root (default: Cargo.toml)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON configuration file; other options override its values",
    )
    parser.add_argument(
        "--no-strict",
        action="store_true",
        help="Warn instead of failing when a manifest lacks the expected line",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Do not list copied files or print the summary",
    )
    return parser


def load_config(args: argparse.Namespace) -> ScaffoldConfig:
    """Combine the config file (or environment) with command-line overrides."""
    if args.config:
        base = ScaffoldConfig.load(Path(args.config))
    else:
        base = ScaffoldConfig.from_env()

    overrides: dict[str, Any] = {}
    if args.root is not None:
        overrides["root"] = Path(args.root)
    if args.template is not None:
        overrides["template_dir"] = Path(args.template)
    if args.manifest is not None:
        overrides["member_manifest"] = args.manifest
    if args.workspace_manifest is not None:
        overrides["workspace_manifest"] = Path(args.workspace_manifest)
    if args.no_strict:
        overrides["strict"] = False
    if args.quiet:
        overrides["verbose"] = False

    return ScaffoldConfig(**{**base.model_dump(), **overrides})


def _describe_edit(result: ScaffoldResult, which: str) -> str:
    edit = getattr(result, which)
    if edit.edited:
        return f"{edit.path} (line {edit.line_number})"
    return f"{edit.path} (unchanged)"


def print_result(result: ScaffoldResult) -> None:
    print_summary_table(
        {
            "Member": result.name,
            "Directory": str(result.destination),
            "Files copied": str(len(result.copied_files)),
            "Member manifest": _describe_edit(result, "member_manifest"),
            "Workspace manifest": _describe_edit(result, "workspace_manifest"),
        },
        title="Scaffolded member",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``scaffold`` and ``python -m member_scaffold``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
    except (OSError, ValidationError) as exc:
        print_error(f"Invalid configuration: {exc}")
        sys.exit(EXIT_USAGE)

    scaffolder = MemberScaffolder(config)
    try:
        result = scaffolder.scaffold(args.name)
    except ScaffoldError as exc:
        print_error(str(exc))
        sys.exit(exc.exit_code)

    if config.verbose:
        print_result(result)
    if result.success:
        print_success(f"Created member {result.name}")
    else:
        print_warning(f"Created {result.destination} with manifest edits missing")
    sys.exit(EXIT_OK)


if __name__ == "__main__":
    main()
