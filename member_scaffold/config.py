"""Member scaffold configuration.

Typed configuration for the scaffolder. Settings use a Pydantic v2 model so
they are validated at construction time and can be serialised to/from JSON or
read from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

_FALSY = {"0", "false", "no", "off"}


class ScaffoldConfig(BaseModel):
    """Where the template, the new member and the workspace manifest live.

    Relative ``template_dir`` and ``workspace_manifest`` values are resolved
    against ``root``. Instances are usually built once by the CLI entry point
    and handed to ``MemberScaffolder``.
    """

    root: Path = Field(default=Path("."), description="Workspace root directory")
    template_dir: Path = Field(default=Path("template"))
    member_manifest: str = Field(
        default="Cargo.toml", description="Manifest file name inside each member"
    )
    workspace_manifest: Path = Field(default=Path("Cargo.toml"))
    strict: bool = Field(
        default=True, description="Treat a missing manifest line as an error"
    )
    verbose: bool = Field(default=True, description="List every copied file")

    @field_validator("member_manifest")
    @classmethod
    def _check_member_manifest(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("member_manifest must not be empty")
        if "/" in value or "\\" in value:
            raise ValueError("member_manifest must be a plain file name")
        return value

    @field_validator("template_dir", "workspace_manifest")
    @classmethod
    def _check_path(cls, value: Path) -> Path:
        if not str(value).strip() or value == Path("."):
            raise ValueError("path must name a file or directory")
        return value

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def template_path(self) -> Path:
        """Absolute-or-root-relative path of the template directory."""
        return self.root / self.template_dir

    @property
    def workspace_manifest_path(self) -> Path:
        """Path of the root manifest holding the member list."""
        return self.root / self.workspace_manifest

    def destination_for(self, name: str) -> Path:
        """Directory a member called *name* is scaffolded into."""
        return self.root / name

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Parent directories are created.

        Returns:
            The path that was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ScaffoldConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            SCAFFOLD_ROOT, SCAFFOLD_TEMPLATE_DIR, SCAFFOLD_MEMBER_MANIFEST,
            SCAFFOLD_WORKSPACE_MANIFEST, SCAFFOLD_STRICT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SCAFFOLD_ROOT"):
            kwargs["root"] = Path(os.environ["SCAFFOLD_ROOT"])
        if os.environ.get("SCAFFOLD_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["SCAFFOLD_TEMPLATE_DIR"])
        if os.environ.get("SCAFFOLD_MEMBER_MANIFEST"):
            kwargs["member_manifest"] = os.environ["SCAFFOLD_MEMBER_MANIFEST"]
        if os.environ.get("SCAFFOLD_WORKSPACE_MANIFEST"):
            kwargs["workspace_manifest"] = Path(os.environ["SCAFFOLD_WORKSPACE_MANIFEST"])
        if os.environ.get("SCAFFOLD_STRICT"):
            kwargs["strict"] = os.environ["SCAFFOLD_STRICT"].strip().lower() not in _FALSY
        return cls(**kwargs)
