"""Member scaffolder -- creates new workspace members from a template.

Quick usage::

    from pathlib import Path

    from member_scaffold.config import ScaffoldConfig
    from member_scaffold.scaffolder import MemberScaffolder

    scaffolder = MemberScaffolder(ScaffoldConfig(root=Path("/path/to/workspace")))
    result = scaffolder.scaffold("18-many-worlds")
"""

from member_scaffold.scaffolder.errors import (
    CopyError,
    ManifestFormatError,
    ManifestIOError,
    ScaffoldError,
    UsageError,
)
from member_scaffold.scaffolder.generator import MemberScaffolder, ScaffoldResult
from member_scaffold.scaffolder.manifest import (
    EditResult,
    EditStatus,
    insert_workspace_member,
    is_workspace_member,
    rewrite_name_field,
)

__all__ = [
    "CopyError",
    "EditResult",
    "EditStatus",
    "ManifestFormatError",
    "ManifestIOError",
    "MemberScaffolder",
    "ScaffoldError",
    "ScaffoldResult",
    "UsageError",
    "insert_workspace_member",
    "is_workspace_member",
    "rewrite_name_field",
]
