from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from site_packager.framework.config import DEFAULT_MANIFEST_NAME, DEFAULT_SOURCE_SUBDIR


ProjectType = Literal["framework", "static"]


def is_framework_project(
    source_dir: str | os.PathLike[str],
    *,
    manifest_name: str = DEFAULT_MANIFEST_NAME,
    source_subdir: str = DEFAULT_SOURCE_SUBDIR,
) -> bool:
    """True only when both the manifest and the source subdirectory exist."""
    root = Path(source_dir)
    return (root / manifest_name).exists() and (root / source_subdir).exists()


def detect_project_type(
    source_dir: str | os.PathLike[str],
    *,
    manifest_name: str = DEFAULT_MANIFEST_NAME,
    source_subdir: str = DEFAULT_SOURCE_SUBDIR,
) -> ProjectType:
    if is_framework_project(source_dir, manifest_name=manifest_name, source_subdir=source_subdir):
        return "framework"
    return "static"
