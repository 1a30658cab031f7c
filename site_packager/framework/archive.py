from __future__ import annotations

import logging
import os
import zipfile
from dataclasses import dataclass, field
from pathlib import Path

from site_packager.framework.errors import ArchiveError


@dataclass(frozen=True)
class ArchiveResult:
    path: Path
    size_bytes: int
    entries: tuple[str, ...] = ()
    skipped: tuple[str, ...] = field(default_factory=tuple)

    @property
    def size_mib(self) -> float:
        return round(self.size_bytes / 1024 / 1024, 2)


def iter_archive_members(source_dir: Path):
    """Yield (path, arcname) for every file and empty directory, sorted, POSIX arcnames."""
    for current, dirnames, filenames in os.walk(source_dir):
        dirnames.sort()
        current_path = Path(current)
        if current_path != source_dir and not dirnames and not filenames:
            yield current_path, current_path.relative_to(source_dir).as_posix() + "/"
        for name in sorted(filenames):
            path = current_path / name
            yield path, path.relative_to(source_dir).as_posix()


def create_zip(
    source_dir: str | os.PathLike[str],
    zip_path: str | os.PathLike[str],
    *,
    compression_level: int = 9,
    logger: logging.Logger,
) -> ArchiveResult:
    """
    Compress everything under `source_dir` into `zip_path`.

    Entries are relative to `source_dir` itself (no wrapping folder). A file
    that disappears while the archive is written is logged and skipped; any
    other error propagates. The call returns only after the archive file has
    been closed.
    """

    src = Path(source_dir)
    out = Path(zip_path)
    if not src.is_dir():
        raise ArchiveError(f"Archive source is not a directory: {src}")

    logger.info("Compressing %s", src)
    entries: list[str] = []
    skipped: list[str] = []

    with zipfile.ZipFile(out, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=compression_level) as zf:
        for path, arcname in iter_archive_members(src):
            try:
                zf.write(path, arcname)
            except FileNotFoundError as exc:
                logger.warning("Archive warning: %s vanished before it could be added (%s)", arcname, exc)
                skipped.append(arcname)
                continue
            entries.append(arcname)

    result = ArchiveResult(
        path=out,
        size_bytes=out.stat().st_size,
        entries=tuple(entries),
        skipped=tuple(skipped),
    )
    logger.info("ZIP file created: %s (%.2f MB)", out, result.size_mib)
    return result
