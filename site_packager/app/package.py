from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from site_packager.framework.archive import ArchiveResult, create_zip
from site_packager.framework.config import PackagerConfig
from site_packager.framework.detect import ProjectType, detect_project_type
from site_packager.framework.runner import CommandRunner, SubprocessRunner
from site_packager.framework.strategies import package_framework_project, package_static_project
from site_packager.framework.workspace import (
    cleanup_previous_outputs,
    prepare_output_dir,
    remove_output_dir,
    write_readme,
)


@dataclass(frozen=True)
class PackagingResult:
    project_type: ProjectType
    zip_path: Path
    archive: ArchiveResult


def run_packaging(
    cfg: PackagerConfig,
    *,
    logger: logging.Logger,
    runner: CommandRunner | None = None,
) -> PackagingResult:
    """
    Run the full packaging pipeline for `cfg.source_dir`.

    Any failure propagates to the caller. The staging directory is only
    removed once the archive has been written; after a failure it is left on
    disk as-is.
    """

    runner = runner or SubprocessRunner()
    phase = "init"

    logger.info("Source directory: %s", cfg.source_dir)
    logger.info("Output directory: %s", cfg.output_dir)

    try:
        phase = "cleanup"
        cleanup_previous_outputs(cfg, logger)

        phase = "prepare"
        prepare_output_dir(cfg, logger)

        phase = "detect"
        project_type = detect_project_type(
            cfg.source_dir,
            manifest_name=cfg.manifest_name,
            source_subdir=cfg.source_subdir,
        )

        phase = "produce"
        if project_type == "framework":
            logger.info("Detected framework project; running build")
            package_framework_project(cfg, runner, logger)
        else:
            logger.info("Detected static project; copying files")
            package_static_project(cfg, logger)

        phase = "readme"
        write_readme(cfg, logger)

        phase = "archive"
        archive = create_zip(
            cfg.output_dir,
            cfg.zip_path,
            compression_level=cfg.compression_level,
            logger=logger,
        )

        phase = "final_cleanup"
        remove_output_dir(cfg, logger)
    except Exception:
        logger.debug("Packaging stopped during phase=%s", phase)
        raise

    logger.info("Packaging succeeded: %s", cfg.zip_path)
    return PackagingResult(project_type=project_type, zip_path=cfg.zip_path, archive=archive)
