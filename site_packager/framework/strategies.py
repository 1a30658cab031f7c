"""The two ways of filling the staging directory.

- framework projects: run the build command with a relative `homepage`, then
  copy the first build output directory found.
- static projects: copy every top-level entry of the project except the
  packaging script itself.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from site_packager.framework.config import PackagerConfig
from site_packager.framework.errors import BuildFailure, MissingArtifactError
from site_packager.framework.manifest import borrowed_manifest
from site_packager.framework.runner import CommandRunner


def copy_entry(src: Path, dest: Path) -> None:
    """Copy a file or a whole directory tree, merging into existing directories.

    Symlinks are followed so the staging tree holds only regular files and directories.
    """
    if src.is_dir():
        shutil.copytree(src, dest, dirs_exist_ok=True)
    else:
        shutil.copy2(src, dest)


def copy_tree_contents(src_dir: Path, dest_dir: Path) -> list[str]:
    copied: list[str] = []
    for entry in sorted(src_dir.iterdir(), key=lambda p: p.name):
        copy_entry(entry, dest_dir / entry.name)
        copied.append(entry.name)
    return copied


def run_build(cfg: PackagerConfig, runner: CommandRunner, logger: logging.Logger) -> None:
    command_text = " ".join(cfg.build_command)
    logger.info("Running %s in %s (this may take a while)", command_text, cfg.source_dir)

    try:
        result = runner.run(cfg.build_command, cwd=cfg.source_dir)
    except (OSError, subprocess.SubprocessError) as exc:
        raise BuildFailure(f"Could not run `{command_text}`: {exc}") from exc

    output = (result.output or "").rstrip()
    if output:
        logger.info("Build output:\n%s", output)

    if result.returncode != 0:
        tail = output[-2000:]
        raise BuildFailure(
            f"`{command_text}` exited with status {result.returncode}" + (f": {tail}" if tail else ""),
            returncode=result.returncode,
            output=output,
        )
    logger.info("Build finished")


def find_build_output(cfg: PackagerConfig) -> Path:
    """First existing candidate wins; later candidates are not inspected."""
    for name in cfg.build_dir_candidates:
        candidate = cfg.source_dir / name
        if candidate.is_dir():
            return candidate
    raise MissingArtifactError(
        "No build output directory found (looked for: " + ", ".join(cfg.build_dir_candidates) + ")"
    )


def package_framework_project(
    cfg: PackagerConfig,
    runner: CommandRunner,
    logger: logging.Logger,
) -> Path:
    """Build the project and copy its output into the staging directory.

    Returns the build output directory that was copied.
    """
    with borrowed_manifest(cfg.manifest_path, homepage=cfg.homepage_value, logger=logger):
        run_build(cfg, runner, logger)

        build_dir = find_build_output(cfg)
        logger.info("Found build output directory: %s", build_dir.name)

        logger.info("Copying build output to %s", cfg.output_dir)
        copy_tree_contents(build_dir, cfg.output_dir)
        logger.info("Build output copied")
    return build_dir


def package_static_project(cfg: PackagerConfig, logger: logging.Logger) -> list[str]:
    """Copy the project's top-level entries, skipping only the packaging script."""
    logger.info("Copying project files from %s", cfg.source_dir)
    copied: list[str] = []
    for entry in sorted(cfg.source_dir.iterdir(), key=lambda p: p.name):
        if entry.name == cfg.script_name:
            logger.debug("Skipping packaging script %s", entry.name)
            continue
        copy_entry(entry, cfg.output_dir / entry.name)
        logger.info("  copied: %s", entry.name)
        copied.append(entry.name)
    logger.info("Copied %d entries to %s", len(copied), cfg.output_dir)
    return copied
