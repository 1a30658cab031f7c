"""Staging directory lifecycle: pre-run cleanup, creation, usage note, removal."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from site_packager.framework.config import PackagerConfig


def _remove_path(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def cleanup_previous_outputs(cfg: PackagerConfig, logger: logging.Logger) -> None:
    """Best effort: failures are logged as warnings and never abort the run."""
    for label, path in (("output directory", cfg.output_dir), ("ZIP file", cfg.zip_path)):
        try:
            if path.exists() or path.is_symlink():
                _remove_path(path)
                logger.info("Removed previous %s: %s", label, path)
        except OSError as exc:
            logger.warning("Could not remove previous %s %s: %s", label, path, exc)


def prepare_output_dir(cfg: PackagerConfig, logger: logging.Logger) -> Path:
    cfg.output_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Output directory ready: %s", cfg.output_dir)
    return cfg.output_dir


def write_readme(cfg: PackagerConfig, logger: logging.Logger) -> Path:
    readme_path = cfg.output_dir / cfg.readme_name
    readme_path.write_text(cfg.readme_text, encoding="utf-8")
    logger.info("Wrote usage note %s", readme_path.name)
    return readme_path


def remove_output_dir(cfg: PackagerConfig, logger: logging.Logger) -> None:
    shutil.rmtree(cfg.output_dir)
    logger.info("Removed staging directory %s", cfg.output_dir)
