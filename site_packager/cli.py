from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from dataclasses import replace

from .foundation.config_io import load_config
from .foundation.logging_utils import configure_stdio_utf8, generate_run_id, setup_operational_logger
from .framework.config import PackagerConfig
from .framework.errors import PackagingError


SUBCOMMANDS = frozenset({"package", "detect"})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="site-packager",
        description="Package a web project's build output into a ZIP archive next to the project.",
    )
    sub = parser.add_subparsers(dest="command")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--project-dir", default=None, help="Project root (default: current directory)")
    common.add_argument("--config", default=None, help="YAML settings file (default: site_packager.yaml in the project)")

    package = sub.add_parser("package", parents=[common], help="Build/copy, then write the ZIP archive (default)")
    package.add_argument("--log-dir", default=None, help="Also write a UTF-8 operational log to this directory")

    sub.add_parser("detect", parents=[common], help="Print whether the project is 'framework' or 'static'")

    return parser


def _load_settings(args: argparse.Namespace, *, script_name: str | None) -> tuple[PackagerConfig, list[str], dict]:
    project_dir = args.project_dir or os.getcwd()
    cfg_dict, meta = load_config(project_dir, config_path=args.config)
    cfg, warnings = PackagerConfig.from_dict(cfg_dict, source_dir=project_dir)
    if script_name and "script_name" not in (cfg_dict.get("project") or {}):
        cfg = replace(cfg, script_name=script_name)
    return cfg, warnings, meta


def main(argv: Sequence[str] | None = None, *, script_name: str | None = None) -> int:
    """
    Entry point. `script_name` is the file name of a launcher living inside
    the project, so the static copy leaves it out of the archive.
    """

    argv = list(argv) if argv is not None else sys.argv[1:]
    if not argv or argv[0] not in SUBCOMMANDS | {"-h", "--help"}:
        # Options may precede the subcommand; `package` is the default.
        command = next((arg for arg in argv if arg in SUBCOMMANDS), "package")
        rest = list(argv)
        if command in rest:
            rest.remove(command)
        argv = [command, *rest]
    args = build_parser().parse_args(argv)

    configure_stdio_utf8()

    try:
        cfg, warnings, meta = _load_settings(args, script_name=script_name)
    except (OSError, ValueError) as exc:
        print(f"Invalid settings: {exc}", file=sys.stderr)
        return 1

    if args.command == "detect":
        from .framework.detect import detect_project_type

        print(detect_project_type(cfg.source_dir, manifest_name=cfg.manifest_name, source_subdir=cfg.source_subdir))
        return 0

    if args.command == "package":
        from .app.package import run_packaging

        log_dir = args.log_dir or cfg.log_dir
        logger, _log_file = setup_operational_logger(generate_run_id(), log_dir)
        if meta.get("paths"):
            logger.info("Loaded settings (%s) from %s", meta["mode"], ", ".join(meta["paths"]))
        for warning in warnings:
            logger.warning("%s", warning)

        try:
            result = run_packaging(cfg, logger=logger)
        except (PackagingError, OSError) as exc:
            logger.error("Packaging failed: %s", exc)
            return 1
        except Exception as exc:  # noqa: BLE001
            logger.exception("Packaging failed: %s", exc)
            return 1

        print(f"Packaging succeeded! Archive written to: {result.zip_path}")
        return 0

    raise AssertionError(f"Unhandled command: {args.command}")


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main(sys.argv[1:]))
