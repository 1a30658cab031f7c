from __future__ import annotations

import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping


DEFAULT_OUTPUT_NAME = "slm-static-dist"
DEFAULT_MANIFEST_NAME = "package.json"
DEFAULT_SOURCE_SUBDIR = "src"
DEFAULT_BUILD_COMMAND: tuple[str, ...] = ("npm", "run", "build")
DEFAULT_BUILD_DIRS: tuple[str, ...] = ("dist", "build")
DEFAULT_HOMEPAGE = "./"
DEFAULT_SCRIPT_NAME = "package_site.py"
DEFAULT_README_NAME = "使用说明.txt"
DEFAULT_README_TEXT = (
    "1. 解压本ZIP包到任意文件夹。\n"
    "2. 使用Chrome、Firefox或Edge浏览器，双击打开解压后的 index.html 文件。\n"
    "3. 若部分功能（如图表、导出）无法使用，请确保电脑已连接互联网。"
)
DEFAULT_COMPRESSION_LEVEL = 9


def parse_bool(value: Any, path: str) -> bool:
    """
    Strict boolean parsing to avoid bool('false') footguns.

    Accepts True/False, 0/1 and the strings true/false/1/0/yes/no
    (case-insensitive). Raises ValueError naming `path` for anything else.
    """

    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"Invalid boolean for {path}: {value!r}")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"true", "1", "yes"}:
            return True
        if normalized in {"false", "0", "no"}:
            return False
        raise ValueError(f"Invalid boolean for {path}: {value!r}")

    raise ValueError(f"Invalid boolean for {path}: {value!r}")


def parse_int(value: Any, path: str) -> int:
    if value is None:
        raise ValueError(f"Invalid config value for {path}: None")
    if isinstance(value, bool):
        raise ValueError(f"Invalid config type for {path}: expected int, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        if not value.strip():
            raise ValueError(f"Invalid config value for {path}: must be an int")
        try:
            return int(value.strip())
        except ValueError as exc:
            raise ValueError(f"Invalid config value for {path}: must be an int") from exc
    raise ValueError(f"Invalid config type for {path}: expected int")


def parse_str(value: Any, path: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid config value for {path}: must be a non-empty string")
    return value.strip()


def parse_name(value: Any, path: str) -> str:
    """A single path component: no separators, not '.' or '..'."""
    name = parse_str(value, path)
    if name in {".", ".."} or "/" in name or "\\" in name:
        raise ValueError(f"Invalid config value for {path}: must be a plain file name, got {name!r}")
    return name


def parse_str_list(value: Any, path: str) -> tuple[str, ...]:
    if isinstance(value, str):
        items = shlex.split(value)
    elif isinstance(value, (list, tuple)):
        items = []
        for idx, item in enumerate(value):
            if not isinstance(item, str) or not item.strip():
                raise ValueError(f"Invalid config value for {path}[{idx}]: must be a non-empty string")
            items.append(item.strip())
    else:
        raise ValueError(f"Invalid config type for {path}: expected string or list of strings")
    if not items:
        raise ValueError(f"Invalid config value for {path}: must not be empty")
    return tuple(items)


@dataclass(frozen=True)
class PackagerConfig:
    """Paths and settings for one packaging run, fixed at startup."""

    source_dir: Path
    output_name: str = DEFAULT_OUTPUT_NAME
    manifest_name: str = DEFAULT_MANIFEST_NAME
    source_subdir: str = DEFAULT_SOURCE_SUBDIR
    build_command: tuple[str, ...] = DEFAULT_BUILD_COMMAND
    build_dir_candidates: tuple[str, ...] = DEFAULT_BUILD_DIRS
    homepage_value: str = DEFAULT_HOMEPAGE
    script_name: str = DEFAULT_SCRIPT_NAME
    readme_name: str = DEFAULT_README_NAME
    readme_text: str = DEFAULT_README_TEXT
    compression_level: int = DEFAULT_COMPRESSION_LEVEL
    log_dir: str | None = None

    @property
    def parent_dir(self) -> Path:
        return self.source_dir.parent

    @property
    def output_dir(self) -> Path:
        return self.parent_dir / self.output_name

    @property
    def zip_path(self) -> Path:
        return self.parent_dir / f"{self.output_name}.zip"

    @property
    def manifest_path(self) -> Path:
        return self.source_dir / self.manifest_name

    @staticmethod
    def from_dict(
        cfg: Mapping[str, Any],
        *,
        source_dir: str | os.PathLike[str],
    ) -> tuple["PackagerConfig", list[str]]:
        """
        Parse and validate settings, returning (PackagerConfig, warnings).

        Raises:
            ValueError: if a key has an invalid value, or on unknown keys when
            `strict: true` is set.
        """

        if not isinstance(cfg, Mapping):
            raise ValueError("Config must be a mapping")

        warnings: list[str] = []

        strict_unknown_keys = False
        if "strict" in cfg:
            strict_unknown_keys = parse_bool(cfg.get("strict"), "strict")

        schema: Mapping[str, Any] = {
            "strict": None,
            "output": {"name": None, "log_dir": None},
            "project": {"manifest": None, "source_dir": None, "script_name": None},
            "build": {"command": None, "output_dirs": None, "homepage": None},
            "readme": {"name": None, "text": None},
            "archive": {"compression_level": None},
        }

        def collect_unknown_keys(mapping: Any, subschema: Mapping[str, Any], *, prefix: str) -> list[str]:
            if not isinstance(mapping, Mapping):
                return []
            unknown: list[str] = []
            for key, value in mapping.items():
                key_path = f"{prefix}.{key}" if prefix else str(key)
                if key not in subschema:
                    unknown.append(key_path)
                    continue
                nested = subschema.get(key)
                if isinstance(nested, Mapping):
                    unknown.extend(collect_unknown_keys(value, nested, prefix=key_path))
            return unknown

        unknown_keys = collect_unknown_keys(cfg, schema, prefix="")
        if unknown_keys:
            message = "Unknown config keys: " + ", ".join(sorted(unknown_keys))
            if strict_unknown_keys:
                raise ValueError(message)
            warnings.append(message)

        def section(name: str) -> Mapping[str, Any]:
            value = cfg.get(name)
            if value is None:
                return {}
            if not isinstance(value, Mapping):
                raise ValueError(f"Invalid config type for {name}: expected mapping")
            return value

        output_cfg = section("output")
        project_cfg = section("project")
        build_cfg = section("build")
        readme_cfg = section("readme")
        archive_cfg = section("archive")

        kwargs: dict[str, Any] = {}

        if "name" in output_cfg:
            kwargs["output_name"] = parse_name(output_cfg["name"], "output.name")
        if output_cfg.get("log_dir") is not None:
            kwargs["log_dir"] = parse_str(output_cfg["log_dir"], "output.log_dir")

        if "manifest" in project_cfg:
            kwargs["manifest_name"] = parse_name(project_cfg["manifest"], "project.manifest")
        if "source_dir" in project_cfg:
            kwargs["source_subdir"] = parse_name(project_cfg["source_dir"], "project.source_dir")
        if "script_name" in project_cfg:
            kwargs["script_name"] = parse_name(project_cfg["script_name"], "project.script_name")

        if "command" in build_cfg:
            kwargs["build_command"] = parse_str_list(build_cfg["command"], "build.command")
        if "output_dirs" in build_cfg:
            output_dirs = build_cfg["output_dirs"]
            if isinstance(output_dirs, str):
                output_dirs = [output_dirs]
            if not isinstance(output_dirs, (list, tuple)) or not output_dirs:
                raise ValueError("Invalid config value for build.output_dirs: must be a non-empty list")
            kwargs["build_dir_candidates"] = tuple(
                parse_name(item, f"build.output_dirs[{idx}]") for idx, item in enumerate(output_dirs)
            )
        if "homepage" in build_cfg:
            kwargs["homepage_value"] = parse_str(build_cfg["homepage"], "build.homepage")

        if "name" in readme_cfg:
            kwargs["readme_name"] = parse_name(readme_cfg["name"], "readme.name")
        if "text" in readme_cfg:
            text = readme_cfg["text"]
            if not isinstance(text, str):
                raise ValueError("Invalid config type for readme.text: expected string")
            kwargs["readme_text"] = text

        if "compression_level" in archive_cfg:
            level = parse_int(archive_cfg["compression_level"], "archive.compression_level")
            if not 0 <= level <= 9:
                raise ValueError(f"Invalid config value for archive.compression_level: {level} (expected 0..9)")
            kwargs["compression_level"] = level

        return PackagerConfig(source_dir=Path(source_dir).resolve(), **kwargs), warnings
