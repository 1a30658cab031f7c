from pathlib import Path

import pytest

from site_packager.framework.config import PackagerConfig


def test_defaults_place_outputs_next_to_project(tmp_path: Path):
    root = tmp_path / "site"
    root.mkdir()

    cfg, warnings = PackagerConfig.from_dict({}, source_dir=root)

    assert warnings == []
    assert cfg.source_dir == root.resolve()
    assert cfg.output_dir == tmp_path.resolve() / "slm-static-dist"
    assert cfg.zip_path == tmp_path.resolve() / "slm-static-dist.zip"
    assert cfg.manifest_path == root.resolve() / "package.json"
    assert cfg.build_command == ("npm", "run", "build")
    assert cfg.build_dir_candidates == ("dist", "build")
    assert cfg.homepage_value == "./"
    assert cfg.compression_level == 9


def test_full_settings_are_parsed(tmp_path: Path):
    cfg, warnings = PackagerConfig.from_dict(
        {
            "output": {"name": "release", "log_dir": "logs"},
            "project": {"manifest": "manifest.json", "source_dir": "app", "script_name": "pack.py"},
            "build": {"command": "pnpm run build --mode prod", "output_dirs": ["out"], "homepage": "."},
            "readme": {"name": "README.txt", "text": "hello"},
            "archive": {"compression_level": "6"},
        },
        source_dir=tmp_path,
    )

    assert warnings == []
    assert cfg.output_name == "release"
    assert cfg.log_dir == "logs"
    assert cfg.manifest_name == "manifest.json"
    assert cfg.source_subdir == "app"
    assert cfg.script_name == "pack.py"
    assert cfg.build_command == ("pnpm", "run", "build", "--mode", "prod")
    assert cfg.build_dir_candidates == ("out",)
    assert cfg.homepage_value == "."
    assert cfg.readme_name == "README.txt"
    assert cfg.readme_text == "hello"
    assert cfg.compression_level == 6


def test_command_as_list(tmp_path: Path):
    cfg, _ = PackagerConfig.from_dict({"build": {"command": ["yarn", "build"]}}, source_dir=tmp_path)

    assert cfg.build_command == ("yarn", "build")


def test_unknown_keys_warn(tmp_path: Path):
    _, warnings = PackagerConfig.from_dict({"output": {"nme": "x"}, "extra": 1}, source_dir=tmp_path)

    assert warnings == ["Unknown config keys: extra, output.nme"]


def test_unknown_keys_raise_when_strict(tmp_path: Path):
    with pytest.raises(ValueError, match="output.nme"):
        PackagerConfig.from_dict({"strict": True, "output": {"nme": "x"}}, source_dir=tmp_path)


@pytest.mark.parametrize(
    ("cfg_dict", "key_path"),
    [
        ({"archive": {"compression_level": 10}}, "archive.compression_level"),
        ({"archive": {"compression_level": True}}, "archive.compression_level"),
        ({"output": {"name": "../escape"}}, "output.name"),
        ({"output": {"name": ""}}, "output.name"),
        ({"build": {"command": []}}, "build.command"),
        ({"build": {"output_dirs": []}}, "build.output_dirs"),
        ({"readme": {"text": 5}}, "readme.text"),
        ({"strict": "maybe"}, "strict"),
        ({"build": "npm run build"}, "build"),
    ],
)
def test_invalid_values_name_the_key(tmp_path: Path, cfg_dict, key_path):
    with pytest.raises(ValueError) as excinfo:
        PackagerConfig.from_dict(cfg_dict, source_dir=tmp_path)

    assert key_path in str(excinfo.value)
