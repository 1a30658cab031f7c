import json
from pathlib import Path

import pytest

from site_packager.framework.errors import ConfigParseError, ConfigReadError
from site_packager.framework.manifest import borrowed_manifest, read_manifest


ORIGINAL = b'{\n    "name": "demo",\n    "homepage": "/old/",\n    "scripts": {"build": "vite build"}\n}\n'


def test_override_is_visible_inside_block_and_bytes_restored_after(tmp_path: Path, logger):
    path = tmp_path / "package.json"
    path.write_bytes(ORIGINAL)

    with borrowed_manifest(path, homepage="./", logger=logger) as payload:
        assert payload["homepage"] == "./"
        on_disk = json.loads(path.read_text(encoding="utf-8"))
        assert on_disk["homepage"] == "./"
        assert on_disk["name"] == "demo"

    assert path.read_bytes() == ORIGINAL


def test_bytes_restored_when_block_raises(tmp_path: Path, logger):
    path = tmp_path / "package.json"
    path.write_bytes(ORIGINAL)

    with pytest.raises(RuntimeError, match="boom"):
        with borrowed_manifest(path, homepage="./", logger=logger):
            raise RuntimeError("boom")

    assert path.read_bytes() == ORIGINAL


def test_missing_homepage_is_added_then_removed(tmp_path: Path, logger, caplog):
    path = tmp_path / "package.json"
    path.write_bytes(b'{"name":"x"}')

    with caplog.at_level("INFO", logger="tests.site_packager"):
        with borrowed_manifest(path, homepage="./", logger=logger):
            assert json.loads(path.read_text(encoding="utf-8"))["homepage"] == "./"

    assert path.read_bytes() == b'{"name":"x"}'
    assert "(unset)" in caplog.text


def test_missing_manifest_raises_read_error(tmp_path: Path, logger):
    with pytest.raises(ConfigReadError):
        with borrowed_manifest(tmp_path / "package.json", homepage="./", logger=logger):
            pytest.fail("block must not run")

    assert not (tmp_path / "package.json").exists()


def test_invalid_json_raises_parse_error_and_leaves_file_untouched(tmp_path: Path, logger):
    path = tmp_path / "package.json"
    path.write_bytes(b'{"homepage": ')

    with pytest.raises(ConfigParseError):
        with borrowed_manifest(path, homepage="./", logger=logger):
            pytest.fail("block must not run")

    assert path.read_bytes() == b'{"homepage": '


def test_non_object_manifest_is_a_parse_error(tmp_path: Path):
    path = tmp_path / "package.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(ConfigParseError, match="JSON object"):
        read_manifest(path)


def test_non_ascii_content_round_trips(tmp_path: Path, logger):
    path = tmp_path / "package.json"
    original = '{"description": "静态站点", "homepage": "/旧/"}'.encode("utf-8")
    path.write_bytes(original)

    with borrowed_manifest(path, homepage="./", logger=logger):
        assert "静态站点" in path.read_text(encoding="utf-8")

    assert path.read_bytes() == original


def test_temporary_manifest_is_utf8_with_lf_newlines(tmp_path: Path, logger):
    path = tmp_path / "package.json"
    path.write_bytes(ORIGINAL)

    with borrowed_manifest(path, homepage="./", logger=logger):
        written = path.read_bytes()

    assert b"\r\n" not in written
    assert written == json.dumps(
        {"name": "demo", "homepage": "./", "scripts": {"build": "vite build"}}, indent=2
    ).encode("utf-8")
