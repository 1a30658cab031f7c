import logging
from pathlib import Path

import pytest

from site_packager.framework.config import PackagerConfig
from site_packager.framework.runner import CommandResult


class FakeRunner:
    """Records build invocations; `on_run` can create build output or inspect the project."""

    def __init__(self, *, returncode: int = 0, output: str = "", on_run=None, raises: Exception | None = None):
        self.returncode = returncode
        self.output = output
        self.on_run = on_run
        self.raises = raises
        self.calls: list[tuple[tuple[str, ...], Path]] = []

    def run(self, command, *, cwd):
        self.calls.append((tuple(command), Path(cwd)))
        if self.raises is not None:
            raise self.raises
        if self.on_run is not None:
            self.on_run(Path(cwd))
        return CommandResult(returncode=self.returncode, output=self.output)


@pytest.fixture()
def logger():
    log = logging.getLogger("tests.site_packager")
    log.setLevel(logging.DEBUG)
    return log


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    root = tmp_path / "my-site"
    root.mkdir()
    return root


@pytest.fixture()
def cfg(project: Path) -> PackagerConfig:
    return PackagerConfig(source_dir=project)


def make_framework_project(root: Path, manifest_text: str = '{"homepage": "/old/"}') -> Path:
    (root / "src").mkdir()
    (root / "src" / "main.js").write_text("console.log('hi')\n", encoding="utf-8")
    manifest = root / "package.json"
    manifest.write_text(manifest_text, encoding="utf-8")
    return manifest


def write_build_output(root: Path, name: str = "dist") -> None:
    out = root / name
    (out / "assets").mkdir(parents=True)
    (out / "index.html").write_text("<html></html>", encoding="utf-8")
    (out / "assets" / "app.js").write_text("var a = 1;", encoding="utf-8")
