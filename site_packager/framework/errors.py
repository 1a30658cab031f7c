from __future__ import annotations


class PackagingError(RuntimeError):
    """Raised when a packaging run cannot complete."""


class ConfigReadError(PackagingError):
    """The build configuration document could not be read."""


class ConfigParseError(PackagingError):
    """The build configuration document is not a valid JSON object."""


class BuildFailure(PackagingError):
    """The project's build command failed or could not be started."""

    def __init__(self, message: str, *, returncode: int | None = None, output: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.output = output


class MissingArtifactError(PackagingError):
    """No known build output directory exists after a successful build."""


class ArchiveError(PackagingError):
    """The staging directory could not be archived."""
