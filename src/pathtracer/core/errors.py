# core/errors.py
"""
Error types shared across the renderer.

Every error raised on purpose derives from `RaytracerError`. Lower-level
failures are chained with `raise ... from err`, and `pretty_stack()` turns the
chain into the multi-line report the CLI prints.
"""


class RaytracerError(Exception):
    """Base class for all renderer errors."""


class ConfigError(RaytracerError):
    """Invalid features or backend configuration."""


class FileReadError(RaytracerError):
    """A scene, features or config file could not be opened or read."""

    def __init__(self, path, what: str):
        super().__init__(f"Failed to read {what} file '{path}'")
        self.path = path
        self.what = what


class FileParseError(RaytracerError):
    """A file is not valid YAML."""

    def __init__(self, path, what: str):
        super().__init__(f"Failed to parse {what} file '{path}' as YAML")
        self.path = path
        self.what = what


class SceneParseError(RaytracerError):
    """A scene description does not match the expected layout."""

    def __init__(self, location: str, reason: str):
        super().__init__(f"Invalid scene at '{location}': {reason}")
        self.location = location
        self.reason = reason


class ParentNotFoundError(RaytracerError):
    """The output directory does not exist and may not be created."""

    def __init__(self, path):
        super().__init__(f"Parent directory '{path}' not found (re-run with '--fix-dirs' to create it)")
        self.path = path


class ImageWriteError(RaytracerError):
    """Writing an image to disk failed."""

    def __init__(self, path):
        super().__init__(f"Failed to write image to '{path}'")
        self.path = path


class AvailableThreadsError(RaytracerError):
    """The number of hardware threads could not be determined."""

    def __init__(self):
        super().__init__("Failed to get available number of hardware threads")


class RenderWorkerError(RaytracerError):
    """A band worker of the multi-threaded renderer failed."""

    def __init__(self, band: int):
        super().__init__(f"Render worker for band {band} failed")
        self.band = band


def pretty_stack(err: BaseException) -> str:
    """
    Formats an exception followed by every cause in its chain.
    """
    lines = [str(err) or type(err).__name__]
    cause = err.__cause__
    while cause is not None:
        lines.append("")
        lines.append("Caused by:")
        lines.append(str(cause) or type(cause).__name__)
        cause = cause.__cause__
    return "\n".join(lines)
