
class LogViewerError(Exception):
    """Base class for every failure the decode pipeline can surface."""


class DecompressionError(LogViewerError):
    """Input is not a well-formed xz stream (bad header, truncated, checksum)."""


class ExtractionError(LogViewerError):
    """Decoded bytes do not parse as a tar container."""


class BinaryEntryError(ExtractionError):
    """Container entry holds non-text content and the policy is 'reject'."""

    def __init__(self, name: str, size: int):
        super().__init__(f"Entry '{name}' is binary ({size} bytes)")
        self.name = name
        self.size = size


class ArtifactIOError(LogViewerError):
    """Source file unreadable, or the offload write failed."""

    def __init__(self, path: str, operation: str, reason: str):
        super().__init__(f"Cannot {operation} {path}: {reason}")
        self.path = path
        self.operation = operation


class UnsupportedSourceError(LogViewerError):
    def __init__(self, path: str):
        super().__init__(f"Not a .xz or .tar.xz file: {path}")
        self.path = path


class BindingBusyError(LogViewerError):
    def __init__(self, source_path: str):
        super().__init__(f"{source_path} is already being opened")
        self.source_path = source_path


class UserCancelled(LogViewerError):
    """
    Raised when the user declines an offload or overwrite prompt.
    Not a failure: callers treat it as a normal terminal path.
    """
