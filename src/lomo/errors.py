"""Error types reported by the ``lomo`` entry point.

Every failure that ends a session is raised as a :class:`LomoError`
subclass. Each carries the operation that failed and a human readable
message, so :func:`lomo.cli.main` can report all of them the same way.
"""

from __future__ import annotations


class LomoError(Exception):
    """Base class; ``operation`` names the step that failed."""

    operation = "lomo"

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.message = message
        if operation is not None:
            self.operation = operation

    def __str__(self) -> str:
        return self.message


class UsageError(LomoError):
    """Help was requested or the input filename is missing."""

    operation = "usage"


class ArgumentParseError(LomoError):
    """The command line could not be parsed."""

    operation = "parse"


class ImageLoadError(LomoError):
    """The input picture is missing, corrupt or in an unsupported format."""

    operation = "load"


class LibraryError(LomoError):
    """OpenCV failed while filtering, displaying or writing an image."""

    operation = "imaging"

    @classmethod
    def wrap(cls, exc: Exception, operation: str | None = None) -> "LibraryError":
        # cv2.error messages carry a multi-line traceback header; keep the last line
        text = str(exc).strip().splitlines()
        return cls(text[-1].strip() if text else type(exc).__name__, operation)
