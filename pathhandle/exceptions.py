"""
Exceptions for the pathhandle library.
"""

from pathlib import Path
from typing import Optional

from .errors import ErrorCategory


class PathHandleError(Exception):
    category: ErrorCategory

    def __init__(self, message):
        super(PathHandleError, self).__init__(message)


class PathResolutionError(PathHandleError):
    """
    Raised when a handle cannot work out the state of its path. This is
    never something to carry on from silently.
    """

    category = ErrorCategory.STAT_FAILURE

    def __init__(self, path: Path, error: OSError):
        super(PathResolutionError, self).__init__(
            f"Could not resolve the state of path {path}: {error}"
        )
        self.path = path
        self.error = error


class SourceNotFileError(PathHandleError):
    category = ErrorCategory.SOURCE_NOT_FILE

    def __init__(self, path: Path):
        super(SourceNotFileError, self).__init__(f"Source {path} is not a file.")
        self.path = path


class SourceNotDirectoryError(PathHandleError):
    category = ErrorCategory.SOURCE_NOT_DIRECTORY

    def __init__(self, path: Path):
        super(SourceNotDirectoryError, self).__init__(
            f"Source {path} is not a directory."
        )
        self.path = path


class SourceMissingError(PathHandleError):
    category = ErrorCategory.SOURCE_MISSING

    def __init__(self, path: Path):
        super(SourceMissingError, self).__init__(f"Source {path} does not exist.")
        self.path = path


class UnsupportedDriverError(PathHandleError):
    category = ErrorCategory.UNSUPPORTED_DRIVER

    def __init__(self, driver: str, message: Optional[str] = None):
        super(UnsupportedDriverError, self).__init__(
            message or f"Unsupported upload driver: {driver}"
        )
        self.driver = driver


class ObjectStorageUnimplementedError(UnsupportedDriverError):
    category = ErrorCategory.OBJECT_STORAGE_UNIMPLEMENTED

    def __init__(self, driver: str):
        super(ObjectStorageUnimplementedError, self).__init__(
            driver, f"Upload driver {driver} (object storage) is not implemented."
        )


class TransportError(PathHandleError):
    category = ErrorCategory.TRANSPORT_FAILURE

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        super(TransportError, self).__init__(
            f"Upload to {url} failed with status code {status_code} and reason {reason}."
        )
        self.url = url
        self.reason = reason
        self.status_code = status_code
