"""
Error enumeration for pathhandle. Categories of errors.
"""

from enum import Enum


class ErrorCategory(Enum):
    """
    Categories of errors.
    """

    NOT_FOUND = "not_found"
    "The path does not exist. Never raised; check_exists returns False instead."

    STAT_FAILURE = "stat_failure"
    "Stat on the path failed for a reason other than the path not existing."

    SOURCE_NOT_FILE = "source_not_file"
    "A file operation was requested on a handle that is not a regular file."

    SOURCE_NOT_DIRECTORY = "source_not_directory"
    "A directory operation was requested on a handle that is not a directory."

    SOURCE_MISSING = "source_missing"
    "The source of a transfer does not exist."

    UNSUPPORTED_DRIVER = "unsupported_driver"
    "The upload driver is not one we know how to use."

    TRANSPORT_FAILURE = "transport_failure"
    "The network transport (or the remote server) rejected the upload."

    OBJECT_STORAGE_UNIMPLEMENTED = "object_storage_unimplemented"
    "Object storage uploads are not available yet."

    def __str__(self):
        return self.value
