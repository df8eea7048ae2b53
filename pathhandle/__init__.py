"""
Path-aware filesystem handles, and upload of their contents through
pluggable drivers.
"""

from importlib.metadata import PackageNotFoundError, version

from .drivers import (
    CoreUploadDriver,
    LocalUploadDriver,
    ObjectStorageUploadDriver,
    RemoteCredentials,
    RemoteRepositoryUploadDriver,
    UploadDrivers,
    upload_driver_from_config,
    upload_driver_from_name,
)
from .errors import ErrorCategory
from .exceptions import (
    ObjectStorageUnimplementedError,
    PathHandleError,
    PathResolutionError,
    SourceMissingError,
    SourceNotDirectoryError,
    SourceNotFileError,
    TransportError,
    UnsupportedDriverError,
)
from .handle import CopyTarget, PathHandle
from .manager import TransferManager

try:
    __version__ = version(__name__)
except PackageNotFoundError:
    # package is not installed
    pass
