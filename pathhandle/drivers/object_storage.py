"""
Object storage upload. Not implemented yet: the driver can be configured,
but every upload fails before touching anything.
"""

from typing import Literal, Optional

from ..exceptions import ObjectStorageUnimplementedError
from .core import CoreUploadDriver
from .credentials import RemoteCredentials


class ObjectStorageUploadDriver(CoreUploadDriver):
    driver: Literal["object_storage"] = "object_storage"

    bucket: Optional[str] = None
    "Bucket to upload into."
    endpoint: Optional[str] = None
    "Endpoint of the object store."
    credentials: Optional[RemoteCredentials] = None

    def upload(self, content: bytes, destination: str) -> int:
        raise ObjectStorageUnimplementedError(self.driver)
