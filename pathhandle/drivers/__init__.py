"""
Upload drivers. Each driver is a pydantic model tagged with its name.
"""

from typing import Any

from ..exceptions import UnsupportedDriverError
from .core import CoreUploadDriver
from .credentials import RemoteCredentials
from .local import LocalUploadDriver
from .object_storage import ObjectStorageUploadDriver
from .remote import RemoteRepositoryUploadDriver

UploadDrivers: dict[str, type[CoreUploadDriver]] = {
    "local": LocalUploadDriver,
    "remote_repository": RemoteRepositoryUploadDriver,
    "object_storage": ObjectStorageUploadDriver,
}


def upload_driver_from_name(name: str, **data: Any) -> CoreUploadDriver:
    """
    Create an upload driver from its name and configuration.

    Raises
    ------
    UnsupportedDriverError
        If there is no driver with that name.
    """

    if name not in UploadDrivers:
        raise UnsupportedDriverError(name)

    return UploadDrivers[name](**data)


def upload_driver_from_config(config: CoreUploadDriver | dict) -> CoreUploadDriver:
    """
    Get an upload driver from either an existing driver or a dictionary with
    a "driver" key naming it.

    Raises
    ------
    UnsupportedDriverError
        If the driver is not known.
    """

    if isinstance(config, CoreUploadDriver):
        return config

    data = dict(config)
    name = data.pop("driver", None)

    return upload_driver_from_name(name, **data)
