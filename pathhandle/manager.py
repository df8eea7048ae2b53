"""
The transfer manager: a payload held in memory, where it should go, and
the driver that will take it there.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from .drivers import CoreUploadDriver, upload_driver_from_config
from .exceptions import SourceMissingError
from .handle import PathHandle
from .logger import log


class TransferManager(BaseModel):
    """
    Wraps a single upload attempt. Build one per transfer with
    from_local_file or from_bytes, then call upload.
    """

    content: bytes
    "The complete payload."
    destination: str
    "Where the driver should put the payload (a path or a URL)."
    config: CoreUploadDriver
    "The driver, with its configuration, used to upload."
    source_path: Optional[Path] = None
    "The file the payload was read from, if any."

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_local_file(
        cls,
        source_path: Path | str,
        destination: str,
        config: CoreUploadDriver | dict,
        root_path: Optional[Path | str] = None,
    ) -> "TransferManager":
        """
        Read a local file into memory, ready to upload.

        Parameters
        ----------
        source_path : Path | str
            The file to upload. Relative paths are taken relative to the root.
        destination : str
            Where to upload it.
        config : CoreUploadDriver | dict
            The driver to use, or a dictionary describing it.
        root_path : Path | str, optional
            Root for a relative source_path. Defaults to the process root.

        Raises
        ------
        SourceMissingError
            If there is nothing at source_path.
        SourceNotFileError
            If source_path is not a file.
        UnsupportedDriverError
            If the driver described by config is not known.
        """

        config = upload_driver_from_config(config)

        if Path(source_path).is_absolute():
            source = PathHandle.from_absolute(source_path, root_path=root_path)
        else:
            source = PathHandle.from_relative(source_path, root_path=root_path)

        if not source.exists:
            raise SourceMissingError(source.path)

        return cls(
            content=source.read_all(),
            destination=destination,
            config=config,
            source_path=source.path,
        )

    @classmethod
    def from_bytes(
        cls, content: bytes, destination: str, config: CoreUploadDriver | dict
    ) -> "TransferManager":
        return cls(
            content=content,
            destination=destination,
            config=upload_driver_from_config(config),
        )

    def upload(self) -> int:
        """
        Upload the payload with the configured driver.

        Returns
        -------
        int
            Number of bytes transferred.

        Raises
        ------
        UnsupportedDriverError
            If the driver cannot upload (including object storage, which
            raises the ObjectStorageUnimplementedError subclass).
        TransportError
            If a remote upload fails.
        OSError
            If a local upload fails.
        """

        log.info(
            f"Uploading {self.size} bytes to {self.destination} "
            f"using the {self.config.driver} driver"
        )

        try:
            return self.config.upload(content=self.content, destination=self.destination)
        except Exception as e:
            log.error(f"Upload to {self.destination} failed: {e}")
            raise e
