"""
Local upload. Writes the payload straight onto the local filesystem.
"""

from typing import Literal

from ..handle import PathHandle
from ..logger import log
from .core import CoreUploadDriver


class LocalUploadDriver(CoreUploadDriver):
    driver: Literal["local"] = "local"

    def upload(self, content: bytes, destination: str) -> int:
        """
        Write content to the absolute path destination, creating the parent
        directory if it is missing. Existing files are overwritten from the
        start without being truncated.

        Raises
        ------
        ValueError
            If destination is not absolute.
        OSError
            If the write fails.
        """

        target = PathHandle.from_absolute(destination)
        parent = PathHandle.from_absolute(target.path.parent)

        if not parent.is_dir:
            parent.make_dir()

        written = target.write_all(content)

        log.debug(f"Wrote {written} bytes to {target.path}")

        return written
