"""
Core upload driver (prototype).
"""

from pydantic import BaseModel

from ..exceptions import UnsupportedDriverError


class CoreUploadDriver(BaseModel):
    """
    Prototype for upload drivers. Should never be used directly (other than
    for type hints!). Each derived class carries a literal driver tag plus
    whatever configuration it needs, and must implement upload.
    """

    driver: str = "core"

    def upload(self, content: bytes, destination: str) -> int:
        """
        Upload content to destination.

        Parameters
        ----------
        content : bytes
            The complete payload.
        destination : str
            Where to put it. Its meaning depends on the driver (a path for
            local uploads, a URL for remote ones).

        Returns
        -------
        int
            Number of bytes transferred.

        Raises
        ------
        UnsupportedDriverError
            Always, for the prototype.
        """
        raise UnsupportedDriverError(self.driver)
