"""
Upload to a remote artifact repository with a single HTTP PUT.
"""

from typing import Literal

import requests

from ..exceptions import TransportError
from ..logger import log
from .core import CoreUploadDriver
from .credentials import RemoteCredentials


class RemoteRepositoryUploadDriver(CoreUploadDriver):
    """
    PUTs the whole payload to a URL, authenticating with the credentials.
    There is no retry and no timeout here; a hung server blocks the caller.
    """

    driver: Literal["remote_repository"] = "remote_repository"
    credentials: RemoteCredentials

    def upload(self, content: bytes, destination: str) -> int:
        """
        PUT content to the URL destination.

        Returns
        -------
        int
            Length of the payload. This is what we sent, not a count
            confirmed by the server.

        Raises
        ------
        TransportError
            If the request could not be made, or the server did not
            accept it.
        """

        headers = {
            "Content-Length": str(len(content)),
            "Authorization": self.credentials.authorization,
        }

        try:
            r = requests.put(destination, data=content, headers=headers)
        except requests.exceptions.RequestException as e:
            log.error(f"PUT to {destination} failed: {e}")
            raise TransportError(url=destination, reason=str(e)) from e

        if str(r.status_code)[0] != "2":
            log.error(f"PUT to {destination} returned status {r.status_code}")
            raise TransportError(
                url=destination, reason=r.reason, status_code=r.status_code
            )

        return len(content)
