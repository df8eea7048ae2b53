"""
Credentials for drivers that talk to remote services.
"""

import base64
from pathlib import Path
from typing import Optional

from pydantic import BaseModel


class RemoteCredentials(BaseModel):
    username: str
    "Username on the remote service."
    password: Optional[str] = None
    "Password on the remote service. Prefer password_file over writing this in a config file."
    password_file: Optional[Path] = None
    "File containing the password; read on creation and overrides password."
    auth_scheme: str = "Basic"
    "Scheme placed in front of the encoded credentials in the Authorization header."

    def model_post_init(self, __context):
        """
        Read the password from its file if required.
        """

        if self.password_file is not None:
            with open(self.password_file, "r") as handle:
                self.password = handle.read().strip()

    @property
    def authorization(self) -> str:
        """
        Value of the Authorization header for these credentials.
        """

        token = base64.b64encode(
            f"{self.username}:{self.password or ''}".encode("utf-8")
        ).decode("ascii")

        return f"{self.auth_scheme} {token}"
