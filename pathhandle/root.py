"""
Working out the process root: the directory that relative handles are
joined onto.

When running as an installed program, the root is the directory holding
the program. When running from an ephemeral location inside the temporary
directory (a throwaway build, or a script run straight out of /tmp), the
root falls back to the directory holding this package's source, so that
tooling behaves the same way in both cases.
"""

import os
import sys
import tempfile
from pathlib import Path
from typing import Optional

from .logger import log
from .settings import settings


def get_executable_path() -> Path:
    """
    Directory containing the running program, with symlinks resolved.
    """

    if getattr(sys, "frozen", False):
        executable = sys.executable
    elif sys.argv and sys.argv[0]:
        executable = sys.argv[0]
    else:
        executable = sys.executable

    return Path(os.path.realpath(os.path.dirname(os.path.abspath(executable))))


def get_temp_path() -> Path:
    """
    The system temporary directory, with symlinks resolved.
    """

    temp = os.environ.get("TEMP") or os.environ.get("TMP") or tempfile.gettempdir()

    return Path(os.path.realpath(temp))


def get_source_path() -> Path:
    """
    Directory containing the pathhandle source.
    """

    return Path(os.path.realpath(os.path.dirname(__file__)))


def get_current_path() -> Path:
    """
    The executable directory, unless that lives inside the temporary
    directory, in which case the source directory.
    """

    executable_path = get_executable_path()
    temp_path = get_temp_path()

    if executable_path == temp_path or temp_path in executable_path.parents:
        log.debug(
            f"Executable directory {executable_path} is inside {temp_path}; "
            "using the source directory as the root."
        )
        return get_source_path()

    return executable_path


_root: Optional[Path] = None


def process_root() -> Path:
    """
    The root injected into handles that are not given one explicitly. This
    is the configured root_path if there is one, and is resolved only once
    per process.
    """

    global _root

    if _root is None:
        if settings.root_path is not None:
            _root = Path(os.path.abspath(settings.root_path))
        else:
            _root = get_current_path()

        log.debug(f"Process root resolved to {_root}")

    return _root


def reset_process_root():
    """
    Forget the cached process root, e.g. after changing settings.
    """

    global _root

    _root = None
