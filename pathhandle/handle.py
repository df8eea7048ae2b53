"""
The path handle. A handle owns a single filesystem path, keeps a snapshot
of whether that path exists and what it is, and provides the read, write,
delete and copy primitives that everything else is built on.

Handles never keep files open between calls; every operation opens and
closes what it needs.
"""

import os
import shutil
import stat
from pathlib import Path
from typing import BinaryIO, Optional

from pydantic import BaseModel, Field, field_validator

from .exceptions import PathResolutionError, SourceNotDirectoryError, SourceNotFileError
from .logger import log
from .root import process_root

COPY_BUFFER_SIZE = 64 * 1024
"Chunk size used when streaming into a handle."


def clean_path(path: Path | str) -> Path:
    """
    Normalize a path: collapse separators, '.' and '..' components, and drop
    any trailing separator.
    """

    return Path(os.path.normpath(path))


def join_path(base: Path | str, *segments: Path | str) -> Path:
    """
    Join segments onto base. Unlike pathlib, an absolute segment is appended
    rather than replacing everything before it.
    """

    joined = str(base)

    for segment in segments:
        joined = f"{joined}{os.sep}{segment}"

    return clean_path(joined)


def walk_sorted(path: Path | str, skip: Optional[Path] = None):
    """
    Walk a tree depth-first, yielding the root and then every entry below
    it. Entries of each directory are visited in lexical order, files and
    subdirectories mixed, and a subdirectory is descended into as soon as it
    is reached. Symbolic links are not followed into.

    Parameters
    ----------
    path : Path | str
        The top of the tree.
    skip : Path, optional
        Directory (compared by real path) that is neither yielded nor
        descended into.

    Raises
    ------
    OSError
        If any directory cannot be listed.
    """

    path = Path(path)

    yield path

    with os.scandir(path) as iterator:
        entries = sorted(iterator, key=lambda x: x.name)

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            if skip is not None and Path(os.path.realpath(entry.path)) == skip:
                continue

            yield from walk_sorted(entry.path, skip=skip)
        else:
            yield Path(entry.path)


class PathHandle(BaseModel):
    """
    A handle on a filesystem path. The exists, is_dir and is_file flags are
    a snapshot taken the last time the handle was resolved, which happens on
    construction and after every change made through the handle. is_dir and
    is_file are mutually exclusive and both False when the path does not
    exist.

    Construct handles through from_relative or from_absolute.
    """

    path: Path
    "Absolute, normalized path of this handle."
    root_path: Path = Field(default_factory=process_root)
    "Root that relative paths given to this handle are joined onto."

    exists: bool = False
    is_dir: bool = False
    is_file: bool = False

    @field_validator("path", "root_path")
    def path_is_absolute(cls, v: Path) -> Path:
        if not v.is_absolute():
            raise ValueError(f"Path {v} must be absolute.")

        return clean_path(v)

    def model_post_init(self, __context):
        self._resolve()

    def __repr__(self):
        return f"PathHandle({self.path}, exists={self.exists}, is_dir={self.is_dir})"

    @classmethod
    def from_relative(
        cls, path: Path | str, root_path: Optional[Path | str] = None
    ) -> "PathHandle":
        """
        Create a handle for path, relative to the root.

        Parameters
        ----------
        path : Path | str
            Path relative to the root.
        root_path : Path | str, optional
            Root to join onto. Defaults to the process root.

        Returns
        -------
        PathHandle
            The resolved handle.

        Raises
        ------
        PathResolutionError
            If the state of the path cannot be determined.
        """

        root_path = Path(root_path) if root_path is not None else process_root()

        return cls(path=join_path(root_path, path), root_path=root_path)

    @classmethod
    def from_absolute(
        cls, path: Path | str, root_path: Optional[Path | str] = None
    ) -> "PathHandle":
        """
        Create a handle for an absolute path.

        Raises
        ------
        ValueError
            If the path is not absolute.
        PathResolutionError
            If the state of the path cannot be determined.
        """

        if root_path is None:
            return cls(path=clean_path(path))

        return cls(path=clean_path(path), root_path=root_path)

    @property
    def name(self) -> str:
        return self.path.name

    def _resolve(self) -> "PathHandle":
        try:
            self.exists = self.check_exists()

            if self.exists:
                self.classify_type()
            else:
                self.is_dir = False
                self.is_file = False
        except OSError as e:
            log.error(f"Could not resolve path {self.path}: {e}")
            raise PathResolutionError(self.path, e) from e

        return self

    def _open(self, path: Path | str, absolute: bool) -> "PathHandle":
        """
        Create another handle sharing this handle's root.
        """

        if absolute:
            return PathHandle.from_absolute(path, root_path=self.root_path)

        return PathHandle.from_relative(path, root_path=self.root_path)

    def join(self, segment: Path | str) -> "PathHandle":
        self.path = join_path(self.path, segment)

        return self._resolve()

    def join_all(self, *segments: Path | str) -> "PathHandle":
        for segment in segments:
            self.join(segment)

        return self

    def set_absolute(self, path: Path | str) -> "PathHandle":
        path = clean_path(path)

        if not path.is_absolute():
            raise ValueError(f"Path {path} must be absolute.")

        self.path = path

        return self._resolve()

    def set_relative(self, path: Path | str) -> "PathHandle":
        self.path = join_path(self.root_path, path)

        return self._resolve()

    def check_exists(self) -> bool:
        """
        Stat the path right now, ignoring the cached flag.

        Returns
        -------
        bool
            True if the path exists, False if it definitely does not.

        Raises
        ------
        OSError
            If the stat failed for any reason other than the path not
            existing (e.g. permissions, or a file used as a directory).
        """

        try:
            os.stat(self.path)
        except FileNotFoundError:
            return False

        return True

    def classify_type(self):
        """
        Stat the path and set is_dir and is_file.

        Raises
        ------
        OSError
            If the stat fails.
        """

        info = os.stat(self.path)

        self.is_dir = stat.S_ISDIR(info.st_mode)
        self.is_file = not self.is_dir

    def make_dir(self):
        """
        Create this directory and any missing parents. Does nothing if the
        path already exists.
        """

        if not self.exists:
            log.debug(f"Creating directory {self.path}")
            self.path.mkdir(mode=0o777, parents=True)
            self._resolve()

    def delete(self):
        """
        Delete whatever is at the path; directories are removed along with
        everything under them. Does nothing if the path does not exist.
        """

        if not self.exists:
            return

        if self.is_dir:
            self.delete_dir()
        elif self.is_file:
            self.delete_file()

    def delete_dir(self):
        log.debug(f"Removing directory tree {self.path}")
        shutil.rmtree(self.path)
        self._resolve()

    def delete_file(self):
        log.debug(f"Removing file {self.path}")
        os.remove(self.path)
        self._resolve()

    def read_all(self) -> bytes:
        """
        Read the whole file into memory.

        Raises
        ------
        SourceNotFileError
            If the handle is not a file.
        """

        if not self.is_file:
            raise SourceNotFileError(self.path)

        with open(self.path, "rb") as handle:
            return handle.read()

    def write_all(self, content: bytes) -> int:
        """
        Write content at the start of the file, creating it if needed.

        The file is not truncated: writing shorter content over a longer
        file leaves the end of the old content in place.

        Returns
        -------
        int
            Number of bytes written.
        """

        descriptor = os.open(self.path, os.O_RDWR | os.O_CREAT, 0o644)

        with os.fdopen(descriptor, "r+b") as handle:
            written = handle.write(content)

        self._resolve()

        return written

    def write_string(self, content: str) -> int:
        return self.write_all(content.encode("utf-8"))

    def append_all(self, content: bytes) -> int:
        """
        Append content to the end of the file, creating it if needed.
        """

        with open(self.path, "ab") as handle:
            written = handle.write(content)

        self._resolve()

        return written

    def write_from_stream(self, stream: BinaryIO) -> int:
        """
        Replace the file with everything readable from stream. Used when
        ingesting uploaded content.

        Returns
        -------
        int
            Total number of bytes copied.
        """

        written = 0

        with open(self.path, "wb") as handle:
            while True:
                data = stream.read(COPY_BUFFER_SIZE)

                if not data:
                    break

                handle.write(data)
                written += len(data)

        self._resolve()

        return written

    def copy_file_to(
        self,
        dest_dir: Path | str,
        dest_filename: Optional[str] = None,
        absolute: bool = False,
    ):
        """
        Copy this file into dest_dir, creating that directory if required.
        The copy is flushed to disk before returning. A failed copy leaves any
        partially written destination in place.

        Parameters
        ----------
        dest_dir : Path | str
            Destination directory.
        dest_filename : str, optional
            Name of the copy. Defaults to the name of this file.
        absolute : bool
            Whether dest_dir is absolute, or relative to the root.

        Raises
        ------
        SourceNotFileError
            If this handle is not a file.
        OSError
            If any of the filesystem operations fail.
        """

        destination = self._open(dest_dir, absolute)

        if not destination.is_dir:
            destination.make_dir()

        if not self.is_file:
            raise SourceNotFileError(self.path)

        destination.join(dest_filename or self.name)

        if destination.exists and os.path.samefile(self.path, destination.path):
            raise shutil.SameFileError(
                f"{self.path} and {destination.path} are the same file."
            )

        with open(self.path, "rb") as source:
            log.info(f"Copying file {self.path} to {destination.path}")

            with open(destination.path, "wb") as target:
                shutil.copyfileobj(source, target, COPY_BUFFER_SIZE)

                # Make sure everything is on disk.
                target.flush()
                os.fsync(target.fileno())

    @classmethod
    def copy_many_files_to(
        cls,
        targets: list["CopyTarget"],
        dest_dir: Path | str,
        absolute: bool = False,
        root_path: Optional[Path | str] = None,
    ):
        """
        Copy several files into one directory, one after another. Stops at
        the first failure; files copied before it are left in place.

        Parameters
        ----------
        targets : list[CopyTarget]
            Files to copy, each with an optional new name.
        dest_dir : Path | str
            Destination directory.
        absolute : bool
            Whether dest_dir is absolute, or relative to the root.
        root_path : Path | str, optional
            Root for a relative dest_dir. Defaults to the process root.
        """

        if absolute:
            destination = cls.from_absolute(dest_dir, root_path=root_path)
        else:
            destination = cls.from_relative(dest_dir, root_path=root_path)

        if not destination.is_dir:
            destination.make_dir()

        for target in targets:
            target.source.copy_file_to(
                destination.path,
                target.dest_filename or target.source.name,
                absolute=True,
            )

    def copy_directory_to(self, dest_dir: Path | str, absolute: bool = False):
        """
        Copy every file under this directory into dest_dir.

        The copy is flat: files from every depth land directly in dest_dir
        under their own names, and no subdirectories are created. Entries are
        visited in lexical order with files and subdirectories mixed, and
        when two files share a name the one visited last ends up in dest_dir
        (for b.txt and a/b.txt, that is b.txt). A dest_dir inside this tree
        is not copied from.

        Raises
        ------
        SourceNotDirectoryError
            If this handle is not a directory.
        OSError
            If walking the tree or copying any file fails.
        """

        if not self.is_dir:
            raise SourceNotDirectoryError(self.path)

        destination = self._ensure_directory(dest_dir, absolute)
        skip = Path(os.path.realpath(destination.path))

        for entry in walk_sorted(self.path, skip=skip):
            # The destination is checked again for every entry visited.
            destination = self._ensure_directory(dest_dir, absolute)
            source = PathHandle.from_absolute(entry, root_path=self.root_path)

            if source.is_file:
                source.copy_file_to(destination.path, entry.name, absolute=True)

    def _ensure_directory(self, path: Path | str, absolute: bool) -> "PathHandle":
        directory = self._open(path, absolute)

        if not directory.is_dir:
            directory.make_dir()

        return directory


class CopyTarget(BaseModel):
    """
    A file to copy with PathHandle.copy_many_files_to.
    """

    source: PathHandle
    "Handle of the file to copy."
    dest_filename: Optional[str] = None
    "Name to give the copy. Defaults to the name of the source."
