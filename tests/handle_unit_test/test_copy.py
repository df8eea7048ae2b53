"""
Tests for copying files and directories with path handles.
"""

import os
import shutil

import pytest

from pathhandle import (
    CopyTarget,
    PathHandle,
    SourceNotDirectoryError,
    SourceNotFileError,
)
from pathhandle.handle import walk_sorted


def test_copy_file_keeps_name(tmp_path, garbage_file):
    source = PathHandle.from_absolute(garbage_file)

    source.copy_file_to(tmp_path / "copies", absolute=True)

    copied = tmp_path / "copies" / garbage_file.name

    assert (tmp_path / "copies").is_dir()
    assert copied.read_bytes() == garbage_file.read_bytes()


def test_copy_file_relative_destination(tmp_path, garbage_file):
    source = PathHandle.from_absolute(garbage_file, root_path=tmp_path)

    source.copy_file_to("relative/dest", "renamed.bin")

    copied = tmp_path / "relative" / "dest" / "renamed.bin"

    assert copied.read_bytes() == garbage_file.read_bytes()
    assert not (tmp_path / "relative" / "dest" / garbage_file.name).exists()


def test_copy_file_overwrites(tmp_path, garbage_file):
    destination = tmp_path / "dest"
    destination.mkdir()
    (destination / garbage_file.name).write_bytes(b"y" * 10_000)

    PathHandle.from_absolute(garbage_file).copy_file_to(destination, absolute=True)

    assert (destination / garbage_file.name).read_bytes() == garbage_file.read_bytes()


def test_copy_file_from_directory_fails(tmp_path, source_tree):
    source = PathHandle.from_absolute(source_tree)

    with pytest.raises(SourceNotFileError):
        source.copy_file_to(tmp_path / "dest", absolute=True)

    # The destination directory is created before the source is checked.
    assert (tmp_path / "dest").is_dir()


def test_copy_file_from_missing_fails(tmp_path):
    source = PathHandle.from_absolute(tmp_path / "missing.txt")

    with pytest.raises(SourceNotFileError):
        source.copy_file_to(tmp_path / "dest", absolute=True)


def test_copy_many_files(tmp_path, source_tree):
    targets = [
        CopyTarget(source=PathHandle.from_absolute(source_tree / "top.txt")),
        CopyTarget(
            source=PathHandle.from_absolute(source_tree / "alpha" / "one.txt"),
            dest_filename="first.txt",
        ),
    ]

    PathHandle.copy_many_files_to(targets, "many", root_path=tmp_path)

    destination = tmp_path / "many"

    assert sorted(x.name for x in destination.iterdir()) == ["first.txt", "top.txt"]
    assert (destination / "top.txt").read_bytes() == b"top"
    assert (destination / "first.txt").read_bytes() == b"one"


def test_copy_many_files_stops_at_first_failure(tmp_path, source_tree):
    targets = [
        CopyTarget(source=PathHandle.from_absolute(source_tree / "top.txt")),
        CopyTarget(source=PathHandle.from_absolute(source_tree / "alpha")),
        CopyTarget(source=PathHandle.from_absolute(source_tree / "gamma" / "three.txt")),
    ]

    destination = tmp_path / "many"

    with pytest.raises(SourceNotFileError):
        PathHandle.copy_many_files_to(targets, destination, absolute=True)

    # Nothing is rolled back, and nothing after the failure is copied.
    assert (destination / "top.txt").exists()
    assert not (destination / "three.txt").exists()


def test_copy_directory_is_flat(tmp_path, source_tree):
    destination = tmp_path / "flat"

    PathHandle.from_absolute(source_tree).copy_directory_to(destination, absolute=True)

    contents = sorted(destination.iterdir())

    assert [x.name for x in contents] == ["one.txt", "three.txt", "top.txt", "two.txt"]
    assert all(x.is_file() for x in contents)

    assert (destination / "two.txt").read_bytes() == b"two"
    assert (destination / "three.txt").read_bytes() == b"three"

    # The source is untouched.
    assert (source_tree / "alpha" / "beta" / "two.txt").exists()


def test_copy_directory_name_collision(tmp_path, source_tree):
    (source_tree / "alpha" / "top.txt").write_bytes(b"nested top")

    destination = tmp_path / "flat"

    PathHandle.from_absolute(source_tree).copy_directory_to(destination, absolute=True)

    # Only one top.txt survives flattening. alpha/ sorts before top.txt, so
    # the top-level file is copied last and wins.
    assert (destination / "top.txt").read_bytes() == b"top"
    assert len(list(destination.iterdir())) == 4


def test_copy_directory_collision_follows_lexical_order(tmp_path):
    source = tmp_path / "src"
    (source / "a").mkdir(parents=True)
    (source / "b.txt").write_bytes(b"ROOT")
    (source / "a" / "b.txt").write_bytes(b"DEEP")
    (source / "c").mkdir()
    (source / "c" / "b.txt").write_bytes(b"LATER")

    destination = tmp_path / "out"

    PathHandle.from_absolute(source).copy_directory_to(destination, absolute=True)

    # Visited as a/b.txt, b.txt, c/b.txt.
    assert (destination / "b.txt").read_bytes() == b"LATER"

    (source / "c" / "b.txt").unlink()

    PathHandle.from_absolute(source).copy_directory_to(destination, absolute=True)

    assert (destination / "b.txt").read_bytes() == b"ROOT"


def test_walk_sorted_order(source_tree):
    entries = [x.relative_to(source_tree) for x in walk_sorted(source_tree)]

    assert [str(x) for x in entries] == [
        ".",
        "alpha",
        os.path.join("alpha", "beta"),
        os.path.join("alpha", "beta", "two.txt"),
        os.path.join("alpha", "one.txt"),
        "gamma",
        os.path.join("gamma", "three.txt"),
        "top.txt",
    ]


def test_copy_directory_into_itself(source_tree):
    destination = source_tree / "backup"
    source = PathHandle.from_absolute(source_tree)

    source.copy_directory_to(destination, absolute=True)
    source.copy_directory_to(destination, absolute=True)

    # The backup is never copied onto itself, so nothing is emptied.
    assert (destination / "top.txt").read_bytes() == b"top"
    assert (destination / "two.txt").read_bytes() == b"two"
    assert sorted(x.name for x in destination.iterdir()) == [
        "one.txt",
        "three.txt",
        "top.txt",
        "two.txt",
    ]


def test_copy_file_onto_itself_fails(tmp_path):
    data = tmp_path / "data.bin"
    data.write_bytes(b"precious")

    with pytest.raises(shutil.SameFileError):
        PathHandle.from_absolute(data).copy_file_to(tmp_path, absolute=True)

    assert data.read_bytes() == b"precious"


def test_copy_file_onto_itself_through_link(tmp_path):
    data = tmp_path / "data.bin"
    data.write_bytes(b"precious")
    (tmp_path / "linked").symlink_to(tmp_path, target_is_directory=True)

    with pytest.raises(shutil.SameFileError):
        PathHandle.from_absolute(data).copy_file_to(tmp_path / "linked", absolute=True)

    assert data.read_bytes() == b"precious"


def test_copy_directory_relative_destination(tmp_path, source_tree):
    source = PathHandle.from_absolute(source_tree, root_path=tmp_path)

    source.copy_directory_to("relative_flat")

    assert (tmp_path / "relative_flat" / "one.txt").read_bytes() == b"one"


def test_copy_empty_directory_creates_destination(tmp_path):
    (tmp_path / "empty").mkdir()

    PathHandle.from_absolute(tmp_path / "empty").copy_directory_to(
        tmp_path / "dest", absolute=True
    )

    assert (tmp_path / "dest").is_dir()
    assert list((tmp_path / "dest").iterdir()) == []


def test_copy_directory_from_file_fails(tmp_path, garbage_file):
    with pytest.raises(SourceNotDirectoryError):
        PathHandle.from_absolute(garbage_file).copy_directory_to(
            tmp_path / "dest", absolute=True
        )

    assert not (tmp_path / "dest").exists()
