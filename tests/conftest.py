"""
Shared fixtures amongst all tests.
"""

import random
from pathlib import Path

import pytest
import requests


@pytest.fixture
def garbage_file(tmp_path) -> Path:
    """
    Returns a file filled with garbage at the path.
    """

    data = random.randbytes(1024)

    path = tmp_path / "garbage_file.txt"

    with open(path, "wb") as handle:
        handle.write(data)

    yield path

    # Delete the file for good measure.
    try:
        path.unlink()
    except FileNotFoundError:
        pass


@pytest.fixture
def source_tree(tmp_path) -> Path:
    """
    A small directory tree with files at several depths:

        source/top.txt
        source/alpha/one.txt
        source/alpha/beta/two.txt
        source/gamma/three.txt
    """

    root = tmp_path / "source"

    (root / "alpha" / "beta").mkdir(parents=True)
    (root / "gamma").mkdir()

    (root / "top.txt").write_bytes(b"top")
    (root / "alpha" / "one.txt").write_bytes(b"one")
    (root / "alpha" / "beta" / "two.txt").write_bytes(b"two")
    (root / "gamma" / "three.txt").write_bytes(b"three")

    yield root


class FakeResponse:
    def __init__(self, status_code: int, reason: str):
        self.status_code = status_code
        self.reason = reason


@pytest.fixture
def fake_put(monkeypatch):
    """
    Replaces requests.put. Returns a dictionary; set "status_code" or
    "raises" on it before uploading to change the behaviour, and read
    "calls" afterwards to see what was sent.
    """

    state = {"status_code": 201, "reason": "Created", "raises": None, "calls": []}

    def put(url, data=None, headers=None, **kwargs):
        state["calls"].append({"url": url, "data": data, "headers": headers})

        if state["raises"] is not None:
            raise state["raises"]

        return FakeResponse(state["status_code"], state["reason"])

    monkeypatch.setattr(requests, "put", put)

    yield state


@pytest.fixture
def no_put(monkeypatch):
    """
    Makes any attempt to PUT fail the test.
    """

    def put(*args, **kwargs):
        raise AssertionError("No network request should have been made.")

    monkeypatch.setattr(requests, "put", put)
