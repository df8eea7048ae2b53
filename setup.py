# -*- coding: utf-8 -*-

from setuptools import setup, find_packages

package_name = "pathhandle"

packages = find_packages(exclude=["tests", "tests.*"])

install_reqs = [
    "loguru",
    "pydantic>=2.0",
    "pydantic-settings",
    "requests",
]

test_reqs = [
    "pytest",
]

setup(
    name=package_name,
    version="0.1.0",
    description="Path-aware filesystem handles and pluggable file upload drivers",
    long_description="""\
pathhandle wraps a filesystem path in a handle that knows whether the path
exists and what it is, and provides read, write, delete and (flat) copy
operations on it. File contents can then be uploaded through a pluggable
driver: to the local disk, or with an HTTP PUT to a remote artifact
repository.
""",
    install_requires=install_reqs,
    tests_require=test_reqs,
    packages=packages,
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: System :: Filesystems",
    ],
    extras_require={
        "test": test_reqs,
    },
    include_package_data=True,
    zip_safe=False,
)
