#!/usr/bin/env python
# -*- encoding: utf-8 -*-
import io
import re
from os.path import dirname, join

from setuptools import find_packages, setup


def read(*names, **kwargs):
    return io.open(
        join(dirname(__file__), *names), encoding=kwargs.get("encoding", "utf8")
    ).read()


def find_version(*file_paths):
    contents = read(*file_paths)
    match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]", contents, re.M)
    if match:
        return match.group(1)
    raise RuntimeError("Unable to find version string.")


setup(
    name="osauth",
    python_requires=">=3.7",
    version=find_version("src", "osauth", "__init__.py"),
    license="",
    description="Resolve OpenStack credentials from clouds.yaml or the environment",
    long_description="""`osauth` is both a CLI and library to resolve the credentials an OpenStack
client should authenticate with. Credentials are read from a named cloud in
clouds.yaml or from the standard OS_* environment variables and returned as a
session holding the identity, its project scope, and endpoint filters.""",
    long_description_content_type="text/markdown",
    author="Pete Kazmier",
    author_email="opensource@fidelity.com",
    packages=find_packages("src"),
    package_dir={"": "src"},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: Unix",
        "Operating System :: POSIX",
        "Operating System :: Microsoft :: Windows",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Utilities",
    ],
    keywords=["osauth", "openstack", "cli"],
    install_requires=[
        "requests",
        "PyYAML>=5.1",
    ],
    extras_require={"test": ["pytest", "pytest-mock"]},
    entry_points={
        "console_scripts": [
            "osauth = osauth.cli:main",
        ]
    },
)
