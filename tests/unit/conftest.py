#
# Copyright 2019 FMR LLC <opensource@fidelity.com>
#
# SPDX-License-Identifier: MIT
#

# pylint: disable=redefined-outer-name,missing-docstring

import os
import textwrap
from pathlib import Path

import pytest

from osauth import clouds


class _Locations:
    """Paths standing in for the three clouds.yaml search locations."""

    def __init__(self, root):
        self.cwd = root / "cwd" / "clouds.yaml"
        self.home = root / "home"
        self.user = self.home / ".config" / "openstack" / "clouds.yaml"
        self.system = root / "etc" / "openstack" / "clouds.yaml"

    def write(self, path, text):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text), encoding="utf-8")
        return path


@pytest.fixture(autouse=True)
def locations(tmp_path, monkeypatch):
    # Keep tests away from the real working directory, home directory, /etc,
    # and OS_* variables of whoever runs the suite.
    locs = _Locations(tmp_path)
    locs.cwd.parent.mkdir(parents=True)
    locs.home.mkdir()
    monkeypatch.chdir(locs.cwd.parent)
    monkeypatch.setenv("HOME", str(locs.home))
    monkeypatch.setattr(Path, "home", lambda: locs.home)
    monkeypatch.setattr(clouds, "SYSTEM_CONFIG", locs.system)
    for var in list(os.environ):
        if var.startswith("OS_"):
            monkeypatch.delenv(var)
    return locs
