#
# Copyright 2019 FMR LLC <opensource@fidelity.com>
#
# SPDX-License-Identifier: MIT
#
"""Resolve sessions from a clouds.yaml configuration file.

## Overview

OpenStack clients share a configuration file named `clouds.yaml` that defines
one or more named clouds and how to authenticate to each of them:

    clouds:
      devstack:
        auth:
          auth_url: https://keystone.example.com/v3
          username: admin
          password: secret
          project_name: demo
          project_domain_name: Default
          user_domain_name: Default
        region_name: RegionOne

`from_config` locates the file, parses it, and builds an `osauth.session.Session`
for the requested cloud:

    session = from_config('devstack')

## Search Order

The file is searched for in the following locations. The first one that exists
as a regular file is used; the others are never read or merged:

1. `./clouds.yaml` in the current working directory
2. `~/.config/openstack/clouds.yaml`
3. `/etc/openstack/clouds.yaml`

If the file in the current directory cannot be resolved to an absolute path, or
if the home directory cannot be determined, a warning is logged and the search
moves on to the next location.

## Defaults

`user_domain_name` and `project_domain_name` default to
`osauth.identity.DEFAULT_DOMAIN`. The identity is only scoped when
`project_name` is set, and `region_name` only sets the region of the endpoint
filters when present.

## Exceptions

`osauth.errors.InvalidConfig` is raised if no file is found, if it cannot be
read or parsed, or if it does not define the requested cloud. Errors raised by
`osauth.identity.Password`, such as a malformed `auth_url`, propagate as-is.
"""

import logging
from pathlib import Path

import yaml

from osauth.config import Any, Dict, Str, Text, YAMLConfig
from osauth.errors import InvalidConfig
from osauth.identity import DEFAULT_DOMAIN, Name, Password, ProjectScope
from osauth.session import Session

LOG = logging.getLogger(__name__)

CURRENT_CONFIG = Path("clouds.yaml")
"""Candidate relative to the current working directory."""

USER_CONFIG = Path(".config", "openstack", "clouds.yaml")
"""Candidate relative to the user's home directory."""

SYSTEM_CONFIG = Path("/etc/openstack/clouds.yaml")
"""System-wide candidate."""


class AuthBlock:
    """The `auth` section of a cloud entry.

    `auth_url`, `username`, and `password` are always set. The remaining
    attributes are `None` when absent from the file; defaults are applied when
    the identity is built, not here.
    """

    def __init__(
        self,
        auth_url,
        username,
        password,
        project_name=None,
        project_domain_name=None,
        user_domain_name=None,
    ):
        self.auth_url = auth_url
        self.username = username
        self.password = password
        self.project_name = project_name
        self.project_domain_name = project_domain_name
        self.user_domain_name = user_domain_name


class CloudEntry:
    """One named cloud: its `AuthBlock` and optional `region_name`."""

    def __init__(self, auth, region_name=None):
        self.auth = auth
        self.region_name = region_name


class CloudsDocument:
    """Parsed clouds.yaml: a dict of cloud name to `CloudEntry`.

    A document is meant to serve a single resolution. `pop` removes the entry
    it returns.
    """

    def __init__(self, clouds):
        self.clouds = clouds

    def pop(self, name):
        """Removes and returns the `CloudEntry` called `name`.

        `osauth.errors.InvalidConfig` is raised if there is no such cloud.
        """
        try:
            return self.clouds.pop(name)
        except KeyError:
            raise InvalidConfig(f"No such cloud: {name}") from None


def find_config():
    """Returns the `Path` of the clouds.yaml to use, or `None` if none exists.

    See the module documentation for the search order.
    """
    if CURRENT_CONFIG.is_file():
        try:
            return CURRENT_CONFIG.resolve(strict=True)
        except OSError as e:
            LOG.warning("Cannot canonicalize %s: %s", CURRENT_CONFIG, e)

    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        LOG.warning("Cannot find home directory: %s", e)
    else:
        path = home / USER_CONFIG
        if path.is_file():
            return path
        LOG.debug("no config at %s", path)

    if SYSTEM_CONFIG.is_file():
        return SYSTEM_CONFIG

    LOG.debug("no config at %s", SYSTEM_CONFIG)
    return None


def load_clouds(path):
    """Returns a `CloudsDocument` parsed from the clouds.yaml at `path`.

    `osauth.errors.InvalidConfig` is raised if the file cannot be read, is not
    valid YAML, or does not match the clouds.yaml schema.
    """
    try:
        with Path(path).open(encoding="utf-8") as f:
            config = YAMLConfig(f)
    except OSError as e:
        raise InvalidConfig(f"Cannot read clouds.yaml: {e}") from e
    except yaml.YAMLError as e:
        raise InvalidConfig(f"Cannot parse clouds.yaml: {e}") from e

    try:
        names = config.get("clouds", type=Dict(Str, Dict(Str, Any)), default={})
        # An empty mapping is valid; only a missing clouds key is an error.
        if not names and "clouds" not in config.conf:
            config.get("clouds", must_exist=True)
        clouds = {name: _cloud_entry(config, name) for name in names}
    except (ValueError, TypeError) as e:
        raise InvalidConfig(f"Cannot parse clouds.yaml: {e}") from e

    return CloudsDocument(clouds)


def _as_text(value):
    # Plain scalars are read as the text they were written as.
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _cloud_entry(config, name):
    # Required values must be plain scalars; optional values are None when absent.
    def required(key):
        value = config.get("clouds", name, "auth", key, type=Text, must_exist=True)
        return _as_text(value)

    def optional(*keys):
        return _as_text(config.get("clouds", name, *keys, type=Text))

    config.get("clouds", name, "auth", type=Dict(Str, Any), must_exist=True)
    auth = AuthBlock(
        auth_url=required("auth_url"),
        username=required("username"),
        password=required("password"),
        project_name=optional("auth", "project_name"),
        project_domain_name=optional("auth", "project_domain_name"),
        user_domain_name=optional("auth", "user_domain_name"),
    )
    return CloudEntry(auth, region_name=optional("region_name"))


def session_from_cloud(document, cloud_name):
    """Returns a `Session` for the cloud called `cloud_name` in `document`.

    The cloud entry is removed from `document`. `osauth.errors.InvalidConfig`
    is raised if the cloud does not exist.
    """
    cloud = document.pop(cloud_name)
    auth = cloud.auth

    user_domain = auth.user_domain_name
    if user_domain is None:
        user_domain = DEFAULT_DOMAIN
    project_domain = auth.project_domain_name
    if project_domain is None:
        project_domain = DEFAULT_DOMAIN

    identity = Password(auth.auth_url, auth.username, auth.password, user_domain)

    if auth.project_name is not None:
        identity.set_scope(ProjectScope(Name(auth.project_name), Name(project_domain)))

    if cloud.region_name is not None:
        identity.endpoint_filters.region = cloud.region_name

    return Session(identity)


def from_config(cloud_name):
    """Returns a `Session` for `cloud_name` as defined in clouds.yaml.

    Refer to the module documentation for the search order, defaults, and the
    exceptions that may be raised.
    """
    path = find_config()
    if path is None:
        raise InvalidConfig("clouds.yaml was not found in any location")

    LOG.info("using cloud '%s' from %s", cloud_name, path)
    return session_from_cloud(load_clouds(path), cloud_name)
