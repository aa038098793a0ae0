#
# Copyright 2019 FMR LLC <opensource@fidelity.com>
#
# SPDX-License-Identifier: MIT
#
"""Resolve sessions from `OS_*` environment variables.

## Overview

`from_env` builds an `osauth.session.Session` from the environment variables
used by the OpenStack command line tools. If `OS_CLOUD` is set, the session is
resolved from clouds.yaml via `osauth.clouds.from_config` and no other
variable is consulted. Otherwise, the following variables are read:

`OS_AUTH_URL`, `OS_USERNAME`, `OS_PASSWORD`
:  Required.

`OS_USER_DOMAIN_NAME`
:  Optional, defaults to `osauth.identity.DEFAULT_DOMAIN`.

`OS_PROJECT_ID` or `OS_PROJECT_NAME`
:  One is required. The ID wins if both are set.

`OS_PROJECT_DOMAIN_ID` or `OS_PROJECT_DOMAIN_NAME`
:  Optional. The ID wins if both are set. The project is scoped without a
domain if neither is set.

`OS_INTERFACE`
:  Optional interface type (`public`, `internal`, or `admin`) used to filter
endpoints.

The environment is read from `os.environ` unless another mapping is passed,
which lets callers resolve a session without touching the process environment:

    session = from_env({
        'OS_AUTH_URL': 'https://keystone.example.com/v3',
        'OS_USERNAME': 'admin',
        'OS_PASSWORD': 'secret',
        'OS_PROJECT_NAME': 'demo',
    })

`osauth.errors.InvalidInput` is raised if a required variable is missing or
`OS_INTERFACE` is not a known interface type. Errors raised by
`osauth.identity.Password` propagate as-is.
"""

import logging
import os

from osauth.clouds import from_config
from osauth.errors import InvalidInput
from osauth.identity import (
    DEFAULT_DOMAIN,
    EndpointFilters,
    Id,
    InterfaceType,
    Name,
    Password,
)
from osauth.session import Session

LOG = logging.getLogger(__name__)

MISSING_ENV_VARS = "Not all required environment variables were provided"


def _get_env(environ, name):
    try:
        return environ[name]
    except KeyError:
        raise InvalidInput(MISSING_ENV_VARS) from None


def _id_or_name(environ, id_var, name_var):
    # Returns Id, then Name, then None depending on which variable is set.
    if id_var in environ:
        return Id(environ[id_var])
    if name_var in environ:
        return Name(environ[name_var])
    return None


def from_env(environ=None):
    """Returns a `Session` built from environment variables.

    `environ` is a mapping of variable names to values and defaults to
    `os.environ`. Refer to the module documentation for the variables used.
    """
    environ = os.environ if environ is None else environ

    if "OS_CLOUD" in environ:
        LOG.info("OS_CLOUD is set, resolving from clouds.yaml")
        return from_config(environ["OS_CLOUD"])

    auth_url = _get_env(environ, "OS_AUTH_URL")
    username = _get_env(environ, "OS_USERNAME")
    password = _get_env(environ, "OS_PASSWORD")
    user_domain = environ.get("OS_USER_DOMAIN_NAME", DEFAULT_DOMAIN)

    identity = Password(auth_url, username, password, user_domain)

    project = _id_or_name(environ, "OS_PROJECT_ID", "OS_PROJECT_NAME")
    if project is None:
        raise InvalidInput(MISSING_ENV_VARS)
    domain = _id_or_name(environ, "OS_PROJECT_DOMAIN_ID", "OS_PROJECT_DOMAIN_NAME")
    LOG.debug("scoping %s to project %r in domain %r", username, project, domain)

    filters = EndpointFilters()
    if "OS_INTERFACE" in environ:
        filters.set_interfaces(InterfaceType.from_str(environ["OS_INTERFACE"]))

    return Session(identity.with_project_scope(project, domain), filters)
