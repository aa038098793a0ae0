#
# Copyright 2019 FMR LLC <opensource@fidelity.com>
#
# SPDX-License-Identifier: MIT
#
"""Resolve OpenStack credentials from clouds.yaml or the environment.

## Overview

`osauth` turns the authentication parameters used by OpenStack clients into a
`osauth.session.Session`: an identity (auth URL, username, password, user
domain, and optional project scope) together with the endpoint filters to use
once authenticated. It never talks to the network; it only works out which
credentials to use. Two sources are supported:

`osauth.clouds.from_config`
:  Resolves a named cloud from the first clouds.yaml found in the current
directory, `~/.config/openstack`, or `/etc/openstack`.

`osauth.env.from_env`
:  Resolves the session from `OS_*` environment variables, or from clouds.yaml
when `OS_CLOUD` is set.

Both are available at the top level of the package:

    import osauth

    session = osauth.from_config('devstack')
    session = osauth.from_env()

    print(session.identity.auth_url, session.endpoint_filters.region)

### CLI Usage

The package installs an `osauth` command, documented on the `osauth.cli` page,
that prints the session that would be resolved. It is handy to check which
configuration is in effect.

### Errors

All exceptions raised by osauth itself derive from `osauth.errors.OSAuthError`.
See `osauth.errors` for the details.
"""

name = "osauth"
__version__ = "0.3.0"

from osauth.clouds import from_config  # noqa: E402
from osauth.env import from_env  # noqa: E402

__all__ = ["from_config", "from_env"]
