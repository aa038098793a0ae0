#
# Copyright 2019 FMR LLC <opensource@fidelity.com>
#
# SPDX-License-Identifier: MIT
#
"""Exceptions raised while resolving credentials.

`OSAuthError`
:  Base class of every exception raised by osauth itself.

`InvalidConfig`
:  Raised if clouds.yaml cannot be found, read, or parsed, or if it does not
contain the requested cloud.

`InvalidInput`
:  Raised if required environment variables are missing or if a variable
holds a value that cannot be parsed, such as an unknown interface type.

Errors raised while building the identity itself, such as a malformed auth
URL, are not wrapped in any of the above. They propagate as raised by the
`osauth.identity.Password` constructor.
"""


class OSAuthError(Exception):
    """Base class for osauth exceptions."""


class InvalidConfig(OSAuthError):
    """Raised if clouds.yaml is missing, unreadable, malformed, or lacks a cloud."""


class InvalidInput(OSAuthError):
    """Raised if environment variables are missing or hold invalid values."""
