#
# Copyright 2019 FMR LLC <opensource@fidelity.com>
#
# SPDX-License-Identifier: MIT
#
"""Identity descriptors, scopes, and endpoint filters.

## Overview

A resolved credential is represented by a `Password` identity: a username and
password bound to an auth URL and a user domain. The identity may be scoped to
a project via a `ProjectScope`, and it owns the `EndpointFilters` used to pick
among service endpoints once authenticated. Nothing in this module talks to
the network; these objects only describe how to authenticate.

Projects and domains are identified either by an opaque ID or by a
human-readable name. `IdOrName` models that choice as two variants, `Id` and
`Name`, which never compare equal to each other even when they hold the same
string:

    identity = Password(
        'https://keystone.example.com/v3', 'admin', 'secret', DEFAULT_DOMAIN)
    identity.with_project_scope(Name('demo'), Id('default'))
    identity.endpoint_filters.region = 'RegionOne'

Values read from clouds.yaml or the environment that omit a domain fall back to
`DEFAULT_DOMAIN` when the identity is built.
"""

import enum

from requests.models import PreparedRequest

from osauth.errors import InvalidInput

DEFAULT_DOMAIN = "Default"
"""Domain name used when a user or project domain is not specified."""


class IdOrName:
    """Identifies a project or domain either by ID or by name.

    This class cannot be instantiated directly. Use `Id` or `Name`.
    """

    __slots__ = ("value",)

    def __init__(self, value):
        if type(self) is IdOrName:  # pylint: disable=unidiomatic-typecheck
            raise TypeError("use Id or Name instead of IdOrName")
        self.value = value

    def __eq__(self, other):
        return type(self) is type(other) and self.value == other.value

    def __hash__(self):
        return hash((type(self).__name__, self.value))

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"


class Id(IdOrName):
    """An opaque identifier."""

    __slots__ = ()


class Name(IdOrName):
    """A human-readable name."""

    __slots__ = ()


class ProjectScope:
    """Scopes an identity to a `project` within an optional `domain`.

    Both `project` and `domain` are instances of `Id` or `Name`. When `domain`
    is `None`, the identity service resolves the project without it.
    """

    def __init__(self, project, domain=None):
        self.project = project
        self.domain = domain

    def __eq__(self, other):
        if not isinstance(other, ProjectScope):
            return NotImplemented
        return (self.project, self.domain) == (other.project, other.domain)

    def __repr__(self):
        return f"ProjectScope(project={self.project!r}, domain={self.domain!r})"


class InterfaceType(enum.Enum):
    """Network exposure of a service endpoint."""

    PUBLIC = "public"
    INTERNAL = "internal"
    ADMIN = "admin"

    @classmethod
    def from_str(cls, value):
        """Returns the `InterfaceType` named by `value`.

        Both the short keywords (`public`, `internal`, `admin`) and the legacy
        catalog names (`publicURL`, `internalURL`, `adminURL`) are accepted.
        Matching is case-sensitive. `osauth.errors.InvalidInput` is raised for
        anything else.
        """
        keyword = value[: -len("URL")] if value.endswith("URL") else value
        try:
            return cls(keyword)
        except ValueError as e:
            raise InvalidInput(f"Invalid interface type: {value}") from e


class EndpointFilters:
    """Criteria used to select among multiple service endpoints.

    `region` is the name of a region or `None`. `interfaces` is a tuple of
    `InterfaceType` in order of preference, or `None` if unset.
    """

    def __init__(self, region=None, interfaces=None):
        self.region = region
        self.interfaces = tuple(interfaces) if interfaces is not None else None

    def set_interfaces(self, *interfaces):
        """Replaces the accepted interfaces with `interfaces`."""
        self.interfaces = tuple(interfaces)

    def __eq__(self, other):
        if not isinstance(other, EndpointFilters):
            return NotImplemented
        return (self.region, self.interfaces) == (other.region, other.interfaces)

    def __repr__(self):
        return f"EndpointFilters(region={self.region!r}, interfaces={self.interfaces!r})"


class Password:
    """An identity authenticating with a username and password.

    The `auth_url` must be an absolute HTTP(S) URL of the identity service. It
    is checked the same way requests prepares a URL before sending it, so a
    URL without a scheme raises `requests.exceptions.MissingSchema` and one
    without a host raises `requests.exceptions.InvalidURL`. Both are
    subclasses of `ValueError` and are not wrapped by callers in this package.

    The identity starts unscoped and with empty `EndpointFilters`.
    """

    def __init__(self, auth_url, username, password, user_domain):
        PreparedRequest().prepare_url(auth_url, None)
        self.auth_url = auth_url
        self.username = username
        self.password = password
        self.user_domain = user_domain
        self.scope = None
        self.endpoint_filters = EndpointFilters()

    def set_scope(self, scope):
        """Replaces the scope of this identity."""
        self.scope = scope

    def with_project_scope(self, project, domain=None):
        """Scopes this identity to `project` in `domain` and returns it."""
        self.set_scope(ProjectScope(project, domain))
        return self

    def __eq__(self, other):
        if not isinstance(other, Password):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self):
        return (
            f"Password(auth_url={self.auth_url!r}, username={self.username!r}, "
            f"user_domain={self.user_domain!r}, scope={self.scope!r})"
        )
