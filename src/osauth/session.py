#
# Copyright 2019 FMR LLC <opensource@fidelity.com>
#
# SPDX-License-Identifier: MIT
#
"""The resolved session handed back to callers.

A `Session` is the sole artifact produced by `osauth.clouds.from_config` and
`osauth.env.from_env`. It holds the `osauth.identity.Password` identity and
the `osauth.identity.EndpointFilters` to apply once authenticated. A new
session is built for every resolution; osauth keeps no reference to it.
"""


class Session:
    """A session holding an identity and its endpoint filters.

    Unless `endpoint_filters` is provided, the session uses the filters owned
    by `identity`. Assigning to `endpoint_filters` replaces them for this
    session only.
    """

    def __init__(self, identity, endpoint_filters=None):
        self.identity = identity
        self.endpoint_filters = (
            identity.endpoint_filters if endpoint_filters is None else endpoint_filters
        )

    def to_dict(self, show_password=False):
        """Returns a plain dict describing the session.

        The password is masked unless `show_password` is `True`. Project and
        domain identifiers are rendered as `{'id': ...}` or `{'name': ...}`.
        """
        identity = self.identity
        scope = None
        if identity.scope is not None:
            scope = {
                "project": _id_or_name(identity.scope.project),
                "domain": _id_or_name(identity.scope.domain),
            }
        interfaces = self.endpoint_filters.interfaces
        return {
            "auth_url": identity.auth_url,
            "username": identity.username,
            "password": identity.password if show_password else "********",
            "user_domain_name": identity.user_domain,
            "scope": scope,
            "region_name": self.endpoint_filters.region,
            "interfaces": [i.value for i in interfaces] if interfaces else None,
        }

    def __eq__(self, other):
        if not isinstance(other, Session):
            return NotImplemented
        return (self.identity, self.endpoint_filters) == (
            other.identity,
            other.endpoint_filters,
        )

    def __repr__(self):
        return f"Session({self.identity!r}, {self.endpoint_filters!r})"


def _id_or_name(value):
    if value is None:
        return None
    return {type(value).__name__.lower(): value.value}
