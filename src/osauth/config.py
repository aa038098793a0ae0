#
# Copyright 2019 FMR LLC <opensource@fidelity.com>
#
# SPDX-License-Identifier: MIT
#
"""Provides a YAML config reader with type-checked values.

## Overview

`Config` is a convenient representation of values stored within a dict, which
may contain other dicts. It provides for default values, mandatory values, as
well as the ability to type-check values using type specifications.
`YAMLConfig` builds a `Config` from a YAML stream and is what the clouds.yaml
parser in `osauth.clouds` uses to validate the document before turning it into
cloud entries.

## Type Checking

Type checking of values is done via a set of type objects and classes defined in
this module. Simple types are provided by pre-defined type objects: `Str`,
`Int`, `Float`, `Bool`, `Text`, and `Any`. The `Dict` and `Or` classes can be
instantiated to create more complex types. For example, the following type
matches the `clouds` section of a clouds.yaml file, which maps cloud names to
arbitrary settings:

    Dict(Str, Dict(Str, Any))

`Text` is `Or(Str, Int, Float, Bool)`: any plain scalar. YAML reads an unquoted
`password: 1234` as an int, so settings that are text by nature should be
checked with `Text` and converted by the caller.

## Reading Values

Assuming the stream contains the following YAML:

    clouds:
      devstack:
        auth:
          auth_url: https://keystone.example.com/v3
          username: admin
          password: secret
        region_name: RegionOne

`Config.get` is used to read values from the configuration:

    c = YAMLConfig(stream)

    assert c.get('clouds', 'devstack', 'region_name', type=Str) == 'RegionOne'
    assert c.get('clouds', 'devstack', 'auth', 'username', must_exist=True) == 'admin'
    assert c.get('clouds', 'devstack', 'auth', 'project_name', type=Str) is None

If any of the values do not match the expected type, a `TypeError` is raised. If
a mandatory value is missing, a `ValueError` is raised.
"""

import yaml

# pylint: disable=unidiomatic-typecheck
#
# Because isinstance(True, int) is true, we do not rely on isinstance for our
# type checking in this module as we want to match exact types. A password of
# `1234` in YAML is an int, not a str; use `Text` to accept any plain scalar.


class Config:
    """A `Config` can read type-checked values from a Python dictionary.

    This class provides an interface to read values from a dictionary while
    providing for default values, mandatory values, as well as the ability to
    type-check values.
    """

    def __init__(self, d):
        self.conf = d

    def get(self, *keys, default=None, type=None, must_exist=False):
        """Return the specified value from the `Config`.

        Specify the value to read by providing the keys required to reach the
        value in the configuration. If the value is not found at the specified
        key path, `None` or the `default` value is returned unless the
        `must_exist` flag is `True`, in which case a `ValueError` is raised.
        A value explicitly set to null in the document is treated as missing.

        Values can be optionally type-checked to ensure it matches the specified
        type. If the `type` matches the value in the configuration, the value is
        returned, otherwise a `TypeError` is raised. For example:

            c.get('clouds', type=Dict(Str, Any), must_exist=True)
            c.get('clouds', 'devstack', 'auth', 'auth_url', type=Str)
        """
        # pylint: disable=redefined-builtin

        # Recursively follow the list of keys into the dictionary. A key that
        # does not exist yields an empty dict.
        value = self.conf
        for i, key in enumerate(keys):
            if not isinstance(value, dict):
                path = "->".join(keys[:i]) or "document root"
                raise ValueError(f"Error in config: {path}: not a dictionary")
            value = value.get(key, {})

        if value == {} or value is None:
            if must_exist:
                raise ValueError(f"Error in config: {'->'.join(keys)}: must be set")
            value = default

        if value is None:
            return value

        if not type:
            return value

        if type.type_check(value):
            return value

        raise TypeError(
            f"Error in config: {'->'.join(keys)}: not a {type}: {repr(value)}"
        )


class YAMLConfig(Config):
    """Loads a YAML configuration from a stream.

    `yaml.YAMLError` is raised if the stream does not contain valid YAML. An
    empty stream yields an empty configuration.
    """

    def __init__(self, stream):
        super().__init__(yaml.safe_load(stream))


class Type:
    """Represents a type that can be used in type-check comparisons."""

    def type_check(self, obj):
        """Returns true if obj is a type matching this `Type`."""
        raise NotImplementedError

    def __str__(self):
        """Returns a string representing this `Type`."""
        raise NotImplementedError


class Or(Type):
    """Represents a type that is one of the `config_types`.

    `config_type` must be an instance of `Type`.  For example:

        Or(Str, Int)
    """

    def __init__(self, *config_types):
        self.config_types = config_types

    def type_check(self, obj):
        return any(t.type_check(obj) for t in self.config_types)

    def __str__(self):
        s = " or ".join(str(t) for t in self.config_types)
        return "(" + s + ")"


class Scalar(Type):
    """Represents a type that is a scalar matching `type`.

    `type` must be one of the builtin Python scalar types. For example:

        Scalar(str)
        Scalar(int)
    """

    def __init__(self, type_):
        self.type = type_

    def type_check(self, obj):
        return type(obj) == self.type  # noqa: E721

    def __str__(self):
        return self.type.__name__


class AnyType(Type):
    """Represents any type."""

    def type_check(self, obj):
        return True

    def __str__(self):
        return "any type"


class Dict(Type):
    """Represents a dict containing keys of `key_type` and values of `value_type`.

    `key_type` and `value_type` must be instances of `Type`. For example:

        Dict(Str, Str)
        Dict(Str, Dict(Str, Any))
    """

    def __init__(self, key_type, value_type):
        self.key_type = key_type
        self.value_type = value_type

    def type_check(self, obj):
        if type(obj) != dict:  # noqa: E721
            return False
        return all(self.key_type.type_check(k) for k in obj.keys()) and all(
            self.value_type.type_check(v) for v in obj.values()
        )

    def __str__(self):
        return f"dict with {self.key_type} keys and {self.value_type} values"


Str = Scalar(str)
"""Singleton representing a str."""

Int = Scalar(int)
"""Singleton representing an int."""

Bool = Scalar(bool)
"""Singleton representing a bool."""

Float = Scalar(float)
"""Singleton representing a float."""

Text = Or(Str, Int, Float, Bool)
"""Singleton representing a plain YAML scalar that can be read as text."""

Any = AnyType()
"""Singleton representing any type."""
