#
# Copyright 2019 FMR LLC <opensource@fidelity.com>
#
# SPDX-License-Identifier: MIT
#
"""Command line tool to inspect resolved OpenStack credentials.

## Overview

The `osauth` command resolves a session exactly as a library user would and
prints it as YAML, which makes it easy to check which clouds.yaml entry or
which environment variables are in effect:

    $ osauth --os-cloud devstack
    auth_url: https://keystone.example.com/v3
    username: admin
    password: '********'
    user_domain_name: Default
    scope:
      project:
        name: demo
      domain:
        name: Default
    region_name: RegionOne
    interfaces: null

Without `--os-cloud`, the session is resolved from the `OS_*` environment
variables (see `osauth.env`), which includes honouring `OS_CLOUD`.

## Options

`--os-cloud NAME`
:  Resolve the named cloud from clouds.yaml.

`--show-password`
:  Print the password instead of a mask.

`--log-level LEVEL`
:  One of DEBUG, INFO, WARN, or ERROR. Defaults to ERROR.

## Errors

On error, the message is printed to standard error and the command exits with
status 1. To include the stack trace, set the `OSAUTH_TRACE` environment
variable to `1`.
"""

import argparse
import logging
import os
import sys
import traceback

import yaml

from osauth import __version__
from osauth.clouds import from_config
from osauth.env import from_env

LOG = logging.getLogger(__name__)

SHORT_DESCRIPTION = """
Resolves OpenStack credentials and prints the resulting session.

Credentials are read from the named cloud in clouds.yaml when --os-cloud
is given, otherwise from the OS_* environment variables.
    """.strip()


# setup.py establishes this as the entry point for the osauth CLI.
def main(argv=None):
    """The main entry point for the `osauth` CLI tool installed with this package.

    Exits with a `0` status code upon success. Upon error, prints the error
    message to standard error and exits with `1`. By default, a stack trace is
    not included. If the trace is desired, set the `OSAUTH_TRACE` environment
    variable to `1`.
    """
    try:
        _cli(argv)

    except Exception as e:  # pylint: disable=broad-except
        if os.getenv("OSAUTH_TRACE"):
            traceback.print_exc(file=sys.stderr)

        print(e, file=sys.stderr)
        sys.exit(1)


def _cli(argv):
    parser = argparse.ArgumentParser(
        prog="osauth",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=SHORT_DESCRIPTION,
    )

    parser.add_argument(
        "--os-cloud",
        metavar="NAME",
        help="name of the cloud in clouds.yaml",
    )

    parser.add_argument(
        "--show-password",
        action="store_true",
        help="print the password instead of masking it",
    )

    parser.add_argument(
        "--version", action="version", version="%(prog)s " + __version__
    )

    parser.add_argument(
        "--log-level",
        default="ERROR",
        choices=["DEBUG", "INFO", "WARN", "ERROR"],
        help="set the logging level",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(name)s %(levelname)s [%(threadName)s] %(message)s",
    )

    if args.os_cloud:
        session = from_config(args.os_cloud)
    else:
        session = from_env()

    LOG.info("resolved %r", session)
    yaml.safe_dump(
        session.to_dict(show_password=args.show_password),
        sys.stdout,
        default_flow_style=False,
        sort_keys=False,
    )


if __name__ == "__main__":
    main()
